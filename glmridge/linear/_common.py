"""
Shared helpers for the ridge-penalized linear models.

Both models keep the intercept weight at index 0 of w and exclude it
from the L2 penalty. Input checks for fit and predict live here so each
model validates at its public boundary and trusts arrays afterwards.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from glmridge.core.exceptions import DimensionError, NotFittedError
from glmridge.core.result import Result
from glmridge.core.validation import (
    check_array,
    check_finite,
    check_ndim,
    check_not_empty,
    check_same_rows,
)
from glmridge.core.compute.optimization import (
    OptimizationParams,
    OptimizerMethod,
    minimize,
)

if TYPE_CHECKING:
    from glmridge.core.protocols import LinearModel


def add_intercept(X: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Prepend a column of ones to a feature matrix.

    Models never add the intercept themselves; call this before fit and
    predict when X does not carry one.
    """
    X_arr = check_array(X, 'X')
    if X_arr.ndim == 1:
        X_arr = X_arr.reshape(-1, 1)
    check_ndim(X_arr, 2, 'X')
    return np.column_stack([np.ones(X_arr.shape[0]), X_arr])


def ridge_penalty(w: NDArray[np.floating[Any]], lambda_: float) -> float:
    """0.5 * λ * Σ w[1:]². The intercept w[0] is not penalized."""
    if lambda_ == 0.0:
        return 0.0
    tail = w[1:]
    return 0.5 * lambda_ * float(tail @ tail)


def ridge_penalty_grad(w: NDArray[np.floating[Any]], lambda_: float) -> NDArray[np.floating[Any]]:
    """Gradient of ridge_penalty: λ * w with a zero intercept entry."""
    grad = lambda_ * w
    grad[0] = 0.0
    return grad


def as_features(X: ArrayLike) -> NDArray[np.floating[Any]]:
    """Validate a feature matrix (n x (p+1), intercept column included)."""
    X_arr = check_array(X, 'X')
    check_ndim(X_arr, 2, 'X')
    check_finite(X_arr, 'X')
    if X_arr.shape[1] < 1:
        raise DimensionError(f"X: expected at least 1 column, got shape {X_arr.shape}")
    return X_arr


def as_target(y: ArrayLike) -> NDArray[np.floating[Any]]:
    """Validate a target vector, squeezing an (n, 1) column."""
    y_arr = check_array(y, 'y')
    if y_arr.ndim == 2 and y_arr.shape[1] == 1:
        y_arr = y_arr.ravel()
    check_ndim(y_arr, 1, 'y')
    check_finite(y_arr, 'y')
    return y_arr


def validate_training_data(
    X: ArrayLike,
    y: ArrayLike,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """Boundary checks shared by both fit methods."""
    X_arr = as_features(X)
    y_arr = as_target(y)
    check_same_rows(X_arr, y_arr)
    check_not_empty(X_arr, 'X')
    return X_arr, y_arr


def check_objective_inputs(
    w: ArrayLike,
    X: ArrayLike,
    y: ArrayLike,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Shape checks for loss/loss_grad/evaluate.

    Runs on every optimizer step, so it converts and checks shapes only;
    finiteness of X and y is established once by fit.
    """
    w_arr = np.asarray(w, dtype=np.float64)
    X_arr = np.asarray(X, dtype=np.float64)
    y_arr = np.asarray(y, dtype=np.float64)
    check_ndim(w_arr, 1, 'w')
    check_ndim(X_arr, 2, 'X')
    check_ndim(y_arr, 1, 'y')
    check_same_rows(X_arr, y_arr)
    if X_arr.shape[0] == 0:
        raise DimensionError("X: objective is undefined for 0 samples")
    check_weight_length(w_arr, X_arr)
    return w_arr, X_arr, y_arr


def check_weight_length(w: NDArray[np.floating[Any]], X: NDArray[np.floating[Any]]) -> None:
    if w.shape[0] != X.shape[1]:
        raise DimensionError(
            f"w has {w.shape[0]} entries but X has {X.shape[1]} columns"
        )


def frozen_weights(w: ArrayLike) -> NDArray[np.floating[Any]]:
    """Read-only float64 copy of a weight vector."""
    w_arr = np.array(w, dtype=np.float64, copy=True)
    check_ndim(w_arr, 1, 'w')
    w_arr.setflags(write=False)
    return w_arr


def require_fitted(model: Any, operation: str) -> NDArray[np.floating[Any]]:
    """Return the model's weights or raise NotFittedError."""
    w = model._weights
    if w is None:
        raise NotFittedError(type(model).__name__, operation)
    return w


def fit_linear_model(
    model: LinearModel,
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    *,
    method: OptimizerMethod,
    tol: float,
    max_iter: int,
    strict: bool,
) -> Result[OptimizationParams]:
    """
    Run the optimizer on model.evaluate from w0 = 0.

    X and y must already be validated. The returned Result holds w* in
    ``params.x``; wrapping it in a model is the caller's job.
    """
    w0 = np.zeros(X.shape[1], dtype=np.float64)

    def objective(w: NDArray[np.floating[Any]]) -> tuple[float, NDArray[np.floating[Any]]]:
        return model.evaluate(w, X, y)

    return minimize(
        objective,
        w0,
        method=method,
        tol=tol,
        max_iter=max_iter,
        strict=strict,
        # warn -> minimize -> fit_linear_model -> fit -> caller
        stacklevel=4,
    )
