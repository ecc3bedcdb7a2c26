"""
Binary logistic regression with ridge regularization.

Objective (mean negative Bernoulli log-likelihood plus L2 penalty):

    L(w) = -(1/n) Σ [y_i log p_i + (1 - y_i) log(1 - p_i)] + ½ λ Σ_{j≥1} w_j²
    p = σ(X w)

Gradient:

    ∇L(w) = Xᵀ(p - y) / n + λ [0, w_1, ..., w_p]

The intercept column is supplied by the caller as column 0 of X; its
weight is never penalized.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from glmridge.core.exceptions import ValidationError
from glmridge.core.result import Result
from glmridge.core.validation import check_non_negative
from glmridge.core.compute.optimization import (
    DEFAULT_MAX_ITER,
    DEFAULT_METHOD,
    DEFAULT_TOL,
    OptimizationParams,
    OptimizerMethod,
)
from glmridge.linear._common import (
    as_features,
    check_objective_inputs,
    check_weight_length,
    fit_linear_model,
    frozen_weights,
    require_fitted,
    ridge_penalty,
    ridge_penalty_grad,
    validate_training_data,
)
from glmridge.linear._links import LogitLink

_LINK = LogitLink()

_N_CLASSES = 2


@dataclass(frozen=True, eq=False, repr=False)
class LogisticRegression:
    """
    Immutable binary logistic regression model with ridge regularization.

    Args:
        lambda_: L2 regularization strength, must be >= 0.
            0 means no regularization.

    Construction never fits; ``fit`` returns a new, trained instance and
    leaves the receiver untouched.

    Example:
        >>> X = add_intercept([[0.0], [1.0], [2.0], [3.0]])
        >>> model = LogisticRegression(lambda_=0.1).fit(X, [0, 0, 1, 1])
        >>> model.predict(X)
        array([0., 0., 1., 1.])
    """
    lambda_: float = 0.0
    _weights: NDArray[np.floating[Any]] | None = field(default=None)
    _n_classes: int | None = field(default=None)
    _result: Result[OptimizationParams] | None = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'lambda_', check_non_negative(self.lambda_, 'lambda_'))

    # === Copies ===

    def with_weights(self, w: ArrayLike) -> LogisticRegression:
        """Copy of this model carrying weights w."""
        return replace(self, _weights=frozen_weights(w), _result=None)

    def with_n_classes(self, n_classes: int) -> LogisticRegression:
        """Copy of this model recording the number of target classes."""
        if n_classes != _N_CLASSES:
            raise ValidationError(
                "Logistic regression must be trained on a dataset with exactly "
                f"2 categories, got {n_classes}"
            )
        return replace(self, _n_classes=int(n_classes))

    # === Fitting ===

    def fit(
        self,
        X: ArrayLike,
        y: ArrayLike,
        *,
        method: OptimizerMethod = DEFAULT_METHOD,
        tol: float = DEFAULT_TOL,
        max_iter: int = DEFAULT_MAX_ITER,
        strict: bool = False,
    ) -> LogisticRegression:
        """
        Fit weights by minimizing ``loss``.

        Args:
            X: Features (n x (p+1)), column 0 the intercept column
            y: Binary target (n,), labels 0.0 and 1.0
            method: Optimizer method passed to scipy.optimize.minimize
            tol: Gradient tolerance
            max_iter: Maximum optimizer iterations
            strict: Raise ConvergenceError instead of warning on non-convergence

        Returns:
            A new, fitted LogisticRegression

        Raises:
            ValidationError: If y does not hold exactly 2 distinct values,
                or X/y are not finite numeric arrays of matching length
        """
        X_arr, y_arr = validate_training_data(X, y)
        model = self.with_n_classes(np.unique(y_arr).size)
        result = fit_linear_model(
            model, X_arr, y_arr,
            method=method, tol=tol, max_iter=max_iter, strict=strict,
        )
        return replace(model.with_weights(result.params.x), _result=result)

    # === Objective ===

    def _loss_at(self, eta, w, y) -> float:
        return float(np.mean(_LINK.nll(eta, y))) + ridge_penalty(w, self.lambda_)

    def _grad_at(self, p, w, X, y) -> NDArray[np.floating[Any]]:
        grad = X.T @ (p - y) / X.shape[0]
        return grad + ridge_penalty_grad(w, self.lambda_)

    def loss(self, w: ArrayLike, X: ArrayLike, y: ArrayLike) -> float:
        """Mean negative log-likelihood plus ½ λ Σ w[1:]²."""
        w, X, y = check_objective_inputs(w, X, y)
        return self._loss_at(X @ w, w, y)

    def loss_grad(self, w: ArrayLike, X: ArrayLike, y: ArrayLike) -> NDArray[np.floating[Any]]:
        """Xᵀ(p - y) / n, plus λ w[1:] on the non-intercept entries."""
        w, X, y = check_objective_inputs(w, X, y)
        p = _LINK.linkinv(X @ w)
        return self._grad_at(p, w, X, y)

    def evaluate(
        self, w: ArrayLike, X: ArrayLike, y: ArrayLike
    ) -> tuple[float, NDArray[np.floating[Any]]]:
        """(loss, loss_grad) sharing one forward pass."""
        w, X, y = check_objective_inputs(w, X, y)
        eta = X @ w
        p = _LINK.linkinv(eta)
        return self._loss_at(eta, w, y), self._grad_at(p, w, X, y)

    # === Prediction ===

    def predict_proba(self, X: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        P(y = 1) per row, as an (n, 1) column.

        Raises:
            NotFittedError: If called before fit
        """
        w = require_fitted(self, 'predict_proba')
        return self._proba(w, X)[:, np.newaxis]

    def predict(self, X: ArrayLike) -> NDArray[np.floating[Any]]:
        """1.0 where P(y = 1) >= 0.5, else 0.0."""
        w = require_fitted(self, 'predict')
        return np.where(self._proba(w, X) >= 0.5, 1.0, 0.0)

    def _proba(self, w, X) -> NDArray[np.floating[Any]]:
        X_arr = as_features(X)
        check_weight_length(w, X_arr)
        return _LINK.linkinv(X_arr @ w)

    def score(self, X: ArrayLike, y: ArrayLike) -> float:
        """Classification accuracy of ``predict`` against y."""
        X_arr, y_arr = validate_training_data(X, y)
        return float(np.mean(self.predict(X_arr) == y_arr))

    # === Properties ===

    @property
    def is_fitted(self) -> bool:
        return self._weights is not None

    @property
    def weights(self) -> NDArray[np.floating[Any]]:
        """Full weight vector, intercept first (read-only)."""
        return require_fitted(self, 'weights')

    @property
    def intercept(self) -> float:
        return float(require_fitted(self, 'intercept')[0])

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """Feature weights w[1:]."""
        return require_fitted(self, 'coefficients')[1:]

    @property
    def n_classes(self) -> int | None:
        return self._n_classes

    @property
    def result(self) -> Result[OptimizationParams] | None:
        """Optimizer envelope from the fit that produced this model."""
        return self._result

    def __repr__(self) -> str:
        return f"LogisticRegression(lambda_={self.lambda_}, fitted={self.is_fitted})"
