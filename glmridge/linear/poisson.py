"""
Poisson regression with ridge regularization.

Objective (mean negative Poisson log-likelihood, dropping log(y!), plus
L2 penalty):

    L(w) = -(1/n) Σ [y_i log m_i - m_i] + ½ λ Σ_{j≥1} w_j²
    m = exp(X w)

Since log m_i = x_iᵀw, d/dw [-(y_i x_iᵀw - exp(x_iᵀw))] = (m_i - y_i) x_i,
so the gradient is

    ∇L(w) = Xᵀ(m - y) / n + λ [0, w_1, ..., w_p]

with the same 1/n scale as the loss and no further sign flip.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from glmridge.core.exceptions import ValidationError
from glmridge.core.result import Result
from glmridge.core.validation import (
    check_array,
    check_integer_valued,
    check_non_negative,
)
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
from glmridge.linear._links import LogLink, poisson_deviance

_LINK = LogLink()


@dataclass(frozen=True, eq=False, repr=False)
class PoissonRegression:
    """
    Immutable Poisson regression model with ridge regularization.

    Args:
        lambda_: L2 regularization strength, must be >= 0.
            0 means no regularization.

    Example:
        >>> X = add_intercept([[0.0], [1.0], [2.0], [3.0]])
        >>> model = PoissonRegression().fit(X, [1, 2, 4, 8])
        >>> np.round(model.predict_mean(X), 3)
        array([1., 2., 4., 8.])
    """
    lambda_: float = 0.0
    _weights: NDArray[np.floating[Any]] | None = field(default=None)
    _result: Result[OptimizationParams] | None = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'lambda_', check_non_negative(self.lambda_, 'lambda_'))

    def with_weights(self, w: ArrayLike) -> PoissonRegression:
        """Copy of this model carrying weights w."""
        return replace(self, _weights=frozen_weights(w), _result=None)

    @staticmethod
    def target_variable_appropriate(y: ArrayLike) -> bool:
        """
        True iff every entry of y is finite and integer-valued.

        The sign is not checked: negative integers are accepted and give a
        well-defined (if meaningless) objective.
        """
        try:
            check_integer_valued(check_array(y, 'y'), 'y')
        except ValidationError:
            return False
        return True

    def fit(
        self,
        X: ArrayLike,
        y: ArrayLike,
        *,
        method: OptimizerMethod = DEFAULT_METHOD,
        tol: float = DEFAULT_TOL,
        max_iter: int = DEFAULT_MAX_ITER,
        strict: bool = False,
    ) -> PoissonRegression:
        """
        Fit weights by minimizing ``loss``.

        Args:
            X: Features (n x (p+1)), column 0 the intercept column
            y: Count target (n,)
            method: Optimizer method passed to scipy.optimize.minimize
            tol: Gradient tolerance
            max_iter: Maximum optimizer iterations
            strict: Raise ConvergenceError instead of warning on non-convergence

        Returns:
            A new, fitted PoissonRegression

        Raises:
            ValidationError: If y holds non-integer or non-finite values,
                or X/y are not finite numeric arrays of matching length
        """
        if not self.target_variable_appropriate(y):
            raise ValidationError(
                "y: Poisson regression target must contain only finite, "
                "integer-valued counts"
            )
        X_arr, y_arr = validate_training_data(X, y)
        result = fit_linear_model(
            self, X_arr, y_arr,
            method=method, tol=tol, max_iter=max_iter, strict=strict,
        )
        return replace(self.with_weights(result.params.x), _result=result)

    def _loss_at(self, eta, w, y) -> float:
        return float(np.mean(_LINK.nll(eta, y))) + ridge_penalty(w, self.lambda_)

    def _grad_at(self, m, w, X, y) -> NDArray[np.floating[Any]]:
        grad = X.T @ (m - y) / X.shape[0]
        return grad + ridge_penalty_grad(w, self.lambda_)

    def loss(self, w: ArrayLike, X: ArrayLike, y: ArrayLike) -> float:
        """Mean negative Poisson log-likelihood plus ½ λ Σ w[1:]²."""
        w, X, y = check_objective_inputs(w, X, y)
        return self._loss_at(X @ w, w, y)

    def loss_grad(self, w: ArrayLike, X: ArrayLike, y: ArrayLike) -> NDArray[np.floating[Any]]:
        """Xᵀ(m - y) / n, plus λ w[1:] on the non-intercept entries."""
        w, X, y = check_objective_inputs(w, X, y)
        m = _LINK.linkinv(X @ w)
        return self._grad_at(m, w, X, y)

    def evaluate(
        self, w: ArrayLike, X: ArrayLike, y: ArrayLike
    ) -> tuple[float, NDArray[np.floating[Any]]]:
        """(loss, loss_grad) sharing one forward pass."""
        w, X, y = check_objective_inputs(w, X, y)
        eta = X @ w
        m = _LINK.linkinv(eta)
        return self._loss_at(eta, w, y), self._grad_at(m, w, X, y)

    def predict_mean(self, X: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Poisson mean exp(X w) per row.

        Raises:
            NotFittedError: If called before fit
        """
        w = require_fitted(self, 'predict_mean')
        return self._mean(w, X)

    def predict(self, X: ArrayLike) -> NDArray[np.floating[Any]]:
        """floor(predict_mean(X)): counts, rounded down, as floats."""
        w = require_fitted(self, 'predict')
        return np.floor(self._mean(w, X))

    def _mean(self, w, X) -> NDArray[np.floating[Any]]:
        X_arr = as_features(X)
        check_weight_length(w, X_arr)
        return _LINK.linkinv(X_arr @ w)

    def score(self, X: ArrayLike, y: ArrayLike) -> float:
        """Mean Poisson deviance of predict_mean against y (lower is better)."""
        X_arr, y_arr = validate_training_data(X, y)
        return poisson_deviance(y_arr, self.predict_mean(X_arr))

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
        return require_fitted(self, 'coefficients')[1:]

    @property
    def result(self) -> Result[OptimizationParams] | None:
        return self._result

    def __repr__(self) -> str:
        return f"PoissonRegression(lambda_={self.lambda_}, fitted={self.is_fitted})"
