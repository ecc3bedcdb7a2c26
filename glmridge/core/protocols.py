"""
Core protocols for glmridge.

These define the structural interface every linear model in the package
satisfies. We use Protocol (structural typing) rather than ABC (nominal
typing): LogisticRegression and PoissonRegression are independent
classes that happen to share a set of method signatures.

Design Principles:
    - Minimal contracts: prescribe only what the fitting driver needs
    - Stateless objectives: loss and gradient are pure functions of (w, X, y)
    - Copy-on-fit: fitting returns a new instance, never mutates
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

import numpy as np
from numpy.typing import NDArray

M = TypeVar('M', bound='LinearModel')


@runtime_checkable
class LinearModel(Protocol):
    """
    Fitting contract shared by the ridge-penalized GLMs.

    The optimizer only ever sees ``evaluate`` (or ``loss`` and
    ``loss_grad`` separately). Weight vectors have length p+1 with the
    intercept at index 0, which is never penalized.
    """

    @property
    def lambda_(self) -> float:
        """L2 regularization strength (>= 0)."""
        ...

    @property
    def is_fitted(self) -> bool:
        """Whether the instance carries optimized weights."""
        ...

    def loss(
        self,
        w: NDArray[np.floating[Any]],
        X: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
    ) -> float:
        """Mean negative log-likelihood plus ridge penalty."""
        ...

    def loss_grad(
        self,
        w: NDArray[np.floating[Any]],
        X: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """Gradient of ``loss`` with respect to w."""
        ...

    def evaluate(
        self,
        w: NDArray[np.floating[Any]],
        X: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
    ) -> tuple[float, NDArray[np.floating[Any]]]:
        """Loss and gradient from a single forward pass."""
        ...

    def predict(self, X: Any) -> NDArray[np.floating[Any]]:
        """Point predictions for each row of X."""
        ...

    def with_weights(self: M, w: NDArray[np.floating[Any]]) -> M:
        """Copy of this model carrying weights w."""
        ...

    def fit(self: M, X: Any, y: Any, **kwargs: Any) -> M:
        """Return a new, fitted instance."""
        ...
