"""
glmridge: ridge-regularized logistic and Poisson regression.

Each model defines a regularized negative log-likelihood and its
gradient, and hands both to scipy.optimize for fitting.

Submodules:
    linear: LogisticRegression, PoissonRegression
    core: Exceptions, validation, Result envelope, optimizer wrapper
"""

__version__ = "0.1.0"

from glmridge import linear
from glmridge.linear import LogisticRegression, PoissonRegression, add_intercept
from glmridge.core.exceptions import (
    GLMRidgeError,
    ValidationError,
    NotFittedError,
)

__all__ = [
    "__version__",
    "linear",
    "LogisticRegression",
    "PoissonRegression",
    "add_intercept",
    "GLMRidgeError",
    "ValidationError",
    "NotFittedError",
]
