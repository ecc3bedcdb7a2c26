"""
Ridge-penalized generalized linear models.

Public API:
    LogisticRegression(lambda_=0.0)  -- binary classification, sigmoid link
    PoissonRegression(lambda_=0.0)   -- count regression, exponential link
    add_intercept(X)                 -- prepend the intercept column

Both models are immutable: fit() returns a new, trained instance. The
feature matrix must carry the intercept as column 0.

Example:
    >>> from glmridge.linear import LogisticRegression, add_intercept
    >>> X = add_intercept(features)
    >>> model = LogisticRegression(lambda_=0.5).fit(X, labels)
    >>> model.predict_proba(X)
"""

from glmridge.linear.logistic import LogisticRegression
from glmridge.linear.poisson import PoissonRegression
from glmridge.linear._common import add_intercept

__all__ = [
    "LogisticRegression",
    "PoissonRegression",
    "add_intercept",
]
