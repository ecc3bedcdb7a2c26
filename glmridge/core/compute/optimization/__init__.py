"""
Optimizer collaborator for glmridge.

Models never implement their own minimizer. They hand an initial weight
vector and a combined objective ``w -> (loss, grad)`` to ``minimize``,
which drives ``scipy.optimize.minimize`` and wraps the outcome in a
Result envelope.
"""

from glmridge.core.compute.optimization.scipy_minimize import (
    DEFAULT_MAX_ITER,
    DEFAULT_METHOD,
    DEFAULT_TOL,
    OptimizationParams,
    OptimizerMethod,
    minimize,
)

__all__ = [
    "DEFAULT_MAX_ITER",
    "DEFAULT_METHOD",
    "DEFAULT_TOL",
    "OptimizationParams",
    "OptimizerMethod",
    "minimize",
]
