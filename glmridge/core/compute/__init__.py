"""
Shared compute infrastructure for glmridge.

IMPORTANT: This is NOT where model objectives live. Those go in
glmridge/linear/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers for numerical comparison
    optimization: The external optimizer wrapper (scipy.optimize)
"""

from glmridge.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
