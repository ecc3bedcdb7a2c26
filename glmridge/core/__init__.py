"""
Core infrastructure for glmridge.

This module provides shared abstractions and utilities used by the
model package (glmridge.linear).

Key components:
    protocols: LinearModel fitting contract
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, optimizer wrapper
"""

from glmridge.core.protocols import LinearModel
from glmridge.core.result import Result
from glmridge.core.exceptions import (
    GLMRidgeError,
    ValidationError,
    DimensionError,
    NotFittedError,
    NumericalError,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "LinearModel",
    # Result
    "Result",
    # Exceptions
    "GLMRidgeError",
    "ValidationError",
    "DimensionError",
    "NotFittedError",
    "NumericalError",
    "ConvergenceError",
]
