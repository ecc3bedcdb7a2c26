"""
Argument checks used at the public boundary of the models.

Each check raises at once with the parameter name and the offending
value in the message; nothing is silently repaired. The only coercion
performed is array-like -> float64 ndarray (bool labels become 0.0/1.0).
"""

import math
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from glmridge.core.exceptions import DimensionError, ValidationError

FloatArray = NDArray[np.floating[Any]]


def check_array(array: ArrayLike, name: str) -> FloatArray:
    """
    Convert an array-like of numbers (or bools) to a float ndarray.

    Raises:
        ValidationError: For ragged, mixed or non-numeric input
    """
    try:
        arr = np.asarray(array)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    kind = arr.dtype.kind
    if kind == 'O':
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )
    if kind not in 'biuf':
        raise ValidationError(f"{name}: non-numeric dtype {arr.dtype}, expected numeric data")
    if kind == 'f':
        return arr
    return arr.astype(np.float64)


def check_finite(array: FloatArray, name: str) -> None:
    """Reject NaN and +/-Inf, reporting how many of each were found."""
    bad = ~np.isfinite(array)
    if bad.any():
        n_nan = int(np.isnan(array).sum())
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {int(bad.sum()) - n_nan} Inf)"
        )


def check_ndim(array: FloatArray, ndim: int, name: str) -> None:
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_same_rows(X: FloatArray, y: FloatArray) -> None:
    """X must have one row per target entry."""
    if X.shape[0] != y.shape[0]:
        raise DimensionError(f"Inconsistent lengths: X={X.shape[0]}, y={y.shape[0]}")


def check_not_empty(array: FloatArray, name: str) -> None:
    if array.shape[0] == 0:
        raise ValidationError(f"{name}: requires at least 1 sample, got 0")


def check_non_negative(value: float, name: str) -> float:
    """
    Validate a scalar hyperparameter such as the ridge strength.

    Args:
        value: Candidate value (Python or numpy real; bool is refused)
        name: Parameter name for error messages

    Returns:
        The value as a Python float

    Raises:
        ValidationError: If value is not a real number, not finite, or negative
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise ValidationError(f"{name}: expected a real number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise ValidationError(f"{name}: must be finite, got {value}")
    if value < 0:
        raise ValidationError(f"{name}: must be non-negative, got {value}")
    return value


def check_integer_valued(array: FloatArray, name: str) -> None:
    """
    Require finite whole numbers, as a count target must be.

    Raises:
        ValidationError: If any entry is non-finite or has a fractional part
    """
    check_finite(array, name)
    fractional = np.flatnonzero(array != np.floor(array))
    if fractional.size:
        raise ValidationError(
            f"{name}: expected integer-valued counts, {fractional.size} non-integer "
            f"entries (first at indices {fractional[:5].tolist()})"
        )
