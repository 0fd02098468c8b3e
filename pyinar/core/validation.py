"""
Input validation utilities for pyinar.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from numbers import Integral, Real
from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyinar.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Rejects inputs that result in object dtype (mixed types or
    non-numeric data) and non-numeric dtypes such as strings.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.dtype == bool or not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}"
        )


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        ValidationError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_counts(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every entry is a non-negative integer value.

    Float storage is accepted as long as each value is integral
    (R's integerish convention).

    Raises:
        ValidationError: If any entry is negative or fractional
    """
    negative = np.flatnonzero(array < 0)
    if negative.size > 0:
        raise ValidationError(
            f"{name}: counts must be non-negative, got {array[negative[0]]!r} "
            f"at position {int(negative[0])}"
        )
    fractional = np.flatnonzero(array != np.round(array))
    if fractional.size > 0:
        raise ValidationError(
            f"{name}: counts must be integers, got {array[fractional[0]]!r} "
            f"at position {int(fractional[0])}"
        )


def check_integer(value: Any, name: str, lower: int | None = None,
                  upper: int | None = None) -> int:
    """
    Validate an integer-valued scalar and return it as int.

    Integral floats (e.g. 50.0) are accepted; booleans are not.

    Raises:
        ValidationError: If value is not integral or outside [lower, upper]
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{name}: expected an integer, got {value!r}")
    if not isinstance(value, Integral):
        if not np.isfinite(value) or value != round(value):
            raise ValidationError(f"{name}: expected an integer, got {value!r}")
    result = int(value)
    if lower is not None and result < lower:
        raise ValidationError(f"{name}: must be >= {lower}, got {result}")
    if upper is not None and result > upper:
        raise ValidationError(f"{name}: must be <= {upper}, got {result}")
    return result


def check_choice(value: Any, choices: Sequence[str], name: str) -> str:
    """
    Verify value is one of the allowed strings.

    Raises:
        ValidationError: If value is not in choices
    """
    if not isinstance(value, str) or value not in choices:
        allowed = ", ".join(repr(c) for c in choices)
        raise ValidationError(f"{name}: must be one of {allowed}, got {value!r}")
    return value


def check_probabilities(array: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """
    Validate a vector of probabilities, each in [0, 1].

    Returns:
        1D float64 array

    Raises:
        ValidationError: If any entry is non-finite or outside [0, 1]
    """
    arr = np.atleast_1d(check_array(array, name)).astype(np.float64)
    check_1d(arr, name)
    check_finite(arr, name)
    if np.any((arr < 0.0) | (arr > 1.0)):
        raise ValidationError(
            f"{name}: probabilities must lie in [0, 1], got {arr.tolist()}"
        )
    return arr


def check_level(level: Any, name: str = "level", lower: float = 1e-16) -> float:
    """
    Validate a confidence level inside [lower, 1).

    Raises:
        ValidationError: If level is not a real number in [lower, 1)
    """
    if isinstance(level, bool) or not isinstance(level, Real):
        raise ValidationError(f"{name}: expected a number, got {level!r}")
    level = float(level)
    if not (lower <= level < 1.0):
        raise ValidationError(
            f"{name}: must lie in [{lower:g}, 1), got {level!r}"
        )
    return level
