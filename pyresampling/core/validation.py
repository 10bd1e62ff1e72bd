"""
Input validation utilities for pyresampling.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyresampling.core.exceptions import (
    ValidationError,
    DimensionError,
    InvalidParameterError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float numpy array.

    Rejects inputs that result in object dtype (mixed types) or any
    non-numeric dtype (strings, datetimes).

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

    if not np.issubdtype(result.dtype, np.number) and result.dtype != bool:
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


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        ValidationError: If array has fewer than min_samples rows
    """
    n = array.shape[0] if array.ndim > 0 else 0
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_positive_int(value: Any, name: str) -> int:
    """
    Verify value is an integer >= 1.

    Bools are rejected even though they subclass int.

    Returns:
        The value as a plain int

    Raises:
        InvalidParameterError: If value is not an integer or is < 1
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(
            f"{name} must be an integer, got {type(value).__name__}",
            parameter=name,
            value=value,
        )
    if value < 1:
        raise InvalidParameterError(
            f"{name} must be >= 1, got {value}",
            parameter=name,
            value=value,
        )
    return int(value)


def check_unit_interval(value: Any, name: str) -> float:
    """
    Verify a scalar lies in the closed interval [0, 1].

    Raises:
        InvalidParameterError: If value is not a finite number in [0, 1]
    """
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(
            f"{name} must be a number in [0, 1], got {value!r}",
            parameter=name,
            value=value,
        ) from e
    if not (0.0 <= v <= 1.0):
        raise InvalidParameterError(
            f"{name} must be in [0, 1], got {value}",
            parameter=name,
            value=value,
        )
    return v


def check_finite_scalar(value: Any, name: str) -> float:
    """
    Verify value is a finite real number.

    Returns:
        The value as a plain float

    Raises:
        InvalidParameterError: If value is not numeric, NaN or infinite
    """
    if isinstance(value, (str, bytes)):
        raise InvalidParameterError(
            f"{name} must be a finite number, got {value!r}",
            parameter=name,
            value=value,
        )
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(
            f"{name} must be a finite number, got {value!r}",
            parameter=name,
            value=value,
        ) from e
    if not np.isfinite(v):
        raise InvalidParameterError(
            f"{name} must be a finite number, got {value}",
            parameter=name,
            value=value,
        )
    return v


def check_probability(probs: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """
    Validate a vector of probability levels.

    Accepts a scalar or a 1D array-like. Every entry must be in [0, 1].

    Returns:
        1D float64 array of probabilities

    Raises:
        InvalidParameterError: If any level is outside [0, 1] or NaN
        DimensionError: If probs is more than 1-dimensional or empty
    """
    arr = np.atleast_1d(check_array(probs, name)).astype(np.float64)
    if arr.ndim != 1:
        raise DimensionError(
            f"{name}: expected a scalar or 1D array, got shape {arr.shape}"
        )
    if arr.size == 0:
        raise DimensionError(f"{name}: at least one probability is required")
    bad = ~((arr >= 0.0) & (arr <= 1.0))
    if np.any(bad):
        raise InvalidParameterError(
            f"{name} must be in [0, 1], got {arr[bad].tolist()}",
            parameter=name,
            value=arr[bad].tolist(),
        )
    return arr
