"""
Input validation utilities for quickstats.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import math
from numbers import Real
from typing import Any, Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from quickstats.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a real floating-point numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types, None entries or
    non-numeric data), as well as booleans, strings and complex numbers.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype. Float inputs are returned as-is
        (no copy); integer inputs are promoted to float64.

    Raises:
        ValidationError: If input cannot be converted to a real numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, bool, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype} has no ordering, expected real data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


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
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    check_ndim(array, 1, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(
            f"Inconsistent lengths: {details}",
            lengths=dict(zip(names, lengths)),
        )


def check_fraction(value: Any, name: str, upper: float = 0.5) -> float:
    """
    Verify value is a real number in the half-open interval [0, upper).

    Args:
        value: Value to check
        name: Parameter name for error messages
        upper: Exclusive upper bound

    Returns:
        The value as a Python float

    Raises:
        ValidationError: If value is not a real number or is out of range
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(
            f"{name}: expected a real number, got {type(value).__name__}"
        )

    value = float(value)
    if math.isnan(value) or not (0.0 <= value < upper):
        raise ValidationError(
            f"{name}: must satisfy 0 <= {name} < {upper}, got {value}"
        )
    return value


def check_choice(value: Any, choices: Iterable[str], name: str) -> str:
    """
    Verify value is one of the allowed option strings.

    Raises:
        ValidationError: If value is not among choices
    """
    choices = tuple(choices)
    if value not in choices:
        allowed = ", ".join(repr(c) for c in choices)
        raise ValidationError(
            f"Invalid {name}= parameter: {value!r}. Must be one of {allowed}."
        )
    return value
