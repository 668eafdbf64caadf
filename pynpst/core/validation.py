"""
Input validation utilities for pynpst.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import math
import numbers

from pynpst.core.exceptions import ValidationError, DimensionError


def check_finite(value: float, name: str) -> float:
    """
    Verify a scalar is a finite real number.

    Args:
        value: Scalar to check
        name: Parameter name for error messages

    Returns:
        The value as a Python float

    Raises:
        ValidationError: If value is not a real number, NaN or infinite
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(
            f"{name}: expected a real number, got {type(value).__name__}"
        )
    result = float(value)
    if not math.isfinite(result):
        raise ValidationError(f"{name}: must be finite, got {result}")
    return result


def check_positive(value: float, name: str) -> float:
    """
    Verify a scalar is finite and strictly positive.

    Raises:
        ValidationError: If value <= 0
    """
    result = check_finite(value, name)
    if result <= 0.0:
        raise ValidationError(f"{name}: must be > 0, got {result}")
    return result


def check_probability(value: float, name: str) -> float:
    """
    Verify a scalar lies in the closed interval [0, 1].

    Raises:
        ValidationError: If value is outside [0, 1]
    """
    result = check_finite(value, name)
    if not (0.0 <= result <= 1.0):
        raise ValidationError(f"{name}: must be in [0, 1], got {result}")
    return result


def check_interval(start: float, end: float, names: tuple[str, str]) -> tuple[float, float]:
    """
    Verify two finite bounds form a non-empty interval (start < end).

    Raises:
        ValidationError: If start >= end
    """
    lo = check_finite(start, names[0])
    hi = check_finite(end, names[1])
    if lo >= hi:
        raise ValidationError(
            f"{names[0]} must be < {names[1]}, got {names[0]}={lo}, {names[1]}={hi}"
        )
    return lo, hi


def check_non_negative_int(value: int, name: str) -> int:
    """
    Verify a scalar is an integer >= 0.

    Integral floats (3.0) are accepted; fractional values are not.

    Raises:
        ValidationError: If value is negative or not integral
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(
            f"{name}: expected an integer, got {type(value).__name__}"
        )
    if not isinstance(value, numbers.Integral):
        if not math.isfinite(float(value)) or float(value) != math.floor(value):
            raise ValidationError(f"{name}: expected an integer, got {value}")
    result = int(value)
    if result < 0:
        raise ValidationError(f"{name}: must be >= 0, got {result}")
    return result


def check_positive_int(value: int, name: str) -> int:
    """
    Verify a scalar is an integer >= 1.

    Raises:
        ValidationError: If value is not a positive integer
    """
    result = check_non_negative_int(value, name)
    if result < 1:
        raise ValidationError(f"{name}: must be >= 1, got {result}")
    return result


def check_shape(*dims: int, name: str) -> tuple[int, ...]:
    """
    Verify table dimensions are non-negative integers.

    Raises:
        DimensionError: If any dimension is negative or not integral
    """
    shape = []
    for axis, dim in enumerate(dims):
        try:
            shape.append(check_non_negative_int(dim, f"{name} dimension {axis}"))
        except ValidationError as e:
            raise DimensionError(str(e)) from e
    return tuple(shape)
