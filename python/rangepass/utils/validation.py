"""
Input validation utilities for Rangepass.
"""

import math
import numbers
from typing import Any, Optional

from ..exceptions import ConfigurationError, LengthRangeError, LengthTypeError


def _as_integer(value: Any) -> Optional[int]:
    """Return value as an int if it is an integer-valued number, else None."""
    # bool is an Integral subclass but never a meaningful length
    if isinstance(value, bool):
        return None

    if isinstance(value, numbers.Integral):
        return int(value)

    if isinstance(value, numbers.Real):
        as_float = float(value)
        if math.isfinite(as_float) and as_float.is_integer():
            return int(as_float)

    return None


def validate_length(length: Any) -> int:
    """
    Validate the requested output length.

    Args:
        length: Raw length argument as supplied by the caller

    Returns:
        The length as a non-negative int

    Raises:
        LengthTypeError: If length is not an integer-valued number
        LengthRangeError: If length is negative
    """
    value = _as_integer(length)
    if value is None:
        raise LengthTypeError(get_length_error_message(length))

    if value < 0:
        raise LengthRangeError(get_length_error_message(length))

    return value


def validate_minimum(minimum: Any, position: int) -> int:
    """
    Validate an include group's minimum occurrence count.

    Args:
        minimum: Raw minimum value (None means 0)
        position: Index of the group, used in error messages

    Returns:
        The minimum as a non-negative int

    Raises:
        ConfigurationError: If minimum is not a non-negative integer
    """
    if minimum is None:
        return 0

    value = _as_integer(minimum)
    if value is None or value < 0:
        raise ConfigurationError(
            f"Include group {position}: min must be a non-negative integer, got {minimum!r}"
        )

    return value


def get_length_error_message(length: Any) -> str:
    """
    Get a descriptive error message for an invalid length.

    Args:
        length: The invalid length

    Returns:
        Error message describing why the length is invalid
    """
    if length is None:
        return "Length is required"

    value = _as_integer(length)
    if value is None:
        if isinstance(length, numbers.Real) and not isinstance(length, bool):
            return f"Length must be a whole number, got {length!r}"
        return f"Length must be an integer, got {type(length).__name__}"

    if value < 0:
        return f"Length cannot be negative, got {value}"

    return "Length is valid"
