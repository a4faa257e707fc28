"""Precondition checks for numeric query arguments.

Each check raises InvalidArgumentError naming the method, the parameter
position, the actual value and what was expected. Checks run at the top of a
method, before any query state changes.
"""

from __future__ import annotations

from numbers import Real
from typing import Any

from rowquery.config import MAX_SAFE_INTEGER
from .errors import InvalidArgumentError


def is_number(value: Any) -> bool:
    """Return True for real numbers, excluding bool."""
    return isinstance(value, Real) and not isinstance(value, bool)


def is_safe_integer(value: Any) -> bool:
    """Return True for integral numbers within ±MAX_SAFE_INTEGER.

    Integral floats (``2.0``) count as integers; NaN and infinities do not.

    Examples:
        >>> is_safe_integer(3), is_safe_integer(3.0), is_safe_integer(1.5)
        (True, True, False)
        >>> is_safe_integer(2**53)
        False
    """
    if not is_number(value):
        return False
    try:
        integral = int(value)
    except (OverflowError, ValueError):
        return False
    return value == integral and abs(integral) <= MAX_SAFE_INTEGER


def require_min(method: str, param: int, value: Any, minimum: int) -> None:
    """Reject non-numbers and numbers below ``minimum``."""
    if not is_number(value) or value < minimum:
        raise InvalidArgumentError(
            method=method,
            param=param,
            argument=value,
            expected=f"equal or greater than {minimum}",
        )


def require_integer(method: str, param: int, value: Any) -> None:
    """Reject anything that is not a safe integer."""
    if not is_safe_integer(value):
        raise InvalidArgumentError(
            method=method,
            param=param,
            argument=value,
            expected="an integer",
        )


__all__ = ["is_number", "is_safe_integer", "require_min", "require_integer"]
