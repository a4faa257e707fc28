"""Errors raised by the query engine."""

from __future__ import annotations

from typing import Any, Union


class InvalidArgumentError(ValueError):
    """Raised when an argument fails a precondition of a query method.

    Attributes:
        method: Name of the query method that rejected the argument.
        param: Position of the offending parameter (0-based).
        argument: The rejected value.
        expected: Human-readable expectation, e.g. "an integer".

    Examples:
        >>> InvalidArgumentError(method="skip", param=0, argument=-1,
        ...                      expected="equal or greater than 0")
        InvalidArgumentError('-1 is not a valid argument to param 0 on skip(). It should be equal or greater than 0.')
    """

    def __init__(self, *, method: str, param: Union[int, str], argument: Any, expected: str) -> None:
        self.method = method
        self.param = param
        self.argument = argument
        self.expected = expected
        super().__init__(
            f"{argument} is not a valid argument to param {param} on {method}(). "
            f"It should be {expected}."
        )


__all__ = ["InvalidArgumentError"]
