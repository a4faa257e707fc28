"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class ResultKind(str, Enum):
    """Result extraction operations of a query.

    Values are strings to ease serialization and CLI interchange.
    """

    ALL = "all"
    FIRST = "first"
    LAST = "last"
    COUNT = "count"
    EXISTS = "exists"
    SCALAR = "scalar"
    COLUMN = "column"
    VALUES = "values"


__all__ = ["ResultKind"]
