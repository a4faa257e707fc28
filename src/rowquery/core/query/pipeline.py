"""Fluent query over an in-memory list of records.

Example:
    >>> users = [
    ...     {"id": "1", "email": "abc@gmail.com", "is_active": True},
    ...     {"id": "2", "email": "ghi@gmail.com", "is_active": False},
    ... ]
    >>> Query.from_rows(users).where({"is_active": True}).select("email").column()
    ['abc@gmail.com']
    >>> Query.from_rows(users).select("id").order_by("-email").scalar()
    '2'
    >>> Query.from_rows(users).where({"id": "non-existent"}).exists()
    False

Filtering and ordering are applied eagerly to the query's private copy of the
rows. Result methods (``count``, ``first``, ``all``, ``scalar`` ...) apply the
skip/limit window and never change query state, so they can be called
repeatedly. A Query is a single-owner builder and is not safe for concurrent
mutation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterable, List, Optional, Sequence, Union

from rowquery.core.arguments import require_integer, require_min
from rowquery.core.records import get_field, row_fields
from .conditions import matches
from .ordering import order_rows

logger = logging.getLogger(__name__)

RowPredicate = Callable[[Any], Any]


class Query:
    """Query over a list of records."""

    def __init__(self, rows: Iterable[Any]) -> None:
        self._rows: List[Any] = list(rows)
        self._columns: List[str] = []
        self._start_at = 0
        self._limit: Optional[int] = None
        self.ignore_null_values = False

    @classmethod
    def from_rows(cls, rows: Iterable[Any]) -> "Query":
        """Create a query over a private copy of ``rows``."""
        return cls(rows)

    @classmethod
    def from_frame(cls, frame: Any) -> "Query":
        """Create a query over the records of a pandas or polars DataFrame."""
        from .materialize import frame_to_records

        return cls(frame_to_records(frame))

    @property
    def columns(self) -> List[str]:
        return list(self._columns)

    @property
    def start_at(self) -> int:
        return self._start_at

    @property
    def limit_value(self) -> Optional[int]:
        return self._limit

    # ------------------------------------------------------------------
    # Query building
    # ------------------------------------------------------------------

    def select(self, columns: Union[str, Sequence[str]]) -> "Query":
        """Set the columns returned by ``scalar``, ``column`` and ``values``."""
        self._columns = [columns] if isinstance(columns, str) else list(columns)
        return self

    def where(self, condition: Union[Mapping, RowPredicate]) -> "Query":
        """Keep rows matching ``condition``.

        Args:
            condition: Either a callable receiving the whole row and returning
                a truthy value for rows to keep, or a conditions mapping whose
                values are literals, predicates on the field value, sequences
                or nested mappings.

        Returns:
            This query.
        """
        self._filter_rows(condition)
        return self

    def filter_where(self, condition: Mapping) -> "Query":
        """Like ``where`` with a mapping, but fields whose condition is None are skipped."""
        self.ignore_null_values = True
        try:
            self._filter_rows(condition)
        finally:
            self.ignore_null_values = False
        return self

    def order_by(self, *columns: str) -> "Query":
        """Sort rows by ``columns``; prefix a column with ``-`` for descending order."""
        self._rows = order_rows(self._rows, *columns)
        logger.debug("Ordered %d rows by %s", len(self._rows), ", ".join(columns))
        return self

    def skip(self, number_of_rows: int) -> "Query":
        """Skip the first ``number_of_rows`` results.

        Raises:
            InvalidArgumentError: If ``number_of_rows`` is negative or not an integer.
        """
        require_min("skip", 0, number_of_rows, 0)
        require_integer("skip", 0, number_of_rows)
        self._start_at = int(number_of_rows)
        return self

    def limit(self, limit: int) -> "Query":
        """Return at most ``limit`` results.

        Raises:
            InvalidArgumentError: If ``limit`` is negative or not an integer.
        """
        require_min("limit", 0, limit, 0)
        require_integer("limit", 0, limit)
        self._limit = int(limit)
        return self

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def count(self) -> int:
        return len(self._limited_rows())

    def exists(self) -> bool:
        return self.count() > 0

    def first(self) -> Optional[Any]:
        """Return the first result, or None if there is none."""
        rows = self._limited_rows()
        return rows[0] if rows else None

    def last(self) -> Optional[Any]:
        """Return the last result, or None if there is none."""
        rows = self._limited_rows()
        return rows[-1] if rows else None

    def all(self) -> List[Any]:
        return self._limited_rows()

    def scalar(self) -> Any:
        """Return the first (selected) column of the first result.

        Returns False when there is no result, no column, or the value is None.
        Falsy values such as ``0`` or ``""`` are returned as they are.
        """
        first = self.first()
        column = self._first_column()
        if first is None or column is None:
            return False
        value = get_field(first, column)
        return False if value is None else value

    def column(self) -> List[Any]:
        """Return the first (selected) column of every result."""
        column = self._first_column()
        if column is None:
            return []
        return [get_field(row, column) for row in self._limited_rows()]

    def values(self) -> List[List[Any]]:
        """Return the selected column values, or all field values, of every result."""
        rows = self._limited_rows()
        if self._columns:
            return [[get_field(row, c) for c in self._columns] for row in rows]
        return [[get_field(row, f) for f in row_fields(row)] for row in rows]

    def to_frame(self, backend: str = "pandas") -> Any:
        """Return the results as a pandas or polars DataFrame of the selected columns."""
        from .materialize import records_to_frame

        return records_to_frame(self._limited_rows(), self._columns, backend=backend)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _limited_rows(self) -> List[Any]:
        rows = self._rows[self._start_at:]
        if self._limit is not None:
            rows = rows[: self._limit]
        return rows

    def _first_column(self) -> Optional[str]:
        if self._columns:
            return self._columns[0]
        first = self.first()
        if first is None:
            return None
        fields = row_fields(first)
        return fields[0] if fields else None

    def _filter_rows(self, condition: Union[Mapping, RowPredicate]) -> None:
        before = len(self._rows)
        if callable(condition):
            self._rows = [row for row in self._rows if condition(row)]
        else:
            self._rows = [
                row for row in self._rows if matches(row, condition, self.ignore_null_values)
            ]
        logger.debug("Filtered rows: %d -> %d", before, len(self._rows))

    def __repr__(self) -> str:
        return (
            f"Query(rows={len(self._rows)}, columns={self._columns!r}, "
            f"skip={self._start_at}, limit={self._limit})"
        )


__all__ = ["Query"]
