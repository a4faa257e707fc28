"""Multi-column ordering of records.

Columns are compared left to right; the next column only breaks ties of the
previous ones. A column prefixed with ``-`` is compared descending.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, List, Sequence

from rowquery.config import DESCENDING_PREFIX
from rowquery.core.records import get_field

Comparator = Callable[[Any, Any], int]


def compare_values(a: Any, b: Any) -> int:
    """Relational comparison: -1, 1, or 0 when neither ``<`` nor ``>`` holds.

    Values Python cannot order against each other (``None`` vs ``int``) compare
    as equal, so they keep their input order.
    """
    try:
        if a < b:
            return -1
        if a > b:
            return 1
    except TypeError:
        pass
    return 0


def parse_column(column: str) -> tuple[str, int]:
    """Split ``"-name"`` into ``("name", -1)`` and ``"name"`` into ``("name", 1)``."""
    if column.startswith(DESCENDING_PREFIX):
        return column[len(DESCENDING_PREFIX):], -1
    return column, 1


def sort_by_property(column: str) -> Comparator:
    name, order = parse_column(column)

    def compare(a: Any, b: Any) -> int:
        return compare_values(get_field(a, name), get_field(b, name)) * order

    return compare


def sort_by_properties(*columns: str) -> Comparator:
    comparators = [sort_by_property(c) for c in columns]

    def compare(a: Any, b: Any) -> int:
        for comparator in comparators:
            result = comparator(a, b)
            if result:
                return result
        return 0

    return compare


def order_rows(rows: Sequence[Any], *columns: str) -> List[Any]:
    """Return a new list of ``rows`` stably sorted by ``columns``.

    Examples:
        >>> rows = [{"x": 2, "y": 1}, {"x": 1, "y": 1}, {"x": 1, "y": 2}]
        >>> order_rows(rows, "x", "-y")
        [{'x': 1, 'y': 2}, {'x': 1, 'y': 1}, {'x': 2, 'y': 1}]
    """
    if not columns:
        return list(rows)
    return sorted(rows, key=cmp_to_key(sort_by_properties(*columns)))


__all__ = [
    "compare_values",
    "order_rows",
    "parse_column",
    "sort_by_properties",
    "sort_by_property",
]
