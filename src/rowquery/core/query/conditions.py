"""Condition matching for query filters.

A conditions mapping pairs field names with what the field must satisfy:

    {
        "is_active": True,                         # literal, strict equality
        "email": lambda e: e.endswith("@x.org"),   # predicate on the cell value
        "tags": ["a", "b"],                        # ordered, element-wise equality
        "permissions": {"send_notifications": True},  # nested conditions
    }

A row matches when every listed field is satisfied; fields not listed impose
no constraint. In null-tolerant mode a ``None`` condition is skipped instead
of requiring the cell to be None.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Tuple, Union

from rowquery.core.records import (
    compare_sequences,
    get_field,
    is_sequence,
    is_structured,
    strict_equal,
)


@dataclass(frozen=True)
class Ignored:
    """Null condition in tolerant mode: always satisfied."""

    def check(self, cell: Any, ignore_nulls: bool) -> bool:
        return True


@dataclass(frozen=True)
class Predicate:
    fn: Callable[[Any], Any]

    def check(self, cell: Any, ignore_nulls: bool) -> bool:
        return bool(self.fn(cell))


@dataclass(frozen=True)
class Sequence:
    items: Tuple[Any, ...]

    def check(self, cell: Any, ignore_nulls: bool) -> bool:
        return is_sequence(cell) and compare_sequences(cell, self.items)


@dataclass(frozen=True)
class Nested:
    conditions: Mapping

    def check(self, cell: Any, ignore_nulls: bool) -> bool:
        # No coercion: a scalar cell never satisfies nested conditions
        return is_structured(cell) and matches(cell, self.conditions, ignore_nulls)


@dataclass(frozen=True)
class Literal:
    value: Any

    def check(self, cell: Any, ignore_nulls: bool) -> bool:
        return strict_equal(cell, self.value)


Condition = Union[Ignored, Predicate, Sequence, Nested, Literal]


def parse_condition(condition: Any, ignore_nulls: bool = False) -> Condition:
    """Classify a raw field condition.

    Dispatch order is fixed: null (tolerant mode only), callable, sequence,
    mapping, then literal.

    Examples:
        >>> parse_condition([1, 2])
        Sequence(items=(1, 2))
        >>> parse_condition(None), parse_condition(None, ignore_nulls=True)
        (Literal(value=None), Ignored())
    """
    if ignore_nulls and condition is None:
        return Ignored()
    if callable(condition):
        return Predicate(condition)
    if is_sequence(condition):
        return Sequence(tuple(condition))
    if isinstance(condition, Mapping):
        return Nested(condition)
    return Literal(condition)


def matches(row: Any, conditions: Mapping, ignore_nulls: bool = False) -> bool:
    """Return True if ``row`` satisfies every condition in ``conditions``.

    Args:
        row: Record to test (mapping, dataclass or attribute object).
        conditions: Field name → literal, predicate, sequence or nested mapping.
        ignore_nulls: Skip fields whose condition is None.

    Returns:
        True when all listed fields are satisfied. Missing fields read as None.

    Examples:
        >>> row = {"foo": {"bar": "b", "foo": {"bar": "c"}}}
        >>> matches(row, {"foo": {"bar": "b"}})
        True
        >>> matches(row, {"foo": {"bar": "b", "foo": {"bar": "d"}}})
        False
    """
    for field, raw in conditions.items():
        condition = parse_condition(raw, ignore_nulls)
        if not condition.check(get_field(row, field), ignore_nulls):
            return False
    return True


__all__ = [
    "Condition",
    "Ignored",
    "Literal",
    "Nested",
    "Predicate",
    "Sequence",
    "matches",
    "parse_condition",
]
