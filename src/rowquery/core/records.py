"""Record access helpers.

A record (row) is any structured value: a ``Mapping``, a dataclass instance,
or a plain object carrying its data in instance attributes. This module is the
single place that knows how to enumerate and read the data fields of such a
record, so the condition matcher and the query pipeline stay shape-agnostic.

Field enumeration rules:
    - Mapping: its keys, in insertion order
    - dataclass instance: its fields, in declaration order
    - other objects: public, non-callable entries of ``vars(obj)``, then any
      assigned ``__slots__`` attributes
"""

from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Tuple


def is_structured(value: Any) -> bool:
    """Return True if ``value`` is a record that conditions can recurse into.

    Examples:
        >>> is_structured({"a": 1}), is_structured("abc"), is_structured(None)
        (True, False, False)
    """
    if isinstance(value, Mapping):
        return True
    if value is None or isinstance(value, type) or inspect.isroutine(value):
        return False
    if dataclasses.is_dataclass(value):
        return True
    return hasattr(value, "__dict__") or bool(_slot_names(value))


def _slot_names(value: Any) -> List[str]:
    names: List[str] = []
    for klass in reversed(type(value).__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__"))
    return names


def is_sequence(value: Any) -> bool:
    """Return True for ordered sequences compared element-wise (list, tuple)."""
    return isinstance(value, (list, tuple))


def row_fields(row: Any) -> List[str]:
    """Return the data field names of a record in enumeration order."""
    if isinstance(row, Mapping):
        return list(row.keys())
    if dataclasses.is_dataclass(row) and not isinstance(row, type):
        return [f.name for f in dataclasses.fields(row)]
    if not is_structured(row):
        return []
    entries = dict(vars(row)) if hasattr(row, "__dict__") else {}
    for name in _slot_names(row):
        if hasattr(row, name):
            entries.setdefault(name, getattr(row, name))
    return [
        name
        for name, value in entries.items()
        if not name.startswith("_") and not callable(value)
    ]


def row_items(row: Any) -> List[Tuple[str, Any]]:
    """Return ``(field, value)`` pairs of a record in enumeration order."""
    return [(name, get_field(row, name)) for name in row_fields(row)]


def get_field(row: Any, name: Any) -> Any:
    """Read a field from a record; missing fields read as None."""
    if isinstance(row, Mapping):
        return row.get(name)
    if not isinstance(name, str):
        return None
    return getattr(row, name, None)


def strict_equal(a: Any, b: Any) -> bool:
    """Equality without bool/number coercion.

    ``True == 1`` holds in Python; here a bool only equals another bool.

    Examples:
        >>> strict_equal(1, 1.0), strict_equal(True, 1), strict_equal("1", 1)
        (True, False, False)
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    return bool(a == b)


def compare_sequences(a: Iterable[Any], b: Iterable[Any]) -> bool:
    """Ordered, element-wise strict equality of two sequences."""
    a, b = list(a), list(b)
    return len(a) == len(b) and all(strict_equal(x, y) for x, y in zip(a, b))


def data_fields(record_type: type) -> List[str]:
    """Return the data field names declared by a record class.

    Dataclasses report their fields; other classes report annotated,
    public, non-callable class attributes across the MRO. Methods are never
    data fields. Used as a runtime allow-list for field names.

    Examples:
        >>> class User(BaseRecord):
        ...     id: str
        ...     email: str
        ...     def is_admin(self) -> bool: ...
        >>> data_fields(User)
        ['id', 'email']
    """
    if dataclasses.is_dataclass(record_type):
        return [f.name for f in dataclasses.fields(record_type)]

    names: List[str] = []
    for klass in reversed(record_type.__mro__):
        for name in inspect.get_annotations(klass):
            if name.startswith("_") or name in names:
                continue
            if callable(getattr(record_type, name, None)):
                continue
            names.append(name)
    return names


class BaseRecord:
    """Plain record whose attributes are bulk-assigned at construction.

    Subclasses declare their data fields as annotations and may add
    behaviour as methods; only the assigned attributes are data fields.

    Examples:
        >>> class User(BaseRecord):
        ...     id: str
        ...     is_active: bool
        >>> user = User(id="1", is_active=True)
        >>> row_fields(user)
        ['id', 'is_active']
    """

    def __init__(self, **attributes: Any) -> None:
        self.set_attributes(attributes)

    def set_attribute(self, attribute: str, value: Any) -> None:
        setattr(self, attribute, value)

    def set_attributes(self, attributes: Mapping) -> None:
        for attribute, value in attributes.items():
            self.set_attribute(attribute, value)

    def to_dict(self) -> Dict[str, Any]:
        return dict(row_items(self))

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k}={v!r}" for k, v in row_items(self))
        return f"{type(self).__name__}({attrs})"


__all__ = [
    "BaseRecord",
    "compare_sequences",
    "data_fields",
    "get_field",
    "is_sequence",
    "is_structured",
    "row_fields",
    "row_items",
    "strict_equal",
]
