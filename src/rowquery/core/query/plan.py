"""Declarative query plans.

A plan describes a query as data, so it can be stored in YAML:

    select: [id, email]
    where:
      is_active: true
      permissions:
        send_notifications: true
    filter_where:
      country: null        # skipped
    order_by: [-created_at, id]
    skip: 0
    limit: 10
    result: values

Steps are applied in a fixed order: select, where, filter_where, order_by,
skip, limit. Plans carry data only, so their conditions are literals,
sequences and nested mappings; predicates need the Python API.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Union

import yaml

from rowquery.core.enums import ResultKind
from rowquery.core.records import data_fields
from .materialize import parse_result_kind
from .ordering import parse_column
from .pipeline import Query

PLAN_KEYS = ("select", "where", "filter_where", "order_by", "skip", "limit", "result")


def _as_list(value: Union[None, str, Iterable[str]]) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return [str(v) for v in value]


@dataclass
class QueryPlan:
    """Structured description of a query.

    Attributes:
        select: Selected columns (empty keeps the default column).
        where: Conditions mapping applied with ``Query.where``.
        filter_where: Conditions mapping applied with ``Query.filter_where``.
        order_by: Columns to order by, ``-`` prefixed for descending.
        skip: Number of results to skip.
        limit: Maximum number of results.
        result: Extraction operation producing the final value.
    """

    select: List[str] = field(default_factory=list)
    where: Optional[Dict[str, Any]] = None
    filter_where: Optional[Dict[str, Any]] = None
    order_by: List[str] = field(default_factory=list)
    skip: Optional[int] = None
    limit: Optional[int] = None
    result: ResultKind = ResultKind.ALL

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "QueryPlan":
        """Build a plan from a mapping such as a parsed YAML document.

        Raises:
            ValueError: If a key is unknown, a condition is not a mapping,
                or the result kind is invalid.
        """
        data = dict(data or {})
        unknown = sorted(set(data) - set(PLAN_KEYS))
        if unknown:
            raise ValueError(
                f"Unknown plan keys: {', '.join(unknown)}. Valid keys: {', '.join(PLAN_KEYS)}"
            )
        for key in ("where", "filter_where"):
            if data.get(key) is not None and not isinstance(data[key], Mapping):
                raise ValueError(f"Plan '{key}' must be a mapping of field conditions")

        return cls(
            select=_as_list(data.get("select")),
            where=dict(data["where"]) if data.get("where") is not None else None,
            filter_where=(
                dict(data["filter_where"]) if data.get("filter_where") is not None else None
            ),
            order_by=_as_list(data.get("order_by")),
            skip=data.get("skip"),
            limit=data.get("limit"),
            result=parse_result_kind(data.get("result") or ResultKind.ALL),
        )

    def merge(self, **overrides: Any) -> "QueryPlan":
        """Return a copy with every non-None override applied.

        ``where`` and ``filter_where`` overrides are merged key by key into the
        existing conditions; other fields are replaced.
        """
        changes: Dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in PLAN_KEYS:
                raise ValueError(f"Unknown plan key: {key}")
            if value is None or (isinstance(value, (list, dict)) and not value):
                continue
            if key in ("where", "filter_where"):
                value = {**(getattr(self, key) or {}), **value}
            elif key in ("select", "order_by"):
                value = _as_list(value)
            elif key == "result":
                value = parse_result_kind(value)
            changes[key] = value
        return dataclasses.replace(self, **changes)

    def field_names(self) -> Set[str]:
        """Top-level field names referenced by the plan."""
        names = set(self.select)
        names.update((self.where or {}).keys())
        names.update((self.filter_where or {}).keys())
        names.update(parse_column(c)[0] for c in self.order_by)
        return names


def load_plan(path: Union[str, Path]) -> QueryPlan:
    """Load a query plan from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the YAML cannot be parsed or describes an invalid plan.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Plan file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"Failed to read plan file {path}: {e}") from e
    if not isinstance(data, Mapping):
        raise ValueError(f"Plan file {path} must contain a mapping")
    return QueryPlan.from_dict(data)


def build_query(
    rows: Iterable[Any], plan: QueryPlan, *, record_type: Optional[type] = None
) -> Query:
    """Build a Query over ``rows`` from a plan.

    Args:
        rows: Records to query.
        plan: Query plan.
        record_type: Optional record class; when given, every field name in
            the plan must be one of its data fields.

    Raises:
        ValueError: If ``record_type`` is given and the plan names other fields.
        InvalidArgumentError: If ``skip`` or ``limit`` is invalid.
    """
    if record_type is not None:
        allowed = set(data_fields(record_type))
        unknown = sorted(plan.field_names() - allowed)
        if unknown:
            raise ValueError(
                f"Unknown fields for {record_type.__name__}: {', '.join(unknown)}"
            )

    query = Query.from_rows(rows)
    if plan.select:
        query.select(plan.select)
    if plan.where:
        query.where(plan.where)
    if plan.filter_where:
        query.filter_where(plan.filter_where)
    if plan.order_by:
        query.order_by(*plan.order_by)
    if plan.skip is not None:
        query.skip(plan.skip)
    if plan.limit is not None:
        query.limit(plan.limit)
    return query
