"""Core query engine public API.

Filtering, ordering, projection and windowing of in-memory records, plus
helpers to load records from files, describe queries as YAML plans, and
materialize results as JSON-ready payloads or DataFrames.
"""

from .conditions import matches, parse_condition
from .ordering import order_rows, sort_by_properties
from .pipeline import Query
from .plan import QueryPlan, build_query, load_plan
from .scan import load_records
from .materialize import materialize_result, records_to_frame, frame_to_records

__all__ = [
    "Query",
    "matches",
    "parse_condition",
    "order_rows",
    "sort_by_properties",
    "QueryPlan",
    "build_query",
    "load_plan",
    "load_records",
    "materialize_result",
    "records_to_frame",
    "frame_to_records",
]
