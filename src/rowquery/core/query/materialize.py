"""Result payloads and DataFrame conversion for queries."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

import pandas as pd
import polars as pl

from rowquery.config import DEFAULT_MAX_ROWS
from rowquery.core.enums import ResultKind
from rowquery.core.records import get_field, row_fields, row_items

if TYPE_CHECKING:
    from .pipeline import Query


def _clean_cell(value: Any) -> Any:
    # pandas stores missing CSV cells as NaN
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def frame_to_records(frame: Any) -> List[Dict[str, Any]]:
    """Convert a pandas or polars DataFrame into a list of dict records."""
    if isinstance(frame, pl.DataFrame):
        return frame.to_dicts()
    if isinstance(frame, pd.DataFrame):
        return [
            {str(k): _clean_cell(v) for k, v in rec.items()}
            for rec in frame.to_dict(orient="records")
        ]
    raise TypeError(f"Expected a pandas or polars DataFrame, got {type(frame).__name__}")


def records_to_frame(
    rows: Sequence[Any], columns: Optional[Sequence[str]] = None, *, backend: str = "pandas"
) -> Union[pd.DataFrame, pl.DataFrame]:
    """Build a DataFrame from records, restricted to ``columns`` when given.

    Without columns, the fields of the first record define the frame columns.
    """
    if columns:
        cols = list(columns)
    else:
        cols = row_fields(rows[0]) if rows else []
    data = {c: [get_field(r, c) for r in rows] for c in cols}

    if backend == "pandas":
        return pd.DataFrame(data, columns=cols)
    if backend == "polars":
        return pl.DataFrame(data, strict=False)
    raise ValueError(f"Unsupported backend: {backend}")


def parse_result_kind(result: Union[str, ResultKind]) -> ResultKind:
    try:
        return ResultKind(result)
    except ValueError as e:
        valid = ", ".join(k.value for k in ResultKind)
        raise ValueError(f"Unknown result kind: '{result}'. Valid kinds: {valid}") from e


def run_result(query: "Query", result: Union[str, ResultKind]) -> Any:
    """Call the extraction method named by ``result`` on ``query``."""
    return getattr(query, parse_result_kind(result).value)()


def materialize_result(
    query: "Query",
    result: Union[str, ResultKind] = ResultKind.ALL,
    *,
    max_rows: int = DEFAULT_MAX_ROWS,
) -> Dict[str, Any]:
    """Extract a result and wrap it in a JSON-ready payload.

    Row objects are converted to dicts of their data fields. List results
    longer than ``max_rows`` are cut and flagged as truncated.

    Returns:
        {"result": kind, "data": value, "row_count": n, "truncated": bool}
    """
    kind = parse_result_kind(result)
    data = run_result(query, kind)

    if kind in (ResultKind.ALL, ResultKind.FIRST, ResultKind.LAST):
        data = _to_plain(data)

    truncated = False
    if isinstance(data, list) and len(data) > max_rows:
        data = data[:max_rows]
        truncated = True

    return {
        "result": kind.value,
        "data": data,
        "row_count": query.count(),
        "truncated": truncated,
    }


def _to_plain(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, list):
        return [_to_plain(v) for v in value]
    return dict(row_items(value))
