"""Load records from JSON, YAML, CSV and Parquet files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd
import polars as pl
import yaml

from rowquery.config import RECORDS_KEY, get_loader_kind
from .materialize import frame_to_records


def _records_from_document(data: Any, path: Path) -> List[Dict[str, Any]]:
    if isinstance(data, dict) and RECORDS_KEY in data:
        data = data[RECORDS_KEY]
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise ValueError(
            f"Expected a list of records (or an object with a '{RECORDS_KEY}' list) in {path}"
        )
    return data


def load_records(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load a list of dict records from a JSON, YAML, CSV or Parquet file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the suffix is unsupported or the content cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Records file not found: {path}")
    kind = get_loader_kind(path)

    if kind == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Failed to read JSON file {path}: {e}") from e
        return _records_from_document(data, path)

    if kind == "yaml":
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(f"Failed to read YAML file {path}: {e}") from e
        return _records_from_document(data, path)

    if kind == "csv":
        try:
            df = pd.read_csv(path, encoding="utf-8-sig")
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise ValueError(f"Failed to read CSV file {path}: {e}") from e
        return frame_to_records(df)

    try:
        df = pl.read_parquet(path)
    except (OSError, pl.exceptions.ComputeError) as e:
        raise ValueError(f"Failed to read Parquet file {path}: {e}") from e
    return frame_to_records(df)
