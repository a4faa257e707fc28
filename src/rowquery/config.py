"""Query engine configuration constants.

This module centralizes the numeric bounds, sort syntax and file formats used
by the query engine and its command line interface.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

# ============================================================================
# ARGUMENT BOUNDS
# ============================================================================

# Largest integer that survives a round trip through an IEEE-754 double.
# Record counts and offsets beyond it are rejected as "not an integer".
MAX_SAFE_INTEGER = 2**53 - 1


# ============================================================================
# ORDERING
# ============================================================================

# Prefix marking a column as descending in order_by("-created_at")
DESCENDING_PREFIX = "-"


# ============================================================================
# INPUT / OUTPUT
# ============================================================================

# Format: {file suffix: loader kind}
SUPPORTED_SUFFIXES = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".csv": "csv",
    ".parquet": "parquet",
}

# Top-level key holding the records list when a JSON/YAML file is an object
RECORDS_KEY = "records"

# Inline payload cap for list results; beyond it the payload is truncated
DEFAULT_MAX_ROWS = 5000


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def get_loader_kind(path: Union[str, Path]) -> str:
    """Get the loader kind for a records file.

    Args:
        path: Path to a records file.

    Returns:
        Loader kind: "json", "yaml", "csv" or "parquet".

    Raises:
        ValueError: If the file suffix is not supported.

    Examples:
        >>> get_loader_kind("users.yml")
        'yaml'
        >>> get_loader_kind(Path("data/users.CSV"))
        'csv'
    """
    suffix = Path(path).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported records file '{path}'. "
            f"Valid suffixes: {', '.join(sorted(SUPPORTED_SUFFIXES))}"
        )
    return SUPPORTED_SUFFIXES[suffix]
