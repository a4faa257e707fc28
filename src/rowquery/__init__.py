"""rowquery: in-memory query engine for lists of structured records.

Records are plain dicts, dataclass instances or attribute objects. Queries are
built fluently and evaluated eagerly:

    >>> from rowquery import Query
    >>> Query.from_rows(users).where({"is_active": True}).select("email").column()
"""

__all__ = [
    "__version__",
    "Query",
    "InvalidArgumentError",
    "BaseRecord",
]

__version__ = "0.1.0"

from .core.errors import InvalidArgumentError
from .core.query.pipeline import Query
from .core.records import BaseRecord
