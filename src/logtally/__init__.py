"""logtally: per-address access counts from line-oriented access logs."""

__version__ = "0.1.0"

from logtally.adapters.index import InMemoryLogIndex, SQLiteLogIndex  # noqa: E402
from logtally.core import (  # noqa: E402
    FilterCriteria,
    Record,
    ResultRow,
    filter_counts,
    parse_line,
    tally,
    to_rows,
)
from logtally.core.pipeline import build_index, run_pipeline  # noqa: E402

__all__ = [
    "FilterCriteria",
    "InMemoryLogIndex",
    "Record",
    "ResultRow",
    "SQLiteLogIndex",
    "__version__",
    "build_index",
    "filter_counts",
    "parse_line",
    "run_pipeline",
    "tally",
    "to_rows",
]
