"""Adapters: line sources, index backends, result writer, logging setup."""

from logtally.adapters.async_utils import (
    _collect_async_iterable as collect_async_iterable,
)
from logtally.adapters.async_utils import (
    _run_sync as run_sync,
)
from logtally.adapters.index import InMemoryLogIndex, SQLiteLogIndex, create_index
from logtally.adapters.sources import iter_file_lines, iter_lines, iter_stream_lines
from logtally.adapters.writer import write_rows

__all__ = [
    "InMemoryLogIndex",
    "SQLiteLogIndex",
    "collect_async_iterable",
    "create_index",
    "iter_file_lines",
    "iter_lines",
    "iter_stream_lines",
    "run_sync",
    "write_rows",
]
