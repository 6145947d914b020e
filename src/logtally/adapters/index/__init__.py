"""Index adapters implementing LogIndexPort."""

from typing import Literal

from logtally.adapters.index.in_memory import InMemoryLogIndex
from logtally.adapters.index.sqlite import SQLiteLogIndex
from logtally.core.ports import LogIndexPort

IndexBackend = Literal["memory", "sqlite"]


def create_index(backend: IndexBackend = "memory", db_path: str = ":memory:") -> LogIndexPort:
    """Create an empty index for the named backend.

    Args:
        backend: ``"memory"`` or ``"sqlite"``.
        db_path: Database location, only used by the sqlite backend.

    Raises:
        ValueError: If the backend is unknown.
    """
    if backend == "memory":
        return InMemoryLogIndex()
    if backend == "sqlite":
        return SQLiteLogIndex(db_path)
    raise ValueError(f"unknown index backend: {backend!r}")


__all__ = [
    "IndexBackend",
    "InMemoryLogIndex",
    "SQLiteLogIndex",
    "create_index",
]
