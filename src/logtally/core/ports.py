"""Port interfaces for log index adapters.

The aggregation pipeline depends only on this protocol, not on a concrete
backend. Examples: InMemoryLogIndex, SQLiteLogIndex.
"""

from collections.abc import AsyncIterable
from datetime import datetime
from typing import Protocol, runtime_checkable

from logtally.core.models import Record


@runtime_checkable
class LogIndexPort(Protocol):
    """Port for the address -> timestamps index.

    Timestamps are kept per address in insertion order. Nothing is ever
    removed or reordered, and duplicates are kept.
    """

    async def insert(self, record: Record) -> None:
        """Append the record's timestamp under its address."""
        ...

    def addresses(self) -> AsyncIterable[str]:
        """Iterate over the distinct addresses in the index."""
        ...

    def timestamps(self, address: str) -> AsyncIterable[datetime]:
        """Iterate over one address's timestamps in insertion order.

        Args:
            address: Key to look up. Unknown keys yield nothing.
        """
        ...

    def items(self) -> AsyncIterable[tuple[str, list[datetime]]]:
        """Iterate over ``(address, timestamps)`` pairs."""
        ...

    async def close(self) -> None:
        """Release any resources held by the index."""
        ...
