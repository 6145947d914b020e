"""In-memory log index adapter."""

from collections.abc import AsyncIterable, Mapping, Sequence
from datetime import datetime

from logtally.core.models import Record


class InMemoryLogIndex:
    """In-memory implementation of LogIndexPort.

    Keeps a dict of address to list of timestamps. Suitable for any log
    that fits in memory, which is the default for a single run.
    """

    def __init__(self) -> None:
        self._entries: dict[str, list[datetime]] = {}

    async def insert(self, record: Record) -> None:
        """Append the record's timestamp under its address."""
        timestamps = self._entries.get(record.address)
        if timestamps is None:
            self._entries[record.address] = [record.timestamp]
        else:
            timestamps.append(record.timestamp)

    async def addresses(self) -> AsyncIterable[str]:
        """Iterate over the distinct addresses in first-seen order."""
        for address in list(self._entries):
            yield address

    async def timestamps(self, address: str) -> AsyncIterable[datetime]:
        """Iterate over one address's timestamps in insertion order."""
        for timestamp in self._entries.get(address, ()):
            yield timestamp

    async def items(self) -> AsyncIterable[tuple[str, list[datetime]]]:
        """Iterate over ``(address, timestamps)`` pairs."""
        for address, timestamps in list(self._entries.items()):
            yield address, list(timestamps)

    def as_mapping(self) -> Mapping[str, Sequence[datetime]]:
        """Read-only view for the synchronous filter_counts()."""
        return {address: tuple(ts) for address, ts in self._entries.items()}

    def __len__(self) -> int:
        return len(self._entries)

    async def close(self) -> None:
        """Nothing to release."""
