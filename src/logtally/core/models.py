"""Core domain models for access-log tallies."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Record:
    """A single parsed access-log entry.

    Attributes:
        address: Source address as written in the log (any text, no colon).
        timestamp: When the access happened.
    """

    address: str
    timestamp: datetime


@dataclass(frozen=True)
class FilterCriteria:
    """Selection applied to an index before counting.

    ``address_mask`` is the inclusive upper bound of a plain lexicographic
    range, not a bitmask. An empty mask therefore admits only the empty
    address.

    Attributes:
        address_start: Inclusive lower bound for addresses.
        address_mask: Inclusive upper bound for addresses.
        time_start: Inclusive lower bound for timestamps, None for unbounded.
        time_end: Inclusive upper bound for timestamps, None for unbounded.
    """

    address_start: str = ""
    address_mask: str = ""
    time_start: datetime | None = None
    time_end: datetime | None = None


@dataclass(frozen=True)
class ResultRow:
    """One output unit: an address and its in-window occurrence count.

    Attributes:
        address: Address that passed the address range test.
        count: Number of its timestamps inside the time window (may be 0).
    """

    address: str
    count: int


@dataclass
class IngestStats:
    """Counters collected while folding lines into an index."""

    lines: int = 0
    records: int = 0
    skipped: int = 0
