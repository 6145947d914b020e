"""Address range filter and per-address time window counting."""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Literal

from logtally.core.models import FilterCriteria, ResultRow
from logtally.core.ports import LogIndexPort

logger = logging.getLogger(__name__)

SortKey = Literal["address", "count"]

# Faults that drop a single address instead of the whole tally
_KEY_FAULTS = (TypeError, ValueError)


def is_in_address_range(address: str, start: str, mask: str) -> bool:
    """Return True if ``start <= address <= mask`` in ordinal string order.

    ``mask`` is an inclusive upper bound. An empty ``start`` admits every
    address, while an empty ``mask`` admits only the empty address.
    """
    return start <= address <= mask


def count_in_window(
    timestamps: Iterable[datetime],
    start: datetime | None,
    end: datetime | None,
) -> int:
    """Count timestamps with ``start <= t <= end``.

    Args:
        timestamps: Timestamps to scan once.
        start: Inclusive lower bound, None for unbounded.
        end: Inclusive upper bound, None for unbounded.
    """
    lower = start if start is not None else datetime.min
    upper = end if end is not None else datetime.max
    return sum(1 for t in timestamps if lower <= t <= upper)


def _tally_key(
    address: str, timestamps: Iterable[datetime], criteria: FilterCriteria
) -> int | None:
    """Count one address, or return None if it is out of range or faulty."""
    try:
        if not is_in_address_range(
            address, criteria.address_start, criteria.address_mask
        ):
            return None
        return count_in_window(timestamps, criteria.time_start, criteria.time_end)
    except _KEY_FAULTS as exc:
        logger.warning("skipping address %r: %s", address, exc)
        return None


def filter_counts(
    index: Mapping[str, Iterable[datetime]], criteria: FilterCriteria
) -> dict[str, int]:
    """Count in-window timestamps for every address in range.

    Addresses that pass the range test but have no timestamp inside the
    window are kept with a count of 0.

    Args:
        index: Address to timestamps mapping.
        criteria: Address range and time window.

    Returns:
        Mapping from selected address to its count.
    """
    counts: dict[str, int] = {}
    for address, timestamps in index.items():
        count = _tally_key(address, timestamps, criteria)
        if count is not None:
            counts[address] = count
    return counts


async def tally(index: LogIndexPort, criteria: FilterCriteria) -> dict[str, int]:
    """Same as filter_counts, over any LogIndexPort backend."""
    counts: dict[str, int] = {}
    async for address, timestamps in index.items():
        count = _tally_key(address, timestamps, criteria)
        if count is not None:
            counts[address] = count
    return counts


def to_rows(counts: Mapping[str, int], sort_by: SortKey = "address") -> list[ResultRow]:
    """Turn a count mapping into ResultRows in a deterministic order.

    Args:
        counts: Address to count mapping.
        sort_by: ``"address"`` for ordinal address order, ``"count"`` for
            highest count first with ties broken by address.

    Raises:
        ValueError: If sort_by is not a known key.
    """
    if sort_by == "address":
        items = sorted(counts.items())
    elif sort_by == "count":
        items = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    else:
        raise ValueError(f"unknown sort key: {sort_by!r}")
    return [ResultRow(address=address, count=count) for address, count in items]
