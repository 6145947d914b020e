"""Ingest lines into an index and tally it.

Pipeline:
  raw lines
    -> parse_line (malformed lines skipped)
      -> LogIndexPort.insert
        -> tally (address range, then time window)
"""

import logging
from collections.abc import AsyncIterable

from logtally.core.filtering import tally
from logtally.core.models import FilterCriteria, IngestStats
from logtally.core.parsing import parse_line
from logtally.core.ports import LogIndexPort

logger = logging.getLogger(__name__)


async def build_index(lines: AsyncIterable[str], index: LogIndexPort) -> IngestStats:
    """Fold every well-formed line into the index, one at a time.

    Args:
        lines: Async source of raw lines, consumed until exhausted.
        index: Index to insert into.

    Returns:
        IngestStats for the lines consumed.
    """
    stats = IngestStats()
    async for line in lines:
        stats.lines += 1
        record = parse_line(line, stats.lines)
        if record is None:
            stats.skipped += 1
            continue
        await index.insert(record)
        stats.records += 1

    logger.info(
        "ingested %d lines: %d records, %d skipped",
        stats.lines,
        stats.records,
        stats.skipped,
    )
    return stats


async def run_pipeline(
    lines: AsyncIterable[str],
    index: LogIndexPort,
    criteria: FilterCriteria,
) -> tuple[dict[str, int], IngestStats]:
    """Build the index from ``lines`` and tally it against ``criteria``.

    Returns:
        The address to count mapping and the ingest statistics.
    """
    stats = await build_index(lines, index)
    counts = await tally(index, criteria)
    logger.info("%d addresses selected", len(counts))
    return counts, stats
