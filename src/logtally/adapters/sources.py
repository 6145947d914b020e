"""Async line sources feeding the ingestion pipeline.

Blocking reads are pushed to a worker thread in batches so the event loop
is never blocked by file I/O.
"""

import asyncio
from collections.abc import AsyncIterator, Iterable
from pathlib import Path
from typing import TextIO

# Approximate number of characters fetched per worker-thread hop
DEFAULT_BATCH_HINT = 64 * 1024


async def iter_stream_lines(
    stream: TextIO, batch_hint: int = DEFAULT_BATCH_HINT
) -> AsyncIterator[str]:
    """Yield lines from an already-open text stream until it is exhausted.

    Args:
        stream: Readable text stream. Never seeked, never closed here.
        batch_hint: Size hint passed to ``readlines`` for each batch.
    """
    while True:
        batch = await asyncio.to_thread(stream.readlines, batch_hint)
        if not batch:
            return
        for line in batch:
            yield line


async def iter_file_lines(
    path: str | Path,
    encoding: str = "utf-8",
    batch_hint: int = DEFAULT_BATCH_HINT,
) -> AsyncIterator[str]:
    """Yield lines from a text file.

    Undecodable bytes are replaced rather than aborting the read.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    stream = await asyncio.to_thread(
        open, path, encoding=encoding, errors="replace"
    )
    try:
        async for line in iter_stream_lines(stream, batch_hint):
            yield line
    finally:
        stream.close()


async def iter_lines(lines: Iterable[str]) -> AsyncIterator[str]:
    """Adapt an in-memory iterable of lines to the async source interface."""
    for line in lines:
        yield line
