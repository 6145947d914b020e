"""Result writer: serializes result rows to the output file."""

import logging
from collections.abc import Iterable
from pathlib import Path

from logtally.core.encoding import OutputFormat, encode
from logtally.core.models import ResultRow

logger = logging.getLogger(__name__)


def write_rows(
    path: str | Path,
    rows: Iterable[ResultRow],
    fmt: OutputFormat = "text",
) -> int:
    """Write rows to ``path``, replacing any existing content.

    The file is UTF-8 encoded. No rows produce an empty file.

    Args:
        path: Destination file.
        rows: Rows in the order they should appear.
        fmt: ``"text"`` for ``<address>:<count>`` lines or ``"ndjson"``.

    Returns:
        Number of rows written.

    Raises:
        OSError: If the file cannot be written.
    """
    rows = list(rows)
    Path(path).write_text(encode(rows, fmt), encoding="utf-8")
    logger.info("wrote %d rows to %s", len(rows), path)
    return len(rows)
