"""Line grammar for ``<address>:<yyyy-MM-dd HH:mm:ss>`` access logs."""

import logging
import re
from collections.abc import Iterable, Iterator
from datetime import datetime

from logtally.core.errors import MalformedLineError
from logtally.core.models import Record

logger = logging.getLogger(__name__)

SEPARATOR = ":"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# strptime alone accepts unpadded fields ("2024-1-5 7:00:00"), so the
# shape is checked first.
TIMESTAMP_RE = re.compile(
    r"""
    ^
    \d{4}-\d{2}-\d{2}   # yyyy-MM-dd
    \x20
    \d{2}:\d{2}:\d{2}   # HH:mm:ss
    $
    """,
    re.VERBOSE | re.ASCII,
)


def parse_timestamp(text: str) -> datetime:
    """Parse an exact ``yyyy-MM-dd HH:mm:ss`` timestamp.

    Args:
        text: Timestamp text, already stripped.

    Returns:
        Naive datetime with second precision.

    Raises:
        ValueError: If the text has another shape or is not a real
            calendar date-time.
    """
    if not TIMESTAMP_RE.match(text):
        raise ValueError(f"timestamp does not match yyyy-MM-dd HH:mm:ss: {text!r}")
    return datetime.strptime(text, TIMESTAMP_FORMAT)


def parse_record(line: str) -> Record:
    """Parse one log line into a Record.

    The line splits at its first colon. The left part, stripped, is the
    address. The right part, stripped, must be a timestamp in the exact
    ``yyyy-MM-dd HH:mm:ss`` form. An address can therefore never contain a
    colon, and any extra colon makes the right part fail the pattern.

    Raises:
        MalformedLineError: If the line does not follow the grammar.
    """
    address, sep, rest = line.partition(SEPARATOR)
    if not sep:
        raise MalformedLineError(line, "missing address separator")
    try:
        timestamp = parse_timestamp(rest.strip())
    except ValueError as exc:
        raise MalformedLineError(line, str(exc)) from exc
    return Record(address=address.strip(), timestamp=timestamp)


def parse_line(line: str, lineno: int | None = None) -> Record | None:
    """Parse one log line, returning None when it is malformed.

    Args:
        line: Raw line, trailing newline allowed.
        lineno: Optional 1-based position, only used in the diagnostic.
    """
    try:
        return parse_record(line)
    except MalformedLineError as exc:
        logger.debug("skipping line %s: %s", lineno if lineno is not None else "?", exc)
        return None


def iter_records(lines: Iterable[str]) -> Iterator[Record]:
    """Yield a Record for every well-formed line, skipping the rest."""
    for lineno, line in enumerate(lines, start=1):
        record = parse_line(line, lineno)
        if record is not None:
            yield record
