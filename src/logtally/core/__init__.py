"""Core domain: records, line grammar, index port and tally logic."""

from logtally.core.errors import (
    ConfigError,
    InputNotFoundError,
    LogTallyError,
    MalformedLineError,
)
from logtally.core.filtering import (
    count_in_window,
    filter_counts,
    is_in_address_range,
    tally,
    to_rows,
)
from logtally.core.models import FilterCriteria, IngestStats, Record, ResultRow
from logtally.core.parsing import iter_records, parse_line, parse_record
from logtally.core.ports import LogIndexPort

__all__ = [
    "ConfigError",
    "FilterCriteria",
    "IngestStats",
    "InputNotFoundError",
    "LogIndexPort",
    "LogTallyError",
    "MalformedLineError",
    "Record",
    "ResultRow",
    "count_in_window",
    "filter_counts",
    "is_in_address_range",
    "iter_records",
    "parse_line",
    "parse_record",
    "tally",
    "to_rows",
]
