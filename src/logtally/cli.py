"""Command line entry point for logtally.

Reads an access log, keeps the addresses inside an ordinal address range,
counts each one's accesses inside a date window and writes
``<address>:<count>`` lines to the output file.
"""

import argparse
import logging
import sys
import tempfile
from pathlib import Path
from typing import Any

from logtally import __version__
from logtally.adapters.async_utils import _run_sync as run_sync
from logtally.adapters.index import create_index
from logtally.adapters.logging import configure_logging
from logtally.adapters.sources import iter_file_lines
from logtally.adapters.writer import write_rows
from logtally.config import (
    INDEX_BACKENDS,
    OUTPUT_FORMATS,
    SORT_KEYS,
    Settings,
    check_input,
    config_path_from_env,
    env_settings,
    load_config_file,
    resolve_settings,
)
from logtally.core.errors import ConfigError
from logtally.core.filtering import to_rows
from logtally.core.models import IngestStats, ResultRow
from logtally.core.pipeline import run_pipeline
from logtally.core.ports import LogIndexPort

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Define the command line options.

    Every option defaults to None so that unset options can fall back to
    the environment and the config file.
    """
    parser = argparse.ArgumentParser(
        prog="logtally",
        description="Count accesses per address within an address range and date window.",
    )
    parser.add_argument("-f", "--file-log", dest="file_log", help="Path to the log file.")
    parser.add_argument(
        "-o", "--file-output", dest="file_output", help="Path to the output file."
    )
    parser.add_argument(
        "--address-start",
        dest="address_start",
        help="Inclusive lower bound of the address range (default: empty).",
    )
    parser.add_argument(
        "--address-mask",
        dest="address_mask",
        help=(
            "Inclusive upper bound of the address range, compared as a string "
            "(default: empty, which matches no non-empty address)."
        ),
    )
    parser.add_argument(
        "--time-start", dest="time_start", help="First day of the window, dd.MM.yyyy."
    )
    parser.add_argument(
        "--time-end", dest="time_end", help="Last day of the window, dd.MM.yyyy."
    )
    parser.add_argument(
        "--format",
        dest="format",
        choices=OUTPUT_FORMATS,
        help="Output encoding (default: text).",
    )
    parser.add_argument(
        "--sort-by",
        dest="sort_by",
        choices=SORT_KEYS,
        help="Output order (default: address).",
    )
    parser.add_argument(
        "--index",
        dest="index",
        choices=INDEX_BACKENDS,
        help="Index backend; sqlite keeps the index in a scratch database (default: memory).",
    )
    parser.add_argument(
        "--config", type=Path, help="JSON config file (overridden by env and CLI)."
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="count",
        help="Show progress on stderr; repeat for per-line diagnostics.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _cli_values(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "file_log": args.file_log,
        "file_output": args.file_output,
        "address_start": args.address_start,
        "address_mask": args.address_mask,
        "time_start": args.time_start,
        "time_end": args.time_end,
        "format": args.format,
        "sort_by": args.sort_by,
        "index": args.index,
        "verbose": args.verbose,
    }


def load_settings(argv: list[str] | None = None) -> Settings:
    """Parse ``argv`` and resolve it against the environment and config file.

    Raises:
        ConfigError: If the resulting configuration is invalid.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose or 0)

    config_path = args.config or config_path_from_env()
    config = load_config_file(config_path) if config_path else {}
    return resolve_settings(_cli_values(args), env_settings(), config)


async def _tally_file(
    settings: Settings, index: LogIndexPort
) -> tuple[dict[str, int], IngestStats]:
    try:
        return await run_pipeline(
            iter_file_lines(settings.file_log), index, settings.criteria
        )
    finally:
        await index.close()


async def execute(settings: Settings) -> tuple[list[ResultRow], IngestStats]:
    """Ingest the input log and return the ordered rows and ingest statistics."""
    if settings.index == "sqlite":
        with tempfile.TemporaryDirectory(prefix="logtally-") as tmp:
            index = create_index("sqlite", str(Path(tmp) / "index.db"))
            counts, stats = await _tally_file(settings, index)
    else:
        counts, stats = await _tally_file(settings, create_index("memory"))
    return to_rows(counts, settings.sort_by), stats


def main(argv: list[str] | None = None) -> int:
    """Run logtally and return the process exit status."""
    try:
        settings = load_settings(argv)
        configure_logging(settings.verbosity)
        check_input(settings.file_log)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    logger.info(
        "tallying %s: addresses [%r, %r], window [%s, %s]",
        settings.file_log,
        settings.criteria.address_start,
        settings.criteria.address_mask,
        settings.criteria.time_start,
        settings.criteria.time_end,
    )

    try:
        rows, stats = run_sync(execute(settings))
        write_rows(settings.file_output, rows, settings.output_format)
    except OSError as exc:
        logger.error("tally failed: %s", exc)
        return EXIT_IO_ERROR

    print(
        f"{len(rows)} addresses from {stats.records} records "
        f"({stats.skipped} lines skipped) written to '{settings.file_output}'."
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
