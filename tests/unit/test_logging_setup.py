"""Tests for the stderr logging setup."""

import io
import logging

import pytest

from logtally.adapters.logging import (
    LOGGER_NAME,
    configure_logging,
    level_for_verbosity,
)

pytestmark = [
    pytest.mark.tier(1),
    pytest.mark.usefixtures("reset_logtally_logger"),
]


class TestLevelForVerbosity:
    """Tests for level_for_verbosity()."""

    @pytest.mark.parametrize(
        ("verbosity", "level"),
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_maps_counts_to_levels(self, verbosity: int, level: int) -> None:
        """Each -v lowers the threshold one step, down to DEBUG."""
        assert level_for_verbosity(verbosity) == level


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_writes_formatted_records_to_stream(self) -> None:
        """Records from child loggers reach the stream with level and name."""
        stream = io.StringIO()
        configure_logging(1, stream=stream)

        logging.getLogger("logtally.core.pipeline").info("ingested %d lines", 3)

        assert stream.getvalue() == "[INFO] logtally.core.pipeline: ingested 3 lines\n"

    def test_filters_below_level(self) -> None:
        """At default verbosity INFO is suppressed."""
        stream = io.StringIO()
        configure_logging(0, stream=stream)

        logging.getLogger("logtally.cli").info("hidden")
        logging.getLogger("logtally.cli").warning("shown")

        assert stream.getvalue() == "[WARNING] logtally.cli: shown\n"

    def test_reconfiguring_replaces_handler(self) -> None:
        """Calling twice leaves a single handler installed."""
        configure_logging(0, stream=io.StringIO())
        logger = configure_logging(2, stream=io.StringIO())

        assert logger.name == LOGGER_NAME
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
