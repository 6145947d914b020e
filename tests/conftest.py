"""Shared test fixtures for all test modules."""

import logging
import os
from collections.abc import AsyncGenerator, Callable, Generator
from datetime import datetime
from pathlib import Path

import pytest

from logtally.adapters.index.in_memory import InMemoryLogIndex
from logtally.adapters.index.sqlite import SQLiteLogIndex
from logtally.core.models import FilterCriteria

SAMPLE_LINES = [
    "10.0.0.1: 2024-01-01 10:00:00\n",
    "10.0.0.1: 2024-01-02 10:00:00\n",
    "10.0.0.9: 2024-01-01 10:00:00\n",
]


@pytest.fixture
def sample_lines() -> list[str]:
    """The three-line log used by most end-to-end tests."""
    return list(SAMPLE_LINES)


@pytest.fixture
def write_log(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture that writes lines to a log file and returns its path."""

    def _write(lines: list[str], name: str = "access.log") -> Path:
        path = tmp_path / name
        path.write_text("".join(lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    """Destination for result files."""
    return tmp_path / "out.txt"


@pytest.fixture
def day_criteria() -> Callable[..., FilterCriteria]:
    """Factory for criteria covering whole days, end day inclusive."""

    def _criteria(
        start: str = "",
        mask: str = "",
        first_day: datetime = datetime(2024, 1, 1),
        last_day: datetime = datetime(2024, 1, 1),
    ) -> FilterCriteria:
        return FilterCriteria(
            address_start=start,
            address_mask=mask,
            time_start=first_day,
            time_end=last_day.replace(hour=23, minute=59, second=59),
        )

    return _criteria


@pytest.fixture
def memory_index() -> InMemoryLogIndex:
    """Empty in-memory index."""
    return InMemoryLogIndex()


@pytest.fixture
async def sqlite_index() -> AsyncGenerator[SQLiteLogIndex, None]:
    """In-memory SQLite index with proper cleanup."""
    index = SQLiteLogIndex(":memory:")
    yield index
    await index.close()


@pytest.fixture
def reset_logtally_logger() -> Generator[None, None, None]:
    """Undo configure_logging() so later caplog tests keep seeing logtally records.

    Used by every module whose tests call configure_logging() or cli.main().
    """
    yield
    logger = logging.getLogger("logtally")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every LOGTALLY_* variable so env resolution starts empty."""
    for key in list(os.environ):
        if key.startswith("LOGTALLY_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
