"""Tests for port interfaces."""

from collections.abc import AsyncIterable
from datetime import datetime

import pytest

from logtally.core.models import Record
from logtally.core.ports import LogIndexPort

pytestmark = [pytest.mark.core, pytest.mark.tier(0)]


class TestLogIndexPort:
    """Tests for LogIndexPort protocol."""

    @pytest.mark.parametrize(
        "method", ["insert", "addresses", "timestamps", "items", "close"]
    )
    def test_protocol_defines_method(self, method: str) -> None:
        """LogIndexPort must define every index operation."""
        assert hasattr(LogIndexPort, method)

    def test_class_implementing_protocol_is_recognized(self) -> None:
        """A class with all index methods satisfies LogIndexPort."""

        class FakeIndex:
            async def insert(self, record: Record) -> None:
                pass

            async def addresses(self) -> AsyncIterable[str]:
                yield ""

            async def timestamps(self, address: str) -> AsyncIterable[datetime]:
                yield datetime.min

            async def items(self) -> AsyncIterable[tuple[str, list[datetime]]]:
                yield "", []

            async def close(self) -> None:
                pass

        index: LogIndexPort = FakeIndex()
        assert isinstance(index, LogIndexPort)

    def test_class_missing_insert_is_rejected(self) -> None:
        """A class without insert does not satisfy LogIndexPort."""

        class ReadOnly:
            async def addresses(self) -> AsyncIterable[str]:
                yield ""

        assert not isinstance(ReadOnly(), LogIndexPort)
