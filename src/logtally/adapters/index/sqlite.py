"""SQLite log index adapter.

Keeps the address -> timestamps index in a SQLite database through
aiosqlite, for logs too large to hold as Python lists. Insertion order is
the autoincrement row id.
"""

import asyncio
from collections.abc import AsyncIterable
from datetime import datetime

import aiosqlite

from logtally.core.models import Record

_INDEX_SCHEMA = """
CREATE TABLE IF NOT EXISTS entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    address TEXT NOT NULL,
    timestamp TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_entries_address_id ON entries(address, id);
"""

_INSERT_ENTRY = """
INSERT INTO entries (address, timestamp) VALUES (?, ?)
"""

_SELECT_ADDRESSES = """
SELECT DISTINCT address FROM entries ORDER BY address ASC
"""

_SELECT_TIMESTAMPS = """
SELECT timestamp FROM entries WHERE address = ? ORDER BY id ASC
"""

_SELECT_ENTRIES = """
SELECT address, timestamp FROM entries ORDER BY address ASC, id ASC
"""

_COUNT_ENTRIES = """
SELECT COUNT(*) FROM entries
"""


def _encode_timestamp(timestamp: datetime) -> str:
    return timestamp.isoformat(sep=" ")


def _decode_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value)


class SQLiteLogIndex:
    """SQLite implementation of LogIndexPort.

    A single persistent connection is opened on first use and kept until
    close(). Inserts are committed lazily, right before the next read, so
    building the index is one transaction rather than one per line.

    Args:
        db_path: Database file path, or ``":memory:"``.
    """

    def __init__(self, db_path: str = ":memory:") -> None:
        self._db_path = db_path
        self._conn: aiosqlite.Connection | None = None
        self._init_lock: asyncio.Lock | None = None
        self._dirty = False

    def _get_lock(self) -> asyncio.Lock:
        """Get or create the initialization lock (lazy to avoid event loop issues)."""
        if self._init_lock is None:
            self._init_lock = asyncio.Lock()
        return self._init_lock

    async def _get_connection(self) -> aiosqlite.Connection:
        """Open the connection and create the schema once."""
        if self._conn is not None:
            return self._conn
        async with self._get_lock():
            if self._conn is None:
                conn = await aiosqlite.connect(self._db_path)
                if self._db_path != ":memory:":
                    await conn.execute("PRAGMA journal_mode=WAL")
                await conn.executescript(_INDEX_SCHEMA)
                self._conn = conn
        return self._conn

    async def _flush(self) -> aiosqlite.Connection:
        """Commit pending inserts and return the connection."""
        db = await self._get_connection()
        if self._dirty:
            await db.commit()
            self._dirty = False
        return db

    async def insert(self, record: Record) -> None:
        """Append the record's timestamp under its address."""
        db = await self._get_connection()
        await db.execute(
            _INSERT_ENTRY, (record.address, _encode_timestamp(record.timestamp))
        )
        self._dirty = True

    async def addresses(self) -> AsyncIterable[str]:
        """Iterate over the distinct addresses in ordinal order."""
        db = await self._flush()
        async with db.execute(_SELECT_ADDRESSES) as cursor:
            async for row in cursor:
                yield row[0]

    async def timestamps(self, address: str) -> AsyncIterable[datetime]:
        """Iterate over one address's timestamps in insertion order."""
        db = await self._flush()
        async with db.execute(_SELECT_TIMESTAMPS, (address,)) as cursor:
            async for row in cursor:
                yield _decode_timestamp(row[0])

    async def items(self) -> AsyncIterable[tuple[str, list[datetime]]]:
        """Iterate over ``(address, timestamps)`` pairs, one address at a time."""
        db = await self._flush()
        current: str | None = None
        timestamps: list[datetime] = []
        async with db.execute(_SELECT_ENTRIES) as cursor:
            async for address, value in cursor:
                if address != current:
                    if current is not None:
                        yield current, timestamps
                    current = address
                    timestamps = []
                timestamps.append(_decode_timestamp(value))
        if current is not None:
            yield current, timestamps

    async def count(self) -> int:
        """Return the total number of indexed timestamps."""
        db = await self._flush()
        async with db.execute(_COUNT_ENTRIES) as cursor:
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def close(self) -> None:
        """Commit and close the connection."""
        if self._conn is not None:
            await self._flush()
            await self._conn.close()
            self._conn = None
