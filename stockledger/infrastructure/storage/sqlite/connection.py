"""
Async SQLite access for the local snapshot cache.

The cache holds one row per snapshot key and is written by a single sync
coordinator, so one aiosqlite connection serialized by a lock serves it.
Every save replaces the whole collection; commits run with
synchronous=FULL so an acknowledged save survives a power loss.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from stockledger.config import get_logger, get_settings

logger = get_logger(__name__)


class SnapshotDatabase:
    """Lazily opened, lock-serialized connection to the cache file."""

    def __init__(self, db_path: Path, busy_timeout: int = 30000):
        self.db_path = db_path
        self.busy_timeout = busy_timeout

        self._conn: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    async def _ensure_open(self) -> aiosqlite.Connection:
        if self._conn is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = await aiosqlite.connect(self.db_path)
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA synchronous=FULL")
            await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
            conn.row_factory = aiosqlite.Row
            self._conn = conn
            logger.info("snapshot_db_opened", db_path=str(self.db_path))
        return self._conn

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Hold the connection exclusively for the block.

        Usage:
            async with db.connection() as conn:
                await conn.execute(...)
        """
        async with self._lock:
            yield await self._ensure_open()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Hold the connection; commit on success, roll back on error."""
        async with self.connection() as conn:
            try:
                yield conn
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise

    async def close(self) -> None:
        async with self._lock:
            if self._conn is None:
                return
            await self._conn.close()
            self._conn = None
            logger.info("snapshot_db_closed", db_path=str(self.db_path))


# Global cache database
_database: SnapshotDatabase | None = None


def get_database() -> SnapshotDatabase:
    """Get or create the global cache database."""
    global _database
    if _database is None:
        settings = get_settings()
        _database = SnapshotDatabase(
            db_path=settings.storage.db_path,
            busy_timeout=settings.storage.busy_timeout,
        )
    return _database


async def close_database() -> None:
    """Close the global cache database."""
    global _database
    if _database is not None:
        await _database.close()
        _database = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    async with get_database().connection() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    async with get_database().transaction() as conn:
        yield conn
