"""SQLite implementation of the local snapshot cache."""

import json
from datetime import UTC, datetime

import aiosqlite
from pydantic import ValidationError as PydanticValidationError

from stockledger.config import get_logger
from stockledger.core.entities.inventory import InventorySnapshot
from stockledger.core.exceptions import DatabaseError, StorageError
from stockledger.core.interfaces.snapshot_store import ILocalSnapshotStore
from stockledger.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)


class SQLiteSnapshotStore(ILocalSnapshotStore):
    """Stores the whole item collection as one JSON row per key."""

    def __init__(self, key: str = "inventory_system_data_v2"):
        self.key = key

    async def load_local(self) -> InventorySnapshot | None:
        """Load the cached snapshot, or None if nothing was saved yet."""
        try:
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT payload FROM snapshots WHERE key = ?", (self.key,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise DatabaseError("load_local", str(e)) from e

        if row is None:
            return None

        try:
            snapshot = InventorySnapshot.model_validate_json(row["payload"])
        except PydanticValidationError as e:
            raise StorageError(
                f"Local snapshot '{self.key}' is unreadable",
                code="CORRUPT_SNAPSHOT",
                details={"key": self.key, "errors": e.error_count()},
            ) from e

        logger.debug("local_snapshot_loaded", key=self.key, items=len(snapshot.items))
        return snapshot

    async def save_local(self, snapshot: InventorySnapshot) -> None:
        """Replace the cached snapshot."""
        payload = json.dumps(snapshot.to_wire(), ensure_ascii=False)
        saved_at = (snapshot.updated_at or datetime.now(UTC)).isoformat()
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO snapshots (key, payload, item_count, updated_at)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        payload = excluded.payload,
                        item_count = excluded.item_count,
                        updated_at = excluded.updated_at
                    """,
                    (self.key, payload, len(snapshot.items), saved_at),
                )
        except aiosqlite.Error as e:
            raise DatabaseError("save_local", str(e)) from e

        logger.debug("local_snapshot_saved", key=self.key, items=len(snapshot.items))
