"""SQLite storage implementations."""

from stockledger.config import get_settings
from stockledger.infrastructure.storage.sqlite.connection import (
    SnapshotDatabase,
    close_database,
    get_connection,
    get_database,
    get_transaction,
)
from stockledger.infrastructure.storage.sqlite.snapshot_store import SQLiteSnapshotStore

# Singleton instance
_snapshot_store: SQLiteSnapshotStore | None = None


def get_snapshot_store() -> SQLiteSnapshotStore:
    """Get singleton snapshot store instance."""
    global _snapshot_store
    if _snapshot_store is None:
        _snapshot_store = SQLiteSnapshotStore(key=get_settings().storage.snapshot_key)
    return _snapshot_store


def reset_snapshot_store() -> None:
    """Reset the singleton (for testing)."""
    global _snapshot_store
    _snapshot_store = None


__all__ = [
    # Connection
    "SnapshotDatabase",
    "get_database",
    "close_database",
    "get_connection",
    "get_transaction",
    # Stores
    "SQLiteSnapshotStore",
    "get_snapshot_store",
    "reset_snapshot_store",
]
