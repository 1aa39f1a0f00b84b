"""Storage infrastructure implementations."""

from stockledger.infrastructure.storage.sqlite import (
    SQLiteSnapshotStore,
    close_database,
    get_connection,
    get_database,
    get_snapshot_store,
    get_transaction,
)

__all__ = [
    "SQLiteSnapshotStore",
    "get_snapshot_store",
    "get_database",
    "close_database",
    "get_connection",
    "get_transaction",
]
