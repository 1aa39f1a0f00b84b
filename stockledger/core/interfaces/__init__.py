"""Core interfaces."""

from stockledger.core.interfaces.snapshot_store import (
    ILocalSnapshotStore,
    IRemoteSnapshotStore,
)

__all__ = [
    "ILocalSnapshotStore",
    "IRemoteSnapshotStore",
]
