"""Remote snapshot store implementations."""

from stockledger.config import get_settings
from stockledger.infrastructure.remote.http_snapshot_store import HttpSnapshotStore

_remote_store: HttpSnapshotStore | None = None


def get_remote_store() -> HttpSnapshotStore | None:
    """Get singleton remote store, or None when remote sync is disabled."""
    global _remote_store
    if not get_settings().remote.enabled:
        return None
    if _remote_store is None:
        _remote_store = HttpSnapshotStore.from_settings()
    return _remote_store


def reset_remote_store() -> None:
    """Reset the singleton (for testing)."""
    global _remote_store
    _remote_store = None


__all__ = ["HttpSnapshotStore", "get_remote_store", "reset_remote_store"]
