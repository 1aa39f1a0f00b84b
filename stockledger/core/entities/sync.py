"""Synchronization state entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class SyncStatus(str, Enum):
    """Remote sync status. Reported to callers, never gates mutations."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class SnapshotSource(str, Enum):
    """Where the startup collection came from."""

    REMOTE = "remote"
    LOCAL = "local"
    EMPTY = "empty"


class SyncState(BaseModel):
    """Point-in-time view of the reconciliation layer."""

    status: SyncStatus = SyncStatus.IDLE
    loaded_from: SnapshotSource | None = None
    last_error: str | None = None
    last_pushed_at: datetime | None = None
    push_pending: bool = False
