"""
Abstract interfaces for snapshot persistence.

The reconciliation layer treats both stores as opaque capabilities:
the local store is a cache that may be absent, the remote store is a
plain overwrite target with no versioning.
"""

from abc import ABC, abstractmethod

from stockledger.core.entities.inventory import InventorySnapshot


class ILocalSnapshotStore(ABC):
    """Interface for the local snapshot cache."""

    @abstractmethod
    async def load_local(self) -> InventorySnapshot | None:
        """Load the most recent local snapshot, or None if absent."""
        pass

    @abstractmethod
    async def save_local(self, snapshot: InventorySnapshot) -> None:
        """Replace the local snapshot."""
        pass


class IRemoteSnapshotStore(ABC):
    """Interface for the remote snapshot store."""

    @abstractmethod
    async def fetch_snapshot(self) -> InventorySnapshot | None:
        """
        Fetch the remote snapshot.

        Returns None when the store holds no data.
        Raises SyncFailure on transport or protocol errors.
        """
        pass

    @abstractmethod
    async def push_snapshot(self, snapshot: InventorySnapshot) -> None:
        """
        Overwrite the remote snapshot with the full collection.

        Raises SyncFailure on transport or protocol errors.
        """
        pass
