"""Core domain entities."""

from stockledger.core.entities.access import (
    ActionState,
    AuthorizationDecision,
    ProtectedActionKind,
    Role,
)
from stockledger.core.entities.inventory import (
    InventorySnapshot,
    Item,
    ItemType,
    Transaction,
    TransactionType,
)
from stockledger.core.entities.sync import SnapshotSource, SyncState, SyncStatus

__all__ = [
    # Inventory entities
    "Item",
    "ItemType",
    "Transaction",
    "TransactionType",
    "InventorySnapshot",
    # Access entities
    "Role",
    "ProtectedActionKind",
    "ActionState",
    "AuthorizationDecision",
    # Sync entities
    "SyncStatus",
    "SyncState",
    "SnapshotSource",
]
