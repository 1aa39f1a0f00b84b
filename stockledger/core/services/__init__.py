"""Core domain services."""

from stockledger.core.services.access_control import (
    AccessControl,
    ProtectedAction,
    can_access_category,
    ensure_category_access,
)
from stockledger.core.services.inventory_book import InventoryBook
from stockledger.core.services.ledger import derive_stock, sorted_history, suggest_next_code
from stockledger.core.services.serial_allocator import (
    allocate_serials,
    build_serial_registry,
    expand_serial_range,
    is_duplicate_serial,
    suggest_next_serial,
)
from stockledger.core.services.sync_coordinator import SyncCoordinator

__all__ = [
    # Ledger
    "derive_stock",
    "sorted_history",
    "suggest_next_code",
    "InventoryBook",
    # Serials
    "suggest_next_serial",
    "expand_serial_range",
    "is_duplicate_serial",
    "build_serial_registry",
    "allocate_serials",
    # Access
    "AccessControl",
    "ProtectedAction",
    "can_access_category",
    "ensure_category_access",
    # Sync
    "SyncCoordinator",
]
