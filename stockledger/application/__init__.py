"""
Application layer - Use cases, DTOs, and service factories.

Use cases are the only entry point for API handlers that change the
inventory.
"""

from stockledger.application.services import (
    get_access_control,
    get_inventory_book,
    get_sync_coordinator,
    reset_services,
)

__all__ = [
    "get_inventory_book",
    "get_sync_coordinator",
    "get_access_control",
    "reset_services",
]
