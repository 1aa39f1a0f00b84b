"""
Service factory functions for dependency injection.

This module wires infrastructure implementations to core services.
Use cases should import from here.
"""

from stockledger.config import get_logger, get_settings
from stockledger.core.entities.sync import SnapshotSource
from stockledger.core.services import AccessControl, InventoryBook, SyncCoordinator

logger = get_logger(__name__)

# Singleton service instances
_inventory_book: InventoryBook | None = None
_sync_coordinator: SyncCoordinator | None = None
_access_control: AccessControl | None = None


def get_inventory_book() -> InventoryBook:
    """Get or create the process-wide inventory book."""
    global _inventory_book
    if _inventory_book is None:
        _inventory_book = InventoryBook(settings=get_settings().ledger)
    return _inventory_book


def get_sync_coordinator() -> SyncCoordinator:
    """
    Get or create the sync coordinator.

    Uses the SQLite snapshot cache as the local store and, unless remote
    sync is disabled, the HTTP snapshot store as the remote.
    """
    global _sync_coordinator
    if _sync_coordinator is None:
        # Lazy import infrastructure to avoid circular imports
        from stockledger.infrastructure.remote import get_remote_store
        from stockledger.infrastructure.storage.sqlite import get_snapshot_store

        _sync_coordinator = SyncCoordinator(
            book=get_inventory_book(),
            local_store=get_snapshot_store(),
            remote_store=get_remote_store(),
            debounce_seconds=get_settings().sync.debounce_seconds,
        )
    return _sync_coordinator


def get_access_control() -> AccessControl:
    """Get or create the access gate from configured secrets."""
    global _access_control
    if _access_control is None:
        access = get_settings().access
        _access_control = AccessControl(
            admin_secret=access.admin_secret.get_secret_value(),
            product_only_secret=access.product_only_secret.get_secret_value(),
        )
    return _access_control


async def start_services() -> SnapshotSource:
    """Apply migrations and load the startup collection."""
    from stockledger.infrastructure.storage.sqlite.migrations import run_migrations

    await run_migrations()
    source = await get_sync_coordinator().load()
    logger.info("services_started", source=source.value, items=len(get_inventory_book().items))
    return source


async def stop_services() -> None:
    """Flush pending sync work and release storage."""
    from stockledger.infrastructure.storage.sqlite import close_database

    if _sync_coordinator is not None:
        await _sync_coordinator.shutdown(flush=get_settings().sync.flush_on_shutdown)
    await close_database()
    logger.info("services_stopped")


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _inventory_book
    global _sync_coordinator
    global _access_control

    _inventory_book = None
    _sync_coordinator = None
    _access_control = None


__all__ = [
    # Factory functions
    "get_inventory_book",
    "get_sync_coordinator",
    "get_access_control",
    # Lifecycle
    "start_services",
    "stop_services",
    # Reset
    "reset_services",
]
