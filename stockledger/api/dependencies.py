"""
Dependency injection container for FastAPI.

Provides service instances and the caller's role to route handlers.
"""

from fastapi import Depends, Header, HTTPException, status

from stockledger.application.services import (
    get_access_control,
    get_inventory_book,
    get_sync_coordinator,
)
from stockledger.application.use_cases import (
    CreateItemUseCase,
    DeleteItemUseCase,
    DeleteTransactionUseCase,
    ExportSnapshotUseCase,
    GetItemUseCase,
    ImportSnapshotUseCase,
    ListItemsUseCase,
    RecordMovementUseCase,
    UpdateItemUseCase,
    UpdateTransactionUseCase,
)
from stockledger.core.entities.access import Role
from stockledger.core.exceptions import AuthorizationError
from stockledger.core.services import AccessControl, InventoryBook, SyncCoordinator
from stockledger.infrastructure.storage.sqlite.migrations import get_migration_status


# Service dependencies
def get_book() -> InventoryBook:
    return get_inventory_book()


def get_sync() -> SyncCoordinator:
    return get_sync_coordinator()


def get_access() -> AccessControl:
    return get_access_control()


async def get_storage_status() -> dict:
    """Applied and pending migrations of the local cache."""
    return await get_migration_status()


# Caller identity
def get_role(
    x_access_secret: str | None = Header(default=None, description="Login secret"),
    access: AccessControl = Depends(get_access),
) -> Role:
    """Resolve the caller's role from the X-Access-Secret header."""
    if not x_access_secret:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Access-Secret header is required",
        )
    return access.authenticate(x_access_secret)


def get_confirm_secret(
    x_confirm_secret: str | None = Header(
        default=None,
        description="Role secret re-entered to confirm a protected action",
    ),
) -> str:
    """Secret re-entered for a protected action."""
    if not x_confirm_secret:
        raise AuthorizationError("confirmation secret required")
    return x_confirm_secret


# Use case dependencies
def get_list_items_use_case() -> ListItemsUseCase:
    return ListItemsUseCase()


def get_get_item_use_case() -> GetItemUseCase:
    return GetItemUseCase()


def get_create_item_use_case() -> CreateItemUseCase:
    return CreateItemUseCase()


def get_update_item_use_case() -> UpdateItemUseCase:
    return UpdateItemUseCase()


def get_delete_item_use_case() -> DeleteItemUseCase:
    return DeleteItemUseCase()


def get_record_movement_use_case() -> RecordMovementUseCase:
    return RecordMovementUseCase()


def get_update_transaction_use_case() -> UpdateTransactionUseCase:
    return UpdateTransactionUseCase()


def get_delete_transaction_use_case() -> DeleteTransactionUseCase:
    return DeleteTransactionUseCase()


def get_export_snapshot_use_case() -> ExportSnapshotUseCase:
    return ExportSnapshotUseCase()


def get_import_snapshot_use_case() -> ImportSnapshotUseCase:
    return ImportSnapshotUseCase()
