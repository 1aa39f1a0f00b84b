"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from stockledger import __version__
from stockledger.api.dependencies import get_book, get_storage_status, get_sync
from stockledger.application.dto.responses import (
    HealthResponse,
    StorageStatusResponse,
    SyncStatusResponse,
)
from stockledger.core.entities.sync import SyncStatus
from stockledger.core.services import InventoryBook, SyncCoordinator

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(
    book: InventoryBook = Depends(get_book),
    sync: SyncCoordinator = Depends(get_sync),
    storage_status: dict = Depends(get_storage_status),
) -> HealthResponse:
    """
    Basic health check.

    Reports "degraded" while the last remote sync attempt failed or the
    local cache has unapplied migrations; local operation continues
    regardless.
    """
    state = sync.state()
    storage = StorageStatusResponse.model_validate(storage_status)
    degraded = state.status == SyncStatus.ERROR or bool(storage.pending_migrations)
    return HealthResponse(
        status="degraded" if degraded else "healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        items=len(book.items),
        sync=SyncStatusResponse.from_state(state),
        storage=storage,
    )
