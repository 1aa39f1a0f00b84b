"""Remote sync status and backup endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from stockledger.api.dependencies import (
    get_confirm_secret,
    get_export_snapshot_use_case,
    get_import_snapshot_use_case,
    get_role,
    get_sync,
)
from stockledger.application.dto.requests import ImportSnapshotRequest
from stockledger.application.dto.responses import (
    ErrorResponse,
    FlushResponse,
    ImportSnapshotResponse,
    SyncStatusResponse,
)
from stockledger.application.use_cases import ExportSnapshotUseCase, ImportSnapshotUseCase
from stockledger.core.entities.access import Role
from stockledger.core.services import SyncCoordinator
from stockledger.infrastructure.exports import dump_backup, report_filename

router = APIRouter(prefix="/api/sync", tags=["sync"])


@router.get("/status", response_model=SyncStatusResponse)
async def sync_status(
    role: Role = Depends(get_role),
    sync: SyncCoordinator = Depends(get_sync),
) -> SyncStatusResponse:
    """Remote sync status: idle, loading, success or error."""
    return SyncStatusResponse.from_state(sync.state())


@router.post("/flush", response_model=FlushResponse)
async def flush(
    role: Role = Depends(get_role),
    sync: SyncCoordinator = Depends(get_sync),
) -> FlushResponse:
    """Push the pending snapshot now instead of waiting for the debounce."""
    pushed = await sync.flush()
    return FlushResponse(pushed=pushed, sync=SyncStatusResponse.from_state(sync.state()))


@router.get("/snapshot", responses={403: {"model": ErrorResponse}})
async def export_snapshot(
    role: Role = Depends(get_role),
    use_case: ExportSnapshotUseCase = Depends(get_export_snapshot_use_case),
) -> Response:
    """Download the whole collection as a JSON backup."""
    snapshot = await use_case.execute(role)
    return Response(
        content=dump_backup(snapshot),
        media_type="application/json",
        headers={
            "Content-Disposition": f'attachment; filename="{report_filename("inventory_backup", "json")}"',
        },
    )


@router.put(
    "/snapshot",
    response_model=ImportSnapshotResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def import_snapshot(
    request: ImportSnapshotRequest,
    role: Role = Depends(get_role),
    confirm_secret: str = Depends(get_confirm_secret),
    use_case: ImportSnapshotUseCase = Depends(get_import_snapshot_use_case),
) -> ImportSnapshotResponse:
    """Replace every item with the backup's contents. Requires X-Confirm-Secret."""
    snapshot = await use_case.execute(request, role, confirm_secret)
    return use_case.to_response(snapshot)
