"""Backup export and restore use cases."""

from stockledger.application.dto.requests import ImportSnapshotRequest
from stockledger.application.dto.responses import ImportSnapshotResponse
from stockledger.application.use_cases.base import InventoryUseCase
from stockledger.config import get_logger
from stockledger.core.entities.access import ProtectedActionKind, Role
from stockledger.core.entities.inventory import InventorySnapshot
from stockledger.core.exceptions import AuthorizationError
from stockledger.infrastructure.exports import export_backup, parse_backup

logger = get_logger(__name__)


def _require_admin(role: Role, action: str) -> None:
    if role != Role.ADMIN:
        raise AuthorizationError("backups cover all categories", action=action, role=role.value)


class ExportSnapshotUseCase(InventoryUseCase):
    """Export the whole collection as a backup document."""

    async def execute(self, role: Role) -> InventorySnapshot:
        _require_admin(role, "export_snapshot")
        snapshot = export_backup(self._get_book().items)
        logger.info("snapshot_exported", items=len(snapshot.items))
        return snapshot


class ImportSnapshotUseCase(InventoryUseCase):
    """
    Replace the whole collection from a backup document.

    The document is validated before the secret is checked; once the
    secret matches, every current item is overwritten.
    """

    async def execute(
        self,
        request: ImportSnapshotRequest,
        role: Role,
        confirm_secret: str,
    ) -> InventorySnapshot:
        _require_admin(role, ProtectedActionKind.IMPORT_SNAPSHOT.value)
        snapshot = parse_backup(request.document())

        book = self._get_book()
        self._confirm(
            role,
            ProtectedActionKind.IMPORT_SNAPSHOT,
            None,
            confirm_secret,
            lambda: book.replace_all(snapshot.items),
        )
        await self._committed()
        logger.info("snapshot_imported", items=len(snapshot.items))
        return snapshot

    def to_response(self, snapshot: InventorySnapshot) -> ImportSnapshotResponse:
        return ImportSnapshotResponse(
            items=len(snapshot.items),
            counts=self._get_book().counts(),
        )
