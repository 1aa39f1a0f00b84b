"""Shared wiring for inventory use cases."""

from collections.abc import Callable
from typing import TypeVar

from stockledger.core.entities.access import ProtectedActionKind, Role
from stockledger.core.services import (
    AccessControl,
    InventoryBook,
    ProtectedAction,
    SyncCoordinator,
)

T = TypeVar("T")


class InventoryUseCase:
    """
    Base for use cases that read or change the inventory book.

    Dependencies default to the process singletons and can be injected
    for tests.
    """

    def __init__(
        self,
        book: InventoryBook | None = None,
        sync: SyncCoordinator | None = None,
        access: AccessControl | None = None,
    ):
        self._book = book
        self._sync = sync
        self._access = access

    def _get_book(self) -> InventoryBook:
        if self._book is None:
            from stockledger.application.services import get_inventory_book

            self._book = get_inventory_book()
        return self._book

    def _get_sync(self) -> SyncCoordinator:
        if self._sync is None:
            from stockledger.application.services import get_sync_coordinator

            self._sync = get_sync_coordinator()
        return self._sync

    def _get_access(self) -> AccessControl:
        if self._access is None:
            from stockledger.application.services import get_access_control

            self._access = get_access_control()
        return self._access

    async def _committed(self) -> None:
        """Persist the book after a successful mutation."""
        await self._get_sync().on_change()

    def _confirm(
        self,
        role: Role,
        kind: ProtectedActionKind,
        target_id: str | None,
        secret: str,
        apply: Callable[[], T],
    ) -> T:
        """Run a protected mutation once the role secret is re-entered."""
        action = ProtectedAction(self._get_access(), role, kind, target_id)
        action.request_secret()
        return action.confirm(secret, apply)
