"""
Local/remote snapshot reconciliation.

On startup the remote snapshot is preferred, then the local cache, then
an empty collection. After each change the full collection is saved
locally at once, and a remote push is scheduled after a quiet period;
a newer change cancels and reschedules the pending push, so only the
final state of a burst of edits is sent.

The remote push is a last-write-wins overwrite: two instances saving
within the same window silently drop one side's changes. There is no
version check and no retry; a failed push is abandoned until the next
change schedules another. Sync failures are recorded in the status and
never undo or block local mutations.
"""

import asyncio
import contextlib
from datetime import UTC, datetime

from stockledger.config import get_logger
from stockledger.core.entities.inventory import InventorySnapshot
from stockledger.core.entities.sync import SnapshotSource, SyncState, SyncStatus
from stockledger.core.exceptions import StorageError, SyncFailure
from stockledger.core.interfaces.snapshot_store import (
    ILocalSnapshotStore,
    IRemoteSnapshotStore,
)
from stockledger.core.services.inventory_book import InventoryBook

logger = get_logger(__name__)


class SyncCoordinator:
    """Keeps the inventory book, local cache and remote store in step."""

    def __init__(
        self,
        book: InventoryBook,
        local_store: ILocalSnapshotStore,
        remote_store: IRemoteSnapshotStore | None = None,
        debounce_seconds: float = 1.0,
    ):
        self._book = book
        self._local = local_store
        self._remote = remote_store
        self._debounce = debounce_seconds

        self._state = SyncState()
        self._pending: asyncio.Task | None = None
        self._pending_snapshot: InventorySnapshot | None = None
        self._in_flight: asyncio.Task | None = None

    @property
    def status(self) -> SyncStatus:
        return self._state.status

    @property
    def push_pending(self) -> bool:
        return any(
            task is not None and not task.done() for task in (self._pending, self._in_flight)
        )

    def state(self) -> SyncState:
        """Current sync state for display."""
        return self._state.model_copy(update={"push_pending": self.push_pending})

    async def load(self) -> SnapshotSource:
        """
        Load the startup collection into the book.

        Remote first; on failure or no data the local cache; else empty.
        """
        self._state.status = SyncStatus.LOADING

        remote_snapshot = None
        if self._remote is not None:
            try:
                remote_snapshot = await self._remote.fetch_snapshot()
                if remote_snapshot is None:
                    self._record_failure(SyncFailure("fetch", "remote store returned no data"))
            except SyncFailure as e:
                self._record_failure(e)

        if remote_snapshot is not None:
            self._book.replace_all(remote_snapshot.items)
            self._state.status = SyncStatus.SUCCESS
            self._state.last_error = None
            self._state.loaded_from = SnapshotSource.REMOTE
            await self._save_local(self._book.snapshot())
            logger.info("inventory_loaded", source="remote", items=len(remote_snapshot.items))
            return SnapshotSource.REMOTE

        if self._remote is None:
            self._state.status = SyncStatus.IDLE

        local_snapshot = None
        try:
            local_snapshot = await self._local.load_local()
        except StorageError as e:
            logger.error("local_load_failed", error=str(e))

        if local_snapshot is not None:
            self._book.replace_all(local_snapshot.items)
            self._state.loaded_from = SnapshotSource.LOCAL
            logger.info("inventory_loaded", source="local", items=len(local_snapshot.items))
            return SnapshotSource.LOCAL

        self._book.replace_all([])
        self._state.loaded_from = SnapshotSource.EMPTY
        logger.info("inventory_loaded", source="empty", items=0)
        return SnapshotSource.EMPTY

    async def on_change(self) -> None:
        """Save locally now and (re)schedule the debounced remote push."""
        snapshot = self._book.snapshot()
        await self._save_local(snapshot)
        self._schedule_push(snapshot)

    async def flush(self) -> bool:
        """
        Push the pending snapshot immediately.

        A push already past its quiet period is awaited first, so the
        newest snapshot is always the last one written.

        Returns:
            True if a pending or in-flight snapshot was pushed successfully.
        """
        snapshot = self._pending_snapshot
        await self._cancel_pending()
        pushed = await self._wait_in_flight()
        if snapshot is None:
            return pushed
        return await self._push(snapshot)

    async def shutdown(self, flush: bool = True) -> None:
        """Flush or drop the pending push before exit."""
        if flush:
            await self.flush()
        else:
            await self._cancel_pending()
            await self._wait_in_flight()

    def _schedule_push(self, snapshot: InventorySnapshot) -> None:
        if self._remote is None:
            return
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending_snapshot = snapshot
        task = asyncio.create_task(self._push_after_quiet_period(snapshot))
        task.add_done_callback(self._on_push_done)
        self._pending = task

    async def _push_after_quiet_period(self, snapshot: InventorySnapshot) -> bool:
        await asyncio.sleep(self._debounce)
        # Past this point a newer change schedules a separate push
        self._in_flight = asyncio.current_task()
        self._pending = None
        self._pending_snapshot = None
        return await self._push(snapshot)

    def _on_push_done(self, task: asyncio.Task) -> None:
        if task is self._in_flight:
            self._in_flight = None
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "remote_push_crashed", error=str(error), error_type=type(error).__name__
            )

    async def _wait_in_flight(self) -> bool:
        task = self._in_flight
        if task is None:
            return False
        await asyncio.wait({task})
        if task.cancelled() or task.exception() is not None:
            return False
        return task.result()

    async def _cancel_pending(self) -> None:
        task = self._pending
        self._pending = None
        self._pending_snapshot = None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _push(self, snapshot: InventorySnapshot) -> bool:
        if self._remote is None:
            return False
        self._state.status = SyncStatus.LOADING
        try:
            await self._remote.push_snapshot(snapshot)
        except SyncFailure as e:
            self._record_failure(e)
            return False
        except Exception as e:
            self._state.status = SyncStatus.ERROR
            self._state.last_error = f"Remote push failed: {type(e).__name__}: {e}"
            raise

        self._state.status = SyncStatus.SUCCESS
        self._state.last_error = None
        self._state.last_pushed_at = datetime.now(UTC)
        logger.info("remote_push_succeeded", items=len(snapshot.items))
        return True

    async def _save_local(self, snapshot: InventorySnapshot) -> None:
        try:
            await self._local.save_local(snapshot)
        except StorageError as e:
            # In-memory state stays authoritative; next change retries
            logger.error("local_save_failed", error=str(e))

    def _record_failure(self, error: SyncFailure) -> None:
        self._state.status = SyncStatus.ERROR
        self._state.last_error = error.message
        logger.warning(
            "remote_sync_failed",
            operation=error.details.get("operation"),
            reason=error.details.get("reason"),
        )
