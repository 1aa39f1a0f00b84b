"""
HTTP remote snapshot store.

The remote endpoint holds a single document, ``{"items": [...],
"updatedAt": "..."}``. GET returns it (404 or an empty body means no
data yet); POST overwrites it wholesale.
"""

import httpx
from pydantic import ValidationError as PydanticValidationError

from stockledger.config import get_logger, get_settings
from stockledger.core.entities.inventory import InventorySnapshot
from stockledger.core.exceptions import SyncFailure
from stockledger.core.interfaces.snapshot_store import IRemoteSnapshotStore

logger = get_logger(__name__)


class HttpSnapshotStore(IRemoteSnapshotStore):
    """Remote snapshot store over a plain JSON HTTP endpoint."""

    def __init__(
        self,
        base_url: str,
        key: str = "inventory",
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = f"{base_url.rstrip('/')}/{key}"
        self.timeout = timeout
        self._headers = {"Accept": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "HttpSnapshotStore":
        remote = get_settings().remote
        return cls(
            base_url=remote.base_url,
            key=remote.key,
            token=remote.token.get_secret_value() if remote.token else None,
            timeout=remote.timeout,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._headers,
            transport=self._transport,
        )

    async def fetch_snapshot(self) -> InventorySnapshot | None:
        try:
            async with self._client() as client:
                response = await client.get(self.url)
        except httpx.HTTPError as e:
            raise SyncFailure("fetch", f"{type(e).__name__}: {e}") from e

        if response.status_code == 404:
            logger.info("remote_snapshot_missing", url=self.url)
            return None
        if response.status_code != 200:
            raise SyncFailure("fetch", f"HTTP {response.status_code}: {response.text[:200]}")
        if not response.content.strip():
            return None

        try:
            data = response.json()
        except ValueError as e:
            raise SyncFailure("fetch", "response is not valid JSON") from e

        if data is None:
            return None
        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise SyncFailure("fetch", "response has no items list")

        try:
            snapshot = InventorySnapshot.model_validate(data)
        except PydanticValidationError as e:
            raise SyncFailure("fetch", f"malformed snapshot ({e.error_count()} errors)") from e

        logger.info("remote_snapshot_fetched", url=self.url, items=len(snapshot.items))
        return snapshot

    async def push_snapshot(self, snapshot: InventorySnapshot) -> None:
        wire = snapshot.to_wire()
        payload = {"items": wire["items"], "updatedAt": wire.get("updatedAt")}

        try:
            async with self._client() as client:
                response = await client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            raise SyncFailure("push", f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise SyncFailure("push", f"HTTP {response.status_code}: {response.text[:200]}")

        logger.info("remote_snapshot_pushed", url=self.url, items=len(snapshot.items))
