"""Tests for health endpoints."""

from stockledger.api.dependencies import get_storage_status
from stockledger.core.exceptions import SyncFailure
from stockledger.infrastructure.storage.sqlite.migrations import (
    get_migration_status,
    run_migrations,
)


async def test_health_check(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["items"] == 0
    assert data["storage"]["applied_migrations"] == ["001"]
    assert "uptime_seconds" in data
    assert response.headers["X-Request-ID"]


async def test_request_id_is_echoed(client):
    response = await client.get("/api/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


async def test_degraded_after_failed_load(client, sync, remote_store):
    remote_store.fetch_snapshot.side_effect = SyncFailure("fetch", "timeout")
    await sync.load()

    data = (await client.get("/api/health")).json()

    assert data["status"] == "degraded"
    assert data["sync"]["status"] == "error"
    assert data["sync"]["loaded_from"] == "empty"


async def test_degraded_with_pending_migrations(app, client, tmp_path):
    db_path = tmp_path / "cache.db"

    async def status_of_fresh_db():
        return await get_migration_status(db_path)

    app.dependency_overrides[get_storage_status] = status_of_fresh_db

    data = (await client.get("/api/health")).json()

    assert data["status"] == "degraded"
    assert data["storage"]["exists"] is False
    assert data["storage"]["pending_migrations"] == ["001"]

    await run_migrations(db_path)
    data = (await client.get("/api/health")).json()

    assert data["status"] == "healthy"
    assert data["storage"]["applied_migrations"] == ["001"]
