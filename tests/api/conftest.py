"""Fixtures for API tests."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

import stockledger.application.services as services
from stockledger.api.dependencies import get_storage_status
from stockledger.api.main import create_app
from stockledger.core.services import SyncCoordinator


@pytest.fixture
async def sync(book, local_store, remote_store) -> AsyncGenerator[SyncCoordinator, None]:
    coordinator = SyncCoordinator(book, local_store, remote_store, debounce_seconds=30)
    yield coordinator
    await coordinator.shutdown(flush=False)


@pytest.fixture
def app(book, sync, access):
    """App wired to in-memory services; the lifespan is not run."""
    services._inventory_book = book
    services._sync_coordinator = sync
    services._access_control = access
    app = create_app()
    app.dependency_overrides[get_storage_status] = lambda: {
        "exists": True,
        "applied_migrations": ["001"],
        "pending_migrations": [],
    }
    return app


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
