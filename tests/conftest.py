"""Pytest configuration and fixtures."""

from collections.abc import Callable
from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest

from stockledger.application.services import reset_services
from stockledger.config import reset_settings
from stockledger.config.settings import LedgerSettings
from stockledger.core.entities.inventory import Item, ItemType, Transaction, TransactionType
from stockledger.core.interfaces import ILocalSnapshotStore, IRemoteSnapshotStore
from stockledger.core.services import AccessControl, InventoryBook, SyncCoordinator

ADMIN_SECRET = "0000"
PRODUCT_ONLY_SECRET = "1111"


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Each test starts from fresh settings and service singletons."""
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def ledger_settings() -> LedgerSettings:
    return LedgerSettings()


@pytest.fixture
def book(ledger_settings) -> InventoryBook:
    return InventoryBook(settings=ledger_settings)


@pytest.fixture
def access() -> AccessControl:
    return AccessControl(admin_secret=ADMIN_SECRET, product_only_secret=PRODUCT_ONLY_SECRET)


@pytest.fixture
def local_store() -> AsyncMock:
    store = AsyncMock(spec=ILocalSnapshotStore)
    store.load_local.return_value = None
    return store


@pytest.fixture
def remote_store() -> AsyncMock:
    store = AsyncMock(spec=IRemoteSnapshotStore)
    store.fetch_snapshot.return_value = None
    return store


@pytest.fixture
def mock_sync() -> AsyncMock:
    return AsyncMock(spec=SyncCoordinator)


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    counter = iter(range(1, 10_000))

    def _make(
        type: TransactionType = TransactionType.INBOUND,
        quantity: int = 1,
        when: datetime | None = None,
        **fields,
    ) -> Transaction:
        return Transaction(
            id=f"t-{next(counter)}",
            type=type,
            quantity=quantity,
            date=when or datetime(2024, 1, 1, 9, 0, tzinfo=UTC),
            **fields,
        )

    return _make


@pytest.fixture
def make_item() -> Callable[..., Item]:
    counter = iter(range(1, 10_000))

    def _make(
        type: ItemType = ItemType.PART,
        code: str | None = None,
        name: str = "WIDGET",
        transactions: list[Transaction] | None = None,
        **fields,
    ) -> Item:
        n = next(counter)
        return Item(
            id=f"item-{n}",
            type=type,
            code=code or f"CT{n}",
            name=name,
            registration_date=date(2024, 1, 1),
            transactions=transactions or [],
            **fields,
        )

    return _make
