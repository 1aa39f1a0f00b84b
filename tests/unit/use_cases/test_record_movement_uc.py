"""Tests for RecordMovementUseCase."""

import pytest

from stockledger.application.dto.requests import RecordMovementRequest
from stockledger.application.use_cases import RecordMovementUseCase
from stockledger.core.entities.access import Role
from stockledger.core.entities.inventory import ItemType, TransactionType
from stockledger.core.exceptions import (
    AuthorizationError,
    DuplicateSerialError,
    InsufficientStockError,
)


@pytest.fixture
def use_case(book, mock_sync, access):
    return RecordMovementUseCase(book=book, sync=mock_sync, access=access)


class TestRecordMovementUseCase:
    async def test_outbound_part(self, use_case, book, mock_sync):
        item = book.create_item(item_type=ItemType.PART, code="C1", name="X", initial_quantity=10)

        result = await use_case.execute(
            item.id,
            RecordMovementRequest(type=TransactionType.OUTBOUND, quantity=4, model_name="MX-1"),
            Role.ADMIN,
        )

        response = use_case.to_response(result)
        assert response.stock == 6
        assert response.transactions[0].model_name == "MX-1"
        mock_sync.on_change.assert_awaited_once()

    async def test_insufficient_stock(self, use_case, book, mock_sync):
        item = book.create_item(item_type=ItemType.PART, code="C1", name="X", initial_quantity=2)

        with pytest.raises(InsufficientStockError):
            await use_case.execute(
                item.id, RecordMovementRequest(type=TransactionType.OUTBOUND, quantity=3), Role.ADMIN
            )

        assert book.stock_of(item.id) == 2
        mock_sync.on_change.assert_not_awaited()

    async def test_serial_range_for_product(self, use_case, book):
        item = book.create_item(item_type=ItemType.PRODUCT, code="P1", name="PUMP")

        result = await use_case.execute(
            item.id,
            RecordMovementRequest(
                type=TransactionType.INBOUND,
                serial_number="sn00001~00004",
                customer_name="ACME",
            ),
            Role.PRODUCT_ONLY,
        )

        assert [t.serial_number for t in result.transactions] == [
            "SN00001",
            "SN00002",
            "SN00003",
            "SN00004",
        ]
        assert all(t.customer_name == "ACME" for t in result.transactions)
        assert use_case.to_response(result).stock == 4

    async def test_duplicate_serial(self, use_case, book, mock_sync):
        item = book.create_item(item_type=ItemType.PRODUCT, code="P1", name="PUMP")
        book.record_movement(item.id, transaction_type=TransactionType.INBOUND, serial_input="SN00003")

        with pytest.raises(DuplicateSerialError):
            await use_case.execute(
                item.id,
                RecordMovementRequest(type=TransactionType.INBOUND, serial_number="SN00001~00005"),
                Role.ADMIN,
            )

        assert book.stock_of(item.id) == 1

    async def test_product_only_cannot_touch_parts(self, use_case, book):
        item = book.create_item(item_type=ItemType.PART, code="C1", name="X")

        with pytest.raises(AuthorizationError):
            await use_case.execute(
                item.id, RecordMovementRequest(type=TransactionType.INBOUND, quantity=1), Role.PRODUCT_ONLY
            )
