"""Tests for transaction correction use cases."""

import pytest

from stockledger.application.dto.requests import UpdateTransactionRequest
from stockledger.application.use_cases import DeleteTransactionUseCase, UpdateTransactionUseCase
from stockledger.core.entities.access import Role
from stockledger.core.entities.inventory import ItemType, TransactionType
from stockledger.core.exceptions import AuthorizationError, TransactionNotFoundError


@pytest.fixture
def stocked(book):
    item = book.create_item(item_type=ItemType.PART, code="C1", name="X", initial_quantity=5)
    book.record_movement(item.id, transaction_type=TransactionType.OUTBOUND, quantity=5)
    return book.get_item(item.id)


@pytest.fixture
def deps(book, mock_sync, access):
    return {"book": book, "sync": mock_sync, "access": access}


class TestUpdateTransactionUseCase:
    async def test_correction_may_leave_stock_negative(self, deps, book, stocked, mock_sync):
        inbound = next(t for t in stocked.transactions if t.type == TransactionType.INBOUND)
        use_case = UpdateTransactionUseCase(**deps)

        updated = await use_case.execute(
            stocked.id, inbound.id, UpdateTransactionRequest(quantity=2), Role.ADMIN, "0000"
        )

        assert updated.quantity == 2
        assert book.stock_of(stocked.id) == -3
        assert use_case.to_response(updated).id == inbound.id
        mock_sync.on_change.assert_awaited_once()

    async def test_wrong_secret(self, deps, book, stocked, mock_sync):
        tx = stocked.transactions[0]

        with pytest.raises(AuthorizationError):
            await UpdateTransactionUseCase(**deps).execute(
                stocked.id, tx.id, UpdateTransactionRequest(remarks="x"), Role.ADMIN, "9999"
            )

        assert book.get_item(stocked.id) == stocked
        mock_sync.on_change.assert_not_awaited()


class TestDeleteTransactionUseCase:
    async def test_deletes(self, deps, book, stocked, mock_sync):
        outbound = next(t for t in stocked.transactions if t.type == TransactionType.OUTBOUND)

        await DeleteTransactionUseCase(**deps).execute(stocked.id, outbound.id, Role.ADMIN, "0000")

        assert book.stock_of(stocked.id) == 5
        mock_sync.on_change.assert_awaited_once()

    async def test_unknown_transaction(self, deps, stocked):
        with pytest.raises(TransactionNotFoundError):
            await DeleteTransactionUseCase(**deps).execute(stocked.id, "missing", Role.ADMIN, "0000")
