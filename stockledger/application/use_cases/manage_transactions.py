"""Corrections to recorded movements."""

from stockledger.application.dto.requests import UpdateTransactionRequest
from stockledger.application.dto.responses import TransactionResponse
from stockledger.application.use_cases.base import InventoryUseCase
from stockledger.core.entities.access import ProtectedActionKind, Role
from stockledger.core.entities.inventory import Transaction
from stockledger.core.services import ensure_category_access


class UpdateTransactionUseCase(InventoryUseCase):
    """
    Edit one movement after the role secret is re-entered.

    Earlier history is not re-validated, so a correction may leave the
    derived stock negative.
    """

    async def execute(
        self,
        item_id: str,
        transaction_id: str,
        request: UpdateTransactionRequest,
        role: Role,
        confirm_secret: str,
    ) -> Transaction:
        book = self._get_book()
        ensure_category_access(role, book.get_item(item_id).type)

        transaction = self._confirm(
            role,
            ProtectedActionKind.EDIT_TRANSACTION,
            transaction_id,
            confirm_secret,
            lambda: book.update_transaction(item_id, transaction_id, request.changes()),
        )
        await self._committed()
        return transaction

    def to_response(self, transaction: Transaction) -> TransactionResponse:
        return TransactionResponse.from_entity(transaction)


class DeleteTransactionUseCase(InventoryUseCase):
    """Remove one movement after the role secret is re-entered."""

    async def execute(
        self,
        item_id: str,
        transaction_id: str,
        role: Role,
        confirm_secret: str,
    ) -> None:
        book = self._get_book()
        ensure_category_access(role, book.get_item(item_id).type)

        self._confirm(
            role,
            ProtectedActionKind.DELETE_TRANSACTION,
            transaction_id,
            confirm_secret,
            lambda: book.delete_transaction(item_id, transaction_id),
        )
        await self._committed()
