"""Record Movement Use Case - inbound or outbound, with serial allocation."""

from dataclasses import dataclass

from stockledger.application.dto.requests import RecordMovementRequest
from stockledger.application.dto.responses import (
    ItemResponse,
    MovementResponse,
    TransactionResponse,
)
from stockledger.application.use_cases.base import InventoryUseCase
from stockledger.core.entities.access import Role
from stockledger.core.entities.inventory import Item, Transaction
from stockledger.core.services import derive_stock, ensure_category_access


@dataclass
class RecordMovementResult:
    """Result of recording a movement."""

    item: Item
    transactions: list[Transaction]


class RecordMovementUseCase(InventoryUseCase):
    """
    Record stock in or out of an item.

    Outbound movements are rejected if they would drive stock negative.
    For products, a serial range expands to one movement per serial and
    the whole request is rejected if any serial is already registered.
    """

    async def execute(
        self,
        item_id: str,
        request: RecordMovementRequest,
        role: Role,
    ) -> RecordMovementResult:
        book = self._get_book()
        ensure_category_access(role, book.get_item(item_id).type)

        transactions = book.record_movement(
            item_id,
            transaction_type=request.type,
            quantity=request.quantity,
            serial_input=request.serial_number,
            when=request.date,
            **request.details(),
        )
        await self._committed()

        return RecordMovementResult(item=book.get_item(item_id), transactions=transactions)

    def to_response(self, result: RecordMovementResult) -> MovementResponse:
        """Convert result to API response."""
        return MovementResponse(
            item=ItemResponse.from_entity(result.item),
            transactions=[TransactionResponse.from_entity(t) for t in result.transactions],
            stock=derive_stock(result.item),
        )
