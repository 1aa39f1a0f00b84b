"""Item registration, editing and deletion use cases."""

from stockledger.application.dto.requests import CreateItemRequest, UpdateItemRequest
from stockledger.application.dto.responses import ItemResponse
from stockledger.application.use_cases.base import InventoryUseCase
from stockledger.core.entities.access import ProtectedActionKind, Role
from stockledger.core.entities.inventory import Item
from stockledger.core.services import ensure_category_access


class CreateItemUseCase(InventoryUseCase):
    """Register a part or product, seeding its initial stock."""

    async def execute(self, request: CreateItemRequest, role: Role) -> Item:
        ensure_category_access(role, request.type)

        item = self._get_book().create_item(
            item_type=request.type,
            code=request.code,
            name=request.name,
            initial_quantity=request.initial_quantity,
            **request.item_fields(),
        )
        await self._committed()
        return item

    def to_response(self, item: Item) -> ItemResponse:
        return ItemResponse.from_entity(item)


class UpdateItemUseCase(InventoryUseCase):
    """Edit item fields after the role secret is re-entered."""

    async def execute(
        self,
        item_id: str,
        request: UpdateItemRequest,
        role: Role,
        confirm_secret: str,
    ) -> Item:
        book = self._get_book()
        ensure_category_access(role, book.get_item(item_id).type)

        item = self._confirm(
            role,
            ProtectedActionKind.EDIT_ITEM,
            item_id,
            confirm_secret,
            lambda: book.update_item(item_id, request.changes()),
        )
        await self._committed()
        return item

    def to_response(self, item: Item) -> ItemResponse:
        return ItemResponse.from_entity(item)


class DeleteItemUseCase(InventoryUseCase):
    """Delete an item and its whole history after secret re-entry."""

    async def execute(self, item_id: str, role: Role, confirm_secret: str) -> Item:
        book = self._get_book()
        ensure_category_access(role, book.get_item(item_id).type)

        item = self._confirm(
            role,
            ProtectedActionKind.DELETE_ITEM,
            item_id,
            confirm_secret,
            lambda: book.delete_item(item_id),
        )
        await self._committed()
        return item
