"""Read-only inventory queries, filtered by role."""

from stockledger.application.dto.responses import ItemListResponse, ItemResponse
from stockledger.application.use_cases.base import InventoryUseCase
from stockledger.core.entities.access import Role
from stockledger.core.entities.inventory import Item, ItemType
from stockledger.core.services import can_access_category, ensure_category_access


class ListItemsUseCase(InventoryUseCase):
    """List items of the categories the role may see."""

    async def execute(
        self,
        role: Role,
        item_type: ItemType | None = None,
        search: str | None = None,
    ) -> list[Item]:
        if item_type is not None:
            ensure_category_access(role, item_type)

        items = self._get_book().list_items(item_type=item_type, search=search)
        return [item for item in items if can_access_category(role, item.type)]

    def to_response(
        self,
        items: list[Item],
        role: Role,
        include_history: bool = False,
    ) -> ItemListResponse:
        counts = {
            item_type: count
            for item_type, count in self._get_book().counts().items()
            if can_access_category(role, item_type)
        }
        return ItemListResponse(
            items=[ItemResponse.from_entity(i, include_history=include_history) for i in items],
            total=len(items),
            counts=counts,
        )


class GetItemUseCase(InventoryUseCase):
    """Fetch one item with its full history."""

    async def execute(self, item_id: str, role: Role) -> Item:
        item = self._get_book().get_item(item_id)
        ensure_category_access(role, item.type)
        return item

    def to_response(self, item: Item) -> ItemResponse:
        return ItemResponse.from_entity(item)
