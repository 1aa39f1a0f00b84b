"""Tests for role-filtered inventory queries."""

import pytest

from stockledger.application.use_cases import GetItemUseCase, ListItemsUseCase
from stockledger.core.entities.access import Role
from stockledger.core.entities.inventory import ItemType
from stockledger.core.exceptions import AuthorizationError


@pytest.fixture
def stocked(book):
    part = book.create_item(item_type=ItemType.PART, code="C1", name="BOLT", initial_quantity=3)
    product = book.create_item(item_type=ItemType.PRODUCT, code="P1", name="PUMP")
    return part, product


class TestListItemsUseCase:
    async def test_admin_sees_both_categories(self, book, stocked):
        use_case = ListItemsUseCase(book=book)

        items = await use_case.execute(Role.ADMIN)
        response = use_case.to_response(items, Role.ADMIN)

        assert response.total == 2
        assert response.counts == {ItemType.PART: 1, ItemType.PRODUCT: 1}
        assert all(i.transactions == [] for i in response.items)

    async def test_product_only_never_sees_parts(self, book, stocked):
        _, product = stocked
        use_case = ListItemsUseCase(book=book)

        items = await use_case.execute(Role.PRODUCT_ONLY, search="p")
        response = use_case.to_response(items, Role.PRODUCT_ONLY)

        assert [i.id for i in items] == [product.id]
        assert response.counts == {ItemType.PRODUCT: 1}

    async def test_product_only_asking_for_parts(self, book, stocked):
        with pytest.raises(AuthorizationError):
            await ListItemsUseCase(book=book).execute(Role.PRODUCT_ONLY, item_type=ItemType.PART)

    async def test_include_history(self, book, stocked):
        use_case = ListItemsUseCase(book=book)
        items = await use_case.execute(Role.ADMIN, item_type=ItemType.PART)

        response = use_case.to_response(items, Role.ADMIN, include_history=True)

        assert response.items[0].stock == 3
        assert len(response.items[0].transactions) == 1


class TestGetItemUseCase:
    async def test_get(self, book, stocked):
        part, _ = stocked
        use_case = GetItemUseCase(book=book)

        item = await use_case.execute(part.id, Role.ADMIN)

        assert use_case.to_response(item).stock == 3

    async def test_hidden_category(self, book, stocked):
        part, _ = stocked
        with pytest.raises(AuthorizationError):
            await GetItemUseCase(book=book).execute(part.id, Role.PRODUCT_ONLY)
