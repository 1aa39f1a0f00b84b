"""Tests for item registration, editing and deletion use cases."""

import pytest

from stockledger.application.dto.requests import CreateItemRequest, UpdateItemRequest
from stockledger.application.use_cases import (
    CreateItemUseCase,
    DeleteItemUseCase,
    UpdateItemUseCase,
)
from stockledger.core.entities.access import Role
from stockledger.core.entities.inventory import ItemType
from stockledger.core.exceptions import AuthorizationError, DuplicateCodeError, ItemNotFoundError


@pytest.fixture
def deps(book, mock_sync, access):
    return {"book": book, "sync": mock_sync, "access": access}


class TestCreateItemUseCase:
    async def test_creates_and_persists(self, deps, book, mock_sync):
        use_case = CreateItemUseCase(**deps)
        request = CreateItemRequest(
            type=ItemType.PART, code="ct1", name="bolt", drawing_number="DWG-7", initial_quantity=4
        )

        item = await use_case.execute(request, Role.ADMIN)

        assert item.code == "CT1"
        assert item.drawing_number == "DWG-7"
        assert book.stock_of(item.id) == 4
        mock_sync.on_change.assert_awaited_once()

        response = use_case.to_response(item)
        assert response.stock == 4
        assert len(response.transactions) == 1

    async def test_product_only_cannot_create_part(self, deps, book, mock_sync):
        use_case = CreateItemUseCase(**deps)
        request = CreateItemRequest(type=ItemType.PART, code="C1", name="X")

        with pytest.raises(AuthorizationError):
            await use_case.execute(request, Role.PRODUCT_ONLY)

        assert book.items == []
        mock_sync.on_change.assert_not_awaited()

    async def test_duplicate_code_is_not_persisted(self, deps, book, mock_sync):
        book.create_item(item_type=ItemType.PART, code="C1", name="X")
        use_case = CreateItemUseCase(**deps)

        with pytest.raises(DuplicateCodeError):
            await use_case.execute(
                CreateItemRequest(type=ItemType.PRODUCT, code="c1", name="Y"), Role.ADMIN
            )

        mock_sync.on_change.assert_not_awaited()


class TestUpdateItemUseCase:
    async def test_updates_with_matching_secret(self, deps, book, mock_sync):
        item = book.create_item(item_type=ItemType.PRODUCT, code="P1", name="PUMP")
        use_case = UpdateItemUseCase(**deps)

        updated = await use_case.execute(
            item.id, UpdateItemRequest(name="valve"), Role.PRODUCT_ONLY, "1111"
        )

        assert updated.name == "VALVE"
        assert updated.code == "P1"
        mock_sync.on_change.assert_awaited_once()

    async def test_wrong_secret_changes_nothing(self, deps, book, mock_sync):
        item = book.create_item(item_type=ItemType.PRODUCT, code="P1", name="PUMP")
        use_case = UpdateItemUseCase(**deps)

        with pytest.raises(AuthorizationError):
            await use_case.execute(item.id, UpdateItemRequest(name="valve"), Role.ADMIN, "1111")

        assert book.get_item(item.id).name == "PUMP"
        mock_sync.on_change.assert_not_awaited()


class TestDeleteItemUseCase:
    async def test_deletes_item(self, deps, book, mock_sync):
        item = book.create_item(item_type=ItemType.PART, code="C1", name="X", initial_quantity=2)

        deleted = await DeleteItemUseCase(**deps).execute(item.id, Role.ADMIN, "0000")

        assert deleted.id == item.id
        assert book.items == []
        mock_sync.on_change.assert_awaited_once()

    async def test_product_only_cannot_delete_part(self, deps, book):
        item = book.create_item(item_type=ItemType.PART, code="C1", name="X")

        with pytest.raises(AuthorizationError):
            await DeleteItemUseCase(**deps).execute(item.id, Role.PRODUCT_ONLY, "1111")

        assert len(book.items) == 1

    async def test_missing_item(self, deps):
        with pytest.raises(ItemNotFoundError):
            await DeleteItemUseCase(**deps).execute("missing", Role.ADMIN, "0000")
