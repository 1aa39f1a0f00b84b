"""Item and stock movement endpoints."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from stockledger.api.dependencies import (
    get_book,
    get_confirm_secret,
    get_create_item_use_case,
    get_delete_item_use_case,
    get_delete_transaction_use_case,
    get_get_item_use_case,
    get_list_items_use_case,
    get_record_movement_use_case,
    get_role,
    get_update_item_use_case,
    get_update_transaction_use_case,
)
from stockledger.application.dto.requests import (
    CreateItemRequest,
    RecordMovementRequest,
    UpdateItemRequest,
    UpdateTransactionRequest,
)
from stockledger.application.dto.responses import (
    ErrorResponse,
    ItemListResponse,
    ItemResponse,
    MovementResponse,
    SuggestionResponse,
    TransactionResponse,
)
from stockledger.application.use_cases import (
    CreateItemUseCase,
    DeleteItemUseCase,
    DeleteTransactionUseCase,
    GetItemUseCase,
    ListItemsUseCase,
    RecordMovementUseCase,
    UpdateItemUseCase,
    UpdateTransactionUseCase,
)
from stockledger.core.entities.access import Role
from stockledger.core.entities.inventory import ItemType
from stockledger.core.services import InventoryBook, can_access_category, ensure_category_access
from stockledger.infrastructure.exports import movement_history, report_filename, stock_report

router = APIRouter(prefix="/api/items", tags=["items"])

PROTECTED_RESPONSES = {
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def _csv_response(content: str, filename: str) -> StreamingResponse:
    return StreamingResponse(
        iter([content]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("", response_model=ItemListResponse)
async def list_items(
    type: ItemType | None = Query(default=None, description="Filter by category"),
    search: str | None = Query(default=None, description="Name, code or serial substring"),
    include_history: bool = Query(default=False),
    role: Role = Depends(get_role),
    use_case: ListItemsUseCase = Depends(get_list_items_use_case),
) -> ItemListResponse:
    """List items visible to the caller, with derived stock."""
    items = await use_case.execute(role, item_type=type, search=search)
    return use_case.to_response(items, role, include_history=include_history)


@router.get("/counts", response_model=dict[ItemType, int])
async def item_counts(
    role: Role = Depends(get_role),
    book: InventoryBook = Depends(get_book),
) -> dict[ItemType, int]:
    """Number of items per visible category."""
    return {t: n for t, n in book.counts().items() if can_access_category(role, t)}


@router.get("/suggestions/code", response_model=SuggestionResponse)
async def suggest_code(
    prefix: str = Query(..., min_length=1, description="Code prefix, e.g. CT"),
    role: Role = Depends(get_role),
    book: InventoryBook = Depends(get_book),
) -> SuggestionResponse:
    """Next free code for a prefix."""
    return SuggestionResponse(value=book.suggest_code(prefix))


@router.get("/suggestions/serial", response_model=SuggestionResponse)
async def suggest_serial(
    role: Role = Depends(get_role),
    book: InventoryBook = Depends(get_book),
) -> SuggestionResponse:
    """Next serial number after the highest one in use."""
    ensure_category_access(role, ItemType.PRODUCT)
    return SuggestionResponse(value=book.suggest_serial())


@router.get("/report.csv", response_class=StreamingResponse)
async def export_stock_report(
    type: ItemType = Query(..., description="Category to report"),
    search: str | None = Query(default=None),
    role: Role = Depends(get_role),
    use_case: ListItemsUseCase = Depends(get_list_items_use_case),
) -> StreamingResponse:
    """Current stock of the listed items as CSV."""
    items = await use_case.execute(role, item_type=type, search=search)
    return _csv_response(stock_report(items, type), report_filename(f"{type.value}_stock"))


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_item(
    request: CreateItemRequest,
    role: Role = Depends(get_role),
    use_case: CreateItemUseCase = Depends(get_create_item_use_case),
) -> ItemResponse:
    """Register a new item, optionally with initial stock."""
    item = await use_case.execute(request, role)
    return use_case.to_response(item)


@router.get("/{item_id}", response_model=ItemResponse, responses=PROTECTED_RESPONSES)
async def get_item(
    item_id: str,
    role: Role = Depends(get_role),
    use_case: GetItemUseCase = Depends(get_get_item_use_case),
) -> ItemResponse:
    """Item with derived stock and history, most recent first."""
    item = await use_case.execute(item_id, role)
    return use_case.to_response(item)


@router.patch("/{item_id}", response_model=ItemResponse, responses=PROTECTED_RESPONSES)
async def update_item(
    item_id: str,
    request: UpdateItemRequest,
    role: Role = Depends(get_role),
    confirm_secret: str = Depends(get_confirm_secret),
    use_case: UpdateItemUseCase = Depends(get_update_item_use_case),
) -> ItemResponse:
    """Edit item fields. Requires X-Confirm-Secret."""
    item = await use_case.execute(item_id, request, role, confirm_secret)
    return use_case.to_response(item)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=PROTECTED_RESPONSES,
)
async def delete_item(
    item_id: str,
    role: Role = Depends(get_role),
    confirm_secret: str = Depends(get_confirm_secret),
    use_case: DeleteItemUseCase = Depends(get_delete_item_use_case),
) -> None:
    """Delete an item and its whole history. Requires X-Confirm-Secret."""
    await use_case.execute(item_id, role, confirm_secret)


@router.post(
    "/{item_id}/movements",
    response_model=MovementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def record_movement(
    item_id: str,
    request: RecordMovementRequest,
    role: Role = Depends(get_role),
    use_case: RecordMovementUseCase = Depends(get_record_movement_use_case),
) -> MovementResponse:
    """Record stock in or out; a product serial range yields one movement per serial."""
    result = await use_case.execute(item_id, request, role)
    return use_case.to_response(result)


@router.patch(
    "/{item_id}/transactions/{transaction_id}",
    response_model=TransactionResponse,
    responses=PROTECTED_RESPONSES,
)
async def update_transaction(
    item_id: str,
    transaction_id: str,
    request: UpdateTransactionRequest,
    role: Role = Depends(get_role),
    confirm_secret: str = Depends(get_confirm_secret),
    use_case: UpdateTransactionUseCase = Depends(get_update_transaction_use_case),
) -> TransactionResponse:
    """Correct one movement. Requires X-Confirm-Secret."""
    transaction = await use_case.execute(item_id, transaction_id, request, role, confirm_secret)
    return use_case.to_response(transaction)


@router.delete(
    "/{item_id}/transactions/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=PROTECTED_RESPONSES,
)
async def delete_transaction(
    item_id: str,
    transaction_id: str,
    role: Role = Depends(get_role),
    confirm_secret: str = Depends(get_confirm_secret),
    use_case: DeleteTransactionUseCase = Depends(get_delete_transaction_use_case),
) -> None:
    """Remove one movement. Requires X-Confirm-Secret."""
    await use_case.execute(item_id, transaction_id, role, confirm_secret)


@router.get("/{item_id}/history.csv", response_class=StreamingResponse)
async def export_history(
    item_id: str,
    role: Role = Depends(get_role),
    use_case: GetItemUseCase = Depends(get_get_item_use_case),
) -> StreamingResponse:
    """Movement history of one item as CSV, newest first."""
    item = await use_case.execute(item_id, role)
    return _csv_response(movement_history(item), report_filename(f"{item.name}_history"))
