"""
Ledger model rules.

Pure functions that build and validate items and transactions. Stock
is never stored: `derive_stock` folds the transaction history on every
read. Every function returns new entities and leaves its inputs
untouched, so callers can swap state in only after validation passes.
"""

import re
import uuid
from collections.abc import Iterable
from datetime import UTC, date, datetime
from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError

from stockledger.core.entities.inventory import (
    Item,
    ItemType,
    LedgerModel,
    Transaction,
    TransactionType,
)
from stockledger.core.exceptions import (
    DuplicateCodeError,
    DuplicateSerialError,
    InsufficientStockError,
    TransactionNotFoundError,
    ValidationError,
)
from stockledger.core.services.serial_allocator import (
    build_serial_registry,
    normalize_serial,
)

M = TypeVar("M", bound=LedgerModel)

INITIAL_STOCK_REMARK = "Initial stock registration"

EDITABLE_ITEM_FIELDS = frozenset(
    {"code", "name", "drawing_number", "spec", "remarks", "registration_date"}
)

# Serial and customer details are recorded on products only
PRODUCT_ONLY_FIELDS = ("serial_number", "customer_name", "address", "phone_number")

EDITABLE_TRANSACTION_FIELDS = frozenset(
    {
        "type",
        "quantity",
        "date",
        "remarks",
        "model_name",
        "user_id",
        "serial_number",
        "customer_name",
        "address",
        "phone_number",
    }
)


def generate_id(prefix: str) -> str:
    """Generate a fresh, immutable entity ID."""
    return f"{prefix}-{uuid.uuid4().hex[:16]}"


def derive_stock(item: Item) -> int:
    """Sum of inbound quantities minus sum of outbound quantities."""
    return sum(t.signed_quantity for t in item.transactions)


def sorted_history(item: Item) -> list[Transaction]:
    """Transactions most-recent-first; ties keep the latest entry first."""
    return sorted(reversed(item.transactions), key=lambda t: t.date, reverse=True)


def normalize_label(value: str | None) -> str:
    """Trim and upper-case a code or name."""
    return (value or "").strip().upper()


def find_code_owner(
    code: str,
    items: Iterable[Item],
    exclude_id: str | None = None,
) -> Item | None:
    """Find the item using `code`, compared case-insensitively."""
    target = code.strip().casefold()
    for item in items:
        if item.id != exclude_id and item.code.strip().casefold() == target:
            return item
    return None


def ensure_unique_code(
    code: str,
    items: Iterable[Item],
    exclude_id: str | None = None,
) -> None:
    """Raise DuplicateCodeError if another item already uses `code`."""
    owner = find_code_owner(code, items, exclude_id=exclude_id)
    if owner is not None:
        raise DuplicateCodeError(code, owner.id)


def suggest_next_code(prefix: str, existing_codes: Iterable[str]) -> str:
    """
    Suggest the next code for a prefix, e.g. `CT` -> `CT13` when `CT12` exists.

    No zero padding is applied. A blank prefix yields an empty string.
    """
    normalized = normalize_label(prefix)
    if not normalized:
        return ""

    pattern = re.compile(rf"^{re.escape(normalized)}(\d+)$", re.ASCII)
    max_num = 0
    for code in existing_codes:
        match = pattern.match((code or "").upper())
        if match:
            max_num = max(max_num, int(match.group(1)))
    return f"{normalized}{max_num + 1}"


def ensure_outbound_allowed(item: Item, transaction_type: TransactionType, quantity: int) -> None:
    """Reject an outbound that exceeds the currently derived stock."""
    if transaction_type != TransactionType.OUTBOUND:
        return
    available = derive_stock(item)
    if quantity > available:
        raise InsufficientStockError(item.code, quantity, available)


def _require(field: str, value: str) -> str:
    if not value:
        raise ValidationError(field, "is required")
    return value


def _ensure_positive(quantity: Any) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError("quantity", "must be a positive integer", quantity)
    return quantity


def _build(model: type[M], data: dict[str, Any]) -> M:
    """Validate entity data, surfacing failures as domain ValidationError."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or model.__name__
        raise ValidationError(field, first["msg"], first.get("input")) from e


def create_item(
    *,
    item_type: ItemType,
    code: str,
    name: str,
    existing: Iterable[Item],
    drawing_number: str | None = None,
    spec: str | None = None,
    remarks: str | None = None,
    registration_date: date | None = None,
    initial_quantity: int = 0,
    initial_remark: str = INITIAL_STOCK_REMARK,
    now: datetime | None = None,
) -> Item:
    """
    Build a new item with a fresh ID.

    A positive `initial_quantity` seeds one inbound transaction dated
    `now` carrying the fixed system remark.

    Raises:
        ValidationError: Empty name or code, or negative initial quantity.
        DuplicateCodeError: Code collides with an existing item.
    """
    code = _require("code", normalize_label(code))
    name = _require("name", normalize_label(name))
    if initial_quantity < 0:
        raise ValidationError("initial_quantity", "must not be negative", initial_quantity)
    ensure_unique_code(code, existing)

    transactions: list[dict[str, Any]] = []
    if initial_quantity > 0:
        transactions.append(
            {
                "id": generate_id("t"),
                "type": TransactionType.INBOUND,
                "quantity": initial_quantity,
                "date": now or datetime.now(UTC),
                "remarks": initial_remark,
            }
        )

    return _build(
        Item,
        {
            "id": generate_id("item"),
            "type": item_type,
            "code": code,
            "name": name,
            "drawing_number": drawing_number or None,
            "spec": spec or None,
            "remarks": remarks or None,
            "registration_date": registration_date or date.today(),
            "transactions": transactions,
        },
    )


def update_item(item: Item, changes: dict[str, Any], existing: Iterable[Item]) -> Item:
    """
    Shallow-merge editable fields into an item.

    Code uniqueness is re-checked against all other items when the
    code changes.

    Raises:
        ValidationError: Unknown field, or empty name or code.
        DuplicateCodeError: New code collides with another item.
    """
    unknown = set(changes) - EDITABLE_ITEM_FIELDS
    if unknown:
        raise ValidationError(sorted(unknown)[0], "cannot be edited")

    merged = item.model_dump()
    merged.update(changes)
    merged["code"] = _require("code", normalize_label(merged["code"]))
    merged["name"] = _require("name", normalize_label(merged["name"]))

    if merged["code"].casefold() != item.code.casefold():
        ensure_unique_code(merged["code"], existing, exclude_id=item.id)

    return _build(Item, merged)


def build_transactions(
    item: Item,
    *,
    transaction_type: TransactionType,
    quantity: int,
    serials: list[str] | None = None,
    when: datetime | None = None,
    details: dict[str, Any] | None = None,
) -> list[Transaction]:
    """
    Build the transactions for one movement submission.

    With serials, one transaction per serial is produced, each with
    quantity 1. Without, a single transaction carries `quantity`.

    Raises:
        ValidationError: Non-positive quantity.
        InsufficientStockError: Outbound exceeds current stock.
    """
    when = when or datetime.now(UTC)
    details = dict(details or {})
    if item.type == ItemType.PART:
        for field in PRODUCT_ONLY_FIELDS:
            details.pop(field, None)

    count = len(serials) if serials else _ensure_positive(quantity)
    ensure_outbound_allowed(item, transaction_type, count)

    base = {"type": transaction_type, "date": when, **details}
    if serials:
        return [
            _build(
                Transaction,
                {**base, "id": generate_id("t"), "quantity": 1, "serial_number": serial},
            )
            for serial in serials
        ]
    return [_build(Transaction, {**base, "id": generate_id("t"), "quantity": count})]


def append_transactions(item: Item, transactions: list[Transaction]) -> Item:
    """Return a copy of the item with transactions appended."""
    return item.model_copy(update={"transactions": [*item.transactions, *transactions]})


def update_transaction(
    item: Item,
    transaction_id: str,
    changes: dict[str, Any],
    all_items: Iterable[Item],
) -> Item:
    """
    Replace fields of one transaction.

    Stock is not re-validated against earlier history. Quantity must
    stay positive and a changed serial must not collide with any other
    transaction.

    Raises:
        TransactionNotFoundError: No such transaction on the item.
        ValidationError: Unknown field or non-positive quantity.
        DuplicateSerialError: New serial already registered.
    """
    current = item.find_transaction(transaction_id)
    if current is None:
        raise TransactionNotFoundError(item.id, transaction_id)

    unknown = set(changes) - EDITABLE_TRANSACTION_FIELDS
    if unknown:
        raise ValidationError(sorted(unknown)[0], "cannot be edited")

    merged = current.model_dump()
    merged.update(changes)
    if item.type == ItemType.PART:
        for field in PRODUCT_ONLY_FIELDS:
            merged[field] = None
    _ensure_positive(merged["quantity"])

    serial = normalize_serial(merged.get("serial_number"))
    merged["serial_number"] = serial or None
    if serial and serial != normalize_serial(current.serial_number):
        registry = build_serial_registry(all_items)
        if serial in registry:
            raise DuplicateSerialError([serial])

    updated = _build(Transaction, merged)
    return item.model_copy(
        update={
            "transactions": [
                updated if t.id == transaction_id else t for t in item.transactions
            ]
        }
    )


def remove_transaction(item: Item, transaction_id: str) -> Item:
    """
    Return a copy of the item without the given transaction.

    Raises:
        TransactionNotFoundError: No such transaction on the item.
    """
    if item.find_transaction(transaction_id) is None:
        raise TransactionNotFoundError(item.id, transaction_id)
    return item.model_copy(
        update={"transactions": [t for t in item.transactions if t.id != transaction_id]}
    )
