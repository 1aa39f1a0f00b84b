"""Inventory domain entities."""

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ItemType(str, Enum):
    """Inventory categories."""

    PART = "part"
    PRODUCT = "product"


class TransactionType(str, Enum):
    """Direction of a stock movement."""

    INBOUND = "purchase"
    OUTBOUND = "release"


class LedgerModel(BaseModel):
    """Base for entities exchanged in camelCase snapshots."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
        extra="ignore",
    )

    def to_wire(self) -> dict:
        """Serialize with camelCase keys, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Transaction(LedgerModel):
    """A single inbound or outbound movement against one item."""

    id: str
    type: TransactionType
    quantity: int = Field(gt=0)
    date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    remarks: str | None = None
    model_name: str | None = None
    user_id: str | None = None
    serial_number: str | None = None  # products only, upper-cased
    customer_name: str | None = None
    address: str | None = None
    phone_number: str | None = None

    @property
    def signed_quantity(self) -> int:
        """Quantity with sign applied: positive for inbound, negative for outbound."""
        if self.type == TransactionType.INBOUND:
            return self.quantity
        return -self.quantity


class Item(LedgerModel):
    """A tracked part or product. Stock is derived from its transactions."""

    id: str
    type: ItemType
    code: str
    name: str
    drawing_number: str | None = None
    spec: str | None = None
    remarks: str | None = None
    registration_date: date = Field(default_factory=date.today)
    transactions: list[Transaction] = Field(default_factory=list)

    def find_transaction(self, transaction_id: str) -> Transaction | None:
        """Get a transaction by ID."""
        for transaction in self.transactions:
            if transaction.id == transaction_id:
                return transaction
        return None


class InventorySnapshot(LedgerModel):
    """Full item collection as persisted locally or sent to the remote store."""

    items: list[Item] = Field(default_factory=list)
    updated_at: datetime | None = None
    version: str | None = None
    export_date: datetime | None = None
