"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from stockledger.core.entities.access import Role
from stockledger.core.entities.inventory import Item, ItemType, Transaction, TransactionType
from stockledger.core.entities.sync import SnapshotSource, SyncState, SyncStatus
from stockledger.core.services.ledger import derive_stock, sorted_history


class TransactionResponse(BaseModel):
    """One recorded movement."""

    model_config = ConfigDict(protected_namespaces=())

    id: str
    type: TransactionType
    quantity: int
    date: datetime
    remarks: str | None = None
    model_name: str | None = None
    user_id: str | None = None
    serial_number: str | None = None
    customer_name: str | None = None
    address: str | None = None
    phone_number: str | None = None

    @classmethod
    def from_entity(cls, transaction: Transaction) -> "TransactionResponse":
        return cls.model_validate(transaction.model_dump())


class ItemResponse(BaseModel):
    """Item with derived stock and its history, most recent first."""

    id: str
    type: ItemType
    code: str
    name: str
    drawing_number: str | None = None
    spec: str | None = None
    remarks: str | None = None
    registration_date: date
    stock: int = Field(..., description="Inbound minus outbound quantities")
    transactions: list[TransactionResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, item: Item, include_history: bool = True) -> "ItemResponse":
        return cls(
            id=item.id,
            type=item.type,
            code=item.code,
            name=item.name,
            drawing_number=item.drawing_number,
            spec=item.spec,
            remarks=item.remarks,
            registration_date=item.registration_date,
            stock=derive_stock(item),
            transactions=(
                [TransactionResponse.from_entity(t) for t in sorted_history(item)]
                if include_history
                else []
            ),
        )


class ItemListResponse(BaseModel):
    """Filtered item list."""

    items: list[ItemResponse]
    total: int
    counts: dict[ItemType, int] = Field(
        default_factory=dict,
        description="Items per category visible to the caller",
    )


class MovementResponse(BaseModel):
    """Result of recording a movement."""

    item: ItemResponse
    transactions: list[TransactionResponse]
    stock: int


class SuggestionResponse(BaseModel):
    """Suggested next code or serial."""

    value: str


class SessionResponse(BaseModel):
    """Role resolved for a login secret."""

    role: Role
    categories: list[ItemType]


class SyncStatusResponse(BaseModel):
    """Remote sync status for display."""

    status: SyncStatus
    loaded_from: SnapshotSource | None = None
    last_error: str | None = None
    last_pushed_at: datetime | None = None
    push_pending: bool = False

    @classmethod
    def from_state(cls, state: SyncState) -> "SyncStatusResponse":
        return cls.model_validate(state.model_dump())


class FlushResponse(BaseModel):
    pushed: bool
    sync: SyncStatusResponse


class ImportSnapshotResponse(BaseModel):
    items: int
    counts: dict[ItemType, int]


class StorageStatusResponse(BaseModel):
    """Schema state of the local snapshot cache."""

    exists: bool
    applied_migrations: list[str] = Field(default_factory=list)
    pending_migrations: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    uptime_seconds: float
    items: int
    sync: SyncStatusResponse
    storage: StorageStatusResponse


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ITEM_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
