"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stockledger.core.entities.inventory import ItemType, TransactionType


class LoginRequest(BaseModel):
    """Secret entered on the login screen."""

    secret: str = Field(..., min_length=1, description="Role secret")


class CreateItemRequest(BaseModel):
    """Register a new part or product."""

    type: ItemType = Field(..., description="Item category", examples=["part", "product"])
    code: str = Field(..., min_length=1, description="Unique item code", examples=["CT1"])
    name: str = Field(..., min_length=1, description="Item name", examples=["WIDGET"])
    drawing_number: str | None = Field(default=None, description="Drawing number (parts)")
    spec: str | None = Field(default=None, description="Specification text")
    remarks: str | None = Field(default=None, description="Free-form remarks")
    registration_date: date | None = Field(default=None, description="Defaults to today")
    initial_quantity: int = Field(
        default=0,
        ge=0,
        description="Initial stock, recorded as an inbound transaction",
    )

    def item_fields(self) -> dict[str, Any]:
        """Optional item fields that were actually supplied."""
        return self.model_dump(
            include={"drawing_number", "spec", "remarks", "registration_date"},
            exclude_none=True,
        )


class UpdateItemRequest(BaseModel):
    """Replace editable fields of an item. Omitted fields are kept."""

    code: str | None = Field(default=None, min_length=1)
    name: str | None = Field(default=None, min_length=1)
    drawing_number: str | None = None
    spec: str | None = None
    remarks: str | None = None
    registration_date: date | None = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class RecordMovementRequest(BaseModel):
    """Inbound or outbound stock movement.

    For products, ``serial_number`` may be a single serial or a range
    such as ``SN00001~SN00010``; each serial is recorded as its own
    movement of quantity 1.
    """

    type: TransactionType = Field(..., description="purchase (in) or release (out)")
    quantity: int = Field(default=0, ge=0, description="Ignored when serials are given")
    serial_number: str | None = Field(default=None, description="Serial or serial range")
    date: datetime | None = Field(default=None, description="Defaults to now")
    remarks: str | None = None
    model_name: str | None = Field(default=None, description="Model (parts)")
    user_id: str | None = None
    customer_name: str | None = None
    address: str | None = None
    phone_number: str | None = None

    model_config = ConfigDict(protected_namespaces=())

    def details(self) -> dict[str, Any]:
        return self.model_dump(
            include={
                "remarks",
                "model_name",
                "user_id",
                "customer_name",
                "address",
                "phone_number",
            },
            exclude_none=True,
        )


class UpdateTransactionRequest(BaseModel):
    """Replace fields of one recorded movement. Omitted fields are kept."""

    type: TransactionType | None = None
    quantity: int | None = Field(default=None, gt=0)
    date: datetime | None = None
    remarks: str | None = None
    model_name: str | None = None
    user_id: str | None = None
    serial_number: str | None = None
    customer_name: str | None = None
    address: str | None = None
    phone_number: str | None = None

    model_config = ConfigDict(protected_namespaces=())

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ImportSnapshotRequest(BaseModel):
    """Backup document, as produced by the snapshot export."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[dict[str, Any]] = Field(..., description="Items in wire format")
    version: str | None = None
    export_date: datetime | None = None

    def document(self) -> dict[str, Any]:
        return {"items": self.items}
