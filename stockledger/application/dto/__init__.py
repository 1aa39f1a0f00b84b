"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.
"""

from stockledger.application.dto.requests import (
    CreateItemRequest,
    ImportSnapshotRequest,
    LoginRequest,
    RecordMovementRequest,
    UpdateItemRequest,
    UpdateTransactionRequest,
)
from stockledger.application.dto.responses import (
    ErrorResponse,
    FlushResponse,
    HealthResponse,
    ImportSnapshotResponse,
    ItemListResponse,
    ItemResponse,
    MovementResponse,
    SessionResponse,
    StorageStatusResponse,
    SuggestionResponse,
    SyncStatusResponse,
    TransactionResponse,
)

__all__ = [
    # Requests
    "LoginRequest",
    "CreateItemRequest",
    "UpdateItemRequest",
    "RecordMovementRequest",
    "UpdateTransactionRequest",
    "ImportSnapshotRequest",
    # Responses
    "ItemResponse",
    "ItemListResponse",
    "TransactionResponse",
    "MovementResponse",
    "SuggestionResponse",
    "SessionResponse",
    "SyncStatusResponse",
    "FlushResponse",
    "ImportSnapshotResponse",
    "StorageStatusResponse",
    "HealthResponse",
    "ErrorResponse",
]
