"""Application use cases."""

from stockledger.application.use_cases.manage_items import (
    CreateItemUseCase,
    DeleteItemUseCase,
    UpdateItemUseCase,
)
from stockledger.application.use_cases.manage_transactions import (
    DeleteTransactionUseCase,
    UpdateTransactionUseCase,
)
from stockledger.application.use_cases.query_inventory import GetItemUseCase, ListItemsUseCase
from stockledger.application.use_cases.record_movement import (
    RecordMovementResult,
    RecordMovementUseCase,
)
from stockledger.application.use_cases.snapshots import (
    ExportSnapshotUseCase,
    ImportSnapshotUseCase,
)

__all__ = [
    "ListItemsUseCase",
    "GetItemUseCase",
    "CreateItemUseCase",
    "UpdateItemUseCase",
    "DeleteItemUseCase",
    "RecordMovementUseCase",
    "RecordMovementResult",
    "UpdateTransactionUseCase",
    "DeleteTransactionUseCase",
    "ExportSnapshotUseCase",
    "ImportSnapshotUseCase",
]
