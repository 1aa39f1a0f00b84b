"""
Domain exceptions for the StockLedger application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class StockLedgerError(Exception):
    """Base exception for all StockLedger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(StockLedgerError):
    """Input validation failed. The operation was not applied."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class DuplicateCodeError(ValidationError):
    """Item code already used by another item (case-insensitive)."""

    def __init__(self, code: str, existing_id: str):
        super().__init__(
            field="code",
            message=f"Code '{code}' is already in use",
            value=code,
        )
        self.code = "DUPLICATE_CODE"
        self.details["existing_id"] = existing_id


class DuplicateSerialError(ValidationError):
    """One or more serial numbers already exist in the registry."""

    def __init__(self, serials: list[str], total: int | None = None):
        shown = ", ".join(serials)
        more = "..." if total is not None and total > len(serials) else ""
        super().__init__(
            field="serial_number",
            message=f"Serial numbers already registered: {shown}{more}",
        )
        self.code = "DUPLICATE_SERIAL"
        self.details.update(
            {
                "serials": serials,
                "total": total if total is not None else len(serials),
            }
        )


class InsufficientStockError(ValidationError):
    """Outbound quantity exceeds the currently derived stock."""

    def __init__(self, item_code: str, requested: int, available: int):
        super().__init__(
            field="quantity",
            message=(
                f"Outbound quantity {requested} exceeds current stock "
                f"{available} for '{item_code}'"
            ),
            value=requested,
        )
        self.code = "INSUFFICIENT_STOCK"
        self.details.update(
            {
                "item_code": item_code,
                "requested": requested,
                "available": available,
            }
        )


class RangeTooLargeError(StockLedgerError):
    """Serial range expands to more entries than allowed."""

    def __init__(self, text: str, count: int, limit: int):
        super().__init__(
            f"Serial range '{text}' expands to {count} entries (max {limit})",
            code="RANGE_TOO_LARGE",
            details={"input": text, "count": count, "limit": limit},
        )


# Lookup Exceptions
class NotFoundError(StockLedgerError):
    """Base exception for missing ledger records."""

    pass


class ItemNotFoundError(NotFoundError):
    """Item not found in the inventory."""

    def __init__(self, item_id: str):
        super().__init__(
            f"Item not found: {item_id}",
            code="ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class TransactionNotFoundError(NotFoundError):
    """Transaction not found on the given item."""

    def __init__(self, item_id: str, transaction_id: str):
        super().__init__(
            f"Transaction not found: {transaction_id} (item {item_id})",
            code="TRANSACTION_NOT_FOUND",
            details={"item_id": item_id, "transaction_id": transaction_id},
        )


# Access Exceptions
class AuthorizationError(StockLedgerError):
    """Secret mismatch or role not allowed. The operation was not applied."""

    def __init__(self, reason: str, action: str | None = None, role: str | None = None):
        super().__init__(
            f"Not authorized: {reason}",
            code="AUTHORIZATION_FAILED",
            details={"reason": reason, "action": action, "role": role},
        )


# Sync Exceptions
class SyncFailure(StockLedgerError):
    """Fetching from or pushing to a snapshot store failed."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"Sync {operation} failed: {reason}",
            code="SYNC_FAILURE",
            details={"operation": operation, "reason": reason},
        )


class StorageError(StockLedgerError):
    """Local snapshot storage failed."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(StockLedgerError):
    """Configuration error."""

    pass
