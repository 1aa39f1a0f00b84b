"""Access roles and protected-action entities."""

from enum import Enum

from pydantic import BaseModel


class Role(str, Enum):
    """Access roles resolved from a static secret."""

    ADMIN = "admin"
    PRODUCT_ONLY = "product_only"


class ProtectedActionKind(str, Enum):
    """Operations that require the role secret to be re-entered."""

    EDIT_ITEM = "edit_item"
    DELETE_ITEM = "delete_item"
    EDIT_TRANSACTION = "edit_transaction"
    DELETE_TRANSACTION = "delete_transaction"
    IMPORT_SNAPSHOT = "import_snapshot"


class ActionState(str, Enum):
    """Lifecycle of a protected action."""

    REQUESTED = "requested"
    AWAITING_SECRET = "awaiting_secret"
    APPLIED = "applied"
    CANCELLED = "cancelled"


class AuthorizationDecision(BaseModel):
    """Outcome of a secret check for one protected action."""

    authorized: bool
    role: Role
    action: ProtectedActionKind
    reason: str | None = None
