"""
Two-tier static-secret access gate.

This gate exists to stop accidental destructive clicks on a
single-tenant deployment. Secrets are compared in memory, never hashed,
rate-limited or rotated. Do not treat it as a security boundary.
"""

import secrets
from collections.abc import Callable
from typing import TypeVar

from stockledger.config import get_logger
from stockledger.core.entities.access import (
    ActionState,
    AuthorizationDecision,
    ProtectedActionKind,
    Role,
)
from stockledger.core.entities.inventory import ItemType
from stockledger.core.exceptions import AuthorizationError

logger = get_logger(__name__)

T = TypeVar("T")


def can_access_category(role: Role, item_type: ItemType) -> bool:
    """Product-only users never see or touch parts."""
    return role == Role.ADMIN or item_type == ItemType.PRODUCT


def ensure_category_access(role: Role, item_type: ItemType) -> None:
    """Raise AuthorizationError when the role may not access the category."""
    if not can_access_category(role, item_type):
        raise AuthorizationError(
            f"role '{role.value}' cannot access {item_type.value} items",
            role=role.value,
        )


class AccessControl:
    """Maps static secrets to roles and checks re-entered secrets."""

    def __init__(self, admin_secret: str, product_only_secret: str):
        if admin_secret == product_only_secret:
            raise ValueError("Role secrets must differ")
        self._secrets = {
            Role.ADMIN: admin_secret,
            Role.PRODUCT_ONLY: product_only_secret,
        }

    def authenticate(self, secret: str) -> Role:
        """
        Resolve the role for a login secret.

        Raises:
            AuthorizationError: Secret matches no role.
        """
        for role, expected in self._secrets.items():
            if secrets.compare_digest(secret.encode(), expected.encode()):
                logger.info("login_succeeded", role=role.value)
                return role
        logger.info("login_rejected")
        raise AuthorizationError("invalid secret")

    def authorize(
        self,
        role: Role,
        attempted_secret: str,
        action: ProtectedActionKind,
    ) -> AuthorizationDecision:
        """Check a re-entered secret for one protected action."""
        expected = self._secrets[role]
        if secrets.compare_digest(attempted_secret.encode(), expected.encode()):
            return AuthorizationDecision(authorized=True, role=role, action=action)
        return AuthorizationDecision(
            authorized=False,
            role=role,
            action=action,
            reason="secret mismatch",
        )


class ProtectedAction:
    """
    One destructive or corrective action awaiting secret re-entry.

    REQUESTED -> AWAITING_SECRET -> APPLIED | CANCELLED

    A wrong secret leaves the action in AWAITING_SECRET so the caller
    can retry; nothing is applied until the secret matches.
    """

    def __init__(
        self,
        access: AccessControl,
        role: Role,
        kind: ProtectedActionKind,
        target_id: str | None = None,
    ):
        self._access = access
        self.role = role
        self.kind = kind
        self.target_id = target_id
        self.state = ActionState.REQUESTED

    def request_secret(self) -> None:
        """Enter AWAITING_SECRET on user intent."""
        if self.state != ActionState.REQUESTED:
            raise RuntimeError(f"Cannot request secret from state {self.state.value}")
        self.state = ActionState.AWAITING_SECRET

    def confirm(self, attempted_secret: str, apply: Callable[[], T]) -> T:
        """
        Apply the action if the secret matches.

        Raises:
            AuthorizationError: Secret mismatch; state unchanged.
        """
        if self.state != ActionState.AWAITING_SECRET:
            raise RuntimeError(f"Cannot confirm from state {self.state.value}")

        decision = self._access.authorize(self.role, attempted_secret, self.kind)
        if not decision.authorized:
            logger.info(
                "protected_action_denied",
                action=self.kind.value,
                role=self.role.value,
                target_id=self.target_id,
            )
            raise AuthorizationError(
                decision.reason or "denied",
                action=self.kind.value,
                role=self.role.value,
            )

        result = apply()
        self.state = ActionState.APPLIED
        logger.info(
            "protected_action_applied",
            action=self.kind.value,
            role=self.role.value,
            target_id=self.target_id,
        )
        return result

    def cancel(self) -> None:
        """Abandon the action without applying it."""
        if self.state in (ActionState.APPLIED, ActionState.CANCELLED):
            return
        self.state = ActionState.CANCELLED
