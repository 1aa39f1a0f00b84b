"""API route modules."""

from stockledger.api.routes.health import router as health_router
from stockledger.api.routes.items import router as items_router
from stockledger.api.routes.session import router as session_router
from stockledger.api.routes.sync import router as sync_router

__all__ = [
    "health_router",
    "session_router",
    "items_router",
    "sync_router",
]
