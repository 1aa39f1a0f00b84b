"""HTTP API layer."""

from stockledger.api.main import create_app

__all__ = ["create_app"]
