"""
Structured logging configuration using structlog.

Provides JSON logging for production and colored console output for development.
Every event carries the snapshot key and remote sync mode, and values of
secret-bearing keys (role secrets, the remote token) never reach the output.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from stockledger.config.settings import Settings, get_settings

REDACTED = "***"

# Substrings of event keys whose values are never logged
SENSITIVE_KEY_PARTS = ("secret", "token", "password", "authorization")


def redact_secrets(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace values of secret-bearing keys, including one level of nesting."""
    for key, value in event_dict.items():
        if _is_sensitive(key):
            event_dict[key] = REDACTED
        elif isinstance(value, dict):
            event_dict[key] = {
                k: REDACTED if _is_sensitive(k) else v for k, v in value.items()
            }
    return event_dict


def _is_sensitive(key: Any) -> bool:
    name = str(key).lower().replace("-", "_")
    return any(part in name for part in SENSITIVE_KEY_PARTS)


def app_context(settings: Settings) -> Processor:
    """Build a processor stamping app, snapshot key and sync mode on events."""
    context = {
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "snapshot_key": settings.storage.snapshot_key,
        "remote_sync": settings.remote.enabled,
    }

    def add_app_context(
        logger: logging.Logger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_app_context


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog for the application."""
    settings = settings or get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        app_context(settings),
        redact_secrets,
    ]

    if settings.environment == "development":
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )

    # Per-request and per-query chatter from the transport and cache layers
    for name in ("httpx", "httpcore", "aiosqlite", "uvicorn.access"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
