"""Public observability primitives: structured logging for the ``typed_jsonb`` logger tree."""

from typed_jsonb.observability.logging import (
    JsonLineFormatter,
    LoggingConfig,
    setup_logging,
    setup_logging_from_settings,
    shutdown_logging,
)

__all__ = [
    "JsonLineFormatter",
    "LoggingConfig",
    "setup_logging",
    "setup_logging_from_settings",
    "shutdown_logging",
]
