"""Stable constants shared across the schema, document, and boundary layers."""

from __future__ import annotations

from typing import Final

# Leading bytes accepted by the cheap shape sniff on ingestion.
LIST_LEADING_BYTE: Final[int] = ord("[")
TABLE_LEADING_BYTE: Final[int] = ord("{")

# Declared SQL column types routed through the sqlite converters.
SQLITE_LIST_COLUMN_TYPE: Final[str] = "JSONB_LIST"
SQLITE_TABLE_COLUMN_TYPE: Final[str] = "JSONB_TABLE"

# Runtime settings.
DEFAULT_CONFIG_FILE: Final[str] = "typed_jsonb.toml"
ENV_PREFIX: Final[str] = "TYPED_JSONB_"
ROOT_LOGGER_NAME: Final[str] = "typed_jsonb"

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "ENV_PREFIX",
    "LIST_LEADING_BYTE",
    "ROOT_LOGGER_NAME",
    "SQLITE_LIST_COLUMN_TYPE",
    "SQLITE_TABLE_COLUMN_TYPE",
    "TABLE_LEADING_BYTE",
]
