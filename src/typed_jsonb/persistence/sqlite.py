"""
typed-jsonb — sqlite3 boundary adapters

File: src/typed_jsonb/persistence/sqlite.py

Purpose
- Let documents be bound as ``sqlite3`` query parameters and scanned out of result rows.

What should be included in this file
- Adapters for every document class (bind side).
- Converters for the ``JSONB_LIST`` / ``JSONB_TABLE`` declared column types (scan side).
- A scan helper for rows fetched without ``detect_types``.

Functional requirements
- Bound documents are stored as UTF-8 TEXT so SQLite's JSON functions can read them.
- Column bytes go through the document's leading-byte sniff; mismatches raise
  ``TypeMismatchError`` from the cursor fetch.

Non-functional requirements
- Registration is idempotent and does not open connections.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from typing import Final, TypeVar

from typed_jsonb.constants import SQLITE_LIST_COLUMN_TYPE, SQLITE_TABLE_COLUMN_TYPE
from typed_jsonb.document import Document, List, Table, TypedList, TypedTable
from typed_jsonb.errors import InvalidScanTypeError

TDocument = TypeVar("TDocument", List, Table)

_DOCUMENT_CLASSES: Final[tuple[type[Document], ...]] = (List, TypedList, Table, TypedTable)

_REGISTER_LOCK = threading.Lock()
_REGISTERED = False

logger = logging.getLogger(__name__)


def adapt_document(document: Document) -> str:
    """Bind-side adapter: serialize ``document`` for storage as TEXT."""
    return document.value().decode("utf-8")


def convert_list(data: bytes) -> List:
    return List.from_bytes(data)


def convert_table(data: bytes) -> Table:
    return Table.from_bytes(data)


def register_sqlite_types() -> None:
    """Register document adapters and column converters with ``sqlite3``.

    Converters only run on connections opened with
    ``detect_types=sqlite3.PARSE_DECLTYPES`` for columns declared as
    ``JSONB_LIST`` or ``JSONB_TABLE``.
    """
    global _REGISTERED
    with _REGISTER_LOCK:
        if _REGISTERED:
            return
        for document_class in _DOCUMENT_CLASSES:
            sqlite3.register_adapter(document_class, adapt_document)
        sqlite3.register_converter(SQLITE_LIST_COLUMN_TYPE, convert_list)
        sqlite3.register_converter(SQLITE_TABLE_COLUMN_TYPE, convert_table)
        _REGISTERED = True
    logger.debug(
        "sqlite document types registered",
        extra={"column_types": [SQLITE_LIST_COLUMN_TYPE, SQLITE_TABLE_COLUMN_TYPE]},
    )


def scan_value(document_class: type[TDocument], value: object) -> TDocument:
    """Scan a raw column value into ``document_class``.

    SQLite hands TEXT columns back as ``str`` when no converter runs; that text
    is re-encoded as UTF-8 before the document sees it. ``None`` (SQL NULL) is
    rejected like any other non-byte input. Attach a schema to the result with
    ``as_type`` to get a checked document.
    """
    if isinstance(value, str):
        value = value.encode("utf-8")
    if value is None:
        raise InvalidScanTypeError(f"cannot scan NULL into {document_class.__name__}")
    return document_class.from_bytes(value)


__all__ = [
    "adapt_document",
    "convert_list",
    "convert_table",
    "register_sqlite_types",
    "scan_value",
]
