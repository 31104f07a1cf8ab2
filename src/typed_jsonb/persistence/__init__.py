"""
typed-jsonb — boundary adapters

File: src/typed_jsonb/persistence/__init__.py

Purpose
- Glue that exposes documents to byte-oriented stores (``sqlite3``) and to the ``json`` codec.

Non-functional requirements
- Importing this package registers nothing; call ``register_sqlite_types`` explicitly.
"""

from typed_jsonb.persistence.json_codec import DocumentJSONEncoder, json_default
from typed_jsonb.persistence.sqlite import (
    adapt_document,
    convert_list,
    convert_table,
    register_sqlite_types,
    scan_value,
)

__all__ = [
    "DocumentJSONEncoder",
    "adapt_document",
    "convert_list",
    "convert_table",
    "json_default",
    "register_sqlite_types",
    "scan_value",
]
