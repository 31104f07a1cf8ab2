"""
typed-jsonb — statically declared schemas for JSON blobs

File: src/typed_jsonb/__init__.py

Purpose
- Package root. Re-exports the schema language, the document wrappers, and the error types.

Using unstructured JSON from a database column means trusting whatever shape
comes back. ``typed_jsonb`` describes the expected shape with ``Type`` trees
composed from ``Kind`` primitives and checks documents against them at the
boundary: ``List.from_bytes(raw).as_type(list_of(number()))`` fails with
``SchemaViolationError`` instead of letting a stray string through.

Functional requirements
- Must not have side effects at import time beyond installing a ``NullHandler``.
"""

import logging

from typed_jsonb.config import Settings, configure, get_settings, load_settings
from typed_jsonb.constants import ROOT_LOGGER_NAME
from typed_jsonb.document import (
    CacheState,
    List,
    Table,
    TypedList,
    TypedTable,
    new_list,
    new_table,
)
from typed_jsonb.errors import (
    DecodeError,
    EncodeError,
    InvalidScanTypeError,
    JsonbError,
    SchemaDefinitionError,
    SchemaViolationError,
    TypeMismatchError,
    UnexpectedTypeError,
    UnknownKindError,
)
from typed_jsonb.schema import (
    ANY,
    BOOL,
    NUMBER,
    STRING,
    Kind,
    Type,
    any_,
    boolean,
    list_of,
    load_schema_file,
    number,
    string,
    table,
)

__version__ = "0.1.0"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())

__all__ = [
    "ANY",
    "BOOL",
    "NUMBER",
    "STRING",
    "CacheState",
    "DecodeError",
    "EncodeError",
    "InvalidScanTypeError",
    "JsonbError",
    "Kind",
    "List",
    "SchemaDefinitionError",
    "SchemaViolationError",
    "Settings",
    "Table",
    "Type",
    "TypeMismatchError",
    "TypedList",
    "TypedTable",
    "UnexpectedTypeError",
    "UnknownKindError",
    "__version__",
    "any_",
    "boolean",
    "configure",
    "get_settings",
    "list_of",
    "load_schema_file",
    "load_settings",
    "new_list",
    "new_table",
    "number",
    "string",
    "table",
]
