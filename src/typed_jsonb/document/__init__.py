"""Public document primitives: cached list/table wrappers and their checked variants."""

from typed_jsonb.document.base import CheckedDocument, Document
from typed_jsonb.document.cache import CacheState, DocumentCache, JSONValue
from typed_jsonb.document.lists import List, TypedList, new_list
from typed_jsonb.document.tables import Table, TypedTable, new_table

__all__ = [
    "CacheState",
    "CheckedDocument",
    "Document",
    "DocumentCache",
    "JSONValue",
    "List",
    "Table",
    "TypedList",
    "TypedTable",
    "new_list",
    "new_table",
]
