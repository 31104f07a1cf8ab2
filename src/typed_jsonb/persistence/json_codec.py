"""Hooks for embedding documents inside larger JSON documents with the ``json`` module."""

from __future__ import annotations

import json
from typing import Any

from typed_jsonb.document import Document
from typed_jsonb.document.cache import JSONValue


def json_default(obj: object) -> JSONValue:
    """``default=`` hook for ``json.dumps``: documents serialize as their decoded value."""
    if isinstance(obj, Document):
        return obj.decode()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class DocumentJSONEncoder(json.JSONEncoder):
    """``cls=`` hook for ``json.dumps`` with the same behaviour as ``json_default``."""

    def default(self, o: Any) -> Any:
        if isinstance(o, Document):
            return o.decode()
        return super().default(o)


__all__ = ["DocumentJSONEncoder", "json_default"]
