"""JSON object documents.

``Table`` is the unchecked, read-only wrapper a byte store hands back;
``TypedTable`` validates each field write against its table type.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from typing import TYPE_CHECKING, cast

from typed_jsonb.document.base import CheckedDocument, Document
from typed_jsonb.schema.kind import Kind

if TYPE_CHECKING:
    from typed_jsonb.document.cache import JSONValue
    from typed_jsonb.schema.types import Type


class Table(Document):
    kind = Kind.TABLE

    __slots__ = ()

    def as_type(self, schema: Type) -> TypedTable:
        return cast("TypedTable", super().as_type(schema))

    def as_type_unsafe(self, schema: Type) -> TypedTable:
        return cast("TypedTable", super().as_type_unsafe(schema))

    def _items(self) -> dict[str, JSONValue]:
        return cast("dict[str, JSONValue]", self._cache.decode())


class TypedTable(CheckedDocument, Table):
    """Table whose fields are checked against ``schema.fields``."""

    __slots__ = ()

    def set(self, key: str, value: JSONValue) -> None:
        """Write ``value`` to ``key``; unknown keys and invalid values are rejected."""
        field_type = self._schema.field(key) if isinstance(key, str) else None
        if field_type is None:
            self._reject(f"unexpected field {key!r}", path=f"$.{key}")
        self._check(field_type, value, path=f"$.{key}")

        with self._cache.mutation() as decoded:
            cast("dict[str, JSONValue]", decoded)[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        """Remove ``key`` if present. Fields are optional, so removal is always valid."""
        if key not in self._items():
            return
        with self._cache.mutation() as decoded:
            del cast("dict[str, JSONValue]", decoded)[key]

    def get(self, key: str, default: JSONValue = None) -> JSONValue:
        return copy.deepcopy(self._items().get(key, default))

    def keys(self) -> list[str]:
        return list(self._items())

    def to_dict(self) -> dict[str, JSONValue]:
        return copy.deepcopy(self._items())

    def __contains__(self, key: object) -> bool:
        return key in self._items()

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())


Table.checked_class = TypedTable


def new_table(schema: Type) -> TypedTable:
    """Return a fresh, empty ``TypedTable`` of ``schema``."""
    return TypedTable(schema)


__all__ = ["Table", "TypedTable", "new_table"]
