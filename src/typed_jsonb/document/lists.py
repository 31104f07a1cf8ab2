"""JSON array documents.

``List`` gives read-only access to a blob of JSON that is only parsed on
demand; it is what a byte store hands back, whatever the array holds. To add
values, attach a type with ``as_type`` and use the resulting ``TypedList``,
whose appends are checked against that type.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, cast

from typed_jsonb.document.base import CheckedDocument, Document
from typed_jsonb.errors import TypeMismatchError, UnexpectedTypeError
from typed_jsonb.schema.kind import Kind

if TYPE_CHECKING:
    from typed_jsonb.document.cache import JSONValue
    from typed_jsonb.schema.types import Type


class List(Document):
    kind = Kind.LIST

    __slots__ = ()

    def as_type(self, schema: Type) -> TypedList:
        return cast("TypedList", super().as_type(schema))

    def as_type_unsafe(self, schema: Type) -> TypedList:
        return cast("TypedList", super().as_type_unsafe(schema))


class TypedList(CheckedDocument, List):
    """List whose elements are checked against ``schema.element_type``."""

    __slots__ = ()

    def append(self, value: JSONValue) -> None:
        """Append ``value``; raises ``SchemaViolationError`` if the type forbids it."""
        element_type = self._schema.element_type
        if element_type is None:
            raise TypeMismatchError("list type has no element type")

        items = cast("list[JSONValue]", self._cache.decode())
        self._check(element_type, value, path=f"$[{len(items)}]")

        max_length = self._schema.max_length
        if max_length > 0 and len(items) >= max_length:
            self._reject(f"list is full ({max_length} items)")

        with self._cache.mutation() as decoded:
            cast("list[JSONValue]", decoded).append(copy.deepcopy(value))

    def values(self) -> list[JSONValue]:
        """Return a copy of the elements. Lists attached with ``as_type_unsafe`` may hold anything."""
        return copy.deepcopy(cast("list[JSONValue]", self._cache.decode()))

    def int_values(self) -> list[int]:
        """Return the elements as ints; floats are truncated toward zero."""
        out: list[int] = []
        for index, item in enumerate(cast("list[JSONValue]", self._cache.decode())):
            if isinstance(item, bool) or not isinstance(item, (int, float)):
                raise UnexpectedTypeError(f"element {index} is {type(item).__name__}, not a number")
            try:
                out.append(int(item))
            except (OverflowError, ValueError) as exc:
                raise UnexpectedTypeError(f"element {index} is not a finite number") from exc
        return out

    def string_values(self) -> list[str]:
        out: list[str] = []
        for index, item in enumerate(cast("list[JSONValue]", self._cache.decode())):
            if not isinstance(item, str):
                raise UnexpectedTypeError(f"element {index} is {type(item).__name__}, not a string")
            out.append(item)
        return out


List.checked_class = TypedList


def new_list(schema: Type) -> TypedList:
    """Return a fresh, empty ``TypedList`` of ``schema``."""
    return TypedList(schema)


__all__ = ["List", "TypedList", "new_list"]
