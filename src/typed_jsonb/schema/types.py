"""
typed-jsonb — schema descriptors

File: src/typed_jsonb/schema/types.py

Purpose
- Immutable recursive ``Type`` nodes describing the shape of a JSON value.
- Pure factories for every kind, plus shared instances for the unparameterized ones.

Functional requirements
- ``element_type`` is present iff the kind is LIST.
- ``max_length`` is only meaningful for LIST and STRING; ``<= 0`` means unbounded.
- ``fields`` is present for TABLE, and mirrors the element's fields for a list of tables.

Non-functional requirements
- A constructed ``Type`` never changes, so it can be shared freely across documents and threads.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import NoReturn

from typed_jsonb.schema import validator
from typed_jsonb.schema.kind import Kind

_BOUNDED_KINDS = frozenset({Kind.LIST, Kind.STRING})


def _fail(message: str) -> NoReturn:
    raise ValueError(f"Type: {message}")


@dataclass(frozen=True, slots=True)
class Type:
    """Schema node. Build with the module factories rather than directly."""

    kind: Kind
    element_type: Type | None = None
    max_length: int = 0
    fields: Mapping[str, Type] | None = None

    def __post_init__(self) -> None:
        kind = Kind.parse(self.kind)
        object.__setattr__(self, "kind", kind)

        if isinstance(self.max_length, bool) or not isinstance(self.max_length, int):
            _fail(f"max_length must be an integer, got {type(self.max_length).__name__}")
        if self.max_length > 0 and kind not in _BOUNDED_KINDS:
            _fail(f"max_length is not supported for kind {kind.value!r}")

        if kind is Kind.LIST:
            if not isinstance(self.element_type, Type):
                _fail("list types require an element type")
        elif self.element_type is not None:
            _fail(f"element_type is not supported for kind {kind.value!r}")

        if self.fields is None:
            if kind is Kind.TABLE:
                object.__setattr__(self, "fields", MappingProxyType({}))
            return

        if kind is Kind.LIST:
            if self.element_type is None or self.element_type.kind is not Kind.TABLE:
                _fail("fields are only carried by lists whose elements are tables")
        elif kind is not Kind.TABLE:
            _fail(f"fields are not supported for kind {kind.value!r}")

        frozen: dict[str, Type] = {}
        for name, field_type in self.fields.items():
            if not isinstance(name, str):
                _fail(f"field names must be strings, got {type(name).__name__}")
            if not isinstance(field_type, Type):
                _fail(f"field {name!r} must map to a Type, got {type(field_type).__name__}")
            frozen[name] = field_type
        object.__setattr__(self, "fields", MappingProxyType(frozen))

    def __hash__(self) -> int:
        field_items = None if self.fields is None else tuple(sorted(self.fields.items()))
        return hash((self.kind, self.element_type, self.max_length, field_items))

    @property
    def is_bounded(self) -> bool:
        return self.kind in _BOUNDED_KINDS and self.max_length > 0

    def field(self, name: str) -> Type | None:
        """Return the schema of ``name`` for tables and lists of tables."""
        if self.fields is None:
            return None
        return self.fields.get(name)

    def is_valid(self, value: object) -> bool:
        return validator.is_valid(self, value)


def number() -> Type:
    return NUMBER


def boolean() -> Type:
    return BOOL


def any_() -> Type:
    return ANY


def string(max_length: int = 0) -> Type:
    """A text scalar holding at most ``max_length`` characters when positive."""
    if max_length <= 0:
        return STRING
    return Type(Kind.STRING, max_length=max_length)


def table(fields: Mapping[str, Type]) -> Type:
    """An object whose keys must all be named in ``fields``."""
    return Type(Kind.TABLE, fields=fields)


def list_of(element_type: Type, max_length: int = 0) -> Type:
    """A sequence of ``element_type`` holding at most ``max_length`` items when positive.

    A list of tables exposes the element's field map so callers can look up
    field schemas without unwrapping the element type first.
    """
    fields = element_type.fields if element_type.kind is Kind.TABLE else None
    return Type(Kind.LIST, element_type=element_type, max_length=max_length, fields=fields)


NUMBER = Type(Kind.NUMBER)
BOOL = Type(Kind.BOOL)
STRING = Type(Kind.STRING)
ANY = Type(Kind.ANY)

__all__ = [
    "ANY",
    "BOOL",
    "NUMBER",
    "STRING",
    "Type",
    "any_",
    "boolean",
    "list_of",
    "number",
    "string",
    "table",
]
