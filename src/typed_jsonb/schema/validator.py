"""
typed-jsonb — structural validation

File: src/typed_jsonb/schema/validator.py

Purpose
- Decide whether an already-decoded JSON value conforms to a ``Type`` tree.
- Report the location and reason of the first violation for error messages.

Functional requirements
- Tables are closed-world: any key missing from the schema invalidates the value.
- Absent table fields are accepted; absent or non-positive bounds accept any length.
- Numbers are ``int`` or finite ``float``; ``bool`` is never a number.
- Total: malformed input is reported as invalid, never raised.

Non-functional requirements
- Walks an explicit work stack, so document nesting depth never touches the
  interpreter recursion limit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from typed_jsonb.schema.kind import Kind

if TYPE_CHECKING:
    from typed_jsonb.schema.types import Type

ROOT_PATH = "$"


@dataclass(frozen=True, slots=True)
class Violation:
    """First point at which a value diverges from its schema."""

    path: str
    reason: str


def is_valid(schema: Type, value: object) -> bool:
    return find_violation(schema, value) is None


def find_violation(schema: Type, value: object, *, path: str = ROOT_PATH) -> Violation | None:
    """Return the first violation of ``schema`` by ``value``, or ``None`` when valid.

    Containers are checked before their children; list elements are visited in
    order, table fields in insertion order of the value.
    """
    pending: list[tuple[Type, object, str]] = [(schema, value, path)]
    while pending:
        node, candidate, where = pending.pop()
        kind = node.kind

        if kind is Kind.ANY:
            continue

        if kind is Kind.TABLE:
            if type(candidate) is not dict:
                return Violation(where, f"expected table, got {_shape_name(candidate)}")
            fields = node.fields or {}
            children: list[tuple[Type, object, str]] = []
            for key, item in candidate.items():
                field_type = fields.get(key) if isinstance(key, str) else None
                if field_type is None:
                    return Violation(where, f"unexpected field {key!r}")
                children.append((field_type, item, f"{where}.{key}"))
            pending.extend(reversed(children))
            continue

        if kind is Kind.LIST:
            if type(candidate) is not list:
                return Violation(where, f"expected list, got {_shape_name(candidate)}")
            if node.max_length > 0 and len(candidate) > node.max_length:
                return Violation(
                    where, f"list holds {len(candidate)} items, max is {node.max_length}"
                )
            element_type = node.element_type
            if element_type is None:
                return Violation(where, "list type has no element type")
            pending.extend(
                (element_type, item, f"{where}[{index}]")
                for index, item in reversed(list(enumerate(candidate)))
            )
            continue

        if kind is Kind.NUMBER:
            if not _is_number(candidate):
                return Violation(where, f"expected number, got {_shape_name(candidate)}")
            continue

        if kind is Kind.STRING:
            if not isinstance(candidate, str):
                return Violation(where, f"expected string, got {_shape_name(candidate)}")
            if node.max_length > 0 and len(candidate) > node.max_length:
                return Violation(
                    where, f"string holds {len(candidate)} characters, max is {node.max_length}"
                )
            continue

        if kind is Kind.BOOL:
            if not isinstance(candidate, bool):
                return Violation(where, f"expected bool, got {_shape_name(candidate)}")
            continue

        return Violation(where, f"unsupported kind {kind!r}")

    return None


def _is_number(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    return False


def _shape_name(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "list"
    if isinstance(value, dict):
        return "table"
    return type(value).__name__


__all__ = ["ROOT_PATH", "Violation", "find_violation", "is_valid"]
