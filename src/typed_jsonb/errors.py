"""
typed-jsonb — error hierarchy

File: src/typed_jsonb/errors.py

Purpose
- Typed, recoverable failures for every schema, cache, and boundary operation.

Functional requirements
- Every domain failure derives from ``JsonbError`` so callers can catch the family.
- Each class also derives from the closest builtin (``ValueError``/``TypeError``)
  so generic handlers keep working.

Non-functional requirements
- No import-time dependencies on the rest of the package.
"""

from __future__ import annotations


class JsonbError(Exception):
    """Base class for typed-jsonb errors."""


class UnknownKindError(JsonbError, ValueError):
    """Raised when an encoded kind tag is not part of the closed enumeration."""

    def __init__(self, tag: object) -> None:
        super().__init__(f"no such kind: {tag!r}")
        self.tag = tag


class DecodeError(JsonbError, ValueError):
    """Raised when raw bytes are malformed JSON or have the wrong top-level shape."""


class EncodeError(JsonbError, ValueError):
    """Raised when a decoded value cannot be serialized."""


class TypeMismatchError(JsonbError, TypeError):
    """Raised when input has the wrong shape for a document before any full decode."""


class InvalidScanTypeError(TypeMismatchError):
    """Raised when a boundary adapter hands a document something other than bytes."""


class SchemaViolationError(JsonbError, ValueError):
    """Raised when a value, field, or element is prohibited by the attached type."""

    def __init__(self, reason: str, *, path: str = "$") -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class UnexpectedTypeError(JsonbError, TypeError):
    """Raised by typed accessors when an element does not have the requested type."""


class SchemaDefinitionError(JsonbError, ValueError):
    """Raised when a serialized schema definition is malformed."""


__all__ = [
    "DecodeError",
    "EncodeError",
    "InvalidScanTypeError",
    "JsonbError",
    "SchemaDefinitionError",
    "SchemaViolationError",
    "TypeMismatchError",
    "UnexpectedTypeError",
    "UnknownKindError",
]
