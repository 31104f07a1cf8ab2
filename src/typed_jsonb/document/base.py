"""
typed-jsonb — shared document behaviour

File: src/typed_jsonb/document/base.py

Purpose
- Read-only document surface shared by ``List`` and ``Table``.
- Checked-document surface shared by ``TypedList`` and ``TypedTable``.
- Boundary hooks: ``scan``/``value`` for byte stores, ``marshal_json``/``unmarshal_json``
  for JSON text codecs.

Functional requirements
- ``as_type`` validates the whole decoded value before handing out a checked document.
- Checked documents validate every mutation before it is committed; rejected
  mutations leave the cache exactly as it was.
- Decoded data handed to callers is a deep copy, so callers cannot bypass invalidation.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, ClassVar, NoReturn, TypeVar

from typed_jsonb.document.cache import CacheState, Container, DocumentCache
from typed_jsonb.errors import SchemaViolationError, TypeMismatchError
from typed_jsonb.schema.validator import find_violation

if TYPE_CHECKING:
    from typed_jsonb.schema.kind import Kind
    from typed_jsonb.schema.types import Type

TDocument = TypeVar("TDocument", bound="Document")
TChecked = TypeVar("TChecked", bound="CheckedDocument")

logger = logging.getLogger(__name__)


class Document:
    """Unchecked document: any JSON container of the right top-level shape."""

    kind: ClassVar[Kind]
    checked_class: ClassVar[type[CheckedDocument]]

    __slots__ = ("_cache",)

    def __init__(self) -> None:
        self._cache = DocumentCache(self.kind)

    @classmethod
    def from_bytes(cls: type[TDocument], src: bytes | bytearray | memoryview) -> TDocument:
        """Build a document from raw store bytes, as a byte-store scan would."""
        document = cls()
        document.scan(src)
        return document

    @property
    def state(self) -> CacheState:
        return self._cache.state

    def decode(self) -> Container:
        """Return a copy of the decoded document, parsing raw bytes on first use."""
        return copy.deepcopy(self._cache.decode())

    def encode(self) -> bytes:
        """Return the serialized document, releasing the decoded cache if it was authoritative."""
        return self._cache.encode()

    def scan(self, src: object) -> None:
        """Byte-store ingestion: keep ``src`` raw after a leading-byte shape sniff."""
        self._cache.load_raw(src)

    def value(self) -> bytes:
        """Byte-store emission."""
        return self._cache.encode()

    def marshal_json(self) -> bytes:
        return self._cache.encode()

    def unmarshal_json(self, data: bytes | str) -> None:
        """Parse ``data`` straight into the decoded cache, bypassing raw."""
        self._cache.load_decoded(self._cache.parse(data))

    def as_type(self, schema: Type) -> CheckedDocument:
        """Validate the whole document against ``schema`` and return a checked copy."""
        self._require_kind(schema)
        violation = find_violation(schema, self._cache.decode())
        if violation is not None:
            logger.debug(
                "schema attach rejected",
                extra={"document": self.kind.value, "path": violation.path, "reason": violation.reason},
            )
            raise SchemaViolationError(violation.reason, path=violation.path)
        return self.as_type_unsafe(schema)

    def as_type_unsafe(self, schema: Type) -> CheckedDocument:
        """Attach ``schema`` without validating; the caller vouches for the contents."""
        self._require_kind(schema)
        return self.checked_class._from_cache(schema, self._cache.copy())

    def __len__(self) -> int:
        return len(self._cache.decode())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self.state.value})"

    def _require_kind(self, schema: Type) -> None:
        if schema.kind is not self.kind:
            raise TypeMismatchError(
                f"{type(self).__name__} needs a {self.kind.value} type, got {schema.kind.value}"
            )


class CheckedDocument(Document):
    """Document with an attached schema that every mutation is validated against."""

    __slots__ = ("_schema",)

    def __init__(self, schema: Type) -> None:
        super().__init__()
        self._require_kind(schema)
        self._schema = schema

    @classmethod
    def _from_cache(cls: type[TChecked], schema: Type, cache: DocumentCache) -> TChecked:
        document = cls.__new__(cls)
        document._cache = cache
        document._schema = schema
        return document

    @property
    def schema(self) -> Type:
        return self._schema

    def unmarshal_json(self, data: bytes | str) -> None:
        """Parse and validate ``data``; on violation the previous state is kept."""
        decoded = self._cache.parse(data)
        self._check(self._schema, decoded, path="$")
        self._cache.load_decoded(decoded)

    def _check(self, schema: Type, value: object, *, path: str) -> None:
        violation = find_violation(schema, value, path=path)
        if violation is not None:
            self._reject(violation.reason, path=violation.path)

    def _reject(self, reason: str, *, path: str = "$") -> NoReturn:
        logger.debug(
            "mutation rejected",
            extra={"document": self.kind.value, "path": path, "reason": reason},
        )
        raise SchemaViolationError(reason, path=path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self._schema.kind.value}, state={self.state.value})"


__all__ = ["CheckedDocument", "Document"]
