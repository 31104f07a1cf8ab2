"""
typed-jsonb — dual-representation document cache

File: src/typed_jsonb/document/cache.py

Purpose
- Hold one JSON container as raw bytes, as a decoded Python structure, or both.
- Own every transition between those representations.

Functional requirements
- States are RAW_ONLY, DECODED_ONLY, and BOTH; at least one side is always populated.
- Loading raw bytes drops the decoded side; loading or mutating the decoded side drops raw.
- ``decode`` fills the decoded side and keeps raw; ``encode`` fills raw and drops decoded.
- A top-level shape mismatch on decode is a ``DecodeError``, as are ``NaN``/``Infinity``
  literals and numbers that overflow a float.

Non-functional requirements
- Raw buffers are owned: mutable byte buffers are copied on load.
- Document payloads are never written to logs.
"""

from __future__ import annotations

import copy
import json
import logging
import math
from collections.abc import Iterator
from contextlib import contextmanager
from enum import StrEnum
from typing import Final, NoReturn

from typed_jsonb.config import get_settings
from typed_jsonb.constants import LIST_LEADING_BYTE, TABLE_LEADING_BYTE
from typed_jsonb.errors import DecodeError, EncodeError, InvalidScanTypeError, TypeMismatchError
from typed_jsonb.schema.kind import Kind

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]
Container = list[JSONValue] | dict[str, JSONValue]

_LEADING_BYTES: Final[dict[Kind, int]] = {
    Kind.LIST: LIST_LEADING_BYTE,
    Kind.TABLE: TABLE_LEADING_BYTE,
}
_CONTAINER_TYPES: Final[dict[Kind, type]] = {
    Kind.LIST: list,
    Kind.TABLE: dict,
}

logger = logging.getLogger(__name__)


def _reject_constant(token: str) -> NoReturn:
    raise ValueError(f"{token} is not a JSON value")


def _finite_float(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"number {token} is out of range")
    return value


class CacheState(StrEnum):
    RAW_ONLY = "raw_only"
    DECODED_ONLY = "decoded_only"
    BOTH = "both"


def owned_bytes(src: object) -> bytes:
    """Return an immutable copy of a bytes-like boundary value."""
    if isinstance(src, bytes):
        return src
    if isinstance(src, (bytearray, memoryview)):
        return bytes(src)
    raise InvalidScanTypeError(f"expected bytes-like value, got {type(src).__name__}")


class DocumentCache:
    """Three-state cache for a single list- or table-shaped JSON document."""

    __slots__ = ("_decoded", "_kind", "_raw")

    def __init__(self, kind: Kind, *, decoded: Container | None = None) -> None:
        if kind not in _CONTAINER_TYPES:
            raise TypeMismatchError(f"documents hold lists or tables, not {kind.value!r}")
        self._kind = kind
        self._raw: bytes | None = None
        self._decoded: Container | None = (
            decoded if decoded is not None else _CONTAINER_TYPES[kind]()
        )

    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def state(self) -> CacheState:
        if self._raw is None:
            return CacheState.DECODED_ONLY
        if self._decoded is None:
            return CacheState.RAW_ONLY
        return CacheState.BOTH

    @property
    def raw(self) -> bytes | None:
        return self._raw

    @property
    def decoded(self) -> Container | None:
        return self._decoded

    def copy(self) -> DocumentCache:
        """Independent cache with the same contents; raw bytes are shared, decoded data is not."""
        clone = DocumentCache.__new__(DocumentCache)
        clone._kind = self._kind
        clone._raw = self._raw
        clone._decoded = copy.deepcopy(self._decoded)
        return clone

    def sniff(self, src: object) -> bytes:
        """Cheap shape check on inbound bytes; no JSON parsing happens here."""
        data = owned_bytes(src)
        if not data:
            raise TypeMismatchError(f"empty input for {self._kind.value} document")
        if data[0] != _LEADING_BYTES[self._kind]:
            raise TypeMismatchError(
                f"{self._kind.value} document must start with "
                f"{chr(_LEADING_BYTES[self._kind])!r}, got {chr(data[0])!r}"
            )
        return data

    def load_raw(self, src: object) -> None:
        """RAW_ONLY: adopt sniffed bytes and drop the decoded side."""
        self._raw = self.sniff(src)
        self._decoded = None
        logger.debug(
            "document scanned",
            extra={"document": self._kind.value, "state": self.state.value, "size": len(self._raw)},
        )

    def load_decoded(self, value: Container) -> None:
        """DECODED_ONLY: adopt a decoded container and drop raw."""
        self._require_shape(value)
        self._decoded = value
        self._raw = None

    def decode(self) -> Container:
        if self._decoded is not None:
            return self._decoded

        if self._raw is None:
            raise DecodeError(f"{self._kind.value} document cache holds no data")
        self._decoded = self.parse(self._raw)
        logger.debug(
            "document decoded",
            extra={"document": self._kind.value, "state": self.state.value, "size": len(self._raw)},
        )
        return self._decoded

    def encode(self) -> bytes:
        if self._raw is not None:
            return self._raw

        if self._decoded is None:
            raise EncodeError(f"{self._kind.value} document cache holds no data")
        encoding = get_settings().encoding
        try:
            text = json.dumps(
                self._decoded,
                allow_nan=False,
                ensure_ascii=encoding.ensure_ascii,
                separators=encoding.separators,
                sort_keys=encoding.sort_keys,
            )
        except (TypeError, ValueError, RecursionError) as exc:
            raise EncodeError(f"cannot serialize {self._kind.value} document: {exc}") from exc

        self._raw = text.encode("utf-8")
        self._decoded = None
        logger.debug(
            "document encoded",
            extra={"document": self._kind.value, "state": self.state.value, "size": len(self._raw)},
        )
        return self._raw

    def parse(self, data: bytes | str) -> Container:
        """Parse ``data`` into this cache's container shape without touching state."""
        try:
            value = json.loads(data, parse_constant=_reject_constant, parse_float=_finite_float)
        except (ValueError, RecursionError) as exc:
            raise DecodeError(f"invalid JSON for {self._kind.value} document: {exc}") from exc
        if type(value) is not _CONTAINER_TYPES[self._kind]:
            raise DecodeError(
                f"expected JSON {self._kind.value}, got {type(value).__name__}"
            )
        return value

    @contextmanager
    def mutation(self) -> Iterator[Container]:
        """DECODED_ONLY after the block: yield the decoded container for an in-place edit."""
        value = self.decode()
        try:
            yield value
        finally:
            self._raw = None

    def _require_shape(self, value: object) -> None:
        if type(value) is not _CONTAINER_TYPES[self._kind]:
            raise TypeMismatchError(
                f"{self._kind.value} document cannot hold {type(value).__name__}"
            )


__all__ = [
    "CacheState",
    "Container",
    "DocumentCache",
    "JSONValue",
    "owned_bytes",
]
