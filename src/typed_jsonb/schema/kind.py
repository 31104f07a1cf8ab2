"""Closed enumeration of the structural categories a schema node can describe."""

from __future__ import annotations

import json
from enum import StrEnum

from typed_jsonb.errors import UnknownKindError


class Kind(StrEnum):
    TABLE = "table"
    LIST = "list"
    NUMBER = "number"
    STRING = "string"
    BOOL = "bool"
    ANY = "any"

    @classmethod
    def parse(cls, tag: object) -> Kind:
        """Decode an external kind tag, rejecting anything outside the table."""
        if isinstance(tag, cls):
            return tag
        if not isinstance(tag, str):
            raise UnknownKindError(tag)
        try:
            return cls(tag)
        except ValueError as exc:
            raise UnknownKindError(tag) from exc

    def to_json(self) -> bytes:
        return json.dumps(self.value).encode("utf-8")

    @classmethod
    def from_json(cls, data: bytes | str) -> Kind:
        try:
            tag = json.loads(data)
        except (TypeError, ValueError) as exc:
            raise UnknownKindError(data) from exc
        return cls.parse(tag)


__all__ = ["Kind"]
