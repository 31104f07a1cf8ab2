"""
typed-jsonb — schema definitions as data

File: src/typed_jsonb/schema/codec.py

Purpose
- Convert ``Type`` trees to and from plain JSON-compatible dictionaries.
- Load schema definition files written in JSON, YAML, or TOML.

Functional requirements
- Kind tags use the external string encoding of ``Kind``; unknown tags raise ``UnknownKindError``.
- A bare kind string is shorthand for an unparameterized scalar (``"number"``, ``"string"``, ...).
- Unknown or missing keys raise ``SchemaDefinitionError`` naming the offending path.

Non-functional requirements
- Output of ``type_to_dict`` is deterministic (table fields sorted by name).
"""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import NoReturn

import yaml

from typed_jsonb.errors import SchemaDefinitionError
from typed_jsonb.schema.kind import Kind
from typed_jsonb.schema.types import ANY, BOOL, NUMBER, Type, list_of, string, table

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]

_SCALAR_SHORTHAND: dict[Kind, Type] = {
    Kind.NUMBER: NUMBER,
    Kind.STRING: string(),
    Kind.BOOL: BOOL,
    Kind.ANY: ANY,
}

_ALLOWED_KEYS: dict[Kind, frozenset[str]] = {
    Kind.TABLE: frozenset({"kind", "fields"}),
    Kind.LIST: frozenset({"kind", "element", "max_length"}),
    Kind.NUMBER: frozenset({"kind"}),
    Kind.STRING: frozenset({"kind", "max_length"}),
    Kind.BOOL: frozenset({"kind"}),
    Kind.ANY: frozenset({"kind"}),
}

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def _fail(path: str, message: str) -> NoReturn:
    raise SchemaDefinitionError(f"{path}: {message}")


def type_to_dict(schema: Type) -> dict[str, JSONValue]:
    """Serialize ``schema`` into its canonical dictionary form."""
    payload: dict[str, JSONValue] = {"kind": schema.kind.value}
    if schema.kind is Kind.LIST:
        if schema.element_type is None:
            raise SchemaDefinitionError("list types require an element type")
        payload["element"] = type_to_dict(schema.element_type)
    if schema.is_bounded:
        payload["max_length"] = schema.max_length
    if schema.kind is Kind.TABLE:
        fields = schema.fields or {}
        payload["fields"] = {name: type_to_dict(fields[name]) for name in sorted(fields)}
    return payload


def type_from_dict(data: object, *, path: str = "schema") -> Type:
    """Build a ``Type`` from its dictionary (or bare kind string) form."""
    if isinstance(data, str):
        kind = Kind.parse(data)
        shorthand = _SCALAR_SHORTHAND.get(kind)
        if shorthand is None:
            _fail(path, f"kind {kind.value!r} needs an object definition")
        return shorthand

    if not isinstance(data, Mapping):
        _fail(path, f"expected object or kind string, got {type(data).__name__}")
    if "kind" not in data:
        _fail(path, "missing required field 'kind'")

    kind = Kind.parse(data["kind"])
    unknown = sorted(str(key) for key in data if key not in _ALLOWED_KEYS[kind])
    if unknown:
        _fail(path, f"unexpected fields for kind {kind.value!r}: {unknown}")

    if kind is Kind.TABLE:
        raw_fields = data.get("fields", {})
        if not isinstance(raw_fields, Mapping):
            _fail(f"{path}.fields", f"expected object, got {type(raw_fields).__name__}")
        fields: dict[str, Type] = {}
        for name, field_data in raw_fields.items():
            if not isinstance(name, str):
                _fail(f"{path}.fields", f"field names must be strings, got {type(name).__name__}")
            fields[name] = type_from_dict(field_data, path=f"{path}.fields.{name}")
        return table(fields)

    if kind is Kind.LIST:
        if "element" not in data:
            _fail(path, "missing required field 'element'")
        element = type_from_dict(data["element"], path=f"{path}.element")
        return list_of(element, _max_length(data, path))

    if kind is Kind.STRING:
        return string(_max_length(data, path))

    return _SCALAR_SHORTHAND[kind]


def dumps_schema(schema: Type, *, indent: int | None = 2) -> str:
    return json.dumps(type_to_dict(schema), indent=indent, sort_keys=False)


def loads_schema(text: str | bytes) -> Type:
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise SchemaDefinitionError(f"schema: invalid JSON: {exc}") from exc
    return type_from_dict(parsed)


def load_schema_file(path: str | Path) -> Type:
    """Load a schema definition from a ``.json``, ``.yaml``/``.yml`` or ``.toml`` file."""
    resolved = Path(path)
    suffix = resolved.suffix.lower()
    try:
        if suffix in _YAML_SUFFIXES:
            with resolved.open("r", encoding="utf-8") as handle:
                parsed = yaml.safe_load(handle)
        elif suffix == ".toml":
            with resolved.open("rb") as handle:
                parsed = tomllib.load(handle)
        elif suffix == ".json":
            parsed = json.loads(resolved.read_text(encoding="utf-8"))
        else:
            raise SchemaDefinitionError(f"unsupported schema file type: {resolved}")
    except OSError as exc:
        raise SchemaDefinitionError(f"unable to read schema file {resolved}: {exc}") from exc
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise SchemaDefinitionError(f"invalid schema file {resolved}: {exc}") from exc

    return type_from_dict(parsed, path=resolved.name)


def dump_schema_yaml(schema: Type) -> str:
    return yaml.safe_dump(type_to_dict(schema), sort_keys=False)


def _max_length(data: Mapping[str, object], path: str) -> int:
    value = data.get("max_length", 0)
    if isinstance(value, bool) or not isinstance(value, int):
        _fail(f"{path}.max_length", f"expected integer, got {type(value).__name__}")
    return value


__all__ = [
    "JSONValue",
    "dump_schema_yaml",
    "dumps_schema",
    "load_schema_file",
    "loads_schema",
    "type_from_dict",
    "type_to_dict",
]
