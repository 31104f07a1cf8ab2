"""Unit tests for schema dictionaries and JSON, YAML and TOML schema files."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import yaml

from typed_jsonb.errors import SchemaDefinitionError, UnknownKindError
from typed_jsonb.schema.codec import (
    dump_schema_yaml,
    dumps_schema,
    load_schema_file,
    loads_schema,
    type_from_dict,
    type_to_dict,
)
from typed_jsonb.schema.types import ANY, BOOL, NUMBER, STRING, list_of, string, table

if TYPE_CHECKING:
    from pathlib import Path

ORDER_SCHEMA = table(
    {
        "id": NUMBER,
        "customer": string(40),
        "paid": BOOL,
        "lines": list_of(table({"sku": STRING, "qty": NUMBER}), 50),
        "meta": ANY,
    }
)


@pytest.mark.unit
def test_type_to_dict_is_canonical() -> None:
    schema = list_of(table({"b": string(3), "a": NUMBER}), 2)

    assert type_to_dict(schema) == {
        "kind": "list",
        "element": {
            "kind": "table",
            "fields": {
                "a": {"kind": "number"},
                "b": {"kind": "string", "max_length": 3},
            },
        },
        "max_length": 2,
    }


@pytest.mark.unit
def test_unbounded_types_omit_max_length() -> None:
    assert type_to_dict(list_of(STRING)) == {
        "kind": "list",
        "element": {"kind": "string"},
    }


@pytest.mark.unit
def test_type_from_dict_rebuilds_an_equal_type() -> None:
    assert type_from_dict(type_to_dict(ORDER_SCHEMA)) == ORDER_SCHEMA


@pytest.mark.unit
def test_scalar_shorthand() -> None:
    parsed = type_from_dict({"kind": "table", "fields": {"n": "number", "ok": "bool"}})

    assert parsed == table({"n": NUMBER, "ok": BOOL})


@pytest.mark.unit
@pytest.mark.parametrize(
    ("data", "message"),
    [
        ("list", "needs an object definition"),
        ("table", "needs an object definition"),
        ({"fields": {}}, "missing required field 'kind'"),
        ({"kind": "list"}, "missing required field 'element'"),
        ({"kind": "number", "max_length": 3}, "unexpected fields"),
        ({"kind": "string", "max_length": True}, "schema.max_length"),
        ({"kind": "string", "max_length": "3"}, "expected integer"),
        ({"kind": "table", "fields": ["a"]}, "schema.fields"),
        (7, "expected object or kind string"),
    ],
)
def test_malformed_definitions_are_rejected(data: object, message: str) -> None:
    with pytest.raises(SchemaDefinitionError, match=message):
        type_from_dict(data)


@pytest.mark.unit
def test_nested_errors_name_the_offending_path() -> None:
    data = {"kind": "table", "fields": {"tags": {"kind": "list", "element": {"kind": "list"}}}}

    with pytest.raises(SchemaDefinitionError, match=r"schema\.fields\.tags\.element"):
        type_from_dict(data)


@pytest.mark.unit
def test_unknown_kind_tags_surface_as_unknown_kind() -> None:
    with pytest.raises(UnknownKindError):
        type_from_dict({"kind": "integer"})


@pytest.mark.unit
def test_json_text_round_trip() -> None:
    assert loads_schema(dumps_schema(ORDER_SCHEMA)) == ORDER_SCHEMA
    assert loads_schema(dumps_schema(ORDER_SCHEMA, indent=None).encode("utf-8")) == ORDER_SCHEMA


@pytest.mark.unit
def test_loads_schema_rejects_invalid_json() -> None:
    with pytest.raises(SchemaDefinitionError, match="invalid JSON"):
        loads_schema("{kind: table")


@pytest.mark.unit
def test_yaml_dump_is_loadable() -> None:
    text = dump_schema_yaml(ORDER_SCHEMA)

    assert type_from_dict(yaml.safe_load(text)) == ORDER_SCHEMA


@pytest.mark.unit
def test_load_yaml_schema_file(tmp_path: Path) -> None:
    path = tmp_path / "order.yaml"
    path.write_text(
        "\n".join(
            [
                "kind: table",
                "fields:",
                "  id: number",
                "  customer: {kind: string, max_length: 40}",
                "  paid: bool",
                "  lines:",
                "    kind: list",
                "    max_length: 50",
                "    element:",
                "      kind: table",
                "      fields:",
                "        sku: string",
                "        qty: number",
                "  meta: any",
                "",
            ]
        ),
        encoding="utf-8",
    )

    assert load_schema_file(path) == ORDER_SCHEMA


@pytest.mark.unit
def test_load_toml_schema_file(tmp_path: Path) -> None:
    path = tmp_path / "tags.toml"
    path.write_text(
        "\n".join(
            [
                'kind = "table"',
                "",
                "[fields]",
                'name = { kind = "string", max_length = 10 }',
                'tags = { kind = "list", element = "string" }',
                "",
            ]
        ),
        encoding="utf-8",
    )

    assert load_schema_file(path) == table({"name": string(10), "tags": list_of(STRING)})


@pytest.mark.unit
def test_load_json_schema_file(tmp_path: Path) -> None:
    path = tmp_path / "order.json"
    path.write_text(dumps_schema(ORDER_SCHEMA), encoding="utf-8")

    assert load_schema_file(str(path)) == ORDER_SCHEMA


@pytest.mark.unit
def test_load_schema_file_errors(tmp_path: Path) -> None:
    unsupported = tmp_path / "schema.txt"
    unsupported.write_text("kind: number", encoding="utf-8")
    broken = tmp_path / "broken.yml"
    broken.write_text("kind: [table", encoding="utf-8")
    invalid = tmp_path / "invalid.json"
    invalid.write_text('{"kind": "number", "extra": 1}', encoding="utf-8")

    with pytest.raises(SchemaDefinitionError, match="unsupported schema file type"):
        load_schema_file(unsupported)
    with pytest.raises(SchemaDefinitionError, match="invalid schema file"):
        load_schema_file(broken)
    with pytest.raises(SchemaDefinitionError, match="unable to read"):
        load_schema_file(tmp_path / "missing.json")
    with pytest.raises(SchemaDefinitionError, match="invalid.json"):
        load_schema_file(invalid)


@pytest.mark.unit
def test_type_to_dict_refuses_a_list_without_element_type() -> None:
    broken = list_of(NUMBER)
    object.__setattr__(broken, "element_type", None)

    with pytest.raises(SchemaDefinitionError, match="element type"):
        type_to_dict(broken)
