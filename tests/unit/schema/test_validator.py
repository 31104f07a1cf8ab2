"""
typed-jsonb — unit tests for structural validation

File: tests/unit/schema/test_validator.py

Purpose
- Cover the per-kind validation rules, closed-world tables, length bounds, and
  violation paths.
- Property checks: validation is total and deterministic for arbitrary schemas
  and JSON values.
"""

from __future__ import annotations

import json

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from typed_jsonb.schema.types import (
    ANY,
    BOOL,
    NUMBER,
    STRING,
    Type,
    list_of,
    string,
    table,
)
from typed_jsonb.schema.validator import find_violation, is_valid

JSON_SCALARS = (
    st.none()
    | st.booleans()
    | st.integers()
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text(max_size=8)
)
JSON_VALUES = st.recursive(
    JSON_SCALARS,
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=4), children, max_size=4),
    max_leaves=16,
)

SCALAR_TYPES = st.sampled_from([NUMBER, BOOL, STRING, ANY]) | st.integers(-1, 6).map(string)
SCHEMAS = st.recursive(
    SCALAR_TYPES,
    lambda children: st.builds(list_of, children, st.integers(-1, 4))
    | st.dictionaries(st.text(max_size=3), children, max_size=3).map(table),
    max_leaves=8,
)


def _round_trip(value: object) -> object:
    return json.loads(json.dumps(value))


@pytest.mark.unit
def test_valid_list_number() -> None:
    assert is_valid(list_of(NUMBER, 4), _round_trip([1, 2, 3, 4]))


@pytest.mark.unit
def test_valid_element_type() -> None:
    assert is_valid(list_of(NUMBER, 4).element_type, _round_trip(1))  # type: ignore[arg-type]


@pytest.mark.unit
def test_invalid_list_number() -> None:
    assert not is_valid(list_of(NUMBER), _round_trip(["one"]))


@pytest.mark.unit
def test_invalid_list_max_length() -> None:
    assert not is_valid(list_of(NUMBER, 3), _round_trip([1, 2, 3, 4]))
    assert is_valid(list_of(NUMBER, 3), _round_trip([1, 2, 3]))


@pytest.mark.unit
def test_string_max_length() -> None:
    assert not is_valid(string(5), "123456")
    assert is_valid(string(5), "12345")
    assert is_valid(string(5), "")


@pytest.mark.unit
def test_string_length_counts_characters_not_bytes() -> None:
    assert is_valid(string(2), "éé")
    assert not is_valid(string(2), "ééé")


@pytest.mark.unit
def test_valid_table() -> None:
    schema = table({"one": NUMBER, "two": string(), "three": BOOL})
    assert is_valid(schema, _round_trip({"one": 1, "two": "2", "three": True}))


@pytest.mark.unit
def test_valid_list_of_tables() -> None:
    schema = list_of(table({"one": NUMBER}), 2)
    assert is_valid(schema, _round_trip([{"one": 1}, {"one": 2.5}]))
    assert not is_valid(schema, _round_trip([{"one": 1}, {"two": 2}]))


@pytest.mark.unit
def test_absent_fields_are_accepted() -> None:
    schema = table({"one": NUMBER, "two": STRING})
    assert is_valid(schema, {})
    assert is_valid(schema, {"two": "x"})


@pytest.mark.unit
def test_tables_are_closed_world_even_with_any_fields() -> None:
    schema = table({"a": ANY})
    assert is_valid(schema, {"a": {"nested": [1, None]}})
    assert not is_valid(schema, {"a": 1, "b": 2})


@pytest.mark.unit
def test_empty_list_satisfies_any_bound() -> None:
    assert is_valid(list_of(NUMBER, 1), [])


@pytest.mark.unit
@pytest.mark.parametrize("value", [0, -3, 1.5, 2**70, 0.0])
def test_number_accepts_ints_and_finite_floats(value: object) -> None:
    assert is_valid(NUMBER, value)


@pytest.mark.unit
@pytest.mark.parametrize(
    "value", [True, False, "1", None, float("nan"), float("inf"), [1], {"n": 1}]
)
def test_number_rejects_everything_else(value: object) -> None:
    assert not is_valid(NUMBER, value)


@pytest.mark.unit
def test_bool_is_not_a_number_and_numbers_are_not_bools() -> None:
    assert is_valid(BOOL, True)
    assert not is_valid(BOOL, 1)
    assert not is_valid(BOOL, "true")


@pytest.mark.unit
@pytest.mark.parametrize("value", [None, 1, "x", [1, "a"], {"k": {}}, object()])
def test_any_accepts_every_value(value: object) -> None:
    assert is_valid(ANY, value)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("schema", "value"),
    [
        (table({"a": NUMBER}), {1: 2}),
        (table({}), [("a", 1)]),
        (list_of(NUMBER), (1, 2)),
        (list_of(NUMBER), {1, 2}),
        (STRING, b"bytes"),
        (NUMBER, object()),
    ],
)
def test_non_json_inputs_are_invalid_not_errors(schema: Type, value: object) -> None:
    assert not is_valid(schema, value)


@pytest.mark.unit
def test_violation_reports_nested_path_and_reason() -> None:
    schema = table({"items": list_of(table({"n": NUMBER}))})
    violation = find_violation(schema, {"items": [{"n": 1}, {"n": "x"}]})

    assert violation is not None
    assert violation.path == "$.items[1].n"
    assert violation.reason == "expected number, got string"


@pytest.mark.unit
def test_violation_reports_first_failure_in_document_order() -> None:
    schema = list_of(NUMBER)
    violation = find_violation(schema, [1, "a", None])

    assert violation is not None
    assert violation.path == "$[1]"


@pytest.mark.unit
def test_violation_reasons_for_bounds_and_unknown_fields() -> None:
    too_long = find_violation(list_of(NUMBER, 1), [1, 2])
    unknown = find_violation(table({"a": NUMBER}), {"z": 1})
    long_text = find_violation(string(2), "abc", path="$.name")

    assert too_long is not None and too_long.reason == "list holds 2 items, max is 1"
    assert unknown is not None and unknown.reason == "unexpected field 'z'"
    assert unknown.path == "$"
    assert long_text is not None and long_text.path == "$.name"
    assert long_text.reason == "string holds 3 characters, max is 2"


@pytest.mark.unit
def test_deep_nesting_does_not_hit_the_recursion_limit() -> None:
    schema = list_of(ANY)
    value: list[object] = []
    for _ in range(5000):
        schema = list_of(schema)
        value = [value]

    assert is_valid(schema, value)
    assert not is_valid(schema, [[[["not a list"]]]])


@pytest.mark.unit
def test_type_is_valid_delegates_to_validator() -> None:
    assert list_of(NUMBER).is_valid([1, 2])
    assert not list_of(NUMBER).is_valid([True])


@pytest.mark.unit
@settings(max_examples=150)
@given(schema=SCHEMAS, value=JSON_VALUES)
def test_validation_is_total_and_deterministic(schema: Type, value: object) -> None:
    first = is_valid(schema, value)
    second = is_valid(schema, value)

    assert isinstance(first, bool)
    assert first == second
    assert first == (find_violation(schema, value) is None)


@pytest.mark.unit
@given(
    fields=st.dictionaries(st.text(min_size=1, max_size=4), st.just(ANY), max_size=4),
    extra=st.text(min_size=1, max_size=6),
)
def test_any_key_outside_the_schema_invalidates_a_table(
    fields: dict[str, Type], extra: str
) -> None:
    value: dict[str, object] = {name: None for name in fields}
    value[extra] = 1

    assert is_valid(table(fields), value) == (extra in fields)
