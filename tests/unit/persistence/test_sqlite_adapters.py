"""Unit tests for the sqlite3 adapter and converter functions, without a connection."""

from __future__ import annotations

import pytest

from typed_jsonb.document import CacheState, List, Table, new_list
from typed_jsonb.errors import InvalidScanTypeError, TypeMismatchError
from typed_jsonb.persistence import adapt_document, convert_list, convert_table, scan_value
from typed_jsonb.schema.types import STRING, list_of


@pytest.mark.unit
def test_adapt_document_emits_utf8_text() -> None:
    doc = new_list(list_of(STRING))
    doc.append("é")

    assert adapt_document(doc) == '["é"]'
    assert doc.state is CacheState.RAW_ONLY


@pytest.mark.unit
def test_converters_keep_column_bytes_raw() -> None:
    tags = convert_list(b'["a"]')
    attrs = convert_table(b'{"k":1}')

    assert isinstance(tags, List)
    assert isinstance(attrs, Table)
    assert tags.state is CacheState.RAW_ONLY
    assert attrs.decode() == {"k": 1}


@pytest.mark.unit
def test_converters_sniff_shape() -> None:
    with pytest.raises(TypeMismatchError):
        convert_list(b'{"one":"two"}')
    with pytest.raises(TypeMismatchError):
        convert_table(b"[]")


@pytest.mark.unit
def test_scan_value_accepts_text_and_bytes() -> None:
    assert scan_value(List, '["é"]').decode() == ["é"]
    assert scan_value(Table, memoryview(b"{}")).decode() == {}


@pytest.mark.unit
@pytest.mark.parametrize("value", [None, 3, 1.5])
def test_scan_value_rejects_non_byte_columns(value: object) -> None:
    with pytest.raises(InvalidScanTypeError):
        scan_value(List, value)
