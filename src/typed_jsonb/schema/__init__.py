"""Public schema primitives: kinds, type descriptors, validation, and schema files."""

from typed_jsonb.schema.codec import (
    dump_schema_yaml,
    dumps_schema,
    load_schema_file,
    loads_schema,
    type_from_dict,
    type_to_dict,
)
from typed_jsonb.schema.kind import Kind
from typed_jsonb.schema.types import (
    ANY,
    BOOL,
    NUMBER,
    STRING,
    Type,
    any_,
    boolean,
    list_of,
    number,
    string,
    table,
)
from typed_jsonb.schema.validator import Violation, find_violation, is_valid

__all__ = [
    "ANY",
    "BOOL",
    "NUMBER",
    "STRING",
    "Kind",
    "Type",
    "Violation",
    "any_",
    "boolean",
    "dump_schema_yaml",
    "dumps_schema",
    "find_violation",
    "is_valid",
    "list_of",
    "load_schema_file",
    "loads_schema",
    "number",
    "string",
    "table",
    "type_from_dict",
    "type_to_dict",
]
