"""
Effect-polymorphic JSON access, decoding, normalization and scoped loading.

- accessors: shape assertions and field lookup with typed failures
- codecs: pydantic-backed decode/encode registry
- io.json_io: file, URL and package-resource loaders plus atomic writes
- io.normalize: field sorting and null dropping
- io.printing: configurable rendering
"""

from .accessors import (
    as_array,
    as_object,
    as_string,
    extract_field,
    extract_field_as,
    extract_field_in,
    extract_path,
    find_field,
    find_field_as,
    find_field_in,
    has_field,
    to_key_value_list,
)
from .codecs import CodecRegistry, decode, decode_object, encode, parse_and_decode
from .context import ASYNC, RAISING, RESULT, Context
from .errors import (
    DecodeError,
    DecodeFailure,
    EncodeFailure,
    FieldNotFound,
    IoFailure,
    ParseFailure,
    ShapeMismatch,
)
from .io.json_io import load_from_file, load_from_resource, load_from_url, load_records_from_file, write_json
from .io.normalize import drop_null_values_deep, replace_field, sort_fields, sort_fields_dropping_nulls
from .io.parsing import parse_text
from .io.printing import Printer, print_json, print_object
from .types import Err, Ok, Some

__all__ = [
    "as_array",
    "as_object",
    "as_string",
    "extract_field",
    "extract_field_as",
    "extract_field_in",
    "extract_path",
    "find_field",
    "find_field_as",
    "find_field_in",
    "has_field",
    "to_key_value_list",
    "CodecRegistry",
    "decode",
    "decode_object",
    "encode",
    "parse_and_decode",
    "ASYNC",
    "RAISING",
    "RESULT",
    "Context",
    "DecodeError",
    "DecodeFailure",
    "EncodeFailure",
    "FieldNotFound",
    "IoFailure",
    "ParseFailure",
    "ShapeMismatch",
    "load_from_file",
    "load_from_resource",
    "load_from_url",
    "load_records_from_file",
    "write_json",
    "drop_null_values_deep",
    "replace_field",
    "sort_fields",
    "sort_fields_dropping_nulls",
    "parse_text",
    "Printer",
    "print_json",
    "print_object",
    "Err",
    "Ok",
    "Some",
]
