"""Struct field tag validation and the exported-field tag rule."""

from structtag.diagnostics import DiagnosticKind, TagDiagnostic
from structtag.errors import (
    StructTagError,
    TagErrorKind,
    TagKeySyntaxError,
    TagSyntaxError,
    TagValueSyntaxError,
    UnquoteError,
)
from structtag.grammar import struct_tag_error, validate_struct_tag
from structtag.literals import unquote
from structtag.lookup import StructTag
from structtag.rule import (
    DEFAULT_ENCODING_KEYS,
    FieldsDocument,
    FieldTagSpec,
    StructSpec,
    check_field,
    check_field_tag,
    check_struct,
    check_structs,
)

__all__ = [
    "DEFAULT_ENCODING_KEYS",
    "DiagnosticKind",
    "FieldTagSpec",
    "FieldsDocument",
    "StructSpec",
    "StructTag",
    "StructTagError",
    "TagDiagnostic",
    "TagErrorKind",
    "TagKeySyntaxError",
    "TagSyntaxError",
    "TagValueSyntaxError",
    "UnquoteError",
    "check_field",
    "check_field_tag",
    "check_struct",
    "check_structs",
    "struct_tag_error",
    "unquote",
    "validate_struct_tag",
]
