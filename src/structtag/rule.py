"""Field tag rule: canonical syntax plus encoding keys on unexported fields."""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Iterable, Sequence

from serde_msgspec import StructBaseStrict
from structtag.diagnostics import DiagnosticKind, TagDiagnostic
from structtag.errors import TagErrorKind, UnquoteError
from structtag.grammar import struct_tag_error
from structtag.literals import unquote
from structtag.lookup import StructTag

logger = logging.getLogger(__name__)

DEFAULT_ENCODING_KEYS: tuple[str, ...] = ("json", "xml")


class FieldTagSpec(StructBaseStrict, frozen=True):
    """Field facts supplied by the caller.

    ``tag`` is the literal exactly as written in source, outer quotes
    included. Unset ``embedded`` means "has no name"; unset ``exported``
    follows the capitalization convention.
    """

    name: str | None = None
    tag: str | None = None
    exported: bool | None = None
    embedded: bool | None = None

    @property
    def is_embedded(self) -> bool:
        """Return whether the field is embedded (anonymous).

        Returns
        -------
        bool
            Resolved embedded flag.
        """
        if self.embedded is not None:
            return self.embedded
        return not self.name

    @property
    def is_exported(self) -> bool:
        """Return whether the field is visible outside its module.

        Returns
        -------
        bool
            Resolved exported flag.
        """
        if self.exported is not None:
            return self.exported
        return is_exported_name(self.name)


class StructSpec(StructBaseStrict, frozen=True):
    """Record declaration with its fields in declaration order."""

    name: str
    fields: tuple[FieldTagSpec, ...] = ()


class FieldsDocument(StructBaseStrict, frozen=True):
    """Input document listing records to check."""

    structs: tuple[StructSpec, ...] = ()


def is_exported_name(name: str | None) -> bool:
    """Return whether a name starts with an uppercase letter.

    Returns
    -------
    bool
        ``True`` when the first code point is in category ``Lu``.
    """
    if not name:
        return False
    return unicodedata.category(name[0]) == "Lu"


def check_field_tag(
    tag_literal: str | None,
    *,
    exported: bool,
    embedded: bool,
    field_name: str | None = None,
    struct_name: str | None = None,
    encoding_keys: Sequence[str] = DEFAULT_ENCODING_KEYS,
) -> list[TagDiagnostic]:
    """Check one field tag literal.

    Parameters
    ----------
    tag_literal
        Tag literal including its outer quotes, or ``None`` when the field
        has no tag.
    exported
        Whether the field is visible outside its defining module.
    embedded
        Whether the field is embedded (anonymous).
    field_name
        Field name used in diagnostics.
    struct_name
        Enclosing record name used in diagnostics.
    encoding_keys
        Keys that are inert on unexported fields, checked in order.

    Returns
    -------
    list[TagDiagnostic]
        At most one diagnostic.
    """
    if tag_literal is None:
        return []

    try:
        content = unquote(tag_literal)
    except UnquoteError:
        return [
            _diagnostic(
                DiagnosticKind.MALFORMED_TAG,
                tag_literal,
                field_name=field_name,
                struct_name=struct_name,
                error=TagErrorKind.UNQUOTE,
            )
        ]

    error = struct_tag_error(content)
    if error is not None:
        return [
            _diagnostic(
                DiagnosticKind.MALFORMED_TAG,
                tag_literal,
                field_name=field_name,
                struct_name=struct_name,
                error=error.kind,
            )
        ]

    if embedded or exported:
        return []

    tag = StructTag(content)
    for key in encoding_keys:
        if tag.get(key):
            return [
                _diagnostic(
                    DiagnosticKind.KEY_BUT_UNEXPORTED,
                    tag_literal,
                    field_name=field_name,
                    struct_name=struct_name,
                    key=key,
                )
            ]
    return []


def check_field(
    field: FieldTagSpec,
    *,
    struct_name: str | None = None,
    encoding_keys: Sequence[str] = DEFAULT_ENCODING_KEYS,
) -> list[TagDiagnostic]:
    """Check a field record, resolving unset visibility flags.

    Returns
    -------
    list[TagDiagnostic]
        Diagnostics for the field.
    """
    return check_field_tag(
        field.tag,
        exported=field.is_exported,
        embedded=field.is_embedded,
        field_name=field.name,
        struct_name=struct_name,
        encoding_keys=encoding_keys,
    )


def check_struct(
    struct: StructSpec,
    *,
    encoding_keys: Sequence[str] = DEFAULT_ENCODING_KEYS,
) -> list[TagDiagnostic]:
    """Check every field of a record in declaration order.

    Returns
    -------
    list[TagDiagnostic]
        Diagnostics for the record.
    """
    diagnostics: list[TagDiagnostic] = []
    for field in struct.fields:
        diagnostics.extend(
            check_field(field, struct_name=struct.name, encoding_keys=encoding_keys)
        )
    return diagnostics


def check_structs(
    structs: Iterable[StructSpec],
    *,
    encoding_keys: Sequence[str] = DEFAULT_ENCODING_KEYS,
) -> list[TagDiagnostic]:
    """Check several records.

    Returns
    -------
    list[TagDiagnostic]
        Diagnostics in record then field order.
    """
    diagnostics: list[TagDiagnostic] = []
    for struct in structs:
        diagnostics.extend(check_struct(struct, encoding_keys=encoding_keys))
    return diagnostics


def _diagnostic(
    kind: DiagnosticKind,
    tag_literal: str,
    *,
    field_name: str | None,
    struct_name: str | None,
    key: str | None = None,
    error: TagErrorKind | None = None,
) -> TagDiagnostic:
    diagnostic = TagDiagnostic(
        kind=kind,
        tag=tag_literal,
        field_name=field_name,
        struct_name=struct_name,
        key=key,
        error=error,
    )
    logger.debug("Struct tag diagnostic: %s", diagnostic.message)
    return diagnostic


__all__ = [
    "DEFAULT_ENCODING_KEYS",
    "FieldTagSpec",
    "FieldsDocument",
    "StructSpec",
    "check_field",
    "check_field_tag",
    "check_struct",
    "check_structs",
    "is_exported_name",
]
