"""Position-free diagnostics produced by the field tag rule."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum

from serde_msgspec import StructBaseStrict
from structtag.errors import TagErrorKind


class DiagnosticKind(StrEnum):
    """Kinds of field tag findings."""

    MALFORMED_TAG = "malformed-tag"
    KEY_BUT_UNEXPORTED = "key-but-unexported"


class TagDiagnostic(StructBaseStrict, frozen=True):
    """Single finding for a struct field tag.

    Carries the raw tag literal and the names a caller needs to render a
    message; source positions belong to the caller.
    """

    kind: DiagnosticKind
    tag: str
    field_name: str | None = None
    struct_name: str | None = None
    key: str | None = None
    error: TagErrorKind | None = None

    @property
    def message(self) -> str:
        """Return a human-readable diagnostic message.

        Returns
        -------
        str
            Formatted message.
        """
        formatter = _DIAGNOSTIC_FORMATTERS.get(self.kind, _default_diagnostic_message)
        return formatter(self)

    def __str__(self) -> str:
        return self.message


def _default_diagnostic_message(diagnostic: TagDiagnostic) -> str:
    return f"struct field tag diagnostic: {diagnostic.kind.value}"


def _format_malformed_tag(diagnostic: TagDiagnostic) -> str:
    if diagnostic.error is None or diagnostic.error is TagErrorKind.UNQUOTE:
        return f"unable to read struct tag {diagnostic.tag}"
    return (
        f"struct field tag {diagnostic.tag} not compatible with "
        f"reflect.StructTag.Get: {diagnostic.error.message}"
    )


def _format_key_but_unexported(diagnostic: TagDiagnostic) -> str:
    field = diagnostic.field_name or "<embedded>"
    return f"struct field {field} has {diagnostic.key} tag but is not exported"


_DIAGNOSTIC_FORMATTERS: dict[DiagnosticKind, Callable[[TagDiagnostic], str]] = {
    DiagnosticKind.MALFORMED_TAG: _format_malformed_tag,
    DiagnosticKind.KEY_BUT_UNEXPORTED: _format_key_but_unexported,
}


__all__ = ["DiagnosticKind", "TagDiagnostic"]
