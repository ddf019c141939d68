"""Error taxonomy for struct tag validation."""

from __future__ import annotations

from enum import StrEnum


class TagErrorKind(StrEnum):
    """Stable identifiers for struct tag failures."""

    TAG_SYNTAX = "tag-syntax"
    TAG_KEY_SYNTAX = "tag-key-syntax"
    TAG_VALUE_SYNTAX = "tag-value-syntax"
    UNQUOTE = "unquote"

    @property
    def message(self) -> str:
        """Return the canonical human-readable text for the error kind.

        Returns
        -------
        str
            Error message text.
        """
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES: dict[TagErrorKind, str] = {
    TagErrorKind.TAG_SYNTAX: "bad syntax for struct tag pair",
    TagErrorKind.TAG_KEY_SYNTAX: "bad syntax for struct tag key",
    TagErrorKind.TAG_VALUE_SYNTAX: "bad syntax for struct tag value",
    TagErrorKind.UNQUOTE: "invalid syntax",
}


class StructTagError(ValueError):
    """Base error for tags that are not in canonical format."""

    kind: TagErrorKind = TagErrorKind.TAG_SYNTAX

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.kind.message)


class TagSyntaxError(StructTagError):
    """Malformed pair structure: empty key, no room for a value, or missing separator."""

    kind = TagErrorKind.TAG_SYNTAX


class TagKeySyntaxError(StructTagError):
    """Key contains a double quote or a control character."""

    kind = TagErrorKind.TAG_KEY_SYNTAX


class TagValueSyntaxError(StructTagError):
    """Value is not a well-formed quoted string."""

    kind = TagErrorKind.TAG_VALUE_SYNTAX


class UnquoteError(ValueError):
    """Raised when a string literal cannot be unquoted."""

    kind = TagErrorKind.UNQUOTE

    def __init__(self, literal: str | bytes | None = None) -> None:
        self.literal = literal
        super().__init__(TagErrorKind.UNQUOTE.message)


__all__ = [
    "StructTagError",
    "TagErrorKind",
    "TagKeySyntaxError",
    "TagSyntaxError",
    "TagValueSyntaxError",
    "UnquoteError",
]
