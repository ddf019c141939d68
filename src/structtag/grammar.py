"""Canonical struct tag grammar validation.

A canonical tag is a sequence of ``key:"value"`` pairs separated by one or
more spaces. Validation is all-or-nothing: the first error found in a
left-to-right scan is reported and scanning stops.
"""

from __future__ import annotations

import unicodedata
from enum import Enum, auto

from structtag.errors import (
    StructTagError,
    TagKeySyntaxError,
    TagSyntaxError,
    TagValueSyntaxError,
    UnquoteError,
)
from structtag.literals import as_bytes, decode_rune, unquote_bytes

_SPACE = ord(" ")
_COLON = ord(":")
_QUOTE = ord('"')
_BACKSLASH = ord("\\")


class ScanState(Enum):
    """States of the tag scanner."""

    SKIP_SPACE = auto()
    SCAN_KEY = auto()
    SCAN_VALUE = auto()
    DONE = auto()


def is_control(code_point: int) -> bool:
    """Return whether a code point is a control character (category ``Cc``).

    Returns
    -------
    bool
        ``True`` for C0 and C1 control characters and DEL.
    """
    return unicodedata.category(chr(code_point)) == "Cc"


class _TagScanner:
    """Single-use scanner over the UTF-8 bytes of a tag."""

    def __init__(self, tag: bytes) -> None:
        self._tag = tag
        self._length = len(tag)
        self._pos = 0

    def run(self) -> None:
        state = ScanState.SKIP_SPACE
        while state is not ScanState.DONE:
            if state is ScanState.SKIP_SPACE:
                state = self._skip_space()
            elif state is ScanState.SCAN_KEY:
                state = self._scan_key()
            else:
                state = self._scan_value()

    def _skip_space(self) -> ScanState:
        tag, length = self._tag, self._length
        pos = self._pos
        while pos < length and tag[pos] == _SPACE:
            pos += 1
        self._pos = pos
        if pos >= length:
            return ScanState.DONE
        return ScanState.SCAN_KEY

    def _scan_key(self) -> ScanState:
        tag, length = self._tag, self._length
        start = pos = self._pos
        while pos < length:
            byte = tag[pos]
            if byte == _COLON:
                if pos == start:
                    raise TagSyntaxError
                pos += 1
                break
            code_point, width = decode_rune(tag, pos)
            if byte == _QUOTE or is_control(code_point):
                raise TagKeySyntaxError
            pos += width
        # Running off the end without a colon is caught by the room check.
        self._pos = pos
        return ScanState.SCAN_VALUE

    def _scan_value(self) -> ScanState:
        tag, length = self._tag, self._length
        pos = self._pos
        if pos > length - 2:
            raise TagSyntaxError
        if tag[pos] != _QUOTE:
            raise TagValueSyntaxError
        start = pos
        pos += 1
        while pos < length and tag[pos] != _QUOTE:
            if tag[pos] == _BACKSLASH:
                pos += 1
            pos += 1
        if pos >= length:
            raise TagValueSyntaxError
        pos += 1
        try:
            unquote_bytes(tag[start:pos])
        except UnquoteError as exc:
            raise TagValueSyntaxError from exc
        if pos < length and tag[pos] != _SPACE:
            raise TagSyntaxError
        self._pos = pos
        return ScanState.SKIP_SPACE


def validate_struct_tag(tag: str | bytes) -> None:
    """Validate that a tag is in canonical ``key:"value"`` format.

    Parameters
    ----------
    tag
        Unquoted tag content.

    Raises
    ------
    TagSyntaxError
        Raised for an empty key, a missing value or a missing separator.
    TagKeySyntaxError
        Raised when a key contains a quote or a control character.
    TagValueSyntaxError
        Raised when a value is not a well-formed quoted string.
    """
    _TagScanner(as_bytes(tag)).run()


def struct_tag_error(tag: str | bytes) -> StructTagError | None:
    """Return the first syntax error in a tag, or ``None`` when it is canonical.

    Returns
    -------
    StructTagError | None
        First error encountered during the scan.
    """
    try:
        validate_struct_tag(tag)
    except StructTagError as exc:
        return exc
    return None


__all__ = ["ScanState", "is_control", "struct_tag_error", "validate_struct_tag"]
