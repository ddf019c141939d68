"""First-occurrence key lookup over struct tags."""

from __future__ import annotations

from structtag.errors import UnquoteError
from structtag.literals import as_bytes, unquote_bytes

_SPACE = ord(" ")
_COLON = ord(":")
_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_DEL = 0x7F


class StructTag:
    """Read-only view over a tag's ``key:"value"`` pairs.

    Lookup follows reflection conventions: the first pair whose key matches
    wins, and scanning stops silently at the first pair that does not fit
    the canonical grammar.
    """

    __slots__ = ("_raw",)

    def __init__(self, tag: str | bytes) -> None:
        self._raw = as_bytes(tag)

    def __repr__(self) -> str:
        return f"StructTag({self.text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StructTag):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    @property
    def text(self) -> str:
        """Return the tag content as text.

        Returns
        -------
        str
            Tag content.
        """
        return self._raw.decode("utf-8", "surrogateescape")

    def lookup(self, key: str) -> str | None:
        """Return the unquoted value of the first pair named ``key``.

        Parameters
        ----------
        key
            Key to search for.

        Returns
        -------
        str | None
            Unquoted value, or ``None`` when the key is not present.
        """
        wanted = as_bytes(key)
        tag = self._raw
        while tag:
            pos = 0
            while pos < len(tag) and tag[pos] == _SPACE:
                pos += 1
            tag = tag[pos:]
            if not tag:
                break

            pos = 0
            while pos < len(tag) and _is_key_byte(tag[pos]):
                pos += 1
            if pos == 0 or pos + 1 >= len(tag) or tag[pos] != _COLON or tag[pos + 1] != _QUOTE:
                break
            name = tag[:pos]
            tag = tag[pos + 1 :]

            pos = 1
            while pos < len(tag) and tag[pos] != _QUOTE:
                if tag[pos] == _BACKSLASH:
                    pos += 1
                pos += 1
            if pos >= len(tag):
                break
            quoted = tag[: pos + 1]
            tag = tag[pos + 1 :]

            if name == wanted:
                try:
                    value = unquote_bytes(quoted)
                except UnquoteError:
                    break
                return value.decode("utf-8", "surrogateescape")
        return None

    def get(self, key: str) -> str:
        """Return the value for ``key``, or an empty string when absent.

        Returns
        -------
        str
            Unquoted value or ``""``.
        """
        value = self.lookup(key)
        return "" if value is None else value


def _is_key_byte(byte: int) -> bool:
    return byte > _SPACE and byte not in {_COLON, _QUOTE, _DEL}


__all__ = ["StructTag"]
