"""String literal unquoting with the conventional backslash escape rules.

Three literal forms are recognised:

- back-quoted raw literals, which take their content verbatim (carriage
  returns removed);
- double-quoted literals with ``\\a \\b \\f \\n \\r \\t \\v \\\\ \\"``,
  octal ``\\ooo``, ``\\xhh``, ``\\uhhhh`` and ``\\Uhhhhhhhh`` escapes;
- single-quoted literals holding exactly one character or escape.

Work happens on UTF-8 bytes so that ``\\x`` and octal escapes can produce
bytes that are not valid UTF-8 on their own.
"""

from __future__ import annotations

from structtag.errors import UnquoteError

RUNE_ERROR = 0xFFFD
MAX_RUNE = 0x10FFFF

_BACKSLASH = ord("\\")
_BACKQUOTE = ord("`")
_DOUBLE_QUOTE = ord('"')
_SINGLE_QUOTE = ord("'")
_NEWLINE = ord("\n")

_SIMPLE_ESCAPES: dict[int, int] = {
    ord("a"): 0x07,
    ord("b"): 0x08,
    ord("f"): 0x0C,
    ord("n"): 0x0A,
    ord("r"): 0x0D,
    ord("t"): 0x09,
    ord("v"): 0x0B,
    _BACKSLASH: _BACKSLASH,
}
_HEX_ESCAPE_WIDTHS: dict[int, int] = {ord("x"): 2, ord("u"): 4, ord("U"): 8}
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
_OCTAL_DIGITS = frozenset(b"01234567")


def as_bytes(value: str | bytes) -> bytes:
    """Return the UTF-8 bytes of a tag or literal.

    Parameters
    ----------
    value
        Text or raw bytes. Text is encoded with ``surrogateescape`` so that
        bytes decoded the same way round-trip unchanged. Surrogates that do
        not stand for an escaped byte are encoded as ``?``.

    Returns
    -------
    bytes
        UTF-8 encoded payload.
    """
    if isinstance(value, bytes):
        return value
    try:
        return value.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return value.encode("utf-8", "replace")


def decode_rune(buf: bytes, pos: int) -> tuple[int, int]:
    """Decode the code point starting at ``pos``.

    Invalid or truncated sequences decode as U+FFFD with width one, so a
    scanner always makes progress.

    Returns
    -------
    tuple[int, int]
        Code point and its width in bytes.
    """
    lead = buf[pos]
    if lead < 0x80:
        return lead, 1
    width = _sequence_width(lead)
    if width == 0:
        return RUNE_ERROR, 1
    try:
        text = buf[pos : pos + width].decode("utf-8")
    except UnicodeDecodeError:
        return RUNE_ERROR, 1
    if len(text) != 1:
        return RUNE_ERROR, 1
    return ord(text), width


def _sequence_width(lead: int) -> int:
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def unquote_bytes(literal: bytes) -> bytes:
    """Interpret a quoted literal and return the bytes it denotes.

    Parameters
    ----------
    literal
        Literal including its surrounding quote characters.

    Returns
    -------
    bytes
        Unquoted payload.

    Raises
    ------
    UnquoteError
        Raised when the literal is not a well-formed quoted string.
    """
    if len(literal) < 2:
        raise UnquoteError(literal)
    quote = literal[0]
    if quote == _BACKQUOTE:
        body = literal[1:-1]
        if literal[-1] != _BACKQUOTE or _BACKQUOTE in body:
            raise UnquoteError(literal)
        return body.replace(b"\r", b"")
    if quote not in {_DOUBLE_QUOTE, _SINGLE_QUOTE}:
        raise UnquoteError(literal)

    out = bytearray()
    end = len(literal)
    pos = 1
    chars = 0
    while pos < end and literal[pos] != quote:
        if literal[pos] == _NEWLINE:
            raise UnquoteError(literal)
        pos = _unquote_char(literal, pos, quote, out)
        chars += 1
        if quote == _SINGLE_QUOTE:
            break
    if pos != end - 1 or literal[pos] != quote:
        raise UnquoteError(literal)
    if quote == _SINGLE_QUOTE and chars != 1:
        raise UnquoteError(literal)
    return bytes(out)


def unquote(literal: str | bytes) -> str:
    """Interpret a quoted literal and return the text it denotes.

    Parameters
    ----------
    literal
        Literal including its surrounding quote characters.

    Returns
    -------
    str
        Unquoted text; bytes that are not valid UTF-8 are kept through
        ``surrogateescape``.
    """
    return unquote_bytes(as_bytes(literal)).decode("utf-8", "surrogateescape")


def _unquote_char(buf: bytes, pos: int, quote: int, out: bytearray) -> int:
    c = buf[pos]
    if c >= 0x80:
        _, width = decode_rune(buf, pos)
        out += buf[pos : pos + width]
        return pos + width
    if c != _BACKSLASH:
        out.append(c)
        return pos + 1

    if pos + 1 >= len(buf):
        raise UnquoteError(buf)
    c = buf[pos + 1]
    pos += 2
    simple = _SIMPLE_ESCAPES.get(c)
    if simple is not None:
        out.append(simple)
        return pos
    width = _HEX_ESCAPE_WIDTHS.get(c)
    if width is not None:
        digits = buf[pos : pos + width]
        if len(digits) < width or not _HEX_DIGITS.issuperset(digits):
            raise UnquoteError(buf)
        value = int(digits, 16)
        if c == ord("x"):
            out.append(value)
        else:
            if value > MAX_RUNE or 0xD800 <= value <= 0xDFFF:
                raise UnquoteError(buf)
            out += chr(value).encode("utf-8")
        return pos + width
    if c in _OCTAL_DIGITS:
        digits = buf[pos - 1 : pos + 2]
        if len(digits) < 3 or not _OCTAL_DIGITS.issuperset(digits):
            raise UnquoteError(buf)
        value = int(digits, 8)
        if value > 0xFF:
            raise UnquoteError(buf)
        out.append(value)
        return pos + 2
    if c in {_SINGLE_QUOTE, _DOUBLE_QUOTE}:
        if c != quote:
            raise UnquoteError(buf)
        out.append(c)
        return pos
    raise UnquoteError(buf)


__all__ = ["MAX_RUNE", "RUNE_ERROR", "as_bytes", "decode_rune", "unquote", "unquote_bytes"]
