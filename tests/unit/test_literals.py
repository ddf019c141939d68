"""Tests for string literal unquoting."""

from __future__ import annotations

import pytest

from structtag.errors import TagErrorKind, UnquoteError
from structtag.literals import RUNE_ERROR, decode_rune, unquote, unquote_bytes


@pytest.mark.parametrize(
    ("literal", "expected"),
    [
        ('"abc"', "abc"),
        ('""', ""),
        ('"json:\\"name\\""', 'json:"name"'),
        ("`json:\"name\"`", 'json:"name"'),
        ("`a\\nb`", "a\\nb"),
        ("`a\rb`", "ab"),
        ("``", ""),
        ('"\\a\\b\\f\\n\\r\\t\\v\\\\"', "\a\b\f\n\r\t\v\\"),
        ('"\\u00e9"', "é"),
        ('"\\U0001F600"', "\U0001f600"),
        ('"\\xc3\\xa9"', "é"),
        ('"\\303\\251"', "é"),
        ('"\\000"', "\x00"),
        ('"héllo"', "héllo"),
        ('"tab\tinside"', "tab\tinside"),
        ("'a'", "a"),
        ("'\\''", "'"),
        ("'é'", "é"),
        ("'\\n'", "\n"),
    ],
)
def test_unquote_valid_literals(literal: str, expected: str) -> None:
    """Ensure well-formed literals unquote to their values."""
    assert unquote(literal) == expected


@pytest.mark.parametrize(
    "literal",
    [
        "",
        '"',
        "abc",
        '"abc',
        'abc"',
        '"a"b',
        '"a"b"',
        '"\\"',
        '"\\q"',
        '"\\x4"',
        '"\\x4g"',
        '"\\400"',
        '"\\19"',
        '"\\ud800"',
        '"\\U00110000"',
        "\"\\'\"",
        "'\\\"'",
        '"a\nb"',
        "'ab'",
        "''",
        "'\n'",
        "`",
        "`a`b`",
        "`abc",
    ],
)
def test_unquote_invalid_literals(literal: str) -> None:
    """Ensure malformed literals raise UnquoteError."""
    with pytest.raises(UnquoteError) as excinfo:
        unquote(literal)
    assert excinfo.value.kind is TagErrorKind.UNQUOTE
    assert str(excinfo.value) == "invalid syntax"


def test_unquote_bytes_keeps_raw_bytes() -> None:
    """Ensure hex escapes may produce bytes that are not valid UTF-8."""
    assert unquote_bytes(b'"\\xff"') == b"\xff"
    assert unquote_bytes(b'"\xff"') == b"\xff"
    assert unquote(b'"\\xff"') == "\udcff"


def test_decode_rune_widths() -> None:
    """Ensure code points decode with their UTF-8 widths."""
    data = "aé€😀".encode()
    assert decode_rune(data, 0) == (ord("a"), 1)
    assert decode_rune(data, 1) == (ord("é"), 2)
    assert decode_rune(data, 3) == (ord("€"), 3)
    assert decode_rune(data, 6) == (0x1F600, 4)


def test_decode_rune_invalid_sequences() -> None:
    """Ensure invalid or truncated sequences decode as one-byte errors."""
    assert decode_rune(b"\xff", 0) == (RUNE_ERROR, 1)
    assert decode_rune(b"\xc3", 0) == (RUNE_ERROR, 1)
    assert decode_rune(b"\xc0\xaf", 0) == (RUNE_ERROR, 1)
    assert decode_rune(b"\xed\xa0\x80", 0) == (RUNE_ERROR, 1)
    assert decode_rune(b"\x80", 0) == (RUNE_ERROR, 1)
