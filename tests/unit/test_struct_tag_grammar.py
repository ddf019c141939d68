"""Tests for canonical struct tag grammar validation."""

from __future__ import annotations

import pytest

from structtag.errors import (
    StructTagError,
    TagErrorKind,
    TagKeySyntaxError,
    TagSyntaxError,
    TagValueSyntaxError,
)
from structtag.grammar import is_control, struct_tag_error, validate_struct_tag


@pytest.mark.parametrize(
    "tag",
    [
        "",
        "   ",
        'json:"name"',
        ' json:"name" ',
        'json:"name,omitempty" xml:"name"',
        'key:"value1" key:"value2"',
        'a:"1"   b:"2"',
        'jsön:"name"',
        'k:""',
        'k:"a\\"b"',
        'k:"\\u00e9\\x41\\101\\t"',
        'k:"é"',
        "a b:\"c\"",
    ],
)
def test_validate_struct_tag_accepts_canonical_tags(tag: str) -> None:
    """Ensure canonical tags validate without error."""
    validate_struct_tag(tag)
    assert struct_tag_error(tag) is None


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        (':"value"', TagSyntaxError),
        ('key:"value"x:"y"', TagSyntaxError),
        ("abc", TagSyntaxError),
        ("k:", TagSyntaxError),
        ('k:"', TagSyntaxError),
        ("é", TagSyntaxError),
        ('k"ey:"v"', TagKeySyntaxError),
        ('k\tey:"v"', TagKeySyntaxError),
        ('k\x7f:"v"', TagKeySyntaxError),
        ('k\u0085:"v"', TagKeySyntaxError),
        ("key:value", TagValueSyntaxError),
        ('k:"v', TagValueSyntaxError),
        ('k:"v\\"', TagValueSyntaxError),
        ('k:"\\q"', TagValueSyntaxError),
        ('k:"a\nb"', TagValueSyntaxError),
        ('k:"\\ud800"', TagValueSyntaxError),
        ("k:é", TagValueSyntaxError),
    ],
)
def test_validate_struct_tag_rejects_malformed_tags(
    tag: str,
    expected: type[StructTagError],
) -> None:
    """Ensure malformed tags raise the matching error class."""
    with pytest.raises(expected):
        validate_struct_tag(tag)
    error = struct_tag_error(tag)
    assert type(error) is expected


def test_first_error_wins() -> None:
    """Ensure the scan stops at the first error encountered."""
    error = struct_tag_error('k"ey:value')
    assert isinstance(error, TagKeySyntaxError)

    error = struct_tag_error('a:"1" :"2" b"ad')
    assert isinstance(error, TagSyntaxError)

    error = struct_tag_error('a:"1" b:2 c"')
    assert isinstance(error, TagValueSyntaxError)


def test_error_kinds_and_messages() -> None:
    """Ensure errors expose stable kinds and canonical messages."""
    error = struct_tag_error("key:value")
    assert error is not None
    assert error.kind is TagErrorKind.TAG_VALUE_SYNTAX
    assert str(error) == "bad syntax for struct tag value"

    error = struct_tag_error(':"v"')
    assert error is not None
    assert error.kind is TagErrorKind.TAG_SYNTAX
    assert str(error) == "bad syntax for struct tag pair"

    error = struct_tag_error('"k:"v"')
    assert error is not None
    assert error.kind is TagErrorKind.TAG_KEY_SYNTAX
    assert str(error) == "bad syntax for struct tag key"


def test_errors_are_value_errors() -> None:
    """Ensure grammar failures can be handled as ValueError."""
    with pytest.raises(ValueError, match="struct tag pair"):
        validate_struct_tag('a:"1"b:"2"')


def test_bytes_input_with_invalid_utf8() -> None:
    """Ensure invalid UTF-8 bytes are scanned one byte at a time."""
    assert struct_tag_error(b'\xff:"v"') is None
    assert struct_tag_error(b'k:"\xff"') is None
    assert isinstance(struct_tag_error(b"\xff"), TagSyntaxError)


def test_is_control_matches_unicode_cc_category() -> None:
    """Ensure control detection covers C0, DEL and C1 only."""
    assert is_control(0x00)
    assert is_control(0x1F)
    assert is_control(0x7F)
    assert is_control(0x9F)
    assert not is_control(ord(" "))
    assert not is_control(ord("é"))
    assert not is_control(0x200B)


def test_lone_surrogates_are_scanned_as_replacement_bytes() -> None:
    """Ensure text with unpaired surrogates yields a result, not an encode error."""
    assert struct_tag_error('k\ud800:"v"') is None
    assert struct_tag_error('k:"\udbff"') is None
    assert isinstance(struct_tag_error('k\ud800'), TagSyntaxError)
    validate_struct_tag('json:"\ud800"')
