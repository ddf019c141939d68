"""Typed configuration models for structtag."""

from __future__ import annotations

from typing import Literal, TypeAlias

from serde_msgspec import StructBaseStrict
from structtag.rule import DEFAULT_ENCODING_KEYS

OutputFormat: TypeAlias = Literal["text", "json"]


class StructTagConfig(StructBaseStrict, frozen=True):
    """Effective configuration for tag checks."""

    encoding_keys: tuple[str, ...] = DEFAULT_ENCODING_KEYS
    output_format: OutputFormat = "text"


__all__ = ["OutputFormat", "StructTagConfig"]
