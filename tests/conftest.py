"""Shared pytest fixtures for structtag tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

_FIELDS_TOML = """
[[structs]]
name = "User"

[[structs.fields]]
name = "id"
tag = '`json:"id"`'

[[structs.fields]]
name = "Name"
tag = '`json:"name" xml:"name"`'

[[structs.fields]]
name = "broken"
tag = '`json:name`'

[[structs.fields]]
tag = '`json:"embedded"`'

[[structs]]
name = "Config"

[[structs.fields]]
name = "path"
tag = '`xml:"path"`'
exported = true
""".lstrip()


@pytest.fixture
def fields_document(tmp_path: Path) -> Path:
    """Write a TOML field document with two offending fields.

    Returns
    -------
    Path
        Path to the written document.
    """
    path = tmp_path / "fields.toml"
    path.write_text(_FIELDS_TOML, encoding="utf-8")
    return path
