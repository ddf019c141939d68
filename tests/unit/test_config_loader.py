"""Tests for structtag configuration loading."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cli.config_loader import ConfigError, config_to_mapping, load_effective_config, resolve_config
from cli.config_models import StructTagConfig

if TYPE_CHECKING:
    from pathlib import Path


def test_defaults_without_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure defaults apply when no config file is present."""
    monkeypatch.chdir(tmp_path)
    resolution = resolve_config(None)
    assert resolution.config == StructTagConfig()
    assert resolution.location is None
    assert config_to_mapping(resolution.config) == {
        "encoding_keys": ["json", "xml"],
        "output_format": "text",
    }


def test_structtag_toml_is_discovered_from_parents(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Ensure structtag.toml is found in a parent directory."""
    (tmp_path / "structtag.toml").write_text(
        'encoding_keys = ["json", "yaml"]\noutput_format = "json"\n',
        encoding="utf-8",
    )
    nested = tmp_path / "pkg" / "sub"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)
    resolution = resolve_config(None)
    assert resolution.config.encoding_keys == ("json", "yaml")
    assert resolution.config.output_format == "json"
    assert resolution.location == str(tmp_path / "structtag.toml")


def test_pyproject_tool_table(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure [tool.structtag] in pyproject.toml is honoured."""
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "demo"\n\n[tool.structtag]\nencoding_keys = ["xml"]\n',
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    config = load_effective_config(None)
    assert config.encoding_keys == ("xml",)
    assert config.output_format == "text"


def test_explicit_config_file(tmp_path: Path) -> None:
    """Ensure an explicit config path bypasses discovery."""
    path = tmp_path / "custom.toml"
    path.write_text('encoding_keys = ["bson"]\n', encoding="utf-8")
    resolution = resolve_config(str(path))
    assert resolution.config.encoding_keys == ("bson",)
    assert resolution.location == str(path)


def test_missing_explicit_config_file(tmp_path: Path) -> None:
    """Ensure a missing explicit config file is a config error."""
    with pytest.raises(ConfigError, match="Config file not found"):
        resolve_config(str(tmp_path / "absent.toml"))


@pytest.mark.parametrize(
    "contents",
    [
        'unknown_key = true\n',
        'encoding_keys = "json"\n',
        'output_format = "yaml"\n',
        "encoding_keys = [\n",
    ],
)
def test_invalid_config_file(tmp_path: Path, contents: str) -> None:
    """Ensure malformed or invalid config raises ConfigError."""
    path = tmp_path / "structtag.toml"
    path.write_text(contents, encoding="utf-8")
    with pytest.raises(ConfigError):
        resolve_config(str(path))


def test_config_directory_is_not_discovered(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Ensure a directory named like the config file is skipped during discovery."""
    (tmp_path / "structtag.toml").mkdir()
    monkeypatch.chdir(tmp_path)
    resolution = resolve_config(None)
    assert resolution.config == StructTagConfig()
    assert resolution.location is None


def test_explicit_config_directory(tmp_path: Path) -> None:
    """Ensure an explicit config path that is a directory is a config error."""
    path = tmp_path / "structtag.toml"
    path.mkdir()
    with pytest.raises(ConfigError, match="Unable to read config file"):
        resolve_config(str(path))


def test_non_utf8_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure undecodable config bytes raise ConfigError."""
    (tmp_path / "structtag.toml").write_bytes(b'encoding_keys = ["\xff"]\n')
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ConfigError, match="Invalid TOML"):
        resolve_config(None)
