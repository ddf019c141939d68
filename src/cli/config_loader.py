"""Config loading and normalization helpers for the CLI."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import msgspec

from cli.config_models import StructTagConfig
from serde_msgspec import convert, loads_toml, to_builtins, validation_error_payload

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "structtag.toml"
PYPROJECT_FILENAME = "pyproject.toml"
TOOL_KEY = "structtag"


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read or validated."""


@dataclass(frozen=True)
class ConfigResolution:
    """Resolved configuration plus the location it was read from."""

    config: StructTagConfig
    location: str | None = None

    def to_display_dict(self) -> dict[str, object]:
        """Return a JSON-ready view of the resolution.

        Returns
        -------
        dict[str, object]
            Configuration values and their source location.
        """
        return {
            "config": config_to_mapping(self.config),
            "location": self.location,
        }


def resolve_config(config_file: str | None) -> ConfigResolution:
    """Load config from an explicit file or from structtag.toml / pyproject.toml.

    Parameters
    ----------
    config_file
        Optional explicit config file path.

    Returns
    -------
    ConfigResolution
        Effective configuration and its location.

    Raises
    ------
    ConfigError
        Raised when an explicit config file does not exist.
    """
    if config_file:
        path = Path(config_file)
        if not path.exists():
            msg = f"Config file not found: {config_file!r}."
            raise ConfigError(msg)
        raw = _read_toml(path)
        if path.name == PYPROJECT_FILENAME:
            raw = _extract_tool_config(raw) or {}
            location = f"{path}:tool.{TOOL_KEY}"
        else:
            location = str(path)
        return ConfigResolution(_decode_config(raw, location=location), location)

    config_path = _find_in_parents(CONFIG_FILENAME)
    if config_path is not None:
        raw = _read_toml(config_path)
        return ConfigResolution(_decode_config(raw, location=str(config_path)), str(config_path))

    pyproject_path = _find_in_parents(PYPROJECT_FILENAME)
    if pyproject_path is not None:
        nested = _extract_tool_config(_read_toml(pyproject_path))
        if nested is not None:
            location = f"{pyproject_path}:tool.{TOOL_KEY}"
            return ConfigResolution(_decode_config(nested, location=location), location)

    logger.debug("No structtag configuration found; using defaults.")
    return ConfigResolution(StructTagConfig())


def load_effective_config(config_file: str | None) -> StructTagConfig:
    """Return only the effective configuration.

    Returns
    -------
    StructTagConfig
        Effective configuration.
    """
    return resolve_config(config_file).config


def config_to_mapping(config: StructTagConfig) -> dict[str, object]:
    """Return every configuration value, defaults included.

    Returns
    -------
    dict[str, object]
        Builtin mapping of configuration values.
    """
    return {
        field: to_builtins(getattr(config, field)) for field in config.__struct_fields__
    }


def _find_in_parents(filename: str) -> Path | None:
    """Walk parents from cwd to find a filename.

    Parameters
    ----------
    filename
        Filename to locate.

    Returns
    -------
    Path | None
        Path to the first matching file in the current directory or parents.
    """
    path = Path.cwd()
    while True:
        candidate = path / filename
        if candidate.is_file():
            return candidate
        if path.parent == path:
            return None
        path = path.parent


def _read_toml(path: Path) -> dict[str, object]:
    try:
        payload = loads_toml(path.read_bytes(), target_type=object)
    except OSError as exc:
        msg = f"Unable to read config file {path}: {exc}"
        raise ConfigError(msg) from exc
    except (UnicodeDecodeError, msgspec.DecodeError) as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(payload, dict):
        msg = f"Expected TOML mapping in {path}, got {type(payload).__name__}."
        raise ConfigError(msg)
    return payload


def _extract_tool_config(raw: Mapping[str, object]) -> dict[str, object] | None:
    tool = raw.get("tool")
    if not isinstance(tool, Mapping):
        return None
    nested = tool.get(TOOL_KEY)
    if not isinstance(nested, Mapping):
        return None
    return dict(nested)


def _decode_config(raw: Mapping[str, object], *, location: str) -> StructTagConfig:
    try:
        config = convert(dict(raw), target_type=StructTagConfig)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        msg = f"Config validation failed for {location}: {details}"
        raise ConfigError(msg) from exc
    logger.debug("Loaded structtag configuration from %s", location)
    return config


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ConfigResolution",
    "config_to_mapping",
    "load_effective_config",
    "resolve_config",
]
