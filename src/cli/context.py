"""Run context for CLI command injection."""

from __future__ import annotations

from dataclasses import dataclass, field

from cli.config_models import StructTagConfig


@dataclass(frozen=True)
class RunContext:
    """Session state handed to commands that ask for it."""

    log_level: str = "INFO"
    config: StructTagConfig = field(default_factory=StructTagConfig)
    config_location: str | None = None


__all__ = ["RunContext"]
