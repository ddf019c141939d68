"""Configuration management commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from cli.config_loader import CONFIG_FILENAME, ConfigResolution, resolve_config
from cli.context import RunContext
from cli.groups import admin_group
from serde_msgspec import dumps_json_sorted

_TEMPLATE = """# structtag.toml

# Keys reported when they appear on unexported, non-embedded fields.
encoding_keys = ["json", "xml"]

# Output format for `structtag check`: "text" or "json".
output_format = "text"
"""


def show_config(
    *,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Show the effective configuration and where it came from.

    Returns
    -------
    int
        Exit status code.
    """
    if run_context is None:
        resolution = resolve_config(None)
    else:
        resolution = ConfigResolution(run_context.config, run_context.config_location)
    payload = dumps_json_sorted(resolution.to_display_dict(), pretty=True)
    sys.stdout.write(payload.decode("utf-8") + "\n")
    return 0


def init_config(
    *,
    path: Annotated[
        Path | None,
        Parameter(
            name="--path",
            help=f"Path to write the configuration template (default: {CONFIG_FILENAME}).",
        ),
    ] = None,
    force: Annotated[
        bool,
        Parameter(
            name="--force",
            help="Overwrite existing config file.",
            group=admin_group,
        ),
    ] = False,
) -> int:
    """Write a configuration template to disk.

    Returns
    -------
    int
        Exit status code.

    Raises
    ------
    FileExistsError
        Raised when the target path exists and ``force`` is false.
    """
    target_path = path if path is not None else Path(CONFIG_FILENAME)
    if target_path.exists() and not force:
        msg = f"Config file already exists: {target_path}."
        raise FileExistsError(msg)
    target_path.write_text(_TEMPLATE, encoding="utf-8")
    return 0


__all__ = ["init_config", "show_config"]
