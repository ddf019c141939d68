"""Main application setup for the structtag CLI."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Annotated, Literal

from cyclopts import App, Parameter

from cli.commands.version import get_version
from cli.config_loader import ConfigError, resolve_config
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import admin_group, session_group
from cli.invoke import invoke_command
from cli.result_action import cli_result_action

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_LOGGER = logging.getLogger(__name__)

_HELP_EPILOGUE = """
Examples:
  structtag validate 'json:"name" xml:"name"'      Check raw tag content
  structtag lookup 'json:"id,omitempty"' json      Print a tag value
  structtag check fields.toml                      Check field documents
  structtag check fields.json --format json        Machine-readable output
  structtag config show                            Show effective configuration

Environment Variables:
  STRUCTTAG_LOG_LEVEL  Default log level (DEBUG, INFO, WARNING, ERROR)

Configuration is read from structtag.toml or [tool.structtag] in pyproject.toml.
"""

app = App(
    name="structtag",
    help="Validate struct field tags and flag encoding tags on unexported fields.",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(
        show_default=True,
        show_env_var=True,
    ),
    result_action=cli_result_action,
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    config_file: Annotated[
        str | None,
        Parameter(
            name="--config",
            help="Path to configuration file (overrides default search).",
            group=session_group,
        ),
    ] = None
    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Parameter(
            name="--log-level",
            help="Logging verbosity level.",
            env_var="STRUCTTAG_LOG_LEVEL",
            group=session_group,
        ),
    ] = "WARNING"


_DEFAULT_SESSION_OPTIONS = SessionOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Meta launcher for config selection and context injection.

    Returns
    -------
    int
        Exit status code from command execution.

    Raises
    ------
    ValueError
        Raised when the log level is invalid.
    """
    if session.log_level not in LOG_LEVELS:
        msg = f"Unsupported log level {session.log_level!r}."
        raise ValueError(msg)
    logging.basicConfig(level=session.log_level.upper())

    try:
        resolution = resolve_config(session.config_file)
    except ConfigError as exc:
        _LOGGER.error("%s", exc)
        return ExitCode.CONFIG_ERROR
    run_context = RunContext(
        log_level=session.log_level,
        config=resolution.config,
        config_location=resolution.location,
    )

    return invoke_command(
        app,
        list(tokens),
        run_context=run_context,
    )


# Lazy-loaded commands with aliases
app.command("cli.commands.validate:validate_command", name="validate", alias="val")
app.command("cli.commands.lookup:lookup_command", name="lookup", alias="get")
app.command("cli.commands.check:check_command", name="check", alias="c")

# Config subapp with alias
_config_app = App(name="config", help="Configuration management.")
_config_app.command("cli.commands.config:show_config", name="show")
_config_app.command("cli.commands.config:init_config", name="init")
app.command(_config_app, alias="cfg")
app.command("cli.commands.version:version_command", name="version", alias="v")

# Completion install command
app.register_install_completion_command(
    name="--install-completion",
    add_to_startup=False,
    group=admin_group,
    help="Install shell completion scripts.",
)


def main() -> None:
    """Run the structtag CLI."""
    sys.exit(app.meta())


__all__ = ["app", "main", "meta_launcher"]
