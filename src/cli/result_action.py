"""Result action handler for Cyclopts integration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from cyclopts import App


def cli_result_action(
    app: App,
    cmd: object,
    result: Any,
) -> int:
    """Handle command results and convert to exit codes.

    This function is registered as the ``result_action`` for the CLI app.
    It normalizes different return types to integer exit codes.

    Parameters
    ----------
    app
        The Cyclopts application instance.
    cmd
        The resolved command that was executed.
    result
        The return value from the command function.

    Returns
    -------
    int
        Exit code for the process.
    """
    _ = app
    _ = cmd
    from rich.console import Console

    console = Console(highlight=False)

    if result is None:
        return ExitCode.SUCCESS

    if isinstance(result, int):
        return int(result)

    from cli.result import CliResult

    if isinstance(result, CliResult):
        if result.summary:
            console.print(result.summary, markup=False)
        duration = result.metrics.get("duration_ms")
        if duration is not None:
            console.print(f"Duration: {duration:.1f}ms")
        return int(result.exit_code)

    console.print(
        f"Unexpected command return type: {type(result).__name__} (value: {result!r})",
        markup=False,
    )
    return ExitCode.GENERAL_ERROR


__all__ = ["cli_result_action"]
