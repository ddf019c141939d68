"""Command invocation with timing and error classification."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from cyclopts import App
from cyclopts.exceptions import CycloptsError

from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.result_action import cli_result_action

_LOGGER = logging.getLogger(__name__)


@dataclass
class _InvokeState:
    t0: float
    command_name: str
    parse_ms: float | None = None
    exec_ms: float | None = None
    error_stage: str | None = None


def _command_name_from_tokens(tokens: list[str] | None) -> str:
    if not tokens:
        return "<unknown>"
    return tokens[0]


def _finalize_parse_ms(state: _InvokeState) -> None:
    if state.parse_ms is None:
        state.parse_ms = (time.perf_counter() - state.t0) * 1000.0


def _run_command(
    app: App,
    tokens: list[str],
    *,
    run_context: RunContext | None,
    state: _InvokeState,
) -> int:
    command, bound, ignored = app.parse_args(
        tokens,
        exit_on_error=False,
        print_error=True,
    )
    state.parse_ms = (time.perf_counter() - state.t0) * 1000.0
    state.command_name = getattr(command, "__qualname__", repr(command))

    if run_context is not None and ignored:
        for name, hint in ignored.items():
            if hint is RunContext or name == "run_context":
                bound.arguments[name] = run_context

    t1 = time.perf_counter()
    result = command(*bound.args, **bound.kwargs)
    state.exec_ms = (time.perf_counter() - t1) * 1000.0
    return cli_result_action(app, command, result)


def invoke_command(
    app: App,
    tokens: list[str] | None,
    *,
    run_context: RunContext | None,
) -> int:
    """Execute a CLI command and classify its outcome.

    Parameters
    ----------
    app
        CLI app instance.
    tokens
        Command tokens to execute.
    run_context
        Optional session context injected into commands that declare it.

    Returns
    -------
    int
        Exit code for the invocation.
    """
    token_list = list(tokens or ())
    state = _InvokeState(time.perf_counter(), _command_name_from_tokens(token_list))
    try:
        exit_code = _run_command(app, token_list, run_context=run_context, state=state)
    except CycloptsError as exc:
        _finalize_parse_ms(state)
        exit_code = ExitCode.from_exception(exc)
        state.error_stage = _classify_error_stage(exc)
    except Exception as exc:
        _finalize_parse_ms(state)
        if state.exec_ms is None:
            state.exec_ms = (time.perf_counter() - state.t0) * 1000.0
        exit_code = ExitCode.from_exception(exc)
        state.error_stage = "execution"
        _LOGGER.error("Command %s failed: %s", state.command_name, exc)
        _LOGGER.debug("Command failure details.", exc_info=exc)
    _LOGGER.debug(
        "CLI invocation finished: command=%s exit_code=%d stage=%s parse_ms=%.2f exec_ms=%.2f",
        state.command_name,
        exit_code,
        state.error_stage or "ok",
        state.parse_ms or 0.0,
        state.exec_ms or 0.0,
    )
    return int(exit_code)


def _classify_error_stage(exc: CycloptsError) -> str:
    """Classify Cyclopts errors into CLI pipeline stages.

    Returns
    -------
    str
        Error stage label.
    """
    name = exc.__class__.__name__
    if name == "UnknownCommandError":
        return "command_resolve"
    if name in {"UnknownOptionError", "MissingArgumentError", "RepeatArgumentError"}:
        return "binding"
    if name == "CoercionError":
        return "coercion"
    if name == "ValidationError":
        return "validation"
    return "unknown"


__all__ = ["invoke_command"]
