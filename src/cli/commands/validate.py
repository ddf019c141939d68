"""Validate raw struct tags against the canonical grammar."""

from __future__ import annotations

import sys
from typing import Annotated

from cyclopts import Parameter

from cli.exit_codes import ExitCode
from cli.result import CliResult
from structtag.errors import UnquoteError
from structtag.grammar import struct_tag_error
from structtag.literals import unquote


def validate_command(
    *tags: Annotated[
        str,
        Parameter(help="Tag content such as 'json:\"name\"' (or a quoted literal with --literal)."),
    ],
    literal: Annotated[
        bool,
        Parameter(
            name="--literal",
            help="Treat each argument as a quoted source literal and unquote it first.",
        ),
    ] = False,
) -> CliResult:
    """Validate struct tags and report the first error in each.

    Returns
    -------
    CliResult
        Success when every tag is canonical.
    """
    invalid = 0
    for tag in tags:
        problem = _tag_problem(tag, literal=literal)
        if problem is None:
            sys.stdout.write(f"{tag}: ok\n")
            continue
        invalid += 1
        sys.stdout.write(f"{tag}: {problem}\n")

    if invalid:
        return CliResult.error(
            ExitCode.VALIDATION_ERROR,
            summary=f"{invalid} of {len(tags)} tag(s) invalid.",
        )
    return CliResult.success()


def _tag_problem(tag: str, *, literal: bool) -> str | None:
    content = tag
    if literal:
        try:
            content = unquote(tag)
        except UnquoteError as exc:
            return f"unable to read struct tag: {exc}"
    error = struct_tag_error(content)
    return None if error is None else str(error)


__all__ = ["validate_command"]
