"""Look up a key in a struct tag."""

from __future__ import annotations

import logging
import sys
from typing import Annotated

from cyclopts import Parameter

from cli.exit_codes import ExitCode
from structtag.lookup import StructTag

logger = logging.getLogger(__name__)


def lookup_command(
    tag: Annotated[str, Parameter(help="Tag content such as 'json:\"name\"'.")],
    key: Annotated[str, Parameter(help="Key to look up; the first occurrence wins.")],
) -> int:
    """Print the value stored under a tag key.

    Returns
    -------
    int
        Exit status code; general error when the key is absent.
    """
    value = StructTag(tag).lookup(key)
    if value is None:
        logger.info("Key %r not found in tag %r.", key, tag)
        return ExitCode.GENERAL_ERROR
    sys.stdout.write(value + "\n")
    return ExitCode.SUCCESS


__all__ = ["lookup_command"]
