"""Check struct field tags listed in JSON or TOML field documents."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Literal

import msgspec
from cyclopts import Parameter

from cli.config_loader import load_effective_config
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import output_group, rule_group
from cli.result import CliResult
from serde_msgspec import dumps_json, loads_json, loads_toml, to_builtins, validation_error_payload
from structtag.rule import FieldsDocument, check_structs

if TYPE_CHECKING:
    from collections.abc import Sequence

    from structtag.diagnostics import TagDiagnostic

logger = logging.getLogger(__name__)


class FieldsDocumentError(ValueError):
    """Raised when a field document cannot be decoded."""


def check_command(
    *paths: Annotated[
        Path,
        Parameter(help="Field documents (.json or .toml) listing structs and tagged fields."),
    ],
    keys: Annotated[
        list[str] | None,
        Parameter(
            name="--key",
            help="Encoding key to check on unexported fields (repeatable; overrides config).",
            group=rule_group,
        ),
    ] = None,
    output_format: Annotated[
        Literal["text", "json"] | None,
        Parameter(
            name="--format",
            help="Output format (default from config: text).",
            group=output_group,
        ),
    ] = None,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> CliResult:
    """Run the field tag rule over every field in the given documents.

    Returns
    -------
    CliResult
        Success when no diagnostics were produced.
    """
    config = run_context.config if run_context is not None else load_effective_config(None)
    encoding_keys = tuple(keys) if keys else config.encoding_keys
    fmt = output_format or config.output_format

    results: list[tuple[Path, list[TagDiagnostic]]] = []
    for path in paths:
        document = load_fields_document(path)
        diagnostics = check_structs(document.structs, encoding_keys=encoding_keys)
        logger.debug("Checked %s: %d diagnostic(s).", path, len(diagnostics))
        results.append((path, diagnostics))

    total = sum(len(diagnostics) for _, diagnostics in results)
    if fmt == "json":
        _write_json(results)
        summary = None
    else:
        _write_text(results)
        summary = f"{total} diagnostic(s) in {len(results)} file(s)." if total else None

    if total:
        return CliResult.error(ExitCode.VALIDATION_ERROR, summary=summary)
    return CliResult.success(summary=summary)


def load_fields_document(path: Path) -> FieldsDocument:
    """Decode a JSON or TOML field document.

    Parameters
    ----------
    path
        Document path; ``.toml`` files are read as TOML, anything else as JSON.

    Returns
    -------
    FieldsDocument
        Decoded document.

    Raises
    ------
    FieldsDocumentError
        Raised when the document is missing or does not match the schema.
    """
    try:
        payload = path.read_bytes()
    except OSError as exc:
        msg = f"Unable to read field document {path}: {exc}"
        raise FieldsDocumentError(msg) from exc
    try:
        if path.suffix.lower() == ".toml":
            return loads_toml(payload, target_type=FieldsDocument)
        return loads_json(payload, target_type=FieldsDocument)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        msg = f"Invalid field document {path}: {details}"
        raise FieldsDocumentError(msg) from exc
    except msgspec.DecodeError as exc:
        msg = f"Malformed field document {path}: {exc}"
        raise FieldsDocumentError(msg) from exc


def _location(diagnostic: TagDiagnostic) -> str:
    parts = [part for part in (diagnostic.struct_name, diagnostic.field_name) if part]
    return ".".join(parts) or "<field>"


def _write_text(results: Sequence[tuple[Path, list[TagDiagnostic]]]) -> None:
    for path, diagnostics in results:
        for diagnostic in diagnostics:
            sys.stdout.write(f"{path}: {_location(diagnostic)}: {diagnostic.message}\n")


def _write_json(results: Sequence[tuple[Path, list[TagDiagnostic]]]) -> None:
    payload = [
        {
            "path": str(path),
            "diagnostics": [
                {**_as_mapping(diagnostic), "message": diagnostic.message}
                for diagnostic in diagnostics
            ],
        }
        for path, diagnostics in results
    ]
    sys.stdout.write(dumps_json(payload, pretty=True).decode("utf-8") + "\n")


def _as_mapping(diagnostic: TagDiagnostic) -> dict[str, object]:
    payload = to_builtins(diagnostic)
    if not isinstance(payload, dict):
        msg = f"Expected mapping for diagnostic, got {type(payload).__name__}."
        raise TypeError(msg)
    return payload


__all__ = ["FieldsDocumentError", "check_command", "load_fields_document"]
