"""Per-document lint pipeline.

    parse -> (sort) -> (pretty-print) -> (validate) -> LintResult

Linter errors raised along the way end the pipeline and become a failed
result; anything else propagates to the caller.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer

from jsonlint_cli.config import LintSettings
from jsonlint_cli.errors import JsonlintError, ParseError, SchemaValidationError
from jsonlint_cli.fetcher import SchemaFetcher
from jsonlint_cli.pretty import format_json
from jsonlint_cli.sorting import sort_keys
from jsonlint_cli.translate import translate
from jsonlint_cli.validation import validate_document

logger = logging.getLogger(__name__)

STDIN_LABEL = "<stdin>"
NESTING_MESSAGE = "Document is nested too deeply"

Emitter = Callable[[str], Any]


@dataclass(frozen=True)
class LintResult:
    """Outcome of linting one document.

    Attributes:
        path: Absolute path of the document, None for stdin.
        ok: True if the document parsed and validated.
        message: Report text for a failure; None on success or in quiet mode.
        error: The error that failed the document.
    """

    path: Path | None
    ok: bool
    message: str | None = None
    error: JsonlintError | None = None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid literal {name}")


def decode_document(data: bytes) -> str:
    """Decode a document read from disk as UTF-8.

    Raises:
        ParseError: If the bytes are not valid UTF-8.
    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"Invalid UTF-8 at byte {e.start}") from e


def parse_document(source: str) -> Any:
    """Parse JSON text strictly (no NaN or Infinity).

    Raises:
        ParseError: If the text is not valid JSON.
    """
    try:
        return json.loads(source, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(str(e), line=e.lineno, column=e.colno) from e
    except ValueError as e:
        raise ParseError(str(e)) from e
    except RecursionError as e:
        raise ParseError(NESTING_MESSAGE) from e


def validation_report(label: str, schema_uri: str, messages: list[str]) -> str:
    """Header line naming the file and schema, then one indented line per message."""
    lines = [f'"{label}" fails against schema "{schema_uri}"']
    lines.extend(f"\t{message}" for message in messages if message)
    return "\n".join(lines)


async def lint(
    source: str | bytes,
    source_path: str | Path | None,
    settings: LintSettings,
    fetcher: SchemaFetcher,
    *,
    emit: Emitter = typer.echo,
) -> LintResult:
    """Lint one document.

    Args:
        source: Raw document text, or undecoded file contents.
        source_path: Where the text came from, None for stdin.
        settings: Merged settings for this document.
        fetcher: Shared schema fetcher for the run.
        emit: Output for pretty-printed documents.

    Returns:
        LintResult; failed results carry the report text unless quiet.
    """
    abs_path = Path(source_path).resolve() if source_path is not None else None
    label = str(abs_path) if abs_path is not None else STDIN_LABEL

    try:
        if isinstance(source, bytes):
            source = decode_document(source)
        document = parse_document(source)

        if settings.sort:
            try:
                document = sort_keys(document)
            except RecursionError as e:
                raise ParseError(NESTING_MESSAGE) from e

        if settings.pretty and not settings.quiet:
            try:
                emit(format_json(source, settings.indent))
            except (OSError, ValueError) as e:
                logger.warning(f"{label} could not be pretty-printed: {e}")

        if settings.schema_uri:
            schema = await fetcher.resolve(settings.schema_uri)
            failures = validate_document(document, schema, settings.env)
            if failures:
                messages = translate(failures)
                raise SchemaValidationError(
                    validation_report(label, settings.schema_uri, messages),
                    messages=messages,
                )
    except JsonlintError as e:
        logger.debug(f"{label} failed: {type(e).__name__}")
        if settings.quiet:
            message = None
        elif isinstance(e, SchemaValidationError):
            message = e.message
        else:
            message = f"{label} {e}"
        return LintResult(path=abs_path, ok=False, message=message, error=e)

    return LintResult(path=abs_path, ok=True)
