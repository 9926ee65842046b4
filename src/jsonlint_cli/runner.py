"""Lint runner - selects documents and lints them concurrently."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

import httpx
import typer

from jsonlint_cli.cache import SchemaCache
from jsonlint_cli.config import resolve_settings
from jsonlint_cli.fetcher import DEFAULT_TIMEOUT, SchemaFetcher
from jsonlint_cli.lint import Emitter, LintResult, lint
from jsonlint_cli.paths import expand_paths

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1


async def lint_file(
    path: Path,
    overrides: Mapping[str, Any],
    fetcher: SchemaFetcher,
    *,
    emit: Emitter = typer.echo,
) -> LintResult:
    """Read one file and its directory's settings, then lint it."""
    source, settings = await asyncio.gather(
        asyncio.to_thread(path.read_bytes),
        asyncio.to_thread(resolve_settings, overrides, path.parent),
    )
    return await lint(source, path, settings, fetcher, emit=emit)


async def execute(
    files: Sequence[str],
    overrides: Mapping[str, Any],
    *,
    fetcher: SchemaFetcher,
    cwd: str | Path | None = None,
    emit: Emitter = typer.echo,
    read_stdin: Callable[[], str] | None = None,
) -> list[LintResult]:
    """Lint stdin or every file matched by ``files``.

    With no files, stdin is linted with the explicit overrides and defaults
    only. Otherwise every matched file gets its own pipeline, all running
    concurrently, each with settings discovered from its own directory.

    Args:
        files: File paths or glob patterns; empty to read stdin.
        overrides: Settings given explicitly on the command line.
        fetcher: Schema fetcher shared by all pipelines of the run.
        cwd: Base directory for patterns and config discovery.
        emit: Output for pretty-printed documents.
        read_stdin: Reads all of stdin (defaults to sys.stdin.read).

    Returns:
        One LintResult per document, in input order.

    Raises:
        ConfigError: If a config file is unreadable or malformed.
        OSError: If a matched file cannot be read.
    """
    if not files:
        reader = read_stdin if read_stdin is not None else sys.stdin.read
        source = await asyncio.to_thread(reader)
        settings = resolve_settings(overrides)
        return [await lint(source, None, settings, fetcher, emit=emit)]

    base = Path(cwd) if cwd is not None else Path.cwd()
    base_settings = await asyncio.to_thread(resolve_settings, overrides, base)
    paths = await asyncio.to_thread(expand_paths, files, base_settings.ignore, base)

    if not paths:
        logger.warning(f"No files matched: {' '.join(files)}")
        return []

    logger.debug(f"Linting {len(paths)} file(s)")
    results = await asyncio.gather(
        *(lint_file(path, overrides, fetcher, emit=emit) for path in paths)
    )
    return list(results)


def run_lint(
    files: Sequence[str],
    overrides: Mapping[str, Any],
    *,
    cwd: str | Path | None = None,
    cache: SchemaCache | None = None,
    emit: Emitter = typer.echo,
    read_stdin: Callable[[], str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> int:
    """Run a full lint and report failures.

    Returns:
        Exit code (0 if every document passed, 1 otherwise).
    """
    results = asyncio.run(
        _run(
            files,
            overrides,
            cwd=cwd,
            cache=cache,
            emit=emit,
            read_stdin=read_stdin,
            transport=transport,
            timeout=timeout,
        )
    )

    for result in results:
        if not result.ok and result.message is not None:
            emit(result.message)

    failed = sum(1 for r in results if not r.ok)
    if failed:
        logger.debug(f"{failed} of {len(results)} document(s) failed")
        return EXIT_FAILURE
    return EXIT_SUCCESS


async def _run(
    files: Sequence[str],
    overrides: Mapping[str, Any],
    *,
    cwd: str | Path | None,
    cache: SchemaCache | None,
    emit: Emitter,
    read_stdin: Callable[[], str] | None,
    transport: httpx.AsyncBaseTransport | None,
    timeout: float,
) -> list[LintResult]:
    async with httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        transport=transport,
    ) as client:
        fetcher = SchemaFetcher(cache=cache, client=client)
        return await execute(
            files,
            overrides,
            fetcher=fetcher,
            cwd=cwd,
            emit=emit,
            read_stdin=read_stdin,
        )
