"""Command-line interface for linting JSON files."""

from __future__ import annotations

import logging
import sys
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from jsonlint_cli import __version__
from jsonlint_cli.config import DEFAULT_IGNORE, DEFAULT_INDENT
from jsonlint_cli.errors import ConfigError
from jsonlint_cli.runner import EXIT_FAILURE, run_lint
from jsonlint_cli.validation import DEFAULT_ENV

app = typer.Typer(
    name="jsonlint",
    help="Lint JSON files, optionally pretty-printing them and validating them against a JSON Schema.",
    add_completion=False,
)

err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def lint_cmd(
    files: list[str] | None = typer.Argument(
        None,
        help="JSON files or glob patterns to lint (reads stdin if omitted)",
        show_default=False,
    ),
    ignore: list[str] | None = typer.Option(
        None,
        "--ignore",
        "-i",
        help=f'glob pattern to exclude from linting, defaults to: "{DEFAULT_IGNORE[0]}"',
        show_default=False,
    ),
    validate: str | None = typer.Option(
        None,
        "--validate",
        "-s",
        help="uri to schema to use for validation",
    ),
    indent: str | None = typer.Option(
        None,
        "--indent",
        "-w",
        help=f'whitespace to use for pretty printing, defaults to: "{DEFAULT_INDENT}"',
        show_default=False,
    ),
    env: str | None = typer.Option(
        None,
        "--env",
        "-e",
        help=f'json schema env to use for validation, defaults to: "{DEFAULT_ENV}"',
        show_default=False,
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="suppress all output"),
    pretty: bool = typer.Option(False, "--pretty", "-p", help="pretty-print the input"),
    sort: bool = typer.Option(False, "--sort", help="sort object keys before validation"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging on stderr"),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="show jsonlint version",
    ),
) -> None:
    """Lint JSON files, or stdin when no files are given.

    Settings from .jsonlintrc and .jsonlintignore files are merged per file;
    options given here override them.

    Example:
        jsonlint "data/**/*.json" --validate https://example.com/schema.json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    overrides: dict[str, Any] = {}
    if ignore:
        overrides["ignore"] = ignore
    if validate is not None:
        overrides["validate"] = validate
    if indent is not None:
        overrides["indent"] = indent
    if env is not None:
        overrides["env"] = env
    if quiet:
        overrides["quiet"] = True
    if pretty:
        overrides["pretty"] = True
    if sort:
        overrides["sort"] = True

    try:
        exit_code = run_lint(files or [], overrides)
    except ConfigError as e:
        err_console.print(f"[red]Config Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_FAILURE) from None
    except OSError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_FAILURE) from None

    raise typer.Exit(code=exit_code)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
