"""jsonlint-cli: JSON linting with pretty-printing and JSON Schema validation."""

__version__ = "0.1.0"

from jsonlint_cli.cache import SchemaCache
from jsonlint_cli.config import LintSettings, resolve_settings
from jsonlint_cli.errors import (
    ConfigError,
    JsonlintError,
    ParseError,
    SchemaUnavailable,
    SchemaValidationError,
)
from jsonlint_cli.fetcher import SchemaFetcher
from jsonlint_cli.lint import LintResult, lint
from jsonlint_cli.pretty import format_json
from jsonlint_cli.runner import run_lint
from jsonlint_cli.sorting import sort_keys
from jsonlint_cli.translate import translate
from jsonlint_cli.validation import ValidationFailure, validate_document

__all__ = [
    # Pipeline
    "LintResult",
    "LintSettings",
    "lint",
    "resolve_settings",
    "run_lint",
    # Building blocks
    "SchemaCache",
    "SchemaFetcher",
    "ValidationFailure",
    "format_json",
    "sort_keys",
    "translate",
    "validate_document",
    # Errors
    "ConfigError",
    "JsonlintError",
    "ParseError",
    "SchemaUnavailable",
    "SchemaValidationError",
]
