"""Typed exceptions for jsonlint-cli.

All linter errors inherit from JsonlintError. Errors raised while linting a
single document are contained in that document's result; ConfigError and
anything unclassified abort the whole run.
"""

from __future__ import annotations

from typing import Any


class JsonlintError(Exception):
    """Base exception for all linter errors."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class ParseError(JsonlintError):
    """Document is not valid JSON."""

    def __init__(self, message: str, *, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.line = line
        self.column = column


class SchemaUnavailable(JsonlintError):
    """Schema could not be fetched, read or parsed."""

    def __init__(self, message: str, *, reference: str | None = None):
        context = {"reference": reference} if reference else {}
        super().__init__(message, context=context)
        self.reference = reference


class SchemaValidationError(JsonlintError):
    """Document parses but violates its schema.

    The message holds the full formatted report; ``messages`` keeps the
    individual per-field diagnostics.
    """

    def __init__(self, message: str, *, messages: list[str]):
        super().__init__(message)
        self.messages = messages


class UnknownEnvironment(JsonlintError):
    """No validator is known for the requested schema environment."""

    def __init__(self, message: str, *, env: str):
        super().__init__(message, context={"env": env})
        self.env = env


class ConfigError(JsonlintError):
    """Config file discovery, parsing or merging failed."""

    def __init__(self, message: str, *, path: str | None = None):
        context = {"path": path} if path else {}
        super().__init__(message, context=context)
        self.path = path


class CacheWriteFailure(JsonlintError):
    """Schema cache entry could not be written."""

    def __init__(self, message: str, *, path: str | None = None):
        context = {"path": path} if path else {}
        super().__init__(message, context=context)
        self.path = path


class HTTPError(JsonlintError):
    """HTTP request failed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str | None = None,
        method: str = "GET",
    ):
        context = {"status_code": status_code, "url": url, "method": method}
        super().__init__(message, context={k: v for k, v in context.items() if v is not None})
        self.status_code = status_code
        self.url = url
        self.method = method


class TimeoutError(JsonlintError):
    """Operation timed out."""

    def __init__(self, message: str, *, timeout_seconds: float | None = None):
        context = {"timeout_seconds": timeout_seconds} if timeout_seconds else {}
        super().__init__(message, context=context)
        self.timeout_seconds = timeout_seconds
