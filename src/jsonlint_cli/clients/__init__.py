"""Network clients used by the schema fetcher."""

from jsonlint_cli.clients.http import HTTPResponse, request

__all__ = ["request", "HTTPResponse"]
