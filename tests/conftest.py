"""Pytest fixtures for jsonlint-cli tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from jsonlint_cli.cache import SchemaCache


@pytest.fixture
def cache(tmp_path: Path) -> SchemaCache:
    """SchemaCache rooted in a temporary directory."""
    return SchemaCache(tmp_path / "cache")


@pytest.fixture
def required_schema() -> dict[str, Any]:
    """Schema requiring integer properties a and b."""
    return {
        "type": "object",
        "required": ["a", "b"],
        "properties": {
            "a": {"type": "integer"},
            "b": {"type": "integer"},
        },
    }


@pytest.fixture
def person_schema() -> dict[str, Any]:
    """Schema with a spread of rules for message formatting."""
    return {
        "type": "object",
        "required": ["name"],
        "properties": {
            "name": {"type": "string", "minLength": 2, "maxLength": 10},
            "age": {"type": "integer", "minimum": 0, "description": "Age in years"},
            "tags": {"type": "array", "maxItems": 2},
        },
        "additionalProperties": False,
    }


@pytest.fixture
def schema_file(tmp_path: Path, required_schema: dict[str, Any]) -> Path:
    """The required_schema written to disk."""
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(required_schema))
    return path


class RecordingHandler:
    """MockTransport handler serving one body and recording requests."""

    def __init__(self, body: bytes, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.body)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def schema_server(required_schema: dict[str, Any]) -> RecordingHandler:
    """Handler serving required_schema with 200."""
    return RecordingHandler(json.dumps(required_schema).encode("utf-8"))


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Factory for AsyncClients backed by a MockTransport handler."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def recording_handler() -> type[RecordingHandler]:
    """The RecordingHandler class, for tests needing custom bodies or statuses."""
    return RecordingHandler
