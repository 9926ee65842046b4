"""Schema resolution for the validate setting.

A reference with both a scheme and a host is fetched over HTTP, backed by the
on-disk SchemaCache. Anything else is read as a local file. Results are
memoized per SchemaFetcher instance, which the runner creates once per run.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

import httpx

from jsonlint_cli.cache import SchemaCache
from jsonlint_cli.clients.http import request
from jsonlint_cli.errors import HTTPError, SchemaUnavailable, TimeoutError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
SCHEMA_ACCEPT = "application/schema+json, application/json;q=0.9, */*;q=0.1"


def is_remote(reference: str) -> bool:
    """True if ``reference`` is a URI with both a scheme and a host."""
    parsed = urlparse(reference)
    return bool(parsed.scheme and parsed.netloc)


def local_path(reference: str) -> Path:
    """Filesystem path for a local reference; ``file:`` URIs are unwrapped."""
    parsed = urlparse(reference)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return Path(reference).expanduser()


def parse_schema(data: bytes | str, reference: str) -> Any:
    """Parse raw schema text, mapping decode failures to SchemaUnavailable."""
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SchemaUnavailable(f"Schema is not valid JSON: {e}", reference=reference) from e


class SchemaFetcher:
    """Resolves schema references to parsed schema documents.

    Repeat calls with the same reference string return the memoized result;
    concurrent calls share one in-flight load. Failed loads are not memoized.
    """

    def __init__(
        self,
        cache: SchemaCache | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.cache = cache if cache is not None else SchemaCache()
        self.client = client
        self._resolved: dict[str, Any] = {}
        self._pending: dict[str, asyncio.Task[Any]] = {}

    async def resolve(self, reference: str) -> Any:
        """Return the parsed schema for ``reference``.

        Raises:
            SchemaUnavailable: If the schema cannot be fetched, read or parsed.
        """
        if reference in self._resolved:
            return self._resolved[reference]

        task = self._pending.get(reference)
        if task is None:
            task = asyncio.create_task(self._load(reference))
            task.add_done_callback(lambda done: self._settle(reference, done))
            self._pending[reference] = task
        return await task

    def _settle(self, reference: str, task: asyncio.Task[Any]) -> None:
        self._pending.pop(reference, None)
        if not task.cancelled() and task.exception() is None:
            self._resolved[reference] = task.result()

    async def _load(self, reference: str) -> Any:
        if is_remote(reference):
            return await self._load_remote(reference)
        return await self._load_local(reference)

    async def _load_remote(self, uri: str) -> Any:
        cached = await asyncio.to_thread(self.cache.read, uri)
        if cached is not None:
            try:
                return parse_schema(cached, uri)
            except SchemaUnavailable:
                logger.debug(f"Discarding unparseable schema cache entry for {uri}")

        logger.debug(f"Fetching schema {uri}")
        headers = {"Accept": SCHEMA_ACCEPT}
        try:
            if self.client is None:
                async with httpx.AsyncClient(
                    timeout=DEFAULT_TIMEOUT, follow_redirects=True
                ) as client:
                    response = await request(client, "GET", uri, headers=headers)
            else:
                response = await request(self.client, "GET", uri, headers=headers)
        except (HTTPError, TimeoutError) as e:
            raise SchemaUnavailable(f"Failed to fetch schema: {e.message}", reference=uri) from e

        logger.debug(f"Schema {uri} answered {response.status_code} in {response.elapsed_ms}ms")
        if not response.ok:
            raise SchemaUnavailable(
                f"Failed to fetch schema: HTTP {response.status_code}", reference=uri
            )

        schema = parse_schema(response.content, uri)
        await asyncio.to_thread(self.cache.write, uri, response.content)
        return schema

    async def _load_local(self, reference: str) -> Any:
        path = local_path(reference)
        logger.debug(f"Reading schema file {path}")
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as e:
            raise SchemaUnavailable(f"Schema not found: {path}", reference=reference) from e
        except OSError as e:
            raise SchemaUnavailable(f"Failed to read schema {path}: {e}", reference=reference) from e
        return parse_schema(data, reference)
