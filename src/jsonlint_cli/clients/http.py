"""Async HTTP client wrapper.

Provides a clean interface for HTTP requests with:
- Typed response objects
- Consistent error handling
- Centralized logging
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import httpx

from jsonlint_cli.errors import HTTPError, TimeoutError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTTPResponse:
    """Structured HTTP response.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        content: Raw response body
        elapsed_ms: Request duration in milliseconds
        ok: True if status code is 2xx
    """

    status_code: int
    content: bytes
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """True if response has 2xx status code."""
        return 200 <= self.status_code < 300


async def request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
) -> HTTPResponse:
    """Make an HTTP request with consistent error handling.

    Args:
        client: httpx.AsyncClient instance shared by the run
        method: HTTP method (GET, HEAD, ...)
        url: Target URL
        headers: Optional request headers

    Returns:
        HTTPResponse with status and raw body

    Raises:
        HTTPError: If the request could not be sent or completed
        TimeoutError: If request times out
    """
    logger.debug(f"HTTP {method} {url}")
    started = time.monotonic()

    try:
        response = await client.request(
            method=method.upper(),
            url=url,
            headers=headers,
        )
    except httpx.TimeoutException as e:
        raise TimeoutError(
            f"Request timed out: {method} {url}",
            timeout_seconds=client.timeout.read,
        ) from e
    except httpx.RequestError as e:
        raise HTTPError(
            f"Request failed: {e}",
            url=url,
            method=method,
        ) from e

    elapsed_ms = round((time.monotonic() - started) * 1000, 2)

    result = HTTPResponse(
        status_code=response.status_code,
        content=response.content,
        elapsed_ms=elapsed_ms,
    )

    logger.debug(f"HTTP {method} {url} -> {result.status_code} in {elapsed_ms}ms")
    return result
