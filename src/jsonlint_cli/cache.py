"""Content-addressed on-disk cache for remote schemas.

Entries are keyed by the MD5 digest of the schema URI, not of its content, so
a changed remote schema is only picked up after the entry is deleted.

Layout:
    <cache dir>/<md5(uri)>.json   raw bytes as fetched
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from pathlib import Path

from jsonlint_cli.errors import CacheWriteFailure

logger = logging.getLogger(__name__)

CACHE_DIR_ENV = "JSONLINT_CACHE_DIR"
DEFAULT_CACHE_DIR = Path(__file__).resolve().parent / ".tmp"


def cache_key(uri: str) -> str:
    """Hex digest identifying the cache entry for ``uri``."""
    return hashlib.md5(uri.encode("utf-8")).hexdigest()


def default_cache_dir() -> Path:
    """Cache directory from JSONLINT_CACHE_DIR, else beside the package."""
    override = os.environ.get(CACHE_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CACHE_DIR


class SchemaCache:
    """Best-effort schema byte store.

    Reads treat any I/O failure as a miss and writes never raise, so a broken
    cache degrades to always fetching.
    """

    def __init__(self, directory: str | Path | None = None) -> None:
        self.directory = Path(directory) if directory is not None else default_cache_dir()

    def path_for(self, uri: str) -> Path:
        return self.directory / f"{cache_key(uri)}.json"

    def read(self, uri: str) -> bytes | None:
        """Return the cached bytes for ``uri``, or None on a miss or any error."""
        path = self.path_for(uri)
        try:
            data = path.read_bytes()
        except OSError:
            logger.debug(f"Schema cache miss: {uri}")
            return None
        logger.debug(f"Schema cache hit: {uri} -> {path}")
        return data

    def write(self, uri: str, data: bytes) -> bool:
        """Store ``data`` for ``uri``.

        Returns:
            True if the entry was written, False if writing failed.
        """
        try:
            self._write_atomic(self.path_for(uri), data)
        except CacheWriteFailure as e:
            logger.debug(f"Ignoring schema cache write failure: {e}")
            return False
        return True

    def _write_atomic(self, path: Path, data: bytes) -> None:
        """Write to a temp file in the cache dir, then rename over the entry.

        Concurrent writers for the same URI each replace the entry whole;
        the last rename wins.
        """
        temp_path: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                temp_path = f.name
                f.write(data)
            os.replace(temp_path, path)
        except OSError as e:
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)
            raise CacheWriteFailure(f"Failed to write schema cache entry: {e}", path=str(path)) from e
