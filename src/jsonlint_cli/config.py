"""Lint settings and config file discovery.

Settings are merged from three layers, later layers winning:

    defaults  <  config files  <  explicit CLI overrides

Config files are looked up from a target directory up to the filesystem root;
files closer to the target override those further away.

    .jsonlintrc       YAML (or JSON) mapping of setting names to values
    .jsonlintignore   ini-style, one glob pattern per line
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jsonlint_cli.errors import ConfigError
from jsonlint_cli.validation import DEFAULT_ENV

logger = logging.getLogger(__name__)

RC_FILENAME = ".jsonlintrc"
IGNORE_FILENAME = ".jsonlintignore"
DEFAULT_IGNORE: tuple[str, ...] = ("node_modules/**/*",)
DEFAULT_INDENT = "  "


class LintSettings(BaseModel):
    """Settings for linting one document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    ignore: tuple[str, ...] = Field(
        default=DEFAULT_IGNORE, description="glob patterns to exclude from linting"
    )
    schema_uri: str | None = Field(
        default=None, alias="validate", description="uri to schema to use for validation"
    )
    indent: str = Field(default=DEFAULT_INDENT, description="whitespace to use for pretty printing")
    env: str = Field(default=DEFAULT_ENV, description="json schema env to use for validation")
    quiet: bool = Field(default=False, description="suppress all output")
    pretty: bool = Field(default=False, description="pretty-print the input")
    sort: bool = Field(default=False, description="sort object keys before validation")

    @field_validator("ignore", mode="before")
    @classmethod
    def parse_ignore(cls, v: Any) -> Any:
        """Accept a single pattern as well as a list."""
        if isinstance(v, str):
            return (v,)
        return v

    @field_validator("indent", mode="before")
    @classmethod
    def parse_indent(cls, v: Any) -> Any:
        """An integer indent means that many spaces."""
        if isinstance(v, int) and not isinstance(v, bool):
            return " " * v
        return v


def merge_settings(*layers: Mapping[str, Any]) -> LintSettings:
    """Build settings from layers of raw values, later layers winning.

    Raises:
        ConfigError: If the merged values are not valid settings.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    try:
        return LintSettings.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e


def search_dirs(directory: str | Path) -> list[Path]:
    """Directories to search for config files, furthest first."""
    start = Path(directory).resolve()
    return [*reversed(start.parents), start]


def read_rc_file(path: Path) -> dict[str, Any]:
    """Read one .jsonlintrc file.

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}", path=str(path)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping", path=str(path))
    return data


def read_ignore_file(path: Path) -> list[str]:
    """Read the patterns of one .jsonlintignore file.

    Each non-comment line is an ini key; anything after ``=`` is ignored, as
    are ``[section]`` headers.

    Raises:
        ConfigError: If the file cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read ignore file: {e}", path=str(path)) from e

    patterns: list[str] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in "#;":
            continue
        if line.startswith("[") and line.endswith("]"):
            continue
        pattern = line.split("=", 1)[0].strip()
        if pattern and pattern not in patterns:
            patterns.append(pattern)
    return patterns


def load_rc(directory: str | Path) -> dict[str, Any]:
    """Merged .jsonlintrc values visible from ``directory``."""
    config: dict[str, Any] = {}
    for d in search_dirs(directory):
        path = d / RC_FILENAME
        if path.is_file():
            logger.debug(f"Loading config file {path}")
            config.update(read_rc_file(path))
    return config


def load_ignore(directory: str | Path) -> list[str]:
    """All .jsonlintignore patterns visible from ``directory``."""
    patterns: list[str] = []
    for d in search_dirs(directory):
        path = d / IGNORE_FILENAME
        if path.is_file():
            logger.debug(f"Loading ignore file {path}")
            patterns.extend(p for p in read_ignore_file(path) if p not in patterns)
    return patterns


def resolve_settings(
    overrides: Mapping[str, Any],
    directory: str | Path | None = None,
) -> LintSettings:
    """Settings for a target directory.

    Args:
        overrides: Values given explicitly on the command line.
        directory: Where config discovery starts; None skips config files.

    Returns:
        The merged LintSettings.

    Raises:
        ConfigError: If a config file is unreadable or malformed.
    """
    if directory is None:
        return merge_settings(overrides)

    rc = load_rc(directory)
    file_patterns = load_ignore(directory)
    if file_patterns:
        rc_ignore = rc.get("ignore") or []
        if isinstance(rc_ignore, str):
            rc_ignore = [rc_ignore]
        rc["ignore"] = [*rc_ignore, *file_patterns]

    return merge_settings(rc, overrides)
