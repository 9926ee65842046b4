"""File selection for the positional arguments."""

from __future__ import annotations

import glob
from collections.abc import Iterable
from fnmatch import fnmatchcase
from pathlib import Path


def is_ignored(path: str, ignore: Iterable[str]) -> bool:
    """True if a cwd-relative POSIX path matches any ignore pattern.

    ``**/`` may stand for zero directories, so ``node_modules/**/*`` also
    covers files directly inside ``node_modules``.
    """
    for pattern in ignore:
        if fnmatchcase(path, pattern) or fnmatchcase(path, pattern.replace("**/", "")):
            return True
    return False


def expand_paths(
    patterns: Iterable[str],
    ignore: Iterable[str] = (),
    cwd: str | Path | None = None,
) -> list[Path]:
    """Resolve file arguments and glob patterns to files.

    Args:
        patterns: File paths or glob patterns, relative to ``cwd``.
        ignore: Glob patterns excluding matches.
        cwd: Base directory (defaults to the process working directory).

    Returns:
        Matching files, each once, in argument order and sorted per pattern.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    ignore = list(ignore)
    seen: set[Path] = set()
    selected: list[Path] = []

    for pattern in patterns:
        literal = base / pattern
        if literal.is_file():
            candidates = [pattern]
        else:
            candidates = sorted(glob.glob(pattern, root_dir=base, recursive=True))

        for candidate in candidates:
            path = base / candidate
            if not path.is_file():
                continue
            if is_ignored(Path(candidate).as_posix(), ignore):
                continue
            resolved = path.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            selected.append(path)

    return selected
