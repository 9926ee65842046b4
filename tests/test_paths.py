"""Tests for file selection."""

from __future__ import annotations

from pathlib import Path

import pytest

from jsonlint_cli.config import DEFAULT_IGNORE
from jsonlint_cli.paths import expand_paths, is_ignored


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small tree of JSON files."""
    for rel in [
        "a.json",
        "b.json",
        "notes.txt",
        "data/c.json",
        "data/deep/d.json",
        "node_modules/pkg.json",
        "node_modules/lib/package.json",
    ]:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{}")
    return tmp_path


def _names(paths: list[Path], base: Path) -> list[str]:
    return [p.relative_to(base).as_posix() for p in paths]


class TestIsIgnored:
    """Tests for ignore pattern matching."""

    @pytest.mark.parametrize(
        "path",
        ["node_modules/pkg.json", "node_modules/lib/package.json", "node_modules/a/b/c.json"],
    )
    def test_default_pattern_covers_node_modules(self, path: str) -> None:
        assert is_ignored(path, DEFAULT_IGNORE) is True

    def test_other_paths_are_kept(self) -> None:
        assert is_ignored("src/node_modules.json", DEFAULT_IGNORE) is False
        assert is_ignored("data/c.json", DEFAULT_IGNORE) is False

    def test_no_patterns(self) -> None:
        assert is_ignored("anything.json", []) is False


class TestExpandPaths:
    """Tests for expand_paths."""

    def test_literal_file(self, project: Path) -> None:
        assert _names(expand_paths(["a.json"], cwd=project), project) == ["a.json"]

    def test_glob_is_sorted(self, project: Path) -> None:
        assert _names(expand_paths(["*.json"], cwd=project), project) == ["a.json", "b.json"]

    def test_recursive_glob_with_default_ignore(self, project: Path) -> None:
        paths = expand_paths(["**/*.json"], DEFAULT_IGNORE, cwd=project)

        assert _names(paths, project) == ["a.json", "b.json", "data/c.json", "data/deep/d.json"]

    def test_recursive_glob_without_ignore(self, project: Path) -> None:
        paths = expand_paths(["**/*.json"], cwd=project)
        assert "node_modules/lib/package.json" in _names(paths, project)

    def test_duplicates_are_dropped(self, project: Path) -> None:
        paths = expand_paths(["b.json", "*.json", "b.json"], cwd=project)
        assert _names(paths, project) == ["b.json", "a.json"]

    def test_directories_are_skipped(self, project: Path) -> None:
        paths = expand_paths(["data", "data/*"], cwd=project)
        assert _names(paths, project) == ["data/c.json"]

    def test_unmatched_pattern_yields_nothing(self, project: Path) -> None:
        assert expand_paths(["missing/*.json"], cwd=project) == []

    def test_absolute_path(self, project: Path) -> None:
        target = project / "data" / "c.json"
        assert expand_paths([str(target)], cwd=project) == [target]
