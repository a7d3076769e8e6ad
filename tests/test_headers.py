"""Unit tests for header exclude matching."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from license_cli.headers import HeaderSettings, ant_match

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(("path", "pattern", "matches"), [
    ("package.json", "*.json", True),
    ("src/data.json", "*.json", False),
    ("src/data.json", "**/*.json", True),
    ("package.json", "**/*.json", True),
    ("src/main/gen/Foo.java", "src/**/gen/*.java", True),
    ("src/gen/Foo.java", "src/**/gen/*.java", True),
    ("src/gen/sub/Foo.java", "src/**/gen/*.java", False),
    ("docs", "docs/**", True),
    ("docs/a/b.md", "docs/**", True),
    ("docsrc/a.md", "docs/**", False),
    ("docs/a/b.md", "docs/", True),
    ("a1.txt", "a?.txt", True),
    ("a/.txt", "a?.txt", False),
    ("file.json5", "*.json", False),
    ("notes[1].md", "notes[1].md", True),
])
def test_ant_match(path: str, pattern: str, matches: bool) -> None:
    assert ant_match(path, pattern) is matches


@pytest.mark.parametrize(("path", "excluded"), [
    ("package.json", True),
    ("src/main/resources/data.json", True),
    ("build/generated/Foo.java", True),
    ("build", True),
    ("README.md", True),
    ("docs/README.md", False),
    ("src/main/java/Foo.java", False),
    ("buildSrc/Foo.java", False),
])
def test_is_excluded(path: str, excluded: bool) -> None:
    header = HeaderSettings(
        header=Path("LICENSE.txt"),
        excludes=["**/*.json", "*.md"],
        build_dir=PurePosixPath("build"),
    )

    assert header.is_excluded(path) is excluded
