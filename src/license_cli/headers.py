"""Header settings for the source header checker and the files they select.

Exclude patterns use Ant syntax: ``*`` and ``?`` stay inside one path
segment, ``**`` spans any number of directories (including none) and a
pattern ending in ``/`` matches everything below that directory. Patterns are
matched against the whole project-relative path, so ``*.json`` only selects
files in the project root while ``**/*.json`` selects them everywhere.
"""

import os
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path, PurePosixPath
from typing import Iterator, List, Pattern, Tuple, Union

# Never scanned, like Ant's default excludes
VCS_DIRECTORIES = {'.git', '.hg', '.svn', 'CVS'}


@dataclass
class HeaderSettings:
    """Header file and exclusions for the source header checker."""
    header: Path
    excludes: List[str]
    build_dir: PurePosixPath

    def is_excluded(self, path: Union[str, PurePosixPath]) -> bool:
        """Check whether a project-relative path is skipped by the header checker.

        Args:
            path: Path relative to the project root, with forward slashes.

        Returns:
            bool: True if the path lies in the build directory or matches an exclude.
        """
        path = PurePosixPath(path)
        if path == self.build_dir or self.build_dir in path.parents:
            return True
        return any(ant_match(path.as_posix(), pattern) for pattern in self.excludes)

    def scan(self, base_dir: Union[str, Path]) -> Iterator[Tuple[PurePosixPath, bool]]:
        """Walk the project and classify every file.

        The build directory and version control directories are not entered.

        Args:
            base_dir: Project root.

        Yields:
            Tuple[PurePosixPath, bool]: Project-relative file path and whether it is excluded.
        """
        base_dir = Path(base_dir)
        for root, dirs, files in os.walk(base_dir):
            relative_root = PurePosixPath(Path(root).relative_to(base_dir).as_posix())
            dirs[:] = sorted(
                d for d in dirs
                if d not in VCS_DIRECTORIES and relative_root / d != self.build_dir
            )
            for name in sorted(files):
                relative = relative_root / name
                yield relative, self.is_excluded(relative)


def ant_match(path: str, pattern: str) -> bool:
    """Match a forward-slash relative path against an Ant-style pattern."""
    return _ant_regex(pattern).fullmatch(path) is not None


@lru_cache(maxsize=None)
def _ant_regex(pattern: str) -> Pattern[str]:
    pattern = pattern.replace('\\', '/').lstrip('/')
    if pattern.endswith('/'):
        pattern += '**'

    regex = ''
    segments = pattern.split('/')
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if segment == '**':
            if not last:
                regex += '(?:[^/]+/)*'
            elif regex.endswith('/'):
                # "dir/**" also matches "dir" itself
                regex = regex[:-1] + '(?:/.*)?'
            else:
                regex += '.*'
            continue
        regex += _segment_regex(segment)
        if not last:
            regex += '/'
    return re.compile(regex, re.DOTALL)


def _segment_regex(segment: str) -> str:
    parts = []
    for char in segment:
        if char == '*':
            if not parts or parts[-1] != '[^/]*':
                parts.append('[^/]*')
        elif char == '?':
            parts.append('[^/]')
        else:
            parts.append(re.escape(char))
    return ''.join(parts)
