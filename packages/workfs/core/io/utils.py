"""Utility functions for filesystem operations.

Provides glob matching for watcher patterns.
"""

from __future__ import annotations

import fnmatch
import functools
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ResourceLocator

_SCHEME_PREFIX = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]+:")


def _expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternation into plain fnmatch patterns.

    Raises:
        ValueError: If the braces are unbalanced
    """
    start = pattern.find("{")
    if start == -1 or "}" in pattern[:start]:
        if "}" in pattern:
            raise ValueError(f"Unbalanced braces in glob pattern: {pattern!r}")
        return [pattern]

    options: list[str] = []
    depth = 0
    last = start + 1
    for i in range(start, len(pattern)):
        c = pattern[i]
        if c == "{":
            depth += 1
        elif c == "," and depth == 1:
            options.append(pattern[last:i])
            last = i + 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                options.append(pattern[last:i])
                head, tail = pattern[:start], pattern[i + 1 :]
                return [p for option in options for p in _expand_braces(head + option + tail)]
    raise ValueError(f"Unbalanced braces in glob pattern: {pattern!r}")


def _match_segments(pattern: tuple[str, ...], parts: tuple[str, ...]) -> bool:
    if not pattern:
        return not parts
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        return any(_match_segments(rest, parts[i:]) for i in range(len(parts) + 1))
    if not parts or not fnmatch.fnmatchcase(parts[0], head):
        return False
    return _match_segments(rest, parts[1:])


class GlobPattern:
    """
    Watcher glob, matched one path segment at a time with fnmatch.

    Supported syntax: ``*``, ``?``, ``[...]`` and ``[!...]`` within one
    segment, a ``**`` segment for any depth (including none) and ``{a,b}``
    alternation. Patterns with a scheme prefix are matched against the full
    URI, all others against the locator path.

    Example:
        >>> GlobPattern("**/*.txt").match_path("/tmp/a/b.txt")
        True
        >>> GlobPattern("/tmp/*.txt").match_path("/tmp/a/b.txt")
        False
    """

    def __init__(self, pattern: str) -> None:
        """
        Compile a pattern.

        Raises:
            ValueError: If the pattern is empty or its braces are unbalanced
        """
        if not pattern:
            raise ValueError("Glob pattern must not be empty")
        self.pattern = pattern
        self.full_uri = _SCHEME_PREFIX.match(pattern) is not None
        self._alternatives = [tuple(p.split("/")) for p in _expand_braces(pattern)]

    def __repr__(self) -> str:
        return f"GlobPattern({self.pattern!r})"

    def match_path(self, candidate: str) -> bool:
        """Check a slash-separated path or URI string against the pattern."""
        parts = tuple(candidate.split("/"))
        return any(_match_segments(alt, parts) for alt in self._alternatives)

    def match(self, locator: ResourceLocator) -> bool:
        """Check a locator against the pattern."""
        if self.full_uri:
            return self.match_path(f"{locator.scheme}://{locator.authority}{locator.path}")
        return self.match_path(locator.path)


@functools.lru_cache(maxsize=256)
def compile_glob(pattern: str) -> GlobPattern:
    """Compile a watcher glob pattern (cached)."""
    return GlobPattern(pattern)


def match_glob(pattern: str, locator: ResourceLocator) -> bool:
    """Check whether a locator matches a watcher glob pattern."""
    return compile_glob(pattern).match(locator)
