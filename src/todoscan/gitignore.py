"""Gitignore-style pattern matching and .gitignore loading.

Only a practical subset of gitignore is supported: negation, directory-only
markers, anchored (slash-containing) patterns, single-segment wildcards and
the recursive ``**`` wildcard. Per-directory ``.gitignore`` precedence is not
modelled.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pathspec import GitIgnoreSpec

logger = logging.getLogger(__name__)

DOUBLE_STAR = "**"
COMMENT = "#"
NEGATE = "!"


class PatternError(ValueError):
    """A pattern contains a malformed glob (bad class, dangling escape)."""


def to_slash(value: str) -> str:
    """Return *value* with platform separators replaced by ``/``."""
    if os.sep != "/":
        value = value.replace(os.sep, "/")
    if os.altsep and os.altsep != "/":
        value = value.replace(os.altsep, "/")
    return value


@dataclass(frozen=True, slots=True)
class Pattern:
    """One ignore-file line with its derived matching properties.

    Attributes:
        raw: The line exactly as configured.
        literal: Pattern text without negation marker, trailing space and
            trailing separator, using ``/`` as separator.
        negated: Whether the line started with ``!``.
        dir_only: Whether the line ended with a separator.
    """

    raw: str
    literal: str
    negated: bool = False
    dir_only: bool = False

    @classmethod
    def parse(cls, raw: str) -> Pattern:
        """Build a pattern from a raw ignore-file line.

        Args:
            raw: Pattern text without its trailing newline.

        Returns:
            Pattern: Parsed, immutable pattern.
        """
        text = raw[:-1] if raw.endswith(" ") else raw
        negated = text.startswith(NEGATE)
        if negated:
            text = text[len(NEGATE) :]
        text = to_slash(text)
        dir_only = text.endswith("/")
        if dir_only:
            text = text[:-1]
        return cls(raw=raw, literal=text, negated=negated, dir_only=dir_only)

    @property
    def is_inert(self) -> bool:
        """Empty lines and comments never match anything."""
        return not self.raw or self.raw.startswith(COMMENT)

    @property
    def anchored(self) -> bool:
        return "/" in self.literal

    @property
    def has_recursive_wildcard(self) -> bool:
        return DOUBLE_STAR in self.literal

    def matches(self, path: str) -> bool:
        """Return whether *path* matches, with negation applied.

        Args:
            path: Filesystem path using any platform separator.

        Returns:
            bool: Structural match result inverted when the pattern is negated.

        Raises:
            PatternError: If the pattern contains a malformed glob.
        """
        if self.is_inert:
            return False

        path = to_slash(path)
        if self.has_recursive_wildcard:
            found = _match_double_star(self.literal, path)
        elif not self.anchored:
            found = glob_match(self.literal, _basename(path))
        else:
            found = _match_anchored(self.literal, path)
        return found != self.negated


def match(pattern: str, path: str) -> bool:
    """Match a single gitignore-style *pattern* against *path*.

    Args:
        pattern: One ignore-file line, without trailing newline.
        path: Candidate filesystem path.

    Returns:
        bool: Whether the path matches (negation already applied).

    Raises:
        PatternError: If the pattern contains a malformed glob.
    """
    return Pattern.parse(pattern).matches(path)


def glob_match(pattern: str, name: str) -> bool:
    """Shell-glob match where ``*`` and ``?`` never cross a ``/``.

    Args:
        pattern: Glob pattern.
        name: String to test, typically a base name.

    Returns:
        bool: ``True`` when *name* matches the whole pattern.

    Raises:
        PatternError: If the pattern contains a malformed glob.
    """
    return _compile(to_slash(pattern)).fullmatch(name) is not None


def _basename(path: str) -> str:
    return path.rstrip("/").rsplit("/", 1)[-1]


def _path_segments(path: str) -> list[str]:
    return [part for part in path.split("/") if part and part != "."]


def _match_double_star(literal: str, path: str) -> bool:
    """Match a pattern containing ``**`` against a slash-normalised path.

    The text before the first ``**`` must prefix the path, the text after the
    last one must suffix what remains, and every part in between must occur
    in order without overlapping its neighbours. ``**`` itself spans any run
    of characters, separators included. The match always starts at the first
    segment of *path*, so a leading ``/`` changes nothing.
    """
    return _compile(literal.lstrip("/")).fullmatch(path) is not None


def _match_anchored(literal: str, path: str) -> bool:
    """Segment-aligned match of a slash-containing pattern.

    The pattern matches when its segments line up, one glob per segment, with
    the trailing segments of *path* or of one of its ancestors. A leading
    ``/`` pins the pattern to the first segment of *path*.
    """
    rooted = literal.startswith("/")
    pattern_segments = literal.lstrip("/").split("/")
    regex = _compile("/".join(pattern_segments))
    segments = _path_segments(path)
    width = len(pattern_segments)

    # deepest first: the path itself, then each ancestor
    for end in range(len(segments), width - 1, -1):
        start = end - width
        if rooted and start != 0:
            continue
        if regex.fullmatch("/".join(segments[start:end])):
            return True
    return False


@lru_cache(maxsize=512)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(_translate(pattern), re.DOTALL)


def _translate(pattern: str) -> str:
    """Translate a slash-normalised glob into a regular expression.

    Raises:
        PatternError: On a trailing backslash or an unterminated class.
    """
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        char = pattern[i]
        if char == "*":
            if pattern.startswith(DOUBLE_STAR, i):
                out.append(".*")
                while i < n and pattern[i] == "*":
                    i += 1
                continue
            out.append("[^/]*")
        elif char == "?":
            out.append("[^/]")
        elif char == "[":
            i, char_class = _translate_class(pattern, i)
            out.append(char_class)
            continue
        elif char == "\\":
            if i + 1 >= n:
                raise PatternError(f"trailing backslash in pattern {pattern!r}")
            i += 1
            out.append(re.escape(pattern[i]))
        else:
            out.append(re.escape(char))
        i += 1
    return "".join(out)


def _translate_class(pattern: str, start: int) -> tuple[int, str]:
    """Translate the ``[...]`` class opening at *start*.

    Returns:
        tuple[int, str]: Index just past the closing ``]`` and the regex class.

    Raises:
        PatternError: If the class is unterminated or holds a reversed range.
    """
    n = len(pattern)
    i = start + 1
    negate = i < n and pattern[i] in "!^"
    if negate:
        i += 1

    items: list[str] = []
    while True:
        if i >= n:
            raise PatternError(f"unterminated character class in pattern {pattern!r}")
        if pattern[i] == "]" and items:
            break
        i, low = _class_char(pattern, i)
        if i + 1 < n and pattern[i] == "-" and pattern[i + 1] != "]":
            i, high = _class_char(pattern, i + 1)
            if low > high:
                raise PatternError(f"bad range {low}-{high} in pattern {pattern!r}")
            items.append(f"{re.escape(low)}-{re.escape(high)}")
        else:
            items.append(re.escape(low))

    body = "".join(items)
    return i + 1, f"[^/{body}]" if negate else f"[{body}]"


def _class_char(pattern: str, i: int) -> tuple[int, str]:
    if pattern[i] == "\\":
        i += 1
        if i >= len(pattern):
            raise PatternError(f"trailing backslash in pattern {pattern!r}")
    return i + 1, pattern[i]


def load_gitignore_patterns(root: Path) -> list[str]:
    """Load pattern lines from the ``.gitignore`` in *root*.

    Comment lines (starting with ``#``) and blank lines are dropped.

    Args:
        root: Directory containing the ``.gitignore`` file.

    Returns:
        list[str]: Patterns in file order; empty when the file is missing or
        unreadable.
    """
    gitignore_path = root / ".gitignore"
    try:
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
    except OSError:
        logger.debug("Cannot read .gitignore: %s", gitignore_path)
        return []
    return [line for line in lines if line and not line.startswith(COMMENT)]


def compile_gitignore_spec(patterns: list[str]) -> GitIgnoreSpec:
    """Compile *patterns* with full gitignore last-match-wins semantics.

    Lines that pathspec rejects (a bare ``!``, a dangling escape) are dropped
    with a warning so the remaining lines still apply.

    Args:
        patterns: Raw pattern lines in insertion order.

    Returns:
        GitIgnoreSpec: Compiled spec of the valid lines.
    """
    valid: list[str] = []
    for line in patterns:
        try:
            GitIgnoreSpec.from_lines([line])
        except ValueError as exc:
            logger.warning("Pattern %r dropped: %s", line, exc)
            continue
        valid.append(line)
    return GitIgnoreSpec.from_lines(valid)
