"""Ignore-list evaluation: hidden-entry rule plus gitignore-style patterns."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from todoscan.gitignore import (
    Pattern,
    PatternError,
    compile_gitignore_spec,
    glob_match,
    to_slash,
)

logger = logging.getLogger(__name__)

HIDDEN_MARKER = ".*"


def split_hidden_marker(patterns: list[str]) -> tuple[bool, list[str]]:
    """Strip the ``.*`` marker from *patterns*.

    A literal ``.*`` entry switches hidden-entry search off instead of being
    matched as a pattern.

    Args:
        patterns: Raw pattern list.

    Returns:
        tuple[bool, list[str]]: ``search_hidden`` and the remaining patterns.
    """
    remaining = [pat for pat in patterns if pat != HIDDEN_MARKER]
    return len(remaining) == len(patterns), remaining


def is_hidden(name: str) -> bool:
    return name.startswith(".") and name != "."


class IgnoreList:
    """Decide whether scanned paths are ignored.

    Each pattern is evaluated on its own and the results are OR-combined, so a
    negated pattern only inverts its own test. With ``strict=True`` the list
    is evaluated with gitignore's last-match-wins rules instead.

    When ``root`` is given, patterns see paths relative to it, so ``/build``
    and ``docs/**`` refer to entries of the scanned directory.
    """

    def __init__(
        self,
        patterns: list[str] | None = None,
        search_hidden: bool = True,
        strict: bool = False,
        root: Path | None = None,
    ) -> None:
        """Initialize the ignore list.

        Malformed patterns are reported once here. At evaluation time they
        ignore every path they are tested against, except in strict mode,
        where they are dropped.

        Args:
            patterns: Raw pattern lines in insertion order.
            search_hidden: Whether dot-prefixed entries are scanned.
            strict: Use last-match-wins gitignore evaluation.
            root: Scan root that matched paths are made relative to.
        """
        raw = list(patterns) if patterns else []
        self.search_hidden = search_hidden
        self._patterns: tuple[Pattern, ...] = tuple(
            Pattern.parse(pat) for pat in raw if pat
        )
        self._root = root
        self._spec = compile_gitignore_spec(raw) if strict else None
        if not strict:
            for pattern in self._patterns:
                _warn_if_malformed(pattern)

    @property
    def patterns(self) -> tuple[Pattern, ...]:
        return self._patterns

    @property
    def strict(self) -> bool:
        return self._spec is not None

    def should_ignore(self, path: str, is_dir: bool, name: str | None = None) -> bool:
        """Return whether *path* is ignored.

        For a directory, ``True`` means its subtree is not descended into.

        Args:
            path: Path as produced by the scanner.
            is_dir: Whether the path is a directory.
            name: Base name of the path. Derived from *path* when omitted.

        Returns:
            bool: ``True`` when the path should be skipped.
        """
        if name is None:
            name = os.path.basename(os.path.normpath(path))

        if not self.search_hidden and is_hidden(name):
            return True

        target = self._relative(path)
        if self._spec is not None:
            return self._spec.match_file(target + "/" if is_dir else target)

        for pattern in self._patterns:
            if pattern.is_inert:
                continue
            if pattern.dir_only and not is_dir:
                continue
            try:
                if pattern.matches(target):
                    return True
                # a negated line only inverts its own structural match
                if not pattern.negated and glob_match(pattern.literal, name):
                    return True
            except PatternError:
                return True
        return False

    def _relative(self, path: str) -> str:
        if self._root is None:
            return path
        return to_slash(os.path.relpath(path, self._root))


def _warn_if_malformed(pattern: Pattern) -> None:
    try:
        glob_match(pattern.literal, "")
    except PatternError as exc:
        logger.warning("Pattern %r ignores every path: %s", pattern.raw, exc)
