"""Directory scanner using os.scandir with explicit stack (DFS)."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from todoscan import TodosError
from todoscan.comment import DEFAULT_TYPES, Comment, parse_file
from todoscan.filter import IgnoreList

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Entry:
    """A single filesystem entry discovered during scanning.

    Attributes:
        path: Path of the entry, joined onto the root as given.
        name: Basename of the entry.
        is_dir: Whether the entry is a directory.
    """

    path: str
    name: str
    is_dir: bool


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Options controlling scanner behavior.

    Attributes:
        comment_types: Marker types to extract.
        ignore_list: Evaluator consulted for every entry. Defaults to an
            empty list that keeps everything.
    """

    comment_types: tuple[str, ...] = DEFAULT_TYPES
    ignore_list: IgnoreList = field(default_factory=IgnoreList)


def _join(parent: str, name: str) -> str:
    if parent == os.curdir:
        return name
    return os.path.join(parent, name)


def walk(root: str | Path, ignore_list: IgnoreList | None = None) -> Iterator[Entry]:
    """Yield entries under *root* in deterministic depth-first pre-order.

    The ignore list is consulted before an entry is yielded and before a
    directory is descended into; ignored directories are pruned.

    Args:
        root: Root directory.
        ignore_list: Optional evaluator. Defaults to keeping everything.

    Yields:
        Entry: Every kept file and directory.
    """
    active = ignore_list or IgnoreList()
    stack: list[str] = [os.path.normpath(str(root))]

    while stack:
        current_dir = stack.pop()

        try:
            with os.scandir(current_dir) as it:
                raw_entries = list(it)
        except (PermissionError, FileNotFoundError):
            logger.debug("Cannot list directory: %s", current_dir)
            continue

        # Sort entries by name for deterministic output
        raw_entries.sort(key=lambda e: e.name)

        child_dirs: list[str] = []

        for dir_entry in raw_entries:
            name = dir_entry.name
            try:
                is_dir = dir_entry.is_dir(follow_symlinks=False)
            except OSError:
                logger.debug("Cannot stat: %s", dir_entry.path)
                continue

            path = _join(current_dir, name)
            if active.should_ignore(path, is_dir, name):
                logger.debug("Ignored: %s", path)
                continue

            yield Entry(path=path, name=name, is_dir=is_dir)

            if is_dir:
                child_dirs.append(path)

        # Push children in reverse so first-alphabetical is popped first
        stack.extend(reversed(child_dirs))


def search(root: str | Path, options: ScanOptions | None = None) -> list[Comment]:
    """Collect marker comments from every kept file under *root*.

    Args:
        root: Root directory to scan.
        options: Scanner options. Defaults to ``ScanOptions()``.

    Returns:
        list[Comment]: Comments in scan order, then line order.

    Raises:
        TodosError: If *root* is not a directory.
        OSError: On read errors other than permission or not-found.
    """
    scan_options = options or ScanOptions()
    if not Path(root).is_dir():
        raise TodosError(f"'{root}' is not a directory")

    comments: list[Comment] = []
    for entry in walk(root, scan_options.ignore_list):
        # skips directories, broken links, fifos and sockets
        if entry.is_dir or not os.path.isfile(entry.path):
            continue
        try:
            comments.extend(parse_file(entry.path, scan_options.comment_types))
        except (PermissionError, FileNotFoundError):
            logger.debug("Cannot open: %s", entry.path)
    return comments
