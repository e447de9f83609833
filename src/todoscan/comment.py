"""Marker comment model and line parser."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

DEFAULT_TYPES: tuple[str, ...] = ("TODO", "FIXME")


@dataclass(frozen=True, slots=True)
class Comment:
    """A marker comment found in a source file.

    Attributes:
        file: Path of the file, as produced by the scanner.
        line: 1-based line number.
        type: Upper-cased marker type, e.g. ``TODO``.
        text: Comment text after the colon, stripped.
        author: Name from ``TODO(author):``, or an empty string.
    """

    file: str
    line: int
    type: str
    text: str
    author: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_comment_regex(types: Iterable[str]) -> re.Pattern[str]:
    """Compile the case-insensitive marker expression for *types*.

    Matches ``TYPE: text`` and ``TYPE(author): text`` anywhere on a line.

    Args:
        types: Marker types such as ``TODO``.

    Returns:
        re.Pattern[str]: Expression with groups ``type``, ``author``, ``text``.

    Raises:
        ValueError: If *types* is empty.
    """
    names = [name for name in types if name]
    if not names:
        raise ValueError("At least one comment type is required")
    alternatives = "|".join(re.escape(name) for name in names)
    return re.compile(
        rf"\s*(?P<type>{alternatives})(?:\((?P<author>[\w.-]+)\))?:\s*(?P<text>.*)",
        re.IGNORECASE,
    )


def parse_comments(
    lines: Iterable[str],
    path: str,
    types: Iterable[str] = DEFAULT_TYPES,
) -> list[Comment]:
    """Extract marker comments from *lines*.

    Args:
        lines: Source lines; trailing newlines are tolerated.
        path: File path recorded on each comment.
        types: Marker types to look for.

    Returns:
        list[Comment]: Comments in line order.
    """
    regex = build_comment_regex(types)
    comments: list[Comment] = []
    for number, line in enumerate(lines, start=1):
        found = regex.search(line.rstrip("\r\n"))
        if found is None:
            continue
        comments.append(
            Comment(
                file=path,
                line=number,
                type=found.group("type").upper(),
                text=found.group("text").strip(),
                author=found.group("author") or "",
            )
        )
    return comments


def parse_file(path: str, types: Iterable[str] = DEFAULT_TYPES) -> list[Comment]:
    """Read *path* as UTF-8 text and extract its marker comments.

    Undecodable bytes are replaced rather than failing the file.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with Path(path).open(encoding="utf-8", errors="replace") as handle:
        return parse_comments(handle, path, types)
