"""Per-file grouped output."""

from __future__ import annotations

from todoscan.comment import Comment
from todoscan.formatter.table import align_columns


def _group_by_file(comments: list[Comment]) -> dict[str, list[Comment]]:
    groups: dict[str, list[Comment]] = {}
    for comment in comments:
        groups.setdefault(comment.file, []).append(comment)
    return groups


def _label(comment: Comment) -> str:
    if comment.author:
        return f"{comment.type}({comment.author}):"
    return f"{comment.type}:"


def format_files(comments: list[Comment]) -> str:
    """Render comments grouped under a heading per file.

    Files appear in sorted path order; comments keep their incoming order
    within each file. Each block looks like::

        src/app.py [2 Comments]:
        3   |  TODO:        tidy up
        10  |  FIXME(ana):  broken

    Returns:
        str: Grouped text with blocks separated by a blank line, or an empty
        string when there are no comments.
    """
    groups = _group_by_file(comments)
    blocks: list[str] = []
    for path in sorted(groups):
        group = groups[path]
        rows = [(str(c.line), "|", _label(c), c.text) for c in group]
        heading = f"{path} [{len(group)} Comments]:"
        blocks.append("\n".join([heading, *align_columns(rows)]))
    return "\n\n".join(blocks)
