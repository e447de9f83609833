"""Markdown table output."""

from __future__ import annotations

from todoscan.comment import Comment

_HEADER = "| Type | Author | File:Line | Text |"
_RULE = "| --- | --- | --- | --- |"


def _escape_cell(value: str) -> str:
    return value.replace("\\", "\\\\").replace("|", "\\|")


def format_markdown(comments: list[Comment]) -> str:
    """Render comments as a GitHub-flavoured markdown table.

    Returns:
        str: Table text, or an empty string when there are no comments.
    """
    if not comments:
        return ""

    lines = [_HEADER, _RULE]
    for c in comments:
        cells = (c.type, c.author, f"{c.file}:{c.line}", c.text)
        lines.append("| " + " | ".join(_escape_cell(cell) for cell in cells) + " |")
    return "\n".join(lines)
