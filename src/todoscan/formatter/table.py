"""Aligned plain-text table output."""

from __future__ import annotations

from dataclasses import dataclass

from todoscan.comment import Comment

HEADER = ("AUTHOR", "TYPE", "FILE", "TEXT")


@dataclass(frozen=True, slots=True)
class TableOptions:
    """Options for table output.

    Attributes:
        header: Whether to print the column header row.
        unknown_author: Placeholder shown for comments without an author.
        padding: Spaces between columns.
    """

    header: bool = True
    unknown_author: str = "unknown"
    padding: int = 2


def align_columns(rows: list[tuple[str, ...]], padding: int = 2) -> list[str]:
    """Left-align cells into columns, leaving the last cell unpadded.

    Args:
        rows: Rows of cells. Rows may differ in length.
        padding: Minimum spaces between columns.

    Returns:
        list[str]: One rendered line per row, without trailing whitespace.
    """
    widths: dict[int, int] = {}
    for row in rows:
        for index, cell in enumerate(row[:-1]):
            widths[index] = max(widths.get(index, 0), len(cell))

    lines: list[str] = []
    for row in rows:
        cells = [cell.ljust(widths[i] + padding) for i, cell in enumerate(row[:-1])]
        cells.extend(row[-1:])
        lines.append("".join(cells).rstrip())
    return lines


def format_table(comments: list[Comment], options: TableOptions | None = None) -> str:
    """Render comments as an aligned table.

    Args:
        comments: Comments, already sorted.
        options: Rendering options. Defaults to ``TableOptions()``.

    Returns:
        str: Table text without trailing newline; empty when there are no
        comments.
    """
    opts = options or TableOptions()
    if not comments:
        return ""

    rows: list[tuple[str, ...]] = [HEADER] if opts.header else []
    rows.extend(
        (
            c.author or opts.unknown_author,
            c.type,
            f"{c.file}:{c.line}",
            c.text,
        )
        for c in comments
    )
    return "\n".join(align_columns(rows, opts.padding))
