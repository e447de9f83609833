"""CSV output formatter.

Columns are described by ``CsvColumn`` values so callers can reorder or
extend them without touching the writer loop.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from typing import Callable

from todoscan.comment import Comment


@dataclass(frozen=True, slots=True)
class CsvColumn:
    """A single CSV output column.

    Attributes:
        name: Header name for this column.
        extract: Callable returning the cell value for one comment.
    """

    name: str
    extract: Callable[[Comment], str]


DEFAULT_COLUMNS: list[CsvColumn] = [
    CsvColumn(name="file", extract=lambda c: c.file),
    CsvColumn(name="line", extract=lambda c: str(c.line)),
    CsvColumn(name="type", extract=lambda c: c.type),
    CsvColumn(name="author", extract=lambda c: c.author),
    CsvColumn(name="text", extract=lambda c: c.text),
]


@dataclass(frozen=True, slots=True)
class CsvOptions:
    """Options controlling CSV output.

    Attributes:
        columns: Column definitions to use. Defaults to ``DEFAULT_COLUMNS``.
        header: Whether to write the header row.
    """

    columns: list[CsvColumn] = field(default_factory=lambda: list(DEFAULT_COLUMNS))
    header: bool = True


def format_csv(comments: list[Comment], options: CsvOptions | None = None) -> str:
    """Render comments as CSV text.

    Args:
        comments: Comments, already sorted.
        options: Rendering options. Defaults to ``CsvOptions()``.

    Returns:
        str: CSV text using LF line endings (no trailing newline); empty when
        there are no comments.
    """
    opts = options or CsvOptions()
    if not comments:
        return ""

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")

    if opts.header:
        writer.writerow([col.name for col in opts.columns])
    for comment in comments:
        writer.writerow([col.extract(comment) for col in opts.columns])

    # Remove trailing newline that csv.writer appends after the last row
    return buf.getvalue().rstrip("\n")
