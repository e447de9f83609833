"""Comment ordering shared by every output format."""

from __future__ import annotations

from operator import attrgetter
from typing import Final

from todoscan.comment import Comment

SORT_FIELDS: Final[tuple[str, ...]] = ("file", "line", "type", "text", "author")


def sort_comments(
    comments: list[Comment], sortby: str = "file", desc: bool = False
) -> list[Comment]:
    """Return *comments* stably sorted by one field.

    Args:
        comments: Comments in scan order.
        sortby: One of ``SORT_FIELDS``.
        desc: Reverse the order.

    Returns:
        list[Comment]: A new sorted list.

    Raises:
        ValueError: If ``sortby`` is not a known field.
    """
    if sortby not in SORT_FIELDS:
        raise ValueError(
            f"Unknown sort field '{sortby}'. Known fields: {', '.join(SORT_FIELDS)}"
        )
    return sorted(comments, key=attrgetter(sortby), reverse=desc)
