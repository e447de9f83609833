"""JSON output."""

from __future__ import annotations

import json

from todoscan.comment import Comment


def format_json(comments: list[Comment], indent: int = 2) -> str:
    """Render comments as a JSON array of objects.

    Keys are ``file``, ``line``, ``type``, ``text`` and ``author``. An empty
    list renders as ``[]``.
    """
    return json.dumps([c.to_dict() for c in comments], indent=indent, ensure_ascii=False)
