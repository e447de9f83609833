"""User-template output."""

from __future__ import annotations

from todoscan import TodosError
from todoscan.comment import Comment

_ESCAPES = (("\\n", "\n"), ("\\t", "\t"))


def expand_escapes(source: str) -> str:
    """Turn literal ``\\n`` and ``\\t`` typed on a shell into real characters."""
    for literal, char in _ESCAPES:
        source = source.replace(literal, char)
    return source


def format_template(comments: list[Comment], source: str) -> str:
    """Render each comment with a ``str.format`` template and concatenate.

    Available fields are ``{file}``, ``{line}``, ``{type}``, ``{text}`` and
    ``{author}``.

    Args:
        comments: Comments, already sorted.
        source: Template text as typed by the user.

    Returns:
        str: Rendered text, or an empty string when there are no comments.

    Raises:
        TodosError: If the template is malformed or names an unknown field.
    """
    template = expand_escapes(source)
    try:
        return "".join(template.format_map(c.to_dict()) for c in comments)
    except KeyError as exc:
        raise TodosError(f"Unknown template field {exc}") from exc
    except (ValueError, IndexError, AttributeError) as exc:
        raise TodosError(f"Invalid template: {exc}") from exc
