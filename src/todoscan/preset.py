"""Ignore-pattern presets for common project types."""

from __future__ import annotations

from typing import Final

PRESETS: Final[dict[str, list[str]]] = {
    "python": [
        "__pycache__/",
        ".venv/",
        "*.pyc",
        ".pytest_cache/",
        "dist/",
        "build/",
        "*.egg-info/",
    ],
    "node": [
        "node_modules/",
        ".next/",
        "dist/",
        ".cache/",
        "coverage/",
        "*.min.js",
    ],
    "go": [
        "vendor/",
        "bin/",
        ".bin/",
    ],
    "rust": [
        "target/",
    ],
    "generic": [
        ".git/",
        ".DS_Store",
        "Thumbs.db",
    ],
}

ALWAYS_APPLIED: Final[str] = "generic"


def get_preset_patterns(*names: str) -> list[str]:
    """Return the combined ignore patterns for one or more named presets.

    The ``generic`` preset always comes first. Patterns shared by several
    presets appear once, at their first position.

    Args:
        names: Preset names.

    Returns:
        list[str]: Combined ignore pattern list.

    Raises:
        ValueError: If any name is not a known preset.
    """
    unknown = [name for name in names if name not in PRESETS]
    if unknown:
        known = ", ".join(sorted(PRESETS))
        raise ValueError(f"Unknown preset '{unknown[0]}'. Known presets: {known}")

    ordered = dict.fromkeys([ALWAYS_APPLIED, *names])
    patterns = (pat for name in ordered for pat in PRESETS[name])
    return list(dict.fromkeys(patterns))
