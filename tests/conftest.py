"""Shared fixtures for todoscan tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """Create a project tree with marker comments in every file.

    Structure::

        project/
        ├── .bin/
        │   └── tool            (TODO: hidden tool)
        ├── .env                (TODO: hidden env)
        ├── file.yml            (FIXME(user): yaml, TODO: second)
        ├── main.go             (TODO: do something)
        ├── node_modules/
        │   └── pkg/
        │       └── index.js    (TODO: vendored)
        └── src/
            └── util.go         (FIXME: fix util, NOTE: not a default type)
    """
    root = tmp_path / "project"
    (root / ".bin").mkdir(parents=True)
    (root / ".bin" / "tool").write_text("# TODO: hidden tool\n")
    (root / ".env").write_text("# TODO: hidden env\n")
    (root / "file.yml").write_text(
        "key: value\n# FIXME(user): yaml\nother: 1\n# TODO: second\n"
    )
    (root / "main.go").write_text("package main\n\n// TODO: do something\n")
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / "node_modules" / "pkg" / "index.js").write_text("// TODO: vendored\n")
    (root / "src").mkdir()
    (root / "src" / "util.go").write_text(
        "package src\n// FIXME: fix util\n// NOTE: not a default type\n"
    )
    return root


@pytest.fixture
def gitignore_tree(project_tree: Path) -> Path:
    """``project_tree`` plus a ``.gitignore`` (``*.yml``, ``node_modules/``)."""
    (project_tree / ".gitignore").write_text(
        "# build output\n*.yml\n\nnode_modules/\n"
    )
    return project_tree
