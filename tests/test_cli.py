"""Tests for todoscan.cli — CLI entry point.

Tests here cover:
  - Error paths (nonexistent dir, invalid preset, incompatible options)
  - Ignore sources (-I, --preset, --gitignore, --strict-gitignore, -a)
  - Each output format wired through ``run_todos``
  - ``main`` exit codes and ``-o`` output file
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from todoscan import TodosError
from todoscan.cli import main, run_todos


def _run(root: Path, *argv: str) -> str:
    return run_todos([str(root), *argv])


class TestRunTodos:
    # ------------------------------------------------------------------
    # Smoke / full-stack checks
    # ------------------------------------------------------------------
    def test_default_table(self, project_tree: Path) -> None:
        output = _run(project_tree)
        lines = output.split("\n")
        assert lines[0].split() == ["AUTHOR", "TYPE", "FILE", "TEXT"]
        assert "main.go:3" in output
        assert "index.js" in output
        # hidden entries are skipped without -a
        assert ".env" not in output
        assert "tool" not in output

    def test_end_to_end_scenario(self, project_tree: Path) -> None:
        output = _run(project_tree, "-I", ".bin,node_modules/,*.yml")
        assert "main.go" in output
        assert "util.go" in output
        assert "file.yml" not in output
        assert "index.js" not in output

    def test_multiple_ignore_flags(self, project_tree: Path) -> None:
        output = _run(project_tree, "-I", "node_modules/", "-I", "src/*.go")
        assert "index.js" not in output
        assert "util.go" not in output
        assert "main.go" in output

    def test_types(self, project_tree: Path) -> None:
        output = _run(project_tree, "--types", "NOTE", "--format", "json")
        data = json.loads(output)
        assert [c["type"] for c in data] == ["NOTE"]

    def test_all_includes_hidden(self, project_tree: Path) -> None:
        output = _run(project_tree, "-a")
        assert ".env" in output
        assert "tool" in output

    def test_hidden_marker_overrides_all(self, project_tree: Path) -> None:
        output = _run(project_tree, "-a", "-I", ".*")
        assert ".env" not in output
        assert "main.go" in output

    def test_sortby_line_desc(self, project_tree: Path) -> None:
        output = _run(project_tree, "--format", "json", "--sortby", "line", "--desc")
        lines = [c["line"] for c in json.loads(output)]
        assert lines == sorted(lines, reverse=True)

    def test_no_comments(self, tmp_path: Path) -> None:
        (tmp_path / "clean.go").write_text("package clean\n")
        assert _run(tmp_path) == ""
        assert _run(tmp_path, "--format", "json") == "[]"

    # ------------------------------------------------------------------
    # Output formats
    # ------------------------------------------------------------------
    def test_markdown(self, project_tree: Path) -> None:
        output = _run(project_tree, "--format", "markdown")
        assert output.startswith("| Type | Author | File:Line | Text |")

    def test_csv(self, project_tree: Path) -> None:
        output = _run(project_tree, "--format", "csv")
        assert output.split("\n")[0] == "file,line,type,author,text"

    def test_files(self, project_tree: Path) -> None:
        output = _run(project_tree, "--format", "files")
        assert "file.yml [2 Comments]:" in output

    def test_template(self, project_tree: Path) -> None:
        output = _run(
            project_tree,
            "-I",
            "node_modules/,src/",
            "--format",
            "template",
            "--template",
            "{type}:{line}\\n",
        )
        assert output.split("\n") == ["FIXME:2", "TODO:4", "TODO:3", ""]

    # ------------------------------------------------------------------
    # Ignore sources
    # ------------------------------------------------------------------
    def test_gitignore(self, gitignore_tree: Path) -> None:
        output = _run(gitignore_tree, "--gitignore")
        assert "file.yml" not in output
        assert "index.js" not in output
        assert "main.go" in output

    def test_gitignore_disabled_by_default(self, gitignore_tree: Path) -> None:
        output = _run(gitignore_tree)
        assert "file.yml" in output

    def test_gitignore_missing_file(self, project_tree: Path) -> None:
        output = _run(project_tree, "--gitignore")
        assert "main.go" in output

    def test_strict_gitignore_negation(self, project_tree: Path) -> None:
        (project_tree / ".gitignore").write_text("*.go\n!main.go\n")
        strict = _run(project_tree, "--gitignore", "--strict-gitignore")
        assert "main.go" in strict
        assert "util.go" not in strict

        simple = _run(project_tree, "--gitignore")
        assert "main.go" not in simple

    def test_rooted_pattern(self, project_tree: Path) -> None:
        (project_tree / "main").mkdir()
        (project_tree / "main" / "x.go").write_text("// TODO: nested\n")
        output = _run(project_tree, "-I", "/src,/main")
        assert "util.go" not in output
        assert "x.go" not in output
        assert "main.go" in output

    def test_preset(self, project_tree: Path) -> None:
        output = _run(project_tree, "--preset", "node")
        assert "index.js" not in output
        assert "main.go" in output

    # ------------------------------------------------------------------
    # Error paths
    # ------------------------------------------------------------------
    def test_nonexistent_directory(self) -> None:
        with pytest.raises(TodosError, match="not a directory"):
            run_todos(["/nonexistent/path/xyz"])

    def test_invalid_preset(self, project_tree: Path) -> None:
        with pytest.raises(TodosError, match="Unknown preset"):
            _run(project_tree, "--preset", "java")

    @pytest.mark.parametrize(
        ("argv", "match"),
        [
            (["--format", "template"], "requires --template"),
            (["--template", "{file}"], "requires --format template"),
            (["--types", ","], "at least one comment type"),
        ],
    )
    def test_invalid_option_combinations(
        self, tmp_path: Path, argv: list[str], match: str
    ) -> None:
        with pytest.raises(TodosError, match=match):
            _run(tmp_path, *argv)

    def test_unknown_template_field(self, project_tree: Path) -> None:
        with pytest.raises(TodosError, match="Unknown template field"):
            _run(project_tree, "--format", "template", "--template", "{nope}")

    def test_malformed_pattern_does_not_abort(self, project_tree: Path) -> None:
        assert _run(project_tree, "-I", "[abc") == ""

    @pytest.mark.parametrize("bad", ["!", "a\\"])
    def test_strict_unparsable_pattern_does_not_abort(
        self, project_tree: Path, bad: str
    ) -> None:
        output = _run(project_tree, "--strict-gitignore", "-I", bad)
        assert "main.go" in output


class TestMain:
    def test_writes_stdout(
        self,
        project_tree: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(sys, "argv", ["todos", str(project_tree)])
        main()
        assert "main.go:3" in capsys.readouterr().out

    def test_output_file(
        self, project_tree: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        out_file = tmp_path / "out.json"
        monkeypatch.setattr(
            sys,
            "argv",
            ["todos", str(project_tree), "--format", "json", "-o", str(out_file)],
        )
        main()
        assert json.loads(out_file.read_text(encoding="utf-8"))

    def test_user_error_exits_1(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(sys, "argv", ["todos", str(tmp_path / "missing")])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("todos: ")
