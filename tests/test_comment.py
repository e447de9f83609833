"""Tests for todoscan.comment."""

from __future__ import annotations

from pathlib import Path

import pytest

from todoscan.comment import Comment, build_comment_regex, parse_comments, parse_file


class TestBuildCommentRegex:
    def test_empty_types_raise(self) -> None:
        with pytest.raises(ValueError, match="comment type"):
            build_comment_regex([])

    def test_types_are_escaped(self) -> None:
        regex = build_comment_regex(["C++"])
        assert regex.search("// c++: fix") is not None
        assert regex.search("// cc: fix") is None


class TestParseComments:
    def test_default_types(self) -> None:
        lines = [
            "package main",
            "// TODO: do something",
            "x := 1",
            "# fixme(user): fix it  ",
        ]
        assert parse_comments(lines, "main.go") == [
            Comment(file="main.go", line=2, type="TODO", text="do something"),
            Comment(file="main.go", line=4, type="FIXME", text="fix it", author="user"),
        ]

    @pytest.mark.parametrize(
        ("line", "expected_type", "expected_author", "expected_text"),
        [
            ("// TODO: plain", "TODO", "", "plain"),
            ("// todo(ana.b-c): dotted author", "TODO", "ana.b-c", "dotted author"),
            ("/* FIXME:no space */", "FIXME", "", "no space */"),
            ("    TODO:   ", "TODO", "", ""),
        ],
    )
    def test_line_shapes(
        self,
        line: str,
        expected_type: str,
        expected_author: str,
        expected_text: str,
    ) -> None:
        (comment,) = parse_comments([line], "f")
        assert comment.type == expected_type
        assert comment.author == expected_author
        assert comment.text == expected_text

    @pytest.mark.parametrize(
        "line",
        ["// TODO without colon", "// NOTE: other type", "// TODO(bad author): x"],
    )
    def test_non_matching_lines(self, line: str) -> None:
        assert parse_comments([line], "f") == []

    def test_custom_types(self) -> None:
        comments = parse_comments(["// HACK: quick", "// TODO: later"], "f", ["HACK"])
        assert [c.type for c in comments] == ["HACK"]

    def test_trailing_newlines_tolerated(self) -> None:
        (comment,) = parse_comments(["// TODO: x\r\n"], "f")
        assert comment.text == "x"

    def test_to_dict_field_names(self) -> None:
        comment = Comment(file="a.go", line=1, type="TODO", text="x")
        assert comment.to_dict() == {
            "file": "a.go",
            "line": 1,
            "type": "TODO",
            "text": "x",
            "author": "",
        }


class TestParseFile:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "a.py"
        path.write_text("x = 1\n# TODO(me): refactor\n")
        (comment,) = parse_file(str(path))
        assert comment == Comment(
            file=str(path), line=2, type="TODO", text="refactor", author="me"
        )

    def test_undecodable_bytes_replaced(self, tmp_path: Path) -> None:
        path = tmp_path / "blob.bin"
        path.write_bytes(b"\xff\xfe// FIXME: binary-ish\n")
        (comment,) = parse_file(str(path))
        assert comment.type == "FIXME"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            parse_file(str(tmp_path / "missing.go"))
