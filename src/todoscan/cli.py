"""CLI entry point for todos — I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from todoscan import TodosError
from todoscan.comment import DEFAULT_TYPES, Comment
from todoscan.filter import IgnoreList, split_hidden_marker
from todoscan.formatter.ordering import SORT_FIELDS, sort_comments
from todoscan.gitignore import load_gitignore_patterns
from todoscan.scanner import ScanOptions, search

logger = logging.getLogger(__name__)

FORMATS = ("table", "json", "markdown", "csv", "files", "template")


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``todos`` command.
    """
    parser = argparse.ArgumentParser(
        prog="todos",
        description="find TODO/FIXME style marker comments in a directory tree",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to search (default: current directory)",
    )

    # what to look for
    parser.add_argument(
        "-t",
        "--types",
        default=",".join(DEFAULT_TYPES),
        help="Comma-separated comment types to search for (default: TODO,FIXME)",
    )

    # what to skip
    parser.add_argument(
        "-I",
        "--ignore",
        action="append",
        default=[],
        dest="patterns",
        help=(
            "Ignore paths matching a gitignore-style pattern; comma-separated "
            "values are split (can be specified multiple times)"
        ),
    )
    parser.add_argument(
        "--preset",
        action="append",
        default=[],
        dest="presets",
        help="Apply ignore preset (python, node, go, rust, generic)",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Also ignore paths listed in the directory's .gitignore",
    )
    parser.add_argument(
        "--strict-gitignore",
        action="store_true",
        dest="strict",
        help="Evaluate patterns with gitignore's last-match-wins rules",
    )
    parser.add_argument(
        "-a",
        "--all",
        action="store_true",
        dest="all_files",
        help="Search hidden files and directories (starting with .)",
    )

    # how to print
    parser.add_argument(
        "--format",
        choices=FORMATS,
        default="table",
        dest="output_format",
        help="Output format (default: table)",
    )
    parser.add_argument(
        "--template",
        default=None,
        help="Template for --format template, e.g. '{file}:{line} {text}\\n'",
    )
    parser.add_argument(
        "--sortby",
        choices=SORT_FIELDS,
        default="file",
        help="Sort results by field (default: file)",
    )
    parser.add_argument(
        "--desc",
        action="store_true",
        help="Sort in descending order",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        dest="output_file",
        help="Write output to a file instead of stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log skipped paths and pattern problems to stderr",
    )
    return parser


def run_todos(argv: list[str] | None = None) -> str:
    """Run todos with provided CLI args and return formatted output.

    This function is intentionally side-effect free and is the primary
    test target for CLI behavior.

    Args:
        argv: Command-line argument list without program name. If ``None``,
            uses process arguments via ``argparse`` defaults.

    Returns:
        str: Final rendered output.

    Raises:
        TodosError: On any user-facing validation or I/O error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _split_terms(values: list[str]) -> list[str]:
    """Split comma-separated option values, dropping empty terms."""
    return [term.strip() for value in values for term in value.split(",") if term.strip()]


def _resolve_root(directory: str) -> Path:
    root = Path(directory)
    if not root.is_dir():
        raise TodosError(f"'{directory}' is not a directory")
    return root


def _build_ignore_list(args: argparse.Namespace, root: Path) -> IgnoreList:
    """Collect CLI, preset and .gitignore patterns into an ignore list.

    Args:
        args: Parsed CLI namespace.
        root: Directory being searched.

    Returns:
        IgnoreList: Evaluator for the scan.

    Raises:
        TodosError: If a ``--preset`` value is invalid.
    """
    patterns = _split_terms(args.patterns)

    if args.presets:
        from todoscan.preset import get_preset_patterns

        try:
            patterns.extend(get_preset_patterns(*_split_terms(args.presets)))
        except ValueError as exc:
            raise TodosError(str(exc)) from exc

    if args.gitignore:
        patterns.extend(load_gitignore_patterns(root))

    marker_absent, patterns = split_hidden_marker(patterns)
    logger.debug("Ignore patterns: %s", patterns)
    return IgnoreList(
        patterns,
        search_hidden=args.all_files and marker_absent,
        strict=args.strict,
        root=root,
    )


def _validate_option_combinations(args: argparse.Namespace) -> None:
    """Validate incompatible CLI option combinations.

    Args:
        args: Parsed CLI namespace.

    Raises:
        TodosError: If incompatible options are combined.
    """
    if args.output_format == "template" and args.template is None:
        raise TodosError("--format template requires --template")
    if args.template is not None and args.output_format != "template":
        raise TodosError("--template requires --format template")
    if not _split_terms([args.types]):
        raise TodosError("--types must name at least one comment type")


def _format_output(args: argparse.Namespace, comments: list[Comment]) -> str:
    """Render sorted comments using the selected format.

    Args:
        args: Parsed CLI namespace.
        comments: Comments, already sorted.

    Returns:
        str: Rendered output.
    """
    if args.output_format == "json":
        from todoscan.formatter.json_ import format_json

        return format_json(comments)

    if args.output_format == "markdown":
        from todoscan.formatter.markdown import format_markdown

        return format_markdown(comments)

    if args.output_format == "csv":
        from todoscan.formatter.csv_ import format_csv

        return format_csv(comments)

    if args.output_format == "files":
        from todoscan.formatter.group import format_files

        return format_files(comments)

    if args.output_format == "template":
        from todoscan.formatter.template import format_template

        return format_template(comments, args.template)

    from todoscan.formatter.table import format_table

    return format_table(comments)


def _run_with_args(args: argparse.Namespace) -> str:
    """Run the core scan/format pipeline for parsed arguments.

    Args:
        args: Parsed CLI namespace.

    Returns:
        str: Rendered output.

    Raises:
        TodosError: On any user-facing validation or I/O error.
    """
    _validate_option_combinations(args)
    root = _resolve_root(args.directory)

    scan_opts = ScanOptions(
        comment_types=tuple(_split_terms([args.types])),
        ignore_list=_build_ignore_list(args, root),
    )

    try:
        comments = search(args.directory, scan_opts)
    except OSError as exc:
        raise TodosError(f"cannot scan '{args.directory}': {exc}") from exc

    logger.debug("Found %d comments", len(comments))
    return _format_output(args, sort_comments(comments, args.sortby, args.desc))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Run the CLI entry point with process arguments.

    Parses args exactly once and writes output to stdout or ``-o`` file.
    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse
    _configure_logging(args.verbose)

    try:
        output = _run_with_args(args)
    except TodosError as exc:
        sys.stderr.write(f"todos: {exc}\n")
        sys.exit(1)

    text = output + "\n" if output else ""
    if args.output_file:
        try:
            Path(args.output_file).write_text(text, encoding="utf-8", newline="")
        except OSError as exc:
            sys.stderr.write(f"todos: cannot write to '{args.output_file}': {exc}\n")
            sys.exit(1)
    else:
        sys.stdout.write(text)
