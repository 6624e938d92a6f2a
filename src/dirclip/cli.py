"""CLI entry point for dirclip — I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dirclip import ConfigError, DirclipError, PathError, __version__
from dirclip.clipboard import ClipboardSink, get_clipboard
from dirclip.document import Document, assemble_document
from dirclip.filter import FilterPattern, PatternFilter
from dirclip.gitignore import load_ignore_rules
from dirclip.listing import LISTERS, get_lister
from dirclip.scanner import ScanConfig, scan

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Directory contents and file contents have been copied to clipboard!"


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``dirclip`` command.
    """
    parser = argparse.ArgumentParser(
        prog="dirclip",
        description="Copy directory contents to clipboard",
    )
    parser.add_argument(
        "-b",
        "--base-dir",
        default=".",
        dest="base_dir",
        help="Base directory to start processing (default: current directory)",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Recursively process subdirectories",
    )
    parser.add_argument(
        "-f",
        "--filter",
        default=None,
        dest="filter_pattern",
        help='Filter files by pattern (e.g., "*.py")',
    )
    parser.add_argument(
        "-x",
        "--x11",
        action="store_true",
        help="Use xsel instead of the native clipboard",
    )
    parser.add_argument(
        "--no-ignore",
        action="store_true",
        dest="no_ignore",
        help="Do not apply rules from <base-dir>/.gitignore",
    )
    parser.add_argument(
        "-I",
        "--exclude",
        action="append",
        default=[],
        dest="patterns",
        help="Exclude entries matching pattern (can be specified multiple times)",
    )
    parser.add_argument(
        "--listing",
        choices=sorted(LISTERS),
        default="ls",
        help="Directory listing provider (default: ls)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log skipped entries to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _compile_filter(pattern: str | None) -> FilterPattern | None:
    """Compile the ``--filter`` value.

    Raises:
        ConfigError: If the pattern is malformed.
    """
    if pattern is None:
        return None
    try:
        return FilterPattern(pattern)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def _resolve_root(directory: str) -> Path:
    """Validate the base directory, keeping it as given for display.

    Raises:
        PathError: If directory does not exist or is not a directory.
    """
    root = Path(directory)
    if not root.exists():
        raise PathError(f"'{directory}' does not exist")
    if not root.is_dir():
        raise PathError(f"'{directory}' is not a directory")
    return root


def build_config(args: argparse.Namespace) -> ScanConfig:
    """Build the scan configuration from parsed arguments.

    Args:
        args: Parsed CLI namespace.

    Returns:
        ScanConfig: Immutable scan configuration.

    Raises:
        ConfigError: If the filter pattern is malformed.
        PathError: If the base directory is unusable.
    """
    filter_pattern = _compile_filter(args.filter_pattern)
    root = _resolve_root(args.base_dir)

    ignore_rules = None if args.no_ignore else load_ignore_rules(root)
    if ignore_rules is not None:
        logger.debug("Loaded ignore rules from %s", root / ".gitignore")

    return ScanConfig(
        root=root,
        recursive=args.recursive,
        filter_pattern=filter_pattern,
        ignore_rules=ignore_rules,
        exclude=PatternFilter(args.patterns) if args.patterns else None,
    )


def _render(args: argparse.Namespace) -> Document:
    config = build_config(args)
    try:
        lister = get_lister(args.listing)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc
    return assemble_document(scan(config), lister)


def render_document(argv: list[str] | None = None) -> Document:
    """Run the scan/assemble pipeline and return the document.

    Nothing is copied; this is the primary test target for CLI behavior.

    Args:
        argv: Command-line argument list without program name.

    Returns:
        Document: Assembled document.

    Raises:
        DirclipError: On any user-facing validation error.
    """
    args = build_parser().parse_args(argv)
    return _render(args)


def summary_lines(args: argparse.Namespace, document: Document) -> list[str]:
    """Return the human-readable confirmation and option summary."""
    lines = [
        SUCCESS_MESSAGE,
        f"Copied {document.file_count} file(s) from "
        f"{document.directory_count} directory(ies)",
    ]
    if document.skipped:
        lines.append(f"Skipped {len(document.skipped)} unreadable file(s)")
    if args.filter_pattern is not None:
        lines.append(f"Filtered files using pattern: {args.filter_pattern}")
    if args.recursive:
        lines.append(
            "Processed subdirectories recursively "
            "(showing only directories with matching files)"
        )
    if args.no_ignore:
        lines.append("Ignore rules from .gitignore were not applied")
    return lines


def _run_with_args(args: argparse.Namespace, sink: ClipboardSink | None = None) -> str:
    document = _render(args)
    (sink or get_clipboard(args.x11)).copy(document.text)
    return "\n".join(summary_lines(args, document))


def run_dirclip(argv: list[str] | None = None, sink: ClipboardSink | None = None) -> str:
    """Render the document, copy it, and return the summary text.

    Args:
        argv: Command-line argument list without program name.
        sink: Clipboard destination. Defaults to the one chosen by ``-x``.

    Returns:
        str: Confirmation and summary lines.

    Raises:
        DirclipError: On configuration, path or clipboard errors.
    """
    args = build_parser().parse_args(argv)
    return _run_with_args(args, sink)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        summary = _run_with_args(args)
    except DirclipError as exc:
        sys.stderr.write(f"dirclip: {exc}\n")
        sys.exit(1)

    sys.stdout.write(summary + "\n")
