"""Command line entry point for content checks.

Usage:
    coursebook validate content/
    coursebook validate content/ --format json
    coursebook list content/ --section language
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from coursebook_core.errors import ContentDirectoryError, DuplicateChapterId
from coursebook_core.loader import load_content
from coursebook_core.registry import build_registry
from coursebook_core.settings import settings
from coursebook_core.utils.logging import get_logger, log_exceptions, set_package_level
from coursebook_core.validation import validate_corpus

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coursebook",
        description="Check and list course chapter content.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"Log level (default: {settings.log_level})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Validate every chapter")
    validate.add_argument(
        "content_dir",
        nargs="?",
        type=Path,
        default=settings.content_dir,
        help="Content directory (default: %(default)s)",
    )
    validate.add_argument(
        "--toc",
        default=settings.toc_filename,
        help="Table of contents file name (default: %(default)s)",
    )
    validate.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Issue output format: one line per issue, or one JSON record per line",
    )

    listing = subparsers.add_parser("list", help="List sections and chapters")
    listing.add_argument(
        "content_dir",
        nargs="?",
        type=Path,
        default=settings.content_dir,
        help="Content directory (default: %(default)s)",
    )
    listing.add_argument(
        "--toc",
        default=settings.toc_filename,
        help="Table of contents file name (default: %(default)s)",
    )
    listing.add_argument("--section", default=None, help="Only list this section")
    return parser


def run_validate(content_dir: Path, toc_filename: str, output_format: str) -> int:
    """Load and validate a content directory, printing every issue.

    Returns:
        Process exit code
    """
    try:
        result = load_content(content_dir, toc_filename)
    except (ContentDirectoryError, DuplicateChapterId) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_UNREADABLE

    issues = [*result.issues, *validate_corpus(result.chapters)]

    for issue in issues:
        if output_format == "json":
            print(json.dumps(issue.to_record(), ensure_ascii=False))
        else:
            print(issue)

    if not result.chapters and settings.fail_on_empty_corpus:
        print(f"error: no chapters found in {content_dir}", file=sys.stderr)
        return EXIT_INVALID

    if issues:
        print(
            f"{len(issues)} issue(s) in {len(result.chapters)} loaded chapter(s)",
            file=sys.stderr,
        )
        return EXIT_INVALID

    registry = build_registry(result.chapters, result.toc)
    print(f"OK: {len(registry)} chapter(s) valid", file=sys.stderr)
    return EXIT_OK


def run_list(content_dir: Path, toc_filename: str, section_id: str | None) -> int:
    """Print the table of contents, marking chapters without content.

    Returns:
        Process exit code
    """
    try:
        result = load_content(content_dir, toc_filename)
        registry = build_registry(result.chapters, result.toc)
    except (ContentDirectoryError, DuplicateChapterId) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_UNREADABLE

    if registry.toc is None:
        for chapter in registry:
            print(f"{chapter.id}  {chapter.title}")
        return EXIT_OK

    sections = registry.toc.sections
    if section_id is not None:
        sections = tuple(s for s in sections if s.id == section_id)
        if not sections:
            print(f"error: unknown section {section_id!r}", file=sys.stderr)
            return EXIT_INVALID

    for section in sections:
        print(f"{section.icon} {section.title} [{section.id}]".strip())
        for summary in registry.list_chapters(section.id):
            marker = " " if summary.id in registry else "-"
            print(f"  {marker} {summary.id}  {summary.title}")
    return EXIT_OK


@log_exceptions(logger)
def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv: Arguments without the program name (defaults to sys.argv)

    Returns:
        Process exit code
    """
    args = _build_parser().parse_args(argv)
    level = args.log_level or settings.log_level
    if args.log_level is None and getattr(args, "format", "text") == "json":
        # Only warnings and errors alongside JSON output
        level = "WARNING"
    set_package_level(level)

    if args.command == "validate":
        return run_validate(args.content_dir, args.toc, args.format)
    return run_list(args.content_dir, args.toc, args.section)


if __name__ == "__main__":
    sys.exit(main())
