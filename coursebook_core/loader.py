"""Load course content from JSON files.

Layout of a content directory::

    content/
        toc.json                      sections and their chapter summaries
        <section folder>/<chapter>.json

Loading never stops at the first bad file: every chapter that parses is
returned, and every problem found along the way is returned as an issue.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from coursebook_core.errors import (
    ChapterLoadError,
    ContentDirectoryError,
    UnknownBlockKind,
)
from coursebook_core.schemas.blocks import parse_block
from coursebook_core.schemas.chapters import Chapter
from coursebook_core.schemas.issues import ErrorKind, ValidationIssue
from coursebook_core.toc import TableOfContents
from coursebook_core.utils.logging import get_logger

logger = get_logger(__name__)

UNKNOWN_CHAPTER_ID = "<unknown>"


@dataclass
class LoadResult:
    """Everything read from a content directory."""

    toc: TableOfContents | None
    chapters: list[Chapter] = field(default_factory=list)
    issues: list[ValidationIssue] = field(default_factory=list)


def _issues_from_pydantic(
    exc: ValidationError,
    chapter_id: str,
    block_index: int | None = None,
) -> list[ValidationIssue]:
    """Convert pydantic errors to issues located by wire field names."""
    issues = []
    for error in exc.errors():
        kind = (
            ErrorKind.MISSING_REQUIRED_FIELD
            if error["type"] == "missing"
            else ErrorKind.SCHEMA_ERROR
        )
        issues.append(
            ValidationIssue(
                chapter_id=chapter_id,
                block_index=block_index,
                field=".".join(str(part) for part in error["loc"]),
                message=error["msg"],
                kind=kind,
            )
        )
    return issues


def load_chapter(data: Any, default_id: str | None = None) -> Chapter:
    """Build a chapter from authored data, reporting every parse problem.

    Args:
        data: Mapping with ``id``, ``title``, ``description`` and ``blocks``
        default_id: Id used to label issues when the data has none

    Returns:
        The parsed chapter

    Raises:
        ChapterLoadError: With all issues, if any block or chapter field
            cannot be parsed
    """
    if not isinstance(data, Mapping):
        chapter_id = default_id or UNKNOWN_CHAPTER_ID
        raise ChapterLoadError(
            chapter_id,
            [
                ValidationIssue(
                    chapter_id=chapter_id,
                    field="",
                    message=f"chapter must be an object, got {type(data).__name__}",
                    kind=ErrorKind.SCHEMA_ERROR,
                )
            ],
        )

    raw_id = data.get("id")
    chapter_id = raw_id if isinstance(raw_id, str) and raw_id else default_id
    chapter_id = chapter_id or UNKNOWN_CHAPTER_ID
    issues: list[ValidationIssue] = []

    raw_blocks = data.get("blocks")
    header: Chapter | None = None
    try:
        header = Chapter.model_validate({**data, "blocks": ()})
    except ValidationError as exc:
        issues.extend(_issues_from_pydantic(exc, chapter_id))

    blocks = []
    if raw_blocks is None:
        issues.append(
            ValidationIssue(
                chapter_id=chapter_id,
                field="blocks",
                message="Field required",
                kind=ErrorKind.MISSING_REQUIRED_FIELD,
            )
        )
    elif not isinstance(raw_blocks, (list, tuple)):
        issues.append(
            ValidationIssue(
                chapter_id=chapter_id,
                field="blocks",
                message=f"blocks must be a list, got {type(raw_blocks).__name__}",
                kind=ErrorKind.SCHEMA_ERROR,
            )
        )
    else:
        for index, raw in enumerate(raw_blocks):
            if not isinstance(raw, Mapping):
                issues.append(
                    ValidationIssue(
                        chapter_id=chapter_id,
                        block_index=index,
                        field="",
                        message=f"block must be an object, got {type(raw).__name__}",
                        kind=ErrorKind.SCHEMA_ERROR,
                    )
                )
                continue
            try:
                blocks.append(parse_block(raw, index))
            except UnknownBlockKind as exc:
                issues.append(
                    ValidationIssue(
                        chapter_id=chapter_id,
                        block_index=index,
                        field="type",
                        message=f"unknown block kind {exc.kind!r}",
                        kind=ErrorKind.UNKNOWN_BLOCK_KIND,
                    )
                )
            except ValidationError as exc:
                issues.extend(_issues_from_pydantic(exc, chapter_id, index))

    if issues or header is None:
        raise ChapterLoadError(chapter_id, issues)
    return header.model_copy(update={"blocks": tuple(blocks)})


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def load_chapter_file(path: str | Path) -> Chapter:
    """Load one chapter JSON file.

    Args:
        path: Path to the chapter file

    Returns:
        The parsed chapter

    Raises:
        ChapterLoadError: If the file is not valid JSON or not a valid chapter
    """
    path = Path(path)
    try:
        data = _read_json(path)
    except (OSError, json.JSONDecodeError) as e:
        raise ChapterLoadError(
            path.stem,
            [
                ValidationIssue(
                    chapter_id=path.stem,
                    field="",
                    message=f"cannot read {path.name}: {e}",
                    kind=ErrorKind.SCHEMA_ERROR,
                )
            ],
        ) from e
    return load_chapter(data, default_id=path.stem)


def load_table_of_contents(path: str | Path) -> TableOfContents:
    """Load the table of contents file.

    Args:
        path: Path to ``toc.json``

    Returns:
        The table of contents

    Raises:
        ContentDirectoryError: If the file cannot be read or is malformed
        DuplicateChapterId: If a chapter is listed twice
    """
    path = Path(path)
    try:
        data = _read_json(path)
    except (OSError, json.JSONDecodeError) as e:
        raise ContentDirectoryError(f"Cannot read table of contents {path}: {e}") from e
    try:
        return TableOfContents.model_validate(data)
    except ValidationError as e:
        raise ContentDirectoryError(f"Invalid table of contents {path}: {e}") from e


def load_content(content_dir: str | Path, toc_filename: str = "toc.json") -> LoadResult:
    """Load the table of contents and every chapter file in a directory.

    Chapters listed in the table of contents come first, in its order;
    chapter files it does not list follow, sorted by path.

    Args:
        content_dir: Root of the content directory
        toc_filename: Name of the table of contents file

    Returns:
        LoadResult with the parsed chapters and every issue found

    Raises:
        ContentDirectoryError: If the directory or the table of contents
            cannot be read
    """
    root = Path(content_dir)
    if not root.is_dir():
        raise ContentDirectoryError(f"Content directory not found: {root}")

    toc_path = root / toc_filename
    toc: TableOfContents | None = None
    if toc_path.exists():
        toc = load_table_of_contents(toc_path)
    else:
        logger.warning(f"No {toc_filename} in {root}; loading chapter files without sections")

    result = LoadResult(toc=toc)
    seen: set[Path] = set()

    def load(path: Path) -> None:
        seen.add(path.resolve())
        try:
            chapter = load_chapter_file(path)
        except ChapterLoadError as e:
            logger.debug(f"{path}: {len(e.issues)} load issue(s)")
            result.issues.extend(e.issues)
            return
        if chapter.id != path.stem:
            result.issues.append(
                ValidationIssue(
                    chapter_id=chapter.id,
                    field="id",
                    message=f"chapter id {chapter.id!r} does not match file name {path.name!r}",
                    kind=ErrorKind.SCHEMA_ERROR,
                )
            )
        result.chapters.append(chapter)

    if toc is not None:
        for section in toc.sections:
            for summary in section.chapters:
                path = root / section.folder / f"{summary.id}.json"
                if path.exists():
                    load(path)

    for path in sorted(root.glob("*/*.json")):
        if path.resolve() not in seen:
            logger.info(f"Loading chapter not listed in the table of contents: {path}")
            load(path)

    logger.info(
        f"Loaded {len(result.chapters)} chapter(s) from {root} "
        f"with {len(result.issues)} issue(s)"
    )
    return result
