"""Exceptions raised by the content layer.

Validation problems inside a chapter are reported as ``ValidationIssue``
records rather than raised. The exceptions below cover the cases that stop a
load outright: an unrecognised block tag, a diagram payload that cannot be
passed to its renderer, a chapter that cannot be parsed, and id collisions in
the registry.

None of these derive from ``ValueError``, so raising them inside a pydantic
validator propagates them unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from coursebook_core.schemas.issues import ValidationIssue


class ContentError(Exception):
    """Base class for content layer errors."""

    pass


class UnknownBlockKind(ContentError):
    """A block's ``type`` tag is not one of the known block kinds."""

    def __init__(self, kind: object, block_index: int | None = None) -> None:
        self.kind = kind
        self.block_index = block_index
        where = f" at blocks[{block_index}]" if block_index is not None else ""
        super().__init__(f"Unknown block kind {kind!r}{where}")


class SchemaError(ContentError):
    """Diagram props do not satisfy the shape registered for the component."""

    def __init__(self, component: str, field: str, message: str) -> None:
        self.component = component
        self.field = field
        self.message = message
        super().__init__(f"{component or '<empty>'}: {field}: {message}")


class ChapterLoadError(ContentError):
    """Chapter data could not be turned into a Chapter.

    Carries every issue found while parsing, not just the first one.
    """

    def __init__(self, chapter_id: str, issues: list[ValidationIssue]) -> None:
        self.chapter_id = chapter_id
        self.issues = list(issues)
        super().__init__(
            f"Chapter {chapter_id!r} failed to load with {len(self.issues)} issue(s)"
        )


class DuplicateChapterId(ContentError):
    """Two chapters share the same id."""

    def __init__(self, chapter_id: str) -> None:
        self.chapter_id = chapter_id
        super().__init__(f"Duplicate chapter id: {chapter_id!r}")


class ChapterNotFound(ContentError, LookupError):
    """A chapter or section id is not present."""

    pass


class ContentDirectoryError(ContentError):
    """The content directory or its table of contents cannot be read."""

    pass
