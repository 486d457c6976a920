"""Chapter validation.

Content is written by hand and edited a little at a time, so validation
reports every problem in one pass instead of stopping at the first. Issues are
ordered by block position and, within a block, by field order, so two runs
over the same chapter produce identical lists.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from functools import partial

from coursebook_core.diagrams import DiagramPropRegistry, default_registry
from coursebook_core.errors import SchemaError
from coursebook_core.schemas.blocks import (
    CodeBlock,
    CodeDiffBlock,
    DiagramBlock,
    ExerciseBlock,
    NoteBlock,
    NoteVariant,
    OutputBlock,
    ProseBlock,
    QuizBlock,
)
from coursebook_core.schemas.chapters import Chapter
from coursebook_core.schemas.issues import ErrorKind, ValidationIssue
from coursebook_core.utils.logging import get_logger

logger = get_logger(__name__)

CHAPTER_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
MIN_QUIZ_OPTIONS = 2

_NOTE_VARIANTS = {variant.value for variant in NoteVariant}


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


class ChapterValidator:
    """Collects content rule violations for chapters.

    Every block kind has its own check method; each appends issues for one
    block in field order.
    """

    def __init__(self, registry: DiagramPropRegistry | None = None) -> None:
        self.registry = registry if registry is not None else default_registry()
        self._checks: dict[str, Callable[..., None]] = {
            "prose": self._check_prose,
            "code": self._check_code,
            "output": self._check_output,
            "note": self._check_note,
            "codeDiff": self._check_code_diff,
            "diagram": self._check_diagram,
            "quiz": self._check_quiz,
            "exercise": self._check_exercise,
        }

    # ======== Public API ========

    def validate(self, chapter: Chapter) -> list[ValidationIssue]:
        """Return every issue in a chapter, in block then field order."""
        issues: list[ValidationIssue] = []

        def emit(
            kind: ErrorKind, field: str, message: str, block_index: int | None = None
        ) -> None:
            issues.append(
                ValidationIssue(
                    chapter_id=chapter.id,
                    block_index=block_index,
                    field=field,
                    message=message,
                    kind=kind,
                )
            )

        if _blank(chapter.id):
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "id", "chapter id must not be empty")
        elif not CHAPTER_ID_RE.match(chapter.id):
            emit(
                ErrorKind.SCHEMA_ERROR,
                "id",
                f"chapter id {chapter.id!r} must contain only letters, digits, '-' and '_'",
            )
        if _blank(chapter.title):
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "title", "chapter title must not be empty")
        if not chapter.blocks:
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "blocks", "chapter has no blocks")

        for index, block in enumerate(chapter.blocks):
            self._checks[block.type](block, partial(emit, block_index=index))

        logger.debug(f"Validated chapter {chapter.id!r}: {len(issues)} issue(s)")
        return issues

    # ======== Block checks ========

    def _check_prose(self, block: ProseBlock, emit: Callable[..., None]) -> None:
        if _blank(block.markdown):
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "markdown", "prose markdown must not be empty")

    def _check_code(self, block: CodeBlock, emit: Callable[..., None]) -> None:
        if _blank(block.language):
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "language", "code language must not be empty")
        if _blank(block.code):
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "code", "code must not be empty")
        if block.highlight_lines:
            line_count = block.line_count
            for i, line in enumerate(block.highlight_lines):
                if not 1 <= line <= line_count:
                    emit(
                        ErrorKind.INDEX_OUT_OF_RANGE,
                        f"highlightLines.{i}",
                        f"highlighted line {line} is outside 1..{line_count}",
                    )

    def _check_output(self, block: OutputBlock, emit: Callable[..., None]) -> None:
        # Empty output is legitimate (a program that prints nothing)
        return

    def _check_note(self, block: NoteBlock, emit: Callable[..., None]) -> None:
        if block.variant not in _NOTE_VARIANTS:
            allowed = ", ".join(sorted(_NOTE_VARIANTS))
            emit(
                ErrorKind.SCHEMA_ERROR,
                "variant",
                f"note variant {block.variant!r} is not one of: {allowed}",
            )
        if _blank(block.title):
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "title", "note title must not be empty")
        if _blank(block.markdown):
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "markdown", "note markdown must not be empty")

    def _check_code_diff(self, block: CodeDiffBlock, emit: Callable[..., None]) -> None:
        if _blank(block.before):
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "before", "snippet before the change is empty")
        if _blank(block.after):
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "after", "snippet after the change is empty")
        if _blank(block.language):
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "language", "diff language must not be empty")

    def _check_diagram(self, block: DiagramBlock, emit: Callable[..., None]) -> None:
        if _blank(block.component):
            emit(
                ErrorKind.MISSING_REQUIRED_FIELD,
                "component",
                "diagram component must not be empty",
            )
            return
        try:
            self.registry.validate(block.component, block.props)
        except SchemaError as e:
            message = e.message if e.field == "component" else f"{block.component}: {e.message}"
            emit(ErrorKind.SCHEMA_ERROR, e.field, message)

    def _check_quiz(self, block: QuizBlock, emit: Callable[..., None]) -> None:
        if _blank(block.question):
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "question", "quiz question must not be empty")
        if len(block.options) < MIN_QUIZ_OPTIONS:
            emit(
                ErrorKind.MISSING_REQUIRED_FIELD,
                "options",
                f"quiz needs at least {MIN_QUIZ_OPTIONS} options, got {len(block.options)}",
            )
        for i, option in enumerate(block.options):
            if _blank(option):
                emit(ErrorKind.MISSING_REQUIRED_FIELD, f"options.{i}", "quiz option is empty")
        if not 0 <= block.correct_index < len(block.options):
            emit(
                ErrorKind.INDEX_OUT_OF_RANGE,
                "correctIndex",
                f"correctIndex {block.correct_index} is outside 0..{len(block.options) - 1}"
                if block.options
                else f"correctIndex {block.correct_index} but the quiz has no options",
            )
        if _blank(block.explanation):
            emit(
                ErrorKind.MISSING_REQUIRED_FIELD,
                "explanation",
                "quiz explanation must not be empty",
            )

    def _check_exercise(self, block: ExerciseBlock, emit: Callable[..., None]) -> None:
        if _blank(block.title):
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "title", "exercise title must not be empty")
        if _blank(block.description):
            emit(
                ErrorKind.MISSING_REQUIRED_FIELD,
                "description",
                "exercise description must not be empty",
            )
        for i, hint in enumerate(block.hints):
            if _blank(hint):
                emit(ErrorKind.MISSING_REQUIRED_FIELD, f"hints.{i}", "exercise hint is empty")
        if _blank(block.solution):
            emit(ErrorKind.MISSING_REQUIRED_FIELD, "solution", "exercise solution must not be empty")
        if _blank(block.solution_language):
            emit(
                ErrorKind.MISSING_REQUIRED_FIELD,
                "solutionLanguage",
                "solution language must not be empty",
            )


def validate_chapter(
    chapter: Chapter, registry: DiagramPropRegistry | None = None
) -> list[ValidationIssue]:
    """Validate a single chapter.

    Args:
        chapter: Chapter to check
        registry: Diagram registry (defaults to the built-in one)

    Returns:
        All issues found, empty when the chapter is valid
    """
    return ChapterValidator(registry).validate(chapter)


def validate_corpus(
    chapters: Iterable[Chapter], registry: DiagramPropRegistry | None = None
) -> list[ValidationIssue]:
    """Validate a set of chapters, including id uniqueness across them.

    Duplicate ids are reported first (one issue per repeat, in input order),
    followed by each chapter's own issues in input order.

    Args:
        chapters: Chapters to check
        registry: Diagram registry (defaults to the built-in one)

    Returns:
        All issues found, empty when the corpus is valid
    """
    chapters = list(chapters)
    validator = ChapterValidator(registry)
    issues: list[ValidationIssue] = []

    seen: set[str] = set()
    for chapter in chapters:
        if chapter.id in seen:
            issues.append(
                ValidationIssue(
                    chapter_id=chapter.id,
                    field="id",
                    message=f"chapter id {chapter.id!r} is used by more than one chapter",
                    kind=ErrorKind.DUPLICATE_CHAPTER_ID,
                )
            )
        seen.add(chapter.id)

    for chapter in chapters:
        issues.extend(validator.validate(chapter))

    logger.debug(f"Validated {len(chapters)} chapter(s): {len(issues)} issue(s)")
    return issues
