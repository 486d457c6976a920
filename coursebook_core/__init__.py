"""coursebook-core: content model and validation for an interactive course.

Chapters are ordered lists of typed content blocks (prose, code, output,
notes, diagrams, quizzes, exercises, code diffs). This package defines those
blocks, checks diagram props against the shapes each diagram component
expects, validates chapters in a single collect-everything pass, and exposes
loaded chapters through a read-only registry.

    >>> from coursebook_core import load_content, validate_corpus, build_registry
    >>> result = load_content("content")
    >>> issues = result.issues + validate_corpus(result.chapters)
    >>> registry = build_registry(result.chapters, result.toc)
    >>> registry.get_chapter("pointers-intro").title
"""

from coursebook_core.diagrams import (
    DiagramPropRegistry,
    ValidatedProps,
    default_registry,
    validate_diagram_props,
)
from coursebook_core.errors import (
    ChapterLoadError,
    ChapterNotFound,
    ContentDirectoryError,
    ContentError,
    DuplicateChapterId,
    SchemaError,
    UnknownBlockKind,
)
from coursebook_core.loader import (
    LoadResult,
    load_chapter,
    load_chapter_file,
    load_content,
    load_table_of_contents,
)
from coursebook_core.registry import ChapterRegistry, build_registry
from coursebook_core.schemas.blocks import Block, parse_block
from coursebook_core.schemas.chapters import Chapter, ChapterSummary, Section
from coursebook_core.schemas.issues import ErrorKind, ValidationIssue
from coursebook_core.toc import AdjacentChapters, TableOfContents
from coursebook_core.validation import ChapterValidator, validate_chapter, validate_corpus

__version__ = "0.1.0"

__all__ = [
    # Blocks and chapters
    "Block",
    "Chapter",
    "ChapterSummary",
    "Section",
    "parse_block",
    # Diagrams
    "DiagramPropRegistry",
    "ValidatedProps",
    "default_registry",
    "validate_diagram_props",
    # Validation
    "ChapterValidator",
    "ErrorKind",
    "ValidationIssue",
    "validate_chapter",
    "validate_corpus",
    # Navigation
    "AdjacentChapters",
    "ChapterRegistry",
    "TableOfContents",
    "build_registry",
    # Loading
    "LoadResult",
    "load_chapter",
    "load_chapter_file",
    "load_content",
    "load_table_of_contents",
    # Errors
    "ChapterLoadError",
    "ChapterNotFound",
    "ContentDirectoryError",
    "ContentError",
    "DuplicateChapterId",
    "SchemaError",
    "UnknownBlockKind",
]
