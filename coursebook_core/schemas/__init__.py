"""Data schemas for course content.

This module exports the content block variants, diagram prop shapes, chapter
and section models, and validation issue records.
"""

from coursebook_core.schemas.blocks import (
    BLOCK_TYPES,
    Block,
    CodeBlock,
    CodeDiffBlock,
    DiagramBlock,
    ExerciseBlock,
    NoteBlock,
    NoteVariant,
    OutputBlock,
    ProseBlock,
    QuizBlock,
    parse_block,
)
from coursebook_core.schemas.chapters import Chapter, ChapterSummary, Section
from coursebook_core.schemas.diagrams import DEFAULT_DIAGRAM_SHAPES
from coursebook_core.schemas.issues import ErrorKind, ValidationIssue

__all__ = [
    # Blocks
    "BLOCK_TYPES",
    "Block",
    "CodeBlock",
    "CodeDiffBlock",
    "DiagramBlock",
    "ExerciseBlock",
    "NoteBlock",
    "NoteVariant",
    "OutputBlock",
    "ProseBlock",
    "QuizBlock",
    "parse_block",
    # Chapters and sections
    "Chapter",
    "ChapterSummary",
    "Section",
    # Diagrams
    "DEFAULT_DIAGRAM_SHAPES",
    # Issues
    "ErrorKind",
    "ValidationIssue",
]
