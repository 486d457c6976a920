"""Content block schemas.

A chapter is an ordered list of blocks. Each block carries a ``type`` tag
that selects exactly one of the variants below; a block may only contain the
fields of its own variant.

The models enforce shape (which keys exist and their JSON types). Content
rules such as "markdown must not be empty" or "correctIndex must point at an
option" are checked by the chapter validator so that a single pass can report
every problem in a chapter.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import Field

from coursebook_core.errors import UnknownBlockKind
from coursebook_core.schemas.base import AuthoredModel


class NoteVariant(str, Enum):
    """Visual styles available for note blocks."""

    INFO = "info"
    TIP = "tip"
    WARNING = "warning"
    DANGER = "danger"


class ProseBlock(AuthoredModel):
    """Markdown text."""

    type: Literal["prose"] = "prose"
    markdown: str = Field(..., description="Markdown source")


class CodeBlock(AuthoredModel):
    """A highlighted source listing."""

    type: Literal["code"] = "code"
    language: str = Field(..., description="Highlighter language tag")
    code: str = Field(..., description="Source code")
    filename: str | None = Field(None, description="File name shown above the listing")
    highlight_lines: tuple[int, ...] | None = Field(
        None, description="1-based line numbers to emphasise"
    )

    @property
    def line_count(self) -> int:
        """Number of lines in the listing."""
        return len(self.code.splitlines())


class OutputBlock(AuthoredModel):
    """Program output as shown in a terminal."""

    type: Literal["output"] = "output"
    content: str = Field(..., description="Captured output")
    prompt: str | None = Field(None, description="Command line that produced it")


class NoteBlock(AuthoredModel):
    """An info/tip/warning/danger callout.

    ``variant`` is kept as a plain string so that an unsupported value is
    reported by the validator alongside every other issue in the chapter.
    """

    type: Literal["note"] = "note"
    variant: str = Field(..., description="One of info, tip, warning, danger")
    title: str = Field(..., description="Callout heading")
    markdown: str = Field(..., description="Callout body")


class CodeDiffBlock(AuthoredModel):
    """A before/after pair of snippets in one language."""

    type: Literal["codeDiff"] = "codeDiff"
    before: str = Field(..., description="Snippet before the change")
    after: str = Field(..., description="Snippet after the change")
    language: str = Field(..., description="Language of both snippets")
    description: str | None = Field(None, description="What the change illustrates")


class DiagramBlock(AuthoredModel):
    """A visual component plus the props it is rendered with."""

    type: Literal["diagram"] = "diagram"
    component: str = Field(..., description="Registered diagram component name")
    props: dict[str, Any] = Field(..., description="Component-specific props")
    caption: str | None = Field(None, description="Caption below the diagram")


class QuizBlock(AuthoredModel):
    """A single-answer multiple choice question.

    Option order is display order. Duplicate option text is allowed.
    """

    type: Literal["quiz"] = "quiz"
    question: str = Field(..., description="Question markdown")
    options: tuple[str, ...] = Field(..., description="Answer options in display order")
    correct_index: int = Field(
        ..., strict=True, description="0-based position of the correct option"
    )
    explanation: str = Field(..., description="Shown after answering")

    @property
    def correct_option(self) -> str | None:
        """Text of the correct option, or None when the index is out of range."""
        if 0 <= self.correct_index < len(self.options):
            return self.options[self.correct_index]
        return None


class ExerciseBlock(AuthoredModel):
    """A practice task with progressive hints and a hidden solution."""

    type: Literal["exercise"] = "exercise"
    title: str = Field(..., description="Exercise title")
    description: str = Field(..., description="Task statement markdown")
    hints: tuple[str, ...] = Field(..., description="Hints revealed one at a time")
    solution: str = Field(..., description="Reference solution source")
    solution_language: str = Field(..., description="Language of the solution")


Block = Annotated[
    Union[
        ProseBlock,
        CodeBlock,
        OutputBlock,
        NoteBlock,
        CodeDiffBlock,
        DiagramBlock,
        QuizBlock,
        ExerciseBlock,
    ],
    Field(discriminator="type"),
]

BLOCK_TYPES: dict[str, type[AuthoredModel]] = {
    "prose": ProseBlock,
    "code": CodeBlock,
    "output": OutputBlock,
    "note": NoteBlock,
    "codeDiff": CodeDiffBlock,
    "diagram": DiagramBlock,
    "quiz": QuizBlock,
    "exercise": ExerciseBlock,
}


def block_class_for(kind: object, block_index: int | None = None) -> type[AuthoredModel]:
    """Look up the model class for a block tag.

    Args:
        kind: Value of the block's ``type`` key
        block_index: Position of the block, used in the error message

    Returns:
        The block model class

    Raises:
        UnknownBlockKind: If the tag is not a known block kind
    """
    if not isinstance(kind, str) or kind not in BLOCK_TYPES:
        raise UnknownBlockKind(kind, block_index)
    return BLOCK_TYPES[kind]


def parse_block(data: Mapping[str, Any], block_index: int | None = None) -> Block:
    """Build a block from authored data.

    Args:
        data: Mapping with a ``type`` tag and the variant's fields
        block_index: Position of the block, used in error messages

    Returns:
        The typed block

    Raises:
        UnknownBlockKind: If ``type`` is missing or not a known block kind
        pydantic.ValidationError: If the fields do not match the variant
    """
    model = block_class_for(data.get("type"), block_index)
    return model.model_validate(dict(data))  # type: ignore[return-value]
