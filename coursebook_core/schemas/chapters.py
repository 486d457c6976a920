"""Chapter and section schemas.

A chapter owns an ordered tuple of blocks; order is display order and is
preserved exactly as authored. Sections group chapter summaries for
navigation.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import Field, field_validator, model_validator

from coursebook_core.schemas.base import ContentModel
from coursebook_core.schemas.blocks import Block, ProseBlock, block_class_for
from coursebook_core.utils.markdown import Heading, extract_headings

if TYPE_CHECKING:
    from coursebook_core.diagrams import DiagramPropRegistry
    from coursebook_core.schemas.issues import ValidationIssue


class ChapterSummary(ContentModel):
    """Chapter metadata used by navigation, without the blocks."""

    id: str = Field(..., description="Chapter id, unique across the site")
    title: str = Field(..., description="Chapter title")
    description: str = Field(..., description="One line summary")
    section_id: str | None = Field(None, description="Section the chapter is listed in")


class Chapter(ContentModel):
    """A named, ordered sequence of content blocks."""

    id: str = Field(..., description="URL-safe chapter id")
    title: str = Field(..., description="Chapter title")
    description: str = Field(..., description="One line summary")
    blocks: tuple[Block, ...] = Field(..., description="Content blocks in display order")

    @field_validator("blocks", mode="before")
    @classmethod
    def check_block_tags(cls, blocks: Any) -> Any:
        """Reject unknown block tags with UnknownBlockKind before parsing."""
        if isinstance(blocks, (list, tuple)):
            for index, block in enumerate(blocks):
                if isinstance(block, Mapping):
                    block_class_for(block.get("type"), index)
        return blocks

    def validate(  # type: ignore[override]
        self, registry: DiagramPropRegistry | None = None
    ) -> list[ValidationIssue]:
        """Check every content rule and return all violations.

        The chapter is not modified; repeated calls return equal lists.

        This instance method replaces pydantic's deprecated
        ``BaseModel.validate(data)`` classmethod. Build chapters from data with
        ``Chapter.model_validate`` or ``load_chapter``.

        Args:
            registry: Diagram registry to check diagram props against
                (defaults to the process-wide registry)

        Returns:
            Issues ordered by block position, then field order
        """
        # Import here to avoid circular imports at runtime
        from coursebook_core.validation import validate_chapter

        return validate_chapter(self, registry)

    def summary(self, section_id: str | None = None) -> ChapterSummary:
        """Metadata view of this chapter.

        Args:
            section_id: Section to record on the summary

        Returns:
            ChapterSummary with the chapter's id, title and description
        """
        return ChapterSummary(
            id=self.id,
            title=self.title,
            description=self.description,
            section_id=section_id,
        )

    def headings(self) -> list[Heading]:
        """Level 2 and 3 headings from the chapter's prose, in order."""
        headings: list[Heading] = []
        for block in self.blocks:
            if isinstance(block, ProseBlock):
                headings.extend(extract_headings(block.markdown))
        return headings


class Section(ContentModel):
    """A top-level part of the course listing its chapters in order."""

    id: str = Field(..., description="Section id")
    title: str = Field(..., description="Section title")
    description: str = Field("", description="Section summary")
    icon: str = Field("", description="Icon shown in navigation")
    directory: str | None = Field(
        None, description="Folder holding the chapter files (defaults to the id)"
    )
    chapters: tuple[ChapterSummary, ...] = Field(
        default_factory=tuple, description="Chapters in navigation order"
    )

    @model_validator(mode="before")
    @classmethod
    def attach_section_id(cls, data: Any) -> Any:
        """Record the owning section on each chapter summary."""
        if not isinstance(data, Mapping):
            return data
        section_id = data.get("id")
        chapters = data.get("chapters")
        if not isinstance(section_id, str) or not isinstance(chapters, (list, tuple)):
            return data
        attached: list[Any] = []
        for chapter in chapters:
            if isinstance(chapter, ChapterSummary) and chapter.section_id is None:
                chapter = chapter.model_copy(update={"section_id": section_id})
            elif isinstance(chapter, Mapping) and not (
                chapter.get("sectionId") or chapter.get("section_id")
            ):
                chapter = {**chapter, "sectionId": section_id}
            attached.append(chapter)
        return {**data, "chapters": attached}

    @property
    def folder(self) -> str:
        """Directory name of the section's chapter files."""
        return self.directory or self.id
