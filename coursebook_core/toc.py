"""Course table of contents.

Sections are listed in navigation order and each lists its chapters in order.
Flattening the sections gives the reading order used for previous/next links.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field, model_validator

from coursebook_core.errors import DuplicateChapterId
from coursebook_core.schemas.base import ContentModel
from coursebook_core.schemas.chapters import ChapterSummary, Section


class AdjacentChapters(BaseModel):
    """Neighbours of a chapter in reading order."""

    prev: ChapterSummary | None = Field(None, description="Previous chapter")
    next: ChapterSummary | None = Field(None, description="Next chapter")


class TableOfContents(ContentModel):
    """All sections of the course in navigation order."""

    sections: tuple[Section, ...] = Field(
        default_factory=tuple, description="Sections in navigation order"
    )

    @model_validator(mode="after")
    def unique_ids(self) -> "TableOfContents":
        """Section ids and chapter ids must each be unique."""
        section_ids: set[str] = set()
        chapter_ids: set[str] = set()
        for section in self.sections:
            if section.id in section_ids:
                raise ValueError(f"Duplicate section id: {section.id!r}")
            section_ids.add(section.id)
            for chapter in section.chapters:
                if chapter.id in chapter_ids:
                    raise DuplicateChapterId(chapter.id)
                chapter_ids.add(chapter.id)
        return self

    def find_section(self, section_id: str) -> Section | None:
        """Find a section by its id.

        Args:
            section_id: The section id to look up

        Returns:
            The matching Section, or None if not found
        """
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def find_chapter_meta(
        self, section_id: str, chapter_id: str
    ) -> tuple[Section, ChapterSummary] | None:
        """Find a chapter listed in a given section.

        Args:
            section_id: Section the chapter should be listed in
            chapter_id: The chapter id to look up

        Returns:
            The section and chapter summary, or None if not listed there
        """
        section = self.find_section(section_id)
        if section is None:
            return None
        for chapter in section.chapters:
            if chapter.id == chapter_id:
                return section, chapter
        return None

    def iter_chapters(self) -> Iterator[ChapterSummary]:
        """Chapter summaries across all sections in reading order."""
        for section in self.sections:
            yield from section.chapters

    def adjacent_chapters(self, section_id: str, chapter_id: str) -> AdjacentChapters:
        """Previous and next chapters in reading order.

        Neighbours may belong to other sections. Unknown chapters have no
        neighbours.

        Args:
            section_id: Section of the current chapter
            chapter_id: Current chapter id

        Returns:
            AdjacentChapters with None at either end
        """
        ordered = list(self.iter_chapters())
        for position, chapter in enumerate(ordered):
            if chapter.section_id == section_id and chapter.id == chapter_id:
                return AdjacentChapters(
                    prev=ordered[position - 1] if position > 0 else None,
                    next=ordered[position + 1] if position < len(ordered) - 1 else None,
                )
        return AdjacentChapters()
