"""Tests for the table of contents and the chapter registry."""

import pytest

from coursebook_core.errors import ChapterNotFound, DuplicateChapterId
from coursebook_core.registry import build_registry
from coursebook_core.schemas.chapters import Chapter
from coursebook_core.toc import TableOfContents

from .factories import chapter_data, toc_data


@pytest.fixture
def toc() -> TableOfContents:
    return TableOfContents.model_validate(toc_data())


class TestTableOfContents:
    """Tests for table of contents navigation."""

    def test_reading_order(self, toc: TableOfContents) -> None:
        """Test that chapters flatten across sections in order."""
        assert [c.id for c in toc.iter_chapters()] == ["pointers-intro", "arrays", "calculator"]

    def test_adjacent_across_sections(self, toc: TableOfContents) -> None:
        """Test that next of a section's last chapter is in the next section."""
        adjacent = toc.adjacent_chapters("language", "arrays")

        assert adjacent.prev.id == "pointers-intro"
        assert adjacent.next.id == "calculator"
        assert adjacent.next.section_id == "projects"

    def test_adjacent_at_ends(self, toc: TableOfContents) -> None:
        """Test that the first and last chapters have one neighbour."""
        assert toc.adjacent_chapters("language", "pointers-intro").prev is None
        assert toc.adjacent_chapters("projects", "calculator").next is None

    def test_adjacent_unknown_chapter(self, toc: TableOfContents) -> None:
        """Test that a chapter listed elsewhere has no neighbours."""
        adjacent = toc.adjacent_chapters("projects", "arrays")

        assert adjacent.prev is None
        assert adjacent.next is None

    def test_find_chapter_meta(self, toc: TableOfContents) -> None:
        """Test looking up a chapter within its section."""
        section, chapter = toc.find_chapter_meta("language", "arrays")

        assert section.title == "The C language"
        assert chapter.title == "Arrays"
        assert toc.find_chapter_meta("projects", "arrays") is None
        assert toc.find_chapter_meta("missing", "arrays") is None

    def test_chapter_listed_twice(self) -> None:
        """Test that a chapter id may appear once across sections."""
        data = toc_data()
        data["sections"][1]["chapters"].append(
            {"id": "arrays", "title": "Arrays again", "description": "d"}
        )
        with pytest.raises(DuplicateChapterId):
            TableOfContents.model_validate(data)

    def test_section_listed_twice(self) -> None:
        """Test that section ids are unique."""
        data = toc_data()
        data["sections"][1]["id"] = "language"
        with pytest.raises(ValueError, match="Duplicate section id"):
            TableOfContents.model_validate(data)


class TestChapterRegistry:
    """Tests for building and querying the registry."""

    def test_get_chapter(self, valid_chapter: Chapter, toc: TableOfContents) -> None:
        """Test lookup by id."""
        registry = build_registry([valid_chapter], toc)

        assert registry.get_chapter("pointers-intro") is valid_chapter
        assert "pointers-intro" in registry
        assert len(registry) == 1

    def test_get_missing_chapter(self, valid_chapter: Chapter) -> None:
        """Test that an unknown id raises ChapterNotFound."""
        registry = build_registry([valid_chapter])

        with pytest.raises(ChapterNotFound):
            registry.get_chapter("does-not-exist")
        with pytest.raises(LookupError):
            registry.get_chapter("does-not-exist")

    def test_duplicate_id_rejected(self, valid_chapter: Chapter) -> None:
        """Test that two chapters with one id cannot be registered."""
        other = Chapter.model_validate(chapter_data(title="Another intro"))

        with pytest.raises(DuplicateChapterId) as exc_info:
            build_registry([valid_chapter, other])

        assert exc_info.value.chapter_id == "pointers-intro"

    def test_list_chapters(self, valid_chapter: Chapter, toc: TableOfContents) -> None:
        """Test that a section lists its chapters in order."""
        registry = build_registry([valid_chapter], toc)

        summaries = registry.list_chapters("language")

        assert [s.id for s in summaries] == ["pointers-intro", "arrays"]
        assert {s.section_id for s in summaries} == {"language"}

    def test_list_unknown_section(self, valid_chapter: Chapter, toc: TableOfContents) -> None:
        """Test that an unknown section raises ChapterNotFound."""
        registry = build_registry([valid_chapter], toc)

        with pytest.raises(ChapterNotFound, match="Section"):
            registry.list_chapters("networking")

    def test_list_without_toc(self, valid_chapter: Chapter) -> None:
        """Test that sections are unknown when there is no TOC."""
        with pytest.raises(ChapterNotFound):
            build_registry([valid_chapter]).list_chapters("language")

    def test_missing_chapters(self, valid_chapter: Chapter, toc: TableOfContents) -> None:
        """Test TOC entries without loaded content."""
        registry = build_registry([valid_chapter], toc)

        assert [s.id for s in registry.missing_chapters()] == ["arrays", "calculator"]

    def test_iteration_order(self, valid_chapter: Chapter) -> None:
        """Test that iteration follows registration order."""
        arrays = Chapter.model_validate(chapter_data("arrays"))
        registry = build_registry([arrays, valid_chapter])

        assert registry.chapter_ids() == ("arrays", "pointers-intro")
        assert [c.id for c in registry] == ["arrays", "pointers-intro"]
