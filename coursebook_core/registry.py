"""Chapter registry.

The registry is the hand-off point to navigation and rendering: it is built
once from loaded chapters and never changes afterwards.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from coursebook_core.errors import ChapterNotFound, DuplicateChapterId
from coursebook_core.schemas.chapters import Chapter, ChapterSummary
from coursebook_core.toc import TableOfContents
from coursebook_core.utils.logging import get_logger

logger = get_logger(__name__)


class ChapterRegistry:
    """Read-only lookup of chapters by id and of chapter listings by section.

    Use ``build_registry`` to create one.
    """

    def __init__(
        self, chapters: dict[str, Chapter], toc: TableOfContents | None = None
    ) -> None:
        self._chapters = MappingProxyType(dict(chapters))
        self._toc = toc

    @property
    def toc(self) -> TableOfContents | None:
        """Table of contents the registry was built with."""
        return self._toc

    def __contains__(self, chapter_id: object) -> bool:
        return chapter_id in self._chapters

    def __len__(self) -> int:
        return len(self._chapters)

    def __iter__(self) -> Iterator[Chapter]:
        return iter(self._chapters.values())

    def chapter_ids(self) -> tuple[str, ...]:
        """Ids of all registered chapters in registration order."""
        return tuple(self._chapters)

    def get_chapter(self, chapter_id: str) -> Chapter:
        """Look up a chapter.

        Args:
            chapter_id: The chapter id

        Returns:
            The chapter

        Raises:
            ChapterNotFound: If no chapter has this id
        """
        try:
            return self._chapters[chapter_id]
        except KeyError:
            raise ChapterNotFound(f"Chapter {chapter_id!r} not found") from None

    def list_chapters(self, section_id: str) -> list[ChapterSummary]:
        """Chapter summaries of a section in navigation order.

        Entries listed in the table of contents are returned even when their
        content has not been written yet; see ``missing_chapters``.

        Args:
            section_id: The section id

        Returns:
            Ordered chapter summaries

        Raises:
            ChapterNotFound: If the section does not exist
        """
        section = self._toc.find_section(section_id) if self._toc else None
        if section is None:
            raise ChapterNotFound(f"Section {section_id!r} not found")
        return list(section.chapters)

    def missing_chapters(self) -> list[ChapterSummary]:
        """Table of contents entries without loaded content."""
        if self._toc is None:
            return []
        return [c for c in self._toc.iter_chapters() if c.id not in self._chapters]


def build_registry(
    chapters: Iterable[Chapter], toc: TableOfContents | None = None
) -> ChapterRegistry:
    """Build the registry from loaded chapters.

    Args:
        chapters: Chapters to register, in the order they should be iterated
        toc: Optional table of contents for section listings

    Returns:
        An immutable ChapterRegistry

    Raises:
        DuplicateChapterId: If two chapters share an id
    """
    by_id: dict[str, Chapter] = {}
    for chapter in chapters:
        if chapter.id in by_id:
            raise DuplicateChapterId(chapter.id)
        by_id[chapter.id] = chapter

    registry = ChapterRegistry(by_id, toc)
    logger.info(f"Chapter registry built with {len(registry)} chapter(s)")
    missing = registry.missing_chapters()
    if missing:
        logger.debug(f"{len(missing)} chapter(s) listed without content")
    return registry
