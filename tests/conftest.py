"""Shared fixtures for content tests."""

from pathlib import Path

import pytest

from coursebook_core.schemas.chapters import Chapter

from .factories import chapter_data, toc_data, write_json


@pytest.fixture
def valid_chapter() -> Chapter:
    """A chapter with one valid block of every kind."""
    return Chapter.model_validate(chapter_data())


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """A content directory with a TOC and two valid chapters."""
    root = tmp_path / "content"
    write_json(root / "toc.json", toc_data())
    write_json(root / "section-1-language" / "pointers-intro.json", chapter_data())
    write_json(
        root / "projects" / "calculator.json",
        chapter_data("calculator", title="Calculator", description="Parsing"),
    )
    return root
