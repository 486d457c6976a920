"""Tests for loading content from disk."""

from pathlib import Path

import pytest

from coursebook_core.errors import ChapterLoadError, ContentDirectoryError, DuplicateChapterId
from coursebook_core.loader import load_chapter, load_chapter_file, load_content
from coursebook_core.schemas.issues import ErrorKind

from .factories import chapter_data, sample_blocks, toc_data, write_json


class TestLoadChapter:
    """Tests for parsing a chapter from authored data."""

    def test_valid_chapter(self) -> None:
        """Test that valid data loads with every block."""
        chapter = load_chapter(chapter_data())

        assert chapter.id == "pointers-intro"
        assert len(chapter.blocks) == 8

    def test_collects_every_parse_issue(self) -> None:
        """Test that all broken blocks are reported together."""
        blocks = [
            {"type": "prose", "markdown": "ok"},
            {"type": "video", "url": "x"},
            {"type": "code", "language": "c"},
            {"type": "prose", "markdown": "x", "correctIndex": 0},
        ]
        with pytest.raises(ChapterLoadError) as exc_info:
            load_chapter(chapter_data(blocks=blocks))

        issues = exc_info.value.issues
        assert [(i.block_index, i.field, i.kind) for i in issues] == [
            (1, "type", ErrorKind.UNKNOWN_BLOCK_KIND),
            (2, "code", ErrorKind.MISSING_REQUIRED_FIELD),
            (3, "correctIndex", ErrorKind.SCHEMA_ERROR),
        ]
        assert exc_info.value.chapter_id == "pointers-intro"

    def test_snake_case_key_reported(self) -> None:
        """Test that solution_language is reported instead of accepted."""
        exercise = {**sample_blocks()[7]}
        exercise["solution_language"] = exercise.pop("solutionLanguage")
        with pytest.raises(ChapterLoadError) as exc_info:
            load_chapter(chapter_data(blocks=[exercise]))

        assert {(i.field, i.kind) for i in exc_info.value.issues} == {
            ("solutionLanguage", ErrorKind.MISSING_REQUIRED_FIELD),
            ("solution_language", ErrorKind.SCHEMA_ERROR),
        }

    def test_header_and_block_issues(self) -> None:
        """Test that chapter fields and blocks are both checked."""
        data = chapter_data(blocks=[{"type": "quiz"}])
        del data["title"]
        with pytest.raises(ChapterLoadError) as exc_info:
            load_chapter(data)

        issues = exc_info.value.issues
        assert issues[0].block_index is None
        assert issues[0].field == "title"
        assert {i.field for i in issues[1:]} == {
            "question",
            "options",
            "correctIndex",
            "explanation",
        }

    def test_missing_blocks(self) -> None:
        """Test that a chapter without a blocks key fails to load."""
        data = chapter_data()
        del data["blocks"]
        with pytest.raises(ChapterLoadError) as exc_info:
            load_chapter(data)

        assert [i.field for i in exc_info.value.issues] == ["blocks"]

    def test_non_object_chapter(self) -> None:
        """Test that a list is not a chapter."""
        with pytest.raises(ChapterLoadError) as exc_info:
            load_chapter(sample_blocks(), default_id="arrays")

        assert exc_info.value.issues[0].chapter_id == "arrays"


class TestLoadChapterFile:
    """Tests for reading a chapter file."""

    def test_bad_json(self, tmp_path: Path) -> None:
        """Test that unreadable JSON becomes a load error."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ChapterLoadError) as exc_info:
            load_chapter_file(path)

        assert exc_info.value.chapter_id == "broken"
        assert "broken.json" in exc_info.value.issues[0].message

    def test_file_name_used_when_id_missing(self, tmp_path: Path) -> None:
        """Test that issues of an id-less chapter are labelled by file name."""
        data = chapter_data()
        del data["id"]
        path = write_json(tmp_path / "arrays.json", data)

        with pytest.raises(ChapterLoadError) as exc_info:
            load_chapter_file(path)

        assert exc_info.value.issues[0].chapter_id == "arrays"
        assert exc_info.value.issues[0].field == "id"


class TestLoadContent:
    """Tests for loading a content directory."""

    def test_loads_listed_chapters(self, content_dir: Path) -> None:
        """Test that TOC chapters load in TOC order."""
        result = load_content(content_dir)

        assert result.issues == []
        assert [c.id for c in result.chapters] == ["pointers-intro", "calculator"]
        assert [s.id for s in result.toc.sections] == ["language", "projects"]

    def test_unlisted_chapters_follow(self, content_dir: Path) -> None:
        """Test that files outside the TOC are still loaded."""
        write_json(content_dir / "extras" / "bitfields.json", chapter_data("bitfields"))

        result = load_content(content_dir)

        assert [c.id for c in result.chapters] == ["pointers-intro", "calculator", "bitfields"]

    def test_broken_file_does_not_stop_loading(self, content_dir: Path) -> None:
        """Test that a bad chapter adds issues and others still load."""
        write_json(
            content_dir / "section-1-language" / "arrays.json",
            chapter_data("arrays", blocks=[{"type": "table"}]),
        )

        result = load_content(content_dir)

        assert [c.id for c in result.chapters] == ["pointers-intro", "calculator"]
        assert [(i.chapter_id, i.kind) for i in result.issues] == [
            ("arrays", ErrorKind.UNKNOWN_BLOCK_KIND)
        ]

    def test_id_must_match_file_name(self, content_dir: Path) -> None:
        """Test that a chapter id differing from its file name is reported."""
        write_json(content_dir / "extras" / "bits.json", chapter_data("bitfields"))

        result = load_content(content_dir)

        assert [(i.chapter_id, i.field) for i in result.issues] == [("bitfields", "id")]

    def test_without_toc(self, tmp_path: Path) -> None:
        """Test that chapters load when there is no table of contents."""
        write_json(tmp_path / "misc" / "arrays.json", chapter_data("arrays"))

        result = load_content(tmp_path)

        assert result.toc is None
        assert [c.id for c in result.chapters] == ["arrays"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Test that a missing directory raises ContentDirectoryError."""
        with pytest.raises(ContentDirectoryError):
            load_content(tmp_path / "nope")

    def test_malformed_toc(self, tmp_path: Path) -> None:
        """Test that an invalid TOC raises ContentDirectoryError."""
        write_json(tmp_path / "toc.json", {"sections": [{"title": "no id"}]})

        with pytest.raises(ContentDirectoryError, match="Invalid table of contents"):
            load_content(tmp_path)

    def test_toc_with_duplicate_chapter(self, tmp_path: Path) -> None:
        """Test that a chapter listed twice in the TOC stops loading."""
        data = toc_data()
        data["sections"][1]["chapters"].append(
            {"id": "pointers-intro", "title": "Again", "description": "d"}
        )
        write_json(tmp_path / "toc.json", data)

        with pytest.raises(DuplicateChapterId):
            load_content(tmp_path)
