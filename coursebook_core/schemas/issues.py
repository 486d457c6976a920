"""Validation issue records.

Issues are plain data. A validation run collects all of them and hands the
list to whoever asked (a build step, the CLI, a test) instead of raising on the
first one.
"""

from enum import Enum
from typing import Any

from pydantic import Field

from coursebook_core.schemas.base import ContentModel


class ErrorKind(str, Enum):
    """Category of a validation issue."""

    UNKNOWN_BLOCK_KIND = "unknown_block_kind"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    SCHEMA_ERROR = "schema_error"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    DUPLICATE_CHAPTER_ID = "duplicate_chapter_id"


class ValidationIssue(ContentModel):
    """One violated rule, located by chapter, block and field."""

    chapter_id: str = Field(..., description="Chapter the issue belongs to")
    block_index: int | None = Field(
        None, description="0-based block position, None for chapter-level issues"
    )
    field: str = Field(..., description="Field name or dotted path inside the block")
    message: str = Field(..., description="Human readable description")
    kind: ErrorKind = Field(..., description="Issue category")

    @property
    def location(self) -> str:
        """Position of the issue inside its chapter."""
        if self.block_index is None:
            return self.field or "<chapter>"
        if self.field:
            return f"blocks[{self.block_index}].{self.field}"
        return f"blocks[{self.block_index}]"

    def to_record(self) -> dict[str, Any]:
        """Serialise to the report record used by build tooling."""
        return self.model_dump(by_alias=True, mode="json")

    def __str__(self) -> str:
        return f"{self.chapter_id}: {self.location}: [{self.kind.value}] {self.message}"
