"""Shared model configuration for authored content."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ContentModel(BaseModel):
    """Base for every content record.

    Content files use camelCase keys (``correctIndex``); Python code uses the
    snake_case attribute names. Records are immutable once loaded and refuse
    keys they do not declare.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_alias=True,
        validate_by_name=True,
        extra="forbid",
        frozen=True,
    )


class AuthoredModel(ContentModel):
    """Base for records read only from authored JSON (blocks, diagram props).

    Only the camelCase wire names are accepted. A key spelled like the Python
    attribute (``correct_index``) is an unknown key, because renderers read
    the wire name and would find nothing.
    """

    model_config = ConfigDict(validate_by_name=False)
