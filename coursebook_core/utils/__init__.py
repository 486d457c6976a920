"""Utility functions."""

from coursebook_core.utils.logging import get_logger, log_exceptions, set_package_level
from coursebook_core.utils.markdown import extract_headings, slugify

__all__ = [
    "extract_headings",
    "get_logger",
    "log_exceptions",
    "set_package_level",
    "slugify",
]
