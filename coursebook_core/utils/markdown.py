"""Markdown helpers for chapter navigation.

Only the small subset needed to build an in-page table of contents is handled
here: ATX headings (``## Title``) outside fenced code blocks. Rendering is left
to the site.
"""

import re
from typing import NamedTuple

_HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
_FENCE_RE = re.compile(r"^[ \t]{0,3}(`{3,}|~{3,})")
_INLINE_MARKUP_RE = re.compile(r"[`*]+")


class Heading(NamedTuple):
    """A heading found in chapter prose."""

    id: str
    text: str
    level: int


def slugify(text: str) -> str:
    """Turn heading text into an anchor id.

    Word characters (including non-Latin letters), whitespace and hyphens are
    kept; runs of whitespace or underscores become a single hyphen.

    Args:
        text: Heading text

    Returns:
        Lower-case slug, possibly empty
    """
    slug = text.lower()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_]+", "-", slug)
    return slug.strip("-")


def extract_headings(markdown: str, levels: tuple[int, ...] = (2, 3)) -> list[Heading]:
    """Collect headings of the given levels in document order.

    Args:
        markdown: Markdown source
        levels: Heading levels to keep (default h2 and h3)

    Returns:
        List of headings with slug ids
    """
    headings: list[Heading] = []
    fence: str | None = None

    for line in markdown.splitlines():
        fence_match = _FENCE_RE.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker[0] * 3
            elif marker.startswith(fence):
                fence = None
            continue
        if fence is not None:
            continue

        match = _HEADING_RE.match(line)
        if not match:
            continue
        level = len(match.group(1))
        if level not in levels:
            continue
        text = _INLINE_MARKUP_RE.sub("", match.group(2)).strip()
        headings.append(Heading(id=slugify(text), text=text, level=level))

    return headings
