"""Anchor id generation for headings.

Ids are derived from heading text and made unique within one pass by
appending ``-1``, ``-2``, … in document order. The seen-set lives on the
assigner instance, so separate documents never share collision state.

Ids are always regenerated from scratch: an id already present on a heading
element is overwritten, which keeps repeated passes over unchanged content
identical.
"""

from __future__ import annotations

import re
import unicodedata
from typing import TYPE_CHECKING

import structlog

from docnav.config import DEFAULT_SLUG_MAX_LENGTH
from docnav.extractor import as_document, extract_headings
from docnav.models.outline import HeadingRecord

if TYPE_CHECKING:
    from docnav.models.outline import RawHeading

log = structlog.get_logger()

_ASCII_UPPER_RE = re.compile(r"[A-Z]+")
_SEPARATOR_RE = re.compile(r"[\s-]+")

_MIN_SLUG_LENGTH = 2


def _is_kept(char: str) -> bool:
    # Letters (with their combining marks), digits, whitespace and hyphen.
    if char == "-" or char.isspace():
        return True
    return unicodedata.category(char)[0] in "LMN"


def fallback_id(source_index: int) -> str:
    return f"heading-{source_index}"


def slugify(text: str, source_index: int, *, max_length: int = DEFAULT_SLUG_MAX_LENGTH) -> str:
    """Normalise heading text to a candidate id (not yet collision-checked)."""
    slug = _ASCII_UPPER_RE.sub(lambda m: m.group(0).lower(), text or "")
    slug = "".join(char for char in slug if _is_kept(char))
    slug = _SEPARATOR_RE.sub("-", slug).strip("-")
    slug = slug[:max_length].rstrip("-")
    if len(slug) < _MIN_SLUG_LENGTH:
        return fallback_id(source_index)
    return slug


class SlugAssigner:
    """Assigns unique ids to one document's headings per pass."""

    def __init__(self, *, max_length: int = DEFAULT_SLUG_MAX_LENGTH) -> None:
        self.max_length = max_length
        self._seen: set[str] = set()

    def reset(self) -> None:
        self._seen.clear()

    def unique(self, candidate: str) -> str:
        """Reserve ``candidate`` or the first free ``candidate-N``."""
        slug = candidate
        suffix = 0
        while slug in self._seen:
            suffix += 1
            slug = f"{candidate}-{suffix}"
        self._seen.add(slug)
        return slug

    def assign(self, headings: list[RawHeading]) -> list[HeadingRecord]:
        """Start a fresh pass and return one record per heading, in order."""
        self.reset()
        records = [
            HeadingRecord(
                level=heading.level,
                text=heading.text,
                id=self.unique(
                    slugify(heading.text, heading.source_index, max_length=self.max_length)
                ),
                source_index=heading.source_index,
            )
            for heading in headings
        ]
        log.debug("slugs_assigned", count=len(records))
        return records

    def assign_document(self, source: object) -> list[HeadingRecord]:
        """Extract, assign and write the ids back onto the heading elements."""
        document = as_document(source)
        if document is None:
            return []
        records = self.assign(extract_headings(document))
        for record, element in zip(records, document.iter_headings(), strict=True):
            document.assign_id(element, record.id)
        return records
