"""Heading extraction.

Single read-only pass over a document, returning h1–h6 headings in document
order with their level and plain text. Invalid input is not an error: it
yields an empty list so the caller simply gets no outline.
"""

from __future__ import annotations

import structlog

from docnav.document import HtmlDocument
from docnav.models.outline import RawHeading
from docnav.protocols import DocumentProtocol

log = structlog.get_logger()


def as_document(source: object) -> DocumentProtocol | None:
    """Coerce an HTML string or document handle; ``None`` when unusable."""
    if isinstance(source, str):
        if not source.strip():
            return None
        return HtmlDocument.from_html(source)
    if isinstance(source, DocumentProtocol):
        return source
    return None


def extract_headings(source: object) -> list[RawHeading]:
    """Return the document's headings in order, or ``[]`` for unusable input."""
    document = as_document(source)
    if document is None:
        log.debug("extract_skipped", reason="not_a_document", input_type=type(source).__name__)
        return []

    headings: list[RawHeading] = []
    for index, element in enumerate(document.iter_headings()):
        headings.append(
            RawHeading(
                level=document.heading_level(element),
                text=document.text_content(element),
                source_index=index,
            )
        )
    return headings
