"""BeautifulSoup-backed implementation of DocumentProtocol.

Wraps HTML produced by the external Markdown renderer. Headings are found in
document order; text extraction inlines link content and drops all other
markup, working on a copy so the document itself is untouched.
"""

from __future__ import annotations

import copy
import re
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup, Tag

if TYPE_CHECKING:
    from collections.abc import Iterator

HEADING_TAGS: list[str] = ["h1", "h2", "h3", "h4", "h5", "h6"]

_WHITESPACE_RE = re.compile(r"\s+")


class HtmlDocument:
    """A parsed HTML fragment exposing heading access."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    @classmethod
    def from_html(cls, html: str) -> HtmlDocument:
        return cls(BeautifulSoup(html, "html.parser"))

    def iter_headings(self) -> Iterator[Tag]:
        yield from self._soup.find_all(HEADING_TAGS)

    def heading_level(self, element: Tag) -> int:
        return int(element.name[1])

    def text_content(self, element: Tag) -> str:
        clone = copy.copy(element)
        for link in clone.find_all("a"):
            link.replace_with(link.get_text())
        return _WHITESPACE_RE.sub(" ", clone.get_text()).strip()

    def assign_id(self, element: Tag, heading_id: str) -> None:
        element["id"] = heading_id

    def to_html(self) -> str:
        return str(self._soup)
