"""Markdown → HTML through markdown-it-py's CommonMark preset.

The pipeline only ever sees the resulting HTML; this module exists so the CLI
can accept Markdown files directly.
"""

from __future__ import annotations

from markdown_it import MarkdownIt

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})

_md = MarkdownIt("commonmark")


def markdown_to_html(text: str) -> str:
    return _md.render(text)
