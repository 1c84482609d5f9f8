"""Outline forest → nested list markup.

Structural hooks consumed by the navigation UI:
- outer ``<ul class="{class_name}">``, nested ``<ul class="{class_name}-sub">``
- ``<li class="toc-item toc-level-{level}" data-level=… data-id=…>``
- ``<a class="toc-link" href="#{id}" data-id=…>`` for click-to-scroll
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from pydantic import ValidationError

from docnav.errors import DocNavError, ErrorCode
from docnav.models.outline import RenderOptions

if TYPE_CHECKING:
    from docnav.models.outline import OutlineForest, OutlineNode


def make_render_options(**kwargs: object) -> RenderOptions:
    """Validate caller-supplied options."""
    try:
        return RenderOptions.model_validate(kwargs)
    except ValidationError as exc:
        raise DocNavError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Use max_depth between 1 and 6 and a non-empty class name.",
        ) from exc


def render_outline(forest: OutlineForest, options: RenderOptions | None = None) -> str:
    """Render the forest; an empty forest renders as an empty string."""
    options = options or RenderOptions()
    if not forest:
        return ""
    parts: list[str] = []
    _render_level(forest, options, depth=1, out=parts)
    return "".join(parts)


def _render_level(
    nodes: list[OutlineNode],
    options: RenderOptions,
    *,
    depth: int,
    out: list[str],
) -> None:
    class_name = options.class_name if depth == 1 else f"{options.class_name}-sub"
    out.append(f'<ul class="{html.escape(class_name)}">')

    for position, node in enumerate(nodes, start=1):
        heading_id = html.escape(node.id)
        number = f"{position}. " if options.numbered else ""
        out.append(
            f'<li class="toc-item toc-level-{node.level}" '
            f'data-level="{node.level}" data-id="{heading_id}">'
            f'<a href="#{heading_id}" class="toc-link" data-id="{heading_id}">'
            f"{number}{html.escape(node.text)}</a>"
        )
        # Deeper nodes are dropped, not flattened into this level.
        if node.children and depth < options.max_depth:
            _render_level(node.children, options, depth=depth + 1, out=out)
        out.append("</li>")

    out.append("</ul>")
