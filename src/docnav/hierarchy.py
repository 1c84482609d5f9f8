"""Outline forest construction.

Single-pass stack algorithm: for each heading, close every open section at
the same or a deeper level, then attach the heading to whatever is still open
(or make it a root). A level-3 heading directly after a level-1 heading nests
under it; the missing level-2 is never synthesised.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

import structlog

from docnav.config import DEFAULT_MIN_HEADINGS
from docnav.models.outline import OutlineNode, OutlineStats

if TYPE_CHECKING:
    from collections.abc import Iterator

    from docnav.models.outline import HeadingRecord, OutlineForest

log = structlog.get_logger()


def build_outline(
    records: list[HeadingRecord],
    *,
    min_headings: int = DEFAULT_MIN_HEADINGS,
) -> OutlineForest:
    """Build the outline forest, or ``[]`` when there are too few headings."""
    if len(records) < min_headings:
        return []

    forest: OutlineForest = []
    stack: list[OutlineNode] = []

    for record in records:
        node = OutlineNode(heading=record)

        while stack and stack[-1].level >= record.level:
            stack.pop()

        if not stack:
            forest.append(node)
        elif stack[-1].level >= node.level:
            # Unreachable after the pop loop; keep the outline usable regardless.
            log.warning(
                "outline_build_defect",
                heading_id=record.id,
                level=record.level,
                parent_id=stack[-1].id,
                parent_level=stack[-1].level,
            )
            forest.append(node)
            stack.clear()
        else:
            stack[-1].children.append(node)

        stack.append(node)

    return forest


def iter_preorder(forest: OutlineForest) -> Iterator[tuple[int, OutlineNode]]:
    """Yield ``(depth, node)`` in document order; roots have depth 1."""
    pending: list[tuple[int, OutlineNode]] = [(1, node) for node in reversed(forest)]
    while pending:
        depth, node = pending.pop()
        yield depth, node
        pending.extend((depth + 1, child) for child in reversed(node.children))


def outline_stats(forest: OutlineForest) -> OutlineStats:
    """Count outline items per heading level."""
    counts: Counter[int] = Counter(node.level for _, node in iter_preorder(forest))
    return OutlineStats(
        total_items=sum(counts.values()),
        max_level=max(counts, default=0),
        level_counts=dict(sorted(counts.items())),
    )
