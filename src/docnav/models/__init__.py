from __future__ import annotations

from docnav.models.outline import (
    HeadingRecord,
    OutlineForest,
    OutlineNode,
    OutlineStats,
    RawHeading,
    RenderOptions,
)
from docnav.models.tracking import ActiveState, ScrollRequest

__all__ = [
    # outline
    "RawHeading",
    "HeadingRecord",
    "OutlineNode",
    "OutlineForest",
    "OutlineStats",
    "RenderOptions",
    # tracking
    "ActiveState",
    "ScrollRequest",
]
