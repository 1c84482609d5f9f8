"""Outline generation and per-document navigation sessions.

``generate_outline`` runs extraction, id assignment, hierarchy building and
rendering as one synchronous pass. ``NavigationSession`` adds the live side:
every content update discards the previous outline, re-attaches the scroll
tracker to the new headings and resets the highlight.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from docnav.config import Settings
from docnav.extractor import as_document
from docnav.frames import AsyncioFrameScheduler
from docnav.hierarchy import build_outline, outline_stats
from docnav.models.outline import OutlineStats, RenderOptions
from docnav.navigation import Navigator
from docnav.renderer import render_outline
from docnav.slugs import SlugAssigner
from docnav.tracker import ScrollTracker

if TYPE_CHECKING:
    from docnav.models.outline import HeadingRecord, OutlineForest
    from docnav.protocols import DocumentProtocol, FrameScheduler, ScrollSource

log = structlog.get_logger()

OffsetsOrMeasure = Mapping[str, float] | Callable[[list["HeadingRecord"]], Mapping[str, float]]


@dataclass
class OutlineResult:
    """Everything one pass over a document produces."""

    records: list[HeadingRecord] = field(default_factory=list)
    forest: OutlineForest = field(default_factory=list)
    html: str = ""
    stats: OutlineStats = field(default_factory=OutlineStats)
    document: DocumentProtocol | None = None


def render_options_from(settings: Settings) -> RenderOptions:
    return RenderOptions(
        class_name=settings.outline.class_name,
        numbered=settings.outline.numbered,
        max_depth=settings.outline.max_depth,
    )


def generate_outline(
    source: object,
    settings: Settings | None = None,
    *,
    assigner: SlugAssigner | None = None,
) -> OutlineResult:
    """Build the outline for ``source`` (HTML string or document handle).

    Ids are written back onto the document's heading elements, so the
    returned ``document`` carries the anchors the outline links to.
    """
    settings = settings or Settings()
    document = as_document(source)
    if document is None:
        return OutlineResult()

    assigner = assigner or SlugAssigner(max_length=settings.outline.slug_max_length)
    records = assigner.assign_document(document)
    forest = build_outline(records, min_headings=settings.outline.min_headings)
    html = render_outline(forest, render_options_from(settings))
    stats = outline_stats(forest)

    log.info(
        "outline_generated",
        headings=len(records),
        roots=len(forest),
        max_level=stats.max_level,
    )
    return OutlineResult(
        records=records,
        forest=forest,
        html=html,
        stats=stats,
        document=document,
    )


class NavigationSession:
    """Outline, scroll tracking and click navigation for one document view."""

    def __init__(
        self,
        source: ScrollSource,
        *,
        scheduler: FrameScheduler | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.tracker = ScrollTracker(
            source,
            scheduler or AsyncioFrameScheduler(self.settings.tracker.frame_interval),
            self.settings.tracker,
        )
        self.navigator = Navigator(source, self.tracker, self.settings.navigation)
        self.result = OutlineResult()
        self._assigner = SlugAssigner(max_length=self.settings.outline.slug_max_length)

    @property
    def active_id(self) -> str | None:
        return self.tracker.active_id

    def update(
        self,
        document: object,
        offsets: OffsetsOrMeasure,
        *,
        viewport_height: float,
    ) -> OutlineResult:
        """Rebuild the outline for new content and restart tracking.

        ``offsets`` may be a callable receiving the new heading records, for
        hosts that can only measure layout once ids are assigned.
        """
        self.tracker.reset()
        self.result = generate_outline(document, self.settings, assigner=self._assigner)
        if not self.result.forest:
            return self.result

        measured = offsets(self.result.records) if callable(offsets) else offsets
        self.tracker.attach(self.result.records, measured, viewport_height=viewport_height)
        return self.result

    def relayout(self, offsets: Mapping[str, float], *, viewport_height: float | None = None) -> None:
        """Container resized or content reflowed: refresh cached offsets."""
        self.tracker.invalidate_offsets(offsets, viewport_height=viewport_height)

    def click(self, heading_id: str) -> None:
        self.navigator.handle_click(heading_id)

    def close(self) -> None:
        self.tracker.reset()
        self.result = OutlineResult()
