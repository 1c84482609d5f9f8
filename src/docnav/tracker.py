"""Scroll position → active heading.

ScrollTracker has two states:
  idle      no scroll listener, no offset cache
  tracking  listening on the scroll source with a populated offset cache

Scroll notifications only record the latest position and request one frame;
every notification that arrives before the frame fires is coalesced into it.
On the frame the active heading is recomputed as the heading with the largest
offset ``o`` such that ``o <= scroll_top + threshold``. Listeners hear about a
change only when the active id actually differs from the previous one.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from docnav.config import TrackerSettings
from docnav.events import EventChannel
from docnav.models.tracking import ActiveState

if TYPE_CHECKING:
    from collections.abc import Callable

    from docnav.models.outline import HeadingRecord
    from docnav.protocols import FrameScheduler, ScrollSource

log = structlog.get_logger()


@dataclass(frozen=True)
class OffsetCache:
    """Heading offsets in ascending order, ties kept in document order."""

    ids: tuple[str, ...] = ()
    offsets: tuple[float, ...] = ()
    by_id: Mapping[str, float] = field(default_factory=dict)

    @classmethod
    def build(cls, records: list[HeadingRecord], offsets: Mapping[str, float]) -> OffsetCache:
        """Cache offsets for the headings that have one; others are skipped."""
        entries = sorted(
            (offsets[record.id], record.source_index, record.id)
            for record in records
            if record.id in offsets
        )
        return cls(
            ids=tuple(heading_id for _, _, heading_id in entries),
            offsets=tuple(offset for offset, _, _ in entries),
            by_id={heading_id: offset for offset, _, heading_id in entries},
        )

    def __len__(self) -> int:
        return len(self.ids)

    def __contains__(self, heading_id: object) -> bool:
        return heading_id in self.by_id


def classify_active(cache: OffsetCache, scroll_top: float, threshold: float) -> str | None:
    """Return the id of the last heading at or above ``scroll_top + threshold``."""
    index = bisect_right(cache.offsets, scroll_top + threshold)
    if index == 0:
        return None
    return cache.ids[index - 1]


class ScrollTracker:
    """Owns the active heading for one scroll container."""

    def __init__(
        self,
        source: ScrollSource,
        scheduler: FrameScheduler,
        settings: TrackerSettings | None = None,
    ) -> None:
        self.settings = settings or TrackerSettings()
        self.state = ActiveState()
        self._source = source
        self._scheduler = scheduler
        self._changes: EventChannel[str | None] = EventChannel("active_heading")
        self._records: list[HeadingRecord] = []
        self._cache = OffsetCache()
        self._viewport_height = 0.0
        self._listener_token: Hashable | None = None
        self._pending_frame: Hashable | None = None
        self._latest_scroll_top: float | None = None

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def tracking(self) -> bool:
        return self._listener_token is not None

    @property
    def active_id(self) -> str | None:
        return self.state.active_id

    @property
    def offsets(self) -> Mapping[str, float]:
        return self._cache.by_id

    @property
    def threshold(self) -> float:
        if self.settings.threshold is not None:
            return self.settings.threshold
        return self._viewport_height * self.settings.threshold_ratio

    def subscribe(self, callback: Callable[[str | None], None]) -> int:
        """Register for active-id changes; returns a token for unsubscribe."""
        return self._changes.subscribe(callback)

    def unsubscribe(self, token: int) -> None:
        self._changes.unsubscribe(token)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def attach(
        self,
        records: list[HeadingRecord],
        offsets: Mapping[str, float],
        *,
        viewport_height: float,
    ) -> None:
        """Start tracking a new document, tearing down any previous one first."""
        if self.tracking:
            self.detach()

        self._set_active(None)
        self._records = list(records)
        self._cache = OffsetCache.build(self._records, offsets)
        self._viewport_height = viewport_height
        self._listener_token = self._source.subscribe(self._on_scroll)
        log.debug(
            "tracker_attached",
            headings=len(self._cache),
            viewport_height=viewport_height,
            threshold=self.threshold,
        )
        self.recompute(self._source.scroll_top)

    def detach(self) -> None:
        """Stop listening and drop the offset cache. Safe to call when idle."""
        if self._listener_token is not None:
            self._source.unsubscribe(self._listener_token)
            self._listener_token = None
        if self._pending_frame is not None:
            self._scheduler.cancel_frame(self._pending_frame)
            self._pending_frame = None
        self._latest_scroll_top = None
        self._records = []
        self._cache = OffsetCache()
        log.debug("tracker_detached")

    def reset(self) -> None:
        """Detach and clear the active heading (content without an outline)."""
        self.detach()
        self._set_active(None)

    def invalidate_offsets(
        self,
        offsets: Mapping[str, float],
        *,
        viewport_height: float | None = None,
    ) -> None:
        """Replace cached offsets after a resize or reflow and recompute."""
        if not self.tracking:
            return
        self._cache = OffsetCache.build(self._records, offsets)
        if viewport_height is not None:
            self._viewport_height = viewport_height
        self.recompute(self._source.scroll_top)

    # ------------------------------------------------------------------
    # Active heading
    # ------------------------------------------------------------------

    def recompute(self, scroll_top: float) -> str | None:
        """Classify ``scroll_top`` immediately and publish if the id changed."""
        active_id = classify_active(self._cache, scroll_top, self.threshold)
        self._set_active(active_id)
        return active_id

    def activate(self, heading_id: str) -> None:
        """Highlight a heading right away, e.g. after a click."""
        if not self.tracking or heading_id not in self._cache:
            return
        self._set_active(heading_id)

    def _on_scroll(self, scroll_top: float) -> None:
        if not self.tracking:
            return
        self._latest_scroll_top = scroll_top
        if self._pending_frame is None:
            self._pending_frame = self._scheduler.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self._pending_frame = None
        if not self.tracking or self._latest_scroll_top is None:
            return
        self.recompute(self._latest_scroll_top)

    def _set_active(self, active_id: str | None) -> None:
        if active_id == self.state.active_id:
            return
        previous = self.state.active_id
        self.state.active_id = active_id
        log.debug("active_heading_changed", previous=previous, active=active_id)
        self._changes.publish(active_id)
