"""Click-to-scroll for rendered outline items.

Clicking an item scrolls the container so the heading's top sits
``top_offset`` pixels below the viewport top, then highlights the heading
without waiting for the scroll to settle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from docnav.config import DEFAULT_TOP_OFFSET, NavigationSettings
from docnav.models.tracking import ScrollRequest

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Literal

    from docnav.protocols import ScrollSource
    from docnav.tracker import ScrollTracker

log = structlog.get_logger()


def scroll_request(
    heading_id: str,
    offsets: Mapping[str, float],
    *,
    top_offset: float = DEFAULT_TOP_OFFSET,
    behavior: Literal["smooth", "auto"] = "smooth",
) -> ScrollRequest | None:
    """Return where to scroll for ``heading_id``, or ``None`` if it has no offset."""
    offset = offsets.get(heading_id)
    if offset is None:
        return None
    return ScrollRequest(
        target_id=heading_id,
        top=max(0.0, offset - top_offset),
        behavior=behavior,
    )


class Navigator:
    def __init__(
        self,
        source: ScrollSource,
        tracker: ScrollTracker,
        settings: NavigationSettings | None = None,
    ) -> None:
        self.settings = settings or NavigationSettings()
        self._source = source
        self._tracker = tracker

    def handle_click(self, heading_id: str) -> ScrollRequest | None:
        request = scroll_request(
            heading_id,
            self._tracker.offsets,
            top_offset=self.settings.top_offset,
            behavior=self.settings.behavior,
        )
        if request is None:
            log.info("navigation_target_missing", heading_id=heading_id)
            return None

        self._source.scroll_to(request.top, request.behavior)
        self._tracker.activate(heading_id)
        return request
