"""Animation-frame-equivalent scheduling on the asyncio event loop."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from docnav.config import DEFAULT_FRAME_INTERVAL

if TYPE_CHECKING:
    from collections.abc import Callable


class AsyncioFrameScheduler:
    """Runs each requested callback once, ``frame_interval`` seconds later.

    Must be used from a running event loop unless a loop is passed in.
    """

    def __init__(
        self,
        frame_interval: float = DEFAULT_FRAME_INTERVAL,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.frame_interval = frame_interval
        self._loop = loop

    def request_frame(self, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(self.frame_interval, callback)

    def cancel_frame(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()
