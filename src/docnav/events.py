"""Observer hub for change notifications.

``subscribe(callback) -> token`` / ``unsubscribe(token)``, decoupled from any
particular event-dispatch mechanism. A listener that raises is logged and
skipped; the remaining listeners still run and later publishes still reach
it.

Publishing from inside a listener does not nest: the value is queued and
delivered to every listener after the current value, so all listeners see the
same sequence and end on the latest value.
"""

from __future__ import annotations

import itertools
from collections import deque
from collections.abc import Callable
from typing import Generic, TypeVar

import structlog

log = structlog.get_logger()

T = TypeVar("T")


class EventChannel(Generic[T]):
    """Ordered set of listeners receiving each published value."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: dict[int, Callable[[T], None]] = {}
        self._tokens = itertools.count(1)
        self._queue: deque[T] = deque()
        self._publishing = False

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, callback: Callable[[T], None]) -> int:
        token = next(self._tokens)
        self._listeners[token] = callback
        return token

    def unsubscribe(self, token: int) -> None:
        """Remove a listener. Unknown tokens are ignored."""
        self._listeners.pop(token, None)

    def publish(self, value: T) -> None:
        self._queue.append(value)
        if self._publishing:
            return
        self._publishing = True
        try:
            while self._queue:
                self._deliver(self._queue.popleft())
        finally:
            self._queue.clear()
            self._publishing = False

    def _deliver(self, value: T) -> None:
        # Snapshot: listeners may unsubscribe themselves while being notified.
        for token, callback in list(self._listeners.items()):
            try:
                callback(value)
            except Exception:
                log.warning("listener_fault", channel=self.name, token=token, exc_info=True)

    def clear(self) -> None:
        self._listeners.clear()
