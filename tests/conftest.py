"""Shared test fixtures for the docnav test suite."""

from __future__ import annotations

import itertools
from collections.abc import Callable

import pytest

from docnav.models.outline import HeadingRecord


class FakeScrollSource:
    """In-memory scroll container: tests move it with ``scroll()``."""

    def __init__(self, scroll_top: float = 0.0) -> None:
        self.scroll_top = scroll_top
        self.listeners: dict[int, Callable[[float], None]] = {}
        self.scroll_calls: list[tuple[float, str]] = []
        self._tokens = itertools.count(1)

    def subscribe(self, callback: Callable[[float], None]) -> int:
        token = next(self._tokens)
        self.listeners[token] = callback
        return token

    def unsubscribe(self, token: int) -> None:
        self.listeners.pop(token, None)

    def scroll(self, scroll_top: float) -> None:
        self.scroll_top = scroll_top
        for callback in list(self.listeners.values()):
            callback(scroll_top)

    def scroll_to(self, top: float, behavior: str) -> None:
        self.scroll_calls.append((top, behavior))
        self.scroll(top)


class ManualFrameScheduler:
    """Queues frame callbacks until the test calls ``tick()``."""

    def __init__(self) -> None:
        self.pending: dict[int, Callable[[], None]] = {}
        self.requested = 0
        self._handles = itertools.count(1)

    def request_frame(self, callback: Callable[[], None]) -> int:
        handle = next(self._handles)
        self.pending[handle] = callback
        self.requested += 1
        return handle

    def cancel_frame(self, handle: int) -> None:
        self.pending.pop(handle, None)

    def tick(self) -> None:
        callbacks = list(self.pending.values())
        self.pending.clear()
        for callback in callbacks:
            callback()


def make_records(*headings: tuple[int, str]) -> list[HeadingRecord]:
    """Records with ids derived naively from the text (no collision handling)."""
    return [
        HeadingRecord(level=level, text=text, id=text.lower(), source_index=index)
        for index, (level, text) in enumerate(headings)
    ]


@pytest.fixture()
def scroll_source() -> FakeScrollSource:
    return FakeScrollSource()


@pytest.fixture()
def frames() -> ManualFrameScheduler:
    return ManualFrameScheduler()


@pytest.fixture()
def skipped_level_records() -> list[HeadingRecord]:
    """Intro/Background/Goals/Impl/Arch: Arch (h3) sits directly under Impl (h1)."""
    return make_records(
        (1, "Intro"),
        (2, "Background"),
        (2, "Goals"),
        (1, "Impl"),
        (3, "Arch"),
    )


@pytest.fixture()
def abc_records() -> list[HeadingRecord]:
    return make_records((1, "a"), (2, "b"), (2, "c"))
