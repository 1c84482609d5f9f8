"""Protocol interfaces for swappable components.

The pipeline and the tracker reference these protocols, not concrete
implementations. This allows:
- Any parsed-markup representation to stand in for a live DOM tree
- Tests to drive scrolling and animation frames with in-memory fakes
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator
from typing import Protocol, runtime_checkable

ScrollCallback = Callable[[float], None]


@runtime_checkable
class DocumentProtocol(Protocol):
    """Read-only view over heading elements plus id assignment."""

    def iter_headings(self) -> Iterator[object]: ...

    def heading_level(self, element: object) -> int: ...

    def text_content(self, element: object) -> str: ...

    def assign_id(self, element: object, heading_id: str) -> None: ...


class ScrollSource(Protocol):
    """The scrollable container hosting the document."""

    @property
    def scroll_top(self) -> float: ...

    def subscribe(self, callback: ScrollCallback) -> Hashable: ...

    def unsubscribe(self, token: Hashable) -> None: ...

    def scroll_to(self, top: float, behavior: str) -> None: ...


class FrameScheduler(Protocol):
    """Runs a callback on the next animation-frame-equivalent tick."""

    def request_frame(self, callback: Callable[[], None]) -> Hashable: ...

    def cancel_frame(self, handle: Hashable) -> None: ...
