from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel


@dataclass
class ActiveState:
    """Currently highlighted heading. Written only by ScrollTracker."""

    active_id: str | None = None


class ScrollRequest(BaseModel):
    """Where the host should scroll to bring a heading into view."""

    target_id: str
    top: float
    behavior: Literal["smooth", "auto"] = "smooth"
