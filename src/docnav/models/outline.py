from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field


class RawHeading(BaseModel):
    """A heading as found in the document, before an id is assigned."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(ge=1, le=6)
    text: str
    source_index: int = Field(ge=0)  # Position in document order, 0-based


class HeadingRecord(BaseModel):
    """A heading with its assigned anchor id."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(ge=1, le=6)
    text: str
    id: str
    source_index: int = Field(ge=0)


@dataclass
class OutlineNode:
    """One section of the outline forest.

    Every direct child has a strictly greater level than its parent, but not
    necessarily parent + 1: skipped levels are never filled in.
    """

    heading: HeadingRecord
    children: list[OutlineNode] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.heading.id

    @property
    def level(self) -> int:
        return self.heading.level

    @property
    def text(self) -> str:
        return self.heading.text


# Ordered roots. Rebuilt wholesale per content update, never patched.
OutlineForest = list[OutlineNode]


class OutlineStats(BaseModel):
    total_items: int = 0
    max_level: int = 0  # Deepest heading level present, 0 for an empty outline
    level_counts: dict[int, int] = {}


class RenderOptions(BaseModel):
    class_name: str = Field(default="toc", min_length=1)
    numbered: bool = False
    max_depth: int = Field(default=6, ge=1, le=6)
