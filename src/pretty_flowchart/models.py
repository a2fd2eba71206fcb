"""
Graph data model for flowcharts.

Nodes and links are pydantic models so that snapshots can be exported to and
imported from plain dicts/JSON. Field names are snake_case in Python and
camelCase on the wire (``strokeWidth``, ``markerEnd``); both spellings are
accepted on input.

Both models are generic over an opaque ``props`` payload that the engine
carries around but never inspects.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .types import Rect

PropsT = TypeVar("PropsT")


class NodeType(str, Enum):
    """Logical node kinds (semantic meaning, not visual shape)."""
    INPUT = "input"
    PROCESS = "process"
    DECISION = "decision"
    OUTPUT = "output"


class LinkType(str, Enum):
    """Link kinds; non-default kinds force a stroke colour."""
    DEFAULT = "default"
    DASHED = "dashed"
    HIGHLIGHTED = "highlighted"


class MarkerType(str, Enum):
    """End-of-line marker shapes."""
    ARROW = "arrow"
    CIRCLE = "circle"
    SQUARE = "square"


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Size(_Model):
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class Position(_Model):
    x: float = 0
    y: float = 0


class Node(_Model, Generic[PropsT]):
    """A box in the flowchart."""
    id: str
    type: NodeType = NodeType.PROCESS
    label: str = ""
    size: Size
    position: Optional[Position] = None  # None renders at the origin
    props: Optional[PropsT] = None

    @property
    def origin(self) -> Position:
        """Top-left corner, defaulting to (0, 0) when unplaced."""
        return self.position if self.position is not None else Position()

    def rect(self) -> Rect:
        """Get the bounding box as a geometry rect."""
        origin = self.origin
        return Rect(x=origin.x, y=origin.y, width=self.size.width, height=self.size.height)

    def center(self) -> tuple[float, float]:
        """Get the center point of the node."""
        origin = self.origin
        return (origin.x + self.size.width / 2, origin.y + self.size.height / 2)


class LinkStyle(_Model):
    """Per-link stroke settings. Unset fields fall back to composition defaults."""
    stroke: Optional[str] = None
    stroke_width: Optional[float] = Field(default=None, gt=0)
    dash: Optional[str] = None


class MarkerEnd(_Model):
    type: MarkerType = MarkerType.ARROW


class Link(_Model, Generic[PropsT]):
    """
    A directed connector between two nodes.

    Uses `source` and `target` node ids. Whether they resolve is checked by
    the store on insertion, not here.
    """
    id: str
    source: str
    target: str
    type: LinkType = LinkType.DEFAULT
    label: str = ""
    style: LinkStyle = Field(default_factory=LinkStyle)
    marker_end: Optional[MarkerEnd] = None
    props: Optional[PropsT] = None


class GraphSnapshot(_Model):
    """
    A flat copy of a graph's nodes and links.

    This is what gets exported from and imported into a GraphStore. Links may
    reference node ids that are not in `nodes`.
    """
    nodes: list[Node] = Field(default_factory=list)
    links: list[Link] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "GraphSnapshot":
        return cls.model_validate_json(text)
