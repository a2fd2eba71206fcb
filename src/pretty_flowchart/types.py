from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

# ============================================================================
# Geometry -- plain coordinates and rectangles used by the diagram engine
# ============================================================================

Side = Literal["left", "right", "top", "bottom"]

SIDES: tuple[Side, ...] = ("top", "bottom", "left", "right")


@dataclass(slots=True)
class Point:
    x: float
    y: float


@dataclass(slots=True)
class Rect:
    """Axis-aligned box with a top-left origin."""

    x: float
    y: float
    width: float
    height: float

    @property
    def cx(self) -> float:
        return self.x + self.width / 2

    @property
    def cy(self) -> float:
        return self.y + self.height / 2


@dataclass(slots=True)
class AttachPoint:
    """Where a connector meets a node boundary, and which side it leaves from."""

    x: float
    y: float
    direction: Side

    @property
    def point(self) -> Point:
        return Point(x=self.x, y=self.y)


# ============================================================================
# Routed paths -- output of the path router
# ============================================================================


@dataclass(slots=True)
class CubicSegment:
    start: Point
    control1: Point
    control2: Point
    end: Point


@dataclass(slots=True)
class LineSegment:
    start: Point
    end: Point


@dataclass(slots=True)
class RoutedPath:
    """A connector curve: the full cubic plus its head/tail split at the sample."""

    start: AttachPoint
    end: AttachPoint
    control1: Point
    control2: Point
    sample: Point
    head: CubicSegment
    tail: LineSegment


# ============================================================================
# Drawing primitives -- framework-agnostic composition output
# ============================================================================


@dataclass(slots=True)
class PathPrimitive:
    link_id: str
    route: RoutedPath
    stroke: str
    stroke_width: float
    dash: str | None = None
    marker_ref: str | None = None
    glow: str | None = None
    kind: Literal["path"] = field(default="path", init=False)

    @property
    def hoverable(self) -> str:
        return self.link_id

    @property
    def points(self) -> list[Point]:
        return [self.route.start.point, self.route.sample, self.route.end.point]

    @property
    def control_points(self) -> list[Point]:
        return [self.route.control1, self.route.control2]


@dataclass(slots=True)
class MarkerDefPrimitive:
    id: str
    color: str
    shape: Literal["arrow", "circle", "square"] = "arrow"
    kind: Literal["marker-def"] = field(default="marker-def", init=False)


@dataclass(slots=True)
class NodePlacementPrimitive:
    node_id: str
    x: float
    y: float
    width: float
    height: float
    content: Any = None
    kind: Literal["node-placement"] = field(default="node-placement", init=False)


@dataclass(slots=True)
class BoundaryMarkerPrimitive:
    x: float
    y: float
    node_id: str | None = None
    side: Side | None = None
    kind: Literal["boundary-marker"] = field(default="boundary-marker", init=False)


DrawingPrimitive = Union[
    PathPrimitive,
    MarkerDefPrimitive,
    NodePlacementPrimitive,
    BoundaryMarkerPrimitive,
]


# ============================================================================
# Options -- user-facing configuration
# ============================================================================


@dataclass(slots=True)
class ComposeOptions:
    """Link style defaults and geometry knobs for a composition pass.

    A link's own style always wins over these values.
    """

    stroke: str | None = None
    stroke_width: float | None = None
    dash: str | None = None
    control_offset: float | None = None
    marker_sample_t: float | None = None
    boundary_markers: bool | None = None


@dataclass(slots=True)
class RenderOptions:
    bg: str | None = None
    fg: str | None = None
    accent: str | None = None
    muted: str | None = None
    surface: str | None = None
    border: str | None = None
    font: str | None = None
    padding: int | None = None
    transparent: bool | None = None
    theme: str | None = None
