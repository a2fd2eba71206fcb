from __future__ import annotations

import math

from .styles import ROUTING
from .types import AttachPoint, CubicSegment, LineSegment, Point, RoutedPath, Side

# ============================================================================
# Path router -- direction-aware cubic connectors between attach points
#
# The curve leaves each attach point perpendicular to the node edge: its
# control point sits ``offset`` units outward along the exit direction.
# The curve is cut at t=0.94 and finished with a straight segment so an end
# marker with orient="auto" always follows a predictable final direction.
# ============================================================================

_OUTWARD: dict[Side, tuple[int, int]] = {
    "right": (1, 0),
    "left": (-1, 0),
    "top": (0, -1),
    "bottom": (0, 1),
}


def control_point(x: float, y: float, direction: Side, offset: float) -> Point:
    """Displace (x, y) outward along ``direction``."""
    ux, uy = _OUTWARD[direction]
    return Point(x=x + ux * offset, y=y + uy * offset)


def cubic_point(p0: Point, c1: Point, c2: Point, p3: Point, t: float) -> Point:
    """Evaluate the cubic Bezier at ``t``."""
    mt = 1 - t
    a = mt * mt * mt
    b = 3 * mt * mt * t
    c = 3 * mt * t * t
    d = t * t * t
    return Point(
        x=a * p0.x + b * c1.x + c * c2.x + d * p3.x,
        y=a * p0.y + b * c1.y + c * c2.y + d * p3.y,
    )


def _lerp(a: Point, b: Point, t: float) -> Point:
    return Point(x=a.x + (b.x - a.x) * t, y=a.y + (b.y - a.y) * t)


def split_cubic(
    p0: Point, c1: Point, c2: Point, p3: Point, t: float
) -> tuple[CubicSegment, CubicSegment]:
    """Split a cubic at ``t`` (de Casteljau). Both halves trace the original curve."""
    p01 = _lerp(p0, c1, t)
    p12 = _lerp(c1, c2, t)
    p23 = _lerp(c2, p3, t)
    p012 = _lerp(p01, p12, t)
    p123 = _lerp(p12, p23, t)
    mid = _lerp(p012, p123, t)
    return (
        CubicSegment(start=p0, control1=p01, control2=p012, end=mid),
        CubicSegment(start=mid, control1=p123, control2=p23, end=p3),
    )


def route_link(
    start: AttachPoint,
    end: AttachPoint,
    offset: float = ROUTING["control_offset"],
    sample_t: float = ROUTING["marker_sample_t"],
) -> RoutedPath:
    """Build the connector from ``start`` to ``end``."""
    p0 = start.point
    p3 = end.point
    c1 = control_point(start.x, start.y, start.direction, offset)
    c2 = control_point(end.x, end.y, end.direction, offset)

    head, _ = split_cubic(p0, c1, c2, p3, sample_t)

    return RoutedPath(
        start=start,
        end=end,
        control1=c1,
        control2=c2,
        sample=head.end,
        head=head,
        tail=LineSegment(start=head.end, end=p3),
    )


def end_angle(route: RoutedPath) -> float:
    """Angle of the straight tail in degrees (0 = pointing right, y down)."""
    dx = route.tail.end.x - route.tail.start.x
    dy = route.tail.end.y - route.tail.start.y
    return math.degrees(math.atan2(dy, dx))


# ============================================================================
# SVG path data
# ============================================================================


def path_data(route: RoutedPath) -> str:
    """``M x0,y0 C c1 c2 sample L x3,y3`` for the routed connector."""
    head = route.head
    return (
        f"M{_pt(head.start)} "
        f"C{_pt(head.control1)} {_pt(head.control2)} {_pt(head.end)} "
        f"L{_pt(route.tail.end)}"
    )


def _pt(p: Point) -> str:
    return f"{fmt_num(p.x)},{fmt_num(p.y)}"


def fmt_num(value: float) -> str:
    """Shortest fixed-point form with at most 3 decimals."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text
