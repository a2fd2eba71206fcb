from __future__ import annotations

from .types import AttachPoint, Point, Rect, Side, SIDES

# ============================================================================
# Attach points -- where a connector meets a node's bounding box
# ============================================================================


def exit_direction(rect: Rect, other: Rect) -> Side:
    """Pick the side of ``rect`` facing ``other`` along the dominant axis.

    Ties, including identical centers, go to the vertical axis.
    """
    dx = other.cx - rect.cx
    dy = other.cy - rect.cy

    if abs(dx) > abs(dy):
        return "right" if dx > 0 else "left"
    return "bottom" if dy > 0 else "top"


def edge_midpoint(rect: Rect, side: Side) -> Point:
    """Center of one edge of the rect."""
    if side == "left":
        return Point(x=rect.x, y=rect.cy)
    if side == "right":
        return Point(x=rect.x + rect.width, y=rect.cy)
    if side == "top":
        return Point(x=rect.cx, y=rect.y)
    return Point(x=rect.cx, y=rect.y + rect.height)


def boundary_midpoints(rect: Rect) -> dict[Side, Point]:
    """All four edge midpoints, in top/bottom/left/right order."""
    return {side: edge_midpoint(rect, side) for side in SIDES}


def resolve_attach_point(rect: Rect, other: Rect) -> AttachPoint:
    direction = exit_direction(rect, other)
    p = edge_midpoint(rect, direction)
    return AttachPoint(x=p.x, y=p.y, direction=direction)


def resolve_link_endpoints(source: Rect, target: Rect) -> tuple[AttachPoint, AttachPoint]:
    """Attach points for both ends of a link.

    Each end is resolved toward the other on its own. Diagonally offset
    nodes therefore get an S-shaped connector between facing sides.
    """
    return resolve_attach_point(source, target), resolve_attach_point(target, source)
