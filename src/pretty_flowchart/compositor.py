from __future__ import annotations

import logging
import re
from typing import Any, Callable

from .attach import boundary_midpoints, resolve_link_endpoints
from .hover import HoverState, hover_override
from .models import GraphSnapshot, Link, LinkType, Node
from .routing import route_link
from .store import GraphStore
from .styles import DASH_PATTERNS, LINK_COLORS, ROUTING, STROKE_WIDTHS
from .types import (
    BoundaryMarkerPrimitive,
    ComposeOptions,
    DrawingPrimitive,
    MarkerDefPrimitive,
    NodePlacementPrimitive,
    PathPrimitive,
)

logger = logging.getLogger(__name__)

NodeRenderer = Callable[[Node], Any]

COMPOSE_DEFAULTS = {
    "stroke": LINK_COLORS["default"],
    "stroke_width": STROKE_WIDTHS["connector"],
    "dash": None,
    "control_offset": ROUTING["control_offset"],
    "marker_sample_t": ROUTING["marker_sample_t"],
    "boundary_markers": True,
}


# ============================================================================
# Main composition function
# ============================================================================


def compose_diagram(
    source: GraphStore | GraphSnapshot,
    node_renderer: NodeRenderer | None = None,
    hover: HoverState | str | None = None,
    options: ComposeOptions | None = None,
) -> list[DrawingPrimitive]:
    """Turn a graph into an ordered list of drawing primitives.

    Output order is marker definitions, link paths, node placements, then
    boundary markers. Links whose endpoints are not in the graph are left
    out. Nothing in ``source`` or ``hover`` is modified.
    """
    opts = _merge_options(options)
    hovered_link_id = hover.link_id if isinstance(hover, HoverState) else hover

    if isinstance(source, GraphStore):
        nodes, links = source.get_nodes(), source.get_links()
    else:
        nodes, links = source.nodes, source.links
    nodes_by_id = {node.id: node for node in nodes}

    markers: dict[tuple[str, str], MarkerDefPrimitive] = {}
    paths: list[PathPrimitive] = []
    for link in links:
        path = _compose_link(link, nodes_by_id, hovered_link_id, opts, markers)
        if path is not None:
            paths.append(path)

    placements: list[NodePlacementPrimitive] = []
    boundary: list[BoundaryMarkerPrimitive] = []
    for node in nodes_by_id.values():
        rect = node.rect()
        placements.append(NodePlacementPrimitive(
            node_id=node.id,
            x=rect.x,
            y=rect.y,
            width=rect.width,
            height=rect.height,
            content=node_renderer(node) if node_renderer else None,
        ))
        if opts["boundary_markers"]:
            for side, p in boundary_midpoints(rect).items():
                boundary.append(BoundaryMarkerPrimitive(x=p.x, y=p.y, node_id=node.id, side=side))

    return [*markers.values(), *paths, *placements, *boundary]


# ============================================================================
# Links
# ============================================================================


def _compose_link(
    link: Link,
    nodes_by_id: dict[str, Node],
    hovered_link_id: str | None,
    opts: dict,
    markers: dict[tuple[str, str], MarkerDefPrimitive],
) -> PathPrimitive | None:
    source = nodes_by_id.get(link.source)
    target = nodes_by_id.get(link.target)
    if source is None or target is None:
        logger.debug(
            "Skipping link %s: unresolved endpoint (%s -> %s)",
            link.id, link.source, link.target,
        )
        return None

    start, end = resolve_link_endpoints(source.rect(), target.rect())
    route = route_link(start, end, opts["control_offset"], opts["marker_sample_t"])

    stroke = link_stroke(link, opts["stroke"])
    marker_ref = None
    if link.marker_end is not None:
        shape = link.marker_end.type.value
        marker = markers.setdefault((shape, stroke), marker_def(shape, stroke))
        marker_ref = marker.id

    override = hover_override(link.id, hovered_link_id)

    return PathPrimitive(
        link_id=link.id,
        route=route,
        stroke=override.stroke if override else stroke,
        stroke_width=link.style.stroke_width or opts["stroke_width"],
        dash=link_dash(link, opts["dash"]),
        marker_ref=marker_ref,
        glow=override.glow if override else None,
    )


def link_stroke(link: Link, default: str = LINK_COLORS["default"]) -> str:
    """Effective stroke colour; link type beats the link's own style."""
    if link.type == LinkType.HIGHLIGHTED:
        return LINK_COLORS["highlighted"]
    if link.type == LinkType.DASHED:
        return LINK_COLORS["dashed"]
    return link.style.stroke or default


def link_dash(link: Link, default: str | None = None) -> str | None:
    if link.type == LinkType.DASHED:
        return DASH_PATTERNS["dashed"]
    return link.style.dash or default


def marker_def(shape: str, color: str) -> MarkerDefPrimitive:
    """Marker definition shared by every link with this shape and colour.

    Characters outside ``[0-9A-Za-z]`` are written as ``_<hex code point>_``,
    so distinct colours always get distinct ids.
    """
    slug = re.sub(r"[^0-9A-Za-z]", lambda m: f"_{ord(m.group()):x}_", color)
    return MarkerDefPrimitive(id=f"marker-{shape}-{slug}", color=color, shape=shape)


def _merge_options(options: ComposeOptions | None) -> dict:
    opts = dict(COMPOSE_DEFAULTS)
    if options:
        if options.stroke is not None:
            opts["stroke"] = options.stroke
        if options.stroke_width is not None:
            opts["stroke_width"] = options.stroke_width
        if options.dash is not None:
            opts["dash"] = options.dash
        if options.control_offset is not None:
            opts["control_offset"] = options.control_offset
        if options.marker_sample_t is not None:
            opts["marker_sample_t"] = options.marker_sample_t
        if options.boundary_markers is not None:
            opts["boundary_markers"] = options.boundary_markers
    return opts
