"""pretty-flowchart -- Flowchart diagram engine with direction-aware curved links."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .types import (
    AttachPoint,
    BoundaryMarkerPrimitive,
    ComposeOptions,
    DrawingPrimitive,
    MarkerDefPrimitive,
    NodePlacementPrimitive,
    PathPrimitive,
    Point,
    Rect,
    RenderOptions,
    RoutedPath,
)
from .models import (
    GraphSnapshot,
    Link,
    LinkStyle,
    LinkType,
    MarkerEnd,
    MarkerType,
    Node,
    NodeType,
    Position,
    Size,
)
from .store import GraphStore, ReferentialError
from .attach import resolve_attach_point, resolve_link_endpoints
from .routing import route_link, path_data
from .hover import HoverState, hover_override
from .compositor import NodeRenderer, compose_diagram
from .theme import DiagramColors, THEMES, DEFAULTS, resolve_theme
from .renderer import render_svg, render_node_chrome

__all__ = [
    "render_flowchart",
    "compose_diagram",
    "render_svg",
    "render_node_chrome",
    "GraphStore",
    "GraphSnapshot",
    "ReferentialError",
    "Node",
    "NodeType",
    "Link",
    "LinkType",
    "LinkStyle",
    "MarkerEnd",
    "MarkerType",
    "Position",
    "Size",
    "HoverState",
    "hover_override",
    "resolve_attach_point",
    "resolve_link_endpoints",
    "route_link",
    "path_data",
    "AttachPoint",
    "Point",
    "Rect",
    "RoutedPath",
    "DrawingPrimitive",
    "PathPrimitive",
    "MarkerDefPrimitive",
    "NodePlacementPrimitive",
    "BoundaryMarkerPrimitive",
    "ComposeOptions",
    "RenderOptions",
    "NodeRenderer",
    "DiagramColors",
    "THEMES",
    "DEFAULTS",
]


def _build_colors(options: RenderOptions) -> DiagramColors:
    """Build DiagramColors from render options, layered over a named theme."""
    base = resolve_theme(options.theme) if options.theme else DiagramColors(**DEFAULTS)
    return DiagramColors(
        bg=options.bg or base.bg,
        fg=options.fg or base.fg,
        accent=options.accent or base.accent,
        muted=options.muted or base.muted,
        surface=options.surface or base.surface,
        border=options.border or base.border,
    )


def render_flowchart(
    data: GraphStore | GraphSnapshot | Mapping[str, Any],
    node_renderer: NodeRenderer | None = None,
    hover: HoverState | str | None = None,
    options: RenderOptions | None = None,
    compose_options: ComposeOptions | None = None,
) -> str:
    """Render a flowchart graph to an SVG string.

    ``data`` may be a store, a snapshot, or a plain exported dict. Nodes are
    drawn with ``render_node_chrome`` unless another renderer is given.
    """
    if options is None:
        options = RenderOptions()
    if isinstance(data, Mapping):
        data = GraphSnapshot.model_validate(data)

    primitives = compose_diagram(
        data,
        node_renderer or render_node_chrome,
        hover=hover,
        options=compose_options,
    )
    return render_svg(
        primitives,
        _build_colors(options),
        font=options.font or "Inter",
        transparent=options.transparent or False,
        padding=options.padding if options.padding is not None else 40,
    )
