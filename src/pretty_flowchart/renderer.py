from __future__ import annotations

from collections.abc import Iterable, Mapping

from .models import Node, NodeType
from .routing import fmt_num, path_data
from .styles import (
    ARROW_HEAD,
    BOUNDARY_MARKER,
    END_MARKER_SIZE,
    FLOW_GRADIENT,
    FONT_SIZES,
    FONT_WEIGHTS,
    NODE_PADDING,
    STROKE_WIDTHS,
    TEXT_BASELINE_SHIFT,
    estimate_text_width,
)
from .theme import DiagramColors, build_style_block, svg_open_tag
from .types import (
    BoundaryMarkerPrimitive,
    DrawingPrimitive,
    MarkerDefPrimitive,
    NodePlacementPrimitive,
    PathPrimitive,
)

# ============================================================================
# SVG renderer -- converts a drawing-primitive list into an SVG string.
#
# One possible host for the compositor output. Node placement content is
# expected to be SVG markup drawn in node-local coordinates (0,0 is the
# node's top-left corner).
# ============================================================================


def render_svg(
    primitives: Iterable[DrawingPrimitive],
    colors: DiagramColors,
    font: str = "Inter",
    transparent: bool = False,
    padding: float = 40,
) -> str:
    """Render composed primitives as an SVG string."""
    markers: list[MarkerDefPrimitive] = []
    paths: list[PathPrimitive] = []
    placements: list[NodePlacementPrimitive] = []
    boundary: list[BoundaryMarkerPrimitive] = []
    for prim in primitives:
        if prim.kind == "marker-def":
            markers.append(prim)
        elif prim.kind == "path":
            paths.append(prim)
        elif prim.kind == "node-placement":
            placements.append(prim)
        elif prim.kind == "boundary-marker":
            boundary.append(prim)

    min_x, min_y, width, height = _view_box(paths, placements, boundary, padding)

    parts: list[str] = []
    parts.append(svg_open_tag(min_x, min_y, width, height, colors, transparent))
    parts.append(build_style_block(font))
    parts.append("<defs>")
    parts.append(_flow_gradient_def(colors.accent or FLOW_GRADIENT["from"]))
    for marker in markers:
        parts.append(_render_marker_def(marker))
    parts.append("</defs>")

    # 1. Links, under the nodes
    for path in paths:
        parts.append(_render_path(path))

    # 2. Node chrome
    for placement in placements:
        parts.append(_render_placement(placement))

    # 3. Edge handles
    for marker in boundary:
        parts.append(_render_boundary_marker(marker))

    parts.append("</svg>")
    return "\n".join(parts)


# ============================================================================
# Bounds
# ============================================================================


def _view_box(
    paths: list[PathPrimitive],
    placements: list[NodePlacementPrimitive],
    boundary: list[BoundaryMarkerPrimitive],
    padding: float,
) -> tuple[str, str, str, str]:
    xs: list[float] = []
    ys: list[float] = []
    for p in placements:
        xs.extend((p.x, p.x + p.width))
        ys.extend((p.y, p.y + p.height))
    for path in paths:
        for pt in (*path.points, *path.control_points):
            xs.append(pt.x)
            ys.append(pt.y)
    r = BOUNDARY_MARKER["radius"]
    for m in boundary:
        xs.extend((m.x - r, m.x + r))
        ys.extend((m.y - r, m.y + r))

    if not xs:
        return "0", "0", fmt_num(padding * 2), fmt_num(padding * 2)

    min_x = min(xs) - padding
    min_y = min(ys) - padding
    width = max(xs) - min(xs) + padding * 2
    height = max(ys) - min(ys) + padding * 2
    return fmt_num(min_x), fmt_num(min_y), fmt_num(width), fmt_num(height)


# ============================================================================
# Definitions: hover gradient and end markers
# ============================================================================


def _flow_gradient_def(accent: str) -> str:
    a = escape_xml(accent)
    b = FLOW_GRADIENT["to"]
    dur = FLOW_GRADIENT["duration"]
    return (
        f'  <linearGradient id="{FLOW_GRADIENT["id"]}" x1="0" y1="0" x2="1" y2="0">\n'
        f'    <stop offset="0%" stop-color="{a}">\n'
        f'      <animate attributeName="stop-color" values="{a};{b};{a}" dur="{dur}" repeatCount="indefinite" />\n'
        f"    </stop>\n"
        f'    <stop offset="100%" stop-color="{b}">\n'
        f'      <animate attributeName="stop-color" values="{b};{a};{b}" dur="{dur}" repeatCount="indefinite" />\n'
        f"    </stop>\n"
        f"  </linearGradient>"
    )


def _render_marker_def(marker: MarkerDefPrimitive) -> str:
    color = escape_xml(marker.color)
    if marker.shape == "arrow":
        w = ARROW_HEAD["width"]
        h = ARROW_HEAD["height"]
        return (
            f'  <marker id="{marker.id}" markerWidth="{w}" markerHeight="{h}" '
            f'refX="{w}" refY="{fmt_num(h / 2)}" orient="auto" markerUnits="userSpaceOnUse">\n'
            f'    <polygon points="0 0, {w} {fmt_num(h / 2)}, 0 {h}" fill="{color}" />\n'
            f"  </marker>"
        )

    s = END_MARKER_SIZE
    if marker.shape == "circle":
        body = f'<circle cx="{fmt_num(s / 2)}" cy="{fmt_num(s / 2)}" r="{fmt_num(s / 2)}" fill="{color}" />'
    else:
        body = f'<rect x="0" y="0" width="{s}" height="{s}" fill="{color}" />'
    return (
        f'  <marker id="{marker.id}" markerWidth="{s}" markerHeight="{s}" '
        f'refX="{fmt_num(s / 2)}" refY="{fmt_num(s / 2)}" orient="auto" markerUnits="userSpaceOnUse">\n'
        f"    {body}\n"
        f"  </marker>"
    )


# ============================================================================
# Link rendering
# ============================================================================


def _render_path(path: PathPrimitive) -> str:
    dash = f' stroke-dasharray="{escape_xml(path.dash)}"' if path.dash else ""
    marker = f' marker-end="url(#{path.marker_ref})"' if path.marker_ref else ""
    glow = f' style="filter: {path.glow}"' if path.glow else ""
    return (
        f'<path class="fc-link" data-link-id="{escape_xml(path.link_id)}" '
        f'd="{path_data(path.route)}" fill="none" stroke="{escape_xml(path.stroke)}" '
        f'stroke-width="{fmt_num(path.stroke_width)}"{dash}{marker}{glow} />'
    )


# ============================================================================
# Node placement
# ============================================================================


def _render_placement(placement: NodePlacementPrimitive) -> str:
    content = placement.content
    if content is None:
        content = _render_box(placement.width, placement.height, 2, "var(--_node-stroke)")
    elif not isinstance(content, str):
        raise TypeError(
            f"Node {placement.node_id!r}: SVG renderer needs markup strings, "
            f"got {type(content).__name__}"
        )
    return (
        f'<g class="fc-node" data-node-id="{escape_xml(placement.node_id)}" '
        f'transform="translate({fmt_num(placement.x)},{fmt_num(placement.y)})">\n'
        f"{content}\n"
        f"</g>"
    )


def _render_boundary_marker(marker: BoundaryMarkerPrimitive) -> str:
    return (
        f'<circle cx="{fmt_num(marker.x)}" cy="{fmt_num(marker.y)}" r="{BOUNDARY_MARKER["radius"]}" '
        f'fill="var(--_node-stroke)" stroke="var(--_text-muted)" '
        f'stroke-width="{BOUNDARY_MARKER["stroke_width"]}" />'
    )


# ============================================================================
# Default node chrome
# ============================================================================


def render_node_chrome(node: Node) -> str:
    """Default node renderer: a shape per node type with a centered label.

    A ``color`` entry in mapping props overrides the border colour.
    """
    w = node.size.width
    h = node.size.height
    stroke = "var(--_node-stroke)"
    if isinstance(node.props, Mapping) and node.props.get("color"):
        stroke = escape_xml(str(node.props["color"]))

    if node.type == NodeType.DECISION:
        shape = _render_diamond(w, h, stroke)
    elif node.type == NodeType.INPUT:
        shape = _render_box(w, h, h / 2, stroke)
    elif node.type == NodeType.OUTPUT:
        shape = _render_box(w, h, 6, stroke)
    else:
        shape = _render_box(w, h, 2, stroke)

    if not node.label:
        return shape
    return f"{shape}\n{_render_label(node.label, w, h)}"


def _render_box(w: float, h: float, radius: float, stroke: str) -> str:
    return (
        f'<rect x="0" y="0" width="{fmt_num(w)}" height="{fmt_num(h)}" '
        f'rx="{fmt_num(radius)}" ry="{fmt_num(radius)}" fill="var(--_node-fill)" '
        f'stroke="{stroke}" stroke-width="{STROKE_WIDTHS["node_border"]}" />'
    )


def _render_diamond(w: float, h: float, stroke: str) -> str:
    cx = w / 2
    cy = h / 2
    points = f"{fmt_num(cx)},0 {fmt_num(w)},{fmt_num(cy)} {fmt_num(cx)},{fmt_num(h)} 0,{fmt_num(cy)}"
    return (
        f'<polygon points="{points}" fill="var(--_node-fill)" '
        f'stroke="{stroke}" stroke-width="{STROKE_WIDTHS["node_border"]}" />'
    )


def _render_label(label: str, w: float, h: float) -> str:
    text = fit_label(label, w - NODE_PADDING["horizontal"] * 2)
    return (
        f'<text x="{fmt_num(w / 2)}" y="{fmt_num(h / 2)}" text-anchor="middle" '
        f'dy="{TEXT_BASELINE_SHIFT}" font-size="{FONT_SIZES["node_label"]}" '
        f'font-weight="{FONT_WEIGHTS["node_label"]}" fill="var(--_text)">{escape_xml(text)}</text>'
    )


def fit_label(label: str, max_width: float) -> str:
    """Truncate ``label`` with an ellipsis so its estimated width fits."""
    size = FONT_SIZES["node_label"]
    weight = FONT_WEIGHTS["node_label"]
    if estimate_text_width(label, size, weight) <= max_width:
        return label
    text = label
    while text and estimate_text_width(text + "…", size, weight) > max_width:
        text = text[:-1]
    return text + "…" if text else ""


# ============================================================================
# Utilities
# ============================================================================


def escape_xml(text: str) -> str:
    """Escape special XML characters in text content."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )
