from __future__ import annotations

# ============================================================================
# Font metrics -- character width estimates for Inter at different sizes.
# ============================================================================


def estimate_text_width(text: str, font_size: float, font_weight: int) -> float:
    """Average character width in px at the given font size and weight (proportional font)."""
    if font_weight >= 600:
        width_ratio = 0.58
    elif font_weight >= 500:
        width_ratio = 0.55
    else:
        width_ratio = 0.52
    return len(text) * font_size * width_ratio


FONT_SIZES = {
    "node_label": 14,
}

FONT_WEIGHTS = {
    "node_label": 500,
}

TEXT_BASELINE_SHIFT = "0.35em"

NODE_PADDING = {
    "horizontal": 20,
}

# ============================================================================
# Connector geometry
# ============================================================================

ROUTING = {
    # Distance from an attach point to its control point, along the exit direction
    "control_offset": 40,
    # Where the smooth head of a connector ends and its straight tail begins
    "marker_sample_t": 0.94,
}

# ============================================================================
# Link colours and strokes
# ============================================================================

LINK_COLORS = {
    "default": "#888",
    "highlighted": "#2196f3",
    "dashed": "#aaa",
}

DASH_PATTERNS = {
    "dashed": "8 4",
}

STROKE_WIDTHS = {
    "connector": 2,
    "node_border": 2,
}

# ============================================================================
# Hover effect
# ============================================================================

FLOW_GRADIENT = {
    "id": "flow-gradient",
    "from": "#2196f3",
    "to": "#21cbf3",
    "duration": "2s",
}

HOVER_GLOW = "drop-shadow(0 0 6px #2196f3)"

# ============================================================================
# Markers
# ============================================================================

ARROW_HEAD = {
    "width": 10,
    "height": 7,
}

END_MARKER_SIZE = 8

BOUNDARY_MARKER = {
    "radius": 3,
    "stroke_width": 2,
}
