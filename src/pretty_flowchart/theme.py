from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

# ============================================================================
# Types
# ============================================================================


@dataclass(slots=True)
class DiagramColors:
    """Diagram color configuration.

    Required: bg + fg. Everything else is derived from those two unless given.
    Link strokes come from the links themselves, not from the theme.
    """

    bg: str
    fg: str
    accent: str | None = None
    muted: str | None = None
    surface: str | None = None
    border: str | None = None


# ============================================================================
# Defaults
# ============================================================================

DEFAULTS = {"bg": "#FFFFFF", "fg": "#27272A"}

# color-mix() weights for derived CSS variables
MIX = {
    "text_muted": 40,
    "node_fill": 6,
    "node_stroke": 25,
}

# ============================================================================
# Well-known theme palettes
# ============================================================================

THEMES: dict[str, DiagramColors] = {
    "zinc-light": DiagramColors(bg="#FFFFFF", fg="#27272A"),
    "zinc-dark": DiagramColors(bg="#18181B", fg="#FAFAFA"),
    # Matches the classic dark flowchart look: grey boxes on charcoal
    "graphite": DiagramColors(
        bg="#222222", fg="#EEEEEE",
        accent="#2196f3", muted="#888888", surface="#444444", border="#333333",
    ),
    "tokyo-night": DiagramColors(
        bg="#1a1b26", fg="#a9b1d6", accent="#7aa2f7", muted="#565f89",
    ),
    "nord": DiagramColors(
        bg="#2e3440", fg="#d8dee9", accent="#88c0d0", muted="#616e88",
    ),
    "github-light": DiagramColors(
        bg="#ffffff", fg="#1f2328", accent="#0969da", muted="#59636e",
    ),
    "github-dark": DiagramColors(
        bg="#0d1117", fg="#e6edf3", accent="#4493f8", muted="#9198a1",
    ),
}


def resolve_theme(name: str) -> DiagramColors:
    """Look up a palette by name, raising ValueError for unknown names."""
    try:
        return THEMES[name]
    except KeyError:
        known = ", ".join(sorted(THEMES))
        raise ValueError(f"Unknown theme {name!r} (expected one of: {known})") from None


# ============================================================================
# SVG style block
# ============================================================================


def build_style_block(font: str) -> str:
    """Build the CSS variable derivation rules for the SVG <style> block."""
    font_import = (
        f"@import url('https://fonts.googleapis.com/css2?family={quote(font)}"
        f":wght@400;500;600&amp;display=swap');"
    )

    derived_vars = f"""
    /* Derived from --bg and --fg (overridable via --muted, --surface, --border) */
    --_text:          var(--fg);
    --_text-muted:    var(--muted, color-mix(in srgb, var(--fg) {MIX["text_muted"]}%, var(--bg)));
    --_node-fill:     var(--surface, color-mix(in srgb, var(--fg) {MIX["node_fill"]}%, var(--bg)));
    --_node-stroke:   var(--border, color-mix(in srgb, var(--fg) {MIX["node_stroke"]}%, var(--bg)));"""

    lines = [
        "<style>",
        f"  {font_import}",
        f"  text {{ font-family: '{font}', system-ui, sans-serif; }}",
        "  .fc-link { pointer-events: stroke; cursor: pointer; transition: filter 0.2s; }",
        "  .fc-node { pointer-events: auto; }",
        f"  svg {{{derived_vars}",
        "  }",
        "</style>",
    ]
    return "\n".join(lines)


def svg_open_tag(
    min_x: str,
    min_y: str,
    width: str,
    height: str,
    colors: DiagramColors,
    transparent: bool = False,
) -> str:
    """Build the SVG opening tag with CSS variables set as inline styles."""
    vars_parts = [
        f"--bg:{colors.bg}",
        f"--fg:{colors.fg}",
    ]
    if colors.accent:
        vars_parts.append(f"--accent:{colors.accent}")
    if colors.muted:
        vars_parts.append(f"--muted:{colors.muted}")
    if colors.surface:
        vars_parts.append(f"--surface:{colors.surface}")
    if colors.border:
        vars_parts.append(f"--border:{colors.border}")

    vars_str = ";".join(vars_parts)
    bg_style = "" if transparent else ";background:var(--bg)"

    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{min_x} {min_y} {width} {height}" '
        f'width="{width}" height="{height}" style="{vars_str}{bg_style}">'
    )
