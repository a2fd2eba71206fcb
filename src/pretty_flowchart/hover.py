from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .styles import FLOW_GRADIENT, HOVER_GLOW

# ============================================================================
# Hover state -- which link, if any, is highlighted
# ============================================================================

HoverListener = Callable[[Optional[str]], None]


@dataclass(slots=True, frozen=True)
class HoverOverride:
    stroke: str
    glow: str


def hover_override(link_id: str, hovered_link_id: str | None) -> HoverOverride | None:
    """Stroke/glow replacement for ``link_id``, or None when it is not hovered."""
    if hovered_link_id is None or link_id != hovered_link_id:
        return None
    return HoverOverride(stroke=f"url(#{FLOW_GRADIENT['id']})", glow=HOVER_GLOW)


class HoverState:
    """Hovered-link holder owned by the host.

    The host writes it from pointer events; the compositor only reads
    ``link_id``. Listeners fire on actual changes.
    """

    def __init__(self, link_id: str | None = None) -> None:
        self._link_id = link_id
        self._listeners: list[HoverListener] = []

    @property
    def link_id(self) -> str | None:
        return self._link_id

    def is_hovered(self, link_id: str) -> bool:
        return self._link_id is not None and self._link_id == link_id

    def set(self, link_id: str | None) -> None:
        if link_id == self._link_id:
            return
        self._link_id = link_id
        for listener in list(self._listeners):
            listener(link_id)

    def clear(self) -> None:
        self.set(None)

    def subscribe(self, listener: HoverListener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
