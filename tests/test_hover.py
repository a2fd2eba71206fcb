"""Tests for HoverState and the per-link hover override."""
from __future__ import annotations

from pretty_flowchart.hover import HoverOverride, HoverState, hover_override
from pretty_flowchart.styles import HOVER_GLOW


class TestHoverOverride:
    def test_hovered_link_gets_gradient_and_glow(self):
        assert hover_override("l1", "l1") == HoverOverride(
            stroke="url(#flow-gradient)", glow=HOVER_GLOW
        )

    def test_other_links_are_untouched(self):
        assert hover_override("l2", "l1") is None

    def test_nothing_hovered(self):
        assert hover_override("l1", None) is None


class TestHoverState:
    def test_starts_empty(self):
        state = HoverState()
        assert state.link_id is None
        assert not state.is_hovered("l1")

    def test_set_and_clear(self):
        state = HoverState()
        state.set("l1")
        assert state.link_id == "l1"
        assert state.is_hovered("l1")
        assert not state.is_hovered("l2")
        state.clear()
        assert state.link_id is None

    def test_listeners_fire_on_change_only(self):
        seen: list[str | None] = []
        state = HoverState()
        state.subscribe(seen.append)

        state.set("l1")
        state.set("l1")
        state.set("l2")
        state.clear()
        state.clear()

        assert seen == ["l1", "l2", None]

    def test_unsubscribe(self):
        seen: list[str | None] = []
        state = HoverState()
        unsubscribe = state.subscribe(seen.append)
        state.set("l1")
        unsubscribe()
        state.set("l2")
        unsubscribe()
        assert seen == ["l1"]

    def test_instances_are_independent(self):
        a = HoverState()
        b = HoverState()
        a.set("l1")
        assert b.link_id is None
