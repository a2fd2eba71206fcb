"""Tests for the pydantic graph models -- validation, defaults and aliases."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from pretty_flowchart.models import (
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
from pretty_flowchart.types import Rect


# ============================================================================
# Node
# ============================================================================


class TestNode:
    def test_defaults_to_process_type_and_empty_label(self):
        node = Node(id="A", size=Size(width=100, height=40))
        assert node.type == NodeType.PROCESS
        assert node.label == ""
        assert node.position is None
        assert node.props is None

    def test_unplaced_node_sits_at_the_origin(self):
        node = Node(id="A", size=Size(width=100, height=40))
        assert node.origin == Position(x=0, y=0)
        assert node.rect() == Rect(x=0, y=0, width=100, height=40)

    def test_rect_and_center_follow_position(self):
        node = Node(id="A", size=Size(width=100, height=40), position=Position(x=300, y=10))
        assert node.rect() == Rect(x=300, y=10, width=100, height=40)
        assert node.center() == (350, 30)

    def test_accepts_plain_dicts_for_nested_fields(self):
        node = Node(id="A", type="decision", size={"width": 80, "height": 80})
        assert node.type == NodeType.DECISION
        assert node.size.width == 80

    def test_rejects_non_positive_sizes(self):
        with pytest.raises(ValidationError):
            Size(width=0, height=40)
        with pytest.raises(ValidationError):
            Size(width=100, height=-1)

    def test_rejects_unknown_node_types(self):
        with pytest.raises(ValidationError):
            Node(id="A", type="cloud", size=Size(width=10, height=10))

    def test_carries_an_opaque_props_payload(self):
        node = Node[dict](id="A", size=Size(width=10, height=10), props={"color": "#4caf50"})
        assert node.props == {"color": "#4caf50"}


# ============================================================================
# Link
# ============================================================================


class TestLink:
    def test_defaults(self):
        link = Link(id="l1", source="A", target="B")
        assert link.type == LinkType.DEFAULT
        assert link.style == LinkStyle()
        assert link.marker_end is None

    def test_accepts_camel_case_aliases(self):
        link = Link.model_validate({
            "id": "l1",
            "source": "A",
            "target": "B",
            "style": {"stroke": "red", "strokeWidth": 3},
            "markerEnd": {"type": "circle"},
        })
        assert link.style.stroke_width == 3
        assert link.marker_end == MarkerEnd(type=MarkerType.CIRCLE)

    def test_accepts_snake_case_names(self):
        link = Link(id="l1", source="A", target="B", marker_end=MarkerEnd(type="square"))
        assert link.marker_end.type == MarkerType.SQUARE

    def test_rejects_non_positive_stroke_width(self):
        with pytest.raises(ValidationError):
            LinkStyle(stroke_width=0)

    def test_does_not_check_endpoints(self):
        link = Link(id="l1", source="nowhere", target="nowhere-else")
        assert link.source == "nowhere"


# ============================================================================
# GraphSnapshot
# ============================================================================


class TestGraphSnapshot:
    def test_to_dict_uses_camel_case_and_enum_values(self):
        snapshot = GraphSnapshot(
            nodes=[Node(id="A", size=Size(width=100, height=40))],
            links=[Link(
                id="l1", source="A", target="B",
                style=LinkStyle(stroke_width=2.5),
                marker_end=MarkerEnd(),
            )],
        )
        data = snapshot.to_dict()
        assert data["nodes"][0]["type"] == "process"
        assert "position" not in data["nodes"][0]
        assert data["links"][0]["style"] == {"strokeWidth": 2.5}
        assert data["links"][0]["markerEnd"] == {"type": "arrow"}

    def test_json_round_trip(self):
        snapshot = GraphSnapshot(
            nodes=[Node(id="A", label="Start", size=Size(width=100, height=40), position=Position(x=5, y=6))],
            links=[Link(id="l1", source="A", target="ghost", type="dashed")],
        )
        assert GraphSnapshot.from_json(snapshot.to_json()).to_dict() == snapshot.to_dict()

    def test_empty_snapshot(self):
        assert GraphSnapshot().to_dict() == {"nodes": [], "links": []}
