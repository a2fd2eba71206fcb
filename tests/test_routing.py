"""Tests for the path router -- control points, curve sampling and path data."""
from __future__ import annotations

import pytest

from pretty_flowchart.routing import (
    control_point,
    cubic_point,
    end_angle,
    fmt_num,
    path_data,
    route_link,
    split_cubic,
)
from pretty_flowchart.types import AttachPoint, Point


def approx_point(p: Point, x: float, y: float) -> bool:
    return p.x == pytest.approx(x) and p.y == pytest.approx(y)


# ============================================================================
# Control points
# ============================================================================


class TestControlPoint:
    @pytest.mark.parametrize(
        "direction,expected",
        [
            ("right", Point(x=140, y=20)),
            ("left", Point(x=60, y=20)),
            ("top", Point(x=100, y=-20)),
            ("bottom", Point(x=100, y=60)),
        ],
    )
    def test_displaces_outward_along_direction(self, direction, expected):
        assert control_point(100, 20, direction, 40) == expected


# ============================================================================
# Curve evaluation
# ============================================================================


class TestCubicPoint:
    p0 = Point(x=0, y=0)
    c1 = Point(x=0, y=100)
    c2 = Point(x=100, y=100)
    p3 = Point(x=100, y=0)

    def test_endpoints(self):
        assert cubic_point(self.p0, self.c1, self.c2, self.p3, 0) == self.p0
        assert cubic_point(self.p0, self.c1, self.c2, self.p3, 1) == self.p3

    def test_midpoint_of_symmetric_curve(self):
        mid = cubic_point(self.p0, self.c1, self.c2, self.p3, 0.5)
        assert approx_point(mid, 50, 75)


class TestSplitCubic:
    def test_halves_meet_at_the_sampled_point(self):
        p0, c1, c2, p3 = Point(0, 0), Point(40, 0), Point(60, 200), Point(100, 200)
        head, tail = split_cubic(p0, c1, c2, p3, 0.94)
        sample = cubic_point(p0, c1, c2, p3, 0.94)
        assert approx_point(head.end, sample.x, sample.y)
        assert head.start == p0
        assert tail.end == p3

    def test_head_traces_the_original_curve(self):
        p0, c1, c2, p3 = Point(0, 0), Point(40, 0), Point(60, 200), Point(100, 200)
        head, _ = split_cubic(p0, c1, c2, p3, 0.94)
        # head(s) == original(0.94 * s)
        for s in (0.25, 0.5, 0.75):
            on_head = cubic_point(head.start, head.control1, head.control2, head.end, s)
            on_curve = cubic_point(p0, c1, c2, p3, 0.94 * s)
            assert approx_point(on_head, on_curve.x, on_curve.y)


# ============================================================================
# Routing
# ============================================================================


class TestRouteLink:
    def test_horizontal_link(self):
        start = AttachPoint(x=100, y=20, direction="right")
        end = AttachPoint(x=300, y=20, direction="left")
        route = route_link(start, end)

        assert route.control1 == Point(x=140, y=20)
        assert route.control2 == Point(x=260, y=20)
        assert approx_point(route.sample, 291.97056, 20)
        assert approx_point(route.head.control1, 137.6, 20)
        assert approx_point(route.head.control2, 245.888, 20)
        assert route.tail.start == route.sample
        assert route.tail.end == Point(x=300, y=20)

    def test_sample_is_the_curve_at_t_094(self):
        start = AttachPoint(x=100, y=20, direction="right")
        end = AttachPoint(x=300, y=170, direction="left")
        route = route_link(start, end)
        expected = cubic_point(start.point, route.control1, route.control2, end.point, 0.94)
        assert approx_point(route.sample, expected.x, expected.y)

    def test_custom_offset_and_sample(self):
        start = AttachPoint(x=50, y=40, direction="bottom")
        end = AttachPoint(x=50, y=200, direction="top")
        route = route_link(start, end, offset=10, sample_t=0.5)
        assert route.control1 == Point(x=50, y=50)
        assert route.control2 == Point(x=50, y=190)
        assert approx_point(route.sample, 50, 120)

    def test_end_angle_follows_the_straight_tail(self):
        right = route_link(
            AttachPoint(x=100, y=20, direction="right"),
            AttachPoint(x=300, y=20, direction="left"),
        )
        down = route_link(
            AttachPoint(x=50, y=40, direction="bottom"),
            AttachPoint(x=50, y=200, direction="top"),
        )
        assert end_angle(right) == pytest.approx(0)
        assert end_angle(down) == pytest.approx(90)


# ============================================================================
# Path data
# ============================================================================


class TestPathData:
    def test_cubic_head_then_straight_tail(self):
        route = route_link(
            AttachPoint(x=100, y=20, direction="right"),
            AttachPoint(x=300, y=20, direction="left"),
        )
        assert path_data(route) == "M100,20 C137.6,20 245.888,20 291.971,20 L300,20"

    def test_fmt_num(self):
        assert fmt_num(100.0) == "100"
        assert fmt_num(0.1 + 0.2) == "0.3"
        assert fmt_num(-0.0001) == "0"
        assert fmt_num(-12.5) == "-12.5"
