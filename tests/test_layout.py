"""
Unit tests for control point layout.
These tests don't require KiCad to be running.
"""
import pytest
from subminitube.core.models import Orientation, Point
from subminitube.core.layout import (
    layout_control_points,
    lead_step,
    collapsed_indices,
)

SPACING = 20
ANCHOR = Point(100, 100)

DIRECTIONS = {
    Orientation.DEFAULT: (0, 1),
    Orientation.ROT_90: (-1, 0),
    Orientation.ROT_180: (0, -1),
    Orientation.ROT_270: (1, 0),
}


class TestLeadStep:
    """Tests for the per-orientation lead offset"""

    @pytest.mark.parametrize("orientation", list(Orientation))
    def test_step_direction(self, orientation):
        """Step points down, left, up, right for 0, 90, 180, 270"""
        ux, uy = DIRECTIONS[orientation]
        assert lead_step(orientation, SPACING) == (ux * SPACING, uy * SPACING)

    def test_invalid_orientation(self):
        """Anything outside the enum is a fatal configuration error"""
        with pytest.raises(ValueError, match="Unexpected orientation"):
            lead_step(45, SPACING)


class TestLayoutInvariants:
    """Invariants that hold for every orientation, fold state and pin count"""

    @pytest.mark.parametrize("orientation", list(Orientation))
    @pytest.mark.parametrize("folded", [False, True])
    @pytest.mark.parametrize("pin_count", range(3, 11))
    def test_count_and_anchor(self, orientation, folded, pin_count):
        """Point count equals pin count and point 0 is the anchor"""
        points = layout_control_points(ANCHOR, orientation, folded, pin_count, SPACING)

        assert len(points) == pin_count
        assert points[0] == ANCHOR

    @pytest.mark.parametrize("orientation", list(Orientation))
    @pytest.mark.parametrize("pin_count", range(3, 11))
    def test_folded_chain(self, orientation, pin_count):
        """Folded point i is exactly i spacing units from the anchor"""
        points = layout_control_points(ANCHOR, orientation, True, pin_count, SPACING)
        ux, uy = DIRECTIONS[orientation]

        for i, point in enumerate(points):
            assert point == Point(ANCHOR.x + i * ux * SPACING, ANCHOR.y + i * uy * SPACING)

    @pytest.mark.parametrize("orientation", list(Orientation))
    @pytest.mark.parametrize("pin_count", range(4, 11))
    def test_unfolded_extra_leads_stay_on_anchor(self, orientation, pin_count):
        """Unfolded layout only separates the first three leads"""
        points = layout_control_points(ANCHOR, orientation, False, pin_count, SPACING)
        ux, uy = DIRECTIONS[orientation]

        assert points[1] == Point(ANCHOR.x + ux * SPACING, ANCHOR.y + uy * SPACING)
        assert points[2] == Point(ANCHOR.x + 2 * ux * SPACING, ANCHOR.y + 2 * uy * SPACING)
        for point in points[3:]:
            assert point == ANCHOR


class TestLayoutExamples:
    """End-to-end layout examples"""

    def test_unfolded_eight_pins_default(self):
        """0°, unfolded, 8 pins: two leads below the anchor, rest collapsed"""
        points = layout_control_points(ANCHOR, Orientation.DEFAULT, False, 8, SPACING)

        assert points[1] == Point(100, 120)
        assert points[2] == Point(100, 140)
        assert all(p == ANCHOR for p in points[3:])

    def test_folded_four_pins_rotated(self):
        """90°, folded, 4 pins: chain to the left"""
        points = layout_control_points(ANCHOR, Orientation.ROT_90, True, 4, SPACING)

        assert points == (Point(100, 100), Point(80, 100), Point(60, 100), Point(40, 100))

    def test_layout_returns_fresh_tuple(self):
        """Layouts are immutable tuples, never shared lists"""
        points = layout_control_points(ANCHOR, Orientation.DEFAULT, True, 3, SPACING)
        assert isinstance(points, tuple)

    def test_invalid_orientation(self):
        with pytest.raises(ValueError):
            layout_control_points(ANCHOR, "sideways", True, 3, SPACING)


class TestCollapsedIndices:
    """Tests for spotting leads stacked on the anchor"""

    def test_unfolded_collapsed(self):
        points = layout_control_points(ANCHOR, Orientation.DEFAULT, False, 6, SPACING)
        assert collapsed_indices(points) == (3, 4, 5)

    def test_folded_none_collapsed(self):
        points = layout_control_points(ANCHOR, Orientation.DEFAULT, True, 6, SPACING)
        assert collapsed_indices(points) == ()

    def test_empty(self):
        assert collapsed_indices([]) == ()
