"""
Unit tests for the tube draw pass and palette icon.
These tests don't require KiCad to be running.
"""
import pytest
from subminitube.core.component import SubminiTube
from subminitube.core.drawing import (
    DrawText,
    FillOval,
    FillRegion,
    StrokeLine,
    StrokeOval,
    StrokeRegion,
)
from subminitube.core.models import (
    Color,
    ComponentState,
    Display,
    Orientation,
    Point,
    Rect,
    Theme,
    METAL_COLOR,
    SELECTION_COLOR,
    MAX_ALPHA,
)
from subminitube.core.render import (
    RenderContext,
    draw_icon,
    draw_tube,
    label_text,
    lead_end,
    points_clipped,
)


def folded_tube():
    tube = SubminiTube()
    tube.folded = True
    return tube


class TestLabelText:
    """Tests for label composition"""

    @pytest.mark.parametrize("display, expected", [
        (Display.NAME, "V1"),
        (Display.VALUE, "12AX7"),
        (Display.BOTH, "V1  12AX7"),
        (Display.NONE, ""),
    ])
    def test_display_modes(self, display, expected):
        assert label_text(display, "V1", "12AX7") == expected

    def test_missing_value(self):
        assert label_text(Display.VALUE, "V1", None) == ""


class TestLeadEnd:
    """Tests for folded lead end points"""

    @pytest.mark.parametrize("orientation, expected", [
        (Orientation.DEFAULT, (137, 100)),
        (Orientation.ROT_90, (100, 137)),
        (Orientation.ROT_180, (57, 100)),
        (Orientation.ROT_270, (100, 60)),
    ])
    def test_lead_end(self, orientation, expected):
        assert lead_end(Point(100, 100), orientation, 40, 7) == expected

    def test_invalid_orientation(self):
        with pytest.raises(ValueError):
            lead_end(Point(0, 0), None, 40, 7)


class TestClipping:
    """Tests for skipping tubes outside the visible area"""

    def test_no_clip(self):
        assert points_clipped([Point(0, 0)], None) is False

    def test_outside_clip(self):
        tube = SubminiTube()
        drawing = draw_tube(tube, RenderContext(clip=Rect(100, 100, 50, 50)))
        assert drawing.is_empty

    def test_inside_clip(self):
        tube = SubminiTube()
        drawing = draw_tube(tube, RenderContext(clip=Rect(-10, -10, 20, 20)))
        assert not drawing.is_empty

    def test_touching_edge_is_visible(self):
        """Control points on the clip boundary still draw"""
        assert points_clipped([Point(0, 0), Point(0, 40)], Rect(0, 40, 10, 10)) is False


class TestDrawUnfolded:
    """Tests for standing (unfolded) tubes"""

    def test_body_and_pins(self):
        """Body fill, one pin per control point, then the label"""
        drawing = draw_tube(SubminiTube())

        assert isinstance(drawing.elements[0], FillRegion)
        assert drawing.elements[0].color == Color(192, 192, 192)
        assert len(drawing.of_type(FillOval)) == 8
        assert len(drawing.of_type(StrokeOval)) == 8
        assert isinstance(drawing.elements[-1], DrawText)
        assert drawing.of_type(StrokeLine) == []

    def test_pin_geometry(self):
        drawing = draw_tube(SubminiTube())
        pin = drawing.of_type(FillOval)[1]
        assert (pin.x, pin.y, pin.width, pin.height) == (-3, 17, 6, 6)

    def test_outline_mode_hides_pins(self):
        drawing = draw_tube(SubminiTube(), RenderContext(outline_mode=True))

        assert drawing.of_type(FillOval) == []
        assert drawing.of_type(StrokeOval) == []
        assert drawing.elements[0].color.is_transparent

    def test_label_position(self):
        """Label is centered inside the body bounds"""
        label = draw_tube(SubminiTube()).of_type(DrawText)[0]
        assert label.text == "V1"
        assert label.position == (-8, 24)

    def test_no_label_when_display_none(self):
        tube = SubminiTube()
        tube.display = Display.NONE
        assert draw_tube(tube).of_type(DrawText) == []

    def test_drawing_extent(self):
        drawing = draw_tube(SubminiTube())
        assert drawing.origin == (-17, -20)
        assert drawing.width == 35
        assert drawing.height == 81


class TestDrawFolded:
    """Tests for folded tubes"""

    def test_two_strokes_per_lead(self):
        """Each lead is a border stroke followed by a thinner fill stroke"""
        lines = draw_tube(folded_tube()).of_type(StrokeLine)

        assert len(lines) == 16
        assert [line.width for line in lines[:2]] == [7, 5]
        assert lines[0].color == METAL_COLOR.darker()
        assert lines[1].color == METAL_COLOR

    def test_lead_extent(self):
        lines = draw_tube(folded_tube()).of_type(StrokeLine)
        assert lines[0].start == (0, 0)
        assert lines[0].end == (37, 0)
        assert lines[-1].start == (0, 140)

    def test_no_pins(self):
        assert draw_tube(folded_tube()).of_type(FillOval) == []

    def test_outline_selected(self):
        """Selected outline leads use the selection color with no fill"""
        context = RenderContext(component_state=ComponentState.SELECTED, outline_mode=True)
        lines = draw_tube(folded_tube(), context).of_type(StrokeLine)

        assert lines[0].color == SELECTION_COLOR
        assert lines[1].color.is_transparent

    def test_outline_uses_theme(self):
        theme = Theme(name="Dark", outline_color=Color(200, 200, 200))
        lines = draw_tube(folded_tube(), RenderContext(outline_mode=True, theme=theme)).of_type(StrokeLine)
        assert lines[0].color == Color(200, 200, 200)


class TestLabelColor:
    """Tests for label color selection"""

    def test_normal(self):
        label = draw_tube(SubminiTube()).of_type(DrawText)[0]
        assert label.color == Color(255, 255, 255)

    @pytest.mark.parametrize("state", [ComponentState.SELECTED, ComponentState.DRAGGING])
    def test_highlighted(self, state):
        label = draw_tube(SubminiTube(), RenderContext(component_state=state)).of_type(DrawText)[0]
        assert label.color == Color(255, 0, 0)

    def test_outline(self):
        label = draw_tube(SubminiTube(), RenderContext(outline_mode=True)).of_type(DrawText)[0]
        assert label.color == Color(0, 0, 0)


class TestOpacity:
    """Tests for component translucency"""

    def test_opaque_by_default(self):
        assert draw_tube(SubminiTube()).opacity == 1.0

    def test_translucent(self):
        tube = SubminiTube()
        tube.alpha = 63
        assert draw_tube(tube).opacity == pytest.approx(63 / MAX_ALPHA)

    def test_draw_does_not_mutate(self):
        """Drawing leaves configuration and control points untouched"""
        tube = SubminiTube()
        before = (tube.to_dict(), tube.control_points)
        draw_tube(tube, RenderContext(outline_mode=True))
        assert (tube.to_dict(), tube.control_points) == before


class TestIcon:
    """Tests for the palette icon"""

    def test_icon_elements(self):
        """Tab outline, body fill, body outline, three leads"""
        icon = draw_icon(32, 32)

        assert len(icon.elements) == 6
        assert isinstance(icon.elements[0], StrokeRegion)
        assert isinstance(icon.elements[1], FillRegion)
        assert isinstance(icon.elements[2], StrokeRegion)
        assert (icon.width, icon.height) == (32, 32)

    def test_icon_leads(self):
        lines = draw_icon(32, 32).of_type(StrokeLine)

        assert [line.start[0] for line in lines] == [16, 11, 21]
        for line in lines:
            assert line.start[1] == 27
            assert line.end[1] == 30
            assert line.width == 2
            assert line.color == METAL_COLOR

    def test_icon_tab_hole(self):
        tab = draw_icon(32, 32).elements[0].region
        assert len(tab.interiors) == 1
