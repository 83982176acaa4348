"""
Draw pass for the sub-mini tube and its palette icon.

Takes the control points and body geometry as they are and turns them
into drawing elements; it never changes the configuration.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .body import holed_rect_region, rect_region
from .component import SubminiTube
from .drawing import (
    DrawingElement,
    DrawText,
    FillOval,
    FillRegion,
    StrokeLine,
    StrokeOval,
    StrokeRegion,
    TubeDrawing,
)
from .models import (
    MAX_ALPHA,
    Color,
    ComponentState,
    Display,
    Font,
    Orientation,
    Point,
    Rect,
    Theme,
    TubeDefaults,
    DEFAULT_FONT,
    DEFAULT_THEME,
    DEFAULT_TUBE_DEFAULTS,
    LABEL_COLOR_SELECTED,
    METAL_COLOR,
    SELECTION_COLOR,
    TRANSPARENT_COLOR,
)
from .units import closest_odd

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderContext:
    """Host state consumed by the draw pass"""
    component_state: ComponentState = ComponentState.NORMAL
    outline_mode: bool = False
    theme: Theme = DEFAULT_THEME
    font: Font = DEFAULT_FONT
    clip: Optional[Rect] = None  # None: nothing is clipped

    @property
    def highlighted(self) -> bool:
        return self.component_state in (ComponentState.SELECTED, ComponentState.DRAGGING)


def label_text(display: Display, name: str, value: Optional[str]) -> str:
    """
    Compose the body label.

    Args:
        display: Which parts to show
        name: Instance name, e.g. "V1"
        value: Part value, e.g. "12AX7" (None is treated as empty)

    Returns:
        Label string; name and value are joined with two spaces
    """
    value = value or ""
    match display:
        case Display.NAME:
            return name
        case Display.VALUE:
            return value
        case Display.BOTH:
            return f"{name}  {value}"
        case Display.NONE:
            return ""
        case _:
            raise ValueError(f"Unexpected display mode: {display}")


def points_clipped(points: Sequence[Point], clip: Optional[Rect]) -> bool:
    """
    Check whether all control points fall outside the clip rectangle.

    Args:
        points: Control points
        clip: Visible region, or None when the whole canvas is visible

    Returns:
        True if drawing can be skipped
    """
    if clip is None or not points:
        return False
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    extent = Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))
    return not clip.intersects(extent)


def lead_end(point: Point, orientation: Orientation, lead_length: int, lead_thickness: int) -> Tuple[int, int]:
    """
    Far end of a folded lead starting at a control point.

    Args:
        point: Control point the lead starts from
        orientation: Component orientation
        lead_length: Lead length in whole pixels
        lead_thickness: Stroke width of the lead (odd)

    Returns:
        (x, y) of the lead end

    Raises:
        ValueError: If orientation is not one of the four supported values
    """
    half = lead_thickness // 2
    match orientation:
        case Orientation.DEFAULT:
            return point.x + lead_length - half, point.y
        case Orientation.ROT_90:
            return point.x, point.y + lead_length - half
        case Orientation.ROT_180:
            return point.x - lead_length - half, point.y
        case Orientation.ROT_270:
            return point.x, point.y - lead_length
        case _:
            raise ValueError(f"Unexpected orientation: {orientation}")


def _label_color(tube: SubminiTube, context: RenderContext) -> Color:
    if context.highlighted:
        return LABEL_COLOR_SELECTED
    if context.outline_mode:
        return context.theme.outline_color
    return tube.defaults.label_color


def _folded_leads(tube: SubminiTube, context: RenderContext) -> List[DrawingElement]:
    defaults = tube.defaults
    lead_thickness = closest_odd(defaults.lead_thickness.convert_to_pixels())
    lead_length = int(tube.lead_length_px)

    if context.outline_mode:
        fill_color = TRANSPARENT_COLOR
        border_color = SELECTION_COLOR if context.highlighted else context.theme.outline_color
    else:
        fill_color = METAL_COLOR
        border_color = METAL_COLOR.darker()

    elements: List[DrawingElement] = []
    for point in tube.control_points:
        start = (point.x, point.y)
        end = lead_end(point, tube.orientation, lead_length, lead_thickness)
        # Border pass first, then a thinner fill pass on top
        elements.append(StrokeLine(color=border_color, start=start, end=end, width=lead_thickness))
        elements.append(StrokeLine(color=fill_color, start=start, end=end, width=lead_thickness - 2))
    return elements


def _unfolded_pins(tube: SubminiTube) -> List[DrawingElement]:
    defaults = tube.defaults
    pin_size = int(defaults.pin_size.convert_to_pixels()) // 2 * 2
    half = pin_size // 2

    elements: List[DrawingElement] = []
    for point in tube.control_points:
        x, y = point.x - half, point.y - half
        elements.append(FillOval(color=defaults.pin_color, x=x, y=y, width=pin_size, height=pin_size))
        elements.append(StrokeOval(color=defaults.resolved_pin_border_color,
                                   x=x, y=y, width=pin_size, height=pin_size))
    return elements


def _label(tube: SubminiTube, context: RenderContext, bounds: Rect) -> Optional[DrawText]:
    text = label_text(tube.display, tube.name, tube.value)
    if not text:
        return None

    font = context.font
    text_width, text_height = font.string_bounds(text)
    # Center horizontally and vertically within the body bounds
    x = bounds.x + int((bounds.width - int(text_width)) / 2)
    y = bounds.y + int((bounds.height - int(text_height)) / 2) + font.ascent
    return DrawText(color=_label_color(tube, context), text=text, position=(x, y), font=font)


def draw_tube(tube: SubminiTube, context: RenderContext = RenderContext()) -> TubeDrawing:
    """
    Produce the draw calls for one tube.

    Args:
        tube: Component to draw
        context: Selection state, outline mode, theme, font and clip

    Returns:
        TubeDrawing; empty when the tube lies outside the clip region
    """
    if points_clipped(tube.control_points, context.clip):
        log.debug("Skipping %s, outside clip %s", tube.name, context.clip)
        return TubeDrawing()

    body = tube.get_body()
    opacity = tube.alpha / MAX_ALPHA if tube.alpha < MAX_ALPHA else 1.0

    elements: List[DrawingElement] = [
        FillRegion(color=TRANSPARENT_COLOR if context.outline_mode else tube.body_color,
                   region=body.main)
    ]

    if tube.folded:
        elements.extend(_folded_leads(tube, context))
    elif not context.outline_mode:
        elements.extend(_unfolded_pins(tube))

    label = _label(tube, context, body.bounds())
    if label is not None:
        elements.append(label)

    drawing = TubeDrawing(elements=elements, opacity=opacity)
    min_x, min_y, max_x, max_y = drawing.bounds()
    drawing.origin = (min_x, min_y)
    drawing.width = max_x - min_x
    drawing.height = max_y - min_y
    return drawing


def draw_icon(width: int, height: int, defaults: TubeDefaults = DEFAULT_TUBE_DEFAULTS) -> TubeDrawing:
    """
    Palette icon: holed tab above the body with three leads below.

    Args:
        width: Icon width in pixels
        height: Icon height in pixels
        defaults: Colors to use for body and border

    Returns:
        TubeDrawing sized width x height
    """
    margin = 2 * width // 32
    body_size = width * 5 // 10
    tab_size = body_size * 6 // 10
    hole_size = 5 * width // 32
    left = (width - body_size) // 2
    body_top = margin + tab_size
    body_bottom = body_top + body_size

    tab = holed_rect_region(
        left, margin, body_size, tab_size,
        width // 2 - hole_size // 2, margin + tab_size // 2 - hole_size // 2, hole_size)
    body = rect_region(left, body_top, body_size, body_size)

    elements: List[DrawingElement] = [
        StrokeRegion(color=defaults.border_color, region=tab),
        FillRegion(color=defaults.body_color, region=body),
        StrokeRegion(color=defaults.border_color, region=body),
    ]
    for lead_x in (width // 2, width // 2 - body_size // 3, width // 2 + body_size // 3):
        elements.append(StrokeLine(color=METAL_COLOR, start=(lead_x, body_bottom),
                                   end=(lead_x, height - margin), width=2))

    return TubeDrawing(elements=elements, width=width, height=height)
