"""
Render tube drawings as KiCad graphics.
This is the adapter layer - converts our drawing elements to KiCad primitives.
"""
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Tuple, cast

from shapely.geometry import Point as ShapelyPoint

from ..core.drawing import (
    DrawText,
    FillRegion,
    StrokeLine,
    StrokeOval,
    StrokeRegion,
    TubeDrawing,
)
from ..core.units import pixels_to_mm

if TYPE_CHECKING:
    from kipy.board import Board, BoardLayerClass
    from kipy.board_types import (
        FootprintInstance, BoardText, BoardSegment, BoardLayer
    )
    from kipy.geometry import Vector2

try:
    from kipy.board import Board, BoardLayerClass
    from kipy.board_types import (
        FootprintInstance, BoardText, BoardSegment, BoardLayer
    )
    from kipy.geometry import Vector2
    from kipy.util import from_mm
    KICAD_AVAILABLE = True
except ImportError:
    KICAD_AVAILABLE = False
    Board = None  # type: ignore
    FootprintInstance = None  # type: ignore
    BoardText = None  # type: ignore
    BoardSegment = None  # type: ignore
    BoardLayer = None  # type: ignore
    Vector2 = None  # type: ignore
    BoardLayerClass = None  # type: ignore
    from_mm = None  # type: ignore

log = logging.getLogger(__name__)

Segment = Tuple[Tuple[float, float], Tuple[float, float]]


@dataclass
class BoardRenderConfig:
    """Placement of a tube drawing on the board"""
    origin_x_mm: float = 50.0  # Board position of drawing pixel (0, 0)
    origin_y_mm: float = 50.0
    outline_width_mm: float = 0.15  # Width for region and oval outlines
    oval_segments: int = 16  # Chords used to approximate pins


def drawing_to_segments(
    drawing: TubeDrawing,
    config: BoardRenderConfig
) -> List[Tuple[Segment, float]]:
    """
    Flatten every non-text element of a drawing into mm line segments.

    KiCad graphics cannot be filled through the API, so regions and ovals
    become their outlines. Filled ovals are dropped since each pin already
    carries a matching stroked oval; fully transparent elements are skipped.

    Args:
        drawing: TubeDrawing to convert
        config: Board placement

    Returns:
        List of (((x1, y1), (x2, y2)), width_mm)
    """
    def to_mm(x: float, y: float) -> Tuple[float, float]:
        return config.origin_x_mm + pixels_to_mm(x), config.origin_y_mm + pixels_to_mm(y)

    def ring_segments(coords: Iterable[Tuple[float, float]], width: float):
        points = [to_mm(x, y) for x, y in coords]
        return [((a, b), width) for a, b in zip(points, points[1:]) if a != b]

    segments: List[Tuple[Segment, float]] = []
    for element in drawing.elements:
        if element.color.is_transparent:
            continue

        if isinstance(element, (FillRegion, StrokeRegion)):
            region = element.region
            if region is None or region.is_empty:
                continue
            for polygon in getattr(region, "geoms", [region]):
                for ring in [polygon.exterior, *polygon.interiors]:
                    segments.extend(ring_segments(ring.coords, config.outline_width_mm))

        elif isinstance(element, StrokeLine):
            start = to_mm(*element.start)
            end = to_mm(*element.end)
            segments.append(((start, end), pixels_to_mm(element.width)))

        elif isinstance(element, StrokeOval):
            radius = element.width / 2
            circle = ShapelyPoint(element.x + radius, element.y + element.height / 2).buffer(
                radius, quad_segs=max(1, config.oval_segments // 4))
            segments.extend(ring_segments(circle.exterior.coords, config.outline_width_mm))

    return segments


def render_tube_to_board(
    board: 'Board',
    drawing: TubeDrawing,
    config: BoardRenderConfig = None,
    layer: 'BoardLayer' = None
) -> 'FootprintInstance':
    """
    Render a tube drawing as a KiCad footprint.

    Args:
        board: KiCad Board instance
        drawing: TubeDrawing to render
        config: Board placement (optional)
        layer: Target layer for graphics (defaults to Dwgs.User)

    Returns:
        Created FootprintInstance

    Raises:
        ImportError: If kicad-python is not installed
        RuntimeError: If rendering fails
    """
    if not KICAD_AVAILABLE:
        raise ImportError("kicad-python is not available")

    if config is None:
        config = BoardRenderConfig()

    if layer is None:
        layer = BoardLayer.BL_Dwgs_User

    try:
        defaults = board.get_graphics_defaults()[BoardLayerClass.BLC_COPPER]

        fpi = FootprintInstance()
        fpi.layer = BoardLayer.BL_F_Cu
        fpi.reference_field.text.value = "TUBE_GRAPHIC"
        fpi.reference_field.visible = False
        fpi.value_field.visible = False
        fpi.attributes.not_in_schematic = True
        fpi.attributes.exclude_from_bill_of_materials = True
        fpi.attributes.exclude_from_position_files = True

        fp = fpi.definition

        for (start, end), width in drawing_to_segments(drawing, config):
            segment = BoardSegment()
            segment.layer = layer
            segment.start = Vector2.from_xy(from_mm(start[0]), from_mm(start[1]))
            segment.end = Vector2.from_xy(from_mm(end[0]), from_mm(end[1]))
            segment.width = from_mm(width)
            fp.add_item(segment)

        for label in drawing.of_type(DrawText):
            _add_label(fp, cast(DrawText, label), layer, config, defaults)

        created = board.create_items(fpi)

        if not created or len(created) == 0:
            raise RuntimeError("Failed to create tube graphic on board")

        log.info("Created tube graphic with %d items", len(drawing.elements))
        return cast(FootprintInstance, created[0])

    except Exception as e:
        raise RuntimeError(f"Failed to render tube to board: {e}") from e


def _add_label(
    fp,
    label: DrawText,
    layer: 'BoardLayer',
    config: BoardRenderConfig,
    defaults
) -> None:
    """
    Add the body label to the footprint.

    Args:
        fp: Footprint definition
        label: DrawText element, position is the text baseline start
        layer: Target layer
        config: Board placement
        defaults: Default graphics settings from board
    """
    text = BoardText()
    text.layer = layer
    text.value = label.text

    x, y = label.position
    text.position = Vector2.from_xy(
        from_mm(config.origin_x_mm + pixels_to_mm(x)),
        from_mm(config.origin_y_mm + pixels_to_mm(y)),
    )

    text.attributes = defaults.text.clone() if hasattr(defaults.text, 'clone') else defaults.text

    size_mm = pixels_to_mm(label.font.size)
    try:
        text.attributes.size.x = from_mm(size_mm)
        text.attributes.size.y = from_mm(size_mm)
        text.attributes.mirrored = False
        text.attributes.angle = 0.0
        # HorizontalAlignment HA_LEFT=1, VerticalAlignment VA_BOTTOM=3 (baseline-ish)
        text.attributes.horizontal_alignment = 1
        text.attributes.vertical_alignment = 3
    except AttributeError as e:
        log.warning("Could not set label attributes: %s", e)

    fp.add_item(text)
