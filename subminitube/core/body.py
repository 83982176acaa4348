"""
Body outline generation for the sub-mini tube.
Pure functions - regions are shapely geometries, never mutated after creation.
"""
import math
from dataclasses import dataclass
from typing import Iterator, Tuple

from shapely import affinity
from shapely.geometry import Point as ShapelyPoint, Polygon, box as shapely_box
from shapely.geometry.base import BaseGeometry

from .models import Orientation, Point, Rect, TubeDefaults
from .units import closest_odd

# Tab feature is wired through the formulas but disabled
TAB_THICKNESS_PX = 0
TAB_HEIGHT_PX = 0
TAB_HOLE_DIAMETER_PX = 0


@dataclass(frozen=True)
class BodyGeometry:
    """Rendered body: main outline plus the (currently empty) tab region"""
    main: BaseGeometry
    tab: BaseGeometry

    def __iter__(self) -> Iterator[BaseGeometry]:
        return iter((self.main, self.tab))

    def __len__(self) -> int:
        return 2

    def bounds(self) -> Rect:
        """
        Integer bounding rectangle of the main region.

        Returns:
            Rect with floored origin and ceiled far edge
        """
        min_x, min_y, max_x, max_y = self.main.bounds
        x = math.floor(min_x)
        y = math.floor(min_y)
        return Rect(x, y, math.ceil(max_x) - x, math.ceil(max_y) - y)


def body_dimensions(defaults: TubeDefaults) -> Tuple[int, int, int]:
    """
    Fixed body dimensions in pixels, rounded to odd values.

    Args:
        defaults: Defaults record holding the real-world sizes

    Returns:
        (body_width, body_thickness, body_height)
    """
    return (
        closest_odd(defaults.body_width.convert_to_pixels()),
        closest_odd(defaults.body_thickness.convert_to_pixels()),
        closest_odd(defaults.body_height.convert_to_pixels()),
    )


def rect_region(x: float, y: float, width: float, height: float) -> Polygon:
    return shapely_box(x, y, x + width, y + height)


def _ellipse(x: float, y: float, width: float, height: float) -> BaseGeometry:
    """Ellipse inscribed in the (x, y, width, height) box"""
    if width <= 0 or height <= 0:
        return Polygon()
    circle = ShapelyPoint(x + width / 2, y + height / 2).buffer(1.0)
    return affinity.scale(circle, width / 2, height / 2, origin="center")


def holed_rect_region(
    x: float, y: float, width: float, height: float,
    hole_x: float, hole_y: float, hole_diameter: float
) -> BaseGeometry:
    outline = rect_region(x, y, width, height)
    hole = _ellipse(hole_x, hole_y, hole_diameter, hole_diameter)
    if hole.is_empty:
        return outline
    return outline.difference(hole)


def calculate_body(
    anchor: Point,
    orientation: Orientation,
    folded: bool,
    lead_length_px: float,
    spacing_px: int,
    body_width: int,
    body_thickness: int,
    body_height: int,
    tab_thickness: int = TAB_THICKNESS_PX,
    tab_height: int = TAB_HEIGHT_PX,
    tab_hole_diameter: int = TAB_HOLE_DIAMETER_PX
) -> BodyGeometry:
    """
    Calculate the body regions for one configuration.

    Unfolded tubes stand on their leads: the body is a thin rectangle
    across the lead axis, one spacing unit from the anchor. Folded tubes
    lie flat past the end of the leads with the tab beyond the body.

    Args:
        anchor: Control point 0
        orientation: Component orientation
        folded: Lead routing topology
        lead_length_px: Lead length in pixels
        spacing_px: Lead spacing in whole pixels
        body_width: Body width in pixels (odd)
        body_thickness: Body thickness in pixels (odd)
        body_height: Body height in pixels (odd)
        tab_thickness: Tab thickness for unfolded tubes
        tab_height: Tab height for folded tubes
        tab_hole_diameter: Diameter of the hole punched in the folded tab

    Returns:
        BodyGeometry with main and tab regions

    Raises:
        ValueError: If orientation is not one of the four supported values
    """
    x, y = anchor.x, anchor.y
    s = spacing_px
    lead = lead_length_px
    half_width = body_width // 2
    half_thickness = body_thickness // 2
    half_tab = tab_height // 2
    half_hole = tab_hole_diameter // 2

    match orientation:
        case Orientation.DEFAULT:
            if folded:
                main = rect_region(x + lead, y + s - half_width, body_height, body_width)
                tab = holed_rect_region(
                    x + lead + body_height, y + s - half_width, tab_height, body_width,
                    x + lead + body_height + half_tab - half_hole, y + s - half_hole,
                    tab_hole_diameter)
            else:
                main = rect_region(x - half_thickness, y + s - half_width, body_thickness, body_width)
                tab = rect_region(x + half_thickness - tab_thickness, y + s - half_width,
                                  tab_thickness, body_width)
        case Orientation.ROT_90:
            if folded:
                main = rect_region(x - s - half_width, y + lead, body_width, body_height)
                tab = holed_rect_region(
                    x - s - half_width, y + lead + body_height, body_width, tab_height,
                    x - s - half_hole, y + lead + body_height + half_tab - half_hole,
                    tab_hole_diameter)
            else:
                main = rect_region(x - s - half_width, y - half_thickness, body_width, body_thickness)
                tab = rect_region(x - s - half_width, y + half_thickness - tab_thickness,
                                  body_width, tab_thickness)
        case Orientation.ROT_180:
            if folded:
                main = rect_region(x - lead - body_height, y - s - half_width, body_height, body_width)
                tab = holed_rect_region(
                    x - lead - body_height - tab_height, y - s - half_width, tab_height, body_width,
                    x - lead - body_height - half_tab - half_hole, y - s - half_hole,
                    tab_hole_diameter)
            else:
                main = rect_region(x - half_thickness, y - s - half_width, body_thickness, body_width)
                tab = rect_region(x - half_thickness, y - s - half_width, tab_thickness, body_width)
        case Orientation.ROT_270:
            if folded:
                main = rect_region(x + s - half_width, y - lead - body_height, body_width, body_height)
                tab = holed_rect_region(
                    x + s - half_width, y - lead - body_height - tab_height, body_width, tab_height,
                    x + s - half_hole, y - lead - body_height - half_tab - half_hole,
                    tab_hole_diameter)
            else:
                main = rect_region(x + s - half_width, y - half_thickness, body_width, body_thickness)
                tab = rect_region(x + s - half_width, y - half_thickness, body_width, tab_thickness)
        case _:
            raise ValueError(f"Unexpected orientation: {orientation}")

    return BodyGeometry(main=main, tab=tab)
