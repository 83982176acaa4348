"""
Data models for rendered tube drawings.
Pure Python classes; backends (SVG, KiCad) replay them in order.
"""
from dataclasses import dataclass, field
from typing import List, Tuple

from shapely.geometry.base import BaseGeometry

from .models import Color, Font


@dataclass(frozen=True)
class DrawingElement:
    """Base class for everything a draw pass emits"""
    color: Color


@dataclass(frozen=True)
class FillRegion(DrawingElement):
    """Solid fill of a 2D region (may contain holes)"""
    region: BaseGeometry = None
    element_type: str = "fill_region"


@dataclass(frozen=True)
class StrokeRegion(DrawingElement):
    """Outline of a 2D region"""
    region: BaseGeometry = None
    width: float = 1.0
    element_type: str = "stroke_region"


@dataclass(frozen=True)
class StrokeLine(DrawingElement):
    """Straight stroked line"""
    start: Tuple[float, float] = (0.0, 0.0)
    end: Tuple[float, float] = (0.0, 0.0)
    width: float = 1.0
    element_type: str = "line"


@dataclass(frozen=True)
class FillOval(DrawingElement):
    """Filled ellipse inscribed in (x, y, width, height)"""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    element_type: str = "fill_oval"


@dataclass(frozen=True)
class StrokeOval(DrawingElement):
    """Ellipse outline inscribed in (x, y, width, height)"""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    stroke_width: float = 1.0
    element_type: str = "stroke_oval"


@dataclass(frozen=True)
class DrawText(DrawingElement):
    """Text drawn with its baseline starting at position"""
    text: str = ""
    position: Tuple[float, float] = (0.0, 0.0)
    font: Font = field(default_factory=Font)
    element_type: str = "text"


@dataclass
class TubeDrawing:
    """
    Complete draw pass output.

    opacity is the composite applied to all elements together; backends
    restore their previous composite once the drawing is replayed.
    """
    elements: List[DrawingElement] = field(default_factory=list)
    opacity: float = 1.0
    origin: Tuple[float, float] = (0.0, 0.0)
    width: float = 0.0
    height: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.elements

    def of_type(self, element_cls: type) -> List[DrawingElement]:
        """All elements of one type, in draw order"""
        return [e for e in self.elements if isinstance(e, element_cls)]

    def bounds(self) -> Tuple[float, float, float, float]:
        """
        Union bounding box of all elements.

        Returns:
            (min_x, min_y, max_x, max_y); all zeros for an empty drawing
        """
        xs: List[float] = []
        ys: List[float] = []
        for element in self.elements:
            if isinstance(element, (FillRegion, StrokeRegion)):
                if element.region is None or element.region.is_empty:
                    continue
                min_x, min_y, max_x, max_y = element.region.bounds
                xs.extend((min_x, max_x))
                ys.extend((min_y, max_y))
            elif isinstance(element, StrokeLine):
                xs.extend((element.start[0], element.end[0]))
                ys.extend((element.start[1], element.end[1]))
            elif isinstance(element, (FillOval, StrokeOval)):
                xs.extend((element.x, element.x + element.width))
                ys.extend((element.y, element.y + element.height))
            elif isinstance(element, DrawText):
                width, height = element.font.string_bounds(element.text)
                x, y = element.position
                xs.extend((x, x + width))
                ys.extend((y - element.font.ascent, y - element.font.ascent + height))
        if not xs:
            return (0.0, 0.0, 0.0, 0.0)
        return (min(xs), min(ys), max(xs), max(ys))
