"""
Render tube drawings as SVG (for previews, testing or export).
"""
from typing import List
from xml.sax.saxutils import escape

from shapely.geometry.base import BaseGeometry

from .drawing import (
    DrawText,
    FillOval,
    FillRegion,
    StrokeLine,
    StrokeOval,
    StrokeRegion,
    TubeDrawing,
)
from .models import Color


def _paint(color: Color) -> str:
    """SVG paint value; fully transparent colors become 'none'"""
    if color.is_transparent:
        return "none"
    return color.hex


def _alpha_attr(name: str, color: Color) -> str:
    if color.a in (0, 255):
        return ""
    return f' {name}="{color.opacity:.3f}"'


def region_to_path(region: BaseGeometry) -> str:
    """
    Convert a polygon (or multipolygon) to SVG path data.

    Holes become extra subpaths; draw with fill-rule="evenodd".

    Args:
        region: shapely Polygon or MultiPolygon

    Returns:
        Path data string, empty for empty regions
    """
    if region is None or region.is_empty:
        return ""
    polygons = getattr(region, "geoms", [region])
    commands: List[str] = []
    for polygon in polygons:
        for ring in [polygon.exterior, *polygon.interiors]:
            coords = list(ring.coords)
            head = f"M {coords[0][0]:g} {coords[0][1]:g}"
            tail = " ".join(f"L {x:g} {y:g}" for x, y in coords[1:])
            commands.append(f"{head} {tail} Z")
    return " ".join(commands)


def render_drawing_to_svg(drawing: TubeDrawing, margin: float = 2.0) -> str:
    """
    Render a tube drawing as an SVG document.

    Args:
        drawing: TubeDrawing to render
        margin: Extra space around the drawing bounds, in pixels

    Returns:
        SVG string
    """
    if drawing.width > 0 and drawing.height > 0:
        min_x, min_y = drawing.origin
        width, height = drawing.width, drawing.height
    else:
        min_x, min_y, max_x, max_y = drawing.bounds()
        width, height = max_x - min_x, max_y - min_y

    view_x, view_y = min_x - margin, min_y - margin
    view_w, view_h = width + 2 * margin, height + 2 * margin

    svg_parts = [
        f'<svg width="{view_w:g}" height="{view_h:g}" '
        f'viewBox="{view_x:g} {view_y:g} {view_w:g} {view_h:g}" '
        f'xmlns="http://www.w3.org/2000/svg">'
    ]

    indent = "  "
    if drawing.opacity < 1.0:
        svg_parts.append(f'  <g opacity="{drawing.opacity:.3f}">')
        indent = "    "

    for element in drawing.elements:
        if isinstance(element, FillRegion):
            path = region_to_path(element.region)
            if path:
                svg_parts.append(
                    f'{indent}<path d="{path}" fill="{_paint(element.color)}"'
                    f'{_alpha_attr("fill-opacity", element.color)} fill-rule="evenodd" stroke="none"/>'
                )

        elif isinstance(element, StrokeRegion):
            path = region_to_path(element.region)
            if path:
                svg_parts.append(
                    f'{indent}<path d="{path}" fill="none" stroke="{_paint(element.color)}"'
                    f'{_alpha_attr("stroke-opacity", element.color)} stroke-width="{element.width:g}"/>'
                )

        elif isinstance(element, StrokeLine):
            (x1, y1), (x2, y2) = element.start, element.end
            svg_parts.append(
                f'{indent}<line x1="{x1:g}" y1="{y1:g}" x2="{x2:g}" y2="{y2:g}" '
                f'stroke="{_paint(element.color)}"{_alpha_attr("stroke-opacity", element.color)} '
                f'stroke-width="{element.width:g}"/>'
            )

        elif isinstance(element, (FillOval, StrokeOval)):
            cx = element.x + element.width / 2
            cy = element.y + element.height / 2
            if isinstance(element, FillOval):
                paint = (f'fill="{_paint(element.color)}"'
                         f'{_alpha_attr("fill-opacity", element.color)} stroke="none"')
            else:
                paint = (f'fill="none" stroke="{_paint(element.color)}"'
                         f'{_alpha_attr("stroke-opacity", element.color)} '
                         f'stroke-width="{element.stroke_width:g}"')
            svg_parts.append(
                f'{indent}<ellipse cx="{cx:g}" cy="{cy:g}" rx="{element.width / 2:g}" '
                f'ry="{element.height / 2:g}" {paint}/>'
            )

        elif isinstance(element, DrawText):
            x, y = element.position
            svg_parts.append(
                f'{indent}<text x="{x:g}" y="{y:g}" font-family="{escape(element.font.family)}" '
                f'font-size="{element.font.size:g}" fill="{_paint(element.color)}">'
                f'{escape(element.text)}</text>'
            )

    if drawing.opacity < 1.0:
        svg_parts.append('  </g>')

    svg_parts.append('</svg>')

    return '\n'.join(svg_parts)
