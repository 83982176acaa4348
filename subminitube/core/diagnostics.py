"""
Diagnostic utilities for inspecting a tube's computed layout.
Captures control points, body bounds and leads stacked on the anchor.
"""
from typing import List, Tuple
from dataclasses import dataclass

from .component import SubminiTube
from .layout import collapsed_indices
from .models import Point, Rect


@dataclass
class LayoutDiagnostic:
    """Snapshot of the layout state of one tube."""
    name: str
    orientation_degrees: int
    folded: bool
    pin_count: int
    spacing_px: int
    lead_length_px: float
    control_points: List[Point]
    body_bounds: Rect
    tab_area: float
    collapsed: Tuple[int, ...]

    def has_collapsed_leads(self) -> bool:
        """Check whether any lead sits on top of the anchor."""
        return len(self.collapsed) > 0

    def summary(self) -> str:
        """Return a human-readable summary of the diagnostic."""
        b = self.body_bounds
        lines = [
            f"=== Layout Diagnostic ({self.name}) ===",
            f"Orientation: {self.orientation_degrees}°",
            f"Folded: {self.folded}",
            f"Leads: {self.pin_count}",
            f"Lead spacing: {self.spacing_px}px",
            f"Lead length: {self.lead_length_px:g}px",
            "",
            "Control Points:",
        ]

        for i, point in enumerate(self.control_points):
            marker = " (anchor)" if i == 0 else ""
            if i in self.collapsed:
                marker = " ⚠ on anchor"
            lines.append(f"  {i}: ({point.x}, {point.y}){marker}")

        lines.extend([
            "",
            f"Body bounds: x={b.x} y={b.y} w={b.width} h={b.height}",
            f"Tab area: {self.tab_area:g}",
            "",
            f"Leads collapsed onto anchor: {len(self.collapsed)}",
        ])
        if self.collapsed:
            lines.append(f"  Indices: {list(self.collapsed)}")

        return "\n".join(lines)


def capture_layout_diagnostic(tube: SubminiTube) -> LayoutDiagnostic:
    """
    Capture diagnostic information about a tube's layout.

    Args:
        tube: Tube to inspect (its body cache is filled as a side effect)

    Returns:
        LayoutDiagnostic with captured information
    """
    body = tube.get_body()
    points = list(tube.control_points)
    return LayoutDiagnostic(
        name=tube.name,
        orientation_degrees=tube.orientation.degrees,
        folded=tube.folded,
        pin_count=tube.pin_count.value,
        spacing_px=tube.spacing_px,
        lead_length_px=tube.lead_length_px,
        control_points=points,
        body_bounds=body.bounds(),
        tab_area=body.tab.area,
        collapsed=collapsed_indices(points),
    )
