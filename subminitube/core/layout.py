"""
Control point layout for the sub-mini tube.
Pure functions - no editor dependencies, fully testable.
"""
from typing import Sequence, Tuple

from .models import Orientation, Point


def lead_step(orientation: Orientation, spacing_px: int) -> Tuple[int, int]:
    """
    Offset between consecutive leads for an orientation.

    Args:
        orientation: Component orientation
        spacing_px: Lead spacing in whole pixels

    Returns:
        (dx, dy) in pixels

    Raises:
        ValueError: If orientation is not one of the four supported values
    """
    match orientation:
        case Orientation.DEFAULT:
            return 0, spacing_px
        case Orientation.ROT_90:
            return -spacing_px, 0
        case Orientation.ROT_180:
            return 0, -spacing_px
        case Orientation.ROT_270:
            return spacing_px, 0
        case _:
            raise ValueError(f"Unexpected orientation: {orientation}")


def layout_control_points(
    anchor: Point,
    orientation: Orientation,
    folded: bool,
    pin_count: int,
    spacing_px: int
) -> Tuple[Point, ...]:
    """
    Calculate lead positions around the anchor.

    Every call builds a fresh tuple seeded with the anchor, so previously
    adjusted positions of points 1..n are never carried over.

    Folded tubes lay every lead out as a chain stepping away from the
    anchor. Unfolded tubes only place leads 1 and 2; leads 3 and up stay
    on the anchor.

    Args:
        anchor: Position of control point 0
        orientation: Component orientation
        folded: Lead routing topology
        pin_count: Required number of control points
        spacing_px: Lead spacing in whole pixels

    Returns:
        Tuple of pin_count points, first one equal to anchor

    Raises:
        ValueError: If orientation is not one of the four supported values
    """
    points = [anchor] * pin_count
    dx, dy = lead_step(orientation, spacing_px)

    if folded:
        placed = range(1, pin_count)
    else:
        # TODO: honor PinArrangement once inline/circular layouts exist for >3 leads
        placed = range(1, min(pin_count, 3))

    for i in placed:
        points[i] = anchor.translated(i * dx, i * dy)

    return tuple(points)


def collapsed_indices(points: Sequence[Point]) -> Tuple[int, ...]:
    """
    Indices of non-anchor points that coincide with the anchor.

    Args:
        points: Control points, anchor first

    Returns:
        Tuple of indices (empty when every lead is separated)
    """
    if not points:
        return ()
    anchor = points[0]
    return tuple(i for i, p in enumerate(points) if i > 0 and p == anchor)
