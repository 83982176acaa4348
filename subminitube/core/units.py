"""
Real-world size values and unit conversion.
Pure functions - easily testable.
"""
import math
import re
from dataclasses import dataclass
from enum import Enum


# Drawing resolution used by the editor canvas
PIXELS_PER_INCH = 200


class SizeUnit(Enum):
    """Length units, with their factor expressed in centimetres"""
    px = 2.54 / PIXELS_PER_INCH
    mm = 0.1
    cm = 1.0
    m = 100.0
    inch = 2.54
    ft = 2.54 * 12
    yd = 2.54 * 36

    @property
    def label(self) -> str:
        return "in" if self is SizeUnit.inch else self.name

    @classmethod
    def from_label(cls, label: str) -> "SizeUnit":
        """
        Look up a unit by its display label.

        Args:
            label: Unit label such as "mm" or "in"

        Returns:
            Matching SizeUnit

        Raises:
            ValueError: If the label is not a known unit
        """
        label = label.strip().lower()
        if label in ("in", "inch", "\""):
            return cls.inch
        try:
            return cls[label]
        except KeyError:
            raise ValueError(f"Unknown size unit: {label!r}")


@dataclass(frozen=True)
class Size:
    """A length with a unit, e.g. Size(0.1, SizeUnit.inch)"""
    value: float
    unit: SizeUnit

    def convert_to_pixels(self) -> float:
        """
        Convert this size to canvas pixels.

        Returns:
            Length in pixels, float noise removed (0.1in is exactly 20.0)
        """
        return round(self.value * self.unit.value / SizeUnit.px.value, 9)

    def convert_to_mm(self) -> float:
        return round(self.value * self.unit.value / SizeUnit.mm.value, 9)

    def __str__(self) -> str:
        return format_size(self)


_SIZE_PATTERN = re.compile(r"^\s*([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)\s*([a-zA-Z\"]+)\s*$")


def parse_size(text: str) -> Size:
    """
    Parse a size string such as "0.2in", "4.5 mm" or "20px".

    Args:
        text: Size string, number followed by unit label

    Returns:
        Parsed Size

    Raises:
        ValueError: If the string is not a number followed by a known unit
    """
    match = _SIZE_PATTERN.match(text)
    if not match:
        raise ValueError(f"Cannot parse size: {text!r}")
    value = float(match.group(1))
    if value <= 0:
        raise ValueError(f"Size must be positive: {text!r}")
    return Size(value, SizeUnit.from_label(match.group(2)))


def format_size(size: Size, precision: int = 3) -> str:
    """
    Format a size for display, trimming trailing zeros.

    Args:
        size: Size to format
        precision: Maximum number of decimal places

    Returns:
        Formatted string (e.g., "0.1 in")
    """
    number = f"{size.value:.{precision}f}".rstrip("0").rstrip(".")
    return f"{number} {size.unit.label}"


def closest_odd(x: float) -> int:
    """
    Round a pixel length to the nearest odd integer.

    Odd widths keep centered strokes symmetric around their axis.

    Args:
        x: Length in pixels

    Returns:
        Odd integer closest to x
    """
    return int(math.floor(x / 2)) * 2 + 1


def pixels_to_mm(pixels: float) -> float:
    """
    Convert canvas pixels to millimeters.

    Args:
        pixels: Length in pixels

    Returns:
        Length in millimeters
    """
    return pixels * SizeUnit.px.value / SizeUnit.mm.value
