"""
Pure data models for the sub-mini tube component.
No host editor or KiCad imports - fully testable with plain values.
"""
from dataclasses import dataclass
from typing import Tuple, Optional
from enum import Enum

from .units import Size, SizeUnit


# Maximum component alpha; anything below it draws translucent
MAX_ALPHA = 127


class Orientation(Enum):
    """Rotation of the component, in degrees"""
    DEFAULT = 0
    ROT_90 = 90
    ROT_180 = 180
    ROT_270 = 270

    @property
    def degrees(self) -> int:
        return self.value

    @classmethod
    def from_degrees(cls, degrees: int) -> "Orientation":
        """
        Look up an orientation by its rotation angle.

        Args:
            degrees: One of 0, 90, 180, 270

        Returns:
            Matching Orientation

        Raises:
            ValueError: For any other angle
        """
        try:
            return cls(int(degrees))
        except ValueError:
            raise ValueError(f"Unexpected orientation: {degrees}")


class PinCount(Enum):
    """Number of leads, closed set 3..10"""
    PINS_3 = 3
    PINS_4 = 4
    PINS_5 = 5
    PINS_6 = 6
    PINS_7 = 7
    PINS_8 = 8
    PINS_9 = 9
    PINS_10 = 10

    @classmethod
    def from_int(cls, count: int) -> "PinCount":
        try:
            return cls(int(count))
        except ValueError:
            raise ValueError(f"Unsupported pin count: {count} (expected 3..10)")

    def __str__(self) -> str:
        return str(self.value)


class PinArrangement(Enum):
    """How leads exit the tube base; not used by geometry yet"""
    INLINE = "In-line"
    CIRCULAR = "Circular"

    def __str__(self) -> str:
        return self.value


class Display(Enum):
    """What the body label shows"""
    NAME = "name"
    VALUE = "value"
    BOTH = "both"
    NONE = "none"


class ComponentState(Enum):
    """Interaction state supplied by the drawing engine"""
    NORMAL = "normal"
    SELECTED = "selected"
    DRAGGING = "dragging"


class VisibilityPolicy(Enum):
    """When the drawing engine should show control point handles"""
    NEVER = "never"
    WHEN_SELECTED = "when_selected"
    ALWAYS = "always"


@dataclass(frozen=True)
class Color:
    """RGBA color, 0-255 per channel"""
    r: int
    g: int
    b: int
    a: int = 255

    def darker(self) -> "Color":
        """Scale RGB channels down by 0.7, keeping alpha"""
        return Color(int(self.r * 0.7), int(self.g * 0.7), int(self.b * 0.7), self.a)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @property
    def opacity(self) -> float:
        return self.a / 255.0

    @property
    def is_transparent(self) -> bool:
        return self.a == 0

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """
        Parse "#RRGGBB" or "#RRGGBBAA".

        Raises:
            ValueError: If the string is not a hex color
        """
        digits = text.strip().lstrip("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid color: {text!r}")
        try:
            channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError:
            raise ValueError(f"Invalid color: {text!r}")
        return cls(*channels)

    def to_hex(self) -> str:
        """Hex string including alpha when not fully opaque"""
        if self.a == 255:
            return self.hex
        return f"{self.hex}{self.a:02x}"


@dataclass(frozen=True)
class Point:
    """Integer position on the drawing canvas, in pixels"""
    x: int
    y: int

    def translated(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle (x, y, width, height) in pixels"""
    x: float
    y: float
    width: float
    height: float

    def intersects(self, other: "Rect") -> bool:
        """Closed-interval overlap test; touching edges count"""
        return (self.x <= other.x + other.width and other.x <= self.x + self.width and
                self.y <= other.y + other.height and other.y <= self.y + self.height)


@dataclass(frozen=True)
class Theme:
    """Subset of the editor theme consumed by the render pass"""
    name: str
    outline_color: Color


@dataclass(frozen=True)
class Font:
    """
    Label font with approximate fixed-advance metrics.

    Stands in for the host font service: width is characters times the
    average advance, height is ascent plus descent.
    """
    family: str = "sans-serif"
    size: float = 14.0
    advance_ratio: float = 0.6
    ascent_ratio: float = 0.8
    descent_ratio: float = 0.2

    @property
    def ascent(self) -> int:
        return int(round(self.size * self.ascent_ratio))

    def string_bounds(self, text: str) -> Tuple[float, float]:
        """
        Measure text.

        Args:
            text: String to measure

        Returns:
            (width, height) in pixels
        """
        width = len(text) * self.size * self.advance_ratio
        height = self.size * (self.ascent_ratio + self.descent_ratio)
        return width, height


# Shared color constants
METAL_COLOR = Color.from_hex("#759DAF")
SELECTION_COLOR = Color(255, 0, 0)
LABEL_COLOR_SELECTED = Color(255, 0, 0)
TRANSPARENT_COLOR = Color(0, 0, 0, 0)

DEFAULT_THEME = Theme(name="Light", outline_color=Color(0, 0, 0))
DEFAULT_FONT = Font()


@dataclass(frozen=True)
class TubeDefaults:
    """
    Immutable defaults consumed by new tube instances.

    Inject a different record at construction to restyle a tube without
    touching any shared state.
    """
    body_color: Color = Color(192, 192, 192)
    border_color: Color = Color(128, 128, 128)
    pin_color: Color = Color.from_hex("#00B2EE")
    pin_border_color: Optional[Color] = None  # None: pin_color.darker()
    label_color: Color = Color(255, 255, 255)
    pin_size: Size = Size(0.03, SizeUnit.inch)
    pin_spacing: Size = Size(0.1, SizeUnit.inch)
    body_width: Size = Size(0.4, SizeUnit.inch)
    body_thickness: Size = Size(4.5, SizeUnit.mm)
    body_height: Size = Size(9.0, SizeUnit.mm)
    diameter: Size = Size(0.4, SizeUnit.inch)
    length: Size = Size(1.375, SizeUnit.inch)
    lead_length: Size = Size(0.2, SizeUnit.inch)
    lead_thickness: Size = Size(0.8, SizeUnit.mm)
    display: Display = Display.NAME
    pin_arrangement: PinArrangement = PinArrangement.CIRCULAR
    pin_count: PinCount = PinCount.PINS_8
    name_prefix: str = "V"

    @property
    def resolved_pin_border_color(self) -> Color:
        if self.pin_border_color is None:
            return self.pin_color.darker()
        return self.pin_border_color


DEFAULT_TUBE_DEFAULTS = TubeDefaults()


@dataclass(frozen=True)
class EditableProperty:
    """Property-panel metadata for one configuration field"""
    attr: str
    label: str
    group: str = "General"


@dataclass(frozen=True)
class ComponentDescriptor:
    """Palette metadata describing the component type"""
    name: str
    category: str
    author: str
    instance_name_prefix: str
    description: str
    stretchable: bool = False
    keyword_policy: str = "show_value"
