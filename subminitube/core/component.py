"""
Sub-mini (pencil) vacuum tube component.

Holds the editable configuration of one placed tube together with its
control points and the lazily built body geometry. Setters that move
leads recompute the control points immediately; setters that only change
the outline clear the body cache, which is rebuilt on the next get_body().
"""
import logging
from typing import Any, Dict, Optional, Tuple

from .body import BodyGeometry, body_dimensions, calculate_body
from .layout import layout_control_points
from .models import (
    MAX_ALPHA,
    Color,
    ComponentDescriptor,
    Display,
    EditableProperty,
    Orientation,
    PinArrangement,
    PinCount,
    Point,
    TubeDefaults,
    VisibilityPolicy,
    DEFAULT_TUBE_DEFAULTS,
)
from .units import Size, SizeUnit

log = logging.getLogger(__name__)


COMPONENT_DESCRIPTOR = ComponentDescriptor(
    name="Sub-Mini Tube",
    category="Tubes",
    author="Branislav Stojkovic",
    instance_name_prefix="V",
    description="Sub-miniature (pencil) vacuum tube",
    stretchable=False,
    keyword_policy="show_value",
)

# Order matches the property panel
EDITABLE_PROPERTIES: Tuple[EditableProperty, ...] = (
    EditableProperty("name", "Name"),
    EditableProperty("value", "Value"),
    EditableProperty("orientation", "Orientation"),
    EditableProperty("body_color", "Body", group="Colors"),
    EditableProperty("border_color", "Border", group="Colors"),
    EditableProperty("alpha", "Alpha", group="Colors"),
    EditableProperty("folded", "Folded"),
    EditableProperty("lead_length", "Lead Length", group="Leads"),
    EditableProperty("display", "Display"),
    EditableProperty("pin_arrangement", "Pin Arrangement", group="Leads"),
    EditableProperty("top_lead", "Top Lead", group="Leads"),
    EditableProperty("diameter", "Diameter", group="Body"),
    EditableProperty("length", "Length", group="Body"),
    EditableProperty("pin_count", "Lead Count", group="Leads"),
    EditableProperty("lead_spacing", "Lead Spacing", group="Leads"),
)

_PROPERTY_NAMES = frozenset(p.attr for p in EDITABLE_PROPERTIES)


def _require(value: Any, expected: type, name: str) -> None:
    if not isinstance(value, expected):
        raise TypeError(f"{name} must be {expected.__name__}, got {type(value).__name__}")


class SubminiTube:
    """A placed sub-mini tube: configuration, control points and body cache"""

    def __init__(
        self,
        defaults: TubeDefaults = DEFAULT_TUBE_DEFAULTS,
        anchor: Point = Point(0, 0),
        name: Optional[str] = None
    ):
        self._defaults = defaults
        self._name = name if name is not None else f"{defaults.name_prefix}1"
        self._value = ""
        self._orientation = Orientation.DEFAULT
        self._folded = False
        self._pin_count = defaults.pin_count
        self._pin_arrangement: Optional[PinArrangement] = defaults.pin_arrangement
        self._top_lead = False
        self._lead_length: Optional[Size] = defaults.lead_length
        self._lead_spacing: Optional[Size] = defaults.pin_spacing
        self._diameter = defaults.diameter
        self._length = defaults.length
        self._body_color = defaults.body_color
        self._border_color = defaults.border_color
        self._display: Optional[Display] = defaults.display
        self._alpha = MAX_ALPHA

        self._control_points: Tuple[Point, ...] = (anchor,)
        self._body: Optional[BodyGeometry] = None
        self._update_control_points()

    # -- invalidation ---------------------------------------------------------

    def _invalidate_body(self) -> None:
        self._body = None

    def _update_control_points(self) -> None:
        """Lay the leads out again around the current anchor"""
        self._control_points = layout_control_points(
            self._control_points[0],
            self._orientation,
            self._folded,
            self._pin_count.value,
            self.spacing_px,
        )
        self._invalidate_body()

    # -- derived pixel values -------------------------------------------------

    @property
    def defaults(self) -> TubeDefaults:
        return self._defaults

    @property
    def spacing_px(self) -> int:
        return int(self.lead_spacing.convert_to_pixels())

    @property
    def lead_length_px(self) -> float:
        return self.lead_length.convert_to_pixels()

    # -- configuration --------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = name

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        self._value = value

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @orientation.setter
    def orientation(self, orientation: Orientation) -> None:
        _require(orientation, Orientation, "orientation")
        self._orientation = orientation
        self._update_control_points()

    @property
    def folded(self) -> bool:
        return self._folded

    @folded.setter
    def folded(self, folded: bool) -> None:
        self._folded = bool(folded)
        self._update_control_points()

    @property
    def pin_count(self) -> PinCount:
        return self._pin_count

    @pin_count.setter
    def pin_count(self, pin_count: PinCount) -> None:
        _require(pin_count, PinCount, "pin_count")
        self._pin_count = pin_count
        self._update_control_points()

    @property
    def pin_arrangement(self) -> PinArrangement:
        if self._pin_arrangement is None:
            self._pin_arrangement = self._defaults.pin_arrangement
        return self._pin_arrangement

    @pin_arrangement.setter
    def pin_arrangement(self, pin_arrangement: Optional[PinArrangement]) -> None:
        if pin_arrangement is not None:
            _require(pin_arrangement, PinArrangement, "pin_arrangement")
        self._pin_arrangement = pin_arrangement

    @property
    def top_lead(self) -> bool:
        return self._top_lead

    @top_lead.setter
    def top_lead(self, top_lead: bool) -> None:
        self._top_lead = bool(top_lead)
        self._update_control_points()

    @property
    def lead_length(self) -> Size:
        if self._lead_length is None:
            self._lead_length = self._defaults.lead_length
        return self._lead_length

    @lead_length.setter
    def lead_length(self, lead_length: Optional[Size]) -> None:
        if lead_length is not None:
            _require(lead_length, Size, "lead_length")
        self._lead_length = lead_length
        self._invalidate_body()

    @property
    def lead_spacing(self) -> Size:
        if self._lead_spacing is None:
            self._lead_spacing = self._defaults.pin_spacing
        return self._lead_spacing

    @lead_spacing.setter
    def lead_spacing(self, lead_spacing: Optional[Size]) -> None:
        if lead_spacing is not None:
            _require(lead_spacing, Size, "lead_spacing")
        self._lead_spacing = lead_spacing
        self._update_control_points()

    @property
    def diameter(self) -> Size:
        return self._diameter

    @diameter.setter
    def diameter(self, diameter: Size) -> None:
        _require(diameter, Size, "diameter")
        self._diameter = diameter
        self._update_control_points()

    @property
    def length(self) -> Size:
        return self._length

    @length.setter
    def length(self, length: Size) -> None:
        _require(length, Size, "length")
        self._length = length

    @property
    def body_color(self) -> Color:
        return self._body_color

    @body_color.setter
    def body_color(self, color: Color) -> None:
        _require(color, Color, "body_color")
        self._body_color = color

    @property
    def border_color(self) -> Color:
        return self._border_color

    @border_color.setter
    def border_color(self, color: Color) -> None:
        _require(color, Color, "border_color")
        self._border_color = color

    @property
    def display(self) -> Display:
        if self._display is None:
            self._display = self._defaults.display
        return self._display

    @display.setter
    def display(self, display: Optional[Display]) -> None:
        if display is not None:
            _require(display, Display, "display")
        self._display = display

    @property
    def alpha(self) -> int:
        return self._alpha

    @alpha.setter
    def alpha(self, alpha: int) -> None:
        if not 0 <= alpha <= MAX_ALPHA:
            raise ValueError(f"alpha must be within 0..{MAX_ALPHA}, got {alpha}")
        self._alpha = int(alpha)

    # -- property panel -------------------------------------------------------

    def get_property(self, attr: str) -> Any:
        """
        Read an editable property by attribute name.

        Raises:
            KeyError: If attr is not an editable property
        """
        if attr not in _PROPERTY_NAMES:
            raise KeyError(attr)
        return getattr(self, attr)

    def set_property(self, attr: str, value: Any) -> None:
        """
        Write an editable property through its setter, so the usual
        layout and cache side effects apply.

        Raises:
            KeyError: If attr is not an editable property
        """
        if attr not in _PROPERTY_NAMES:
            raise KeyError(attr)
        setattr(self, attr, value)

    # -- control points -------------------------------------------------------

    @property
    def control_points(self) -> Tuple[Point, ...]:
        return self._control_points

    @property
    def anchor(self) -> Point:
        return self._control_points[0]

    def get_control_point_count(self) -> int:
        return len(self._control_points)

    def get_control_point(self, index: int) -> Point:
        return self._control_points[index]

    def is_control_point_sticky(self, index: int) -> bool:
        return True

    def get_control_point_visibility_policy(self, index: int) -> VisibilityPolicy:
        return VisibilityPolicy.NEVER

    def set_control_point(self, point: Point, index: int) -> None:
        """
        Move one control point.

        Moving the anchor relays every lead around it; other indices are
        replaced as-is (the drawing engine moves sticky points together).
        """
        if index == 0:
            self._control_points = (point,) + self._control_points[1:]
            self._update_control_points()
            return
        points = list(self._control_points)
        points[index] = point
        self._control_points = tuple(points)
        self._invalidate_body()

    # -- geometry -------------------------------------------------------------

    def get_body(self) -> BodyGeometry:
        """
        Body regions for the current configuration, built on first use
        after any invalidating change.
        """
        if self._body is None:
            body_width, body_thickness, body_height = body_dimensions(self._defaults)
            self._body = calculate_body(
                self.anchor,
                self._orientation,
                self._folded,
                self.lead_length_px,
                self.spacing_px,
                body_width,
                body_thickness,
                body_height,
            )
            log.debug(
                "Rebuilt body for %s (%s, folded=%s)",
                self._name, self._orientation.name, self._folded,
            )
        return self._body

    # -- persistence ----------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize configuration and anchor to plain JSON-compatible data.
        """
        def size(s: Size) -> Dict[str, Any]:
            return {"value": s.value, "unit": s.unit.label}

        return {
            "name": self._name,
            "value": self._value,
            "orientation": self._orientation.name,
            "folded": self._folded,
            "pin_count": self._pin_count.name,
            "pin_arrangement": self.pin_arrangement.name,
            "top_lead": self._top_lead,
            "lead_length": size(self.lead_length),
            "lead_spacing": size(self.lead_spacing),
            "diameter": size(self._diameter),
            "length": size(self._length),
            "body_color": self._body_color.to_hex(),
            "border_color": self._border_color.to_hex(),
            "display": self.display.name,
            "alpha": self._alpha,
            "anchor": [self.anchor.x, self.anchor.y],
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        defaults: TubeDefaults = DEFAULT_TUBE_DEFAULTS
    ) -> "SubminiTube":
        """
        Restore a tube saved by to_dict().

        Missing keys fall back to defaults.

        Raises:
            ValueError: If an enum name, color, size or alpha is malformed
        """
        def size(raw: Optional[Dict[str, Any]]) -> Optional[Size]:
            if raw is None:
                return None
            try:
                return Size(float(raw["value"]), SizeUnit.from_label(raw["unit"]))
            except (KeyError, TypeError) as e:
                raise ValueError(f"Invalid size: {raw!r}") from e

        def member(enum_cls, raw: Optional[str]):
            if raw is None:
                return None
            try:
                return enum_cls[raw]
            except KeyError:
                raise ValueError(f"Unknown {enum_cls.__name__}: {raw!r}")

        anchor = data.get("anchor", [0, 0])
        tube = cls(defaults, anchor=Point(int(anchor[0]), int(anchor[1])), name=data.get("name"))
        tube._value = data.get("value", "")
        tube._orientation = member(Orientation, data.get("orientation")) or Orientation.DEFAULT
        tube._folded = bool(data.get("folded", False))
        tube._pin_count = member(PinCount, data.get("pin_count")) or defaults.pin_count
        tube._pin_arrangement = member(PinArrangement, data.get("pin_arrangement"))
        tube._top_lead = bool(data.get("top_lead", False))
        tube._lead_length = size(data.get("lead_length"))
        tube._lead_spacing = size(data.get("lead_spacing"))
        tube._diameter = size(data.get("diameter")) or defaults.diameter
        tube._length = size(data.get("length")) or defaults.length
        if "body_color" in data:
            tube._body_color = Color.from_hex(data["body_color"])
        if "border_color" in data:
            tube._border_color = Color.from_hex(data["border_color"])
        tube._display = member(Display, data.get("display"))
        alpha = data.get("alpha")
        if alpha is None:
            alpha = MAX_ALPHA
        try:
            tube.alpha = int(alpha)
        except TypeError as e:
            raise ValueError(f"Invalid alpha: {alpha!r}") from e
        tube._update_control_points()
        return tube

    def __repr__(self) -> str:
        return (
            f"SubminiTube(name={self._name!r}, orientation={self._orientation.name}, "
            f"folded={self._folded}, pins={self._pin_count.value}, anchor={self.anchor})"
        )
