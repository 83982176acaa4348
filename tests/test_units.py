"""
Unit tests for size values and unit conversion.
These tests don't require KiCad to be running.
"""
import pytest
from subminitube.core.units import (
    Size,
    SizeUnit,
    parse_size,
    format_size,
    closest_odd,
    pixels_to_mm,
    PIXELS_PER_INCH,
)


class TestConvertToPixels:
    """Tests for real-world size to pixel conversion"""

    def test_one_inch(self):
        """One inch is the canvas resolution"""
        assert Size(1.0, SizeUnit.inch).convert_to_pixels() == PIXELS_PER_INCH

    def test_tenth_inch_is_exact(self):
        """Lead spacing default must not lose a pixel to float noise"""
        assert Size(0.1, SizeUnit.inch).convert_to_pixels() == 20.0
        assert int(Size(0.1, SizeUnit.inch).convert_to_pixels()) == 20

    def test_millimeters(self):
        """25.4mm is one inch"""
        assert Size(25.4, SizeUnit.mm).convert_to_pixels() == pytest.approx(200.0)

    def test_pixels_passthrough(self):
        """Pixel sizes convert to themselves"""
        assert Size(37, SizeUnit.px).convert_to_pixels() == 37.0

    def test_convert_to_mm(self):
        """Should convert inches to millimeters"""
        assert Size(1.0, SizeUnit.inch).convert_to_mm() == pytest.approx(25.4)


class TestClosestOdd:
    """Tests for odd rounding of stroke and body dimensions"""

    def test_even_rounds_up(self):
        assert closest_odd(80.0) == 81

    def test_fraction_rounds_to_nearest_odd(self):
        assert closest_odd(35.43) == 35
        assert closest_odd(70.87) == 71
        assert closest_odd(6.3) == 7

    def test_odd_unchanged(self):
        assert closest_odd(7.0) == 7


class TestParseSize:
    """Tests for parsing size strings"""

    def test_parse_inches(self):
        assert parse_size("0.2in") == Size(0.2, SizeUnit.inch)

    def test_parse_with_space(self):
        assert parse_size("4.5 mm") == Size(4.5, SizeUnit.mm)

    def test_parse_pixels(self):
        assert parse_size("40px") == Size(40.0, SizeUnit.px)

    def test_unknown_unit(self):
        with pytest.raises(ValueError):
            parse_size("3 furlongs")

    def test_not_a_number(self):
        with pytest.raises(ValueError):
            parse_size("wide")

    def test_non_positive_rejected(self):
        with pytest.raises(ValueError):
            parse_size("0mm")


class TestFormatting:
    """Tests for size display"""

    def test_format_trims_zeros(self):
        assert format_size(Size(0.1, SizeUnit.inch)) == "0.1 in"
        assert format_size(Size(9.0, SizeUnit.mm)) == "9 mm"

    def test_str_uses_format(self):
        assert str(Size(1.375, SizeUnit.inch)) == "1.375 in"

    def test_unit_label_round_trip(self):
        for unit in SizeUnit:
            assert SizeUnit.from_label(unit.label) is unit

    def test_pixels_to_mm(self):
        assert pixels_to_mm(200) == pytest.approx(25.4)
