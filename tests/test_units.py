"""Tests for millimetre / inch conversion."""

import math

import pytest

from tolstack.models import Misalignment, PartDimension, Unit
from tolstack.scenarios import create_hole_setup, default_hole_setup
from tolstack.holefit import FitStatus
from tolstack.units import (
    MM_PER_INCH,
    convert_misalignment,
    convert_part,
    convert_value,
    round_half_up,
)

MM = Unit.MM
INCH = Unit.INCH


class TestConvertValue:
    def test_exact_inch(self):
        assert convert_value(25.4, MM, INCH) == 1.0
        assert convert_value(1.0, INCH, MM) == 25.4

    def test_mm_precision(self):
        assert convert_value(0.2598, INCH, MM) == 6.599

    def test_inch_precision(self):
        assert convert_value(6.6, MM, INCH) == 0.2598

    def test_same_unit_untouched(self):
        assert convert_value(6.123456789, MM, MM) == 6.123456789
        assert convert_value(0.123456789, INCH, INCH) == 0.123456789

    def test_negative_values(self):
        assert convert_value(-1.0, INCH, MM) == -25.4
        assert convert_value(-6.6, MM, INCH) == -0.2598

    def test_zero(self):
        assert convert_value(0.0, MM, INCH) == 0.0

    def test_unknown_unit(self):
        with pytest.raises(ValueError):
            convert_value(1.0, MM, "CM")

    def test_non_finite_values(self):
        assert convert_value(float("inf"), INCH, MM) == float("inf")
        assert convert_value(float("-inf"), MM, INCH) == float("-inf")
        assert math.isnan(convert_value(float("nan"), INCH, MM))

    def test_huge_values(self):
        assert convert_value(1e70, MM, INCH) == pytest.approx(1e70 / 25.4)
        assert convert_value(1e300, INCH, MM) == pytest.approx(2.54e301)

    def test_round_trip_drift_is_bounded(self):
        # half an inch quantum scaled to mm, plus half an mm quantum
        bound = 0.5e-4 * MM_PER_INCH + 0.5e-3
        for v in (0.1, 1.6, 6.6, 8.05, 12.345, 100.0):
            back = convert_value(convert_value(v, MM, INCH), INCH, MM)
            assert abs(back - v) <= bound + 1e-12


class TestRounding:
    def test_half_away_from_zero(self):
        assert round_half_up(0.0625, 3) == 0.063
        assert round_half_up(-0.0625, 3) == -0.063
        assert round_half_up(2.5, 0) == 3.0

    def test_below_half(self):
        assert round_half_up(0.12344, 4) == 0.1234

    def test_non_finite_passes_through(self):
        assert round_half_up(float("inf"), 3) == float("inf")
        assert round_half_up(float("-inf"), 4) == float("-inf")
        assert math.isnan(round_half_up(float("nan"), 3))

    def test_large_values(self):
        assert round_half_up(1e70, 4) == 1e70
        assert round_half_up(-1.5e300, 3) == -1.5e300


class TestConvertParts:
    def test_part_fields(self):
        p = convert_part(PartDimension(0.25, 0.0, 0.005, 0.015), INCH, MM)
        assert p == PartDimension(6.35, 0.0, 0.127, 0.381)

    def test_part_not_mutated(self):
        p = PartDimension(6.6, 0.2, 0.0, 0.5)
        convert_part(p, MM, INCH)
        assert p == PartDimension(6.6, 0.2, 0.0, 0.5)

    def test_misalignment(self):
        assert convert_misalignment(Misalignment(0.1, -0.1), MM, INCH) == Misalignment(0.0039, -0.0039)


class TestSetupConvert:
    def test_quarter_inch_to_mm(self):
        s = create_hole_setup("quarter_inch").convert(MM)
        assert s.unit is MM
        assert s.pin.nominal == 6.35
        assert s.hole1.nominal == 6.756
        assert s.hole1.tol_plus == 0.254
        assert s.hole1.position_tolerance_spec == 0.381
        assert s.mode is create_hole_setup("quarter_inch").mode
        assert s.analyze().status is FitStatus.SAFE
        assert "MM" in s.analyze().recommendation

    def test_toggle_twice_drifts_within_bound(self):
        s = default_hole_setup()
        back = s.convert(INCH).convert(MM)
        bound = 0.5e-4 * MM_PER_INCH + 0.5e-3 + 1e-12
        for before, after in ((s.pin, back.pin), (s.hole1, back.hole1), (s.hole2, back.hole2)):
            for field in ("nominal", "tol_plus", "tol_minus", "position_tolerance_spec"):
                assert abs(getattr(after, field) - getattr(before, field)) <= bound
        assert abs(back.deviation.x - s.deviation.x) <= bound

    def test_same_unit_returns_equal_copy(self):
        s = default_hole_setup()
        c = s.convert(MM)
        assert c == s
        assert c is not s
