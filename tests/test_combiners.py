"""Tests for combiners.py and modifiers.py."""

from __future__ import annotations

import math

import pytest

from noisegraph import (
    Abs,
    Add,
    Clamp,
    Const,
    Curve,
    Exponent,
    InvalidParameterError,
    Invert,
    Max,
    Min,
    Multiply,
    NoiseError,
    Power,
    ScaleBias,
    Subtract,
    Terrace,
)


# ═══════════════════════════════════════════════════════════════════
# Combiners
# ═══════════════════════════════════════════════════════════════════


class TestCombiners:
    @pytest.mark.parametrize("cls, expected", [
        (Add, 5.0),
        (Subtract, -1.0),
        (Multiply, 6.0),
        (Min, 2.0),
        (Max, 3.0),
        (Power, 8.0),
    ])
    def test_values(self, cls, expected):
        assert cls(Const(2.0), Const(3.0)).get_value(0.1, 0.2, 0.3) == expected

    def test_subtract_order(self):
        assert Subtract(Const(10.0), Const(4.0)).get_value(0, 0, 0) == 6.0

    def test_power_domain_error_is_nan(self):
        assert math.isnan(Power(Const(-8.0), Const(1.0 / 3.0)).get_value(0, 0, 0))

    def test_power_negative_integer_exponent(self):
        assert Power(Const(-2.0), Const(3.0)).get_value(0, 0, 0) == -8.0

    @pytest.mark.parametrize("base, exponent, expected", [
        (0.0, -1.0, math.inf),
        (0.0, -2.0, math.inf),
        (0.0, -0.5, math.inf),
        (-0.0, -1.0, -math.inf),
        (-0.0, -2.0, math.inf),
    ])
    def test_power_zero_base_negative_exponent(self, base, exponent, expected):
        assert Power(Const(base), Const(exponent)).get_value(0, 0, 0) == expected

    @pytest.mark.parametrize("base, exponent, expected", [
        (10.0, 309.0, math.inf),
        (-10.0, 309.0, -math.inf),
        (-10.0, 310.0, math.inf),
        (-10.0, 309.5, math.nan),
    ])
    def test_power_overflow_sign(self, base, exponent, expected):
        result = Power(Const(base), Const(exponent)).get_value(0, 0, 0)
        if math.isnan(expected):
            assert math.isnan(result)
        else:
            assert result == expected

    def test_both_sources_required(self):
        with pytest.raises(NoiseError):
            Add(Const(1.0)).get_value(0, 0, 0)


# ═══════════════════════════════════════════════════════════════════
# Closed-form modifiers
# ═══════════════════════════════════════════════════════════════════


class TestModifiers:
    def test_abs_and_invert(self):
        assert Abs(Const(-0.75)).get_value(0, 0, 0) == 0.75
        assert Invert(Const(-0.75)).get_value(0, 0, 0) == 0.75
        assert Invert(Const(0.75)).get_value(0, 0, 0) == -0.75

    def test_scale_bias(self):
        assert ScaleBias(Const(0.5), scale=2.0, bias=1.0).get_value(0, 0, 0) == 2.0
        assert ScaleBias(Const(0.5)).get_value(0, 0, 0) == 0.5

    def test_exponent(self):
        assert Exponent(Const(0.0), exponent=2.0).get_value(0, 0, 0) == pytest.approx(-0.5)
        assert Exponent(Const(1.0), exponent=3.0).get_value(0, 0, 0) == pytest.approx(1.0)
        assert Exponent(Const(-1.0), exponent=3.0).get_value(0, 0, 0) == pytest.approx(-1.0)

    def test_clamp(self):
        clamp = Clamp(Const(5.0), lower=-0.5, upper=0.5)
        assert clamp.get_value(0, 0, 0) == 0.5
        clamp.set_source_module(0, Const(-5.0))
        assert clamp.get_value(0, 0, 0) == -0.5
        clamp.set_source_module(0, Const(0.1))
        assert clamp.get_value(0, 0, 0) == 0.1

    def test_clamp_bounds_validated(self):
        with pytest.raises(InvalidParameterError):
            Clamp(lower=1.0, upper=1.0)
        clamp = Clamp()
        with pytest.raises(InvalidParameterError):
            clamp.set_bounds(2.0, -2.0)
        assert (clamp.lower_bound, clamp.upper_bound) == (-1.0, 1.0)


# ═══════════════════════════════════════════════════════════════════
# Terrace
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def source():
    return Const(0.0)


class TestTerrace:
    def test_points_sorted(self, source):
        terrace = Terrace(source, [0.5, -1.0, 1.0, 0.0])
        assert terrace.control_points == [-1.0, 0.0, 0.5, 1.0]

    def test_duplicate_rejected(self, source):
        terrace = Terrace(source, [0.0, 1.0])
        with pytest.raises(InvalidParameterError):
            terrace.add_control_point(1.0)

    def test_make_control_points(self):
        terrace = Terrace()
        terrace.make_control_points(3)
        assert terrace.control_points == [-1.0, 0.0, 1.0]
        with pytest.raises(InvalidParameterError):
            terrace.make_control_points(1)

    def test_control_points_map_to_themselves(self):
        terrace = Terrace(Const(0.0), [-1.0, 0.0, 1.0])
        for point in terrace.control_points:
            terrace.set_source_module(0, Const(point))
            assert terrace.get_value(0, 0, 0) == point

    def test_between_points(self):
        terrace = Terrace(Const(0.5), [-1.0, 0.0, 1.0])
        assert terrace.get_value(0, 0, 0) == pytest.approx(0.25)

    def test_inverted(self):
        terrace = Terrace(Const(0.5), [-1.0, 0.0, 1.0], invert=True)
        assert terrace.get_value(0, 0, 0) == pytest.approx(0.75)

    def test_outside_range_clamps(self):
        terrace = Terrace(Const(3.0), [-1.0, 0.0, 1.0])
        assert terrace.get_value(0, 0, 0) == 1.0
        terrace.set_source_module(0, Const(-3.0))
        assert terrace.get_value(0, 0, 0) == -1.0

    def test_too_few_points(self, source):
        with pytest.raises(NoiseError):
            Terrace(source, [0.0]).get_value(0, 0, 0)


# ═══════════════════════════════════════════════════════════════════
# Curve
# ═══════════════════════════════════════════════════════════════════


CURVE_POINTS = [(-1.0, 0.5), (0.0, -0.25), (0.5, 0.75), (1.0, 0.1)]


class TestCurve:
    def test_points_sorted_by_input(self, source):
        curve = Curve(source, list(reversed(CURVE_POINTS)))
        assert curve.control_points == CURVE_POINTS

    def test_duplicate_input_rejected(self, source):
        curve = Curve(source, CURVE_POINTS)
        with pytest.raises(InvalidParameterError):
            curve.add_control_point(0.5, 0.0)

    def test_passes_through_control_points(self):
        curve = Curve(Const(0.0), CURVE_POINTS)
        assert curve.get_value(0, 0, 0) == pytest.approx(-0.25)
        curve.set_source_module(0, Const(0.5))
        assert curve.get_value(0, 0, 0) == pytest.approx(0.75)

    def test_outside_range_takes_end_output(self):
        curve = Curve(Const(2.0), CURVE_POINTS)
        assert curve.get_value(0, 0, 0) == 0.1
        curve.set_source_module(0, Const(-2.0))
        assert curve.get_value(0, 0, 0) == 0.5

    def test_too_few_points(self, source):
        with pytest.raises(NoiseError):
            Curve(source, CURVE_POINTS[:3]).get_value(0, 0, 0)

    def test_clear(self, source):
        curve = Curve(source, CURVE_POINTS)
        curve.clear_control_points()
        assert curve.control_points == []
