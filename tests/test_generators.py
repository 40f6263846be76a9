"""Tests for generators.py — fractal, cellular and closed-form generators."""

from __future__ import annotations

import math

import pytest

from noisegraph import (
    Billow,
    Checkerboard,
    Const,
    Cylinders,
    DistanceFunction,
    InvalidParameterError,
    NoiseError,
    NoiseQuality,
    Perlin,
    RidgedMulti,
    Spheres,
    Voronoi,
    value_noise_3d,
)
from noisegraph.generators import MAX_OCTAVE


def _grid(step: float = 0.137, n: int = 12):
    return [(x * step, y * step * 1.3, 0.71) for x in range(-n, n) for y in range(-n, n)]


# ═══════════════════════════════════════════════════════════════════
# Closed-form generators
# ═══════════════════════════════════════════════════════════════════


class TestClosedForm:
    def test_const(self):
        assert Const(0.25).get_value(9, 9, 9) == 0.25
        assert Const(0.25).get_value_6d(1, 2, 3, 4, 5, 6) == 0.25

    def test_checkerboard(self):
        board = Checkerboard()
        assert board.get_value(0.5, 0.5, 0.5) == 1.0
        assert board.get_value(1.5, 0.5, 0.5) == -1.0
        assert board.get_value(1.5, 1.5, 0.5) == 1.0
        assert board.get_value(-0.5, 0.5, 0.5) == -1.0

    def test_cylinders(self):
        cyl = Cylinders(frequency=1.0)
        assert cyl.get_value(0.0, 7.0, 0.0) == 1.0
        assert cyl.get_value(0.5, 0.0, 0.0) == pytest.approx(-1.0)
        assert cyl.get_value(0.0, -3.0, 1.0) == pytest.approx(1.0)

    def test_cylinders_ignore_y(self):
        cyl = Cylinders(frequency=2.0)
        assert cyl.get_value(0.3, 0.0, 0.2) == cyl.get_value(0.3, 100.0, 0.2)

    def test_spheres(self):
        sph = Spheres(frequency=1.0)
        assert sph.get_value(1.0, 0.0, 0.0) == pytest.approx(1.0)
        assert sph.get_value(0.0, 0.5, 0.0) == pytest.approx(-1.0)
        assert sph.get_value(0.0, 0.0, 0.25) == pytest.approx(0.0)


# ═══════════════════════════════════════════════════════════════════
# Fractal parameters
# ═══════════════════════════════════════════════════════════════════


class TestFractalParameters:
    def test_defaults(self):
        p = Perlin()
        assert p.frequency == 1.0
        assert p.lacunarity == 2.0
        assert p.persistence == 0.5
        assert p.octave_count == 6
        assert p.quality is NoiseQuality.STD
        assert p.seed == 0

    @pytest.mark.parametrize("cls", [Perlin, Billow, RidgedMulti])
    def test_octave_count_bounds(self, cls):
        cls(octave_count=1)
        cls(octave_count=MAX_OCTAVE)
        with pytest.raises(InvalidParameterError):
            cls(octave_count=0)
        with pytest.raises(InvalidParameterError):
            cls(octave_count=MAX_OCTAVE + 1)

    def test_octave_setter_validates(self):
        p = Perlin()
        with pytest.raises(InvalidParameterError):
            p.octave_count = 31
        assert p.octave_count == 6

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            Perlin(octave_count=-3)

    def test_quality_from_string(self):
        assert Perlin(quality="best").quality is NoiseQuality.BEST
        with pytest.raises(InvalidParameterError):
            Perlin(quality="ultra")


# ═══════════════════════════════════════════════════════════════════
# Perlin / Billow
# ═══════════════════════════════════════════════════════════════════


class TestPerlin:
    def test_zero_at_lattice_points(self):
        p = Perlin(seed=17)
        for point in [(0, 0, 0), (1, 2, 3), (-5, 4, -2)]:
            assert p.get_value(*point) == 0.0

    def test_determinism(self):
        a = Perlin(seed=3).get_value(0.31, -1.7, 2.9)
        b = Perlin(seed=3).get_value(0.31, -1.7, 2.9)
        assert a == b

    def test_seed_changes_output(self):
        a = Perlin(seed=3).get_value(0.31, -1.7, 2.9)
        b = Perlin(seed=4).get_value(0.31, -1.7, 2.9)
        assert a != b

    def test_empirical_range(self):
        p = Perlin(seed=1)
        vals = [p.get_value(*pt) for pt in _grid()]
        assert all(-2.0 <= v <= 2.0 for v in vals)
        assert min(vals) < 0.0 < max(vals)

    def test_6d_matches_lattice_zero(self):
        p = Perlin()
        assert p.get_value_6d(0, 0, 0, 0, 0, 0) == 0.0
        v = p.get_value_6d(0.2, 0.4, 0.6, 0.8, 1.1, 1.3)
        assert math.isfinite(v)


class TestBillow:
    def test_value_at_origin(self):
        # Every octave signal is 0, folded to -1 and weighted by 0.5**i.
        expected = -sum(0.5 ** i for i in range(6)) + 0.5
        assert Billow().get_value(0, 0, 0) == pytest.approx(expected)

    def test_range(self):
        b = Billow(seed=5)
        vals = [b.get_value(*pt) for pt in _grid()]
        assert all(-1.5 <= v <= 2.5 for v in vals)


# ═══════════════════════════════════════════════════════════════════
# RidgedMulti
# ═══════════════════════════════════════════════════════════════════


class TestRidgedMulti:
    def test_defaults(self):
        r = RidgedMulti()
        assert (r.offset, r.gain, r.exponent) == (1.0, 2.0, 1.0)

    def test_value_at_origin(self):
        expected = sum(2.0 ** -i for i in range(6)) * 1.25 - 1.0
        assert RidgedMulti().get_value(0, 0, 0) == pytest.approx(expected)

    def test_single_octave_range(self):
        r = RidgedMulti(octave_count=1, seed=12)
        vals = [r.get_value(*pt) for pt in _grid(0.091, 15)]
        assert all(-1.0 <= v <= 0.25 + 1e-12 for v in vals)

    def test_spectral_weights(self):
        r = RidgedMulti()
        weights = r.spectral_weights
        assert len(weights) == MAX_OCTAVE
        assert weights[0] == 1.0
        assert weights[3] == pytest.approx(1.0 / 8.0)

    def test_weights_follow_lacunarity(self):
        r = RidgedMulti()
        r.lacunarity = 3.0
        assert r.spectral_weights[1] == pytest.approx(1.0 / 3.0)
        assert r.frequency == 1.0

    def test_weights_follow_exponent(self):
        r = RidgedMulti()
        r.exponent = 2.0
        assert r.spectral_weights[1] == pytest.approx(0.25)

    def test_6d(self):
        r = RidgedMulti(seed=4)
        a = r.get_value_6d(0.5, 0.1, 0.9, 1.2, -0.4, 2.2)
        assert a == r.get_value_6d(0.5, 0.1, 0.9, 1.2, -0.4, 2.2)


# ═══════════════════════════════════════════════════════════════════
# Voronoi
# ═══════════════════════════════════════════════════════════════════


class TestVoronoi:
    def test_defaults(self):
        v = Voronoi()
        assert v.displacement == 1.0
        assert v.enable_distance is False
        assert v.distance is DistanceFunction.EUCLIDEAN

    def test_output_is_cell_value(self):
        v = Voronoi(seed=7)
        x, y, z = 0.37, 1.91, -0.44
        cx, cy, cz = v.nearest_seed_point(x, y, z)
        expected = value_noise_3d(math.floor(cx), math.floor(cy), math.floor(cz))
        assert v.get_value(x, y, z) == expected

    def test_zero_displacement(self):
        v = Voronoi(displacement=0.0)
        assert v.get_value(0.3, 0.6, 0.9) == 0.0

    def test_distance_output(self):
        v = Voronoi(seed=2, displacement=0.0, enable_distance=True)
        x, y, z = 1.25, -0.75, 0.5
        cx, cy, cz = v.nearest_seed_point(x, y, z)
        dist = math.sqrt((cx - x) ** 2 + (cy - y) ** 2 + (cz - z) ** 2)
        assert v.get_value(x, y, z) == pytest.approx(dist / math.sqrt(3.0) * 2.0 - 1.0)

    def test_nearest_is_minimum_over_neighbourhood(self):
        v = Voronoi(seed=9)
        x, y, z = 2.2, 3.3, -1.1
        nearest = v.nearest_seed_point(x, y, z)
        best = math.dist(nearest, (x, y, z))
        for cz in range(-4, 1):
            for cy in range(1, 6):
                for cx in range(0, 5):
                    assert math.dist(v.seed_point(cx, cy, cz), (x, y, z)) >= best - 1e-12

    def test_equidistant_seeds_keep_first_in_scan_order(self):
        """Ties go to the first cell scanned, walking z, then y, then x."""

        class FixedSeeds(Voronoi):
            def __init__(self, seeds):
                super().__init__()
                self.seeds = seeds

            def seed_point(self, cx, cy, cz):
                return self.seeds.get((cx, cy, cz), (cx + 50.0, cy + 50.0, cz + 50.0))

        tied = {
            (0, 0, 0): (0.5, 0.5, 0.5),
            (1, 0, 0): (1.5, 0.5, 0.5),
        }
        assert FixedSeeds(tied).nearest_seed_point(1.0, 0.5, 0.5) == (0.5, 0.5, 0.5)

        tied[(1, 0, -1)] = (1.0, 0.5, 0.0)
        assert FixedSeeds(tied).nearest_seed_point(1.0, 0.5, 0.5) == (1.0, 0.5, 0.0)

    def test_determinism(self):
        a = Voronoi(seed=5, enable_distance=True).get_value(0.1, 0.2, 0.3)
        b = Voronoi(seed=5, enable_distance=True).get_value(0.1, 0.2, 0.3)
        assert a == b

    @pytest.mark.parametrize("metric", list(DistanceFunction))
    def test_all_metrics_evaluate(self, metric):
        v = Voronoi(distance=metric, enable_distance=True)
        assert math.isfinite(v.get_value(0.4, 0.5, 0.6))

    def test_distance_from_string(self):
        assert Voronoi(distance="manhattan").distance is DistanceFunction.MANHATTAN
        with pytest.raises(InvalidParameterError):
            Voronoi(distance="cosine")

    def test_metric_formulas(self):
        assert DistanceFunction.MANHATTAN.distance(1, -2, 3) == 6
        assert DistanceFunction.CHEBYSHEV.distance(1, -2, 3) == 3
        assert DistanceFunction.SQUARED.distance(1, -2, 3) == 14
        assert DistanceFunction.QUADRATIC.distance(1, 1, 1) == 9
        assert DistanceFunction.QUADRATIC.max_distance == 9.0

    def test_no_6d(self):
        with pytest.raises(NoiseError):
            Voronoi().get_value_6d(0, 0, 0, 0, 0, 0)


# ═══════════════════════════════════════════════════════════════════
# Non-finite input
# ═══════════════════════════════════════════════════════════════════


class TestNonFiniteInput:
    @pytest.mark.parametrize("module", [
        Perlin(), Billow(), RidgedMulti(), Voronoi(),
        Checkerboard(), Cylinders(), Spheres(),
    ], ids=lambda m: type(m).__name__)
    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_rejected(self, module, bad):
        with pytest.raises(InvalidParameterError):
            module.get_value(bad, 0.0, 0.0)
        with pytest.raises(InvalidParameterError):
            module.get_value(0.0, 0.0, bad)

    def test_rejected_in_6d(self):
        with pytest.raises(InvalidParameterError):
            Perlin().get_value_6d(0.0, 0.0, 0.0, 0.0, math.nan, 0.0)

    def test_error_is_a_noise_error(self):
        with pytest.raises(NoiseError):
            Perlin().get_value(math.inf, 0.0, 0.0)

    def test_const_ignores_point(self):
        assert Const(0.5).get_value(math.nan, 0.0, 0.0) == 0.5
