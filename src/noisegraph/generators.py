"""Generator modules — noise sources that need no source modules.

Fractal generators
------------------
- :class:`Perlin` — summed octaves of gradient noise
- :class:`Billow` — octaves folded through ``2|n| − 1`` for puffy lumps
- :class:`RidgedMulti` — ridged multifractal with octave feedback
- :class:`Voronoi` — cellular noise from the nearest seed point

Closed-form generators
----------------------
- :class:`Const`, :class:`Checkerboard`, :class:`Cylinders`,
  :class:`Spheres`

Perlin, Billow, RidgedMulti and Const can also be evaluated in six
dimensions via :meth:`~module.Module.get_value_6d`.

Every generator that snaps coordinates to the integer lattice rejects
NaN or infinite input with :class:`~errors.InvalidParameterError`.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Dict, List, Sequence, Union

from .errors import InvalidParameterError
from .module import Module, Point
from .noisegen import (
    NoiseQuality,
    gradient_coherent_noise_3d,
    gradient_coherent_noise_6d,
    make_int_range,
    value_noise_3d,
    wrap_int32,
)

# ═══════════════════════════════════════════════════════════════════
# Defaults
# ═══════════════════════════════════════════════════════════════════

DEFAULT_FREQUENCY = 1.0
DEFAULT_LACUNARITY = 2.0
DEFAULT_OCTAVE_COUNT = 6
DEFAULT_PERSISTENCE = 0.5
DEFAULT_QUALITY = NoiseQuality.STD
DEFAULT_SEED = 0
MAX_OCTAVE = 30

DEFAULT_RIDGED_EXPONENT = 1.0
DEFAULT_RIDGED_GAIN = 2.0
DEFAULT_RIDGED_OFFSET = 1.0

DEFAULT_VORONOI_DISPLACEMENT = 1.0

QualityLike = Union[NoiseQuality, str]


def _check_finite(point: Sequence[float]) -> None:
    if not all(math.isfinite(c) for c in point):
        raise InvalidParameterError(
            f"cannot evaluate noise at non-finite point {tuple(point)!r}"
        )


# ═══════════════════════════════════════════════════════════════════
# Closed-form generators
# ═══════════════════════════════════════════════════════════════════

class Const(Module):
    """Outputs *value* everywhere."""

    def __init__(self, value: float = 0.0) -> None:
        super().__init__(0)
        self.value = value

    def get_value(self, x: float, y: float, z: float) -> float:
        return self.value

    def get_value_6d(self, x, y, z, w, u, v) -> float:
        return self.value


class Checkerboard(Module):
    """Unit cubes alternating between -1.0 and +1.0.

    Useful mostly for checking how other modules distort space.
    """

    def __init__(self) -> None:
        super().__init__(0)

    def get_value(self, x: float, y: float, z: float) -> float:
        _check_finite((x, y, z))
        ix = math.floor(make_int_range(x))
        iy = math.floor(make_int_range(y))
        iz = math.floor(make_int_range(z))
        return -1.0 if (ix & 1) ^ (iy & 1) ^ (iz & 1) else 1.0


def _shell_value(distance: float) -> float:
    inner = distance - math.floor(distance)
    outer = 1.0 - inner
    return 1.0 - (min(inner, outer) * 4.0)


class Cylinders(Module):
    """Concentric cylinders around the y axis.

    Output is +1.0 on each cylinder surface and -1.0 halfway between
    neighbouring cylinders; *frequency* is the number of cylinders per
    unit radius.
    """

    def __init__(self, frequency: float = DEFAULT_FREQUENCY) -> None:
        super().__init__(0)
        self.frequency = frequency

    def get_value(self, x: float, y: float, z: float) -> float:
        _check_finite((x, y, z))
        x *= self.frequency
        z *= self.frequency
        return _shell_value(math.sqrt(x * x + z * z))


class Spheres(Module):
    """Concentric spheres around the origin; see :class:`Cylinders`."""

    def __init__(self, frequency: float = DEFAULT_FREQUENCY) -> None:
        super().__init__(0)
        self.frequency = frequency

    def get_value(self, x: float, y: float, z: float) -> float:
        _check_finite((x, y, z))
        x *= self.frequency
        y *= self.frequency
        z *= self.frequency
        return _shell_value(math.sqrt(x * x + y * y + z * z))


# ═══════════════════════════════════════════════════════════════════
# Fractal generators
# ═══════════════════════════════════════════════════════════════════

class _Fractal(Module):
    """Shared parameters of the octave-summing generators."""

    def __init__(
        self,
        *,
        frequency: float,
        lacunarity: float,
        octave_count: int,
        quality: QualityLike,
        seed: int,
    ) -> None:
        super().__init__(0)
        self.frequency = frequency
        self._lacunarity = lacunarity
        self.octave_count = octave_count
        self.quality = quality
        self.seed = seed

    @property
    def lacunarity(self) -> float:
        """Frequency multiplier between successive octaves."""
        return self._lacunarity

    @lacunarity.setter
    def lacunarity(self, value: float) -> None:
        self._lacunarity = value

    @property
    def octave_count(self) -> int:
        return self._octave_count

    @octave_count.setter
    def octave_count(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidParameterError(f"octave_count must be an int, got {value!r}")
        if not 1 <= value <= MAX_OCTAVE:
            raise InvalidParameterError(
                f"octave_count must be in [1, {MAX_OCTAVE}], got {value}"
            )
        self._octave_count = value

    @property
    def quality(self) -> NoiseQuality:
        return self._quality

    @quality.setter
    def quality(self, value: QualityLike) -> None:
        try:
            self._quality = NoiseQuality(value)
        except ValueError as exc:
            raise InvalidParameterError(f"unknown noise quality {value!r}") from exc

    def _octave_noise(self, point: Sequence[float], seed: int) -> float:
        reduced = [make_int_range(c) for c in point]
        if len(reduced) == 3:
            return gradient_coherent_noise_3d(
                reduced[0], reduced[1], reduced[2], seed, self._quality
            )
        return gradient_coherent_noise_6d(*reduced, seed=seed, quality=self._quality)

    def _fractal(self, point: Point) -> float:
        raise NotImplementedError

    def get_value(self, x: float, y: float, z: float) -> float:
        point = (x, y, z)
        _check_finite(point)
        return self._fractal(point)

    def get_value_6d(self, x, y, z, w, u, v) -> float:
        point = (x, y, z, w, u, v)
        _check_finite(point)
        return self._fractal(point)


class Perlin(_Fractal):
    """Perlin noise — the sum of *octave_count* octaves of gradient noise.

    Octave ``i`` is sampled at ``frequency · lacunarity^i`` with seed
    ``seed + i`` and weighted by ``persistence^i``.  Output usually lies
    within ``[-1, 1]`` but is not bounded in principle.

    Parameters
    ----------
    frequency : float
        Frequency of the first octave.
    lacunarity : float
        Frequency multiplier between octaves; 1.5–3.5 works best.
    persistence : float
        Amplitude multiplier between octaves (roughness).
    octave_count : int
        Number of octaves, ``1 ≤ n ≤ 30``.
    quality : NoiseQuality or str
        Interpolation quality of the underlying coherent noise.
    seed : int
        Seed of the first octave.
    """

    def __init__(
        self,
        *,
        frequency: float = DEFAULT_FREQUENCY,
        lacunarity: float = DEFAULT_LACUNARITY,
        persistence: float = DEFAULT_PERSISTENCE,
        octave_count: int = DEFAULT_OCTAVE_COUNT,
        quality: QualityLike = DEFAULT_QUALITY,
        seed: int = DEFAULT_SEED,
    ) -> None:
        super().__init__(
            frequency=frequency,
            lacunarity=lacunarity,
            octave_count=octave_count,
            quality=quality,
            seed=seed,
        )
        self.persistence = persistence

    def _fractal(self, point: Point) -> float:
        value = 0.0
        cur_persistence = 1.0
        coords = [c * self.frequency for c in point]

        for octave in range(self._octave_count):
            seed = wrap_int32(self.seed + octave)
            signal = self._octave_noise(coords, seed)
            value += signal * cur_persistence

            coords = [c * self._lacunarity for c in coords]
            cur_persistence *= self.persistence

        return value


class Billow(_Fractal):
    """Billowy noise — Perlin octaves folded through ``2|signal| − 1``.

    Produces rounded lumps suited to clouds and rocks.  Takes the same
    parameters as :class:`Perlin`; the sum is offset by +0.5.
    """

    def __init__(
        self,
        *,
        frequency: float = DEFAULT_FREQUENCY,
        lacunarity: float = DEFAULT_LACUNARITY,
        persistence: float = DEFAULT_PERSISTENCE,
        octave_count: int = DEFAULT_OCTAVE_COUNT,
        quality: QualityLike = DEFAULT_QUALITY,
        seed: int = DEFAULT_SEED,
    ) -> None:
        super().__init__(
            frequency=frequency,
            lacunarity=lacunarity,
            octave_count=octave_count,
            quality=quality,
            seed=seed,
        )
        self.persistence = persistence

    def _fractal(self, point: Point) -> float:
        value = 0.0
        cur_persistence = 1.0
        coords = [c * self.frequency for c in point]

        for octave in range(self._octave_count):
            seed = wrap_int32(self.seed + octave)
            signal = self._octave_noise(coords, seed)
            signal = 2.0 * abs(signal) - 1.0
            value += signal * cur_persistence

            coords = [c * self._lacunarity for c in coords]
            cur_persistence *= self.persistence

        value += 0.5
        return value


class RidgedMulti(_Fractal):
    """Ridged multifractal noise (after F. K. Musgrave).

    Each octave is folded into a ridge (``(offset − |signal|)²``) and
    weighted by the previous octave's output, which concentrates detail
    along ridge lines.  Octaves are summed with spectral weights
    ``f_i^-exponent`` (``f_i = lacunarity^i``), precomputed whenever
    *lacunarity* or *exponent* changes.  The sum is mapped through
    ``value · 1.25 − 1``.

    Parameters
    ----------
    offset : float
        Ridge height offset.
    gain : float
        How strongly an octave's signal weights the next one.
    exponent : float
        Spectral weight exponent; larger values damp high octaves.

    Other parameters are as for :class:`Perlin` (there is no
    persistence).
    """

    def __init__(
        self,
        *,
        frequency: float = DEFAULT_FREQUENCY,
        lacunarity: float = DEFAULT_LACUNARITY,
        octave_count: int = DEFAULT_OCTAVE_COUNT,
        quality: QualityLike = DEFAULT_QUALITY,
        seed: int = DEFAULT_SEED,
        offset: float = DEFAULT_RIDGED_OFFSET,
        gain: float = DEFAULT_RIDGED_GAIN,
        exponent: float = DEFAULT_RIDGED_EXPONENT,
    ) -> None:
        self._exponent = exponent
        self._spectral_weights: List[float] = []
        super().__init__(
            frequency=frequency,
            lacunarity=lacunarity,
            octave_count=octave_count,
            quality=quality,
            seed=seed,
        )
        self.offset = offset
        self.gain = gain
        self._calc_spectral_weights()

    @_Fractal.lacunarity.setter
    def lacunarity(self, value: float) -> None:
        self._lacunarity = value
        self._calc_spectral_weights()

    @property
    def exponent(self) -> float:
        return self._exponent

    @exponent.setter
    def exponent(self, value: float) -> None:
        self._exponent = value
        self._calc_spectral_weights()

    @property
    def spectral_weights(self) -> List[float]:
        """Per-octave weights, one for each of the 30 possible octaves."""
        return list(self._spectral_weights)

    def _calc_spectral_weights(self) -> None:
        frequency = 1.0
        weights = []
        for _ in range(MAX_OCTAVE):
            weights.append(frequency ** -self._exponent)
            frequency *= self._lacunarity
        self._spectral_weights = weights

    def _fractal(self, point: Point) -> float:
        value = 0.0
        weight = 1.0
        coords = [c * self.frequency for c in point]

        for octave in range(self._octave_count):
            seed = (self.seed + octave) & 0x7FFFFFFF
            signal = self._octave_noise(coords, seed)

            signal = self.offset - abs(signal)
            signal *= signal
            signal *= weight

            weight = signal * self.gain
            if weight > 1.0:
                weight = 1.0
            if weight < 0.0:
                weight = 0.0

            value += signal * self._spectral_weights[octave]
            coords = [c * self._lacunarity for c in coords]

        return (value * 1.25) - 1.0


# ═══════════════════════════════════════════════════════════════════
# Voronoi
# ═══════════════════════════════════════════════════════════════════

class DistanceFunction(Enum):
    """Metric used by :class:`Voronoi` to find the nearest seed point."""

    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"
    SQUARED = "squared"
    QUADRATIC = "quadratic"

    def distance(self, dx: float, dy: float, dz: float) -> float:
        return _DISTANCE_FUNCTIONS[self](dx, dy, dz)

    @property
    def max_distance(self) -> float:
        """Distance used to normalise the output to ``[-1, 1]``."""
        return _MAX_DISTANCES[self]


def _euclidean(dx: float, dy: float, dz: float) -> float:
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def _manhattan(dx: float, dy: float, dz: float) -> float:
    return abs(dx) + abs(dy) + abs(dz)


def _chebyshev(dx: float, dy: float, dz: float) -> float:
    return max(abs(dx), abs(dy), abs(dz))


def _squared(dx: float, dy: float, dz: float) -> float:
    return dx * dx + dy * dy + dz * dz


def _quadratic(dx: float, dy: float, dz: float) -> float:
    return dx * dx + 2 * dx * dy + 2 * dx * dz + 2 * dy * dz + dy * dy + dz * dz


_DISTANCE_FUNCTIONS: Dict[DistanceFunction, Callable[[float, float, float], float]] = {
    DistanceFunction.EUCLIDEAN: _euclidean,
    DistanceFunction.MANHATTAN: _manhattan,
    DistanceFunction.CHEBYSHEV: _chebyshev,
    DistanceFunction.SQUARED: _squared,
    DistanceFunction.QUADRATIC: _quadratic,
}

_MAX_DISTANCES: Dict[DistanceFunction, float] = {
    DistanceFunction.EUCLIDEAN: math.sqrt(3.0),
    DistanceFunction.MANHATTAN: 3.0,
    DistanceFunction.CHEBYSHEV: 1.0,
    DistanceFunction.SQUARED: 3.0,
    DistanceFunction.QUADRATIC: 9.0,
}


class Voronoi(Module):
    """Cellular noise: each unit cube holds one pseudo-randomly placed seed point.

    The output at a point is a per-cell pseudo-random value (scaled by
    *displacement*) of the nearest seed point, optionally plus the
    normalised distance to that seed point when *enable_distance* is set.

    The search scans the 5×5×5 block of cubes around the input point,
    ``z`` outermost, then ``y``, then ``x``, each from -2 to +2.  A
    candidate replaces the current best only when strictly closer, so
    ties keep the first candidate in that order.
    """

    def __init__(
        self,
        *,
        frequency: float = DEFAULT_FREQUENCY,
        displacement: float = DEFAULT_VORONOI_DISPLACEMENT,
        seed: int = DEFAULT_SEED,
        enable_distance: bool = False,
        distance: Union[DistanceFunction, str] = DistanceFunction.EUCLIDEAN,
    ) -> None:
        super().__init__(0)
        self.frequency = frequency
        self.displacement = displacement
        self.seed = seed
        self.enable_distance = enable_distance
        self.distance = distance

    @property
    def distance(self) -> DistanceFunction:
        return self._distance

    @distance.setter
    def distance(self, value: Union[DistanceFunction, str]) -> None:
        try:
            self._distance = DistanceFunction(value)
        except ValueError as exc:
            raise InvalidParameterError(f"unknown distance function {value!r}") from exc

    def seed_point(self, cx: int, cy: int, cz: int) -> tuple:
        """Position of the seed point owned by the unit cube ``(cx, cy, cz)``."""
        seed = self.seed
        return (
            cx + value_noise_3d(cx, cy, cz, seed),
            cy + value_noise_3d(cx, cy, cz, seed + 1),
            cz + value_noise_3d(cx, cy, cz, seed + 2),
        )

    def nearest_seed_point(self, x: float, y: float, z: float) -> tuple:
        """Nearest seed point to ``(x, y, z)`` in already-scaled coordinates."""
        measure = _DISTANCE_FUNCTIONS[self._distance]
        x_int = math.floor(x)
        y_int = math.floor(y)
        z_int = math.floor(z)

        min_dist = 2147483647.0
        candidate = (0.0, 0.0, 0.0)
        for z_cur in range(z_int - 2, z_int + 3):
            for y_cur in range(y_int - 2, y_int + 3):
                for x_cur in range(x_int - 2, x_int + 3):
                    pos = self.seed_point(x_cur, y_cur, z_cur)
                    dist = measure(pos[0] - x, pos[1] - y, pos[2] - z)
                    if dist < min_dist:
                        min_dist = dist
                        candidate = pos
        return candidate

    def get_value(self, x: float, y: float, z: float) -> float:
        _check_finite((x, y, z))
        x *= self.frequency
        y *= self.frequency
        z *= self.frequency

        cx, cy, cz = self.nearest_seed_point(x, y, z)

        if self.enable_distance:
            dist = self._distance.distance(cx - x, cy - y, cz - z)
            value = (dist / self._distance.max_distance) * 2.0 - 1.0
        else:
            value = 0.0

        return value + (
            self.displacement
            * value_noise_3d(math.floor(cx), math.floor(cy), math.floor(cz))
        )
