"""Coherent-noise kernel — lattice hashing and interpolation primitives.

Every function in this module operates on plain coordinates and integer
seeds and returns a ``float``.  There is **no** dependency on modules or
noise maps — these are the pure-math building blocks that the generator
modules (:mod:`generators`) sum into fractal noise.

Functions
---------
- :func:`gradient_coherent_noise_3d` — gradient noise, roughly ``[-1, 1]``
- :func:`value_coherent_noise_3d` — value noise, ``[-1, 1]``
- :func:`gradient_coherent_noise_6d` — 6-D gradient noise
- :func:`gradient_noise_3d` / :func:`value_noise_3d` — single lattice corner
- :func:`make_int_range` — fold huge coordinates into a safe range
- :func:`s_curve3`, :func:`s_curve5`, :func:`linear_interp`,
  :func:`cubic_interp` — interpolation helpers

Determinism
-----------
Hashes combine the lattice coordinates and seed with fixed prime
multipliers and are masked explicitly, emulating 32-bit two's-complement
wraparound.  Identical inputs always produce bit-identical output,
independent of platform or interpreter.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import List, Sequence, Tuple

from .vectors import RANDOM_VECTORS

# ═══════════════════════════════════════════════════════════════════
# Hash constants
# ═══════════════════════════════════════════════════════════════════

X_NOISE_GEN = 1619
Y_NOISE_GEN = 31337
Z_NOISE_GEN = 6971
W_NOISE_GEN = 2887
U_NOISE_GEN = 15473
V_NOISE_GEN = 9857
SEED_NOISE_GEN = 1013
SHIFT_NOISE_GEN = 8

_AXIS_NOISE_GEN_6D = (
    X_NOISE_GEN,
    Y_NOISE_GEN,
    Z_NOISE_GEN,
    W_NOISE_GEN,
    U_NOISE_GEN,
    V_NOISE_GEN,
)

# Scales a gradient dot product to roughly [-1, 1].
GRADIENT_SCALE = 2.12

INT_RANGE = 1073741824.0


class NoiseQuality(Enum):
    """Interpolation quality of coherent noise.

    ``FAST`` uses the raw fractional offset (discontinuous first
    derivative at cell edges), ``STD`` a cubic S-curve (continuous
    first derivative) and ``BEST`` a quintic S-curve (continuous first
    and second derivatives).
    """

    FAST = "fast"
    STD = "std"
    BEST = "best"


# ═══════════════════════════════════════════════════════════════════
# Interpolation helpers
# ═══════════════════════════════════════════════════════════════════

def s_curve3(a: float) -> float:
    """Cubic S-curve ``3a² − 2a³``."""
    return a * a * (3.0 - 2.0 * a)


def s_curve5(a: float) -> float:
    """Quintic S-curve ``6a⁵ − 15a⁴ + 10a³``."""
    a3 = a * a * a
    a4 = a3 * a
    a5 = a4 * a
    return (6.0 * a5) - (15.0 * a4) + (10.0 * a3)


def linear_interp(n0: float, n1: float, a: float) -> float:
    """Blend *n0* → *n1* by *a*; exact at ``a == 0`` and ``a == 1``."""
    return ((1.0 - a) * n0) + (a * n1)


def cubic_interp(n0: float, n1: float, n2: float, n3: float, a: float) -> float:
    """Cubic interpolation between *n1* and *n2*.

    *n0* and *n3* are the neighbouring values outside the interval and
    shape the tangents at either end.
    """
    p = (n3 - n2) - (n0 - n1)
    q = (n0 - n1) - p
    r = n2 - n0
    s = n1
    return p * a * a * a + q * a * a + r * a + s


def make_int_range(n: float) -> float:
    """Fold *n* into ``(-2³⁰, 2³⁰)`` so it truncates to a safe integer.

    Coordinates far from the origin would otherwise overflow the 32-bit
    lattice hash and show discontinuities.
    """
    if n >= INT_RANGE:
        return (2.0 * math.fmod(n, INT_RANGE)) - INT_RANGE
    elif n <= -INT_RANGE:
        return (2.0 * math.fmod(n, INT_RANGE)) + INT_RANGE
    return n


def wrap_int32(n: int) -> int:
    """Wrap *n* to a signed 32-bit integer."""
    n &= 0xFFFFFFFF
    return n - 0x100000000 if n & 0x80000000 else n


def _shaped(a: float, quality: NoiseQuality) -> float:
    if quality is NoiseQuality.FAST:
        return a
    elif quality is NoiseQuality.STD:
        return s_curve3(a)
    return s_curve5(a)


# ═══════════════════════════════════════════════════════════════════
# 3-D gradient noise
# ═══════════════════════════════════════════════════════════════════

def gradient_noise_3d(
    fx: float,
    fy: float,
    fz: float,
    ix: int,
    iy: int,
    iz: int,
    seed: int = 0,
) -> float:
    """Contribution of lattice corner ``(ix, iy, iz)`` to the point ``(fx, fy, fz)``.

    The corner is hashed to one of the 256 gradient vectors; the result
    is that vector dotted with the offset from the corner to the point.
    Always ``0.0`` when the point sits on the corner.
    """
    index = wrap_int32(
        X_NOISE_GEN * ix
        + Y_NOISE_GEN * iy
        + Z_NOISE_GEN * iz
        + SEED_NOISE_GEN * seed
    )
    index ^= index >> SHIFT_NOISE_GEN
    index &= 0xFF

    gx, gy, gz = RANDOM_VECTORS[index]
    return ((gx * (fx - ix)) + (gy * (fy - iy)) + (gz * (fz - iz))) * GRADIENT_SCALE


def gradient_coherent_noise_3d(
    x: float,
    y: float,
    z: float,
    seed: int = 0,
    quality: NoiseQuality = NoiseQuality.STD,
) -> float:
    """Gradient coherent noise at ``(x, y, z)``.

    Parameters
    ----------
    x, y, z : float
        Sample coordinates.  Callers that accept arbitrary magnitudes
        should pass them through :func:`make_int_range` first.
    seed : int
        Perturbs the lattice hash.
    quality : NoiseQuality
        Interpolation quality.

    Returns
    -------
    float
        A value in approximately ``[-1, 1]``; exactly ``0.0`` at integer
        lattice points.
    """
    x0 = math.floor(x)
    x1 = x0 + 1
    y0 = math.floor(y)
    y1 = y0 + 1
    z0 = math.floor(z)
    z1 = z0 + 1

    xs = _shaped(x - x0, quality)
    ys = _shaped(y - y0, quality)
    zs = _shaped(z - z0, quality)

    # x varies fastest, then y, then z
    n0 = gradient_noise_3d(x, y, z, x0, y0, z0, seed)
    n1 = gradient_noise_3d(x, y, z, x1, y0, z0, seed)
    ix0 = linear_interp(n0, n1, xs)
    n0 = gradient_noise_3d(x, y, z, x0, y1, z0, seed)
    n1 = gradient_noise_3d(x, y, z, x1, y1, z0, seed)
    ix1 = linear_interp(n0, n1, xs)
    iy0 = linear_interp(ix0, ix1, ys)

    n0 = gradient_noise_3d(x, y, z, x0, y0, z1, seed)
    n1 = gradient_noise_3d(x, y, z, x1, y0, z1, seed)
    ix0 = linear_interp(n0, n1, xs)
    n0 = gradient_noise_3d(x, y, z, x0, y1, z1, seed)
    n1 = gradient_noise_3d(x, y, z, x1, y1, z1, seed)
    ix1 = linear_interp(n0, n1, xs)
    iy1 = linear_interp(ix0, ix1, ys)

    return linear_interp(iy0, iy1, zs)


# ═══════════════════════════════════════════════════════════════════
# 3-D value noise
# ═══════════════════════════════════════════════════════════════════

def int_value_noise_3d(x: int, y: int, z: int, seed: int = 0) -> int:
    """Pseudo-random integer in ``[0, 2³¹)`` for the lattice point ``(x, y, z)``."""
    n = (
        X_NOISE_GEN * x
        + Y_NOISE_GEN * y
        + Z_NOISE_GEN * z
        + SEED_NOISE_GEN * seed
    ) & 0x7FFFFFFF
    n = (n >> 13) ^ n
    return (n * (n * n * 60493 + 19990303) + 1376312589) & 0x7FFFFFFF


def value_noise_3d(x: int, y: int, z: int, seed: int = 0) -> float:
    """Pseudo-random float in ``[-1, 1]`` for the lattice point ``(x, y, z)``."""
    return 1.0 - (int_value_noise_3d(x, y, z, seed) / INT_RANGE)


def value_coherent_noise_3d(
    x: float,
    y: float,
    z: float,
    seed: int = 0,
    quality: NoiseQuality = NoiseQuality.STD,
) -> float:
    """Value coherent noise at ``(x, y, z)``, in ``[-1, 1]``.

    Same lattice walk as :func:`gradient_coherent_noise_3d` but each
    corner contributes its hashed scalar instead of a dot product.
    """
    x0 = math.floor(x)
    x1 = x0 + 1
    y0 = math.floor(y)
    y1 = y0 + 1
    z0 = math.floor(z)
    z1 = z0 + 1

    xs = _shaped(x - x0, quality)
    ys = _shaped(y - y0, quality)
    zs = _shaped(z - z0, quality)

    n0 = value_noise_3d(x0, y0, z0, seed)
    n1 = value_noise_3d(x1, y0, z0, seed)
    ix0 = linear_interp(n0, n1, xs)
    n0 = value_noise_3d(x0, y1, z0, seed)
    n1 = value_noise_3d(x1, y1, z0, seed)
    ix1 = linear_interp(n0, n1, xs)
    iy0 = linear_interp(ix0, ix1, ys)

    n0 = value_noise_3d(x0, y0, z1, seed)
    n1 = value_noise_3d(x1, y0, z1, seed)
    ix0 = linear_interp(n0, n1, xs)
    n0 = value_noise_3d(x0, y1, z1, seed)
    n1 = value_noise_3d(x1, y1, z1, seed)
    ix1 = linear_interp(n0, n1, xs)
    iy1 = linear_interp(ix0, ix1, ys)

    return linear_interp(iy0, iy1, zs)


# ═══════════════════════════════════════════════════════════════════
# 6-D gradient noise
# ═══════════════════════════════════════════════════════════════════

def _build_vectors_6d() -> Tuple[Tuple[float, ...], ...]:
    vectors = []
    for i in range(256):
        components = [value_noise_3d(i, axis, 0, seed=6) for axis in range(6)]
        length = math.sqrt(sum(c * c for c in components))
        vectors.append(tuple(c / length for c in components))
    return tuple(vectors)


RANDOM_VECTORS_6D: Tuple[Tuple[float, ...], ...] = _build_vectors_6d()


def gradient_noise_6d(
    point: Sequence[float],
    cell: Sequence[int],
    seed: int = 0,
) -> float:
    """6-D analogue of :func:`gradient_noise_3d`.

    *point* and *cell* are 6-sequences ``(x, y, z, w, u, v)``.
    """
    index = SEED_NOISE_GEN * seed
    for multiplier, corner in zip(_AXIS_NOISE_GEN_6D, cell):
        index += multiplier * corner
    index = wrap_int32(index)
    index ^= index >> SHIFT_NOISE_GEN
    index &= 0xFF

    gradient = RANDOM_VECTORS_6D[index]
    total = 0.0
    for g, p, c in zip(gradient, point, cell):
        total += g * (p - c)
    return total * GRADIENT_SCALE


def gradient_coherent_noise_6d(
    x: float,
    y: float,
    z: float,
    w: float,
    u: float,
    v: float,
    seed: int = 0,
    quality: NoiseQuality = NoiseQuality.STD,
) -> float:
    """Gradient coherent noise over six axes.

    The 64 corners of the enclosing hyper-cell are interpolated one
    axis at a time, ``x`` first and ``v`` last, mirroring the 3-D
    version.  Exactly ``0.0`` at integer lattice points.
    """
    point = (x, y, z, w, u, v)
    lower = [math.floor(c) for c in point]
    weights = [_shaped(c - c0, quality) for c, c0 in zip(point, lower)]
    corner: List[int] = list(lower)

    def blend(axis: int) -> float:
        if axis < 0:
            return gradient_noise_6d(point, corner, seed)
        corner[axis] = lower[axis]
        n0 = blend(axis - 1)
        corner[axis] = lower[axis] + 1
        n1 = blend(axis - 1)
        corner[axis] = lower[axis]
        return linear_interp(n0, n1, weights[axis])

    return blend(5)
