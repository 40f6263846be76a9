"""Transformer modules — move the input point before evaluating a source.

These modules change *where* their source is sampled rather than what
it returns.  They work in three dimensions only.
"""

from __future__ import annotations

import math
from typing import Optional

from .generators import DEFAULT_FREQUENCY, DEFAULT_SEED, Perlin
from .module import Module
from .noisegen import wrap_int32

DEFAULT_TURBULENCE_POWER = 1.0
DEFAULT_TURBULENCE_ROUGHNESS = 3


class _Transformer(Module):
    def __init__(self, source: Optional[Module] = None, slots: int = 1) -> None:
        super().__init__(slots)
        if source is not None:
            self.set_source_module(0, source)


# ═══════════════════════════════════════════════════════════════════
# Displacement
# ═══════════════════════════════════════════════════════════════════

class Displace(_Transformer):
    """Offset the input point by the outputs of three displacement modules.

    Slot 0 is the source; slots 1, 2 and 3 hold the x, y and z
    displacement modules, each evaluated at the original point.
    """

    def __init__(
        self,
        source: Optional[Module] = None,
        x_displace: Optional[Module] = None,
        y_displace: Optional[Module] = None,
        z_displace: Optional[Module] = None,
    ) -> None:
        super().__init__(source, slots=4)
        for index, module in enumerate((x_displace, y_displace, z_displace), start=1):
            if module is not None:
                self.set_source_module(index, module)

    def set_displace_modules(self, x: Module, y: Module, z: Module) -> None:
        self.set_source_module(1, x)
        self.set_source_module(2, y)
        self.set_source_module(3, z)

    def get_value(self, x: float, y: float, z: float) -> float:
        dx = x + self.get_source_module(1).get_value(x, y, z)
        dy = y + self.get_source_module(2).get_value(x, y, z)
        dz = z + self.get_source_module(3).get_value(x, y, z)
        return self.get_source_module(0).get_value(dx, dy, dz)


class Turbulence(_Transformer):
    """Randomly displace the input point with three Perlin noise modules.

    Parameters
    ----------
    frequency : float
        Frequency of the distortion noise; how quickly the displacement
        changes across space.
    power : float
        Scale of the displacement.
    roughness : int
        Octave count of the distortion noise.
    seed : int
        The x, y and z distortion modules use ``seed``, ``seed + 1`` and
        ``seed + 2``.
    """

    def __init__(
        self,
        source: Optional[Module] = None,
        *,
        frequency: float = DEFAULT_FREQUENCY,
        power: float = DEFAULT_TURBULENCE_POWER,
        roughness: int = DEFAULT_TURBULENCE_ROUGHNESS,
        seed: int = DEFAULT_SEED,
    ) -> None:
        super().__init__(source)
        self._x_distort = Perlin()
        self._y_distort = Perlin()
        self._z_distort = Perlin()
        self.power = power
        self.frequency = frequency
        self.roughness = roughness
        self.seed = seed

    @property
    def frequency(self) -> float:
        return self._x_distort.frequency

    @frequency.setter
    def frequency(self, value: float) -> None:
        for module in (self._x_distort, self._y_distort, self._z_distort):
            module.frequency = value

    @property
    def roughness(self) -> int:
        return self._x_distort.octave_count

    @roughness.setter
    def roughness(self, value: int) -> None:
        for module in (self._x_distort, self._y_distort, self._z_distort):
            module.octave_count = value

    @property
    def seed(self) -> int:
        return self._x_distort.seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._x_distort.seed = value
        self._y_distort.seed = wrap_int32(value + 1)
        self._z_distort.seed = wrap_int32(value + 2)

    def get_value(self, x: float, y: float, z: float) -> float:
        x0 = x + (12414.0 / 65536.0)
        y0 = y + (65124.0 / 65536.0)
        z0 = z + (31337.0 / 65536.0)
        x1 = x + (26519.0 / 65536.0)
        y1 = y + (18128.0 / 65536.0)
        z1 = z + (60493.0 / 65536.0)
        x2 = x + (53820.0 / 65536.0)
        y2 = y + (11213.0 / 65536.0)
        z2 = z + (44845.0 / 65536.0)

        x_distort = x + self._x_distort.get_value(x0, y0, z0) * self.power
        y_distort = y + self._y_distort.get_value(x1, y1, z1) * self.power
        z_distort = z + self._z_distort.get_value(x2, y2, z2) * self.power
        return self.get_source_module(0).get_value(x_distort, y_distort, z_distort)


# ═══════════════════════════════════════════════════════════════════
# Affine transforms
# ═══════════════════════════════════════════════════════════════════

class ScalePoint(_Transformer):
    """Multiply each input coordinate by a per-axis scale."""

    def __init__(
        self,
        source: Optional[Module] = None,
        x_scale: float = 1.0,
        y_scale: float = 1.0,
        z_scale: float = 1.0,
    ) -> None:
        super().__init__(source)
        self.x_scale = x_scale
        self.y_scale = y_scale
        self.z_scale = z_scale

    def get_value(self, x: float, y: float, z: float) -> float:
        return self.get_source_module(0).get_value(
            x * self.x_scale, y * self.y_scale, z * self.z_scale
        )


class TranslatePoint(_Transformer):
    """Add a per-axis offset to each input coordinate."""

    def __init__(
        self,
        source: Optional[Module] = None,
        x_translation: float = 0.0,
        y_translation: float = 0.0,
        z_translation: float = 0.0,
    ) -> None:
        super().__init__(source)
        self.x_translation = x_translation
        self.y_translation = y_translation
        self.z_translation = z_translation

    def get_value(self, x: float, y: float, z: float) -> float:
        return self.get_source_module(0).get_value(
            x + self.x_translation, y + self.y_translation, z + self.z_translation
        )


class RotatePoint(_Transformer):
    """Rotate the input point about the origin.

    Angles are in degrees around the x, y and z axes.  The rotation
    matrix is rebuilt whenever :meth:`set_angles` is called.
    """

    def __init__(
        self,
        source: Optional[Module] = None,
        x_angle: float = 0.0,
        y_angle: float = 0.0,
        z_angle: float = 0.0,
    ) -> None:
        super().__init__(source)
        self.set_angles(x_angle, y_angle, z_angle)

    @property
    def angles(self):
        return (self._x_angle, self._y_angle, self._z_angle)

    def set_angles(self, x_angle: float, y_angle: float, z_angle: float) -> None:
        x_cos = math.cos(math.radians(x_angle))
        y_cos = math.cos(math.radians(y_angle))
        z_cos = math.cos(math.radians(z_angle))
        x_sin = math.sin(math.radians(x_angle))
        y_sin = math.sin(math.radians(y_angle))
        z_sin = math.sin(math.radians(z_angle))

        self._x1 = y_sin * x_sin * z_sin + y_cos * z_cos
        self._y1 = x_cos * z_sin
        self._z1 = y_sin * z_cos - y_cos * x_sin * z_sin
        self._x2 = y_sin * x_sin * z_cos - y_cos * z_sin
        self._y2 = x_cos * z_cos
        self._z2 = -y_cos * x_sin * z_cos - y_sin * z_sin
        self._x3 = -y_sin * x_cos
        self._y3 = x_sin
        self._z3 = y_cos * x_cos

        self._x_angle = x_angle
        self._y_angle = y_angle
        self._z_angle = z_angle

    def get_value(self, x: float, y: float, z: float) -> float:
        nx = (self._x1 * x) + (self._y1 * y) + (self._z1 * z)
        ny = (self._x2 * x) + (self._y2 * y) + (self._z2 * z)
        nz = (self._x3 * x) + (self._y3 * y) + (self._z3 * z)
        return self.get_source_module(0).get_value(nx, ny, nz)
