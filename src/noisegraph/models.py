"""Surface models — sample a module over a simple shape.

Each model wraps a root module and maps shape coordinates onto 3-D
input points:

- :class:`Plane` — ``(x, z)`` on the ``y = 0`` plane
- :class:`Cylinder` — ``(angle°, height)`` on a unit-radius cylinder
- :class:`Sphere` — ``(latitude°, longitude°)`` on the unit sphere
- :class:`Line` — a parameter ``p ∈ [0, 1]`` along a segment
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from .errors import NoModuleError
from .module import Module

Vec3 = Tuple[float, float, float]


def lat_lon_to_xyz(lat: float, lon: float) -> Vec3:
    """Convert latitude/longitude in degrees to a point on the unit sphere.

    Latitude ±90° maps to ``y = ±1``; longitude 0° lies on the +x axis
    and 90° on the +z axis.
    """
    r = math.cos(math.radians(lat))
    x = r * math.cos(math.radians(lon))
    y = math.sin(math.radians(lat))
    z = r * math.sin(math.radians(lon))
    return (x, y, z)


class _Model:
    def __init__(self, module: Optional[Module] = None) -> None:
        self.module = module

    def _require_module(self) -> Module:
        if self.module is None:
            raise NoModuleError(f"{type(self).__name__} has no module")
        return self.module


class Plane(_Model):
    def get_value(self, x: float, z: float) -> float:
        return self._require_module().get_value(x, 0.0, z)


class Cylinder(_Model):
    def get_value(self, angle: float, height: float) -> float:
        """Sample at *angle* degrees around the y axis and at *height*."""
        x = math.cos(math.radians(angle))
        z = math.sin(math.radians(angle))
        return self._require_module().get_value(x, height, z)


class Sphere(_Model):
    def get_value(self, lat: float, lon: float) -> float:
        return self._require_module().get_value(*lat_lon_to_xyz(lat, lon))


class Line(_Model):
    """Sample along the segment from *start* to *end*.

    With *attenuate* set the output is scaled by ``4p(1 − p)``, which
    fades it to zero at both ends of the segment.
    """

    def __init__(
        self,
        module: Optional[Module] = None,
        start: Vec3 = (0.0, 0.0, 0.0),
        end: Vec3 = (1.0, 1.0, 1.0),
        attenuate: bool = True,
    ) -> None:
        super().__init__(module)
        self.start = start
        self.end = end
        self.attenuate = attenuate

    def get_value(self, p: float) -> float:
        x0, y0, z0 = self.start
        x1, y1, z1 = self.end
        x = (x1 - x0) * p + x0
        y = (y1 - y0) * p + y0
        z = (z1 - z0) * p + z0
        value = self._require_module().get_value(x, y, z)
        if self.attenuate:
            return p * (1.0 - p) * 4.0 * value
        return value
