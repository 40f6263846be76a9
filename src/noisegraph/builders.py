"""Noise map builders — fill a :class:`NoiseMap` by sampling a surface model.

Builders
--------
- :class:`NoiseMapBuilderPlane` — rectangle on the ``y = 0`` plane,
  optionally seamless
- :class:`NoiseMapBuilderCylinder` — angle/height patch of a cylinder
- :class:`NoiseMapBuilderSphere` — latitude/longitude patch of a sphere

Each builder walks the destination map row by row (``y`` outer, ``x``
inner), stepping ``extent / size`` per cell from the lower bound, and
calls the optional row callback after every finished row.

Convenience functions
---------------------
- :func:`build_plane_map`, :func:`build_cylinder_map`,
  :func:`build_sphere_map` — one-call wrappers returning a fresh map
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from .errors import InvalidParameterError, NoModuleError
from .models import Cylinder, Plane, Sphere
from .module import Module
from .noisegen import linear_interp
from .noisemap import NoiseMap

logger = logging.getLogger(__name__)

RowCallback = Callable[[int], None]
Bounds = Tuple[float, float, float, float]


def _check_bounds(lower_a: float, upper_a: float, lower_b: float, upper_b: float) -> Bounds:
    if not (lower_a < upper_a and lower_b < upper_b):
        raise InvalidParameterError(
            f"bounds must be strictly increasing, got "
            f"[{lower_a}, {upper_a}] x [{lower_b}, {upper_b}]"
        )
    return (lower_a, upper_a, lower_b, upper_b)


# ═══════════════════════════════════════════════════════════════════
# Base builder
# ═══════════════════════════════════════════════════════════════════

class NoiseMapBuilder:
    """Shared state of every builder: source, destination, size and callback."""

    def __init__(self) -> None:
        self._source: Optional[Module] = None
        self._dest: Optional[NoiseMap] = None
        self._dest_width = 0
        self._dest_height = 0
        self._callback: Optional[RowCallback] = None
        self._bounds: Optional[Bounds] = None

    @property
    def dest_width(self) -> int:
        return self._dest_width

    @property
    def dest_height(self) -> int:
        return self._dest_height

    @property
    def dest_noise_map(self) -> Optional[NoiseMap]:
        return self._dest

    def set_source_module(self, module: Module) -> None:
        self._source = module

    def set_dest_noise_map(self, noise_map: NoiseMap) -> None:
        self._dest = noise_map

    def set_dest_size(self, width: int, height: int) -> None:
        self._dest_width = width
        self._dest_height = height

    def set_callback(self, callback: Optional[RowCallback]) -> None:
        """Register ``callback(row_index)``, called once per finished row."""
        self._callback = callback

    def _prepare(self) -> Tuple[Module, NoiseMap, Bounds]:
        if self._source is None:
            raise NoModuleError(f"{type(self).__name__}: source module has not been set")
        if self._dest_width <= 0 or self._dest_height <= 0:
            raise InvalidParameterError(
                f"{type(self).__name__}: destination size must be positive, "
                f"got {self._dest_width}x{self._dest_height}"
            )
        if self._bounds is None:
            raise InvalidParameterError(f"{type(self).__name__}: bounds have not been set")
        if self._dest is None:
            self._dest = NoiseMap()
        self._dest.set_size(self._dest_width, self._dest_height)
        return self._source, self._dest, self._bounds

    def _row_finished(self, row: int) -> None:
        if self._callback is not None:
            self._callback(row)

    def build(self) -> NoiseMap:
        """Fill the destination map (creating one if none was set) and return it."""
        source, dest, bounds = self._prepare()
        logger.debug(
            "%s: building %dx%d map over %s",
            type(self).__name__, dest.width, dest.height, bounds,
        )
        self._fill(source, dest, bounds)
        logger.debug("%s: build finished", type(self).__name__)
        return dest

    def _fill(self, source: Module, dest: NoiseMap, bounds: Bounds) -> None:
        raise NotImplementedError


# ═══════════════════════════════════════════════════════════════════
# Concrete builders
# ═══════════════════════════════════════════════════════════════════

class NoiseMapBuilderPlane(NoiseMapBuilder):
    """Sample a rectangle ``[lower_x, upper_x] × [lower_z, upper_z]`` of the plane.

    With *seamless* set, each sample is a bilinear blend of the four
    points one full extent apart, so opposite edges of the map match and
    the result tiles without visible seams.
    """

    def __init__(self, seamless: bool = False) -> None:
        super().__init__()
        self.seamless = seamless

    @property
    def bounds(self) -> Optional[Bounds]:
        return self._bounds

    def set_bounds(self, lower_x: float, upper_x: float, lower_z: float, upper_z: float) -> None:
        self._bounds = _check_bounds(lower_x, upper_x, lower_z, upper_z)

    def _fill(self, source: Module, dest: NoiseMap, bounds: Bounds) -> None:
        lower_x, upper_x, lower_z, upper_z = bounds
        plane = Plane(source)
        x_extent = upper_x - lower_x
        z_extent = upper_z - lower_z
        x_delta = x_extent / dest.width
        z_delta = z_extent / dest.height

        z_cur = lower_z
        for z in range(dest.height):
            x_cur = lower_x
            for x in range(dest.width):
                if not self.seamless:
                    value = plane.get_value(x_cur, z_cur)
                else:
                    sw = plane.get_value(x_cur, z_cur)
                    se = plane.get_value(x_cur + x_extent, z_cur)
                    nw = plane.get_value(x_cur, z_cur + z_extent)
                    ne = plane.get_value(x_cur + x_extent, z_cur + z_extent)
                    x_blend = 1.0 - ((x_cur - lower_x) / x_extent)
                    z_blend = 1.0 - ((z_cur - lower_z) / z_extent)
                    z0 = linear_interp(sw, se, x_blend)
                    z1 = linear_interp(nw, ne, x_blend)
                    value = linear_interp(z0, z1, z_blend)
                dest.set_value(x, z, value)
                x_cur += x_delta
            z_cur += z_delta
            self._row_finished(z)


class NoiseMapBuilderCylinder(NoiseMapBuilder):
    """Sample angles ``[lower, upper]`` (degrees) and heights of a unit cylinder."""

    @property
    def bounds(self) -> Optional[Bounds]:
        return self._bounds

    def set_bounds(
        self,
        lower_angle: float,
        upper_angle: float,
        lower_height: float,
        upper_height: float,
    ) -> None:
        self._bounds = _check_bounds(lower_angle, upper_angle, lower_height, upper_height)

    def _fill(self, source: Module, dest: NoiseMap, bounds: Bounds) -> None:
        lower_angle, upper_angle, lower_height, upper_height = bounds
        cylinder = Cylinder(source)
        x_delta = (upper_angle - lower_angle) / dest.width
        y_delta = (upper_height - lower_height) / dest.height

        cur_height = lower_height
        for y in range(dest.height):
            cur_angle = lower_angle
            for x in range(dest.width):
                dest.set_value(x, y, cylinder.get_value(cur_angle, cur_height))
                cur_angle += x_delta
            cur_height += y_delta
            self._row_finished(y)


class NoiseMapBuilderSphere(NoiseMapBuilder):
    """Sample a latitude/longitude rectangle of the unit sphere.

    Rows run from the southern to the northern latitude bound, columns
    from the western to the eastern longitude bound, all in degrees.
    """

    @property
    def bounds(self) -> Optional[Bounds]:
        return self._bounds

    def set_bounds(self, south: float, north: float, west: float, east: float) -> None:
        self._bounds = _check_bounds(south, north, west, east)

    def _fill(self, source: Module, dest: NoiseMap, bounds: Bounds) -> None:
        south, north, west, east = bounds
        sphere = Sphere(source)
        x_delta = (east - west) / dest.width
        y_delta = (north - south) / dest.height

        cur_lat = south
        for y in range(dest.height):
            cur_lon = west
            for x in range(dest.width):
                dest.set_value(x, y, sphere.get_value(cur_lat, cur_lon))
                cur_lon += x_delta
            cur_lat += y_delta
            self._row_finished(y)


# ═══════════════════════════════════════════════════════════════════
# Convenience
# ═══════════════════════════════════════════════════════════════════

def build_plane_map(
    module: Module,
    width: int,
    height: int,
    bounds: Bounds = (-1.0, 1.0, -1.0, 1.0),
    *,
    seamless: bool = False,
    callback: Optional[RowCallback] = None,
) -> NoiseMap:
    """Sample *module* over a plane rectangle into a new ``width × height`` map."""
    builder = NoiseMapBuilderPlane(seamless=seamless)
    builder.set_source_module(module)
    builder.set_dest_noise_map(NoiseMap())
    builder.set_dest_size(width, height)
    builder.set_bounds(*bounds)
    builder.set_callback(callback)
    return builder.build()


def build_cylinder_map(
    module: Module,
    width: int,
    height: int,
    bounds: Bounds = (-180.0, 180.0, -1.0, 1.0),
    *,
    callback: Optional[RowCallback] = None,
) -> NoiseMap:
    """Sample *module* over a cylinder patch into a new map."""
    builder = NoiseMapBuilderCylinder()
    builder.set_source_module(module)
    builder.set_dest_noise_map(NoiseMap())
    builder.set_dest_size(width, height)
    builder.set_bounds(*bounds)
    builder.set_callback(callback)
    return builder.build()


def build_sphere_map(
    module: Module,
    width: int,
    height: int,
    bounds: Bounds = (-90.0, 90.0, -180.0, 180.0),
    *,
    callback: Optional[RowCallback] = None,
) -> NoiseMap:
    """Sample *module* over a sphere patch ``(south, north, west, east)`` into a new map."""
    builder = NoiseMapBuilderSphere()
    builder.set_source_module(module)
    builder.set_dest_noise_map(NoiseMap())
    builder.set_dest_size(width, height)
    builder.set_bounds(*bounds)
    builder.set_callback(callback)
    return builder.build()
