"""Colours and colour gradients for rendering noise maps."""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .errors import InvalidParameterError


@dataclass(frozen=True)
class Color:
    """An 8-bit-per-channel RGBA colour."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.red, self.green, self.blue, self.alpha)


def _blend_channel(channel0: int, channel1: int, alpha: float) -> int:
    c0 = channel0 / 255.0
    c1 = channel1 / 255.0
    return int(((c1 * alpha) + (c0 * (1.0 - alpha))) * 255.0)


def lerp_color(color0: Color, color1: Color, alpha: float) -> Color:
    """Blend every channel (alpha included) linearly from *color0* to *color1*."""
    return Color(
        _blend_channel(color0.red, color1.red, alpha),
        _blend_channel(color0.green, color1.green, alpha),
        _blend_channel(color0.blue, color1.blue, alpha),
        _blend_channel(color0.alpha, color1.alpha, alpha),
    )


class GradientColor:
    """A piecewise-linear colour ramp over gradient positions.

    Positions are kept sorted and must be unique.  Positions below the
    first point or above the last take that end point's colour.
    """

    def __init__(self, points: Optional[Iterable[Tuple[float, Color]]] = None) -> None:
        self._positions: List[float] = []
        self._colors: List[Color] = []
        for position, color in points or ():
            self.add_gradient_point(position, color)

    @property
    def points(self) -> List[Tuple[float, Color]]:
        return list(zip(self._positions, self._colors))

    def add_gradient_point(self, position: float, color: Color) -> None:
        index = bisect.bisect_left(self._positions, position)
        if index < len(self._positions) and self._positions[index] == position:
            raise InvalidParameterError(f"duplicate gradient position {position}")
        self._positions.insert(index, position)
        self._colors.insert(index, color)

    def clear(self) -> None:
        self._positions.clear()
        self._colors.clear()

    def get_color(self, position: float) -> Color:
        count = len(self._positions)
        if count == 0:
            raise InvalidParameterError("gradient has no points")

        index_pos = bisect.bisect_right(self._positions, position)
        index0 = max(0, min(index_pos - 1, count - 1))
        index1 = max(0, min(index_pos, count - 1))
        if index0 == index1:
            return self._colors[index1]

        input0 = self._positions[index0]
        input1 = self._positions[index1]
        alpha = (position - input0) / (input1 - input0)
        return lerp_color(self._colors[index0], self._colors[index1], alpha)

    def __len__(self) -> int:
        return len(self._positions)


def grayscale_gradient() -> GradientColor:
    """Black at -1.0 to white at +1.0."""
    return GradientColor([
        (-1.0, Color(0, 0, 0)),
        (1.0, Color(255, 255, 255)),
    ])


def terrain_gradient() -> GradientColor:
    """Deep water through sand and grass up to snow; sea level at 0.0."""
    return GradientColor([
        (-1.00, Color(0, 0, 128)),
        (-0.20, Color(32, 64, 128)),
        (-0.04, Color(64, 96, 192)),
        (-0.02, Color(192, 192, 128)),
        (0.00, Color(0, 192, 0)),
        (0.25, Color(192, 192, 0)),
        (0.50, Color(160, 96, 64)),
        (0.75, Color(128, 255, 255)),
        (1.00, Color(255, 255, 255)),
    ])
