"""Modifier modules — reshape the output of a single source module.

Each modifier has one source slot.  :class:`Terrace` and :class:`Curve`
map the source value through a sorted list of control points; the
others apply a closed-form function.
"""

from __future__ import annotations

import bisect
from typing import List, Optional, Tuple

from .errors import InvalidParameterError, NoiseError
from .module import Module, Point, PointwiseModule
from .noisegen import cubic_interp, linear_interp

DEFAULT_CLAMP_LOWER = -1.0
DEFAULT_CLAMP_UPPER = 1.0
DEFAULT_EXPONENT = 1.0
DEFAULT_SCALE = 1.0
DEFAULT_BIAS = 0.0


class _Modifier(PointwiseModule):
    def __init__(self, source: Optional[Module] = None) -> None:
        super().__init__(1)
        if source is not None:
            self.set_source_module(0, source)

    def _modify(self, value: float) -> float:
        raise NotImplementedError

    def _evaluate(self, point: Point) -> float:
        return self._modify(self._source_value(0, point))


def _clamp_index(index: int, count: int) -> int:
    return max(0, min(index, count - 1))


# ═══════════════════════════════════════════════════════════════════
# Closed-form modifiers
# ═══════════════════════════════════════════════════════════════════

class Abs(_Modifier):
    def _modify(self, value: float) -> float:
        return abs(value)


class Invert(_Modifier):
    def _modify(self, value: float) -> float:
        return -value


class Clamp(_Modifier):
    """Clamp the source value to ``[lower, upper]``."""

    def __init__(
        self,
        source: Optional[Module] = None,
        lower: float = DEFAULT_CLAMP_LOWER,
        upper: float = DEFAULT_CLAMP_UPPER,
    ) -> None:
        super().__init__(source)
        self.set_bounds(lower, upper)

    @property
    def lower_bound(self) -> float:
        return self._lower

    @property
    def upper_bound(self) -> float:
        return self._upper

    def set_bounds(self, lower: float, upper: float) -> None:
        if not lower < upper:
            raise InvalidParameterError(
                f"clamp bounds must satisfy lower < upper, got [{lower}, {upper}]"
            )
        self._lower = lower
        self._upper = upper

    def _modify(self, value: float) -> float:
        if value < self._lower:
            return self._lower
        if value > self._upper:
            return self._upper
        return value


class ScaleBias(_Modifier):
    """``value · scale + bias``."""

    def __init__(
        self,
        source: Optional[Module] = None,
        scale: float = DEFAULT_SCALE,
        bias: float = DEFAULT_BIAS,
    ) -> None:
        super().__init__(source)
        self.scale = scale
        self.bias = bias

    def _modify(self, value: float) -> float:
        return value * self.scale + self.bias


class Exponent(_Modifier):
    """Apply an exponential curve to a source value in ``[-1, 1]``.

    The value is mapped to ``[0, 1]``, raised to *exponent* and mapped
    back, so exponents above 1 push values towards -1.
    """

    def __init__(
        self, source: Optional[Module] = None, exponent: float = DEFAULT_EXPONENT
    ) -> None:
        super().__init__(source)
        self.exponent = exponent

    def _modify(self, value: float) -> float:
        return (abs((value + 1.0) / 2.0) ** self.exponent) * 2.0 - 1.0


# ═══════════════════════════════════════════════════════════════════
# Control-point modifiers
# ═══════════════════════════════════════════════════════════════════

class Terrace(_Modifier):
    """Map the source value onto a terrace-forming curve.

    Between two neighbouring control points the output follows
    ``lerp(p0, p1, α²)``, which is flat just above each point and rises
    steeply towards the next.  With *invert* set the curve is mirrored
    so the flat parts sit just below each point.  Values outside the
    control point range take the nearest end point.

    Control points are kept sorted and must be unique; at least two are
    needed to evaluate.
    """

    def __init__(
        self,
        source: Optional[Module] = None,
        control_points: Optional[List[float]] = None,
        invert: bool = False,
    ) -> None:
        super().__init__(source)
        self._points: List[float] = []
        self.invert = invert
        for value in control_points or ():
            self.add_control_point(value)

    @property
    def control_points(self) -> List[float]:
        return list(self._points)

    def add_control_point(self, value: float) -> None:
        index = bisect.bisect_left(self._points, value)
        if index < len(self._points) and self._points[index] == value:
            raise InvalidParameterError(f"duplicate terrace control point {value}")
        self._points.insert(index, value)

    def clear_control_points(self) -> None:
        self._points.clear()

    def make_control_points(self, count: int) -> None:
        """Replace the control points with *count* equally spaced points in ``[-1, 1]``."""
        if count < 2:
            raise InvalidParameterError(
                f"a terrace needs at least two control points, got {count}"
            )
        self.clear_control_points()
        step = 2.0 / (count - 1.0)
        value = -1.0
        for _ in range(count):
            self.add_control_point(value)
            value += step

    def _modify(self, value: float) -> float:
        points = self._points
        if len(points) < 2:
            raise NoiseError(
                f"{self.name} needs at least two control points, has {len(points)}"
            )

        index_pos = bisect.bisect_right(points, value)
        index0 = _clamp_index(index_pos - 1, len(points))
        index1 = _clamp_index(index_pos, len(points))
        if index0 == index1:
            return points[index1]

        value0 = points[index0]
        value1 = points[index1]
        alpha = (value - value0) / (value1 - value0)
        if self.invert:
            alpha = 1.0 - alpha
            value0, value1 = value1, value0

        alpha *= alpha
        return linear_interp(value0, value1, alpha)


class Curve(_Modifier):
    """Map the source value through a cubic spline of ``(input, output)`` pairs.

    Control points are sorted by input value, which must be unique; at
    least four are needed to evaluate.
    """

    def __init__(
        self,
        source: Optional[Module] = None,
        control_points: Optional[List[Tuple[float, float]]] = None,
    ) -> None:
        super().__init__(source)
        self._inputs: List[float] = []
        self._outputs: List[float] = []
        for input_value, output_value in control_points or ():
            self.add_control_point(input_value, output_value)

    @property
    def control_points(self) -> List[Tuple[float, float]]:
        return list(zip(self._inputs, self._outputs))

    def add_control_point(self, input_value: float, output_value: float) -> None:
        index = bisect.bisect_left(self._inputs, input_value)
        if index < len(self._inputs) and self._inputs[index] == input_value:
            raise InvalidParameterError(
                f"duplicate curve control point input {input_value}"
            )
        self._inputs.insert(index, input_value)
        self._outputs.insert(index, output_value)

    def clear_control_points(self) -> None:
        self._inputs.clear()
        self._outputs.clear()

    def _modify(self, value: float) -> float:
        count = len(self._inputs)
        if count < 4:
            raise NoiseError(f"{self.name} needs at least four control points, has {count}")

        index_pos = bisect.bisect_right(self._inputs, value)
        index0 = _clamp_index(index_pos - 2, count)
        index1 = _clamp_index(index_pos - 1, count)
        index2 = _clamp_index(index_pos, count)
        index3 = _clamp_index(index_pos + 1, count)

        outputs = self._outputs
        if index1 == index2:
            return outputs[index1]

        input0 = self._inputs[index1]
        input1 = self._inputs[index2]
        alpha = (value - input0) / (input1 - input0)
        return cubic_interp(
            outputs[index0], outputs[index1], outputs[index2], outputs[index3], alpha
        )
