"""Combiner modules — merge the outputs of two source modules.

Each combiner has two source slots and evaluates both sources at the
same point.  All combiners work in three and six dimensions.
"""

from __future__ import annotations

import math

from .module import Point, PointwiseModule


class _Combiner(PointwiseModule):
    def __init__(self, source0=None, source1=None) -> None:
        super().__init__(2)
        if source0 is not None:
            self.set_source_module(0, source0)
        if source1 is not None:
            self.set_source_module(1, source1)

    def _combine(self, a: float, b: float) -> float:
        raise NotImplementedError

    def _evaluate(self, point: Point) -> float:
        return self._combine(self._source_value(0, point), self._source_value(1, point))


class Add(_Combiner):
    """Sum of the two sources."""

    def _combine(self, a: float, b: float) -> float:
        return a + b


class Subtract(_Combiner):
    """Source 0 minus source 1."""

    def _combine(self, a: float, b: float) -> float:
        return a - b


class Multiply(_Combiner):
    def _combine(self, a: float, b: float) -> float:
        return a * b


class Min(_Combiner):
    def _combine(self, a: float, b: float) -> float:
        return min(a, b)


class Max(_Combiner):
    def _combine(self, a: float, b: float) -> float:
        return max(a, b)


class Power(_Combiner):
    """Source 0 raised to the power of source 1.

    Edge cases follow C's ``pow``: a negative base with a non-integral
    exponent yields NaN, zero raised to a negative power yields an
    infinity, and overflow yields an infinity signed like the base when
    the exponent is an odd integer.
    """

    def _combine(self, a: float, b: float) -> float:
        try:
            return math.pow(a, b)
        except ValueError:
            if a == 0.0 and b < 0.0:
                return _signed_inf(a, b)
            return math.nan
        except OverflowError:
            return _signed_inf(a, b)


def _signed_inf(a: float, b: float) -> float:
    # only an odd integer exponent keeps the sign of a negative base
    if float(b).is_integer() and math.fmod(b, 2.0) != 0.0:
        return math.copysign(math.inf, a)
    return math.inf
