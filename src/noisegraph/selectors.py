"""Selector modules — choose or blend between two sources via a control module.

Both selectors use slot 0 and slot 1 for the two sources and slot 2 for
the control module.
"""

from __future__ import annotations

import logging
from typing import Optional

from .errors import InvalidParameterError
from .module import Module, Point, PointwiseModule
from .noisegen import linear_interp, s_curve3

logger = logging.getLogger(__name__)

DEFAULT_SELECT_LOWER_BOUND = -1.0
DEFAULT_SELECT_UPPER_BOUND = 1.0
DEFAULT_SELECT_EDGE_FALLOFF = 0.0


class _Selector(PointwiseModule):
    def __init__(
        self,
        source0: Optional[Module] = None,
        source1: Optional[Module] = None,
        control: Optional[Module] = None,
    ) -> None:
        super().__init__(3)
        for index, source in enumerate((source0, source1, control)):
            if source is not None:
                self.set_source_module(index, source)

    @property
    def control_module(self) -> Module:
        return self.get_source_module(2)

    @control_module.setter
    def control_module(self, module: Module) -> None:
        self.set_source_module(2, module)


class Blend(_Selector):
    """Linear blend of sources 0 and 1 weighted by the control module.

    A control value of -1 gives source 0, +1 gives source 1.
    """

    def _evaluate(self, point: Point) -> float:
        v0 = self._source_value(0, point)
        v1 = self._source_value(1, point)
        alpha = (self._source_value(2, point) + 1.0) / 2.0
        return linear_interp(v0, v1, alpha)


class Select(_Selector):
    """Pick source 0 or source 1 depending on the control value.

    Source 1 is output where the control value lies within
    ``[lower_bound, upper_bound]`` and source 0 elsewhere.  A positive
    *edge_falloff* smooths each transition over ``bound ± falloff`` with
    an S-curve.  The falloff is capped at half the bound range and is
    re-capped whenever the bounds change.
    """

    def __init__(
        self,
        source0: Optional[Module] = None,
        source1: Optional[Module] = None,
        control: Optional[Module] = None,
        lower_bound: float = DEFAULT_SELECT_LOWER_BOUND,
        upper_bound: float = DEFAULT_SELECT_UPPER_BOUND,
        edge_falloff: float = DEFAULT_SELECT_EDGE_FALLOFF,
    ) -> None:
        super().__init__(source0, source1, control)
        self._edge_falloff = 0.0
        self.set_bounds(lower_bound, upper_bound)
        self.edge_falloff = edge_falloff

    @property
    def lower_bound(self) -> float:
        return self._lower

    @property
    def upper_bound(self) -> float:
        return self._upper

    def set_bounds(self, lower: float, upper: float) -> None:
        if not lower < upper:
            raise InvalidParameterError(
                f"select bounds must satisfy lower < upper, got [{lower}, {upper}]"
            )
        self._lower = lower
        self._upper = upper
        self.edge_falloff = self._edge_falloff

    @property
    def edge_falloff(self) -> float:
        return self._edge_falloff

    @edge_falloff.setter
    def edge_falloff(self, value: float) -> None:
        half = (self._upper - self._lower) / 2.0
        if value > half:
            logger.debug("%s: edge falloff %g capped to %g", self.name, value, half)
            value = half
        self._edge_falloff = value

    def _evaluate(self, point: Point) -> float:
        control = self._source_value(2, point)
        lower = self._lower
        upper = self._upper
        falloff = self._edge_falloff

        if falloff > 0.0:
            if control < lower - falloff:
                return self._source_value(0, point)
            if control < lower + falloff:
                lower_curve = lower - falloff
                upper_curve = lower + falloff
                alpha = s_curve3((control - lower_curve) / (upper_curve - lower_curve))
                return linear_interp(
                    self._source_value(0, point), self._source_value(1, point), alpha
                )
            if control < upper - falloff:
                return self._source_value(1, point)
            if control < upper + falloff:
                lower_curve = upper - falloff
                upper_curve = upper + falloff
                alpha = s_curve3((control - lower_curve) / (upper_curve - lower_curve))
                return linear_interp(
                    self._source_value(1, point), self._source_value(0, point), alpha
                )
            return self._source_value(0, point)

        if control < lower or control > upper:
            return self._source_value(0, point)
        return self._source_value(1, point)
