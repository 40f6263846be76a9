"""Single-entry output cache for a noise module.

A :class:`Cache` placed in front of a source that feeds several parents
evaluates that source only once when the parents sample the same point
in a row.
"""

from __future__ import annotations

import logging
from typing import Optional

from .module import Module, Point, PointwiseModule

logger = logging.getLogger(__name__)


class Cache(PointwiseModule):
    """Remember the most recent input point and output value.

    Re-wiring the source discards the cached entry.  The cache is
    plain instance state with no locking, so a graph that contains one
    must not be evaluated from several threads at once.
    """

    def __init__(self, source: Optional[Module] = None) -> None:
        super().__init__(1)
        self._cached_point: Optional[Point] = None
        self._cached_value = 0.0
        if source is not None:
            self.set_source_module(0, source)

    @property
    def is_cached(self) -> bool:
        return self._cached_point is not None

    def invalidate(self) -> None:
        if self._cached_point is not None:
            logger.debug("%s: cache invalidated", self.name)
        self._cached_point = None

    def set_source_module(self, index: int, source: Module) -> None:
        super().set_source_module(index, source)
        self.invalidate()

    def _evaluate(self, point: Point) -> float:
        if point != self._cached_point:
            self._cached_value = self._source_value(0, point)
            self._cached_point = point
        return self._cached_value
