"""Module graph — the uniform contract shared by every noise module.

A :class:`Module` has a fixed number of ordered *source module* slots
(0 for generators, 1–4 for everything else) and evaluates to a single
``float`` at a 3-D point.  Modules do not own their sources: the same
source may feed any number of parents, and its lifetime is managed by
the caller.  The graph must stay acyclic, which
:meth:`Module.set_source_module` enforces.

Evaluation recurses depth-first.  A module with an empty required slot
raises :class:`~errors.NoModuleError` the moment it is evaluated — a
malformed graph is a programming error, never a silent default.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .errors import CycleError, NoiseError, NoModuleError

Point = Tuple[float, ...]
"""A 3-tuple ``(x, y, z)`` or a 6-tuple ``(x, y, z, w, u, v)``."""


class Module:
    """Base class of all noise modules.

    Subclasses pass their source-slot count to ``__init__`` and
    implement :meth:`get_value`; those that make sense in six
    dimensions also implement :meth:`get_value_6d`.
    """

    def __init__(self, source_module_count: int = 0, name: Optional[str] = None) -> None:
        self._source_modules: List[Optional[Module]] = [None] * source_module_count
        self.name = name if name is not None else type(self).__name__

    # ── source modules ──────────────────────────────────────────────

    @property
    def source_module_count(self) -> int:
        """Number of source modules this module requires."""
        return len(self._source_modules)

    def get_source_module(self, index: int) -> "Module":
        """Return the source module in slot *index*.

        Raises ``IndexError`` for a slot this module does not have and
        :class:`NoModuleError` if the slot is still empty.
        """
        self._check_index(index)
        source = self._source_modules[index]
        if source is None:
            raise NoModuleError(
                f"{self.name}: source module {index} has not been set"
            )
        return source

    def set_source_module(self, index: int, source: "Module") -> None:
        """Connect *source* to slot *index*, replacing any previous module."""
        self._check_index(index)
        if not isinstance(source, Module):
            raise TypeError(
                f"source module must be a Module, got {type(source).__name__}"
            )
        if source is self or self in source.iter_descendants():
            raise CycleError(
                f"connecting {source.name} to {self.name} would create a cycle"
            )
        self._source_modules[index] = source

    def has_source_module(self, index: int) -> bool:
        self._check_index(index)
        return self._source_modules[index] is not None

    def iter_descendants(self) -> Iterator["Module"]:
        """Yield every module reachable through source slots, once each."""
        seen = set()
        stack = [m for m in self._source_modules if m is not None]
        while stack:
            module = stack.pop()
            if id(module) in seen:
                continue
            seen.add(id(module))
            yield module
            stack.extend(m for m in module._source_modules if m is not None)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._source_modules):
            raise IndexError(
                f"{self.name} has {len(self._source_modules)} source module "
                f"slot(s); index {index} is out of range"
            )

    def _source_value(self, index: int, point: Point) -> float:
        source = self.get_source_module(index)
        if len(point) == 3:
            return source.get_value(*point)
        return source.get_value_6d(*point)

    # ── evaluation ──────────────────────────────────────────────────

    def get_value(self, x: float, y: float, z: float) -> float:
        """Output value at ``(x, y, z)``."""
        raise NotImplementedError

    def get_value_6d(
        self, x: float, y: float, z: float, w: float, u: float, v: float
    ) -> float:
        """Output value at a 6-D point, for modules that support it."""
        raise NoiseError(f"{self.name} does not support 6-D evaluation")

    def __repr__(self) -> str:
        if self.name == type(self).__name__:
            return f"<{self.name}>"
        return f"<{type(self).__name__} {self.name!r}>"


class PointwiseModule(Module):
    """A module whose output depends only on its sources at the same point.

    Such modules work identically in three and six dimensions, so they
    implement a single :meth:`_evaluate` over a point tuple.
    """

    def get_value(self, x: float, y: float, z: float) -> float:
        return self._evaluate((x, y, z))

    def get_value_6d(
        self, x: float, y: float, z: float, w: float, u: float, v: float
    ) -> float:
        return self._evaluate((x, y, z, w, u, v))

    def _evaluate(self, point: Point) -> float:
        raise NotImplementedError
