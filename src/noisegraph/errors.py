"""Exception types raised by noisegraph.

Every error is raised synchronously from the call that broke a
precondition.  Two families matter to callers:

- **Malformed graph** — :class:`NoModuleError`, :class:`CycleError`.
  The graph has to be fixed before evaluating again.
- **Invalid parameter** — :class:`InvalidParameterError`, raised
  eagerly by setters (octave counts, bounds, duplicate control points,
  map sizes) rather than at evaluation time.
"""

from __future__ import annotations


class NoiseError(Exception):
    """Base class for all noisegraph errors."""


class NoModuleError(NoiseError):
    """A required source module slot is empty."""


class CycleError(NoiseError):
    """Connecting a source module would make the graph cyclic."""


class InvalidParameterError(NoiseError, ValueError):
    """A parameter value was rejected by a setter."""
