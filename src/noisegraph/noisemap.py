"""Dense 2-D buffer of noise samples."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .errors import InvalidParameterError

MAX_MAP_SIZE = 32767


class NoiseMap:
    """A ``width × height`` grid of float samples backed by a numpy array.

    The array is indexed ``[y, x]`` (row-major, one row per ``y``).
    Reads outside the map return :attr:`border_value`; writes outside
    the map are ignored.

    Parameters
    ----------
    width, height : int
        Initial size, each in ``[0, 32767]``.
    border_value : float
        Value returned for out-of-bounds reads.
    """

    def __init__(self, width: int = 0, height: int = 0, border_value: float = 0.0) -> None:
        self.border_value = border_value
        self._data = np.zeros((0, 0), dtype=np.float64)
        self.set_size(width, height)

    @classmethod
    def from_array(cls, array, border_value: float = 0.0) -> "NoiseMap":
        """Build a map from a 2-D array-like indexed ``[y, x]``."""
        data = np.asarray(array, dtype=np.float64)
        if data.ndim != 2:
            raise InvalidParameterError(f"noise map data must be 2-D, got shape {data.shape}")
        height, width = data.shape
        noise_map = cls(width, height, border_value)
        noise_map._data[...] = data
        return noise_map

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    def set_size(self, width: int, height: int) -> None:
        """Resize the map; existing contents are discarded and zeroed."""
        if not (0 <= width <= MAX_MAP_SIZE and 0 <= height <= MAX_MAP_SIZE):
            raise InvalidParameterError(
                f"noise map size must be within [0, {MAX_MAP_SIZE}], got {width}x{height}"
            )
        self._data = np.zeros((height, width), dtype=np.float64)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_value(self, x: int, y: int) -> float:
        if self._in_bounds(x, y):
            return float(self._data[y, x])
        return self.border_value

    def set_value(self, x: int, y: int, value: float) -> None:
        if self._in_bounds(x, y):
            self._data[y, x] = value

    def set_row(self, y: int, values) -> None:
        """Write a whole row; *values* must have :attr:`width` entries."""
        if 0 <= y < self.height:
            self._data[y, :] = values

    def clear(self, value: float = 0.0) -> None:
        self._data.fill(value)

    def copy(self) -> "NoiseMap":
        other = NoiseMap(border_value=self.border_value)
        other._data = self._data.copy()
        return other

    def as_array(self) -> np.ndarray:
        """The backing array itself (not a copy), shape ``(height, width)``."""
        return self._data

    def min_max(self) -> Optional[tuple]:
        """``(min, max)`` of all samples, or ``None`` for an empty map."""
        if self._data.size == 0:
            return None
        return float(self._data.min()), float(self._data.max())

    def __repr__(self) -> str:
        return f"NoiseMap({self.width}x{self.height})"
