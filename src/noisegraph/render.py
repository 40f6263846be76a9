"""Render a :class:`NoiseMap` to an image through a colour gradient.

Requires Pillow; imported lazily so the noise core does not depend on it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

import numpy as np

from .color import GradientColor, grayscale_gradient
from .noisemap import NoiseMap

if TYPE_CHECKING:
    from PIL import Image

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def colorize(noise_map: NoiseMap, gradient: Optional[GradientColor] = None) -> np.ndarray:
    """Map every sample through *gradient* into a ``(height, width, 4)`` uint8 array.

    Row 0 of the noise map becomes the top row of the array.
    """
    if gradient is None:
        gradient = grayscale_gradient()
    values = noise_map.as_array()
    # one gradient lookup per distinct sample, then a vectorised gather
    unique, inverse = np.unique(values, return_inverse=True)
    palette = np.array(
        [gradient.get_color(float(v)).as_tuple() for v in unique],
        dtype=np.uint8,
    ).reshape(-1, 4)
    return palette[inverse.reshape(-1)].reshape(values.shape + (4,))


def render_image(
    noise_map: NoiseMap, gradient: Optional[GradientColor] = None
) -> "Image.Image":
    """Colour *noise_map* into an RGBA Pillow image (grayscale by default)."""
    from PIL import Image

    return Image.fromarray(colorize(noise_map, gradient))


def render_png(
    noise_map: NoiseMap,
    path: PathLike,
    gradient: Optional[GradientColor] = None,
) -> Path:
    """Render *noise_map* and save it as a PNG at *path*."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    render_image(noise_map, gradient).save(out, format="PNG")
    logger.info("wrote %dx%d PNG to %s", noise_map.width, noise_map.height, out)
    return out
