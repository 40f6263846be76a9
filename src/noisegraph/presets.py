"""Texture presets — ready-made module graphs with matching colour gradients.

Usage
-----
>>> from noisegraph.presets import GRANITE, build_texture_graph, build_texture_map
>>> graph = build_texture_graph("granite", seed=7)
>>> noise_map = build_texture_map(GRANITE, size=256)

Each preset is a :class:`TextureConfig`; the graph itself is produced
by the factory registered under the preset's name.  Internal module
seeds are offsets from the config seed, so changing the seed gives a
different but equally styled texture.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Optional, Tuple, Union

from .builders import build_plane_map, build_sphere_map
from .color import Color, GradientColor
from .combiners import Add
from .errors import InvalidParameterError
from .generators import Billow, Cylinders, Perlin, RidgedMulti, Voronoi
from .modifiers import ScaleBias
from .module import Module
from .noisegen import NoiseQuality
from .noisemap import NoiseMap
from .selectors import Select
from .transforms import RotatePoint, ScalePoint, TranslatePoint, Turbulence

GradientPoint = Tuple[float, Tuple[int, int, int]]


# ═══════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════

@dataclass
class TextureConfig:
    """Parameters of one texture preset.

    Attributes
    ----------
    name : str
        Key of the graph factory in :data:`TEXTURE_GRAPHS`.
    seed : int
        Base seed; graph modules use small offsets from it.
    texture_size : int
        Default edge length in pixels of a planar texture.
    seamless : bool
        Whether planar textures are built to tile seamlessly.
    gradient_points : tuple
        ``(position, (r, g, b))`` pairs of the colour gradient.
    """

    name: str
    seed: int = 0
    texture_size: int = 256
    seamless: bool = True
    gradient_points: Tuple[GradientPoint, ...] = field(default_factory=tuple)

    def gradient(self) -> GradientColor:
        return GradientColor(
            (position, Color(*rgb)) for position, rgb in self.gradient_points
        )

    def with_seed(self, seed: int) -> "TextureConfig":
        return replace(self, seed=seed)


# ═══════════════════════════════════════════════════════════════════
# Graph factories
# ═══════════════════════════════════════════════════════════════════

def _granite(seed: int) -> Module:
    primary = Billow(
        seed=seed,
        frequency=8.0,
        persistence=0.625,
        lacunarity=2.18359375,
        octave_count=6,
    )
    spots = Voronoi(seed=seed + 1, frequency=16.0, enable_distance=True)
    scaled_spots = ScaleBias(spots, scale=-0.5, bias=0.0)
    combined = Add(primary, scaled_spots)
    return Turbulence(combined, seed=seed + 2, frequency=4.0, power=1.0 / 8.0, roughness=6)


def _wood(seed: int) -> Module:
    base = Cylinders(frequency=16.0)
    grain = Perlin(
        seed=seed,
        frequency=48.0,
        persistence=0.5,
        lacunarity=2.20703125,
        octave_count=3,
    )
    stretched = ScalePoint(grain, y_scale=0.25)
    scaled_grain = ScaleBias(stretched, scale=0.25, bias=0.125)
    combined = Add(base, scaled_grain)
    perturbed = Turbulence(
        combined, seed=seed + 1, frequency=4.0, power=1.0 / 256.0, roughness=4
    )
    translated = TranslatePoint(perturbed, z_translation=1.48)
    rotated = RotatePoint(translated, x_angle=24.0)
    return Turbulence(rotated, seed=seed + 2, frequency=2.0, power=1.0 / 64.0, roughness=4)


def _jade(seed: int) -> Module:
    primary = RidgedMulti(
        seed=seed, frequency=2.0, lacunarity=2.20703125, octave_count=6
    )
    swirls = Cylinders(frequency=2.0)
    rotated = RotatePoint(swirls, x_angle=90.0, y_angle=25.0, z_angle=5.0)
    perturbed = Turbulence(
        rotated, seed=seed + 1, frequency=4.0, power=1.0 / 4.0, roughness=4
    )
    scaled = ScaleBias(perturbed, scale=0.25, bias=0.0)
    combined = Add(primary, scaled)
    return Turbulence(combined, seed=seed + 2, frequency=4.0, power=1.0 / 16.0, roughness=2)


def _slime(seed: int) -> Module:
    large = Billow(
        seed=seed,
        frequency=4.0,
        lacunarity=2.12109375,
        octave_count=1,
        quality=NoiseQuality.BEST,
    )
    small = Billow(
        seed=seed + 1,
        frequency=24.0,
        lacunarity=2.14453125,
        octave_count=1,
        quality=NoiseQuality.BEST,
    )
    small_scaled = ScaleBias(small, scale=0.5, bias=-0.5)
    control = RidgedMulti(
        seed=seed, frequency=2.0, lacunarity=2.20703125, octave_count=3
    )
    selected = Select(
        large,
        small_scaled,
        control,
        lower_bound=-0.375,
        upper_bound=0.375,
        edge_falloff=0.5,
    )
    return Turbulence(selected, seed=seed + 2, frequency=8.0, power=1.0 / 32.0, roughness=2)


TEXTURE_GRAPHS: Dict[str, Callable[[int], Module]] = {
    "granite": _granite,
    "wood": _wood,
    "jade": _jade,
    "slime": _slime,
}


# ═══════════════════════════════════════════════════════════════════
# Preset configs
# ═══════════════════════════════════════════════════════════════════

GRANITE = TextureConfig(
    name="granite",
    gradient_points=(
        (-1.0000, (0, 0, 0)),
        (-0.9375, (0, 0, 0)),
        (-0.8750, (216, 216, 242)),
        (0.0000, (191, 191, 191)),
        (0.5000, (210, 116, 125)),
        (0.7500, (210, 113, 98)),
        (1.0000, (255, 176, 192)),
    ),
)

WOOD = TextureConfig(
    name="wood",
    gradient_points=(
        (-1.00, (189, 94, 4)),
        (0.50, (144, 48, 6)),
        (1.00, (60, 10, 8)),
    ),
)

JADE = TextureConfig(
    name="jade",
    gradient_points=(
        (-1.000, (24, 146, 102)),
        (0.000, (78, 154, 115)),
        (0.250, (128, 204, 165)),
        (0.375, (78, 154, 115)),
        (1.000, (29, 135, 102)),
    ),
)

SLIME = TextureConfig(
    name="slime",
    gradient_points=(
        (-1.0, (160, 64, 42)),
        (0.0, (64, 192, 64)),
        (1.0, (128, 255, 128)),
    ),
)

PRESETS: Dict[str, TextureConfig] = {
    config.name: config for config in (GRANITE, WOOD, JADE, SLIME)
}


def get_preset(name: str) -> TextureConfig:
    try:
        return PRESETS[name]
    except KeyError:
        raise InvalidParameterError(
            f"unknown texture preset {name!r}; choose from {sorted(PRESETS)}"
        ) from None


def build_texture_graph(
    preset: Union[str, TextureConfig], seed: Optional[int] = None
) -> Module:
    """Build the module graph of *preset* (a name or a :class:`TextureConfig`).

    *seed* overrides the config's seed when given.
    """
    config = get_preset(preset) if isinstance(preset, str) else preset
    factory = TEXTURE_GRAPHS.get(config.name)
    if factory is None:
        raise InvalidParameterError(f"no texture graph registered for {config.name!r}")
    return factory(config.seed if seed is None else seed)


def build_texture_map(
    config: TextureConfig,
    size: Optional[int] = None,
    *,
    sphere: bool = False,
) -> NoiseMap:
    """Sample the preset's graph into a noise map.

    A planar map is ``size × size`` over ``[-1, 1]²`` (seamless if the
    config says so); a spherical map is ``2·size × size`` covering the
    whole globe.
    """
    size = config.texture_size if size is None else size
    graph = build_texture_graph(config)
    if sphere:
        return build_sphere_map(graph, 2 * size, size, (-90.0, 90.0, -180.0, 180.0))
    return build_plane_map(
        graph, size, size, (-1.0, 1.0, -1.0, 1.0), seamless=config.seamless
    )
