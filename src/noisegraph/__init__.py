"""noisegraph — coherent-noise module graphs.

Public API is organised into layers:

- **Kernel** — gradient/value noise, interpolation, quality
- **Modules** — generators, combiners, modifiers, selectors,
  transformers and a cache, wired into acyclic graphs
- **Sampling** — surface models, noise maps and map builders
- **Output** — colour gradients, PNG rendering (requires Pillow), ``.ter``
- **Presets** — ready-made texture graphs
"""

# ── Errors ──────────────────────────────────────────────────────────
from .errors import CycleError, InvalidParameterError, NoiseError, NoModuleError

# ── Kernel ──────────────────────────────────────────────────────────
from .noisegen import (
    NoiseQuality,
    cubic_interp,
    gradient_coherent_noise_3d,
    gradient_coherent_noise_6d,
    gradient_noise_3d,
    gradient_noise_6d,
    int_value_noise_3d,
    linear_interp,
    make_int_range,
    s_curve3,
    s_curve5,
    value_coherent_noise_3d,
    value_noise_3d,
)

# ── Modules ─────────────────────────────────────────────────────────
from .module import Module
from .generators import (
    Billow,
    Checkerboard,
    Const,
    Cylinders,
    DistanceFunction,
    Perlin,
    RidgedMulti,
    Spheres,
    Voronoi,
)
from .combiners import Add, Max, Min, Multiply, Power, Subtract
from .modifiers import Abs, Clamp, Curve, Exponent, Invert, ScaleBias, Terrace
from .selectors import Blend, Select
from .transforms import Displace, RotatePoint, ScalePoint, TranslatePoint, Turbulence
from .cache import Cache

# ── Sampling ────────────────────────────────────────────────────────
from .models import Cylinder, Line, Plane, Sphere, lat_lon_to_xyz
from .noisemap import NoiseMap
from .builders import (
    NoiseMapBuilderCylinder,
    NoiseMapBuilderPlane,
    NoiseMapBuilderSphere,
    build_cylinder_map,
    build_plane_map,
    build_sphere_map,
)

# ── Output ──────────────────────────────────────────────────────────
from .color import Color, GradientColor, grayscale_gradient, terrain_gradient
from .io import read_ter, write_ter

# ── Presets ─────────────────────────────────────────────────────────
from .presets import (
    GRANITE,
    JADE,
    SLIME,
    WOOD,
    TextureConfig,
    build_texture_graph,
    build_texture_map,
)

__all__ = [
    # Errors
    "NoiseError", "NoModuleError", "CycleError", "InvalidParameterError",
    # Kernel
    "NoiseQuality", "s_curve3", "s_curve5", "linear_interp", "cubic_interp",
    "make_int_range", "gradient_noise_3d", "gradient_coherent_noise_3d",
    "int_value_noise_3d", "value_noise_3d", "value_coherent_noise_3d",
    "gradient_noise_6d", "gradient_coherent_noise_6d",
    # Modules
    "Module",
    "Const", "Checkerboard", "Cylinders", "Spheres",
    "Perlin", "Billow", "RidgedMulti", "Voronoi", "DistanceFunction",
    "Add", "Subtract", "Multiply", "Min", "Max", "Power",
    "Abs", "Invert", "Clamp", "ScaleBias", "Exponent", "Terrace", "Curve",
    "Blend", "Select",
    "Displace", "Turbulence", "ScalePoint", "TranslatePoint", "RotatePoint",
    "Cache",
    # Sampling
    "Plane", "Cylinder", "Sphere", "Line", "lat_lon_to_xyz",
    "NoiseMap",
    "NoiseMapBuilderPlane", "NoiseMapBuilderCylinder", "NoiseMapBuilderSphere",
    "build_plane_map", "build_cylinder_map", "build_sphere_map",
    # Output
    "Color", "GradientColor", "grayscale_gradient", "terrain_gradient",
    "read_ter", "write_ter",
    # Presets
    "TextureConfig", "GRANITE", "WOOD", "JADE", "SLIME",
    "build_texture_graph", "build_texture_map",
]
