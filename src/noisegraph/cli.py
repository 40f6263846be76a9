"""noisegraph command-line interface."""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, List, Optional

from .builders import build_plane_map
from .color import grayscale_gradient, terrain_gradient
from .errors import NoiseError
from .generators import (
    Billow,
    Checkerboard,
    Const,
    Cylinders,
    Perlin,
    RidgedMulti,
    Spheres,
    Voronoi,
)
from .modifiers import ScaleBias
from .module import Module
from .selectors import Select

logger = logging.getLogger(__name__)

GENERATORS: Dict[str, Callable[[int], Module]] = {
    "billow": lambda seed: Billow(seed=seed),
    "checkerboard": lambda seed: Checkerboard(),
    "const": lambda seed: Const(0.0),
    "cylinders": lambda seed: Cylinders(frequency=4.0),
    "perlin": lambda seed: Perlin(seed=seed),
    "ridged": lambda seed: RidgedMulti(seed=seed),
    "spheres": lambda seed: Spheres(frequency=4.0),
    "voronoi": lambda seed: Voronoi(seed=seed, frequency=4.0, enable_distance=True),
}

TERRAIN_BOUNDS = (6.0, 10.0, 1.0, 5.0)


def build_terrain_graph(seed: int = 0) -> Module:
    """Mountains and flat lowlands, chosen between by a low-frequency Perlin."""
    mountains = RidgedMulti(seed=seed)
    base_flat = Billow(seed=seed + 1, frequency=2.0)
    flat = ScaleBias(base_flat, scale=0.125, bias=-0.75)
    terrain_type = Perlin(seed=seed + 2, frequency=0.5, persistence=0.25)
    return Select(
        flat, mountains, terrain_type,
        lower_bound=0.0, upper_bound=1000.0, edge_falloff=0.125,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="noisegraph CLI")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for progress, -vv for debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    generator = sub.add_parser("generator", help="Render a single generator to PNG")
    generator.add_argument("--kind", choices=sorted(GENERATORS), required=True)
    generator.add_argument("--out", dest="output_path", required=True)
    generator.add_argument("--size", type=int, default=256)
    generator.add_argument("--seed", type=int, default=0)
    generator.add_argument("--seamless", action="store_true")

    texture = sub.add_parser("texture", help="Render a texture preset to PNG")
    texture.add_argument("--preset", choices=["granite", "jade", "slime", "wood"], required=True)
    texture.add_argument("--out", dest="output_path", required=True)
    texture.add_argument("--size", type=int, default=None)
    texture.add_argument("--seed", type=int, default=None)
    texture.add_argument("--sphere", action="store_true",
                         help="Render a 2:1 spherical map instead of a planar tile")

    terrain = sub.add_parser("terrain", help="Build a terrain heightmap as a .ter file")
    terrain.add_argument("--out", dest="output_path", required=True)
    terrain.add_argument("--size", type=int, default=256)
    terrain.add_argument("--seed", type=int, default=0)
    terrain.add_argument("--png", dest="png_path", help="Also render a coloured PNG")

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "generator":
            _cmd_generator(args)

        elif args.command == "texture":
            _cmd_texture(args)

        elif args.command == "terrain":
            _cmd_terrain(args)
    except NoiseError as exc:
        print(f"error: {exc}")
        raise SystemExit(1)


def _cmd_generator(args) -> None:
    from .render import render_png

    module = GENERATORS[args.kind](args.seed)
    noise_map = build_plane_map(
        module, args.size, args.size, (-1.0, 1.0, -1.0, 1.0), seamless=args.seamless
    )
    render_png(noise_map, args.output_path, grayscale_gradient())
    print(f"Saved {args.output_path}")


def _cmd_texture(args) -> None:
    from .presets import build_texture_map, get_preset
    from .render import render_png

    config = get_preset(args.preset)
    if args.seed is not None:
        config = config.with_seed(args.seed)
    noise_map = build_texture_map(config, args.size, sphere=args.sphere)
    render_png(noise_map, args.output_path, config.gradient())
    print(f"Saved {args.output_path}")


def _cmd_terrain(args) -> None:
    from .io import write_ter

    graph = build_terrain_graph(args.seed)
    noise_map = build_plane_map(
        graph,
        args.size,
        args.size,
        TERRAIN_BOUNDS,
        callback=lambda row: logger.debug("row %d done", row),
    )
    # Heights are written in metres, so lift the [-1, 1] range first.
    heights = noise_map.copy()
    heights.as_array()[...] *= 1000.0
    write_ter(heights, args.output_path)
    print(f"Saved {args.output_path}")

    if args.png_path:
        from .render import render_png
        render_png(noise_map, args.png_path, terrain_gradient())
        print(f"Saved {args.png_path}")


if __name__ == "__main__":
    main()
