"""
Entry point for the variable-density Poisson disk sampling demo.

Pipeline Overview:
    1. Parse the sampling and noise parameters.
    2. Build a density field: Perlin noise (or a grayscale image) mapped onto
       a radius range, so dark areas get dense points and bright areas sparse
       ones.
    3. Run the Poisson sampler from the centre of the domain.
    4. Save the results: point array (.npy), an overlay image of the points
       on the field (2D) or a scatter plot (3D), and a short report.

Modes:
    - noise2d: square area in pixel units, density from a 2D noise map or
      image, output drawn with OpenCV.
    - cube3d: unit cube, density from 3D Perlin noise evaluated per
      candidate, output plotted with matplotlib.

Example:
    python main.py --mode noise2d --size 500 --res 250 --k 12 --seed 36
    python main.py --mode cube3d --k 20 --output-dir output/cube
"""

import argparse
import logging
import os
import sys
import time

import numpy as np

from dynamic_poisson_sampling.density import field_density
from dynamic_poisson_sampling.poisson import PoissonSampler
from dynamic_poisson_sampling.render import (
    draw_points,
    field_to_image,
    load_grayscale,
    plot_points_3d,
    save_image,
    show_image,
)
from dynamic_poisson_sampling.stats import nearest_neighbour_distances
from dynamic_poisson_sampling.terrain_noise import PerlinNoiseField
from dynamic_poisson_sampling.tiling import bucket_by_tile

logger = logging.getLogger("dynamic_poisson_sampling.main")

# Per-mode defaults for the size/radius/noise arguments
MODE_DEFAULTS = {
    "noise2d": {"size": 500.0, "min_radius": 3.0, "max_radius": 13.0, "noise_scale": 500.0 / 3.0},
    "cube3d": {"size": 1.0, "min_radius": 0.04, "max_radius": 0.08, "noise_scale": 0.5},
}


def setup_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s | %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )


# === STEP 1: Argument Parser ===
def build_parser():
    parser = argparse.ArgumentParser(description="Variable-density Poisson disk sampling")
    parser.add_argument("--mode", choices=sorted(MODE_DEFAULTS), default="noise2d")
    # Sampling parameters
    parser.add_argument("--k", type=int, default=12, help="candidates per active point")
    parser.add_argument("--seed", type=int, default=36, help="RNG seed for reproducibility")
    parser.add_argument("--size", type=float, default=None, help="domain edge length")
    parser.add_argument("--min-radius", type=float, default=None, help="radius where the density field is 0")
    parser.add_argument("--max-radius", type=float, default=None, help="radius where the density field is 1")
    parser.add_argument(
        "--brute-force",
        action="store_true",
        help="check every point instead of using the background grid",
    )
    # Density field parameters
    parser.add_argument("--res", type=int, default=250, help="noise map resolution (noise2d)")
    parser.add_argument("--noise-scale", type=float, default=None, help="world units per noise period")
    parser.add_argument("--octaves", type=int, default=1, help="Perlin noise octaves")
    parser.add_argument(
        "--density-image",
        type=str,
        default=None,
        help="grayscale image used as density field instead of noise (noise2d)",
    )
    # Output
    parser.add_argument("--output-dir", type=str, default="output", help="where to store results")
    parser.add_argument("--show", action="store_true", help="open a preview window (noise2d)")
    parser.add_argument("--tile-size", type=float, default=None, help="tile size for the bucket report")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    return parser


def parse_args(argv=None):
    args = build_parser().parse_args(argv)
    for name, value in MODE_DEFAULTS[args.mode].items():
        if getattr(args, name) is None:
            setattr(args, name, value)
    if args.tile_size is None:
        args.tile_size = args.size / 10.0
    return args


def make_sampler(args, density):
    bounds = {} if args.brute_force else {"min_radius": args.min_radius, "max_radius": args.max_radius}
    return PoissonSampler(args.k, density, seed=args.seed, **bounds)


def run_noise2d(args):
    # === STEP 2: Density field ===
    if args.density_image:
        field = load_grayscale(args.density_image)
        print(f"[✓] Loaded density image {args.density_image} {field.shape}")
    else:
        noise = PerlinNoiseField(seed=args.seed, octaves=args.octaves, scale=args.noise_scale)
        field = noise.generate_area(0.0, 0.0, args.size, args.res, normalize=True)
        noise.save_field(field, os.path.join(args.output_dir, "density_field.npy"))
    density = field_density(field, (0.0, 0.0), (args.size, args.size), args.min_radius, args.max_radius)

    # === STEP 3: Poisson sampling ===
    sampler = make_sampler(args, density)
    start = time.time()
    points = sampler.sample((args.size / 2.0, args.size / 2.0))
    report(args, sampler, points, time.time() - start)

    # === STEP 4: Overlay image ===
    # field pixels cover the domain, so world -> pixel is (width, height) / size
    image = draw_points(
        field_to_image(field),
        points,
        radius=2,
        pixels_per_unit=(field.shape[1] / args.size, field.shape[0] / args.size),
    )
    image_path = os.path.join(args.output_dir, "poisson_points.png")
    save_image(image_path, image)
    print(f"[✓] Overlay saved to {image_path}")
    if args.show:
        show_image("poisson points", image)
    return points


def run_cube3d(args):
    # === STEP 2: Density function (3D noise, evaluated per candidate) ===
    noise = PerlinNoiseField(seed=args.seed, octaves=args.octaves, scale=args.noise_scale)
    lo, hi = (0.0, 0.0, 0.0), (args.size, args.size, args.size)
    density = noise.density(args.min_radius, args.max_radius, lo, hi)

    # === STEP 3: Poisson sampling ===
    sampler = make_sampler(args, density)
    start = time.time()
    points = sampler.sample(tuple(c / 2.0 for c in hi))
    report(args, sampler, points, time.time() - start)

    # === STEP 4: Scatter plot ===
    plot_path = os.path.join(args.output_dir, "poisson_points_3d.png")
    plot_points_3d(points, plot_path, bounds=(lo, hi))
    print(f"[✓] 3D plot saved to {plot_path}")
    return points


def report(args, sampler, points, elapsed):
    print(
        f"[✓] Poisson scattered {len(points)} points in {elapsed:.2f} s "
        f"(k={args.k}, seed={args.seed}, {'brute force' if args.brute_force else 'grid'})."
    )
    logger.debug(
        "attempts=%d rejected_by_density=%d rejected_by_neighbour=%d",
        sampler.attempts,
        sampler.rejected_by_density,
        sampler.rejected_by_neighbour,
    )
    nn = nearest_neighbour_distances(points)
    if len(nn):
        logger.info("Nearest neighbour distance: min=%.4f mean=%.4f max=%.4f", nn.min(), nn.mean(), nn.max())
    tiles = bucket_by_tile(points, args.tile_size)
    logger.info("Points fall into %d tiles of size %g", len(tiles), args.tile_size)

    points_path = os.path.join(args.output_dir, "poisson_points.npy")
    np.save(points_path, points)
    print(f"[✓] Points saved to {points_path}")


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose)
    os.makedirs(args.output_dir, exist_ok=True)

    if args.mode == "noise2d":
        return run_noise2d(args)
    return run_cube3d(args)


if __name__ == "__main__":
    main(sys.argv[1:])
