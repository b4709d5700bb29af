from perlin_noise import PerlinNoise
import numpy as np
import logging
import os
import time

from dynamic_poisson_sampling.density import bounded, box

logger = logging.getLogger(__name__)


'''
this class is in charge of the Perlin noise field that drives the Poisson
density: it samples a square area into a .npy-ready array for the 2D demo,
or evaluates the noise directly at any N-dimensional position.

noise values are mapped to [0, 1] with v * 0.5 + 0.5 and clipped.
'''
class PerlinNoiseField:
    def __init__(self, seed=0, octaves=1, scale=100.0):
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        self.seed = seed
        self.octaves = octaves
        self.scale = scale
        self.noise = PerlinNoise(octaves=octaves, seed=seed)

    def value(self, position):
        v = self.noise([p / self.scale for p in position])
        return float(np.clip(v * 0.5 + 0.5, 0.0, 1.0))

    def generate_area(self, x_start_m, y_start_m, width_m, res, normalize=False):
        start = time.time()
        field = np.zeros((res, res), dtype=np.float32)
        m_per_pixel = width_m / res

        for i in range(res):
            for j in range(res):
                x_m = x_start_m + (i + 0.5) * m_per_pixel
                y_m = y_start_m + (j + 0.5) * m_per_pixel
                field[j, i] = self.value((x_m, y_m))

        # stretch to the full [0, 1] range
        if normalize and field.max() > field.min():
            field = (field - field.min()) / (field.max() - field.min())

        logger.info(
            "Noise field %dx%d generated in %.2f s (min=%.3f, max=%.3f)",
            res, res, time.time() - start, field.min(), field.max(),
        )
        return field

    def save_field(self, field, path):
        folder = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        np.save(path, field)
        logger.info("Saved noise field to %s", path)

    def density(self, r_min, r_max, bounds_min, bounds_max):
        # evaluates the noise at the candidate itself, works in any dimension
        lo, hi = box(bounds_min, bounds_max)
        if r_min <= 0 or r_max < r_min:
            raise ValueError(f"Invalid radius range [{r_min}, {r_max}]")
        return bounded(lo, hi, lambda pos: r_min + self.value(pos) * (r_max - r_min))
