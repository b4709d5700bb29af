"""
random_source.py
----------------
Random Source used by the Poisson sampler.

Wraps a `numpy.random.Generator` so the sampler only sees the three primitives
it needs: a uniform real in a half-open range, a uniform direction on the unit
hypersphere and a uniform index pick.

Seeding:
    - `RandomSource(seed=42)` gives a reproducible stream.
    - `RandomSource(generator=np.random.default_rng(...))` shares an existing
      generator with the caller.
    - `RandomSource()` draws fresh OS entropy.

Dependencies:
    - numpy

Example:
    rng = RandomSource(seed=42)
    direction = rng.unit_vector(3)
    r = rng.uniform(0.5, 1.0)
"""

import numpy as np


class RandomSource:
    """
    Uniform reals, unit directions and index picks from one numpy stream.
    """

    def __init__(self, seed=None, generator=None):
        if generator is not None and seed is not None:
            raise ValueError("Pass either a seed or a generator, not both.")
        self.generator = generator if generator is not None else np.random.default_rng(seed)

    def uniform(self, low, high):
        """
        Uniform real in [low, high).
        """
        return float(self.generator.uniform(low, high))

    def unit_vector(self, dims):
        """
        Direction uniformly distributed on the unit hypersphere.

        Normalises independent standard-normal samples per axis; a zero draw
        (vanishingly rare) is simply drawn again.

        Args:
            dims (int): Number of axes.

        Returns:
            tuple: Unit-length direction with `dims` components.
        """
        while True:
            deltas = self.generator.standard_normal(dims)
            norm = float(np.linalg.norm(deltas))
            if norm > 0.0:
                return tuple((deltas / norm).tolist())

    def randrange(self, n):
        return int(self.generator.integers(0, n))
