"""
poisson.py
----------
Variable-density Poisson disk sampling over an N-dimensional domain.

Every accepted point carries its own exclusion radius, given by a caller
supplied density function, and any two accepted points p, q keep
`distance(p, q) >= p.radius + q.radius`. Scattering objects denser in some
regions than others keeps the blue-noise look without global spacing.

Workflow:
    1. Ask the density function for the radius at the seed position. If it
       rejects the seed, return an empty result.
    2. Store the seed in the arena, the neighbour index and the active list.
    3. While the active list is not empty:
        - Pick a random active point P.
        - Try exactly `k` candidates at a random direction and a distance in
          [P.radius, 2 * P.radius).
        - Drop candidates the density function rejects, then candidates that
          come closer than the summed radii to an accepted neighbour.
        - Accept the rest (arena, index, active list).
        - Remove P from the active list, whatever the outcome.
    4. Return the accepted positions as an (n, N) array.

Neighbour lookup:
    - With `min_radius` and/or `max_radius` declared, a hashed grid keeps each
      check local (see `spatial_grid.py`).
    - Without bounds, every candidate is checked against every point.
    The accepted set is identical either way for the same random stream.

Termination:
    The loop only ends once the density function rejects everything outside
    a bounded region. A function that accepts every position never lets the
    active list drain; bounding the domain is the caller's job
    (`density.bounded` does it).

Inputs:
    - k (int): Candidates per active point (10-30 is typical; more is slower
      but packs tighter). 0 returns just the seed.
    - first_pos (sequence of float): Seed position, sets the dimension N.
    - density_func (callable): position tuple -> radius or None.
    - rng / seed: Random stream (see `random_source.py`).
    - min_radius / max_radius (float, optional): Radius bounds for the grid.

Outputs:
    - np.ndarray of shape (n, N) with the accepted positions, in acceptance
      order.

Dependencies:
    - numpy
    - Called by `main.py` -> `PoissonSampler.sample()`.

Example:
    points = get_points_with_min_max(
        k=12,
        first_pos=(0.5, 0.5),
        min_distance=0.05,
        max_distance=0.10,
        density_func=bounded((0, 0), (1, 1), lambda pos: 0.05 + 0.05 * pos[0]),
        seed=42,
    )
"""

import logging
import math
import numbers

import numpy as np

from dynamic_poisson_sampling.geometry import as_position, distance, offset
from dynamic_poisson_sampling.point_arena import ActiveList, Point, PointArena
from dynamic_poisson_sampling.random_source import RandomSource
from dynamic_poisson_sampling.spatial_grid import (
    BruteForceIndex,
    GridIndex,
    check_radius_bound,
)

logger = logging.getLogger(__name__)

# Candidate distance from its parent is drawn in [r, SPREAD * r)
SPREAD = 2.0

# Sampler states
EMPTY = "empty"
SEEDED = "seeded"
EXPANDING = "expanding"
TERMINATED = "terminated"


def sanitize_radius(value):
    """
    Normalises a density function result.

    Returns:
        float or None: The radius, or None for a rejection. Zero, negative
        and non-finite radii count as rejections.
    """
    if value is None:
        return None
    radius = float(value)
    if not math.isfinite(radius) or radius <= 0.0:
        return None
    return radius


class PoissonSampler:
    """
    Active-list Poisson disk sampler with a per-position exclusion radius.

    A sampler can be reused; each `sample()` call starts from an empty arena
    and shares nothing with earlier runs except the random stream.
    """

    def __init__(
        self,
        k,
        density_func,
        rng=None,
        seed=None,
        min_radius=None,
        max_radius=None,
    ):
        if isinstance(k, bool) or not isinstance(k, numbers.Integral) or k < 0:
            raise ValueError(f"k must be a non-negative integer, got {k!r}")
        if not callable(density_func):
            raise ValueError("density_func must be callable.")

        self.k = int(k)
        self.density_func = density_func
        self.rng = self._make_rng(rng, seed)

        self.min_radius = check_radius_bound("min_radius", min_radius)
        self.max_radius = check_radius_bound("max_radius", max_radius)
        if (
            self.min_radius is not None
            and self.max_radius is not None
            and self.min_radius > self.max_radius
        ):
            raise ValueError(
                f"min_radius ({self.min_radius}) is larger than max_radius ({self.max_radius})"
            )
        self.use_grid = self.min_radius is not None or self.max_radius is not None

        self._reset()

    @staticmethod
    def _make_rng(rng, seed):
        if rng is None:
            return RandomSource(seed=seed)
        if seed is not None:
            raise ValueError("Pass either rng or seed, not both.")
        if isinstance(rng, np.random.Generator):
            return RandomSource(generator=rng)
        return rng

    def _reset(self):
        self.state = EMPTY
        self.arena = PointArena()
        self.active = ActiveList()
        self.index = None
        self.attempts = 0
        self.rejected_by_density = 0
        self.rejected_by_neighbour = 0

    def sample(self, first_pos):
        """
        Runs one sampling pass from `first_pos`.

        Args:
            first_pos (sequence of float): Seed position.

        Returns:
            np.ndarray: (n, N) accepted positions; (0, N) when the seed is
            rejected.
        """
        first_pos = as_position(first_pos)
        dims = len(first_pos)

        self._reset()
        if self.use_grid:
            self.index = GridIndex(self.arena, dims, self.min_radius, self.max_radius)
        else:
            self.index = BruteForceIndex(self.arena)

        # === Seed ===
        radius = self._radius_at(first_pos)
        if radius is None:
            logger.debug("Seed %s rejected by the density function", first_pos)
            self.state = TERMINATED
            return self._result(dims)
        self._accept(first_pos, radius)
        self.state = SEEDED

        # === Main Poisson sampling loop ===
        self.state = EXPANDING
        while self.active:
            self._expand(self.active.pick(self.rng))
        self.state = TERMINATED

        logger.debug(
            "Poisson sampling (%s) accepted %d points from %d attempts "
            "(%d rejected by density, %d by neighbours)",
            "grid" if self.use_grid else "brute force",
            len(self.arena),
            self.attempts,
            self.rejected_by_density,
            self.rejected_by_neighbour,
        )
        return self._result(dims)

    def _expand(self, slot):
        parent = self.arena[self.active.entry(slot)]
        dims = len(parent.position)

        for _ in range(self.k):
            self.attempts += 1
            direction = self.rng.unit_vector(dims)
            length = self.rng.uniform(parent.radius, SPREAD * parent.radius)
            candidate = offset(parent.position, direction, length)

            radius = self._radius_at(candidate)
            if radius is None:
                self.rejected_by_density += 1
                continue
            if self._conflicts(candidate, radius):
                self.rejected_by_neighbour += 1
                continue
            self._accept(candidate, radius)

        # one attempt budget per point, never revisited
        self.active.remove(slot)

    def _radius_at(self, position):
        return sanitize_radius(self.density_func(position))

    def _conflicts(self, candidate, radius):
        search_radius = radius + self.index.largest_radius
        for neighbour in self.index.query(candidate, search_radius):
            # touching discs (equal distance) are allowed
            if distance(candidate, neighbour.position) < neighbour.radius + radius:
                return True
        return False

    def _accept(self, position, radius):
        index = self.arena.append(Point(position, radius))
        self.index.insert(index)
        self.active.push(index)
        return index

    def _result(self, dims):
        return np.asarray(self.arena.positions(), dtype=float).reshape(-1, dims)


def get_points(k, first_pos, density_func, rng=None, seed=None):
    """
    Poisson disk points without radius bounds (brute-force neighbour checks).

    Slow for large point counts but needs nothing beyond the density
    function. If the radius range is known, use `get_points_with_min_max`.
    """
    return PoissonSampler(k, density_func, rng=rng, seed=seed).sample(first_pos)


def get_points_with_min_max(
    k, first_pos, min_distance, max_distance, density_func, rng=None, seed=None
):
    """
    Poisson disk points with declared radius bounds (grid neighbour checks).

    Args:
        k (int): Candidates per active point.
        first_pos (sequence of float): Seed position.
        min_distance (float): Smallest radius the density function returns.
        max_distance (float): Largest radius the density function returns.
        density_func (callable): position -> radius or None.
        rng (RandomSource or np.random.Generator, optional): Random stream.
        seed (int, optional): Seed for a fresh stream.

    Returns:
        np.ndarray: (n, N) accepted positions.
    """
    sampler = PoissonSampler(
        k,
        density_func,
        rng=rng,
        seed=seed,
        min_radius=min_distance,
        max_radius=max_distance,
    )
    return sampler.sample(first_pos)
