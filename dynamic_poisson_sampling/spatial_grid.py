"""
spatial_grid.py
---------------
Neighbour lookup for the Poisson sampler.

Two interchangeable strategies:
    - GridIndex: hashed background grid keyed by integer cell coordinates.
      Needs a declared radius bound to size its cells; each query only
      visits the cells within `ceil(search_radius / cell_size)` rings.
    - BruteForceIndex: returns every stored point. Used when the caller
      cannot bound the radii in advance.

Both return a superset of the points that could conflict with a candidate;
the exact distance test happens in the sampler, so switching strategies never
changes which candidates are accepted.

Grid sizing:
    cell_size = min_radius / sqrt(N)

    Any two accepted points are at least 2 * min_radius apart, so a cell
    holds at most one point when every radius respects the declared minimum.
    Cells store lists anyway, which keeps smaller radii correct (only slower).
    The window also grows with the largest radius inserted so far, so a
    radius above the declared maximum is still found.

Dependencies:
    - math, itertools
"""

import itertools
import math

from dynamic_poisson_sampling.geometry import cell_coords


def check_radius_bound(name, value):
    if value is None:
        return None
    value = float(value)
    if not math.isfinite(value) or value <= 0.0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")
    return value


class GridIndex:
    """
    Hashed grid over arena indices.
    """

    def __init__(self, arena, dims, min_radius=None, max_radius=None):
        min_radius = check_radius_bound("min_radius", min_radius)
        max_radius = check_radius_bound("max_radius", max_radius)
        if min_radius is None and max_radius is None:
            raise ValueError("GridIndex needs min_radius or max_radius to size its cells.")
        if min_radius is not None and max_radius is not None and min_radius > max_radius:
            raise ValueError(
                f"min_radius ({min_radius}) is larger than max_radius ({max_radius})"
            )

        self.arena = arena
        self.dims = dims
        base = min_radius if min_radius is not None else max_radius
        self.cell_size = base / math.sqrt(dims)
        self.largest_radius = max_radius if max_radius is not None else 0.0
        self._cells = {}

    def insert(self, index):
        """
        Registers arena entry `index` under its cell.
        """
        point = self.arena[index]
        key = cell_coords(point.position, self.cell_size)
        self._cells.setdefault(key, []).append(index)
        if point.radius > self.largest_radius:
            self.largest_radius = point.radius

    def query(self, position, search_radius):
        """
        Points whose cell lies within the search window around `position`.

        Args:
            position (tuple): Query position.
            search_radius (float): Largest centre distance that may conflict,
                i.e. candidate radius + largest neighbour radius.

        Returns:
            list[Point]: Candidates for the exact distance test.
        """
        centre = cell_coords(position, self.cell_size)
        rings = math.ceil(search_radius / self.cell_size)

        # a window wider than the occupied cells is cheaper to filter directly
        if (2 * rings + 1) ** self.dims > len(self._cells):
            keys = [
                key
                for key in self._cells
                if all(abs(a - b) <= rings for a, b in zip(key, centre))
            ]
        else:
            window = range(-rings, rings + 1)
            keys = (
                tuple(c + o for c, o in zip(centre, offsets))
                for offsets in itertools.product(window, repeat=self.dims)
            )

        neighbours = []
        for key in keys:
            for index in self._cells.get(key, ()):
                neighbours.append(self.arena[index])
        return neighbours

    def __len__(self):
        return sum(len(indices) for indices in self._cells.values())


class BruteForceIndex:
    """
    Linear scan over the whole arena.
    """

    def __init__(self, arena):
        self.arena = arena
        self.largest_radius = 0.0

    def insert(self, index):
        radius = self.arena[index].radius
        if radius > self.largest_radius:
            self.largest_radius = radius

    def query(self, position, search_radius):
        return list(self.arena)

    def __len__(self):
        return len(self.arena)
