# ==============================================================================
# tests/test_spatial_grid.py
# Neighbour lookup: the grid must return every point a brute-force scan would
# flag as a conflict.
# ==============================================================================
import math
import sys
import unittest
from pathlib import Path

import numpy as np

sys.path.append(str(Path(__file__).parent.parent))

from dynamic_poisson_sampling.geometry import cell_coords
from dynamic_poisson_sampling.point_arena import Point, PointArena
from dynamic_poisson_sampling.spatial_grid import BruteForceIndex, GridIndex


def fill(index, arena, points, radii):
    for position, radius in zip(points, radii):
        index.insert(arena.append(Point(tuple(position), float(radius))))


class TestGridIndex(unittest.TestCase):
    def setUp(self):
        self.prng = np.random.default_rng(42)

    def check_covers_conflicts(self, dims, min_radius, max_radius):
        arena = PointArena()
        grid = GridIndex(arena, dims, min_radius=min_radius, max_radius=max_radius)
        points = self.prng.uniform(-5.0, 5.0, size=(300, dims)).tolist()
        radii = self.prng.uniform(min_radius, max_radius, size=300)
        fill(grid, arena, points, radii)

        for query in self.prng.uniform(-6.0, 6.0, size=(100, dims)).tolist():
            r = float(self.prng.uniform(min_radius, max_radius))
            found = {p.position for p in grid.query(query, r + grid.largest_radius)}
            for point in arena:
                if math.dist(query, point.position) < point.radius + r:
                    self.assertIn(point.position, found)

    def test_covers_conflicts_2d(self):
        self.check_covers_conflicts(2, 0.1, 0.5)

    def test_covers_conflicts_3d(self):
        self.check_covers_conflicts(3, 0.2, 0.6)

    def test_covers_conflicts_1d(self):
        self.check_covers_conflicts(1, 0.05, 0.3)

    def test_cell_size(self):
        grid = GridIndex(PointArena(), 2, min_radius=1.0)
        self.assertAlmostEqual(grid.cell_size, 1.0 / math.sqrt(2))

        grid = GridIndex(PointArena(), 3, max_radius=3.0)
        self.assertAlmostEqual(grid.cell_size, 3.0 / math.sqrt(3))

    def test_largest_radius_grows_past_declared_max(self):
        arena = PointArena()
        grid = GridIndex(arena, 2, min_radius=0.1, max_radius=0.2)
        self.assertEqual(grid.largest_radius, 0.2)

        fill(grid, arena, [(0.0, 0.0)], [0.9])
        self.assertEqual(grid.largest_radius, 0.9)

        # a far point is still found through the widened window
        found = grid.query((1.0, 0.0), 0.2 + grid.largest_radius)
        self.assertEqual([p.position for p in found], [(0.0, 0.0)])

    def test_points_sharing_a_cell(self):
        arena = PointArena()
        grid = GridIndex(arena, 2, min_radius=1.0)
        fill(grid, arena, [(0.1, 0.1), (0.2, 0.2)], [0.01, 0.01])

        self.assertEqual(len(grid), 2)
        self.assertEqual(len(grid.query((0.15, 0.15), 0.02)), 2)

    def test_negative_cells(self):
        self.assertEqual(cell_coords((-0.5, 0.5), 1.0), (-1, 0))
        self.assertEqual(cell_coords((-1.0, 1.0), 1.0), (-1, 1))

    def test_validation(self):
        with self.assertRaises(ValueError):
            GridIndex(PointArena(), 2)
        with self.assertRaises(ValueError):
            GridIndex(PointArena(), 2, min_radius=-1.0)
        with self.assertRaises(ValueError):
            GridIndex(PointArena(), 2, max_radius=float("inf"))
        with self.assertRaises(ValueError):
            GridIndex(PointArena(), 2, min_radius=2.0, max_radius=1.0)


class TestBruteForceIndex(unittest.TestCase):
    def test_returns_everything(self):
        arena = PointArena()
        index = BruteForceIndex(arena)
        fill(index, arena, [(0.0, 0.0), (100.0, 100.0)], [0.5, 2.0])

        self.assertEqual(len(index.query((50.0, 50.0), 0.1)), 2)
        self.assertEqual(index.largest_radius, 2.0)
        self.assertEqual(len(index), 2)


if __name__ == "__main__":
    unittest.main()
