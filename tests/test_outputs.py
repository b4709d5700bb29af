# ==============================================================================
# tests/test_outputs.py
# Consumers of the sampler output: images, plots, statistics and tiles.
# ==============================================================================
import os
import sys
import tempfile
import unittest
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import cv2
import numpy as np

sys.path.append(str(Path(__file__).parent.parent))

from dynamic_poisson_sampling.render import (
    draw_points,
    field_to_image,
    load_grayscale,
    plot_points_3d,
    save_image,
)
from dynamic_poisson_sampling.stats import count_in_box, nearest_neighbour_distances
from dynamic_poisson_sampling.tiling import bucket_by_tile


class TestRender(unittest.TestCase):
    def test_field_to_image(self):
        image = field_to_image(np.array([[0.0, 0.5], [1.0, 2.0]]))

        self.assertEqual(image.dtype, np.uint8)
        np.testing.assert_array_equal(image, [[0, 127], [255, 255]])

    def test_field_to_image_rejects_3d(self):
        with self.assertRaises(ValueError):
            field_to_image(np.zeros((2, 2, 2)))

    def test_draw_points(self):
        image = np.zeros((20, 20), dtype=np.uint8)
        canvas = draw_points(image, np.array([[5.0, 10.0]]), radius=2, pixels_per_unit=1.0)

        self.assertEqual(canvas.shape, (20, 20, 3))
        # row = y, column = x, BGR green
        np.testing.assert_array_equal(canvas[10, 5], [0, 255, 0])
        np.testing.assert_array_equal(canvas[0, 0], [0, 0, 0])
        self.assertEqual(image.max(), 0)

    def test_draw_points_separate_axis_scales(self):
        # 40 wide, 10 high image over a 20 x 20 domain
        image = np.zeros((10, 40), dtype=np.uint8)
        canvas = draw_points(image, np.array([[5.0, 10.0]]), radius=1, pixels_per_unit=(2.0, 0.5))

        np.testing.assert_array_equal(canvas[5, 10], [0, 255, 0])
        np.testing.assert_array_equal(canvas[5, 5], [0, 0, 0])

    def test_draw_no_points(self):
        canvas = draw_points(np.zeros((4, 4), dtype=np.uint8), np.zeros((0, 2)))
        self.assertEqual(canvas.shape, (4, 4, 3))

    def test_save_and_load_image(self):
        image = np.zeros((8, 8), dtype=np.uint8)
        image[:, 4:] = 255
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out", "field.png")
            save_image(path, image)
            field = load_grayscale(path)

        self.assertEqual(field.shape, (8, 8))
        self.assertEqual(field[0, 0], 0.0)
        self.assertEqual(field[0, 7], 1.0)

    def test_plot_points_3d(self):
        points = np.random.default_rng(0).uniform(0, 1, size=(30, 3))
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "plot.png")
            plot_points_3d(points, path)
            self.assertIsNotNone(cv2.imread(path))


class TestStats(unittest.TestCase):
    def test_nearest_neighbour_distances(self):
        points = np.array([[0.0, 0.0], [3.0, 4.0], [3.0, 5.0]])
        np.testing.assert_allclose(nearest_neighbour_distances(points), [5.0, 1.0, 1.0])

    def test_nearest_neighbour_too_few_points(self):
        self.assertEqual(len(nearest_neighbour_distances(np.zeros((1, 2)))), 0)

    def test_count_in_box(self):
        points = np.array([[0.5, 0.5], [1.0, 0.5], [1.5, 0.2]])
        self.assertEqual(count_in_box(points, (0, 0), (1, 1)), 1)
        self.assertEqual(count_in_box(points, (1, 0), (2, 1)), 2)
        self.assertEqual(count_in_box(np.zeros((0, 2)), (0, 0), (1, 1)), 0)


class TestTiling(unittest.TestCase):
    def test_bucket_by_tile(self):
        tiles = bucket_by_tile(np.array([[1.0, 2.0], [9.9, 0.0], [10.0, 0.0], [-0.5, 3.0]]), 10)

        self.assertEqual(tiles[(0, 0)], [(1.0, 2.0), (9.9, 0.0)])
        self.assertEqual(tiles[(1, 0)], [(10.0, 0.0)])
        self.assertEqual(tiles[(-1, 0)], [(-0.5, 3.0)])

    def test_bad_tile_size(self):
        with self.assertRaises(ValueError):
            bucket_by_tile([], 0)


if __name__ == "__main__":
    unittest.main()
