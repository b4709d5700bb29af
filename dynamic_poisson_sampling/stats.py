"""
stats.py
--------
Quick summaries of a Poisson point set, used by `main.py` to report how the
density function shaped the result.

Dependencies:
    - numpy
    - scipy.spatial.cKDTree
"""

import numpy as np
from scipy.spatial import cKDTree


def nearest_neighbour_distances(points):
    """
    Distance from every point to its closest other point.

    Args:
        points (np.ndarray): (n, N) positions.

    Returns:
        np.ndarray: (n,) distances; empty when fewer than two points.
    """
    points = np.asarray(points, dtype=float)
    if len(points) < 2:
        return np.zeros(0)
    distances, _ = cKDTree(points).query(points, k=2)
    return distances[:, 1]


def count_in_box(points, lo, hi):
    """Number of points inside the half-open box [lo, hi)."""
    points = np.asarray(points, dtype=float)
    if len(points) == 0:
        return 0
    mask = np.all((points >= np.asarray(lo)) & (points < np.asarray(hi)), axis=1)
    return int(mask.sum())
