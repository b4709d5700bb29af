"""
tiling.py
---------
Buckets sampled points into square tiles so a streamer can load only the
tiles around a viewer.

Example:
    tiles = bucket_by_tile(points, tile_size=10)
    tiles[(3, 7)]  # -> [(31.2, 74.9), ...]
"""

import math


def bucket_by_tile(points, tile_size):
    """
    Groups points by tile.

    Args:
        points (iterable): Positions of any dimension.
        tile_size (float): Tile edge length in world units.

    Returns:
        dict: {(tile_x, tile_y, ...): [position, ...]}
    """
    if tile_size <= 0:
        raise ValueError(f"tile_size must be positive, got {tile_size}")

    grid_dict = {}
    for point in points:
        position = tuple(float(c) for c in point)
        key = tuple(math.floor(c / tile_size) for c in position)
        grid_dict.setdefault(key, []).append(position)
    return grid_dict
