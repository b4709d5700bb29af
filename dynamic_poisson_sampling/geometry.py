"""
geometry.py
-----------
Small geometry helpers shared by the sampler and the spatial grid.

Positions are plain tuples of floats of any length N.
"""

import math


def distance(lhs, rhs):
    """Euclidean distance between two N-dimensional positions."""
    return math.dist(lhs, rhs)


def cell_coords(position, cell_size):
    # floor (not int()) so negative coordinates land in their own cells
    return tuple(math.floor(c / cell_size) for c in position)


def offset(position, direction, length):
    """
    Moves `position` along a unit `direction` by `length`.

    Returns:
        tuple: The new position.
    """
    return tuple(p + d * length for p, d in zip(position, direction))


def as_position(values):
    position = tuple(float(v) for v in values)
    if not position:
        raise ValueError("Position must have at least one coordinate.")
    return position
