"""
density.py
----------
Ready-made density functions for the Poisson sampler.

A density function maps a position tuple to an exclusion radius, or None to
reject the position. The sampler only terminates if the function rejects
everything outside a bounded region, so every helper here is wrapped in a
half-open box check [bounds_min, bounds_max).

Helpers:
    - bounded(): box guard around any radius function.
    - constant_radius(): one radius everywhere inside the box.
    - field_density(): radius read from a numpy field (noise map, image...)
      with values in [0, 1], mapped linearly onto [r_min, r_max].

Field layout:
    Arrays use image axis order, so a 2D field is indexed field[y, x] while
    positions are (x, y). In general the array axes are the position axes
    reversed.

Dependencies:
    - numpy

Example:
    noise = PerlinNoiseField(seed=7).generate_area(0.0, 0.0, 500, 250)
    density = field_density(noise, (0, 0), (500, 500), r_min=3.0, r_max=13.0)
"""

import numpy as np

from dynamic_poisson_sampling.geometry import as_position


def box(bounds_min, bounds_max):
    """
    Validates a box and returns it as two float tuples.
    """
    lo = as_position(bounds_min)
    hi = as_position(bounds_max)
    if len(lo) != len(hi):
        raise ValueError(f"Bounds have different dimensions: {len(lo)} and {len(hi)}")
    if any(h <= l for l, h in zip(lo, hi)):
        raise ValueError(f"Empty box: min={lo}, max={hi}")
    return lo, hi


def inside(position, lo, hi):
    return len(position) == len(lo) and all(
        l <= p < h for p, l, h in zip(position, lo, hi)
    )


def bounded(bounds_min, bounds_max, radius_func):
    """
    Rejects positions outside [bounds_min, bounds_max) before calling
    `radius_func`.
    """
    lo, hi = box(bounds_min, bounds_max)

    def density(position):
        if not inside(position, lo, hi):
            return None
        return radius_func(position)

    return density


def constant_radius(radius, bounds_min, bounds_max):
    return bounded(bounds_min, bounds_max, lambda position: radius)


def field_density(field, bounds_min, bounds_max, r_min, r_max):
    """
    Density function reading a radius from a sampled field.

    Args:
        field (np.ndarray): Values in [0, 1] (clipped), one axis per position
            axis in reversed order.
        bounds_min (sequence of float): World position of the field's first
            cell corner.
        bounds_max (sequence of float): World position of the far corner.
        r_min (float): Radius where the field is 0.
        r_max (float): Radius where the field is 1.

    Returns:
        callable: position -> radius or None.
    """
    field = np.asarray(field, dtype=float)
    if field.size == 0:
        raise ValueError("Field is empty.")
    lo, hi = box(bounds_min, bounds_max)
    if field.ndim != len(lo):
        raise ValueError(
            f"Field has {field.ndim} axes but the bounds have {len(lo)} dimensions"
        )
    if r_min <= 0 or r_max < r_min:
        raise ValueError(f"Invalid radius range [{r_min}, {r_max}]")

    # cells per position axis (x, y, ...)
    shape = field.shape[::-1]

    def radius(position):
        cell = []
        for p, l, h, n in zip(position, lo, hi, shape):
            cell.append(min(int((p - l) / (h - l) * n), n - 1))
        value = float(np.clip(field[tuple(reversed(cell))], 0.0, 1.0))
        return r_min + value * (r_max - r_min)

    return bounded(lo, hi, radius)
