"""
render.py
---------
Pictures of sampler inputs and outputs.

Purpose in Pipeline:
    - Step 2 of `main.py`: loads a grayscale image as a density field, or
      previews the generated noise field.
    - Step 4 of `main.py`: draws the accepted points on top of the field
      (2D) or as a 3D scatter plot.

Dependencies:
    - numpy
    - OpenCV (cv2): marker drawing, image files, preview window
    - Pillow (PIL): grayscale image loading
    - matplotlib: 3D scatter plot
"""

import os

import cv2
import matplotlib.pyplot as plt
import numpy as np
from PIL import Image


def load_grayscale(path):
    """
    Loads an image as a float32 field in [0, 1] (row = y, column = x).
    """
    img = Image.open(path).convert("L")
    return np.array(img).astype(np.float32) / 255.0


def field_to_image(field):
    """
    Converts a [0, 1] field to an 8-bit grayscale image.
    """
    field = np.asarray(field, dtype=np.float32)
    if field.ndim != 2:
        raise ValueError(f"Expected a 2D field, got shape {field.shape}")
    return (np.clip(field, 0.0, 1.0) * 255.0).astype(np.uint8)


def draw_points(image, points, radius=2, color=(0, 255, 0), pixels_per_unit=1.0):
    """
    Draws a filled circle for every point on a copy of `image`.

    Args:
        image (np.ndarray): Grayscale (H, W) or BGR (H, W, 3) uint8 image.
        points (np.ndarray): (n, 2+) positions; only x and y are used.
        radius (int): Marker radius in pixels.
        color (tuple): BGR marker colour.
        pixels_per_unit (float or tuple): World-to-pixel scale, either one
            value for both axes or an (sx, sy) pair.

    Returns:
        np.ndarray: BGR image with markers.
    """
    if image.ndim == 2:
        canvas = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    else:
        canvas = image.copy()

    if np.isscalar(pixels_per_unit):
        sx = sy = float(pixels_per_unit)
    else:
        sx, sy = pixels_per_unit

    points = np.asarray(points, dtype=float)
    if points.size == 0:
        return canvas
    for x, y in points[:, :2]:
        center = (int(x * sx), int(y * sy))
        cv2.circle(canvas, center, radius, color, thickness=-1)
    return canvas


def save_image(path, image):
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    if not cv2.imwrite(path, image):
        raise IOError(f"Could not write image to {path}")


def show_image(name, image):
    cv2.imshow(name, image)
    cv2.waitKey(0)
    cv2.destroyWindow(name)


def plot_points_3d(points, path, bounds=((0.0, 0.0, 0.0), (1.0, 1.0, 1.0)), marker_size=5):
    """
    Saves a 3D scatter plot of (n, 3) points.
    """
    points = np.asarray(points, dtype=float).reshape(-1, 3)
    lo, hi = bounds

    fig = plt.figure(figsize=(6.4, 4.8))
    ax = fig.add_subplot(projection="3d")
    ax.scatter(points[:, 0], points[:, 1], points[:, 2], s=marker_size, c="blue")
    ax.set_xlim(lo[0], hi[0])
    ax.set_ylim(lo[1], hi[1])
    ax.set_zlim(lo[2], hi[2])
    ax.set_title(f"{len(points)} Poisson points")

    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    fig.savefig(path)
    plt.close(fig)
