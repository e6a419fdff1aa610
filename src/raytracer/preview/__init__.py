"""Preview module for image output.

Components:
    canvas: Pixel buffer with PPM (P3/P6) serialization
    export: PNG export via Pillow and image comparison helpers

Example:
    >>> from src.raytracer.preview import Canvas, save_png
    >>> canvas = Canvas(100, 100)
    >>> canvas.save_ppm("blank.ppm")
    >>> save_png(canvas, "blank.png")
"""

from src.raytracer.preview.canvas import Canvas, scale_components
from src.raytracer.preview.export import compute_rmse, image_to_uint8, save_png

__all__ = [
    "Canvas",
    "scale_components",
    "save_png",
    "image_to_uint8",
    "compute_rmse",
]
