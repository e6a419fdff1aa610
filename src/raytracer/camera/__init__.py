"""Camera module for primary ray generation.

Components:
    wall: Eye point casting rays through a square wall of pixels

Pixel coordinates start at the top-left corner of the canvas:
    x in [0, canvas_pixels): left to right
    y in [0, canvas_pixels): top to bottom
"""

from .wall import WallCamera, get_canvas_pixels, get_ray, setup_camera

__all__ = [
    "WallCamera",
    "setup_camera",
    "get_ray",
    "get_canvas_pixels",
]
