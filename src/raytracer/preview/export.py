"""Image export utilities for rendered canvases.

PPM output lives on the Canvas itself; this module adds 8-bit PNG export
through Pillow plus the image helpers used to compare renders.

Supported formats:
    - PPM (P3/P6, see Canvas.save_ppm)
    - PNG (8-bit via Pillow)

Example:
    >>> from src.raytracer.preview.export import save_png
    >>> from src.raytracer.core.renderer import Renderer
    >>>
    >>> canvas = Renderer(scene, camera).render()
    >>> save_png(canvas, "sphere.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.raytracer.preview.canvas import Canvas

logger = logging.getLogger(__name__)


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to uint8 for display/export.

    Values are clamped to [0, 1] before gamma correction.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma correction value. 1.0 leaves values linear, 2.2
            approximates sRGB.

    Returns:
        A uint8 array with the same shape as the input.

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"gamma must be positive, got {gamma}")

    clamped = np.clip(np.asarray(image, dtype=np.float64), 0.0, 1.0)
    if gamma != 1.0:
        clamped = np.power(clamped, 1.0 / gamma)

    return (clamped * 255).astype(np.uint8)


def save_png(canvas: Canvas, filepath: str | Path, *, gamma: float = 1.0) -> None:
    """Save a canvas as an 8-bit PNG file.

    Args:
        canvas: The canvas to save.
        filepath: Destination path; Pillow picks the format from the suffix.
        gamma: Gamma correction value (default 1.0, no correction).
    """
    image_uint8 = image_to_uint8(canvas.to_numpy(), gamma=gamma)

    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)
    logger.info("Saved %dx%d PNG to %s", canvas.width, canvas.height, filepath)


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Root mean squared difference of two equally shaped images.

    Used to compare a device render with its host reference.

    Raises:
        ValueError: If the two arrays differ in shape.
    """
    a = np.asarray(image_a, dtype=np.float64)
    b = np.asarray(image_b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Image shapes must match: {a.shape} vs {b.shape}")
    return float(np.sqrt(np.mean(np.square(a - b))))
