"""Canvas: a rectangular grid of colors and its PPM serialization.

The canvas stores linear float64 RGB values in a NumPy array of shape
(height, width, 3), row 0 at the top. Nothing is clamped while drawing;
values are only mapped to the 0-255 range when the canvas is written out:

    scaled = value * 255
    scaled >= 255  ->  255
    scaled <= 0    ->  0
    otherwise      ->  ceil(scaled)

Two PPM flavours are supported. Plain PPM (P3) writes one whitespace
separated integer per component, with no line longer than 70 characters
and a trailing newline. Binary PPM (P6) writes one byte per component.

Example:
    >>> from src.raytracer.core.tuples import color
    >>> from src.raytracer.preview.canvas import Canvas
    >>> canvas = Canvas(5, 3)
    >>> canvas.write_pixel(0, 0, color(1.5, 0, 0))
    >>> canvas.to_ppm().splitlines()[3]
    '255 0 0 0 0 0 0 0 0 0 0 0 0 0 0'
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt

from src.raytracer.core.tuples import Color

logger = logging.getLogger(__name__)

# Longest line allowed in plain PPM output
PPM_MAX_LINE_LENGTH = 70

# Largest value a PPM component may take
PPM_MAX_COLOR_VALUE = 255


def scale_components(values: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Map linear color components to PPM integers in [0, 255].

    Args:
        values: Array of linear color components of any shape.

    Returns:
        Array of the same shape with dtype uint8.
    """
    scaled = np.asarray(values, dtype=np.float64) * PPM_MAX_COLOR_VALUE
    result = np.where(
        scaled >= PPM_MAX_COLOR_VALUE,
        PPM_MAX_COLOR_VALUE,
        np.where(scaled <= 0.0, 0.0, np.ceil(scaled)),
    )
    return result.astype(np.uint8)


class Canvas:
    """A width x height grid of colors, black when created.

    Attributes:
        width: Number of pixel columns.
        height: Number of pixel rows.
    """

    def __init__(self, width: int, height: int) -> None:
        """Create a black canvas.

        Raises:
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} canvas"
            )

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """Set the color of pixel (x, y).

        Raises:
            IndexError: If (x, y) is outside the canvas.
        """
        self._check_bounds(x, y)
        self._pixels[y, x] = color.to_tuple()

    def pixel_at(self, x: int, y: int) -> Color:
        """Get the color of pixel (x, y).

        Raises:
            IndexError: If (x, y) is outside the canvas.
        """
        self._check_bounds(x, y)
        r, g, b = self._pixels[y, x]
        return Color(float(r), float(g), float(b))

    # =========================================================================
    # NumPy interop
    # =========================================================================

    @classmethod
    def from_numpy(cls, image: npt.NDArray[np.floating]) -> Canvas:
        """Create a canvas from an (height, width, 3) image array.

        Raises:
            ValueError: If the array does not have shape (H, W, 3).
        """
        if image.ndim != 3 or image.shape[2] != 3:
            raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")
        height, width, _ = image.shape
        canvas = cls(width, height)
        canvas._pixels[...] = image
        return canvas

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the pixels as an (height, width, 3) float64 array."""
        return self._pixels.copy()

    # =========================================================================
    # PPM serialization
    # =========================================================================

    def _ppm_header(self, magic: str) -> str:
        return f"{magic}\n{self.width} {self.height}\n{PPM_MAX_COLOR_VALUE}\n"

    def to_ppm(self) -> str:
        """Serialize the canvas as plain PPM (P3)."""
        scaled = scale_components(self._pixels)
        lines = []
        for row in scaled:
            line = ""
            for token in (str(v) for v in row.reshape(-1)):
                if not line:
                    line = token
                elif len(line) + 1 + len(token) > PPM_MAX_LINE_LENGTH:
                    lines.append(line)
                    line = token
                else:
                    line = f"{line} {token}"
            lines.append(line)
        return self._ppm_header("P3") + "\n".join(lines) + "\n"

    def to_ppm_bytes(self) -> bytes:
        """Serialize the canvas as binary PPM (P6)."""
        scaled = scale_components(self._pixels)
        return self._ppm_header("P6").encode("ascii") + scaled.tobytes()

    def save_ppm(self, filepath: str | Path, *, binary: bool = False) -> None:
        """Write the canvas to a PPM file.

        Args:
            filepath: Output file path.
            binary: Write P6 instead of P3.
        """
        path = Path(filepath)
        if binary:
            path.write_bytes(self.to_ppm_bytes())
        else:
            path.write_text(self.to_ppm(), encoding="ascii")
        logger.info("Saved %dx%d canvas to %s", self.width, self.height, path)
