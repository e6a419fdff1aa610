#!/usr/bin/env python3
"""Draw the twelve hour marks of an analog clock face.

Each mark is the point at twelve o'clock rotated about the y axis by a
multiple of pi/6, scaled to the clock radius and moved to the middle of the
canvas. The clock lies in the xz plane, so canvas y is taken from world z.
This exercises the transform helpers only; no Taichi backend is needed.

Usage:
    python -m examples.analog_clock [options]

Options:
    --size SIZE       Canvas width and height in pixels (default: 100)
    --output OUTPUT   Output file path (default: analog_clock.ppm)

Example:
    python -m examples.analog_clock --size 200
"""

from __future__ import annotations

import argparse
import math
import sys
from pathlib import Path

from src.raytracer.core.transforms import rotation_y
from src.raytracer.core.tuples import WHITE, point
from src.raytracer.preview.canvas import Canvas

HOUR = math.pi / 6.0


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Draw the hour marks of a clock face.")
    parser.add_argument(
        "--size",
        type=int,
        default=100,
        help="Canvas width and height in pixels (default: 100)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="analog_clock.ppm",
        help="Output file path (default: analog_clock.ppm)",
    )
    return parser.parse_args()


def draw_clock(size: int = 100) -> Canvas:
    """Draw twelve white hour marks on a black canvas.

    Args:
        size: Canvas width and height in pixels.

    Returns:
        The drawn canvas.
    """
    canvas = Canvas(size, size)
    radius = size * 0.45
    center = size / 2.0
    noon = point(0.0, 0.0, 1.0)

    for hour in range(12):
        hand = rotation_y(hour * HOUR) @ noon
        x = int(center + hand.x * radius)
        y = int(center + hand.z * radius)
        canvas.write_pixel(x, y, WHITE)

    return canvas


def main() -> int:
    """Main entry point."""
    args = parse_args()
    try:
        canvas = draw_clock(args.size)
        output_file = Path(args.output)
        canvas.save_ppm(output_file)
        print(f"Saved to: {output_file.absolute()}")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
