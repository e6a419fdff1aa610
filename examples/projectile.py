#!/usr/bin/env python3
"""Plot the flight of a projectile under gravity and wind.

A projectile starts at the origin with a unit launch velocity. Every tick
its position advances by its velocity, and its velocity picks up the
environment's gravity and wind. The flight ends at the first tick that
leaves the ground (y < 0) or crosses behind the launch point (x < 0). Each
visited position is scaled by --scale and plotted as a white pixel, with
world y pointing up the canvas. Positions that fall outside the canvas are
not drawn.

Usage:
    python -m examples.projectile [options]

Options:
    --width WIDTH       Canvas width in pixels (default: 500)
    --height HEIGHT     Canvas height in pixels (default: 250)
    --scale SCALE       Pixels per world unit (default: 40)
    --output OUTPUT     Output file path (default: projectile.ppm)
    --verbose           Print every position and velocity

Example:
    python -m examples.projectile --scale 20 --output shot.ppm
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

from src.raytracer.core.tuples import WHITE, Tuple, point, vector
from src.raytracer.preview.canvas import Canvas

# Stop runaway flights when gravity does not bring the projectile down
MAX_TICKS = 10_000


@dataclass(frozen=True)
class Projectile:
    """A moving point mass.

    Attributes:
        position: Current location (a point).
        velocity: Displacement per tick (a vector).
    """

    position: Tuple
    velocity: Tuple


@dataclass(frozen=True)
class Environment:
    """Constant accelerations applied every tick.

    Attributes:
        gravity: Change in velocity per tick from gravity (a vector).
        wind: Change in velocity per tick from wind (a vector).
    """

    gravity: Tuple
    wind: Tuple


def tick(env: Environment, projectile: Projectile) -> Projectile:
    """Advance a projectile by one time step."""
    return Projectile(
        position=projectile.position + projectile.velocity,
        velocity=projectile.velocity + env.gravity + env.wind,
    )


def simulate(
    projectile: Projectile,
    env: Environment,
    max_ticks: int = MAX_TICKS,
) -> list[Projectile]:
    """Run a flight until the projectile leaves the first quadrant.

    Args:
        projectile: The launch state.
        env: Gravity and wind for the whole flight.
        max_ticks: Upper bound on the number of ticks.

    Returns:
        Every state from launch up to and including the first one with
        x < 0 or y < 0.
    """
    states = [projectile]
    for _ in range(max_ticks):
        position = projectile.position
        if position.x < 0.0 or position.y < 0.0:
            break
        projectile = tick(env, projectile)
        states.append(projectile)
    return states


def plot_trajectory(
    width: int = 500,
    height: int = 250,
    scale: float = 40.0,
    verbose: bool = False,
) -> Canvas:
    """Simulate the standard shot and plot it on a canvas.

    The launch velocity is the unit vector along (1, 1.8, 0), gravity is
    (0, -0.1, 0) and wind is (0.01, 0, 0).

    Args:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        scale: Pixels per world unit.
        verbose: If True, print every state.

    Returns:
        The canvas with the visited positions in white.
    """
    launch = Projectile(point(0.0, 0.0, 0.0), (vector(1.0, 1.8, 0.0) * 11.25).normalize())
    env = Environment(gravity=vector(0.0, -0.1, 0.0), wind=vector(0.01, 0.0, 0.0))

    canvas = Canvas(width, height)
    for state in simulate(launch, env):
        if verbose:
            print(f"position {state.position}, velocity {state.velocity}")
        x = int(state.position.x * scale)
        y = height - 1 - int(state.position.y * scale)
        if 0 <= x < width and 0 <= y < height:
            canvas.write_pixel(x, y, WHITE)
    return canvas


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Plot a projectile trajectory.")
    parser.add_argument(
        "--width",
        type=int,
        default=500,
        help="Canvas width in pixels (default: 500)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=250,
        help="Canvas height in pixels (default: 250)",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=40.0,
        help="Pixels per world unit (default: 40)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="projectile.ppm",
        help="Output file path (default: projectile.ppm)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print every position and velocity",
    )
    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()
    try:
        canvas = plot_trajectory(args.width, args.height, args.scale, verbose=args.verbose)
        output_file = Path(args.output)
        canvas.save_ppm(output_file)
        print(f"Saved to: {output_file.absolute()}")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
