#!/usr/bin/env python3
"""Render a Phong-shaded sphere.

This script renders a single magenta sphere lit by a white point light
above and to the left of the camera. The image is cast onto a 7x7 wall at
z = 10 from an eye at (0, 0, -5), and saved as PPM or PNG depending on the
output file extension.

Usage:
    python -m examples.render_sphere [options]

Options:
    --canvas-pixels N   Canvas width and height in pixels (default: 100, or
                        RAYTRACER_CANVAS_PIXELS)
    --transform NAME    Sphere transform: none, shrink-y, shrink-x,
                        shrink-rotate or shear (default: none)
    --output OUTPUT     Output file path, .ppm or .png (default: sphere.ppm)
    --binary            Write binary (P6) PPM
    --reference         Render on the host instead of the Taichi kernel
    --workers N         Worker threads for --reference (default: 4)
    --arch ARCH         Taichi backend, cpu or gpu (default: gpu, or
                        RAYTRACER_ARCH)
    --log-level LEVEL   Logging level (default: INFO, or RAYTRACER_LOG_LEVEL)
    --quiet             Suppress progress output

Example:
    python -m examples.render_sphere --canvas-pixels 400 --transform shear --output sphere.png
"""

from __future__ import annotations

import argparse
import math
import sys
import time
from pathlib import Path

TRANSFORMS = ("none", "shrink-y", "shrink-x", "shrink-rotate", "shear")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    from src.raytracer.config import RenderSettings

    defaults = RenderSettings.from_env()

    parser = argparse.ArgumentParser(
        description="Render a Phong-shaded sphere.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--canvas-pixels",
        type=int,
        default=defaults.canvas_pixels,
        help=f"Canvas width and height in pixels (default: {defaults.canvas_pixels})",
    )
    parser.add_argument(
        "--transform",
        choices=TRANSFORMS,
        default="none",
        help="Sphere transform (default: none)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=defaults.output,
        help=f"Output file path, .ppm or .png (default: {defaults.output})",
    )
    parser.add_argument(
        "--binary",
        action="store_true",
        help="Write binary (P6) PPM",
    )
    parser.add_argument(
        "--reference",
        action="store_true",
        help="Render on the host instead of the Taichi kernel",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=4,
        help="Worker threads for --reference (default: 4)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default=defaults.arch,
        help=f"Taichi backend (default: {defaults.arch})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=defaults.log_level,
        help=f"Logging level (default: {defaults.log_level})",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def sphere_transform(name: str):
    """Build the sphere transform selected on the command line."""
    from src.raytracer.core.matrix import IDENTITY
    from src.raytracer.core.transforms import rotation_z, scaling, shearing

    if name == "shrink-y":
        return scaling(1.0, 0.5, 1.0)
    if name == "shrink-x":
        return scaling(0.5, 1.0, 1.0)
    if name == "shrink-rotate":
        return rotation_z(math.pi / 4.0) @ scaling(0.5, 1.0, 1.0)
    if name == "shear":
        return shearing(1.0, 0.0, 0.0, 0.0, 0.0, 0.0) @ scaling(0.5, 1.0, 1.0)
    return IDENTITY


def render_sphere(
    canvas_pixels: int = 100,
    transform: str = "none",
    output_path: str = "sphere.ppm",
    binary: bool = False,
    reference: bool = False,
    workers: int = 4,
    quiet: bool = False,
) -> Path:
    """Render the sphere scene and save it to a file.

    Args:
        canvas_pixels: Canvas width and height in pixels.
        transform: Name of the sphere transform (see TRANSFORMS).
        output_path: Output file path; .png writes PNG, anything else PPM.
        binary: Write binary (P6) PPM.
        reference: Render on the host instead of the Taichi kernel.
        workers: Worker threads for the host renderer.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.raytracer.camera.wall import WallCamera
    from src.raytracer.core.renderer import Renderer
    from src.raytracer.core.tuples import color, point
    from src.raytracer.geometry.sphere import Sphere
    from src.raytracer.materials.phong import Material, PointLight
    from src.raytracer.preview.export import save_png
    from src.raytracer.scene.manager import SceneManager

    if not quiet:
        print(f"Creating sphere scene ({canvas_pixels}x{canvas_pixels}, transform={transform})...")

    scene = SceneManager()
    shape = Sphere()
    shape.set_transform(sphere_transform(transform))
    shape.set_material(Material(color=color(1.0, 0.2, 1.0)))
    scene.add_sphere(shape)
    scene.set_light(PointLight(point(-10.0, 10.0, -10.0), color(1.0, 1.0, 1.0)))

    camera = WallCamera(canvas_pixels=canvas_pixels)
    renderer = Renderer(scene, camera)

    start_time = time.time()
    if reference:
        if not quiet:
            print(f"Rendering on the host with {workers} workers...")
        canvas = renderer.render_reference(workers=workers)
    else:
        if not quiet:
            print("Rendering with Taichi...")
        canvas = renderer.render()

    output_file = Path(output_path)
    if output_file.suffix.lower() == ".png":
        save_png(canvas, output_file)
    else:
        canvas.save_ppm(output_file, binary=binary)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    from src.raytracer.config import configure_logging, init_taichi

    try:
        args = parse_args()
        configure_logging(args.log_level.upper())
        backend = init_taichi(args.arch)
        if not args.quiet:
            print(f"Using {backend.upper()} backend")

        render_sphere(
            canvas_pixels=args.canvas_pixels,
            transform=args.transform,
            output_path=args.output,
            binary=args.binary,
            reference=args.reference,
            workers=args.workers,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
