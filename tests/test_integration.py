"""Integration tests for end-to-end rendering pipeline.

This module tests the complete pipeline from scene creation through the
written image file, using the example scripts' entry points. Tests are kept
fast by rendering at low resolution.

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest


class TestSphereRenderIntegration:
    """Integration tests for the Phong sphere scene."""

    def test_render_sphere_writes_ppm(self, tmp_path: Path) -> None:
        """Test that the sphere script writes a valid plain PPM."""
        from examples.render_sphere import render_sphere

        output = tmp_path / "sphere.ppm"
        result = render_sphere(canvas_pixels=20, output_path=str(output), quiet=True)

        assert result == output
        text = output.read_text(encoding="ascii")
        lines = text.splitlines()
        assert lines[:3] == ["P3", "20 20", "255"]
        assert all(len(line) <= 70 for line in lines)
        values = [int(v) for v in " ".join(lines[3:]).split()]
        assert len(values) == 20 * 20 * 3
        assert all(0 <= v <= 255 for v in values)
        assert max(values) > 0

    def test_render_sphere_writes_png(self, tmp_path: Path) -> None:
        """Test that a .png output path produces a PNG."""
        from PIL import Image

        from examples.render_sphere import render_sphere

        output = tmp_path / "sphere.png"
        render_sphere(canvas_pixels=16, output_path=str(output), quiet=True)

        with Image.open(output) as img:
            assert img.format == "PNG"
            assert img.size == (16, 16)

    @pytest.mark.parametrize("transform", ["shrink-y", "shrink-x", "shrink-rotate", "shear"])
    def test_transforms_match_reference(self, tmp_path: Path, transform: str) -> None:
        """Test that every transform renders the same on host and device."""
        from PIL import Image

        from examples.render_sphere import render_sphere

        device_path = tmp_path / "device.ppm"
        host_path = tmp_path / "host.ppm"
        render_sphere(16, transform, str(device_path), binary=True, quiet=True)
        render_sphere(16, transform, str(host_path), binary=True, reference=True, workers=2, quiet=True)

        with Image.open(device_path) as a, Image.open(host_path) as b:
            diff = np.abs(np.asarray(a, dtype=np.int16) - np.asarray(b, dtype=np.int16))
        # Allow off-by-one from rounding float32 values up
        assert diff.max() <= 1

    def test_shrink_y_squashes_silhouette(self, tmp_path: Path) -> None:
        """Test that scaling y by 0.5 leaves more black rows."""
        from PIL import Image

        from examples.render_sphere import render_sphere

        plain = tmp_path / "plain.png"
        squashed = tmp_path / "squashed.png"
        render_sphere(30, "none", str(plain), quiet=True)
        render_sphere(30, "shrink-y", str(squashed), quiet=True)

        def lit_rows(path: Path) -> int:
            with Image.open(path) as img:
                pixels = np.asarray(img)
            return int(np.count_nonzero(pixels.sum(axis=(1, 2))))

        assert lit_rows(squashed) < lit_rows(plain)


class TestClockIntegration:
    """Integration tests for the clock face drawing."""

    def test_draw_clock_has_twelve_marks(self) -> None:
        """Test that exactly twelve distinct pixels are white."""
        from examples.analog_clock import draw_clock

        canvas = draw_clock(100)
        image = canvas.to_numpy()
        lit = np.argwhere(image.sum(axis=2) > 0)
        assert len(lit) == 12

    def test_noon_mark_position(self) -> None:
        """Test the position of the twelve o'clock mark."""
        from examples.analog_clock import draw_clock

        from src.raytracer.core.tuples import WHITE

        canvas = draw_clock(100)
        assert canvas.pixel_at(50, 95) == WHITE


class TestProjectileIntegration:
    """Integration tests for the projectile trajectory plot."""

    def test_tick(self):
        """Test that one tick applies velocity, then gravity and wind."""
        from examples.projectile import Environment, Projectile, tick

        from src.raytracer.core.tuples import point, vector

        env = Environment(gravity=vector(0, -0.1, 0), wind=vector(0.01, 0, 0))
        moved = tick(env, Projectile(point(0, 1, 0), vector(1, 0, 0)))
        assert moved.position == point(1, 1, 0)
        assert moved.velocity == vector(1.01, -0.1, 0)

    def test_flight_ends_below_ground(self):
        """Test that only the last state has left the first quadrant."""
        from examples.projectile import Environment, Projectile, simulate

        from src.raytracer.core.tuples import point, vector

        launch = Projectile(point(0, 0, 0), vector(1, 1.8, 0).normalize())
        env = Environment(gravity=vector(0, -0.1, 0), wind=vector(0.01, 0, 0))
        states = simulate(launch, env)

        assert len(states) > 2
        assert all(s.position.x >= 0.0 and s.position.y >= 0.0 for s in states[:-1])
        assert states[-1].position.y < 0.0

    def test_runaway_flight_is_bounded(self):
        """Test that a flight without gravity stops after max_ticks."""
        from examples.projectile import Environment, Projectile, simulate

        from src.raytracer.core.tuples import point, vector

        launch = Projectile(point(0, 0, 0), vector(1, 1, 0))
        env = Environment(gravity=vector(0, 0, 0), wind=vector(0, 0, 0))
        assert len(simulate(launch, env, max_ticks=25)) == 26

    def test_plot_trajectory(self):
        """Test that the launch point is plotted at the bottom left."""
        from examples.projectile import plot_trajectory

        from src.raytracer.core.tuples import WHITE

        canvas = plot_trajectory(500, 250, 40.0)
        assert (canvas.width, canvas.height) == (500, 250)
        assert canvas.pixel_at(0, 249) == WHITE
        lit = np.argwhere(canvas.to_numpy().sum(axis=2) > 0)
        assert len(lit) > 10

    def test_main_writes_ppm(self, tmp_path: Path, monkeypatch) -> None:
        """Test the command-line entry point."""
        from examples import projectile

        output = tmp_path / "shot.ppm"
        monkeypatch.setattr(
            "sys.argv",
            ["projectile", "--width", "100", "--height", "50", "--scale", "8", "--output", str(output)],
        )
        assert projectile.main() == 0
        lines = output.read_text(encoding="ascii").splitlines()
        assert lines[:3] == ["P3", "100 50", "255"]
