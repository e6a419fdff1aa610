"""Unit tests for the wall camera.

Tests cover:
- WallCamera defaults and validation
- Pixel to wall mapping, including the flipped y axis
- Host ray_for_pixel()
- Device get_ray() agreement with the host rays
"""

import pytest
import taichi as ti


class TestWallCameraConfig:
    """Tests for WallCamera construction."""

    def test_defaults(self):
        """Test the default eye, wall and canvas size."""
        from src.raytracer.camera.wall import WallCamera

        camera = WallCamera()
        assert camera.ray_origin == (0.0, 0.0, -5.0)
        assert camera.wall_z == 10.0
        assert camera.wall_size == 7.0
        assert camera.canvas_pixels == 100
        assert camera.pixel_size == pytest.approx(0.07)

    @pytest.mark.parametrize("wall_size", [0.0, -1.0])
    def test_invalid_wall_size(self, wall_size):
        """Test that the wall must have a positive size."""
        from src.raytracer.camera.wall import WallCamera

        with pytest.raises(ValueError, match="wall_size"):
            WallCamera(wall_size=wall_size)

    @pytest.mark.parametrize("canvas_pixels", [0, -10])
    def test_invalid_canvas_pixels(self, canvas_pixels):
        """Test that the canvas must have a positive size."""
        from src.raytracer.camera.wall import WallCamera

        with pytest.raises(ValueError, match="canvas_pixels"):
            WallCamera(canvas_pixels=canvas_pixels)


class TestWorldCoordinates:
    """Tests for compute_world_coordinates()."""

    def test_top_left_corner(self):
        """Test that pixel (0, 0) maps to the top-left of the wall."""
        from src.raytracer.camera.wall import WallCamera

        x, y, z = WallCamera().compute_world_coordinates(0, 0)
        assert x == pytest.approx(-3.5)
        assert y == pytest.approx(3.5)
        assert z == 10.0

    def test_center(self):
        """Test that the middle pixel maps to the wall center."""
        from src.raytracer.camera.wall import WallCamera

        x, y, _ = WallCamera().compute_world_coordinates(50, 50)
        assert x == pytest.approx(0.0)
        assert y == pytest.approx(0.0)

    def test_y_decreases_downwards(self):
        """Test that larger pixel rows are lower in the world."""
        from src.raytracer.camera.wall import WallCamera

        camera = WallCamera()
        _, y_top, _ = camera.compute_world_coordinates(0, 10)
        _, y_bottom, _ = camera.compute_world_coordinates(0, 90)
        assert y_top > y_bottom


class TestHostRays:
    """Tests for ray_for_pixel()."""

    def test_center_ray(self):
        """Test the ray through the wall center points straight down +z."""
        from src.raytracer.camera.wall import WallCamera
        from src.raytracer.core.tuples import point, vector

        ray = WallCamera().ray_for_pixel(50, 50)
        assert ray.origin == point(0, 0, -5)
        assert ray.direction == vector(0, 0, 1)

    def test_direction_is_normalized(self):
        """Test that corner rays are unit length."""
        from src.raytracer.camera.wall import WallCamera

        ray = WallCamera().ray_for_pixel(0, 0)
        assert ray.direction.is_unit_vector()
        assert ray.direction.x < 0.0
        assert ray.direction.y > 0.0

    def test_custom_origin(self):
        """Test a camera with its eye moved off the axis."""
        from src.raytracer.camera.wall import WallCamera
        from src.raytracer.core.tuples import point

        camera = WallCamera(ray_origin=(1.0, 2.0, -3.0), canvas_pixels=10)
        ray = camera.ray_for_pixel(0, 0)
        assert ray.origin == point(1, 2, -3)


class TestDeviceRays:
    """Tests for the Taichi get_ray()."""

    def test_setup_camera(self):
        """Test copying the camera into fields."""
        from src.raytracer.camera.wall import WallCamera, get_canvas_pixels, setup_camera

        setup_camera(WallCamera(canvas_pixels=64))
        assert get_canvas_pixels() == 64

    @pytest.mark.parametrize("x,y", [(0, 0), (50, 50), (99, 0), (13, 87)])
    def test_get_ray_matches_host(self, x, y):
        """Test that device rays agree with host rays."""
        from src.raytracer.camera.wall import WallCamera, get_ray, setup_camera

        camera = WallCamera()
        setup_camera(camera)
        origin = ti.Vector.field(3, dtype=ti.f32, shape=())
        direction = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel(px: ti.i32, py: ti.i32):
            ray = get_ray(px, py)
            origin[None] = ray.origin
            direction[None] = ray.direction

        test_kernel(x, y)
        expected = camera.ray_for_pixel(x, y)
        o = origin[None]
        d = direction[None]
        assert (o[0], o[1], o[2]) == pytest.approx(expected.origin.xyz(), abs=1e-5)
        assert (d[0], d[1], d[2]) == pytest.approx(expected.direction.xyz(), abs=1e-5)
