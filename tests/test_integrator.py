"""Unit tests for the direct-lighting integrator.

Tests cover:
- Light setup and validation
- Render target setup, bounds and errors
- trace_ray() and render_pixel() against host shading
- Full image rendering into the color buffer
"""

import numpy as np
import pytest


def _lit_sphere_scene():
    """A default sphere lit from the upper left, uploaded to the device."""
    from src.raytracer.core.tuples import color, point
    from src.raytracer.geometry.sphere import Sphere
    from src.raytracer.materials.phong import Material, PointLight
    from src.raytracer.scene.manager import SceneManager

    scene = SceneManager()
    scene.add_sphere(Sphere(material=Material(color=color(1.0, 0.2, 1.0))))
    scene.set_light(PointLight(point(-10, 10, -10), color(1, 1, 1)))
    return scene


class TestLightSetup:
    """Tests for setup_light/disable_light."""

    def test_light_disabled_by_default(self):
        """Test that the fixture leaves the light disabled."""
        from src.raytracer.core.integrator import is_light_enabled

        assert not is_light_enabled()

    def test_setup_light(self):
        """Test that setup_light writes the light fields."""
        from src.raytracer.core import integrator
        from src.raytracer.core.tuples import color, point
        from src.raytracer.materials.phong import PointLight

        integrator.setup_light(PointLight(point(1, 2, 3), color(0.5, 0.25, 1)))
        assert integrator.is_light_enabled()
        p = integrator._light_position[None]
        i = integrator._light_intensity[None]
        assert (p[0], p[1], p[2]) == pytest.approx((1.0, 2.0, 3.0))
        assert (i[0], i[1], i[2]) == pytest.approx((0.5, 0.25, 1.0))

    def test_light_position_must_be_point(self):
        """Test that a vector light position is rejected."""
        from src.raytracer.core.integrator import setup_light
        from src.raytracer.core.tuples import color, vector
        from src.raytracer.materials.phong import PointLight

        with pytest.raises(ValueError, match="must be a point"):
            setup_light(PointLight(vector(0, 0, -10), color(1, 1, 1)))

    def test_disable_light(self):
        """Test turning the light off again."""
        from src.raytracer.core.integrator import disable_light, is_light_enabled, setup_light
        from src.raytracer.core.tuples import color, point
        from src.raytracer.materials.phong import PointLight

        setup_light(PointLight(point(0, 0, -10), color(1, 1, 1)))
        disable_light()
        assert not is_light_enabled()


class TestRenderTarget:
    """Tests for render target setup."""

    def test_setup_render_target(self):
        """Test that the active dimensions are recorded."""
        from src.raytracer.core.integrator import get_image_dimensions, setup_render_target

        setup_render_target(64, 32)
        assert get_image_dimensions() == (64, 32)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-1, 10)])
    def test_non_positive_dimensions_raise(self, width, height):
        """Test that dimensions must be positive."""
        from src.raytracer.core.integrator import setup_render_target

        with pytest.raises(ValueError, match="must be positive"):
            setup_render_target(width, height)

    def test_oversize_dimensions_raise(self):
        """Test that dimensions beyond the preallocated buffer are rejected."""
        from src.raytracer.core.integrator import MAX_IMAGE_WIDTH, setup_render_target

        with pytest.raises(ValueError, match="exceed maximum"):
            setup_render_target(MAX_IMAGE_WIDTH + 1, 10)

    def test_get_image_returns_buffer(self):
        """Test that get_image returns the full preallocated field."""
        from src.raytracer.core.integrator import (
            MAX_IMAGE_HEIGHT,
            MAX_IMAGE_WIDTH,
            get_image,
            setup_render_target,
        )

        setup_render_target(8, 8)
        assert get_image().shape == (MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT)


class TestRenderTargetErrors:
    """Test error handling for render target operations."""

    def test_render_image_without_setup_raises_error(self):
        """Test that render_image raises error if target not set up."""
        import src.raytracer.core.integrator as integrator
        from src.raytracer.core.integrator import render_image

        # Mark as not initialized
        original_value = integrator._target_ready[None]
        integrator._target_ready[None] = 0

        with pytest.raises(RuntimeError, match="Render target not set up"):
            render_image()

        # Restore
        integrator._target_ready[None] = original_value

    def test_get_image_numpy_without_setup_raises_error(self):
        """Test that get_image_numpy raises error if target not set up."""
        import src.raytracer.core.integrator as integrator
        from src.raytracer.core.integrator import get_image_numpy

        original_value = integrator._target_ready[None]
        integrator._target_ready[None] = 0

        with pytest.raises(RuntimeError, match="Render target not set up"):
            get_image_numpy()

        integrator._target_ready[None] = original_value


class TestTraceRay:
    """Tests for trace_ray() and render_pixel()."""

    def test_miss_is_black(self):
        """Test that a ray missing every sphere is black."""
        from src.raytracer.core.integrator import trace_ray
        from src.raytracer.core.ray import Ray
        from src.raytracer.core.tuples import point, vector

        _lit_sphere_scene()
        result = trace_ray(Ray(point(0, 0, -5), vector(0, 1, 0)))
        assert result.to_tuple() == (0.0, 0.0, 0.0)

    def test_unlit_scene_is_black(self):
        """Test that a hit without a light is black."""
        from src.raytracer.core.integrator import trace_ray
        from src.raytracer.core.ray import Ray
        from src.raytracer.core.tuples import point, vector

        scene = _lit_sphere_scene()
        scene.set_light(None)
        result = trace_ray(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert result.to_tuple() == (0.0, 0.0, 0.0)

    def test_hit_matches_host_color(self):
        """Test that device tracing agrees with SceneManager.color_at."""
        from src.raytracer.core.integrator import trace_ray
        from src.raytracer.core.ray import Ray
        from src.raytracer.core.tuples import point, vector

        scene = _lit_sphere_scene()
        ray = Ray(point(0, 0, -5), vector(0.05, -0.1, 1).normalize())
        expected = scene.color_at(ray)
        result = trace_ray(ray)
        assert result.to_tuple() == pytest.approx(expected.to_tuple(), abs=1e-3)

    def test_render_pixel_matches_host(self):
        """Test that a camera pixel agrees with the host ray for it."""
        from src.raytracer.camera.wall import WallCamera, setup_camera
        from src.raytracer.core.integrator import render_pixel

        scene = _lit_sphere_scene()
        camera = WallCamera(canvas_pixels=50)
        setup_camera(camera)
        for x, y in [(25, 25), (20, 15), (0, 0)]:
            expected = scene.color_at(camera.ray_for_pixel(x, y))
            result = render_pixel(x, y)
            assert result.to_tuple() == pytest.approx(expected.to_tuple(), abs=1e-3)


class TestRenderImage:
    """Tests for full image rendering."""

    def test_image_shape_and_dtype(self):
        """Test the (height, width, 3) float32 layout."""
        from src.raytracer.camera.wall import WallCamera, setup_camera
        from src.raytracer.core.integrator import get_image_numpy, render_image, setup_render_target

        _lit_sphere_scene()
        setup_camera(WallCamera(canvas_pixels=20))
        setup_render_target(20, 20)
        render_image()
        image = get_image_numpy()
        assert image.shape == (20, 20, 3)
        assert image.dtype == np.float32

    def test_corners_are_background(self):
        """Test that rays past the sphere stay black."""
        from src.raytracer.camera.wall import WallCamera, setup_camera
        from src.raytracer.core.integrator import get_image_numpy, render_image, setup_render_target

        _lit_sphere_scene()
        setup_camera(WallCamera(canvas_pixels=20))
        setup_render_target(20, 20)
        render_image()
        image = get_image_numpy()
        for y, x in [(0, 0), (0, 19), (19, 0), (19, 19)]:
            assert np.all(image[y, x] == 0.0)
        assert np.all(image[10, 10] > 0.0)

    def test_top_left_is_lit_more_than_bottom_right(self):
        """Test that row 0 is the top, facing the upper-left light."""
        from src.raytracer.camera.wall import WallCamera, setup_camera
        from src.raytracer.core.integrator import get_image_numpy, render_image, setup_render_target

        _lit_sphere_scene()
        setup_camera(WallCamera(canvas_pixels=40))
        setup_render_target(40, 40)
        render_image()
        image = get_image_numpy()
        upper_left = image[14, 14].sum()
        lower_right = image[26, 26].sum()
        assert upper_left > lower_right

    def test_image_matches_render_pixel(self):
        """Test that the full render agrees with single-pixel renders."""
        from src.raytracer.camera.wall import WallCamera, setup_camera
        from src.raytracer.core.integrator import (
            get_image_numpy,
            render_image,
            render_pixel,
            setup_render_target,
        )

        _lit_sphere_scene()
        setup_camera(WallCamera(canvas_pixels=16))
        setup_render_target(16, 16)
        render_image()
        image = get_image_numpy()
        for x, y in [(8, 8), (5, 6), (10, 3)]:
            assert tuple(image[y, x]) == pytest.approx(render_pixel(x, y).to_tuple(), abs=1e-5)

    def test_empty_scene_renders_black(self):
        """Test that an empty scene produces an all-black image."""
        from src.raytracer.camera.wall import WallCamera, setup_camera
        from src.raytracer.core.integrator import (
            get_image_numpy,
            render_image,
            setup_light,
            setup_render_target,
        )
        from src.raytracer.core.tuples import color, point
        from src.raytracer.materials.phong import PointLight

        setup_light(PointLight(point(-10, 10, -10), color(1, 1, 1)))
        setup_camera(WallCamera(canvas_pixels=10))
        setup_render_target(10, 10)
        render_image()
        assert np.all(get_image_numpy() == 0.0)
