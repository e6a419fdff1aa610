"""Direct-lighting integrator: one Phong-shaded ray per pixel.

Every pixel gets exactly one primary ray from the wall camera. The ray is
tested against every sphere in the scene; the nearest visible hit is shaded
with the Phong model under the single point light. Rays that miss, and all
rays while no light is set up, produce black. There are no secondary rays,
so there is no recursion, sampling or accumulation: rendering is
deterministic and one pass is final.

The render kernel runs over ``ti.ndrange(width, height)`` and each pixel
writes only its own cell of the color buffer.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raytracer.camera.wall import WallCamera, setup_camera
    >>> from src.raytracer.core.integrator import (
    ...     get_image_numpy, render_image, setup_light, setup_render_target
    ... )
    >>> from src.raytracer.core.tuples import color, point
    >>> from src.raytracer.materials.phong import PointLight
    >>>
    >>> setup_camera(WallCamera(canvas_pixels=100))
    >>> setup_light(PointLight(point(-10, 10, -10), color(1, 1, 1)))
    >>> setup_render_target(100, 100)
    >>> render_image()
    >>> image = get_image_numpy()  # (100, 100, 3) float32
"""

import logging

import numpy as np
import taichi as ti
import taichi.math as tm

from src.raytracer.camera.wall import get_ray
from src.raytracer.core.ray import Ray
from src.raytracer.core.tuples import Color
from src.raytracer.materials.phong import PointLight
from src.raytracer.scene.intersection import intersect_scene, shade_scene_hit

logger = logging.getLogger(__name__)

vec3 = tm.vec3

# Color of rays that hit nothing
BACKGROUND_COLOR = vec3(0.0, 0.0, 0.0)

# =============================================================================
# Point Light
# =============================================================================

_light_enabled = ti.field(dtype=ti.i32, shape=())
_light_position = ti.Vector.field(3, dtype=ti.f32, shape=())
_light_intensity = ti.Vector.field(3, dtype=ti.f32, shape=())


def setup_light(light: PointLight) -> None:
    """Configure the point light used for shading.

    Args:
        light: The point light. Its position must be a point.

    Raises:
        ValueError: If the light position is not a point.
    """
    if not light.position.is_point():
        raise ValueError(f"Light position must be a point, got {light.position}")

    _light_enabled[None] = 1
    _light_position[None] = list(light.position.xyz())
    _light_intensity[None] = list(light.intensity.to_tuple())


def disable_light() -> None:
    """Switch the light off; every pixel then renders black."""
    _light_enabled[None] = 0


def is_light_enabled() -> bool:
    return _light_enabled[None] == 1


# =============================================================================
# Color Buffer
# =============================================================================

# The buffer is allocated once at the largest size so kernels never recompile
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Active (width, height) inside the allocated buffer
_target_size = ti.Vector.field(2, dtype=ti.i32, shape=())
_target_ready = ti.field(dtype=ti.i32, shape=())

# Indexed [x, y] with y = 0 at the top row
_pixels = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))


def setup_render_target(width: int, height: int) -> None:
    """Size the active region of the color buffer and blank it.

    Args:
        width: Pixels per row, at most MAX_IMAGE_WIDTH.
        height: Number of rows, at most MAX_IMAGE_HEIGHT.

    Raises:
        ValueError: If either size is zero, negative or too large.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Requested {width}x{height} image would exceed maximum buffer size "
            f"{MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT}"
        )

    _target_size[None] = [width, height]
    _target_ready[None] = 1
    logger.debug("Render target set up at %dx%d", width, height)

    clear_render_target()


def clear_render_target() -> None:
    """Reset every buffered pixel to black."""
    _pixels.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Return the active (width, height) of the render target."""
    size = _target_size[None]
    return int(size[0]), int(size[1])


def _require_render_target() -> None:
    if not _target_ready[None]:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


def get_image() -> "ti.MatrixField":
    """Return the whole preallocated color field.

    Only the top-left region given by get_image_dimensions() holds pixels of
    the current render.

    Raises:
        RuntimeError: If setup_render_target() was never called.
    """
    _require_render_target()
    return _pixels

# =============================================================================
# Shading
# =============================================================================


@ti.func
def shade_ray(origin: vec3, direction: vec3) -> vec3:
    """Evaluate the color seen along one ray.

    Args:
        origin: World-space ray origin.
        direction: World-space ray direction (normalized for camera rays).

    Returns:
        The shaded color of the nearest visible hit, or the background color.
    """
    result = BACKGROUND_COLOR
    record = intersect_scene(origin, direction)
    if record.hit == 1 and _light_enabled[None] == 1:
        result = shade_scene_hit(
            record, origin, direction, _light_position[None], _light_intensity[None]
        )
    return result


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_all_pixels(width: ti.i32, height: ti.i32):
    for x, y in ti.ndrange(width, height):
        ray = get_ray(x, y)
        _pixels[x, y] = shade_ray(ray.origin, ray.direction)


@ti.kernel
def _render_single_pixel(x: ti.i32, y: ti.i32) -> vec3:
    ray = get_ray(x, y)
    return shade_ray(ray.origin, ray.direction)


@ti.kernel
def _trace_single_ray(origin: vec3, direction: vec3) -> vec3:
    return shade_ray(origin, direction)


# =============================================================================
# Public Rendering API
# =============================================================================


def trace_ray(ray: Ray) -> Color:
    """Evaluate an arbitrary host ray on the device.

    Args:
        ray: The world-space ray. Its direction should be normalized, since
            the eye vector is taken to be the negated direction.

    Returns:
        The shaded color, or black on a miss.
    """
    origin = vec3(ray.origin.x, ray.origin.y, ray.origin.z)
    direction = vec3(ray.direction.x, ray.direction.y, ray.direction.z)
    result = _trace_single_ray(origin, direction)
    return Color(float(result[0]), float(result[1]), float(result[2]))


def render_pixel(x: int, y: int) -> Color:
    """Render a single camera pixel without touching the color buffer.

    Used for testing and debugging individual pixels. For full images use
    render_image(), which processes all pixels in parallel.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).

    Returns:
        The rendered color.
    """
    result = _render_single_pixel(x, y)
    return Color(float(result[0]), float(result[1]), float(result[2]))


def render_image() -> None:
    """Render every pixel of the render target in one kernel launch.

    Raises:
        RuntimeError: If setup_render_target() was never called.
    """
    _require_render_target()

    width, height = get_image_dimensions()
    logger.debug("Rendering %dx%d image", width, height)
    _render_all_pixels(width, height)


def get_image_numpy() -> np.ndarray:
    """Copy the active region of the color buffer to the host.

    Returns:
        A float32 array of shape (height, width, 3), row 0 at the top.
        Values are not clamped.

    Raises:
        RuntimeError: If setup_render_target() was never called.
    """
    _require_render_target()
    width, height = get_image_dimensions()
    # Buffer is [x, y]; swap to row-major [y, x]
    region = _pixels.to_numpy()[:width, :height]
    return np.ascontiguousarray(region.swapaxes(0, 1), dtype=np.float32)
