"""Wall camera: rays cast from a single eye point through a square wall.

The camera sits at ``ray_origin`` and looks down +z toward a square wall
centered on the z axis at ``wall_z``. The wall is ``wall_size`` world units
across and is divided into ``canvas_pixels`` x ``canvas_pixels`` cells, one
per canvas pixel. Pixel (0, 0) is the top-left corner of the canvas, so
world y decreases as pixel y increases:

    half = wall_size / 2
    pixel_size = wall_size / canvas_pixels
    world_x = -half + pixel_size * x
    world_y =  half - pixel_size * y

The ray for a pixel starts at the eye and points toward that wall position,
with its direction normalized.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raytracer.camera.wall import WallCamera, setup_camera, get_ray
    >>>
    >>> camera = WallCamera(canvas_pixels=200)
    >>> setup_camera(camera)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(100, 100)  # Ray through the middle of the wall
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.raytracer.core.device import Ray as DeviceRay
from src.raytracer.core.device import make_ray, vec3
from src.raytracer.core.ray import Ray
from src.raytracer.core.tuples import point

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class WallCamera:
    """Configuration for the wall camera.

    Attributes:
        ray_origin: Eye position in world space (x, y, z).
        wall_z: z coordinate of the wall plane.
        wall_size: Width and height of the wall in world units.
        canvas_pixels: Width and height of the canvas in pixels.

    Raises:
        ValueError: If wall_size or canvas_pixels is not positive.
    """

    ray_origin: tuple[float, float, float] = (0.0, 0.0, -5.0)
    wall_z: float = 10.0
    wall_size: float = 7.0
    canvas_pixels: int = 100

    def __post_init__(self) -> None:
        if self.wall_size <= 0.0:
            raise ValueError(f"wall_size must be positive, got {self.wall_size}")
        if self.canvas_pixels <= 0:
            raise ValueError(f"canvas_pixels must be positive, got {self.canvas_pixels}")

    @property
    def pixel_size(self) -> float:
        """World-space size of one pixel on the wall."""
        return self.wall_size / self.canvas_pixels

    def compute_world_coordinates(self, x: int, y: int) -> tuple[float, float, float]:
        """Map a canvas pixel to a position on the wall.

        Args:
            x: Pixel column (0 = left).
            y: Pixel row (0 = top).

        Returns:
            The (world_x, world_y, world_z) position of the pixel on the wall.
        """
        half = self.wall_size / 2.0
        world_x = -half + self.pixel_size * x
        world_y = half - self.pixel_size * y
        return world_x, world_y, self.wall_z

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        """Build the normalized ray from the eye through a pixel."""
        origin = point(*self.ray_origin)
        target = point(*self.compute_world_coordinates(x, y))
        return Ray(origin, (target - origin).normalize())


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_wall_z = ti.field(dtype=ti.f32, shape=())
_wall_size = ti.field(dtype=ti.f32, shape=())
_canvas_pixels = ti.field(dtype=ti.i32, shape=())


def setup_camera(camera: WallCamera) -> None:
    """Copy camera parameters into Taichi fields.

    Must be called before rendering, from Python scope.

    Args:
        camera: The camera configuration.
    """
    _camera_origin[None] = list(camera.ray_origin)
    _wall_z[None] = camera.wall_z
    _wall_size[None] = camera.wall_size
    _canvas_pixels[None] = camera.canvas_pixels


def get_canvas_pixels() -> int:
    """Get the canvas size of the camera currently set up."""
    return int(_canvas_pixels[None])


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def get_ray(x: ti.i32, y: ti.i32) -> DeviceRay:
    """Generate the ray from the eye through pixel (x, y).

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).

    Returns:
        A Ray with origin at the eye and a normalized direction toward the
        pixel's position on the wall.
    """
    half = _wall_size[None] / 2.0
    pixel_size = _wall_size[None] / ti.cast(_canvas_pixels[None], ti.f32)
    world_x = -half + pixel_size * ti.cast(x, ti.f32)
    world_y = half - pixel_size * ti.cast(y, ti.f32)
    target = vec3(world_x, world_y, _wall_z[None])

    origin = _camera_origin[None]
    direction = tm.normalize(target - origin)
    return make_ray(origin, direction)
