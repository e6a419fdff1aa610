"""Renderer facade tying a scene and a camera to a Canvas.

Two rendering paths produce the same image:

- ``render`` uploads the scene and camera to Taichi fields and shades every
  pixel in one kernel launch (float32);
- ``render_reference`` shades every pixel on the host with the float64
  geometry engine. Rows are dispatched to a thread pool and canvas writes
  are serialized with a lock.

The reference path is slow but has no device dependency beyond the scene
manager, which makes it the ground truth for checking the kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raytracer.camera.wall import WallCamera
    >>> from src.raytracer.core.renderer import Renderer
    >>> from src.raytracer.scene.manager import SceneManager
    >>>
    >>> scene = SceneManager()
    >>> ...  # add spheres and a light
    >>> canvas = Renderer(scene, WallCamera(canvas_pixels=100)).render()
    >>> canvas.save_ppm("sphere.ppm")
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from src.raytracer.camera.wall import WallCamera, setup_camera
from src.raytracer.core.integrator import (
    get_image_numpy,
    render_image,
    setup_render_target,
)
from src.raytracer.preview.canvas import Canvas
from src.raytracer.scene.manager import SceneManager

logger = logging.getLogger(__name__)


class Renderer:
    """Renders a scene through a wall camera.

    Attributes:
        scene: The scene to render.
        camera: The camera generating one ray per pixel.
    """

    def __init__(self, scene: SceneManager, camera: WallCamera) -> None:
        self.scene = scene
        self.camera = camera

    @property
    def width(self) -> int:
        return self.camera.canvas_pixels

    @property
    def height(self) -> int:
        return self.camera.canvas_pixels

    def render(self) -> Canvas:
        """Render the image on the device.

        Returns:
            A new canvas holding the unclamped pixel colors.

        Raises:
            ValueError: If the canvas exceeds the maximum render target size.
        """
        self.scene.upload()
        setup_camera(self.camera)
        setup_render_target(self.width, self.height)

        start = time.perf_counter()
        render_image()
        image = get_image_numpy()
        logger.info(
            "Rendered %dx%d image in %.3fs", self.width, self.height, time.perf_counter() - start
        )
        return Canvas.from_numpy(image)

    def render_reference(self, workers: int = 1) -> Canvas:
        """Render the image on the host, one row per task.

        Args:
            workers: Number of worker threads.

        Returns:
            A new canvas holding the unclamped pixel colors.

        Raises:
            ValueError: If workers is less than 1.
        """
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")

        canvas = Canvas(self.width, self.height)
        lock = threading.Lock()

        def render_row(y: int) -> None:
            row = [
                self.scene.color_at(self.camera.ray_for_pixel(x, y)) for x in range(self.width)
            ]
            with lock:
                for x, pixel in enumerate(row):
                    canvas.write_pixel(x, y, pixel)

        start = time.perf_counter()
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # Consume the results so worker exceptions propagate
            list(executor.map(render_row, range(self.height)))
        logger.info(
            "Rendered %dx%d reference image with %d workers in %.3fs",
            self.width,
            self.height,
            workers,
            time.perf_counter() - start,
        )
        return canvas
