"""Runtime configuration: render settings, Taichi backend and logging.

Settings can be built directly, or read from the environment:

    RAYTRACER_ARCH            Taichi backend, "cpu" or "gpu" (default: gpu)
    RAYTRACER_CANVAS_PIXELS   Canvas width and height in pixels (default: 100)
    RAYTRACER_LOG_LEVEL       Logging level name (default: INFO)

Example:
    >>> from src.raytracer.config import RenderSettings, configure_logging, init_taichi
    >>> settings = RenderSettings.from_env()
    >>> configure_logging(settings.log_level)
    >>> backend = init_taichi(settings.arch)
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass

import taichi as ti

logger = logging.getLogger(__name__)

# Root logger name shared by every module in the package
PACKAGE_LOGGER = "src.raytracer"

SUPPORTED_ARCHS = ("cpu", "gpu")

ENV_ARCH = "RAYTRACER_ARCH"
ENV_CANVAS_PIXELS = "RAYTRACER_CANVAS_PIXELS"
ENV_LOG_LEVEL = "RAYTRACER_LOG_LEVEL"


@dataclass
class RenderSettings:
    """Settings for one render.

    Attributes:
        arch: Taichi backend, "cpu" or "gpu".
        canvas_pixels: Width and height of the square canvas in pixels.
        output: Output file path. The extension picks the format
            (.ppm or .png).
        binary_ppm: Write P6 instead of P3 for .ppm output.
        log_level: Logging level name, e.g. "INFO" or "DEBUG".

    Raises:
        ValueError: If any setting is out of range.
    """

    arch: str = "gpu"
    canvas_pixels: int = 100
    output: str = "sphere.ppm"
    binary_ppm: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.arch = self.arch.lower()
        if self.arch not in SUPPORTED_ARCHS:
            raise ValueError(f"Unknown arch '{self.arch}', expected one of {SUPPORTED_ARCHS}")
        if self.canvas_pixels <= 0:
            raise ValueError(f"canvas_pixels must be positive, got {self.canvas_pixels}")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level '{self.log_level}'")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RenderSettings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        pixels = env.get(ENV_CANVAS_PIXELS)
        try:
            canvas_pixels = int(pixels) if pixels is not None else defaults.canvas_pixels
        except ValueError as e:
            raise ValueError(f"{ENV_CANVAS_PIXELS} must be an integer, got '{pixels}'") from e
        return cls(
            arch=env.get(ENV_ARCH, defaults.arch),
            canvas_pixels=canvas_pixels,
            log_level=env.get(ENV_LOG_LEVEL, defaults.log_level),
        )


def init_taichi(arch: str = "gpu") -> str:
    """Initialize Taichi, falling back to the CPU backend.

    Args:
        arch: "gpu" to try a GPU backend first, or "cpu".

    Returns:
        The backend actually initialized, "gpu" or "cpu".
    """
    if arch == "gpu":
        try:
            ti.init(arch=ti.gpu)
            logger.info("Using GPU backend")
            return "gpu"
        except Exception as e:
            logger.warning("GPU backend unavailable (%s), falling back to CPU", e)

    ti.init(arch=ti.cpu)
    logger.info("Using CPU backend")
    return "cpu"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure the package logger with a single stdout handler.

    Calling it again replaces the handler rather than duplicating output.

    Args:
        level: Logging level, as a name ("DEBUG") or a number.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    if package_logger.hasHandlers():
        package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )
    package_logger.addHandler(handler)
