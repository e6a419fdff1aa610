"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    tuples: Points, vectors and colors with approximate equality
    matrix: Square matrices with determinants and inversion
    transforms: Translation, scaling, rotation and shearing matrices
    ray: Ray data structure and reflection
    device: Taichi counterparts of the tuple algebra
    integrator: Render target, light fields and the render kernel
    renderer: Renderer facade producing a Canvas

All host-side math is float64 and immutable. The device module mirrors the
operations the render kernel needs in float32.
"""

from .matrix import IDENTITY, Matrix, NotInvertibleError, identity
from .ray import Ray, reflect
from .transforms import (
    chain,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
)
from .tuples import (
    BLACK,
    EPSILON,
    ORIGIN,
    WHITE,
    Color,
    Tuple,
    approx_equal,
    color,
    point,
    vector,
)

# Note: integrator and renderer are NOT imported here because they allocate
# Taichi fields. Import them directly after ti.init():
#   from src.raytracer.core.integrator import render_image
#   from src.raytracer.core.renderer import Renderer

__all__ = [
    "Tuple",
    "Color",
    "point",
    "vector",
    "color",
    "approx_equal",
    "EPSILON",
    "ORIGIN",
    "BLACK",
    "WHITE",
    "Matrix",
    "NotInvertibleError",
    "identity",
    "IDENTITY",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "chain",
    "Ray",
    "reflect",
]
