"""Materials module for the Phong reflection model.

Components:
    phong: Material and PointLight types, host ``lighting`` and the
        Taichi ``phong_lighting`` used by the render kernel
"""

from .phong import Material, PhongMaterial, PointLight, lighting, phong_lighting

__all__ = [
    "Material",
    "PointLight",
    "lighting",
    "PhongMaterial",
    "phong_lighting",
]
