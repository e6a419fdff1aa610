"""Scene module for sphere storage and scene management.

Components:
    intersection: Sphere storage in Taichi fields and scene-level queries
    manager: Scene manager owning spheres and the light

Scene data is organized for efficient device access:
    - Structure-of-Arrays layout for transforms and material coefficients
    - Inverse transforms precomputed on the host in float64
"""

from .intersection import (
    MAX_SPHERES,
    SceneHitRecord,
    add_sphere,
    clear_scene,
    get_sphere_count,
    get_sphere_handle,
    intersect_scene,
    scene_normal_at,
    shade_scene_hit,
)

# Note: manager is NOT imported here because it depends on the integrator,
# which itself imports this package. Use:
#   from src.raytracer.scene.manager import SceneManager

__all__ = [
    "SceneHitRecord",
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "get_sphere_handle",
    "intersect_scene",
    "scene_normal_at",
    "shade_scene_hit",
    "MAX_SPHERES",
]
