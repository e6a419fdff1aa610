"""Geometry module for the sphere primitive and intersections.

This module provides the sphere primitive and the intersection machinery:

Components:
    sphere: Unit sphere with transform-aware intersection and normals
    intersections: Intersection records, collections and the hit policy

Host-side functions return every intersection, including those behind the
ray origin; ``hit`` then selects the visible one. The Taichi functions in
``sphere`` implement the same math for the render kernel.
"""

from .intersections import Intersection, Intersections, hit, intersections
from .sphere import (
    Sphere,
    intersect,
    intersect_unit_sphere,
    nearest_visible_t,
    normal_at,
    sphere_normal_at,
)

__all__ = [
    "Sphere",
    "intersect",
    "normal_at",
    "Intersection",
    "Intersections",
    "intersections",
    "hit",
    "intersect_unit_sphere",
    "nearest_visible_t",
    "sphere_normal_at",
]
