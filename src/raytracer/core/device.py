"""Taichi counterparts of the host tuple algebra.

Inside kernels points and vectors are plain ``vec3`` values. They are
promoted to homogeneous ``vec4`` only when a 4x4 transform has to be applied,
so that translation affects points (w=1) and leaves vectors (w=0) alone,
exactly as on the host side.

All functions here are ``@ti.func`` and can only be called from Taichi
kernels or other Taichi functions.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raytracer.core.device import ray_at, vec3
    >>> @ti.kernel
    ... def midpoint() -> vec3:
    ...     return ray_at(vec3(0.0, 0.0, -5.0), vec3(0.0, 0.0, 1.0), 4.0)
"""

import taichi as ti
import taichi.math as tm

# Type aliases for Taichi's math module
vec3 = tm.vec3
vec4 = tm.vec4
mat4 = tm.mat4


@ti.func
def to_point4(p: vec3) -> vec4:
    """Promote a point to homogeneous coordinates (w = 1)."""
    return vec4(p.x, p.y, p.z, 1.0)


@ti.func
def to_vector4(v: vec3) -> vec4:
    """Promote a vector to homogeneous coordinates (w = 0)."""
    return vec4(v.x, v.y, v.z, 0.0)


@ti.func
def ray_at(origin: vec3, direction: vec3, t: ti.f32) -> vec3:
    """Compute the point origin + t * direction."""
    return origin + t * direction


@ti.func
def transform_point(m: mat4, p: vec3) -> vec4:
    return m @ to_point4(p)


@ti.func
def transform_vector(m: mat4, v: vec3) -> vec4:
    return m @ to_vector4(v)


@ti.func
def reflect(incoming: vec3, normal: vec3) -> vec3:
    """Reflect an incoming vector about a (normalized) normal."""
    return incoming - normal * 2.0 * tm.dot(incoming, normal)


@ti.dataclass
class Ray:
    """A ray inside Taichi kernels.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Camera rays are
            normalized; rays moved into object space generally are not.
    """

    origin: vec3
    direction: vec3


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    return Ray(origin=origin, direction=direction)
