"""Scene-level sphere storage and ray intersection on the device.

Spheres are stored in Taichi fields using a Structure-of-Arrays layout: the
inverse transform and each Phong material coefficient live in their own
field, indexed by the sphere's slot. Only the inverse transform is stored
because both intersection and normal computation need world-to-object
space, never the forward transform.

``intersect_scene`` applies the hit policy over every stored sphere and
reports the nearest intersection with t >= 0 together with the slot that
produced it. Shading then reads the material and inverse transform for that
slot.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raytracer.core.matrix import IDENTITY
    >>> from src.raytracer.materials.phong import Material
    >>> from src.raytracer.scene.intersection import add_sphere, clear_scene
    >>> clear_scene()
    >>> add_sphere(IDENTITY.inverse(), Material(), handle=0)
    0
    >>> # intersect_scene is a ti.func, callable from kernels only
"""

import taichi as ti

from src.raytracer.core.device import ray_at, transform_point, transform_vector, vec3
from src.raytracer.core.matrix import Matrix
from src.raytracer.geometry.sphere import (
    intersect_unit_sphere,
    nearest_visible_t,
    sphere_normal_at,
)
from src.raytracer.materials.phong import Material, PhongMaterial, phong_lighting


@ti.dataclass
class SceneHitRecord:
    """Record of the nearest visible ray-scene intersection.

    Attributes:
        hit: Whether the ray struck any sphere in front of its origin
            (1 if hit, 0 if miss).
        t: The ray parameter of the intersection. Only valid if hit == 1.
        sphere_index: Slot of the sphere that was struck. -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    sphere_index: ti.i32


# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_inverses = ti.Matrix.field(4, 4, dtype=ti.f32, shape=MAX_SPHERES)
sphere_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_ambient = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_diffuse = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_specular = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_shininess = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_handles = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
sphere_count = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all spheres from the scene.

    Resets the sphere count to zero. Stale slot data is overwritten when new
    spheres are added.
    """
    sphere_count[None] = 0


def add_sphere(inverse: Matrix, material: Material, handle: int) -> int:
    """Write a sphere into the next free slot.

    Args:
        inverse: The sphere's world-to-object transform (4x4).
        material: The sphere's Phong material.
        handle: The host-side handle of the sphere, kept for lookups.

    Returns:
        The slot index of the added sphere.

    Raises:
        RuntimeError: If all MAX_SPHERES slots are taken.
        ValueError: If inverse is not a 4x4 matrix.
    """
    if inverse.size != 4:
        raise ValueError(f"Sphere transforms must be 4x4, got {inverse.size}x{inverse.size}")

    idx = sphere_count[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres is {MAX_SPHERES}; no free slot left")

    sphere_inverses[idx] = inverse.to_list()
    sphere_colors[idx] = [material.color.red, material.color.green, material.color.blue]
    sphere_ambient[idx] = material.ambient
    sphere_diffuse[idx] = material.diffuse
    sphere_specular[idx] = material.specular
    sphere_shininess[idx] = material.shininess
    sphere_handles[idx] = handle
    sphere_count[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Number of occupied slots."""
    return int(sphere_count[None])


def get_sphere_handle(index: int) -> int:
    """Get the host handle stored in a slot.

    Raises:
        IndexError: If the slot is not occupied.
    """
    if not 0 <= index < sphere_count[None]:
        raise IndexError(f"Sphere slot {index} is not in use")
    return int(sphere_handles[index])


@ti.func
def _miss() -> SceneHitRecord:
    return SceneHitRecord(hit=0, t=0.0, sphere_index=-1)


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Find the nearest visible intersection over all spheres.

    Each sphere is tested in its own object space: the ray is transformed
    by the sphere's inverse transform and intersected with the unit sphere.
    The ray parameter t is invariant under that transform, so the roots can
    be compared across spheres directly.

    Args:
        ray_origin: The world-space ray origin.
        ray_direction: The world-space ray direction.

    Returns:
        A SceneHitRecord for the smallest t >= 0, or a miss record.
    """
    closest_t = 0.0
    closest_index = -1

    occupied = sphere_count[None]
    for i in range(occupied):
        inverse = sphere_inverses[i]
        local_origin = transform_point(inverse, ray_origin)
        local_direction = transform_vector(inverse, ray_direction)
        count, t1, t2 = intersect_unit_sphere(local_origin, local_direction)
        t = nearest_visible_t(count, t1, t2)
        if t >= 0.0:
            if closest_index < 0 or t < closest_t:
                closest_t = t
                closest_index = i

    result = _miss()
    if closest_index >= 0:
        result = SceneHitRecord(hit=1, t=closest_t, sphere_index=closest_index)
    return result


@ti.func
def get_sphere_material(index: ti.i32) -> PhongMaterial:
    """Gather the material coefficients for a slot into a PhongMaterial."""
    return PhongMaterial(
        color=sphere_colors[index],
        ambient=sphere_ambient[index],
        diffuse=sphere_diffuse[index],
        specular=sphere_specular[index],
        shininess=sphere_shininess[index],
    )


@ti.func
def scene_normal_at(index: ti.i32, world_point: vec3) -> vec3:
    """World-space unit normal of the sphere in a slot at a surface point."""
    return sphere_normal_at(sphere_inverses[index], world_point)


@ti.func
def shade_scene_hit(
    record: SceneHitRecord,
    ray_origin: vec3,
    ray_direction: vec3,
    light_position: vec3,
    light_intensity: vec3,
) -> vec3:
    """Shade the surface point described by a hit record.

    The eye vector is the negated ray direction, so camera rays should be
    normalized before they reach this function.

    Args:
        record: A hit record with hit == 1.
        ray_origin: The world-space ray origin.
        ray_direction: The world-space ray direction.
        light_position: World-space position of the point light.
        light_intensity: Light color (RGB).

    Returns:
        The Phong-shaded color (RGB), unclamped.
    """
    point = ray_at(ray_origin, ray_direction, record.t)
    normal = scene_normal_at(record.sphere_index, point)
    eye = -ray_direction
    material = get_sphere_material(record.sphere_index)
    return phong_lighting(material, light_position, light_intensity, point, eye, normal)
