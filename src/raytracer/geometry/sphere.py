"""Unit sphere primitive with transform-aware intersection and normals.

Every sphere is the unit sphere centered at the origin of its own object
space. Its world-space shape comes entirely from ``transform``. To intersect,
the world-space ray is moved into object space with the inverse transform and
solved against the unit sphere with the quadratic formula:

    sphere_to_ray = origin - (0, 0, 0)
    a = direction . direction
    b = 2 * direction . sphere_to_ray
    c = sphere_to_ray . sphere_to_ray - 1
    discriminant = b^2 - 4ac

A negative discriminant is a miss. A zero discriminant is a tangent ray; the
single root is reported twice so callers can always rely on two entries per
struck sphere. Otherwise the roots are returned in increasing order.

Normals are computed in object space and carried back to world space with the
transpose of the inverse transform, which keeps them perpendicular to the
surface under non-uniform scaling.

The module has a host API (``Sphere``, ``intersect``, ``normal_at``) and the
Taichi functions the render kernel uses (``intersect_unit_sphere``,
``nearest_visible_t``, ``sphere_normal_at``).

Example:
    >>> from src.raytracer.core.ray import Ray
    >>> from src.raytracer.core.tuples import point, vector
    >>> from src.raytracer.geometry.sphere import Sphere, intersect
    >>> xs = intersect(Ray(point(0, 0, -5), vector(0, 0, 1)), Sphere())
    >>> [i.t for i in xs]
    [4.0, 6.0]
"""

import copy
import itertools
import math
from dataclasses import dataclass, field

import taichi as ti
import taichi.math as tm

from src.raytracer.core.device import mat4, to_point4, vec3, vec4
from src.raytracer.core.matrix import IDENTITY, Matrix
from src.raytracer.core.ray import Ray
from src.raytracer.core.tuples import ORIGIN, Tuple
from src.raytracer.geometry.intersections import Intersection, Intersections
from src.raytracer.materials.phong import Material

# Process-wide source of sphere handles
_handles = itertools.count()


@dataclass(eq=False)
class Sphere:
    """A unit sphere placed in the world by a transform.

    Identity, not geometry, defines equality: two spheres are equal only if
    they share a handle. Copies made for intersection records keep the
    handle of the original.

    Attributes:
        handle: Integer identifier, unique within the process.
        transform: Object-to-world transform (defaults to the identity).
        material: Surface material used for shading.
    """

    handle: int = field(default_factory=lambda: next(_handles))
    transform: Matrix = field(default_factory=lambda: IDENTITY)
    material: Material = field(default_factory=Material)
    _inverse: Matrix | None = field(default=None, init=False, repr=False)
    # Transform that _inverse was computed from
    _inverted: Matrix | None = field(default=None, init=False, repr=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sphere):
            return NotImplemented
        return self.handle == other.handle

    def __hash__(self) -> int:
        return hash(self.handle)

    def set_transform(self, transform: Matrix) -> None:
        self.transform = transform

    def set_material(self, material: Material) -> None:
        self.material = material

    def inverse_transform(self) -> Matrix:
        """Return the world-to-object transform.

        The inverse is cached and recomputed whenever transform has been
        replaced, whether through set_transform or by assignment.

        Raises:
            NotInvertibleError: If the transform has a zero determinant.
        """
        if self._inverted is not self.transform:
            self._inverse = self.transform.inverse()
            self._inverted = self.transform
        return self._inverse

    def intersect(self, ray: Ray) -> Intersections:
        return intersect(ray, self)

    def normal_at(self, world_point: Tuple) -> Tuple:
        return normal_at(self, world_point)


def intersect(ray: Ray, sphere: Sphere) -> Intersections:
    """Intersect a world-space ray with a sphere.

    Args:
        ray: The ray, in world space.
        sphere: The sphere to test.

    Returns:
        Zero intersections on a miss, otherwise two with t1 <= t2 (equal for
        a tangent ray). Negative t values are included.

    Raises:
        NotInvertibleError: If the sphere's transform cannot be inverted.
    """
    local = ray.transform(sphere.inverse_transform())

    sphere_to_ray = local.origin - ORIGIN
    a = local.direction.dot(local.direction)
    b = 2.0 * local.direction.dot(sphere_to_ray)
    c = sphere_to_ray.dot(sphere_to_ray) - 1.0
    discriminant = b * b - 4.0 * a * c

    if discriminant < 0.0:
        return Intersections()

    # Each record gets its own copy of the sphere
    struck = copy.copy(sphere)

    if discriminant == 0.0:
        t = -b / (2.0 * a)
        return Intersections([Intersection(t, struck), Intersection(t, struck)])

    root = math.sqrt(discriminant)
    t1 = (-b - root) / (2.0 * a)
    t2 = (-b + root) / (2.0 * a)
    return Intersections([Intersection(t1, struck), Intersection(t2, struck)])


def normal_at(sphere: Sphere, world_point: Tuple) -> Tuple:
    """Compute the world-space surface normal at a point on the sphere.

    Args:
        sphere: The sphere.
        world_point: A point assumed to lie on the sphere's surface.

    Returns:
        The unit normal vector (w = 0).

    Raises:
        NotInvertibleError: If the sphere's transform cannot be inverted.
    """
    inverse = sphere.inverse_transform()
    object_point = inverse @ world_point
    object_normal = object_point - ORIGIN
    world_normal = inverse.transpose() @ object_normal
    # Translation terms leak into w; drop them before normalizing
    world_normal = Tuple(world_normal.x, world_normal.y, world_normal.z, 0.0)
    return world_normal.normalize()


# =============================================================================
# Device-side intersection
# =============================================================================


@ti.func
def intersect_unit_sphere(origin: vec4, direction: vec4):
    """Intersect an object-space ray with the unit sphere at the origin.

    Args:
        origin: Homogeneous ray origin (w = 1), already in object space.
        direction: Homogeneous ray direction (w = 0), already in object space.

    Returns:
        A tuple (count, t1, t2). count is 0 on a miss and 2 otherwise; for a
        tangent ray t1 == t2. t1 <= t2 always holds when count is 2.
    """
    sphere_to_ray = origin - vec4(0.0, 0.0, 0.0, 1.0)
    a = tm.dot(direction, direction)
    b = 2.0 * tm.dot(direction, sphere_to_ray)
    c = tm.dot(sphere_to_ray, sphere_to_ray) - 1.0
    discriminant = b * b - 4.0 * a * c

    count = 0
    t1 = 0.0
    t2 = 0.0
    if discriminant == 0.0:
        count = 2
        t1 = -b / (2.0 * a)
        t2 = t1
    elif discriminant > 0.0:
        count = 2
        root = ti.sqrt(discriminant)
        t1 = (-b - root) / (2.0 * a)
        t2 = (-b + root) / (2.0 * a)

    return count, t1, t2


@ti.func
def nearest_visible_t(count: ti.i32, t1: ti.f32, t2: ti.f32) -> ti.f32:
    """Apply the hit policy to one sphere's roots.

    Returns:
        The smallest non-negative root, or -1.0 if there is none.
    """
    result = -1.0
    if count > 0:
        if t1 >= 0.0:
            result = t1
        elif t2 >= 0.0:
            result = t2
    return result


@ti.func
def sphere_normal_at(inverse: mat4, world_point: vec3) -> vec3:
    """Compute the world-space unit normal from a sphere's inverse transform.

    Args:
        inverse: The sphere's world-to-object transform.
        world_point: A point on the sphere's surface.

    Returns:
        The unit normal vector.
    """
    object_point = inverse @ to_point4(world_point)
    object_normal = object_point - vec4(0.0, 0.0, 0.0, 1.0)
    world_normal = inverse.transpose() @ object_normal
    return tm.normalize(vec3(world_normal.x, world_normal.y, world_normal.z))
