"""Ray data structure and reflection for the host-side engine.

A Ray is an origin point and a direction vector. Rays are immutable;
transforming one returns a new Ray, which is how the intersection code moves
a world-space ray into a sphere's object space.

Example:
    >>> from src.raytracer.core.ray import Ray
    >>> from src.raytracer.core.tuples import point, vector
    >>> ray = Ray(origin=point(2, 3, 4), direction=vector(1, 0, 0))
    >>> ray.position(2.5) == point(4.5, 3, 4)
    True
"""

from __future__ import annotations

from dataclasses import dataclass

from src.raytracer.core.matrix import Matrix
from src.raytracer.core.tuples import Tuple


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (w = 1).
        direction: The direction vector of the ray (w = 0). It is not
            required to be normalized; transformed rays usually are not.
    """

    origin: Tuple
    direction: Tuple

    def position(self, t: float) -> Tuple:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Negative values lie behind the origin.

        Returns:
            The point origin + direction * t.
        """
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Apply a 4x4 transform to both the origin and the direction."""
        return Ray(matrix @ self.origin, matrix @ self.direction)


def reflect(incoming: Tuple, normal: Tuple) -> Tuple:
    """Reflect an incoming vector about a normal.

    Args:
        incoming: The incoming direction (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector.
    """
    return incoming - normal * 2.0 * incoming.dot(normal)
