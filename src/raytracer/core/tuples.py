"""Homogeneous tuples and colors for the host-side geometry engine.

A Tuple carries four components. The ``w`` component tells points (w=1)
apart from vectors (w=0), which lets the same 4x4 matrices translate points
while leaving directions untouched.

All comparisons are approximate because every downstream computation
(intersections, normals, lighting) accumulates floating point error.

Example:
    >>> from src.raytracer.core.tuples import point, vector
    >>> p = point(1.0, 2.0, 3.0)
    >>> v = vector(0.0, 0.0, 1.0)
    >>> (p + v).is_point()
    True
    >>> (p - p).is_vector()
    True
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Tolerance used for every approximate float comparison in the engine
EPSILON = 1e-5


def approx_equal(a: float, b: float) -> bool:
    """Return True if a and b differ by less than EPSILON."""
    return abs(a - b) < EPSILON


@dataclass(frozen=True, eq=False)
class Tuple:
    """A four-component homogeneous coordinate.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
        w: 1.0 for points, 0.0 for vectors.
    """

    x: float
    y: float
    z: float
    w: float

    def is_point(self) -> bool:
        return self.w == 1.0

    def is_vector(self) -> bool:
        return self.w == 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return (
            approx_equal(self.x, other.x)
            and approx_equal(self.y, other.y)
            and approx_equal(self.z, other.z)
            and approx_equal(self.w, other.w)
        )

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: Tuple) -> Tuple:
        return Tuple(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Tuple) -> Tuple:
        return Tuple(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __neg__(self) -> Tuple:
        return Tuple(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, scalar: float) -> Tuple:
        return Tuple(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Tuple:
        return Tuple(self.x / scalar, self.y / scalar, self.z / scalar, self.w / scalar)

    def dot(self, other: Tuple) -> float:
        """Compute the dot product over all four components.

        The smaller the result, the larger the angle between the two vectors.
        For unit vectors it is the cosine of that angle.
        """
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def cross(self, other: Tuple) -> Tuple:
        """Return the vector perpendicular to both self and other."""
        return vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2 + self.w**2)

    def normalize(self) -> Tuple:
        """Scale the tuple to unit length.

        Raises:
            ZeroDivisionError: If the tuple has zero magnitude.
        """
        return self / self.magnitude()

    def is_unit_vector(self) -> bool:
        return self.is_vector() and approx_equal(self.magnitude(), 1.0)

    def to_list(self) -> list[float]:
        return [self.x, self.y, self.z, self.w]

    def xyz(self) -> tuple[float, float, float]:
        """Return the first three components, dropping w."""
        return (self.x, self.y, self.z)


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w = 1.0)."""
    return Tuple(float(x), float(y), float(z), 1.0)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a vector (w = 0.0)."""
    return Tuple(float(x), float(y), float(z), 0.0)


# Object-space center of every sphere
ORIGIN = point(0.0, 0.0, 0.0)


@dataclass(frozen=True, eq=False)
class Color:
    """An RGB color with tuple-style arithmetic.

    Components are unbounded floats; values outside [0, 1] are only clamped
    when an image is serialized.

    Attributes:
        red: The red channel.
        green: The green channel.
        blue: The blue channel.
    """

    red: float
    green: float
    blue: float

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (
            approx_equal(self.red, other.red)
            and approx_equal(self.green, other.green)
            and approx_equal(self.blue, other.blue)
        )

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: Color) -> Color:
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: Color) -> Color:
        return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __neg__(self) -> Color:
        return Color(-self.red, -self.green, -self.blue)

    def __mul__(self, other: Color | float) -> Color:
        # Hadamard product when blending two colors, scaling otherwise
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return Color(self.red * other, self.green * other, self.blue * other)

    def __rmul__(self, scalar: float) -> Color:
        return Color(self.red * scalar, self.green * scalar, self.blue * scalar)

    def __truediv__(self, scalar: float) -> Color:
        return Color(self.red / scalar, self.green / scalar, self.blue / scalar)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)


def color(red: float, green: float, blue: float) -> Color:
    """Create a color from three channel values."""
    return Color(float(red), float(green), float(blue))


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
