"""Affine transform constructors.

Every constructor starts from the 4x4 identity and overwrites the cells that
define the transform. Compose transforms with ``@``; the rightmost matrix is
applied to a tuple first. ``chain`` takes transforms in application order
instead, which reads more naturally for long sequences.

Example:
    >>> import math
    >>> from src.raytracer.core.transforms import chain, rotation_x, scaling, translation
    >>> from src.raytracer.core.tuples import point
    >>> t = chain(rotation_x(math.pi / 2), scaling(5, 5, 5), translation(10, 5, 7))
    >>> t @ point(1, 0, 1) == point(15, 0, 7)
    True
"""

import math

from src.raytracer.core.matrix import IDENTITY, Matrix


def translation(x: float, y: float, z: float) -> Matrix:
    """Move points by (x, y, z). Vectors are unaffected because their w is 0."""
    m = IDENTITY.to_numpy()
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return Matrix(m)


def scaling(x: float, y: float, z: float) -> Matrix:
    """Scale each axis about the origin. Negative factors reflect."""
    m = IDENTITY.to_numpy()
    m[0, 0] = x
    m[1, 1] = y
    m[2, 2] = z
    return Matrix(m)


def rotation_x(radians: float) -> Matrix:
    m = IDENTITY.to_numpy()
    m[1, 1] = math.cos(radians)
    m[1, 2] = -math.sin(radians)
    m[2, 1] = math.sin(radians)
    m[2, 2] = math.cos(radians)
    return Matrix(m)


def rotation_y(radians: float) -> Matrix:
    m = IDENTITY.to_numpy()
    m[0, 0] = math.cos(radians)
    m[0, 2] = math.sin(radians)
    m[2, 0] = -math.sin(radians)
    m[2, 2] = math.cos(radians)
    return Matrix(m)


def rotation_z(radians: float) -> Matrix:
    m = IDENTITY.to_numpy()
    m[0, 0] = math.cos(radians)
    m[0, 1] = -math.sin(radians)
    m[1, 0] = math.sin(radians)
    m[1, 1] = math.cos(radians)
    return Matrix(m)


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Create a shearing (skew) transform.

    Each component changes in proportion to the other two: ``xy`` moves x in
    proportion to y, ``xz`` moves x in proportion to z, and so on.

    Args:
        xy: x in proportion to y.
        xz: x in proportion to z.
        yx: y in proportion to x.
        yz: y in proportion to z.
        zx: z in proportion to x.
        zy: z in proportion to y.

    Returns:
        The shearing matrix.
    """
    m = IDENTITY.to_numpy()
    m[0, 1] = xy
    m[0, 2] = xz
    m[1, 0] = yx
    m[1, 2] = yz
    m[2, 0] = zx
    m[2, 1] = zy
    return Matrix(m)


def chain(*transforms: Matrix) -> Matrix:
    """Compose transforms given in the order they should be applied.

    ``chain(a, b, c)`` equals ``c @ b @ a``. With no arguments the identity
    is returned.
    """
    result = IDENTITY
    for transform in transforms:
        result = transform @ result
    return result
