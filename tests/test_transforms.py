"""Unit tests for transform constructors.

Tests cover:
- Translation of points and vectors
- Scaling and reflection
- Rotation about each axis
- Shearing in each of its six proportions
- Chaining transforms in application order
"""

import math

import pytest

SQRT2_2 = math.sqrt(2.0) / 2.0


class TestTranslation:
    """Tests for translation()."""

    def test_translate_point(self):
        """Test that translation moves a point."""
        from src.raytracer.core.transforms import translation
        from src.raytracer.core.tuples import point

        assert translation(5, -3, 2) @ point(-3, 4, 5) == point(2, 1, 7)

    def test_inverse_translation(self):
        """Test that the inverse translation moves the other way."""
        from src.raytracer.core.transforms import translation
        from src.raytracer.core.tuples import point

        inv = translation(5, -3, 2).inverse()
        assert inv @ point(-3, 4, 5) == point(-8, 7, 3)

    def test_translation_ignores_vectors(self):
        """Test that vectors are unaffected by translation."""
        from src.raytracer.core.transforms import translation
        from src.raytracer.core.tuples import vector

        v = vector(-3, 4, 5)
        assert translation(5, -3, 2) @ v == v


class TestScaling:
    """Tests for scaling()."""

    def test_scale_point(self):
        """Test scaling a point."""
        from src.raytracer.core.transforms import scaling
        from src.raytracer.core.tuples import point

        assert scaling(2, 3, 4) @ point(-4, 6, 8) == point(-8, 18, 32)

    def test_scale_vector(self):
        """Test scaling a vector."""
        from src.raytracer.core.transforms import scaling
        from src.raytracer.core.tuples import vector

        assert scaling(2, 3, 4) @ vector(-4, 6, 8) == vector(-8, 18, 32)

    def test_inverse_scaling(self):
        """Test that the inverse scaling shrinks."""
        from src.raytracer.core.transforms import scaling
        from src.raytracer.core.tuples import vector

        assert scaling(2, 3, 4).inverse() @ vector(-4, 6, 8) == vector(-2, 2, 2)

    def test_reflection_is_negative_scaling(self):
        """Test reflecting across the x axis."""
        from src.raytracer.core.transforms import scaling
        from src.raytracer.core.tuples import point

        assert scaling(-1, 1, 1) @ point(2, 3, 4) == point(-2, 3, 4)


class TestRotation:
    """Tests for rotation_x/y/z()."""

    def test_rotation_x(self):
        """Test rotating a point around the x axis."""
        from src.raytracer.core.transforms import rotation_x
        from src.raytracer.core.tuples import point

        p = point(0, 1, 0)
        assert rotation_x(math.pi / 4) @ p == point(0, SQRT2_2, SQRT2_2)
        assert rotation_x(math.pi / 2) @ p == point(0, 0, 1)

    def test_inverse_rotation_x(self):
        """Test that the inverse rotation turns the other way."""
        from src.raytracer.core.transforms import rotation_x
        from src.raytracer.core.tuples import point

        inv = rotation_x(math.pi / 4).inverse()
        assert inv @ point(0, 1, 0) == point(0, SQRT2_2, -SQRT2_2)

    def test_rotation_y(self):
        """Test rotating a point around the y axis."""
        from src.raytracer.core.transforms import rotation_y
        from src.raytracer.core.tuples import point

        p = point(0, 0, 1)
        assert rotation_y(math.pi / 4) @ p == point(SQRT2_2, 0, SQRT2_2)
        assert rotation_y(math.pi / 2) @ p == point(1, 0, 0)

    def test_rotation_z(self):
        """Test rotating a point around the z axis."""
        from src.raytracer.core.transforms import rotation_z
        from src.raytracer.core.tuples import point

        p = point(0, 1, 0)
        assert rotation_z(math.pi / 4) @ p == point(-SQRT2_2, SQRT2_2, 0)
        assert rotation_z(math.pi / 2) @ p == point(-1, 0, 0)


class TestShearing:
    """Tests for shearing()."""

    @pytest.mark.parametrize(
        "proportions,expected",
        [
            ((1, 0, 0, 0, 0, 0), (5, 3, 4)),
            ((0, 1, 0, 0, 0, 0), (6, 3, 4)),
            ((0, 0, 1, 0, 0, 0), (2, 5, 4)),
            ((0, 0, 0, 1, 0, 0), (2, 7, 4)),
            ((0, 0, 0, 0, 1, 0), (2, 3, 6)),
            ((0, 0, 0, 0, 0, 1), (2, 3, 7)),
        ],
    )
    def test_shearing(self, proportions, expected):
        """Test each shearing proportion on the point (2, 3, 4)."""
        from src.raytracer.core.transforms import shearing
        from src.raytracer.core.tuples import point

        assert shearing(*proportions) @ point(2, 3, 4) == point(*expected)


class TestChaining:
    """Tests for composing transforms."""

    def test_individual_transforms_in_sequence(self):
        """Test applying rotation, scaling and translation one at a time."""
        from src.raytracer.core.transforms import rotation_x, scaling, translation
        from src.raytracer.core.tuples import point

        p = point(1, 0, 1)
        p2 = rotation_x(math.pi / 2) @ p
        assert p2 == point(1, -1, 0)
        p3 = scaling(5, 5, 5) @ p2
        assert p3 == point(5, -5, 0)
        p4 = translation(10, 5, 7) @ p3
        assert p4 == point(15, 0, 7)

    def test_chained_transforms_apply_in_reverse_order(self):
        """Test that C @ B @ A applies A first."""
        from src.raytracer.core.transforms import rotation_x, scaling, translation
        from src.raytracer.core.tuples import point

        t = translation(10, 5, 7) @ scaling(5, 5, 5) @ rotation_x(math.pi / 2)
        assert t @ point(1, 0, 1) == point(15, 0, 7)

    def test_chain_takes_application_order(self):
        """Test that chain(a, b, c) equals c @ b @ a."""
        from src.raytracer.core.transforms import chain, rotation_x, scaling, translation

        a = rotation_x(math.pi / 2)
        b = scaling(5, 5, 5)
        c = translation(10, 5, 7)
        assert chain(a, b, c) == c @ b @ a

    def test_empty_chain_is_identity(self):
        """Test that chain() with no arguments returns the identity."""
        from src.raytracer.core.matrix import IDENTITY
        from src.raytracer.core.transforms import chain

        assert chain() == IDENTITY
