"""Unit tests for Vector, Point, Normal and the orthonormal basis helper."""

import math

import pytest


class TestVector:
    """Tests for Vector arithmetic."""

    def test_add_and_subtract(self):
        """Test component-wise addition and subtraction."""
        from raytracer.core.geometry import Vector

        a = Vector(1.0, 2.0, 3.0)
        b = Vector(4.0, 6.0, 8.0)
        assert (a + b).is_close(Vector(5.0, 8.0, 11.0))
        assert (b - a).is_close(Vector(3.0, 4.0, 5.0))

    def test_scalar_multiplication_both_sides(self):
        """Test that scalars multiply from the left and from the right."""
        from raytracer.core.geometry import Vector

        v = Vector(1.0, 2.0, 3.0)
        assert (v * 2.0).is_close(Vector(2.0, 4.0, 6.0))
        assert (2.0 * v).is_close(Vector(2.0, 4.0, 6.0))
        assert (-v).is_close(Vector(-1.0, -2.0, -3.0))

    def test_dot_and_cross(self):
        """Test dot and cross products."""
        from raytracer.core.geometry import Vector

        a = Vector(1.0, 2.0, 3.0)
        b = Vector(4.0, 6.0, 8.0)
        assert abs(a.dot(b) - 40.0) < 1e-12
        assert a.cross(b).is_close(Vector(-2.0, 4.0, -2.0))
        assert b.cross(a).is_close(Vector(2.0, -4.0, 2.0))

    def test_norm_and_normalize(self):
        """Test norm, squared norm and normalization."""
        from raytracer.core.geometry import Vector

        v = Vector(3.0, 0.0, 4.0)
        assert abs(v.squared_norm() - 25.0) < 1e-12
        assert abs(v.norm() - 5.0) < 1e-12
        assert v.normalize().is_close(Vector(0.6, 0.0, 0.8))


class TestPoint:
    """Tests for affine Point arithmetic."""

    def test_point_minus_point_is_vector(self):
        """Test that the difference of two points is a Vector."""
        from raytracer.core.geometry import Point, Vector

        result = Point(4.0, 6.0, 8.0) - Point(1.0, 2.0, 3.0)
        assert isinstance(result, Vector)
        assert result.is_close(Vector(3.0, 4.0, 5.0))

    def test_point_plus_vector_is_point(self):
        """Test that moving a point by a vector gives a point."""
        from raytracer.core.geometry import Point, Vector

        result = Point(1.0, 2.0, 3.0) + Vector(4.0, 6.0, 8.0)
        assert isinstance(result, Point)
        assert result.is_close(Point(5.0, 8.0, 11.0))

        moved_back = result - Vector(4.0, 6.0, 8.0)
        assert isinstance(moved_back, Point)
        assert moved_back.is_close(Point(1.0, 2.0, 3.0))

    def test_adding_two_points_is_rejected(self):
        """Test that Point + Point raises TypeError."""
        from raytracer.core.geometry import Point

        with pytest.raises(TypeError):
            Point(1.0, 2.0, 3.0) + Point(1.0, 1.0, 1.0)


class TestOrthonormalBasis:
    """Tests for build_onb_from_normal."""

    @pytest.mark.parametrize(
        "normal",
        [
            (0.0, 0.0, 1.0),
            (0.0, 0.0, -1.0),
            (1.0, 0.0, 0.0),
            (0.0, -1.0, 0.0),
            (1.0, 2.0, 3.0),
            (-0.3, 0.5, -0.8),
        ],
    )
    def test_basis_is_orthonormal(self, normal):
        """Test that the three basis vectors are unit length and orthogonal."""
        from raytracer.core.geometry import Normal, build_onb_from_normal

        n = Normal(*normal).normalize()
        e1, e2, e3 = build_onb_from_normal(n)

        for e in (e1, e2, e3):
            assert abs(e.norm() - 1.0) < 1e-9
        assert abs(e1.dot(e2)) < 1e-9
        assert abs(e1.dot(e3)) < 1e-9
        assert abs(e2.dot(e3)) < 1e-9
        assert e3.is_close(n.to_vector())
        # Right-handed: e1 x e2 == e3
        assert e1.cross(e2).is_close(e3)

    def test_reflect(self):
        """Test mirror reflection about a normal."""
        from raytracer.core.geometry import Normal, Vector, reflect

        incident = Vector(1.0, 0.0, -1.0)
        reflected = reflect(incident, Normal(0.0, 0.0, 1.0))
        assert reflected.is_close(Vector(1.0, 0.0, 1.0))

        diagonal = reflect(Vector(1.0, -1.0, 0.0).normalize(), Normal(0.0, 1.0, 0.0))
        assert diagonal.is_close(Vector(1.0, 1.0, 0.0) / math.sqrt(2.0))
