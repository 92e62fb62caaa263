"""Vector, point and normal types used throughout the renderer.

Three distinct 3D types are used so that the transformation algebra can treat
them differently:

    - Vector: a free direction. Translations do not affect it.
    - Point: an affine position. Point - Point is a Vector, Point + Point is
      rejected with a TypeError.
    - Normal: a covector. Transformed by the inverse transpose of the linear
      part so that it stays perpendicular to transformed surfaces.

Vec2D holds (u, v) surface coordinates in [0, 1]^2.

Example:
    >>> from raytracer.core.geometry import Point, Vector
    >>> p = Point(1.0, 2.0, 3.0)
    >>> v = Vector(0.0, 0.0, 1.0)
    >>> p + 2.0 * v
    Point(x=1.0, y=2.0, z=5.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Default tolerance for approximate comparisons
EPSILON = 1e-5


def are_close(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Return True if two floats differ by less than epsilon."""
    return abs(a - b) < epsilon


@dataclass(frozen=True, slots=True)
class Vector:
    """A free 3D direction.

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vector:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def dot(self, other: Vector | Normal) -> float:
        """Dot product with a Vector or Normal."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector | Normal) -> Vector:
        """Cross product self x other."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def squared_norm(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        return math.sqrt(self.squared_norm())

    def normalize(self) -> Vector:
        """Return a unit vector in the same direction.

        Raises:
            ZeroDivisionError: If the vector has zero length.
        """
        return self / self.norm()

    def to_normal(self) -> Normal:
        return Normal(self.x, self.y, self.z)

    def is_close(self, other: Vector, epsilon: float = EPSILON) -> bool:
        return (
            are_close(self.x, other.x, epsilon)
            and are_close(self.y, other.y, epsilon)
            and are_close(self.z, other.z, epsilon)
        )


@dataclass(frozen=True, slots=True)
class Point:
    """An affine 3D position.

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector) -> Point:
        if isinstance(other, Point):
            raise TypeError("Cannot add two points; convert one to a Vector first")
        if not isinstance(other, Vector):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point | Vector) -> Vector | Point:
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def to_vector(self) -> Vector:
        """Return the position vector of this point relative to the origin."""
        return Vector(self.x, self.y, self.z)

    def is_close(self, other: Point, epsilon: float = EPSILON) -> bool:
        return (
            are_close(self.x, other.x, epsilon)
            and are_close(self.y, other.y, epsilon)
            and are_close(self.z, other.z, epsilon)
        )


@dataclass(frozen=True, slots=True)
class Normal:
    """A surface normal (covector).

    Normals are not required to be unit length. Shapes normalize them before
    storing them in a HitRecord.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __neg__(self) -> Normal:
        return Normal(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Normal:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Normal(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def dot(self, other: Vector | Normal) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def squared_norm(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        return math.sqrt(self.squared_norm())

    def normalize(self) -> Normal:
        n = self.norm()
        return Normal(self.x / n, self.y / n, self.z / n)

    def to_vector(self) -> Vector:
        return Vector(self.x, self.y, self.z)

    def is_close(self, other: Normal, epsilon: float = EPSILON) -> bool:
        return (
            are_close(self.x, other.x, epsilon)
            and are_close(self.y, other.y, epsilon)
            and are_close(self.z, other.z, epsilon)
        )


@dataclass(frozen=True, slots=True)
class Vec2D:
    """Surface coordinates (u, v)."""

    u: float = 0.0
    v: float = 0.0

    def is_close(self, other: Vec2D, epsilon: float = EPSILON) -> bool:
        return are_close(self.u, other.u, epsilon) and are_close(
            self.v, other.v, epsilon
        )


# =============================================================================
# Basis Vectors
# =============================================================================

VEC_X = Vector(1.0, 0.0, 0.0)
VEC_Y = Vector(0.0, 1.0, 0.0)
VEC_Z = Vector(0.0, 0.0, 1.0)

ORIGIN = Point(0.0, 0.0, 0.0)


def build_onb_from_normal(normal: Vector | Normal) -> tuple[Vector, Vector, Vector]:
    """Build an orthonormal basis whose third axis is the given normal.

    Uses the branchless construction of Duff et al. (2017), which has no
    singularity for any unit input.

    Args:
        normal: A unit-length surface normal.

    Returns:
        A tuple (e1, e2, e3) of orthonormal vectors with e3 == normal.
    """
    sign = math.copysign(1.0, normal.z)
    a = -1.0 / (sign + normal.z)
    b = normal.x * normal.y * a

    e1 = Vector(1.0 + sign * normal.x * normal.x * a, sign * b, -sign * normal.x)
    e2 = Vector(b, sign + normal.y * normal.y * a, -normal.y)
    e3 = Vector(normal.x, normal.y, normal.z)
    return e1, e2, e3


def reflect(incident: Vector, normal: Vector | Normal) -> Vector:
    """Mirror an incident direction about a unit normal: d - 2(n.d)n."""
    n = normal.to_vector() if isinstance(normal, Normal) else normal
    return incident - n * (2.0 * n.dot(incident))
