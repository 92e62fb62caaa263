"""Affine transformations stored as a matrix and its cached inverse.

A Transformation keeps a 4x4 homogeneous matrix ``m`` together with its
inverse ``invm``. Both are immutable once built. Composition multiplies the
direct matrices left to right and the inverses right to left, so the inverse
is never recomputed:

    (A * B).m    == A.m @ B.m
    (A * B).invm == B.invm @ A.invm

The rightmost factor is applied first, so ``translation(v) * scaling(2)``
scales an object and then moves it.

The ``*`` operator dispatches on the right operand:

    - Transformation: composition
    - Vector: linear part only
    - Point: full affine map, with perspective divide when w != 1
    - Normal: transpose of the inverse linear part
    - Ray: origin and direction transformed, interval and depth kept

Example:
    >>> import math
    >>> from raytracer.core.geometry import Point
    >>> from raytracer.core.transformation import rotation_z, translation
    >>> t = translation(1.0, 0.0, 0.0) * rotation_z(math.pi / 2)
    >>> (t * Point(1.0, 0.0, 0.0)).is_close(Point(1.0, 1.0, 0.0))
    True
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, overload

import numpy as np
import numpy.typing as npt

from raytracer.core.geometry import Normal, Point, Vector

if TYPE_CHECKING:
    from raytracer.core.ray import Ray

Matrix = npt.NDArray[np.float64]

# Tolerance used by is_consistent() and is_close()
MATRIX_EPSILON = 1e-8


class Transformation:
    """An invertible affine map with a cached inverse.

    Attributes:
        m: The 4x4 direct matrix.
        invm: The 4x4 inverse matrix.
    """

    __slots__ = ("m", "invm")

    def __init__(
        self,
        m: npt.ArrayLike | None = None,
        invm: npt.ArrayLike | None = None,
    ) -> None:
        """Build a transformation.

        Args:
            m: Direct 4x4 matrix. Identity when omitted.
            invm: Inverse 4x4 matrix. Computed with numpy.linalg.inv when
                omitted; trusted as given otherwise.

        Raises:
            ValueError: If a matrix is not 4x4.
            numpy.linalg.LinAlgError: If ``m`` is singular and no inverse
                was supplied.
        """
        if m is None:
            direct = np.identity(4, dtype=np.float64)
        else:
            direct = np.array(m, dtype=np.float64)
        if direct.shape != (4, 4):
            raise ValueError(f"Transformation matrix must be 4x4, got {direct.shape}")

        if invm is None:
            inverse = np.linalg.inv(direct)
        else:
            inverse = np.array(invm, dtype=np.float64)
            if inverse.shape != (4, 4):
                raise ValueError(
                    f"Inverse matrix must be 4x4, got {inverse.shape}"
                )

        direct.flags.writeable = False
        inverse.flags.writeable = False
        self.m: Matrix = direct
        self.invm: Matrix = inverse

    def __repr__(self) -> str:
        return f"Transformation(m={self.m.tolist()!r})"

    @overload
    def __mul__(self, other: Transformation) -> Transformation: ...
    @overload
    def __mul__(self, other: Vector) -> Vector: ...
    @overload
    def __mul__(self, other: Point) -> Point: ...
    @overload
    def __mul__(self, other: Normal) -> Normal: ...
    @overload
    def __mul__(self, other: Ray) -> Ray: ...

    def __mul__(self, other):
        # Imported lazily: ray.py depends on this module.
        from raytracer.core.ray import Ray

        if isinstance(other, Transformation):
            return Transformation(self.m @ other.m, other.invm @ self.invm)
        if isinstance(other, Vector):
            return self._apply_vector(other)
        if isinstance(other, Point):
            return self._apply_point(other)
        if isinstance(other, Normal):
            return self._apply_normal(other)
        if isinstance(other, Ray):
            return Ray(
                origin=self._apply_point(other.origin),
                dir=self._apply_vector(other.dir),
                tmin=other.tmin,
                tmax=other.tmax,
                depth=other.depth,
            )
        return NotImplemented

    def _apply_vector(self, v: Vector) -> Vector:
        m = self.m
        return Vector(
            float(m[0, 0] * v.x + m[0, 1] * v.y + m[0, 2] * v.z),
            float(m[1, 0] * v.x + m[1, 1] * v.y + m[1, 2] * v.z),
            float(m[2, 0] * v.x + m[2, 1] * v.y + m[2, 2] * v.z),
        )

    def _apply_point(self, p: Point) -> Point:
        m = self.m
        x = m[0, 0] * p.x + m[0, 1] * p.y + m[0, 2] * p.z + m[0, 3]
        y = m[1, 0] * p.x + m[1, 1] * p.y + m[1, 2] * p.z + m[1, 3]
        z = m[2, 0] * p.x + m[2, 1] * p.y + m[2, 2] * p.z + m[2, 3]
        w = m[3, 0] * p.x + m[3, 1] * p.y + m[3, 2] * p.z + m[3, 3]
        if w == 1.0:
            return Point(float(x), float(y), float(z))
        return Point(float(x / w), float(y / w), float(z / w))

    def _apply_normal(self, n: Normal) -> Normal:
        # Transpose of the inverse: note the swapped indices.
        inv = self.invm
        return Normal(
            float(inv[0, 0] * n.x + inv[1, 0] * n.y + inv[2, 0] * n.z),
            float(inv[0, 1] * n.x + inv[1, 1] * n.y + inv[2, 1] * n.z),
            float(inv[0, 2] * n.x + inv[1, 2] * n.y + inv[2, 2] * n.z),
        )

    def inverse(self) -> Transformation:
        """Return the inverse transformation by swapping the two matrices."""
        return Transformation(self.invm, self.m)

    def is_consistent(self, epsilon: float = MATRIX_EPSILON) -> bool:
        """Check that m @ invm is the identity within epsilon."""
        product = self.m @ self.invm
        return bool(np.allclose(product, np.identity(4), atol=epsilon, rtol=0.0))

    def is_close(self, other: Transformation, epsilon: float = MATRIX_EPSILON) -> bool:
        """Compare both the direct and the inverse matrices."""
        return bool(
            np.allclose(self.m, other.m, atol=epsilon, rtol=0.0)
            and np.allclose(self.invm, other.invm, atol=epsilon, rtol=0.0)
        )


# =============================================================================
# Constructors
# =============================================================================


def _three_components(args: tuple, name: str) -> tuple[float, float, float]:
    """Accept either three scalars or a single 3-element sequence/Vector."""
    if len(args) == 1:
        (arg,) = args
        if isinstance(arg, Vector):
            return arg.x, arg.y, arg.z
        if isinstance(arg, Sequence) or isinstance(arg, np.ndarray):
            if len(arg) != 3:
                raise ValueError(
                    f"{name} requires a vector of size 3, got size {len(arg)}"
                )
            return float(arg[0]), float(arg[1]), float(arg[2])
        raise ValueError(f"{name} requires three components, got {arg!r}")
    if len(args) != 3:
        raise ValueError(f"{name} requires three components, got {len(args)}")
    return float(args[0]), float(args[1]), float(args[2])


def translation(*args) -> Transformation:
    """Build a translation.

    Accepts ``translation(Vector)``, ``translation((x, y, z))`` or
    ``translation(x, y, z)``.

    Raises:
        ValueError: If the displacement does not have exactly three components.
    """
    x, y, z = _three_components(args, "translation")
    m = np.array(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    invm = np.array(
        [
            [1.0, 0.0, 0.0, -x],
            [0.0, 1.0, 0.0, -y],
            [0.0, 0.0, 1.0, -z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return Transformation(m, invm)


def scaling(*args) -> Transformation:
    """Build a scaling along the three axes.

    ``scaling(s)`` is uniform; ``scaling(x, y, z)`` or ``scaling((x, y, z))``
    scales each axis independently. Zero factors are accepted and give a
    non-finite inverse.

    Raises:
        ValueError: If a sequence argument does not have exactly three
            components.
    """
    if len(args) == 1 and isinstance(args[0], (int, float)):
        x = y = z = float(args[0])
    else:
        x, y, z = _three_components(args, "scaling")

    with np.errstate(divide="ignore"):
        inv = np.reciprocal(np.array([x, y, z, 1.0]))
    return Transformation(np.diag([x, y, z, 1.0]), np.diag(inv))


def rotation_x(theta: float) -> Transformation:
    """Rotation of ``theta`` radians around the x axis (right-handed)."""
    c, s = math.cos(theta), math.sin(theta)
    m = np.array(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return Transformation(m, m.T)


def rotation_y(theta: float) -> Transformation:
    """Rotation of ``theta`` radians around the y axis (right-handed)."""
    c, s = math.cos(theta), math.sin(theta)
    m = np.array(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return Transformation(m, m.T)


def rotation_z(theta: float) -> Transformation:
    """Rotation of ``theta`` radians around the z axis (right-handed)."""
    c, s = math.cos(theta), math.sin(theta)
    m = np.array(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return Transformation(m, m.T)
