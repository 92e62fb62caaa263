"""Ray data structure.

A Ray is a half-line with an admissible parameter interval [tmin, tmax] and
a bounce depth. Intersections are only reported for parameters strictly
inside the interval, which is how self-intersection at the surface a ray
leaves from is avoided.

Example:
    >>> from raytracer.core.geometry import Point, Vector
    >>> from raytracer.core.ray import Ray
    >>> ray = Ray(origin=Point(0.0, 0.0, 0.0), dir=Vector(1.0, 0.0, 0.0))
    >>> ray(5.0)
    Point(x=5.0, y=0.0, z=0.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from raytracer.core.geometry import EPSILON, Point, Vector

# Default lower bound of the ray interval
DEFAULT_TMIN = 1e-5


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray with origin, direction, admissible interval and bounce depth.

    The direction is not required to be normalized; shapes report ``t`` in
    units of the direction's length.

    Attributes:
        origin: Starting point.
        dir: Direction vector.
        tmin: Lower bound of the admissible interval.
        tmax: Upper bound of the admissible interval.
        depth: Number of bounces that produced this ray (0 for camera rays).

    Raises:
        ValueError: If tmin >= tmax.
    """

    origin: Point
    dir: Vector
    tmin: float = DEFAULT_TMIN
    tmax: float = math.inf
    depth: int = 0

    def __post_init__(self) -> None:
        if not self.tmin < self.tmax:
            raise ValueError(
                f"Ray interval is empty: tmin={self.tmin} must be < tmax={self.tmax}"
            )

    def __call__(self, t: float) -> Point:
        return self.at(t)

    def at(self, t: float) -> Point:
        """Evaluate the point origin + t * dir.

        ``t == 0`` returns the origin unconditionally; any other value must
        lie within [tmin, tmax].

        Raises:
            ValueError: If t is outside the ray interval.
        """
        if t == 0:
            return self.origin
        if not self.tmin <= t <= self.tmax:
            raise ValueError(
                f"t={t} is outside the ray interval [{self.tmin}, {self.tmax}]"
            )
        return self.origin + self.dir * t

    def is_close(self, other: Ray, epsilon: float = EPSILON) -> bool:
        """Compare origin and direction only."""
        return self.origin.is_close(other.origin, epsilon) and self.dir.is_close(
            other.dir, epsilon
        )
