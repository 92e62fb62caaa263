"""Unit sphere centered at the origin.

Scale and translate it with the shape's transformation to get any ellipsoid.

Example:
    >>> from raytracer.core.geometry import Point, Vector
    >>> from raytracer.core.ray import Ray
    >>> from raytracer.geometry.sphere import Sphere
    >>> hit = Sphere().ray_intersection(Ray(Point(0.0, 0.0, 2.0), Vector(0.0, 0.0, -1.0)))
    >>> hit.t
    1.0
"""

from __future__ import annotations

import math

from raytracer.core.geometry import Normal, Point, Vec2D
from raytracer.core.ray import Ray
from raytracer.geometry.shape import SimpleShape, face_forward


def _sphere_roots(ray: Ray) -> tuple[float, float] | None:
    """Solve |O + tD|^2 = 1. Returns the ordered roots, or None if the ray misses."""
    origin = ray.origin.to_vector()
    a = ray.dir.squared_norm()
    half_b = origin.dot(ray.dir)
    c = origin.squared_norm() - 1.0

    quarter_delta = half_b * half_b - a * c
    if quarter_delta < 0.0:
        return None

    sqrt_delta = math.sqrt(quarter_delta)
    return (-half_b - sqrt_delta) / a, (-half_b + sqrt_delta) / a


class Sphere(SimpleShape):
    """A sphere of radius 1 centered at the origin."""

    def local_nearest_t(self, ray: Ray) -> float:
        roots = _sphere_roots(ray)
        if roots is None:
            return math.inf
        t1, t2 = roots
        if ray.tmin < t1 < ray.tmax:
            return t1
        if ray.tmin < t2 < ray.tmax:
            return t2
        return math.inf

    def local_ts(self, ray: Ray) -> list[float]:
        roots = _sphere_roots(ray)
        if roots is None:
            return []
        return list(roots)

    def local_uv(self, point: Point) -> Vec2D:
        u = math.atan2(point.y, point.x) / (2.0 * math.pi)
        if u < 0.0:
            u += 1.0
        v = math.acos(max(-1.0, min(1.0, point.z))) / math.pi
        return Vec2D(u, v)

    def local_normal(self, point: Point, ray: Ray) -> Normal:
        return face_forward(Normal(point.x, point.y, point.z), ray)
