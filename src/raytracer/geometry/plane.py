"""Infinite plane z = 0.

The plane has no inside: local_ts returns a single crossing, which CSG
composites reject because they need enter/exit pairs.
"""

from __future__ import annotations

import math

from raytracer.core.geometry import Normal, Point, Vec2D
from raytracer.core.ray import Ray
from raytracer.geometry.shape import SimpleShape

# Rays whose |dir.z| is below this are treated as parallel to the plane
PLANE_EPSILON = 1e-5


class Plane(SimpleShape):
    """The xy plane. Surface coordinates repeat on every unit square."""

    def _crossing(self, ray: Ray) -> float:
        if abs(ray.dir.z) < PLANE_EPSILON:
            return math.inf
        return -ray.origin.z / ray.dir.z

    def local_nearest_t(self, ray: Ray) -> float:
        t = self._crossing(ray)
        if ray.tmin < t < ray.tmax:
            return t
        return math.inf

    def local_ts(self, ray: Ray) -> list[float]:
        t = self._crossing(ray)
        return [] if math.isinf(t) else [t]

    def local_uv(self, point: Point) -> Vec2D:
        return Vec2D(point.x - math.floor(point.x), point.y - math.floor(point.y))

    def local_normal(self, point: Point, ray: Ray) -> Normal:
        return Normal(0.0, 0.0, -1.0 if ray.dir.z > 0.0 else 1.0)
