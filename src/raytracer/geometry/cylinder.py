"""Unit cylinder: radius 0.5, height 1, axis z, centered at the origin.

As for the cube, the ray is doubled so that the tests run against a cylinder
of radius 1 with caps at z = +-1. Candidate crossings come from the infinite
side surface (kept when |z| <= 1) and from the two cap planes (kept when
x^2 + y^2 <= 1). The cylinder is convex, so any line crosses it in at most
one interval.
"""

from __future__ import annotations

import math

from raytracer.core.geometry import Normal, Point, Vec2D
from raytracer.core.ray import Ray
from raytracer.core.transformation import scaling
from raytracer.geometry.shape import SimpleShape, face_forward

_DOUBLE = scaling(2.0)

# Tolerance for rim tests and for deciding whether a point lies on a cap
CYLINDER_EPSILON = 1e-5


def _candidates(ray: Ray) -> list[float]:
    """Sorted crossings of the doubled ray with the radius-1, height-2 cylinder."""
    sray = _DOUBLE * ray
    ox, oy, oz = sray.origin.x, sray.origin.y, sray.origin.z
    dx, dy, dz = sray.dir.x, sray.dir.y, sray.dir.z
    result = []

    a = dx * dx + dy * dy
    if a > 0.0:
        b = 2.0 * (ox * dx + oy * dy)
        c = ox * ox + oy * oy - 1.0
        delta = b * b - 4.0 * a * c
        if delta >= 0.0:
            sqrt_delta = math.sqrt(delta)
            for t in ((-b - sqrt_delta) / (2.0 * a), (-b + sqrt_delta) / (2.0 * a)):
                if abs(oz + t * dz) <= 1.0 + CYLINDER_EPSILON:
                    result.append(t)

    # Degenerate side quadratics (rays parallel to the axis) fall through here.
    if dz != 0.0:
        for t in ((1.0 - oz) / dz, (-1.0 - oz) / dz):
            x, y = ox + t * dx, oy + t * dy
            if x * x + y * y <= 1.0 + CYLINDER_EPSILON:
                result.append(t)

    return sorted(result)


class Cylinder(SimpleShape):
    """A closed cylinder of diameter 1 and height 1 along the z axis."""

    def local_nearest_t(self, ray: Ray) -> float:
        for t in _candidates(ray):
            if ray.tmin < t < ray.tmax:
                return t
        return math.inf

    def local_ts(self, ray: Ray) -> list[float]:
        candidates = _candidates(ray)
        # Rim crossings are found by both the side and a cap: keep the extremes.
        if len(candidates) < 2:
            return []
        return [candidates[0], candidates[-1]]

    def local_uv(self, point: Point) -> Vec2D:
        x, y, z = point.x, point.y, point.z
        if math.isclose(z, 0.5, abs_tol=CYLINDER_EPSILON):
            return Vec2D((3.0 - 2.0 * x) * 0.25, (3.0 - 2.0 * y) * 0.25)
        if math.isclose(z, -0.5, abs_tol=CYLINDER_EPSILON):
            return Vec2D((3.0 - 2.0 * x) * 0.25, (1.0 + 2.0 * y) * 0.25)
        u = max(0.0, min(1.0, z + 0.5))
        v = (math.atan2(y, x) / (2.0 * math.pi) + 1.0) * 0.5
        return Vec2D(u, v)

    def local_normal(self, point: Point, ray: Ray) -> Normal:
        if math.isclose(abs(point.z), 0.5, abs_tol=CYLINDER_EPSILON):
            return face_forward(Normal(0.0, 0.0, 1.0), ray)
        return face_forward(Normal(point.x, point.y, 0.0).normalize(), ray)
