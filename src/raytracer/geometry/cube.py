"""Unit cube centered at the origin, with faces at +-0.5.

The ray is doubled so that the slab test can run against the +-1 box; this
leaves the ray parameters unchanged.

Surface coordinates follow the cross-shaped cube-map unfolding on a 4x3
grid::

           +---+
           |+y |
       +---+---+---+---+
       |-x |-z |+x |+z |
       +---+---+---+---+
           |-y |
           +---+
"""

from __future__ import annotations

from raytracer.core.geometry import Normal, Point, Vec2D
from raytracer.core.ray import Ray
from raytracer.core.transformation import scaling
from raytracer.geometry.aabb import AABB
from raytracer.geometry.shape import SimpleShape

_DOUBLE = scaling(2.0)
_BOX = AABB(Point(-1.0, -1.0, -1.0), Point(1.0, 1.0, 1.0))


def _dominant_axis(point: Point) -> tuple[int, float]:
    """Index and magnitude of the coordinate with the largest absolute value."""
    coords = (abs(point.x), abs(point.y), abs(point.z))
    index = max(range(3), key=coords.__getitem__)
    return index, coords[index]


class Cube(SimpleShape):
    """An axis-aligned cube of side 1."""

    def local_nearest_t(self, ray: Ray) -> float:
        return _BOX.nearest_t(_DOUBLE * ray)

    def local_ts(self, ray: Ray) -> list[float]:
        return _BOX.all_ts(_DOUBLE * ray)

    def local_uv(self, point: Point) -> Vec2D:
        index, max_value = _dominant_axis(point)
        if index == 0:
            positive = point.x > 0.0
            uc, vc = (point.z if positive else -point.z), point.y
            offset = (2.0 if positive else 0.0, 1.0)
        elif index == 1:
            positive = point.y > 0.0
            uc, vc = point.x, (point.z if positive else -point.z)
            offset = (1.0, 2.0 if positive else 0.0)
        else:
            positive = point.z > 0.0
            uc, vc = (-point.x if positive else point.x), point.y
            offset = (3.0 if positive else 1.0, 1.0)

        u = (offset[0] + 0.5 * (uc / max_value + 1.0)) / 4.0
        v = (offset[1] + 0.5 * (vc / max_value + 1.0)) / 3.0
        return Vec2D(u, v)

    def local_normal(self, point: Point, ray: Ray) -> Normal:
        index, _ = _dominant_axis(point)
        coordinate = (point.x, point.y, point.z)[index]
        direction = (ray.dir.x, ray.dir.y, ray.dir.z)[index]
        # Face the incoming ray; fall back to the outward face for grazing rays.
        if direction != 0.0:
            sign = -1.0 if direction > 0.0 else 1.0
        else:
            sign = 1.0 if coordinate > 0.0 else -1.0
        components = [0.0, 0.0, 0.0]
        components[index] = sign
        return Normal(*components)
