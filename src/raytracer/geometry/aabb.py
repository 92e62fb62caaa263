"""Axis-aligned bounding box and the slab intersection test."""

from __future__ import annotations

import math
from dataclasses import dataclass

from raytracer.core.geometry import Point
from raytracer.core.ray import Ray


@dataclass(frozen=True)
class AABB:
    """Box spanned by two opposite corners.

    Attributes:
        p_min: Corner with the smallest coordinates.
        p_max: Corner with the largest coordinates.
    """

    p_min: Point = Point(0.0, 0.0, 0.0)
    p_max: Point = Point(1.0, 1.0, 1.0)

    def slab_interval(self, ray: Ray) -> tuple[float, float] | None:
        """Intersect the three per-axis slabs crossed by the ray.

        Returns:
            The (entry, exit) parameters, or None if the slabs do not
            overlap or the overlap is unbounded.
        """
        t_enter, t_exit = -math.inf, math.inf
        axes = (
            (ray.origin.x, ray.dir.x, self.p_min.x, self.p_max.x),
            (ray.origin.y, ray.dir.y, self.p_min.y, self.p_max.y),
            (ray.origin.z, ray.dir.z, self.p_min.z, self.p_max.z),
        )
        for origin, direction, low, high in axes:
            if direction == 0.0:
                # Parallel to this slab: either always inside it or never.
                if not low <= origin <= high:
                    return None
                continue
            t0 = (low - origin) / direction
            t1 = (high - origin) / direction
            if t0 > t1:
                t0, t1 = t1, t0
            t_enter = max(t_enter, t0)
            t_exit = min(t_exit, t1)
            if t_enter > t_exit:
                return None

        if not (math.isfinite(t_enter) and math.isfinite(t_exit)):
            return None
        return t_enter, t_exit

    def nearest_t(self, ray: Ray) -> float:
        """Entry parameter if inside the ray interval, else exit, else math.inf."""
        interval = self.slab_interval(ray)
        if interval is None:
            return math.inf
        t1, t2 = interval
        if ray.tmin < t1 < ray.tmax:
            return t1
        if ray.tmin < t2 < ray.tmax:
            return t2
        return math.inf

    def all_ts(self, ray: Ray) -> list[float]:
        interval = self.slab_interval(ray)
        return [] if interval is None else list(interval)
