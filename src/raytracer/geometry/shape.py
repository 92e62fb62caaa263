"""Shape protocol, hit records and ray-parameter boundaries.

Every shape answers four world-space queries:

    - ray_intersection(ray): nearest HitRecord inside the ray interval, or None
    - quick_ray_intersection(ray): whether any hit exists (occlusion test)
    - boundaries(ray): every surface crossing as sorted (t, leaf) pairs,
      ignoring the ray interval; consumed by CSG composites
    - all_ts(ray): the parameters of boundaries(ray)

Simple shapes are a unit primitive placed in the world by a Transformation.
The world ray is pulled back into object space, where a subclass implements
four pure functions:

    - local_nearest_t(ray): smallest t with tmin < t < tmax, or math.inf
    - local_ts(ray): every finite t, sorted, in enter/exit pairs
    - local_uv(point): surface coordinates of an object-space point
    - local_normal(point, ray): object-space normal facing the incoming ray

Parameters are invariant under affine maps of the ray, so a t computed in
object space is also valid for the world ray.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import NamedTuple

from raytracer.core.geometry import Normal, Point, Vec2D
from raytracer.core.ray import Ray
from raytracer.core.transformation import Transformation
from raytracer.materials.material import Material


@dataclass(frozen=True)
class HitRecord:
    """Information about a ray-surface intersection.

    Attributes:
        world_point: Intersection point in world space.
        normal: Unit world-space normal facing the incoming ray.
        surface_point: (u, v) coordinates on the surface.
        t: Ray parameter of the hit.
        ray: The world ray that produced the hit.
        material: Material of the surface that was hit.
    """

    world_point: Point
    normal: Normal
    surface_point: Vec2D
    t: float
    ray: Ray
    material: Material

    def is_close(self, other: HitRecord | None, epsilon: float = 1e-5) -> bool:
        if other is None:
            return False
        return (
            self.world_point.is_close(other.world_point, epsilon)
            and self.normal.is_close(other.normal, epsilon)
            and self.surface_point.is_close(other.surface_point, epsilon)
            and abs(self.t - other.t) < epsilon
            and self.ray.is_close(other.ray, epsilon)
        )


class Boundary(NamedTuple):
    """A surface crossing along a ray: parameter and the simple shape crossed."""

    t: float
    shape: SimpleShape


class Shape(ABC):
    """Base class for everything that can be placed in a World."""

    @abstractmethod
    def ray_intersection(self, ray: Ray) -> HitRecord | None:
        """Return the nearest hit inside the ray interval, or None."""

    @abstractmethod
    def boundaries(self, ray: Ray) -> list[Boundary]:
        """Return every surface crossing along the ray, sorted by t."""

    def all_ts(self, ray: Ray) -> list[float]:
        return [boundary.t for boundary in self.boundaries(ray)]

    def quick_ray_intersection(self, ray: Ray) -> bool:
        return self.ray_intersection(ray) is not None


class SimpleShape(Shape):
    """A unit primitive with a transformation and a material.

    Attributes:
        transformation: Object-to-world transformation.
        material: Surface material.
    """

    def __init__(
        self,
        transformation: Transformation | None = None,
        material: Material | None = None,
    ) -> None:
        self.transformation = transformation if transformation is not None else Transformation()
        self.material = material if material is not None else Material()
        self._world_to_object = self.transformation.inverse()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(transformation={self.transformation!r})"

    # -------------------------------------------------------------------------
    # Object-space protocol
    # -------------------------------------------------------------------------

    @abstractmethod
    def local_nearest_t(self, ray: Ray) -> float:
        """Smallest t strictly inside the ray interval, or math.inf."""

    @abstractmethod
    def local_ts(self, ray: Ray) -> list[float]:
        """Every finite intersection parameter, sorted, ignoring the interval."""

    @abstractmethod
    def local_uv(self, point: Point) -> Vec2D:
        """Surface coordinates of an object-space point on the surface."""

    @abstractmethod
    def local_normal(self, point: Point, ray: Ray) -> Normal:
        """Object-space normal at a surface point, facing against ray.dir."""

    # -------------------------------------------------------------------------
    # World-space queries
    # -------------------------------------------------------------------------

    def to_object_space(self, ray: Ray) -> Ray:
        return self._world_to_object * ray

    def ray_intersection(self, ray: Ray) -> HitRecord | None:
        local_ray = self.to_object_space(ray)
        t = self.local_nearest_t(local_ray)
        if math.isinf(t):
            return None
        return self._make_hit(local_ray, ray, t)

    def hit_at(self, ray: Ray, t: float) -> HitRecord:
        """Build the HitRecord for a known crossing parameter of a world ray."""
        return self._make_hit(self.to_object_space(ray), ray, t)

    def _make_hit(self, local_ray: Ray, world_ray: Ray, t: float) -> HitRecord:
        # origin + t*dir directly: CSG boundaries may lie outside the interval.
        hit_point = local_ray.origin + local_ray.dir * t
        normal = self.transformation * self.local_normal(hit_point, local_ray)
        return HitRecord(
            world_point=self.transformation * hit_point,
            normal=normal.normalize(),
            surface_point=self.local_uv(hit_point),
            t=t,
            ray=world_ray,
            material=self.material,
        )

    def boundaries(self, ray: Ray) -> list[Boundary]:
        return [Boundary(t, self) for t in self.local_ts(self.to_object_space(ray))]

    def all_ts(self, ray: Ray) -> list[float]:
        return self.local_ts(self.to_object_space(ray))

    def quick_ray_intersection(self, ray: Ray) -> bool:
        return not math.isinf(self.local_nearest_t(self.to_object_space(ray)))


def face_forward(normal: Normal, ray: Ray) -> Normal:
    """Flip a normal so that it points against the ray direction."""
    return -normal if normal.dot(ray.dir) > 0.0 else normal
