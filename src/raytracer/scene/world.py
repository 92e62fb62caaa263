"""World: the flat list of shapes a scene is made of.

Intersection is a linear scan over every shape. Hits are compared by
``t / |ray.dir|``, the distance travelled along the ray, so that shapes
reached through differently scaled rays compare fairly.

Example:
    >>> from raytracer.core.transformation import translation
    >>> from raytracer.geometry.sphere import Sphere
    >>> from raytracer.scene.world import World
    >>> world = World()
    >>> world.add(Sphere(translation(2.0, 0.0, 0.0)))
    >>> len(world)
    1
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator

from raytracer.core.geometry import Point
from raytracer.core.ray import Ray
from raytracer.geometry.shape import HitRecord, Shape

# Start of occlusion rays, as a fraction of the observer-point distance
VISIBILITY_EPSILON = 1e-2


class World:
    """An ordered collection of shapes."""

    def __init__(self, shapes: Iterable[Shape] = ()) -> None:
        self.shapes: list[Shape] = list(shapes)

    def __repr__(self) -> str:
        return f"World({len(self.shapes)} shapes)"

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes)

    def __len__(self) -> int:
        return len(self.shapes)

    def add(self, shape: Shape) -> None:
        self.shapes.append(shape)

    def ray_intersection(self, ray: Ray) -> HitRecord | None:
        """Return the closest hit among all shapes, or None."""
        closest: HitRecord | None = None
        closest_distance = math.inf
        for shape in self.shapes:
            hit = shape.ray_intersection(ray)
            if hit is None:
                continue
            distance = hit.t / hit.ray.dir.norm()
            if distance < closest_distance:
                closest = hit
                closest_distance = distance
        return closest

    def is_point_visible(self, point: Point, observer: Point) -> bool:
        """Check whether the segment from observer to point is unobstructed.

        The occlusion ray runs over (VISIBILITY_EPSILON / |d|, 1) of the
        segment, so a surface the point lies on does not hide it.
        """
        direction = point - observer
        length = direction.norm()
        if length == 0.0:
            return True
        ray = Ray(
            origin=observer,
            dir=direction,
            tmin=VISIBILITY_EPSILON / length,
            tmax=1.0,
        )
        return not any(shape.quick_ray_intersection(ray) for shape in self.shapes)
