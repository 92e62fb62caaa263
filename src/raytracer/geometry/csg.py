"""Constructive solid geometry on ray-parameter intervals.

A closed solid crossed by a ray produces a sorted list of boundaries that
alternate between entering and leaving it. A composite merges the boundary
lists of its two children and sweeps them in order, tracking whether the
ray is inside each child. A boundary is emitted whenever the combined
inside state, given by a boolean rule, changes:

    - UnionCSG:        a or b
    - IntersectionCSG: a and b
    - DiffCSG:         a and not b
    - FusionCSG:       a or b, with crossings closer than FUSION_EPSILON
                       applied together

Crossings with the same parameter are always applied together, so
``UnionCSG(a, a)`` behaves like ``a`` and ``DiffCSG(a, a)`` is empty. Fusion
widens that grouping to a small tolerance, which removes the thin slivers
left where two solids share a face.

Composites carry no transformation or material of their own: each emitted
boundary remembers the simple shape it came from, and hit records are built
by that shape.

Example:
    >>> from raytracer.core.transformation import translation
    >>> from raytracer.geometry.csg import difference
    >>> from raytracer.geometry.sphere import Sphere
    >>> lens = difference(Sphere(), Sphere(translation(1.0, 0.0, 0.0)))
"""

from __future__ import annotations

import math
from collections.abc import Callable

from raytracer.core.ray import Ray
from raytracer.geometry.shape import Boundary, HitRecord, Shape

# Crossings closer than this are merged by FusionCSG
FUSION_EPSILON = 1e-5

InsideRule = Callable[[bool, bool], bool]


def combine_boundaries(
    left: list[Boundary],
    right: list[Boundary],
    rule: InsideRule,
    epsilon: float = 0.0,
) -> list[Boundary]:
    """Sweep two sorted boundary lists and keep the changes of ``rule``.

    Args:
        left: Boundaries of the first operand, in enter/exit pairs.
        right: Boundaries of the second operand, in enter/exit pairs.
        rule: Combined inside state as a function of (inside left, inside right).
        epsilon: Crossings within this distance of the first crossing of a
            group are applied together.

    Returns:
        The sorted boundaries of the combined solid, in enter/exit pairs.

    Raises:
        ValueError: If an operand has an odd number of boundaries.
    """
    for name, bounds in (("left", left), ("right", right)):
        if len(bounds) % 2 != 0:
            raise ValueError(
                f"CSG {name} operand has {len(bounds)} boundaries; "
                "closed solids must produce enter/exit pairs"
            )

    events = sorted(
        [(boundary, 0) for boundary in left] + [(boundary, 1) for boundary in right],
        key=lambda event: event[0].t,
    )

    inside = [False, False]
    state = rule(False, False)
    result: list[Boundary] = []
    i = 0
    while i < len(events):
        first, _ = events[i]
        while i < len(events) and events[i][0].t - first.t <= epsilon:
            inside[events[i][1]] = not inside[events[i][1]]
            i += 1
        new_state = rule(inside[0], inside[1])
        if new_state != state:
            result.append(first)
            state = new_state
    return result


class CSG(Shape):
    """Base class of two-operand composites.

    Attributes:
        first: Left operand.
        second: Right operand.
    """

    rule: InsideRule
    epsilon: float = 0.0

    def __init__(self, first: Shape, second: Shape) -> None:
        self.first = first
        self.second = second

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.first!r}, {self.second!r})"

    def boundaries(self, ray: Ray) -> list[Boundary]:
        return combine_boundaries(
            self.first.boundaries(ray),
            self.second.boundaries(ray),
            type(self).rule,
            self.epsilon,
        )

    def nearest_boundary(self, ray: Ray) -> Boundary | None:
        for boundary in self.boundaries(ray):
            if ray.tmin < boundary.t < ray.tmax:
                return boundary
        return None

    def ray_intersection(self, ray: Ray) -> HitRecord | None:
        boundary = self.nearest_boundary(ray)
        if boundary is None:
            return None
        return boundary.shape.hit_at(ray, boundary.t)

    def quick_ray_intersection(self, ray: Ray) -> bool:
        return self.nearest_boundary(ray) is not None

    def nearest_t(self, ray: Ray) -> float:
        boundary = self.nearest_boundary(ray)
        return math.inf if boundary is None else boundary.t


class UnionCSG(CSG):
    """Points inside either operand."""

    @staticmethod
    def rule(a: bool, b: bool) -> bool:
        return a or b


class IntersectionCSG(CSG):
    """Points inside both operands."""

    @staticmethod
    def rule(a: bool, b: bool) -> bool:
        return a and b


class DiffCSG(CSG):
    """Points inside the first operand and outside the second."""

    @staticmethod
    def rule(a: bool, b: bool) -> bool:
        return a and not b


class FusionCSG(CSG):
    """Union without the internal faces where the operands touch."""

    epsilon = FUSION_EPSILON

    @staticmethod
    def rule(a: bool, b: bool) -> bool:
        return a or b


# =============================================================================
# Builders
# =============================================================================


def _balanced(cls: type[CSG], shapes: tuple[Shape, ...]) -> Shape:
    if len(shapes) < 2:
        raise ValueError(f"{cls.__name__} needs at least two shapes, got {len(shapes)}")
    return _build_tree(cls, shapes)


def _build_tree(cls: type[CSG], shapes: tuple[Shape, ...]) -> Shape:
    if len(shapes) == 1:
        return shapes[0]
    middle = len(shapes) // 2
    return cls(_build_tree(cls, shapes[:middle]), _build_tree(cls, shapes[middle:]))


def union(*shapes: Shape) -> Shape:
    """Union of two or more shapes as a balanced tree."""
    return _balanced(UnionCSG, shapes)


def intersect(*shapes: Shape) -> Shape:
    """Intersection of two or more shapes as a balanced tree."""
    return _balanced(IntersectionCSG, shapes)


def fuse(*shapes: Shape) -> Shape:
    """Fusion of two or more shapes as a balanced tree."""
    return _balanced(FusionCSG, shapes)


def difference(shape: Shape, *others: Shape) -> Shape:
    """Subtract every shape in ``others`` from ``shape``.

    Removing several shapes is the same as removing their union.
    """
    if not others:
        raise ValueError("difference needs at least one shape to subtract")
    subtracted = others[0] if len(others) == 1 else union(*others)
    return DiffCSG(shape, subtracted)
