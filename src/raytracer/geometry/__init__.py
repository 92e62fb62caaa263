"""Shape primitives and constructive solid geometry.

Components:
    shape: Shape protocol, HitRecord and Boundary
    sphere: Unit sphere
    plane: Infinite xy plane
    aabb: Axis-aligned box slab test
    cube: Unit cube built on the slab test
    cylinder: Closed unit cylinder
    csg: Union, intersection, difference and fusion of shapes

Simple shapes are unit primitives placed with a Transformation. Intersection
runs in object space after pulling the world ray back with the inverse
transformation:

    hit = shape.ray_intersection(ray)   # HitRecord or None
"""

from .aabb import AABB
from .csg import (
    CSG,
    DiffCSG,
    FusionCSG,
    IntersectionCSG,
    UnionCSG,
    difference,
    fuse,
    intersect,
    union,
)
from .cube import Cube
from .cylinder import Cylinder
from .plane import Plane
from .shape import Boundary, HitRecord, Shape, SimpleShape
from .sphere import Sphere

__all__ = [
    "Shape",
    "SimpleShape",
    "HitRecord",
    "Boundary",
    "Sphere",
    "Plane",
    "AABB",
    "Cube",
    "Cylinder",
    "CSG",
    "UnionCSG",
    "IntersectionCSG",
    "DiffCSG",
    "FusionCSG",
    "union",
    "intersect",
    "difference",
    "fuse",
]
