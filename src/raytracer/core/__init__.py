"""Core data types.

Components:
    geometry: Vector, Point, Normal and Vec2D
    transformation: Affine transformations with cached inverses
    ray: Ray with admissible parameter interval and bounce depth
    color: Linear RGB colors
    pcg: PCG32 random number generator
    image: HdrImage raster backed by NumPy
"""

from .color import BLACK, WHITE, Color
from .geometry import (
    ORIGIN,
    VEC_X,
    VEC_Y,
    VEC_Z,
    Normal,
    Point,
    Vec2D,
    Vector,
    build_onb_from_normal,
    reflect,
)
from .image import HdrImage
from .pcg import PCG
from .ray import Ray
from .transformation import (
    Transformation,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    translation,
)

__all__ = [
    "Vector",
    "Point",
    "Normal",
    "Vec2D",
    "ORIGIN",
    "VEC_X",
    "VEC_Y",
    "VEC_Z",
    "build_onb_from_normal",
    "reflect",
    "Transformation",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "Ray",
    "Color",
    "BLACK",
    "WHITE",
    "PCG",
    "HdrImage",
]
