"""Pigments: functions from surface coordinates (u, v) to a color.

Example:
    >>> from raytracer.core.color import Color
    >>> from raytracer.core.geometry import Vec2D
    >>> from raytracer.materials.pigments import CheckeredPigment
    >>> pigment = CheckeredPigment(Color(1.0, 0.0, 0.0), Color(0.0, 0.0, 1.0), steps=4)
    >>> pigment(Vec2D(0.1, 0.1))
    Color(r=1.0, g=0.0, b=0.0)
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from raytracer.core.color import BLACK, WHITE, Color
from raytracer.core.geometry import Vec2D
from raytracer.core.image import HdrImage


class Pigment(ABC):
    """A color field over the unit square of surface coordinates."""

    @abstractmethod
    def __call__(self, uv: Vec2D) -> Color:
        """Return the color at the given surface coordinates."""


class UniformPigment(Pigment):
    """The same color everywhere."""

    def __init__(self, color: Color = WHITE) -> None:
        self.color = color

    def __repr__(self) -> str:
        return f"UniformPigment({self.color!r})"

    def __call__(self, uv: Vec2D) -> Color:
        return self.color


class CheckeredPigment(Pigment):
    """A checkerboard of ``steps`` x ``steps`` squares.

    A square gets ``color_on`` when ceil(u * steps) and ceil(v * steps) have
    the same parity, ``color_off`` otherwise.
    """

    def __init__(
        self, color_on: Color = WHITE, color_off: Color = BLACK, steps: int = 2
    ) -> None:
        if steps < 1:
            raise ValueError(f"steps must be a positive integer, got {steps}")
        self.color_on = color_on
        self.color_off = color_off
        self.steps = steps

    def __call__(self, uv: Vec2D) -> Color:
        u_cell = math.ceil(uv.u * self.steps)
        v_cell = math.ceil(uv.v * self.steps)
        return self.color_on if u_cell % 2 == v_cell % 2 else self.color_off


class ImagePigment(Pigment):
    """Nearest-sample lookup into an HdrImage.

    ``u`` selects the column and ``v`` the row. Indices are ceil(u * width)
    and ceil(v * height), counted from one, with a zero index clamped to the
    first pixel.
    """

    def __init__(self, image: HdrImage) -> None:
        self.image = image

    def __call__(self, uv: Vec2D) -> Color:
        col = _clamped_index(uv.u, self.image.width)
        row = _clamped_index(uv.v, self.image.height)
        return self.image.get_pixel(col, row)


def _clamped_index(coordinate: float, size: int) -> int:
    index = math.ceil(coordinate * size)
    return min(max(index, 1), size) - 1
