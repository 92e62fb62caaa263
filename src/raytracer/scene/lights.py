"""Point light sources for the point-light renderer."""

from __future__ import annotations

from dataclasses import dataclass

from raytracer.core.color import WHITE, Color
from raytracer.core.geometry import ORIGIN, Point


@dataclass(frozen=True)
class PointLight:
    """An isotropic point emitter.

    Attributes:
        position: Location of the light in world space.
        color: Emitted color.
        linear_radius: Apparent radius of the source. When positive, the
            contribution at distance d is scaled by (linear_radius / d)^2.
    """

    position: Point = ORIGIN
    color: Color = WHITE
    linear_radius: float = 0.0

    def distance_factor(self, distance: float) -> float:
        if self.linear_radius > 0.0:
            return (self.linear_radius / distance) ** 2
        return 1.0
