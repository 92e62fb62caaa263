"""Orthogonal and perspective cameras.

Cameras look along +x with z up. Screen coordinates (u, v) span [0, 1]^2
with (0, 0) at the bottom-left corner of the image. The camera is placed
in the world with its transformation.

Camera rays start at tmin = 1, i.e. on the screen rather than at the eye.

Example:
    >>> from raytracer.camera.cameras import PerspectiveCamera
    >>> camera = PerspectiveCamera(aspect_ratio=16 / 9)
    >>> ray = camera.fire_ray(0.5, 0.5)
    >>> ray.dir
    Vector(x=1.0, y=0.0, z=0.0)
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from raytracer.core.geometry import Point, Vector
from raytracer.core.ray import Ray
from raytracer.core.transformation import Transformation

# Lower bound of the interval of camera rays
CAMERA_TMIN = 1.0


class Camera(ABC):
    """Maps normalized screen coordinates to world-space rays."""

    @abstractmethod
    def fire_ray(self, u: float, v: float) -> Ray:
        """Return the ray through screen point (u, v)."""


@dataclass
class OrthogonalCamera(Camera):
    """Parallel projection: every ray has direction +x.

    Attributes:
        aspect_ratio: Screen width over height.
        transformation: Camera-to-world transformation.
    """

    aspect_ratio: float = 1.0
    transformation: Transformation = field(default_factory=Transformation)

    def fire_ray(self, u: float, v: float) -> Ray:
        origin = Point(-1.0, (1.0 - 2.0 * u) * self.aspect_ratio, 2.0 * v - 1.0)
        return self.transformation * Ray(
            origin=origin, dir=Vector(1.0, 0.0, 0.0), tmin=CAMERA_TMIN
        )


@dataclass
class PerspectiveCamera(Camera):
    """Pinhole projection with the eye at (-screen_distance, 0, 0).

    Attributes:
        aspect_ratio: Screen width over height.
        transformation: Camera-to-world transformation.
        screen_distance: Distance between the eye and the screen.
    """

    aspect_ratio: float = 1.0
    transformation: Transformation = field(default_factory=Transformation)
    screen_distance: float = 1.0

    def fire_ray(self, u: float, v: float) -> Ray:
        d = self.screen_distance
        origin = Point(-d, 0.0, 0.0)
        direction = Vector(d, (1.0 - 2.0 * u) * self.aspect_ratio, 2.0 * v - 1.0)
        return self.transformation * Ray(origin=origin, dir=direction, tmin=CAMERA_TMIN)

    def aperture_deg(self) -> float:
        """Aperture angle in degrees: 2 * atan(screen_distance / aspect_ratio)."""
        return 2.0 * math.degrees(math.atan2(self.screen_distance, self.aspect_ratio))
