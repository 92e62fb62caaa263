"""Bidirectional reflectance distribution functions.

A BRDF answers two questions at a surface point:

    - at(normal, in_dir, out_dir, uv): how much of the light arriving from
      in_dir leaves along out_dir (used by the point-light renderer). Both
      directions point away from the surface.
    - scatter_ray(pcg, incoming_dir, point, normal, depth): a new ray drawn
      from the BRDF's importance distribution (used by the path tracer)

Scattered rays start at ``SCATTER_TMIN`` so that they do not hit the surface
they leave from.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from raytracer.core.color import BLACK, Color
from raytracer.core.geometry import Normal, Point, Vec2D, Vector, build_onb_from_normal, reflect
from raytracer.core.pcg import PCG
from raytracer.core.ray import Ray
from raytracer.materials.pigments import Pigment, UniformPigment

# =============================================================================
# Scattering Constants
# =============================================================================

# Lower bound of the interval of scattered rays
SCATTER_TMIN = 1e-3

# Default angular tolerance of the mirror BRDF (0.1 degrees)
DEFAULT_THRESHOLD_ANGLE = math.pi / 1800.0


class BRDF(ABC):
    """Base class for surface reflectance models.

    Attributes:
        pigment: Color of the surface as a function of (u, v).
    """

    def __init__(self, pigment: Pigment | None = None) -> None:
        self.pigment = pigment if pigment is not None else UniformPigment()

    @abstractmethod
    def at(self, normal: Normal, in_dir: Vector, out_dir: Vector, uv: Vec2D) -> Color:
        """Evaluate the BRDF for a pair of directions."""

    @abstractmethod
    def scatter_ray(
        self,
        pcg: PCG,
        incoming_dir: Vector,
        interaction_point: Point,
        normal: Normal,
        depth: int,
    ) -> Ray:
        """Sample an outgoing ray at a surface point."""


class DiffuseBRDF(BRDF):
    """Ideal Lambertian reflector.

    Attributes:
        pigment: Surface color.
        reflectance: Fraction of incoming light that is reflected.
    """

    def __init__(self, pigment: Pigment | None = None, reflectance: float = 1.0) -> None:
        super().__init__(pigment)
        self.reflectance = reflectance

    def at(self, normal: Normal, in_dir: Vector, out_dir: Vector, uv: Vec2D) -> Color:
        return self.pigment(uv) * (self.reflectance / math.pi)

    def scatter_ray(
        self,
        pcg: PCG,
        incoming_dir: Vector,
        interaction_point: Point,
        normal: Normal,
        depth: int,
    ) -> Ray:
        """Cosine-weighted hemisphere sample around the normal.

        Draws two uniforms in order: cos(theta) = sqrt(xi1), phi = 2*pi*xi2.
        """
        e1, e2, e3 = build_onb_from_normal(normal)
        cos_theta_sq = pcg.random_float()
        cos_theta = math.sqrt(cos_theta_sq)
        sin_theta = math.sqrt(1.0 - cos_theta_sq)
        phi = 2.0 * math.pi * pcg.random_float()

        direction = (
            e1 * (math.cos(phi) * sin_theta)
            + e2 * (math.sin(phi) * sin_theta)
            + e3 * cos_theta
        )
        return Ray(
            origin=interaction_point,
            dir=direction,
            tmin=SCATTER_TMIN,
            tmax=math.inf,
            depth=depth,
        )


class SpecularBRDF(BRDF):
    """Perfect mirror.

    Attributes:
        pigment: Tint of the reflection.
        threshold_angle_rad: Tolerance when comparing incidence and reflection
            angles in at().
    """

    def __init__(
        self,
        pigment: Pigment | None = None,
        threshold_angle_rad: float = DEFAULT_THRESHOLD_ANGLE,
    ) -> None:
        super().__init__(pigment)
        self.threshold_angle_rad = threshold_angle_rad

    def at(self, normal: Normal, in_dir: Vector, out_dir: Vector, uv: Vec2D) -> Color:
        n = normal.to_vector().normalize()
        theta_in = math.acos(_clamp(n.dot(in_dir.normalize())))
        theta_out = math.acos(_clamp(n.dot(out_dir.normalize())))
        if abs(theta_in - theta_out) < self.threshold_angle_rad:
            return self.pigment(uv)
        return BLACK

    def scatter_ray(
        self,
        pcg: PCG,
        incoming_dir: Vector,
        interaction_point: Point,
        normal: Normal,
        depth: int,
    ) -> Ray:
        direction = reflect(incoming_dir.normalize(), normal.normalize())
        return Ray(
            origin=interaction_point,
            dir=direction,
            tmin=SCATTER_TMIN,
            tmax=math.inf,
            depth=depth,
        )


def _clamp(value: float) -> float:
    return max(-1.0, min(1.0, value))
