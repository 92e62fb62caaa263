"""Surface material: a BRDF plus an emitted-radiance pigment."""

from __future__ import annotations

from dataclasses import dataclass, field

from raytracer.core.color import BLACK
from raytracer.materials.brdf import BRDF, DiffuseBRDF
from raytracer.materials.pigments import Pigment, UniformPigment


@dataclass
class Material:
    """Material of a shape.

    Attributes:
        brdf: How the surface reflects light. White diffuse by default.
        emitted_radiance: Light emitted by the surface. Black (no emission)
            by default.
    """

    brdf: BRDF = field(default_factory=DiffuseBRDF)
    emitted_radiance: Pigment = field(default_factory=lambda: UniformPigment(BLACK))
