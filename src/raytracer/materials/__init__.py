"""Materials: what a surface looks like.

Components:
    pigments: Uniform, checkered and image color fields over (u, v)
    brdf: Diffuse (Lambertian) and specular (mirror) reflection
    material: BRDF plus emitted radiance
"""

from .brdf import BRDF, DiffuseBRDF, SpecularBRDF
from .material import Material
from .pigments import CheckeredPigment, ImagePigment, Pigment, UniformPigment

__all__ = [
    "Pigment",
    "UniformPigment",
    "CheckeredPigment",
    "ImagePigment",
    "BRDF",
    "DiffuseBRDF",
    "SpecularBRDF",
    "Material",
]
