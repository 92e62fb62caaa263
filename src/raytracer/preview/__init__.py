"""Output utilities.

Components:
    tonemap: Tone mapping (Reinhard, exposure, luminosity) and gamma
    export: PNG export and import via Pillow

Example:
    >>> from raytracer.preview import save_png
    >>> save_png(tracer.image, "output.png", tone_map="luminosity", exposure=0.18)
"""

from .export import compute_rmse, image_to_uint8, load_png, save_png
from .tonemap import (
    ToneMapMethod,
    apply_gamma,
    average_luminosity,
    normalize_luminosity,
    process_image,
    tone_map_exposure,
    tone_map_reinhard,
)

__all__ = [
    "ToneMapMethod",
    "average_luminosity",
    "normalize_luminosity",
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image",
    "image_to_uint8",
    "save_png",
    "load_png",
    "compute_rmse",
]
