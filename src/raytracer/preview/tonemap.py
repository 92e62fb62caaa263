"""Tone mapping and gamma correction for HDR renders.

Rendered images hold unbounded linear radiance. Before they can be stored
as 8-bit sRGB they go through:

    1. Tone mapping (optional): compress the dynamic range into [0, 1]
    2. Gamma correction: encode linear values for sRGB displays
    3. Clamping to [0, 1]

Available tone mapping methods:
    - "none": values are only clamped
    - "reinhard": c / (1 + c)
    - "exposure": 1 - exp(-c * exposure)
    - "luminosity": scale so that the log-average luminosity maps to
      ``exposure``, then apply Reinhard

Example:
    >>> from raytracer.preview.tonemap import process_image
    >>> display = process_image(image.pixels, tone_map="luminosity", exposure=0.18)
"""

from __future__ import annotations

from typing import Literal

import numpy as np
import numpy.typing as npt

# Type alias for tone mapping options
ToneMapMethod = Literal["none", "reinhard", "exposure", "luminosity"]

# Guards log() against black pixels
LUMINOSITY_DELTA = 1e-10


def average_luminosity(
    image: npt.NDArray[np.float32],
    delta: float = LUMINOSITY_DELTA,
) -> float:
    """Logarithmic mean of per-pixel luminosity.

    Pixel luminosity is the mean of its brightest and darkest channel.

    Args:
        image: Linear HDR image array of shape (H, W, 3).
        delta: Added to every luminosity before taking the logarithm.

    Returns:
        The log-average luminosity.
    """
    lum = (image.max(axis=2) + image.min(axis=2)).astype(np.float64) / 2.0
    return float(10.0 ** np.mean(np.log10(delta + lum)))


def normalize_luminosity(
    image: npt.NDArray[np.float32],
    factor: float = 0.18,
    luminosity: float | None = None,
) -> npt.NDArray[np.float32]:
    """Scale the image so that its average luminosity becomes ``factor``.

    Args:
        image: Linear HDR image array of shape (H, W, 3).
        factor: Target average luminosity (0.18 is middle grey).
        luminosity: Precomputed average luminosity. Computed when omitted.

    Returns:
        The scaled image.
    """
    if luminosity is None:
        luminosity = average_luminosity(image)
    return (image * (factor / luminosity)).astype(np.float32)


def tone_map_reinhard(
    image: npt.NDArray[np.float32],
) -> npt.NDArray[np.float32]:
    """Apply Reinhard tone mapping: L / (1 + L).

    Args:
        image: Linear HDR image array of shape (H, W, 3).

    Returns:
        Tone mapped image in [0, 1) range.
    """
    image = np.maximum(image, 0.0)
    return (image / (1.0 + image)).astype(np.float32)


def tone_map_exposure(
    image: npt.NDArray[np.float32],
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Apply exposure-based tone mapping: 1 - exp(-c * exposure).

    Args:
        image: Linear HDR image array of shape (H, W, 3).
        exposure: Higher values brighten the image.

    Returns:
        Tone mapped image in [0, 1) range.
    """
    image = np.maximum(image, 0.0)
    return (1.0 - np.exp(-image * exposure)).astype(np.float32)


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 2.2,
) -> npt.NDArray[np.float32]:
    """Encode linear values as out = in^(1/gamma).

    Args:
        image: Linear image array in [0, 1] range.
        gamma: Gamma value (default 2.2 for sRGB).

    Returns:
        Gamma corrected image.

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"gamma must be positive, got {gamma}")
    if gamma == 1.0:
        return image

    # Clamp first: negative values would give NaN
    image = np.clip(image, 0.0, 1.0)
    return np.power(image, 1.0 / gamma).astype(np.float32)


def process_image(
    image: npt.NDArray[np.float32],
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Run the full tone mapping, gamma and clamping pipeline.

    Args:
        image: Linear HDR image array of shape (H, W, 3).
        tone_map: Tone mapping method.
        gamma: Gamma correction value.
        exposure: Exposure for "exposure", target average luminosity for
            "luminosity". Ignored otherwise.

    Returns:
        Image in [0, 1] range.

    Raises:
        ValueError: If the tone mapping method is unknown.
    """
    result = image.astype(np.float32, copy=True)

    if tone_map == "reinhard":
        result = tone_map_reinhard(result)
    elif tone_map == "exposure":
        result = tone_map_exposure(result, exposure)
    elif tone_map == "luminosity":
        result = tone_map_reinhard(normalize_luminosity(result, exposure))
    elif tone_map != "none":
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    result = apply_gamma(result, gamma)
    return np.clip(result, 0.0, 1.0).astype(np.float32)
