"""Image export utilities for rendered images.

Supported formats:
    - PNG (8-bit sRGB via Pillow)

Example:
    >>> from raytracer.preview.export import save_png
    >>> tracer.fire_all_rays(renderer)
    >>> save_png(tracer.image, "output.png", tone_map="luminosity", exposure=0.18)
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from raytracer.core.image import HdrImage
from raytracer.preview.tonemap import ToneMapMethod, process_image


def image_to_uint8(
    image: HdrImage | npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear image to 8-bit.

    Args:
        image: HdrImage or linear array of shape (H, W, 3).
        tone_map: Tone mapping method.
        gamma: Gamma correction value (default 2.2 for sRGB).
        exposure: See raytracer.preview.tonemap.process_image.

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    pixels = image.pixels if isinstance(image, HdrImage) else image
    processed = process_image(pixels, tone_map=tone_map, gamma=gamma, exposure=exposure)
    return (processed * 255).astype(np.uint8)


def save_png(
    image: HdrImage | npt.NDArray[np.float32],
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> None:
    """Save a rendered image as an 8-bit sRGB PNG file.

    Args:
        image: HdrImage or linear array of shape (H, W, 3).
        filepath: Output file path (should end in .png).
        tone_map: Tone mapping method.
        gamma: Gamma correction value (default 2.2 for sRGB).
        exposure: See raytracer.preview.tonemap.process_image.
    """
    image_uint8 = image_to_uint8(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    PILImage.fromarray(image_uint8).save(filepath)


def load_png(filepath: str | Path, gamma: float = 2.2) -> HdrImage:
    """Load an 8-bit image as a linear HdrImage.

    Useful as the texture of an ImagePigment.

    Args:
        filepath: Path of any image format Pillow can read.
        gamma: Gamma used to decode the 8-bit values.

    Returns:
        The image with linear values in [0, 1].
    """
    with PILImage.open(filepath) as pil_image:
        data = np.asarray(pil_image.convert("RGB"), dtype=np.float32) / 255.0
    return HdrImage.from_array(np.power(data, gamma))


def compute_rmse(
    image_a: npt.NDArray[np.floating[npt.NBitBase]],
    image_b: npt.NDArray[np.floating[npt.NBitBase]],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
