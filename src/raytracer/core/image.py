"""High dynamic range raster backed by a NumPy array.

Pixels are stored as linear RGB float32 in an array of shape
(height, width, 3). Row 0 is the top of the image, matching the layout
Pillow expects when the buffer is exported.

Example:
    >>> from raytracer.core.color import Color
    >>> from raytracer.core.image import HdrImage
    >>> image = HdrImage(4, 2)
    >>> image.set_pixel(3, 1, Color(1.0, 0.5, 0.25))
    >>> image.get_pixel(3, 1)
    Color(r=1.0, g=0.5, b=0.25)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from raytracer.core.color import Color


class HdrImage:
    """A width x height grid of linear RGB colors.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        pixels: The underlying float32 array of shape (height, width, 3).
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate a black image.

        Raises:
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels: npt.NDArray[np.float32] = np.zeros(
            (height, width, 3), dtype=np.float32
        )

    @classmethod
    def from_array(cls, array: npt.ArrayLike) -> HdrImage:
        """Wrap an existing (height, width, 3) array (copied as float32)."""
        data = np.asarray(array, dtype=np.float32)
        if data.ndim != 3 or data.shape[2] != 3:
            raise ValueError(f"Expected an array of shape (H, W, 3), got {data.shape}")
        image = cls(data.shape[1], data.shape[0])
        image.pixels[...] = data
        return image

    @property
    def size(self) -> tuple[int, int]:
        """(width, height)."""
        return self.width, self.height

    def valid_coordinates(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def _check(self, col: int, row: int) -> None:
        if not self.valid_coordinates(col, row):
            raise ValueError(
                f"Pixel ({col}, {row}) is outside a {self.width}x{self.height} image"
            )

    def get_pixel(self, col: int, row: int) -> Color:
        self._check(col, row)
        r, g, b = self.pixels[row, col]
        return Color(float(r), float(g), float(b))

    def set_pixel(self, col: int, row: int, color: Color) -> None:
        self._check(col, row)
        self.pixels[row, col] = (color.r, color.g, color.b)
