"""Pixel-sampling harness: fires camera rays through every pixel.

The ImageTracer ties an HdrImage, a Camera and a Renderer together. For each
pixel it fires one ray through the pixel center or, with antialiasing
enabled, ``samples_per_side ** 2`` jittered rays on a stratified grid, and
stores the mean color.

Every pixel draws from its own PCG stream, seeded with the tracer's seed and
the pixel index ``row * width + col``. Pixels therefore never share mutable
generator state, and the image is the same whether rows are rendered in
order or spread over a thread pool.

Example:
    >>> from raytracer.camera.cameras import PerspectiveCamera
    >>> from raytracer.core.image import HdrImage
    >>> from raytracer.render.image_tracer import ImageTracer
    >>> from raytracer.render.renderers import OnOffRenderer
    >>> from raytracer.scene.world import World
    >>>
    >>> tracer = ImageTracer(HdrImage(64, 48), PerspectiveCamera(aspect_ratio=4 / 3))
    >>> tracer.fire_all_rays(OnOffRenderer(World()), workers=4)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed

from raytracer.camera.cameras import Camera
from raytracer.core.color import BLACK, Color
from raytracer.core.image import HdrImage
from raytracer.core.pcg import DEFAULT_INIT_STATE, PCG
from raytracer.core.ray import Ray
from raytracer.render.renderers import Renderer

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


class ImageTracer:
    """Renders an image by sampling each of its pixels.

    Attributes:
        image: Output raster, filled in place.
        camera: Camera generating the primary rays.
        samples_per_side: Antialiasing grid size. 0 fires a single ray
            through each pixel center.
        seed: init_state of every per-pixel generator.
    """

    def __init__(
        self,
        image: HdrImage,
        camera: Camera,
        samples_per_side: int = 0,
        seed: int = DEFAULT_INIT_STATE,
    ) -> None:
        if samples_per_side < 0:
            raise ValueError(
                f"samples_per_side must be non-negative, got {samples_per_side}"
            )
        self.image = image
        self.camera = camera
        self.samples_per_side = samples_per_side
        self.seed = seed

    def fire_ray(
        self, col: int, row: int, u_pixel: float = 0.5, v_pixel: float = 0.5
    ) -> Ray:
        """Fire a ray through a point of pixel (col, row).

        Args:
            col: Pixel column, 0 on the left.
            row: Pixel row, 0 at the top.
            u_pixel: Horizontal offset inside the pixel, in pixel units.
            v_pixel: Vertical offset inside the pixel, in pixel units,
                growing downwards.

        Returns:
            The camera ray through screen point
            ((col + u_pixel) / width, 1 - (row + v_pixel) / height).
        """
        u = (col + u_pixel) / self.image.width
        v = 1.0 - (row + v_pixel) / self.image.height
        return self.camera.fire_ray(u, v)

    def pixel_pcg(self, col: int, row: int) -> PCG:
        """Generator dedicated to one pixel."""
        return PCG(init_state=self.seed, init_seq=row * self.image.width + col)

    def render_pixel(self, col: int, row: int, renderer: Renderer) -> Color:
        """Compute the color of one pixel without touching the image."""
        pcg = self.pixel_pcg(col, row)
        if self.samples_per_side == 0:
            return renderer(self.fire_ray(col, row), pcg)

        n = self.samples_per_side
        total = BLACK
        for inner_row in range(n):
            for inner_col in range(n):
                u_pixel = (inner_col + pcg.random_float()) / n
                v_pixel = (inner_row + pcg.random_float()) / n
                ray = self.fire_ray(col, row, u_pixel, v_pixel)
                total = total + renderer(ray, pcg)
        return total / (n * n)

    def _render_row(self, row: int, renderer: Renderer) -> int:
        for col in range(self.image.width):
            self.image.set_pixel(col, row, self.render_pixel(col, row, renderer))
        return row

    def fire_all_rays(
        self,
        renderer: Renderer,
        workers: int | None = None,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Render every pixel into the image.

        Args:
            renderer: Called as renderer(ray, pcg) for every sample.
            workers: Number of threads rendering rows concurrently. None or 1
                renders serially. Renderers are pure Python and hold the GIL,
                so on standard CPython threads keep the output identical but
                give little speedup; they pay off with renderers that release
                the GIL or on free-threaded builds.
            callback: Optional callback invoked after each completed row.
                Receives (rows_done, total_rows).

        Example:
            >>> def progress(done, total):
            ...     print(f"Progress: {done}/{total} rows")
            >>> tracer.fire_all_rays(renderer, workers=8, callback=progress)
        """
        if workers is not None and workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")

        height = self.image.height
        logger.info(
            "Rendering %dx%d image (samples_per_side=%d, workers=%s)",
            self.image.width,
            height,
            self.samples_per_side,
            workers or 1,
        )
        start = time.perf_counter()

        if workers is None or workers == 1:
            for row in range(height):
                self._render_row(row, renderer)
                if callback is not None:
                    callback(row + 1, height)
        else:
            # Rows are disjoint slices of the image, so threads never write
            # the same pixel.
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [
                    executor.submit(self._render_row, row, renderer)
                    for row in range(height)
                ]
                for done, future in enumerate(as_completed(futures), start=1):
                    future.result()
                    if callback is not None:
                        callback(done, height)

        logger.debug("Render finished in %.2f s", time.perf_counter() - start)
