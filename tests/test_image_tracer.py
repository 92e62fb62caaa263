"""Unit tests for the ImageTracer pixel-sampling harness."""

import numpy as np
import pytest


def _tracer(width=4, height=2, **kwargs):
    from raytracer.camera.cameras import PerspectiveCamera
    from raytracer.core.image import HdrImage
    from raytracer.render.image_tracer import ImageTracer

    image = HdrImage(width, height)
    camera = PerspectiveCamera(aspect_ratio=width / height)
    return ImageTracer(image, camera, **kwargs)


def _path_tracer():
    """Checkered floor and an emissive sphere, rendered with few samples."""
    from raytracer.core.color import Color
    from raytracer.core.transformation import translation
    from raytracer.geometry.plane import Plane
    from raytracer.geometry.sphere import Sphere
    from raytracer.materials.brdf import DiffuseBRDF
    from raytracer.materials.material import Material
    from raytracer.materials.pigments import CheckeredPigment, UniformPigment
    from raytracer.render.renderers import PathTracer
    from raytracer.scene.world import World

    world = World(
        [
            Plane(
                translation(0.0, 0.0, -1.0),
                Material(brdf=DiffuseBRDF(CheckeredPigment(steps=4))),
            ),
            Sphere(
                translation(3.0, 0.0, 0.0),
                Material(
                    brdf=DiffuseBRDF(UniformPigment(Color(0.8, 0.5, 0.2))),
                    emitted_radiance=UniformPigment(Color(0.5, 0.5, 0.5)),
                ),
            ),
        ]
    )
    return PathTracer(
        world, background_color=Color(0.2, 0.2, 0.2), n=2, max_depth=2, roulette_depth=1
    )


class TestFireRay:
    """Tests for pixel-to-ray mapping."""

    def test_pixel_offsets(self):
        """Test that offsets past the pixel edge land in the neighboring pixel."""
        tracer = _tracer()
        ray1 = tracer.fire_ray(0, 0, u_pixel=2.5, v_pixel=1.5)
        ray2 = tracer.fire_ray(2, 1)
        assert ray1.is_close(ray2)

    def test_image_corners(self):
        """Test that the top-left and bottom-right corners map to the screen corners."""
        from raytracer.core.geometry import Point

        tracer = _tracer()
        top_left = tracer.fire_ray(0, 0, u_pixel=0.0, v_pixel=0.0)
        assert top_left.at(1.0).is_close(Point(0.0, 2.0, 1.0))

        bottom_right = tracer.fire_ray(3, 1, u_pixel=1.0, v_pixel=1.0)
        assert bottom_right.at(1.0).is_close(Point(0.0, -2.0, -1.0))


class TestFireAllRays:
    """Tests for rendering whole images."""

    def test_every_pixel_is_set(self):
        """Test that the renderer output reaches every pixel."""
        from raytracer.core.color import Color

        tracer = _tracer()
        tracer.fire_all_rays(lambda ray, pcg=None: Color(1.0, 2.0, 3.0))

        for row in range(tracer.image.height):
            for col in range(tracer.image.width):
                assert tracer.image.get_pixel(col, row).is_close(Color(1.0, 2.0, 3.0))

    def test_antialiasing_stays_inside_pixel(self):
        """Test that all jittered samples of a 1x1 image fall on the screen."""
        from raytracer.camera.cameras import OrthogonalCamera
        from raytracer.core.color import BLACK
        from raytracer.core.image import HdrImage
        from raytracer.render.image_tracer import ImageTracer

        calls = []

        def renderer(ray, pcg=None):
            point = ray.at(1.0)
            assert abs(point.x) < 1e-9
            assert -1.0 <= point.y <= 1.0
            assert -1.0 <= point.z <= 1.0
            calls.append(point)
            return BLACK

        tracer = ImageTracer(HdrImage(1, 1), OrthogonalCamera(), samples_per_side=10)
        tracer.fire_all_rays(renderer)
        assert len(calls) == 100

    def test_antialiasing_is_stratified(self):
        """Test that each sub-pixel cell receives exactly one sample."""
        from raytracer.camera.cameras import OrthogonalCamera
        from raytracer.core.color import BLACK
        from raytracer.core.image import HdrImage
        from raytracer.render.image_tracer import ImageTracer

        cells = set()

        def renderer(ray, pcg=None):
            point = ray.at(1.0)
            # Orthogonal camera: y = 1 - 2u, z = 2v - 1 on a 1x1 image.
            u = (1.0 - point.y) / 2.0
            v_pixel = 1.0 - (point.z + 1.0) / 2.0
            cells.add((int(u * 4), int(v_pixel * 4)))
            return BLACK

        tracer = ImageTracer(HdrImage(1, 1), OrthogonalCamera(), samples_per_side=4)
        tracer.fire_all_rays(renderer)
        assert cells == {(i, j) for i in range(4) for j in range(4)}

    def test_antialiasing_averages(self):
        """Test that the pixel holds the mean of its samples."""
        from raytracer.camera.cameras import OrthogonalCamera
        from raytracer.core.color import BLACK, WHITE
        from raytracer.core.image import HdrImage
        from raytracer.render.image_tracer import ImageTracer

        # White on the left half of the screen, black on the right.
        def renderer(ray, pcg=None):
            return WHITE if ray.at(1.0).y > 0.0 else BLACK

        tracer = ImageTracer(HdrImage(1, 1), OrthogonalCamera(), samples_per_side=4)
        tracer.fire_all_rays(renderer)
        assert abs(tracer.image.get_pixel(0, 0).r - 0.5) < 1e-6

    def test_pixels_use_distinct_streams(self):
        """Test that neighboring pixels receive different generators."""
        tracer = _tracer()
        a = tracer.pixel_pcg(0, 0)
        b = tracer.pixel_pcg(1, 0)
        c = tracer.pixel_pcg(0, 1)
        assert len({a.random_uint32(), b.random_uint32(), c.random_uint32()}) == 3

    def test_parallel_matches_serial(self):
        """Test that a threaded path-traced render equals the serial one."""
        renderer = _path_tracer()

        serial = _tracer(8, 6, samples_per_side=2, seed=3)
        serial.fire_all_rays(renderer)

        parallel = _tracer(8, 6, samples_per_side=2, seed=3)
        parallel.fire_all_rays(renderer, workers=4)

        assert np.array_equal(serial.image.pixels, parallel.image.pixels)

    def test_seed_changes_noise(self):
        """Test that a different seed gives a different path-traced image."""
        renderer = _path_tracer()

        first = _tracer(8, 6, seed=1)
        first.fire_all_rays(renderer)
        second = _tracer(8, 6, seed=2)
        second.fire_all_rays(renderer)

        assert not np.array_equal(first.image.pixels, second.image.pixels)

    @pytest.mark.parametrize("workers", [None, 1, 3])
    def test_progress_callback(self, workers):
        """Test that the callback reports every row exactly once."""
        from raytracer.core.color import BLACK

        calls = []
        tracer = _tracer(4, 5)
        tracer.fire_all_rays(
            lambda ray, pcg=None: BLACK,
            workers=workers,
            callback=lambda done, total: calls.append((done, total)),
        )
        assert calls == [(i, 5) for i in range(1, 6)]

    def test_invalid_arguments(self):
        """Test that negative antialiasing and zero workers are rejected."""
        from raytracer.core.color import BLACK

        with pytest.raises(ValueError):
            _tracer(samples_per_side=-1)

        with pytest.raises(ValueError):
            _tracer().fire_all_rays(lambda ray, pcg=None: BLACK, workers=0)
