"""Tests for the preview module.

This module tests the preview/tonemap and preview/export functionality including:
- Luminosity averaging and normalization
- Tone mapping functions (Reinhard, exposure)
- Gamma correction
- PNG export and import
- RMSE computation
"""

import os
import tempfile

import numpy as np
import pytest
from PIL import Image as PILImage


class TestLuminosity:
    """Test log-average luminosity and normalization."""

    def test_average_luminosity(self):
        """Test the logarithmic mean of max/min channel averages."""
        from raytracer.preview.tonemap import average_luminosity

        image = np.array(
            [[[5.0, 10.0, 15.0], [500.0, 1000.0, 1500.0]]], dtype=np.float32
        )
        # Pixel luminosities are 10 and 1000, their geometric mean is 100.
        assert abs(average_luminosity(image, delta=0.0) - 100.0) < 1e-3

    def test_average_luminosity_of_black_image(self):
        """Test that a black image stays finite thanks to the delta."""
        from raytracer.preview.tonemap import average_luminosity

        image = np.zeros((4, 4, 3), dtype=np.float32)
        value = average_luminosity(image)
        assert np.isfinite(value)
        assert abs(value - 1e-10) < 1e-12

    def test_normalize_luminosity(self):
        """Test scaling by factor / luminosity."""
        from raytracer.preview.tonemap import normalize_luminosity

        image = np.array(
            [[[5.0, 10.0, 15.0], [500.0, 1000.0, 1500.0]]], dtype=np.float32
        )
        result = normalize_luminosity(image, factor=1000.0, luminosity=100.0)

        assert np.allclose(result[0, 0], [50.0, 100.0, 150.0])
        assert np.allclose(result[0, 1], [5000.0, 10000.0, 15000.0])

    def test_normalize_luminosity_computes_average(self):
        """Test that the average is computed when not given."""
        from raytracer.preview.tonemap import normalize_luminosity

        image = np.full((3, 3, 3), 2.0, dtype=np.float32)
        result = normalize_luminosity(image, factor=0.18)
        assert np.allclose(result, 0.18, atol=1e-6)


class TestToneMapReinhard:
    """Test Reinhard tone mapping."""

    def test_reinhard_preserves_black(self):
        """Test that Reinhard preserves black (0 -> 0)."""
        from raytracer.preview.tonemap import tone_map_reinhard

        image = np.zeros((10, 10, 3), dtype=np.float32)
        result = tone_map_reinhard(image)

        assert np.allclose(result, 0.0)

    def test_reinhard_formula(self):
        """Test Reinhard formula: L / (1 + L)."""
        from raytracer.preview.tonemap import tone_map_reinhard

        for val in [0.0, 0.5, 1.0, 2.0, 10.0]:
            image = np.full((2, 2, 3), val, dtype=np.float32)
            result = tone_map_reinhard(image)
            assert np.allclose(result, val / (1.0 + val), atol=1e-6)

    def test_reinhard_output_in_01_range(self):
        """Test that Reinhard output stays in [0, 1] for bright and negative input."""
        from raytracer.preview.tonemap import tone_map_reinhard

        result = tone_map_reinhard(np.full((10, 10, 3), 1000.0, dtype=np.float32))
        assert np.all(result >= 0.0)
        assert np.all(result <= 1.0)

        result = tone_map_reinhard(np.full((10, 10, 3), -1.0, dtype=np.float32))
        assert np.all(result >= 0.0)


class TestToneMapExposure:
    """Test exposure-based tone mapping."""

    def test_exposure_preserves_black(self):
        """Test that exposure mapping preserves black."""
        from raytracer.preview.tonemap import tone_map_exposure

        image = np.zeros((10, 10, 3), dtype=np.float32)
        assert np.allclose(tone_map_exposure(image, exposure=1.0), 0.0)

    def test_exposure_higher_value_brighter(self):
        """Test that higher exposure produces brighter output."""
        from raytracer.preview.tonemap import tone_map_exposure

        image = np.full((10, 10, 3), 0.5, dtype=np.float32)
        low = tone_map_exposure(image, exposure=0.5)
        high = tone_map_exposure(image, exposure=2.0)

        assert np.mean(high) > np.mean(low)

    def test_exposure_formula(self):
        """Test exposure formula: 1 - exp(-L * exposure)."""
        from raytracer.preview.tonemap import tone_map_exposure

        for val, exposure in [(0.5, 1.0), (1.0, 2.0), (3.0, 0.5)]:
            image = np.full((2, 2, 3), val, dtype=np.float32)
            result = tone_map_exposure(image, exposure=exposure)
            assert np.allclose(result, 1.0 - np.exp(-val * exposure), atol=1e-6)


class TestApplyGamma:
    """Test gamma correction."""

    def test_gamma_1_no_change(self):
        """Test that gamma=1 returns the input unchanged."""
        from raytracer.preview.tonemap import apply_gamma

        image = np.random.default_rng(0).random((10, 10, 3)).astype(np.float32)
        assert np.allclose(apply_gamma(image, gamma=1.0), image)

    def test_gamma_brightens_midtones(self):
        """Test that gamma > 1 brightens mid-tones."""
        from raytracer.preview.tonemap import apply_gamma

        image = np.full((10, 10, 3), 0.5, dtype=np.float32)
        result = apply_gamma(image, gamma=2.2)

        assert np.allclose(result, 0.5 ** (1.0 / 2.2), atol=1e-6)
        assert np.all(result > image)

    def test_gamma_preserves_black_and_white(self):
        """Test that 0 and 1 are fixed points."""
        from raytracer.preview.tonemap import apply_gamma

        assert np.allclose(apply_gamma(np.zeros((2, 2, 3), dtype=np.float32)), 0.0)
        assert np.allclose(apply_gamma(np.ones((2, 2, 3), dtype=np.float32)), 1.0)

    def test_gamma_clamps_negative(self):
        """Test that negative values do not produce NaN."""
        from raytracer.preview.tonemap import apply_gamma

        result = apply_gamma(np.full((2, 2, 3), -0.5, dtype=np.float32), gamma=2.2)
        assert not np.any(np.isnan(result))
        assert np.all(result >= 0.0)

    def test_gamma_must_be_positive(self):
        """Test that a non-positive gamma is rejected."""
        from raytracer.preview.tonemap import apply_gamma

        with pytest.raises(ValueError):
            apply_gamma(np.zeros((2, 2, 3), dtype=np.float32), gamma=0.0)


class TestProcessImage:
    """Test the complete processing pipeline."""

    def test_process_with_no_tone_map(self):
        """Test that "none" only clamps."""
        from raytracer.preview.tonemap import process_image

        image = np.full((4, 4, 3), 0.25, dtype=np.float32)
        image[0, 0] = [5.0, 5.0, 5.0]
        result = process_image(image, tone_map="none", gamma=1.0)

        assert np.allclose(result[1, 1], 0.25)
        assert np.allclose(result[0, 0], 1.0)

    def test_process_with_luminosity(self):
        """Test that a uniform image maps to Reinhard of the target luminosity."""
        from raytracer.preview.tonemap import process_image

        image = np.full((4, 4, 3), 7.0, dtype=np.float32)
        result = process_image(image, tone_map="luminosity", gamma=1.0, exposure=0.18)
        assert np.allclose(result, 0.18 / 1.18, atol=1e-5)

    @pytest.mark.parametrize("tone_map", ["none", "reinhard", "exposure", "luminosity"])
    def test_process_output_always_valid(self, tone_map):
        """Test that output is always in [0, 1] without NaN."""
        from raytracer.preview.tonemap import process_image

        image = np.random.default_rng(1).random((8, 8, 3)).astype(np.float32) * 100.0
        result = process_image(image, tone_map=tone_map, gamma=2.2)

        assert result.dtype == np.float32
        assert not np.any(np.isnan(result))
        assert np.all(result >= 0.0)
        assert np.all(result <= 1.0)

    def test_process_does_not_modify_input(self):
        """Test that the caller's array is left untouched."""
        from raytracer.preview.tonemap import process_image

        image = np.full((2, 2, 3), 3.0, dtype=np.float32)
        process_image(image, tone_map="reinhard")
        assert np.all(image == 3.0)

    def test_process_invalid_tone_map_raises(self):
        """Test that an unknown method raises ValueError."""
        from raytracer.preview.tonemap import process_image

        with pytest.raises(ValueError, match="Unknown tone mapping"):
            process_image(np.zeros((2, 2, 3), dtype=np.float32), tone_map="filmic")


class TestImageToUint8:
    """Test conversion to uint8."""

    def test_image_to_uint8_output_type(self):
        """Test dtype and shape of the output."""
        from raytracer.core.image import HdrImage
        from raytracer.preview.export import image_to_uint8

        result = image_to_uint8(HdrImage(5, 3))
        assert result.dtype == np.uint8
        assert result.shape == (3, 5, 3)

    def test_image_to_uint8_black_and_white(self):
        """Test that 0 and 1 map to 0 and 255."""
        from raytracer.preview.export import image_to_uint8

        image = np.zeros((2, 2, 3), dtype=np.float32)
        image[1, 1] = [1.0, 1.0, 1.0]
        result = image_to_uint8(image)

        assert np.all(result[0, 0] == 0)
        assert np.all(result[1, 1] == 255)


class TestSavePng:
    """Test PNG export and import."""

    def test_save_png_creates_file(self):
        """Test that save_png writes an RGB file of the right size."""
        from raytracer.core.color import Color
        from raytracer.core.image import HdrImage
        from raytracer.preview.export import save_png

        image = HdrImage(32, 16)
        image.set_pixel(3, 4, Color(0.5, 0.25, 1.0))

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            filepath = f.name

        try:
            save_png(image, filepath, gamma=2.2)

            assert os.path.exists(filepath)
            img = PILImage.open(filepath)
            assert img.size == (32, 16)  # PIL size is (width, height)
            assert img.mode == "RGB"
        finally:
            if os.path.exists(filepath):
                os.remove(filepath)

    @pytest.mark.parametrize("tone_map", ["none", "reinhard", "exposure", "luminosity"])
    def test_save_png_with_tone_mapping(self, tone_map):
        """Test PNG export with every tone mapping method."""
        from raytracer.preview.export import save_png

        image = np.zeros((8, 16, 3), dtype=np.float32)
        image[:, :, 0] = np.linspace(0.0, 4.0, 16)

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            filepath = f.name

        try:
            save_png(image, filepath, tone_map=tone_map)
            assert PILImage.open(filepath).size == (16, 8)
        finally:
            if os.path.exists(filepath):
                os.remove(filepath)

    def test_load_png_returns_linear_values(self):
        """Test that loading undoes the gamma encoding up to 8-bit quantization."""
        from raytracer.core.color import Color
        from raytracer.core.image import HdrImage
        from raytracer.preview.export import load_png, save_png

        image = HdrImage(2, 1)
        image.set_pixel(0, 0, Color(0.0, 0.2, 1.0))
        image.set_pixel(1, 0, Color(0.5, 0.8, 0.05))

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            filepath = f.name

        try:
            save_png(image, filepath, gamma=2.2)
            loaded = load_png(filepath, gamma=2.2)
        finally:
            if os.path.exists(filepath):
                os.remove(filepath)

        assert loaded.size == (2, 1)
        assert np.allclose(loaded.pixels, image.pixels, atol=0.02)


class TestComputeRmse:
    """Test RMSE computation."""

    def test_rmse_identical_images(self):
        """Test that identical images have zero RMSE."""
        from raytracer.preview.export import compute_rmse

        image = np.random.default_rng(2).random((10, 10, 3)).astype(np.float32)
        assert compute_rmse(image, image) == 0.0

    def test_rmse_different_images(self):
        """Test RMSE of constant images."""
        from raytracer.preview.export import compute_rmse

        a = np.zeros((10, 10, 3), dtype=np.float32)
        b = np.full((10, 10, 3), 0.5, dtype=np.float32)
        assert abs(compute_rmse(a, b) - 0.5) < 1e-6

    def test_rmse_shape_mismatch_raises(self):
        """Test that mismatched shapes raise ValueError."""
        from raytracer.preview.export import compute_rmse

        with pytest.raises(ValueError, match="shapes must match"):
            compute_rmse(np.zeros((10, 10, 3)), np.zeros((5, 5, 3)))


class TestModuleExports:
    """Test that the package exposes the public functions."""

    def test_preview_exports(self):
        """Test the preview package namespace."""
        from raytracer import preview

        for name in ("process_image", "save_png", "load_png", "compute_rmse", "ToneMapMethod"):
            assert hasattr(preview, name)
