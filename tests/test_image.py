# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""Tests for the image → samples adapter."""

import numpy as np
import pytest

from vibrance.engine.image import load_samples


def _gradient(height=4, width=5):
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[..., 0] = np.arange(width, dtype=np.uint8)[None, :]
    pixels[..., 1] = np.arange(height, dtype=np.uint8)[:, None]
    return pixels


class TestArrayInput:

    def test_rgb_gets_opaque_alpha(self):
        samples = load_samples(_gradient())
        assert samples.shape == (20, 4)
        assert samples.dtype == np.uint8
        assert (samples[:, 3] == 255).all()

    def test_rgba_passes_through(self):
        pixels = np.full((2, 3, 4), 7, dtype=np.uint8)
        np.testing.assert_array_equal(load_samples(pixels), np.full((6, 4), 7))

    def test_bad_shape(self):
        with pytest.raises(ValueError, match="Expected"):
            load_samples(np.zeros((4, 4), dtype=np.uint8))

    def test_bad_dtype(self):
        with pytest.raises(ValueError, match="uint8"):
            load_samples(np.zeros((4, 4, 3), dtype=np.float32))

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            load_samples(42)


class TestRegion:

    def test_crop(self):
        samples = load_samples(_gradient(), region=(1, 2, 3, 4))
        assert samples.shape == (4, 4)
        assert sorted(set(samples[:, 0].tolist())) == [1, 2]
        assert sorted(set(samples[:, 1].tolist())) == [2, 3]

    def test_region_clipped_to_image(self):
        samples = load_samples(_gradient(), region=(3, -10, 100, 100))
        assert samples.shape == (8, 4)

    def test_region_outside_image(self):
        with pytest.raises(ValueError, match="intersect"):
            load_samples(_gradient(), region=(10, 10, 20, 20))

    def test_empty_region(self):
        with pytest.raises(ValueError):
            load_samples(_gradient(), region=(2, 2, 2, 3))


class TestResize:

    def test_small_images_not_resized(self):
        samples = load_samples(_gradient(), resize_area=20)
        assert samples.shape == (20, 4)

    def test_disabled(self):
        pixels = np.zeros((200, 200, 3), dtype=np.uint8)
        assert load_samples(pixels, resize_area=0).shape == (40000, 4)

    def test_scales_to_area(self):
        pytest.importorskip("PIL")
        pixels = np.zeros((100, 100, 3), dtype=np.uint8)
        samples = load_samples(pixels, resize_area=100)
        assert 100 <= len(samples) <= 121

    def test_solid_color_survives_resize(self):
        pytest.importorskip("PIL")
        pixels = np.zeros((300, 200, 3), dtype=np.uint8)
        pixels[:] = (10, 200, 30)
        samples = load_samples(pixels)
        assert len(samples) <= 112 * 112 + 300
        diff = np.abs(samples[:, :3].astype(int) - (10, 200, 30))
        assert diff.max() <= 1


class TestPillowInput:

    def test_pil_image(self):
        Image = pytest.importorskip("PIL.Image")
        img = Image.new("RGB", (3, 2), (255, 0, 0))
        samples = load_samples(img)
        np.testing.assert_array_equal(samples, np.tile([255, 0, 0, 255], (6, 1)))

    def test_file_path(self, tmp_path):
        Image = pytest.importorskip("PIL.Image")
        path = tmp_path / "solid.png"
        Image.new("RGB", (4, 4), (0, 0, 255)).save(path)
        for source in (path, str(path)):
            samples = load_samples(source)
            assert samples.shape == (16, 4)
            assert (samples[:, 2] == 255).all()
