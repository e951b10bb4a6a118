"""Tests for the parallel pixel dispatcher.

Tests cover:
- Buffer shape, dtype and pixel layout
- Determinism across worker counts and band sizes
- Progress callbacks
- Argument validation and fail-fast aspect checks
"""

import numpy as np
import pytest


class TestRender:
    """Tests for render()."""

    def test_buffer_shape_and_dtype(self, small_demo_config):
        """Test the buffer is (height, width, 3) uint8."""
        from fever_ray.core.dispatcher import render

        buffer = render(small_demo_config, workers=1)
        assert buffer.shape == (32, 48, 3)
        assert buffer.dtype == np.uint8

    def test_buffer_matches_render_pixel(self, small_demo_config):
        """Test buffer[y, x] holds the color of pixel (x, y)."""
        from fever_ray.core.dispatcher import render, render_pixel

        buffer = render(small_demo_config, workers=2)
        for x, y in [(0, 0), (47, 0), (0, 31), (24, 16), (30, 25)]:
            assert tuple(buffer[y, x]) == render_pixel(small_demo_config, x, y)

    def test_threaded_equals_serial(self, small_demo_config):
        """Test the result does not depend on scheduling."""
        from fever_ray.core.dispatcher import render

        serial = render(small_demo_config, workers=1)
        threaded = render(small_demo_config, workers=4, band_height=3)
        np.testing.assert_array_equal(serial, threaded)

    def test_band_height_larger_than_image(self, small_demo_config):
        """Test a single band covering the whole image."""
        from fever_ray.core.dispatcher import render

        whole = render(small_demo_config, workers=2, band_height=1000)
        banded = render(small_demo_config, workers=2, band_height=5)
        np.testing.assert_array_equal(whole, banded)

    def test_image_is_not_uniform(self, small_demo_config):
        """Test the demo scene shows more than the sky color."""
        from fever_ray.core.dispatcher import render

        buffer = render(small_demo_config)
        assert len(np.unique(buffer.reshape(-1, 3), axis=0)) > 1

    def test_callback_reports_progress(self, small_demo_config):
        """Test the callback sees increasing row counts ending at the height."""
        from fever_ray.core.dispatcher import render

        calls = []
        render(small_demo_config, workers=3, band_height=4, callback=lambda done, total: calls.append((done, total)))

        assert len(calls) == 8
        assert all(total == 32 for _, total in calls)
        done = [d for d, _ in calls]
        assert done == sorted(done)
        assert done[-1] == 32

    def test_invalid_workers_raises(self, small_demo_config):
        """Test a non-positive worker count is rejected."""
        from fever_ray.core.dispatcher import render

        with pytest.raises(ValueError):
            render(small_demo_config, workers=0)

    def test_invalid_band_height_raises(self, small_demo_config):
        """Test a non-positive band height is rejected."""
        from fever_ray.core.dispatcher import render

        with pytest.raises(ValueError):
            render(small_demo_config, workers=1, band_height=0)

    def test_invalid_aspect_fails_before_rendering(self):
        """Test a non-landscape config fails before any pixel is shaded."""
        from fever_ray.core.dispatcher import render
        from fever_ray.errors import InvalidAspectRatio
        from fever_ray.scene.presets import create_demo_config

        calls = []
        config = create_demo_config(width=32, height=32)
        with pytest.raises(InvalidAspectRatio):
            render(config, callback=lambda done, total: calls.append(done))
        assert calls == []
