"""Tests for image export and preview display."""

import numpy as np
import pytest


class TestColorConversion:
    """Tests for the vectorised linear/8-bit conversions."""

    @pytest.mark.parametrize("value", [-1.0, 0.0, 0.01, 0.18, 0.5, 0.9, 1.0, 2.0])
    def test_linear_to_uint8_matches_to_display(self, value):
        """Test the array conversion agrees with Color.to_display()."""
        from fever_ray.core.color import Color
        from fever_ray.preview.export import linear_to_uint8

        image = np.full((1, 1, 3), value, dtype=np.float64)
        assert tuple(int(c) for c in linear_to_uint8(image)[0, 0]) == Color(value, value, value).to_display()

    def test_uint8_to_linear_inverts(self):
        """Test decoding then encoding is within one 8-bit step."""
        from fever_ray.preview.export import linear_to_uint8, uint8_to_linear

        buffer = np.arange(256, dtype=np.uint8).repeat(3).reshape(16, 16, 3)
        back = linear_to_uint8(uint8_to_linear(buffer))
        assert np.abs(back.astype(np.int16) - buffer.astype(np.int16)).max() <= 1


class TestPNGExport:
    """Tests for save_png and load_png."""

    def test_save_and_load(self, tmp_path):
        """Test a buffer written as PNG reads back identically."""
        from fever_ray.preview.export import load_png, save_png

        rng = np.random.default_rng(0)
        buffer = rng.integers(0, 256, size=(12, 20, 3), dtype=np.uint8)
        path = save_png(buffer, tmp_path / "image.png")

        assert path.exists()
        np.testing.assert_array_equal(load_png(path), buffer)

    def test_png_dimensions(self, tmp_path):
        """Test the PNG is width x height, not transposed."""
        from PIL import Image as PILImage

        from fever_ray.preview.export import save_png

        path = save_png(np.zeros((30, 40, 3), dtype=np.uint8), tmp_path / "size.png")
        with PILImage.open(path) as image:
            assert image.size == (40, 30)
            assert image.mode == "RGB"

    def test_rejects_float_buffer(self, tmp_path):
        """Test that linear float images must be converted first."""
        from fever_ray.preview.export import save_png

        with pytest.raises(ValueError):
            save_png(np.zeros((4, 8, 3), dtype=np.float64), tmp_path / "bad.png")

    def test_rejects_wrong_shape(self, tmp_path):
        """Test that single-channel buffers are rejected."""
        from fever_ray.preview.export import save_png

        with pytest.raises(ValueError):
            save_png(np.zeros((4, 8), dtype=np.uint8), tmp_path / "bad.png")


class TestPreviewDisplay:
    """Tests for show_preview with a non-interactive backend."""

    def test_show_preview(self, monkeypatch):
        """Test the figure shows the buffer with a default title."""
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from fever_ray.preview.display import show_preview

        shown = []
        monkeypatch.setattr(plt, "show", lambda block=True: shown.append(block))

        buffer = np.zeros((6, 8, 3), dtype=np.uint8)
        show_preview(buffer, block=False)

        assert shown == [False]
        ax = plt.gcf().axes[0]
        assert ax.get_title() == "Render Preview - 8x6"
        np.testing.assert_array_equal(ax.images[0].get_array(), buffer)
        plt.close("all")
