import numpy as np
import pytest
from PIL import Image
from photo_retoucher.processing.histogram import BINS, compute_histogram
from photo_retoucher.ui.histogram_view import HistogramView, render_histogram, save_histogram
from photo_retoucher.utils.errors import InvalidParameterError


def test_counts_sum_to_pixel_count(noisy_rgba):
    result = compute_histogram(noisy_rgba)
    pixels = noisy_rgba.shape[0] * noisy_rgba.shape[1]
    for channel in result.channels:
        assert channel.shape == (BINS,)
        assert channel.sum() == pixels
    assert result.pixel_count == pixels


def test_alpha_ignored(sample_image_rgba):
    a = compute_histogram(sample_image_rgba)
    sample_image_rgba[..., 3] = 0
    b = compute_histogram(sample_image_rgba)
    for x, y in zip(a.channels, b.channels):
        assert np.array_equal(x, y)


def test_quadrant_counts(sample_image_rgba):
    result = compute_histogram(sample_image_rgba)
    # red: 2500 at 255 (red quadrant), 198 in skin quadrant, rest 0
    assert result.red[255] == 2500
    assert result.red[198] == 2500
    assert result.red[0] == 5000
    assert result.green[141] == 2500
    assert result.blue[111] == 2500


def test_max_excludes_clipped_buckets(sample_image_rgba):
    """0 and 255 dominate, but only buckets 1..253 set the scale."""
    result = compute_histogram(sample_image_rgba)
    assert result.max_value == 2500


def test_bucket_254_left_out_of_scale():
    img = np.full((4, 4, 4), 254, dtype=np.uint8)
    img[0, :2, :3] = 10
    result = compute_histogram(img)
    assert result.red[254] == 14
    assert result.max_value == 2


def test_all_clipped_defaults_to_one():
    img = np.zeros((3, 3, 4), dtype=np.uint8)
    img[1:, :, :3] = 255
    assert compute_histogram(img).max_value == 1


def test_custom_scale_range(sample_image_rgba):
    result = compute_histogram(sample_image_rgba, scale_range=(0, 255))
    assert result.max_value == 5000


def test_invalid_scale_range(sample_image_rgba):
    with pytest.raises(InvalidParameterError):
        compute_histogram(sample_image_rgba, scale_range=(10, 256))


def test_empty_buffer():
    result = compute_histogram(np.zeros((0, 0, 4), dtype=np.uint8))
    assert result.max_value == 1
    assert result.pixel_count == 0


def test_accepts_rgb(sample_image_rgba):
    rgb = np.ascontiguousarray(sample_image_rgba[..., :3])
    assert compute_histogram(rgb).max_value == compute_histogram(sample_image_rgba).max_value


def test_rejects_wrong_dtype():
    with pytest.raises(InvalidParameterError):
        compute_histogram(np.zeros((2, 2, 4), dtype=np.float32))


class TestHistogramView:
    """Tests for histogram rendering."""

    def test_render_size_and_mode(self, noisy_rgba):
        image = render_histogram(compute_histogram(noisy_rgba))
        assert image.mode == "RGBA"
        assert image.size == (256, 100)

    def test_empty_histogram_is_background(self):
        view = HistogramView(width=64, height=20)
        image = view.render(compute_histogram(None))
        colors = image.getcolors()
        assert colors == [(64 * 20, view.background)]

    def test_channel_fill_drawn(self, gradient_rgba):
        image = HistogramView().render(compute_histogram(gradient_rgba))
        # Uniform ramp: every bucket at the max, so the bottom row is fully covered
        bottom = image.getpixel((128, 99))
        assert bottom != HistogramView().background

    def test_save_png(self, tmp_path, noisy_rgba):
        path = tmp_path / "hist.png"
        save_histogram(compute_histogram(noisy_rgba), str(path), width=128, height=50)
        with Image.open(path) as saved:
            assert saved.format == "PNG"
            assert saved.size == (128, 50)
