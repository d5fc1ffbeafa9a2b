import numpy as np
import pytest
from photo_retoucher.processing.blur import blur_image, gaussian_kernel_size
from photo_retoucher.utils.errors import InvalidParameterError


def test_kernel_size_is_odd_and_covers_three_sigma():
    assert gaussian_kernel_size(1) == 7
    assert gaussian_kernel_size(2) == 13
    assert gaussian_kernel_size(13) == 79


def test_uniform_region_stays_uniform(mid_gray_4x4):
    out = blur_image(mid_gray_4x4, 3)
    assert np.array_equal(out, mid_gray_4x4)


def test_does_not_modify_source(noisy_rgba):
    original = noisy_rgba.copy()
    out = blur_image(noisy_rgba, 2)
    assert out is not noisy_rgba
    assert np.array_equal(noisy_rgba, original)


def test_alpha_copied_unchanged(noisy_rgba):
    noisy_rgba[..., 3] = np.arange(noisy_rgba.shape[1], dtype=np.uint8)[None, :]
    out = blur_image(noisy_rgba, 2)
    assert np.array_equal(out[..., 3], noisy_rgba[..., 3])


def test_reduces_variance(noisy_rgba):
    out = blur_image(noisy_rgba, 2)
    assert out[..., :3].astype(float).std() < noisy_rgba[..., :3].astype(float).std() / 2


def test_larger_radius_is_softer(noisy_rgba):
    soft = blur_image(noisy_rgba, 1)[..., :3].astype(float).std()
    softer = blur_image(noisy_rgba, 4)[..., :3].astype(float).std()
    assert softer < soft


def test_keeps_shape_and_dtype(noisy_rgba):
    out = blur_image(noisy_rgba, 1)
    assert out.shape == noisy_rgba.shape
    assert out.dtype == np.uint8


def test_deterministic(noisy_rgba):
    assert np.array_equal(blur_image(noisy_rgba, 3), blur_image(noisy_rgba, 3))


def test_single_pixel_buffer():
    px = np.array([[[10, 20, 30, 40]]], dtype=np.uint8)
    assert np.array_equal(blur_image(px, 5), px)


def test_empty_buffer():
    out = blur_image(np.zeros((0, 0, 4), dtype=np.uint8), 2)
    assert out.size == 0


@pytest.mark.parametrize("radius", [0, -1, 0.5])
def test_rejects_small_radius(radius, noisy_rgba):
    with pytest.raises(InvalidParameterError):
        blur_image(noisy_rgba, radius)
