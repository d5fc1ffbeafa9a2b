import pytest
import numpy as np

SKIN_RGB = (198, 141, 111)


@pytest.fixture
def sample_image_rgba():
    """Returns a simple 100x100 uint8 RGBA image with four colour quadrants."""
    img = np.zeros((100, 100, 4), dtype=np.uint8)
    img[:50, :50, :3] = [255, 0, 0]    # Red quadrant
    img[:50, 50:, :3] = [0, 255, 0]    # Green quadrant
    img[50:, :50, :3] = [0, 0, 255]    # Blue quadrant
    img[50:, 50:, :3] = SKIN_RGB       # Skin quadrant
    img[..., 3] = 255
    img[0, 0, 3] = 17                  # A non-opaque pixel to catch alpha writes
    return img


@pytest.fixture
def gradient_rgba():
    """A 64x256 image: horizontal ramp 0..255 in every channel, alpha 200."""
    ramp = np.tile(np.arange(256, dtype=np.uint8), (64, 1))
    img = np.empty((64, 256, 4), dtype=np.uint8)
    img[..., 0] = ramp
    img[..., 1] = ramp
    img[..., 2] = ramp
    img[..., 3] = 200
    return img


@pytest.fixture
def noisy_rgba():
    """Seeded random 80x120 RGBA image (mixed skin and non-skin pixels)."""
    rng = np.random.default_rng(1234)
    img = rng.integers(0, 256, size=(80, 120, 4), dtype=np.uint8)
    img[..., 3] = 255
    return img


@pytest.fixture
def noisy_skin_rgba():
    """Seeded 60x60 image of skin tone plus mild noise."""
    rng = np.random.default_rng(99)
    base = np.array(SKIN_RGB, dtype=np.int16)
    noise = rng.integers(-12, 13, size=(60, 60, 3), dtype=np.int16)
    img = np.empty((60, 60, 4), dtype=np.uint8)
    img[..., :3] = np.clip(base + noise, 0, 255).astype(np.uint8)
    img[..., 3] = 255
    return img


@pytest.fixture
def mid_gray_4x4():
    """4x4 buffer of (128, 128, 128, 255)."""
    img = np.full((4, 4, 4), 128, dtype=np.uint8)
    img[..., 3] = 255
    return img
