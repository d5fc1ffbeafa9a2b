import colorsys

import numpy as np
import pytest
from photo_retoucher.processing.skin_tone import is_skin_tone, rgb_to_hsl, skin_tone_mask

from conftest import SKIN_RGB


@pytest.mark.parametrize("rgb", [
    (198, 141, 111),
    (255, 0, 0),
    (0, 255, 0),
    (12, 34, 250),
    (250, 250, 10),
    (255, 0, 255),
    (90, 60, 60),
    (200, 200, 201),
])
def test_rgb_to_hsl_matches_colorsys(rgb):
    hue, sat, light = rgb_to_hsl(np.array(rgb, dtype=np.uint8))
    h, l, s = colorsys.rgb_to_hls(*(c / 255.0 for c in rgb))
    assert hue == pytest.approx(h * 360.0, abs=1e-9)
    assert sat == pytest.approx(s, abs=1e-9)
    assert light == pytest.approx(l, abs=1e-9)


def test_rgb_to_hsl_achromatic():
    hue, sat, light = rgb_to_hsl(np.array([[0, 0, 0], [128, 128, 128], [255, 255, 255]], dtype=np.uint8))
    assert np.all(hue == 0)
    assert np.all(sat == 0)
    assert light[0] == 0.0 and light[2] == 1.0


class TestIsSkinTone:
    """Tests for the scalar skin classifier."""

    def test_typical_skin(self):
        assert is_skin_tone(*SKIN_RGB)
        assert is_skin_tone(224, 172, 105)
        assert is_skin_tone(141, 85, 36)

    @pytest.mark.parametrize("rgb", [
        (0, 0, 255),     # hue 240
        (0, 255, 0),     # hue 120
        (255, 0, 0),     # saturation 1.0
        (10, 5, 2),      # too dark
        (255, 250, 245), # too light
    ])
    def test_non_skin(self, rgb):
        assert not is_skin_tone(*rgb)

    @pytest.mark.parametrize("value", [0, 60, 128, 200, 255])
    def test_gray_is_never_skin(self, value):
        assert not is_skin_tone(value, value, value)

    def test_returns_plain_bool(self):
        assert is_skin_tone(*SKIN_RGB) is True


def test_mask_matches_scalar_classifier(noisy_rgba):
    rgb = noisy_rgba[..., :3]
    mask = skin_tone_mask(rgb)
    assert mask.shape == rgb.shape[:2]
    for y in range(0, rgb.shape[0], 7):
        for x in range(0, rgb.shape[1], 11):
            assert mask[y, x] == is_skin_tone(*(int(c) for c in rgb[y, x]))


def test_mask_on_quadrants(sample_image_rgba):
    mask = skin_tone_mask(sample_image_rgba)
    assert mask[50:, 50:].all()
    assert not mask[:50, :].any()
    assert not mask[50:, :50].any()


def test_custom_bounds():
    bounds = {
        "hue_min": 100.0, "hue_max": 140.0,
        "sat_min": 0.0, "sat_max": 1.0,
        "light_min": 0.0, "light_max": 1.0,
    }
    mask = skin_tone_mask(np.array([[0, 255, 0], list(SKIN_RGB)], dtype=np.uint8), bounds)
    assert list(mask) == [True, False]
