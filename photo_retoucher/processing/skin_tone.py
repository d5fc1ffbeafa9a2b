"""Skin-tone classification in HSL space."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from ..config import settings


def rgb_to_hsl(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Convert uint8 (or 0-255 float) RGB to HSL.

    Args:
        rgb: Array with shape (..., 3).

    Returns:
        (hue in degrees [0, 360), saturation [0, 1], lightness [0, 1]).
        Achromatic pixels (max == min) get hue 0 and saturation 0.
    """
    rgb = np.asarray(rgb, dtype=np.float64) / 255.0
    r = rgb[..., 0]
    g = rgb[..., 1]
    b = rgb[..., 2]

    maxc = np.maximum(np.maximum(r, g), b)
    minc = np.minimum(np.minimum(r, g), b)
    light = (maxc + minc) / 2.0
    delta = maxc - minc
    chroma = delta != 0

    sat = np.zeros_like(maxc)
    high = chroma & (light > 0.5)
    low = chroma & ~(light > 0.5)
    sat[high] = delta[high] / (2.0 - maxc[high] - minc[high])
    sat[low] = delta[low] / (maxc[low] + minc[low])

    hue = np.zeros_like(maxc)
    # Precedence when channels tie for max: red, then green, then blue
    r_mask = chroma & (maxc == r)
    g_mask = chroma & ~r_mask & (maxc == g)
    b_mask = chroma & ~r_mask & ~g_mask

    hue[r_mask] = (g[r_mask] - b[r_mask]) / delta[r_mask] + np.where(g[r_mask] < b[r_mask], 6.0, 0.0)
    hue[g_mask] = (b[g_mask] - r[g_mask]) / delta[g_mask] + 2.0
    hue[b_mask] = (r[b_mask] - g[b_mask]) / delta[b_mask] + 4.0
    hue = hue / 6.0 * 360.0

    return hue, sat, light


def skin_tone_mask(rgb: np.ndarray, bounds=None) -> np.ndarray:
    """
    Boolean mask of skin-coloured pixels.

    Skin when hue, saturation and lightness all fall inside the configured
    bands (inclusive); fully desaturated pixels are never skin.
    """
    b = bounds or settings.SKIN_TONE_BOUNDS
    rgb = np.asarray(rgb)
    hue, sat, light = rgb_to_hsl(rgb)
    chroma = rgb[..., :3].max(axis=-1) != rgb[..., :3].min(axis=-1)
    return (
        chroma
        & (hue >= b["hue_min"]) & (hue <= b["hue_max"])
        & (sat >= b["sat_min"]) & (sat <= b["sat_max"])
        & (light >= b["light_min"]) & (light <= b["light_max"])
    )


def is_skin_tone(r: int, g: int, b: int) -> bool:
    """Scalar form of skin_tone_mask for a single RGB triple."""
    return bool(skin_tone_mask(np.array([[r, g, b]], dtype=np.float64))[0])
