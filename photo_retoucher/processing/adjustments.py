# Tonal adjustment operations
import numpy as np

from ..utils.imaging import clamp_array, ensure_pixel_buffer, is_empty, rgb_view
from ..utils.logger import get_logger
from .parameters import check_range

logger = get_logger(__name__)

MIDPOINT = 128.0


def _rgb_float(buffer):
    return rgb_view(buffer).astype(np.float64)


class ToneAdjustments:
    """
    Per-channel tonal curves over an RGBA pixel buffer.

    Every method mutates the R, G, B planes of `buffer` in place (alpha is never
    touched), returns the same buffer, and is a no-op when its value is 0.
    """

    @staticmethod
    def adjust_brightness(buffer, value):
        """Additive shift: each channel + value * 2.55."""
        check_range("brightness", value)
        if is_empty(buffer) or value == 0: return buffer
        ensure_pixel_buffer(buffer, writable=True)
        factor = value * 2.55
        rgb_view(buffer)[...] = clamp_array(_rgb_float(buffer) + factor)
        return buffer

    @staticmethod
    def adjust_contrast(buffer, value):
        """Multiplicative shift about 128 using the classic 259/255 contrast factor."""
        check_range("contrast", value)
        if is_empty(buffer) or value == 0: return buffer
        ensure_pixel_buffer(buffer, writable=True)
        # value is bounded to [-100, 100], far from the pole at 259
        factor = (259.0 * (value + 255.0)) / (255.0 * (259.0 - value))
        rgb_view(buffer)[...] = clamp_array(factor * (_rgb_float(buffer) - MIDPOINT) + MIDPOINT)
        return buffer

    @staticmethod
    def adjust_shadows(buffer, value):
        """Lift channels below midtone; channels at or above 0.5 are left alone."""
        check_range("shadows", value)
        if is_empty(buffer) or value == 0: return buffer
        ensure_pixel_buffer(buffer, writable=True)
        rgb = rgb_view(buffer)
        v = rgb / 255.0
        amount = value / 100.0
        lift = amount * (1.0 - v * 2.0) * 0.5
        rgb[...] = np.where(v < 0.5, clamp_array((v + lift) * 255.0), rgb)
        return buffer

    @staticmethod
    def adjust_highlights(buffer, value):
        """Compress channels above midtone; channels at or below 0.5 are left alone."""
        check_range("highlights", value)
        if is_empty(buffer) or value == 0: return buffer
        ensure_pixel_buffer(buffer, writable=True)
        rgb = rgb_view(buffer)
        v = rgb / 255.0
        amount = value / 100.0
        compress = amount * (v * 2.0 - 1.0) * 0.5
        rgb[...] = np.where(v > 0.5, clamp_array((v - compress) * 255.0), rgb)
        return buffer


# Fixed order; each stage consumes the previous stage's quantized output
TONAL_STAGES = (
    ("brightness", ToneAdjustments.adjust_brightness),
    ("contrast", ToneAdjustments.adjust_contrast),
    ("shadows", ToneAdjustments.adjust_shadows),
    ("highlights", ToneAdjustments.adjust_highlights),
)


def apply_tonal_adjustments(buffer, params):
    """
    Applies brightness -> contrast -> shadows -> highlights in place,
    skipping every stage whose value is neutral.

    Returns:
        (buffer, list of stage names that ran)
    """
    executed = []
    for name, stage in TONAL_STAGES:
        value = getattr(params, name)
        if value == 0:
            continue
        stage(buffer, value)
        executed.append(name)
    if executed:
        logger.debug("Tonal stages applied: %s", ", ".join(executed))
    return buffer, executed
