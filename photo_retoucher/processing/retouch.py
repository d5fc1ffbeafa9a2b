# Blur-based retouch stages: skin smoothing and unsharp-mask sharpening
import numpy as np

from ..config import settings
from ..utils.imaging import clamp_array, ensure_pixel_buffer, is_empty, rgb_view, round_half_up
from ..utils.logger import get_logger
from .blur import blur_image
from .parameters import check_range
from .skin_tone import skin_tone_mask

logger = get_logger(__name__)


def smoothing_radius(strength):
    """Blur radius used for a smoothing strength: max(1, round(strength / 8))."""
    return max(1, round_half_up(strength / settings.SMOOTHING_DEFAULTS["radius_divisor"]))


def apply_skin_smoothing(buffer, strength):
    """
    Blend skin-tone pixels toward a blurred copy of the image, in place.

    Pixels are classified on the buffer as it is before blurring; for skin
    pixels each of R, G, B becomes clamp(orig + (blurred - orig) * strength / 100).
    Everything else is left exactly as it was.
    """
    check_range("smoothing", strength)
    if is_empty(buffer) or strength == 0: return buffer
    ensure_pixel_buffer(buffer, writable=True)

    radius = smoothing_radius(strength)
    blurred = blur_image(buffer, radius)
    mask = skin_tone_mask(rgb_view(buffer))
    if not mask.any():
        logger.debug("Skin smoothing: no skin-tone pixels found")
        return buffer

    blend = strength / 100.0
    orig = rgb_view(buffer)[mask].astype(np.float64)
    target = rgb_view(blurred)[mask].astype(np.float64)
    rgb_view(buffer)[mask] = clamp_array(orig + (target - orig) * blend)
    logger.debug(
        "Skin smoothing: strength=%s radius=%d, %d/%d pixels blended",
        strength, radius, int(mask.sum()), mask.size,
    )
    return buffer


def apply_sharpening(buffer, strength):
    """
    Unsharp mask, in place: every R, G, B channel becomes
    clamp(orig + (orig - blurred) * strength / 50), blurred at radius 1.
    """
    check_range("sharpness", strength)
    if is_empty(buffer) or strength == 0: return buffer
    ensure_pixel_buffer(buffer, writable=True)

    blurred = blur_image(buffer, settings.SMOOTHING_DEFAULTS["sharpen_radius"])
    factor = strength / settings.SMOOTHING_DEFAULTS["sharpen_divisor"]
    orig = rgb_view(buffer).astype(np.float64)
    rgb_view(buffer)[...] = clamp_array(orig + (orig - rgb_view(blurred)) * factor)
    return buffer
