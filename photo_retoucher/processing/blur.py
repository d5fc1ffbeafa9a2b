# Neighborhood (low-pass) filter shared by smoothing and sharpening
import math

import cv2
import numpy as np

from ..utils.errors import InvalidParameterError
from ..utils.imaging import clamp_array, ensure_pixel_buffer, is_empty
from ..utils.logger import get_logger

logger = get_logger(__name__)


def gaussian_kernel_size(radius):
    """Odd kernel size covering +/- 3 sigma for sigma == radius."""
    return 2 * int(math.ceil(3.0 * radius)) + 1


def blur_image(buffer, radius):
    """
    Returns a blurred copy of an RGBA buffer.

    Separable Gaussian with sigma equal to `radius` pixels and replicated
    borders, so a uniform region stays uniform. R, G, B are filtered; alpha is
    copied unchanged. The source buffer is never written to.

    Args:
        buffer: uint8 array with shape (H, W, 4).
        radius: Blur radius in pixels (>= 1). Larger radius, softer result.

    Returns:
        New uint8 array with the same shape.
    """
    if radius is None or radius < 1:
        raise InvalidParameterError(f"Blur radius must be >= 1, got {radius}", parameter="radius", value=radius)
    if is_empty(buffer):
        return buffer.copy()
    ensure_pixel_buffer(buffer)

    ksize = gaussian_kernel_size(radius)
    rgb = np.ascontiguousarray(buffer[..., :3], dtype=np.float32)
    blurred_rgb = cv2.GaussianBlur(
        rgb, (ksize, ksize), sigmaX=float(radius), sigmaY=float(radius),
        borderType=cv2.BORDER_REPLICATE,
    )

    out = np.empty_like(buffer)
    out[..., :3] = clamp_array(blurred_rgb)
    out[..., 3] = buffer[..., 3]
    logger.debug("Blurred %dx%d buffer (radius=%s, kernel=%d)", buffer.shape[1], buffer.shape[0], radius, ksize)
    return out
