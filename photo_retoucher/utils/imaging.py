import math

import numpy as np

from .errors import InvalidParameterError

CHANNELS = 4  # R, G, B, A


def clamp(value):
    """
    Rounds a channel value to the nearest integer and saturates it to [0, 255].

    Halves round up (127.5 -> 128, -0.5 -> 0).
    """
    return max(0, min(255, int(math.floor(value + 0.5))))


def clamp_array(values):
    """
    Vectorized clamp: round half up, saturate to [0, 255] and return uint8.

    Args:
        values: NumPy array of any real dtype.

    Returns:
        uint8 NumPy array with the same shape.
    """
    rounded = np.floor(np.asarray(values, dtype=np.float64) + 0.5)
    return np.clip(rounded, 0, 255).astype(np.uint8)


def round_half_up(value):
    """Integer rounding used for radii and scaled dimensions."""
    return int(math.floor(value + 0.5))


def as_pixel_buffer(data, width, height):
    """
    Wraps a flat RGBA byte sequence as a (height, width, 4) uint8 buffer.

    The returned array shares memory with `data` when possible (bytearray,
    memoryview or uint8 ndarray), so in-place stages write straight back.
    """
    width = int(width)
    height = int(height)
    if width < 0 or height < 0:
        raise InvalidParameterError(f"Invalid buffer dimensions {width}x{height}")
    if isinstance(data, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(data, dtype=np.uint8) if len(data) else np.zeros(0, dtype=np.uint8)
    else:
        flat = np.asarray(data, dtype=np.uint8).ravel()
    expected = width * height * CHANNELS
    if flat.size != expected:
        raise InvalidParameterError(
            f"Buffer length {flat.size} does not match {width}x{height}x{CHANNELS}={expected}"
        )
    return flat.reshape(height, width, CHANNELS)


def ensure_pixel_buffer(buffer, writable=False):
    """Validates that `buffer` is a (H, W, 4) uint8 array and returns it."""
    if not isinstance(buffer, np.ndarray):
        raise InvalidParameterError(f"Pixel buffer must be a NumPy array, got {type(buffer).__name__}")
    if buffer.dtype != np.uint8:
        raise InvalidParameterError(f"Pixel buffer must be uint8, got {buffer.dtype}")
    if buffer.ndim != 3 or buffer.shape[2] != CHANNELS:
        raise InvalidParameterError(f"Pixel buffer must have shape (H, W, 4), got {buffer.shape}")
    if writable and not buffer.flags.writeable:
        raise InvalidParameterError("Pixel buffer is read-only; pass a writable copy")
    return buffer


def is_empty(buffer):
    """True for zero-dimension buffers; stages treat these as no-ops."""
    return buffer is None or buffer.size == 0


def rgb_view(buffer):
    """The R, G, B planes of an RGBA buffer (a view, alpha excluded)."""
    return buffer[..., :3]


def rgba_from_rgb(image_rgb, alpha=255):
    """Adds an opaque (or constant) alpha plane to a uint8 RGB image."""
    h, w = image_rgb.shape[:2]
    out = np.empty((h, w, CHANNELS), dtype=np.uint8)
    out[..., :3] = image_rgb
    out[..., 3] = alpha
    return out
