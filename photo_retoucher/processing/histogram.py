"""Per-channel intensity histogram used for visual feedback."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..config import settings
from ..utils.errors import InvalidParameterError
from ..utils.imaging import is_empty

BINS = 256


@dataclass(frozen=True)
class HistogramResult:
    """Counts per 8-bit value for R, G and B, plus the display scale."""
    red: np.ndarray
    green: np.ndarray
    blue: np.ndarray
    max_value: int

    @property
    def channels(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        return self.red, self.green, self.blue

    @property
    def pixel_count(self) -> int:
        return int(self.red.sum())


def _count(channel: np.ndarray) -> np.ndarray:
    return np.bincount(channel.ravel(), minlength=BINS).astype(np.int64)


def compute_histogram(
    buffer: Optional[np.ndarray],
    scale_range: Optional[Tuple[int, int]] = None,
) -> HistogramResult:
    """
    Tally R, G, B counts over a pixel buffer.

    Args:
        buffer: uint8 array with shape (H, W, 3) or (H, W, 4); alpha is ignored.
        scale_range: Inclusive bucket range searched for `max_value`. Defaults to
            settings.HISTOGRAM_SCALE_RANGE, i.e. clipped black and white are
            left out so a single clipped channel does not flatten the display.

    Returns:
        HistogramResult. `max_value` is 1 when the scale range holds no counts;
        an empty buffer yields all-zero counts.
    """
    low, high = scale_range or settings.HISTOGRAM_SCALE_RANGE
    if not 0 <= low <= high < BINS:
        raise InvalidParameterError(f"Invalid histogram scale range ({low}, {high})")

    if is_empty(buffer):
        zeros = np.zeros(BINS, dtype=np.int64)
        return HistogramResult(zeros, zeros.copy(), zeros.copy(), 1)

    if buffer.dtype != np.uint8 or buffer.ndim != 3 or buffer.shape[2] not in (3, 4):
        raise InvalidParameterError(f"Histogram expects a uint8 (H, W, 3|4) buffer, got {buffer.dtype} {buffer.shape}")

    red = _count(buffer[..., 0])
    green = _count(buffer[..., 1])
    blue = _count(buffer[..., 2])

    window = slice(low, high + 1)
    max_value = int(max(red[window].max(), green[window].max(), blue[window].max()))
    if max_value == 0:
        max_value = 1
    return HistogramResult(red, green, blue, max_value)
