# Working-resolution management for preview and export
"""
Provides downscaled working buffers for the retouch pipeline.

The same pipeline runs on two separately sized buffers built from the
decoded source image:
- preview: long edge capped at settings.PREVIEW_MAX_EDGE (1200 px)
- export:  long edge capped at settings.EXPORT_MAX_EDGE (2048 px)

Images are never upscaled; aspect ratio is preserved.
"""

import numpy as np
import cv2
from typing import Tuple
from dataclasses import dataclass

from ..config import settings
from .imaging import round_half_up
from .logger import get_logger

logger = get_logger(__name__)


@dataclass
class ImageProxyInfo:
    """Information about a working buffer derived from a source image."""
    original_size: Tuple[int, int]  # (width, height)
    proxy_size: Tuple[int, int]     # (width, height)
    scale_factor: float
    is_proxy: bool

    @property
    def original_megapixels(self) -> float:
        """Original image size in megapixels."""
        return (self.original_size[0] * self.original_size[1]) / 1_000_000

    @property
    def proxy_megapixels(self) -> float:
        """Working buffer size in megapixels."""
        return (self.proxy_size[0] * self.proxy_size[1]) / 1_000_000


def calculate_scale_factor(width: int, height: int, max_edge: int) -> float:
    """
    Scale factor needed to fit the long edge within max_edge.

    Returns:
        1.0 if no scaling is needed, < 1.0 for downscaling.
    """
    if width <= max_edge and height <= max_edge:
        return 1.0
    return min(max_edge / width, max_edge / height)


def fit_within(width: int, height: int, max_edge: int) -> Tuple[int, int]:
    """
    Target (width, height) for a long-edge cap; each side is rounded half up
    and kept at least 1 px.
    """
    scale = calculate_scale_factor(width, height, max_edge)
    if scale >= 1.0:
        return width, height
    return max(1, round_half_up(width * scale)), max(1, round_half_up(height * scale))


def create_proxy(
    image: np.ndarray,
    max_edge: int,
    interpolation: int = cv2.INTER_AREA,
) -> Tuple[np.ndarray, ImageProxyInfo]:
    """
    Create a working copy of an image capped to max_edge on its long side.

    The result is always a fresh, writable array, so the source image is
    never shared with a pipeline run.

    Args:
        image: Source image (uint8, (H, W, C)).
        max_edge: Long edge cap in pixels.
        interpolation: OpenCV interpolation method.

    Returns:
        Tuple of (working_buffer, proxy_info).
    """
    if image is None or image.size == 0:
        info = ImageProxyInfo(original_size=(0, 0), proxy_size=(0, 0), scale_factor=1.0, is_proxy=False)
        return (image.copy() if image is not None else None), info

    height, width = image.shape[:2]
    new_width, new_height = fit_within(width, height, max_edge)

    if (new_width, new_height) == (width, height):
        info = ImageProxyInfo(
            original_size=(width, height),
            proxy_size=(width, height),
            scale_factor=1.0,
            is_proxy=False,
        )
        return image.copy(), info

    proxy = cv2.resize(image, (new_width, new_height), interpolation=interpolation)

    info = ImageProxyInfo(
        original_size=(width, height),
        proxy_size=(new_width, new_height),
        scale_factor=calculate_scale_factor(width, height, max_edge),
        is_proxy=True,
    )

    logger.debug(
        "Created working buffer: %dx%d -> %dx%d (%.1f MP -> %.1f MP)",
        width, height, new_width, new_height,
        info.original_megapixels,
        info.proxy_megapixels,
    )

    return proxy, info


def create_preview_buffer(image: np.ndarray) -> Tuple[np.ndarray, ImageProxyInfo]:
    """Working buffer for interactive preview."""
    return create_proxy(image, settings.PREVIEW_MAX_EDGE)


def create_export_buffer(image: np.ndarray) -> Tuple[np.ndarray, ImageProxyInfo]:
    """Working buffer for the exported JPEG."""
    return create_proxy(image, settings.EXPORT_MAX_EDGE)
