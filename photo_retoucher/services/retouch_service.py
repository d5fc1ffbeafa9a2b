from __future__ import annotations

import concurrent.futures
import os
import threading
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..config import settings
from ..io import image_loader, image_saver
from ..io.image_loader import ImageInfo
from ..processing.histogram import HistogramResult, compute_histogram
from ..processing.parameters import AdjustmentParameters
from ..processing.pipeline import RetouchPipeline
from ..utils.errors import AppError, ErrorCategory
from ..utils.image_proxy import create_export_buffer, create_preview_buffer
from ..utils.imaging import ensure_pixel_buffer, rgba_from_rgb
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PreviewResult:
    image: np.ndarray
    histogram: HistogramResult
    params: AdjustmentParameters
    generation: int
    stale: bool = False


@dataclass(frozen=True)
class ExportResult:
    path: str
    width: int
    height: int
    size_bytes: int


class RetouchService:
    """
    Thin facade over IO + the retouch pipeline.

    Holds the decoded source image; every preview or export runs over a fresh
    working copy of it, so concurrent or superseded runs never share a buffer.
    """

    def __init__(self, pipeline: Optional[RetouchPipeline] = None) -> None:
        self._pipeline = pipeline or RetouchPipeline()
        self._source: Optional[np.ndarray] = None
        self._info: Optional[ImageInfo] = None
        self._last_preview: Optional[PreviewResult] = None
        self._generation = 0
        self._lock = threading.Lock()
        self._executor: Optional[concurrent.futures.ThreadPoolExecutor] = None

    # --- source image ---

    @property
    def has_image(self) -> bool:
        return self._source is not None

    @property
    def info(self) -> Optional[ImageInfo]:
        return self._info

    @property
    def last_preview(self) -> Optional[PreviewResult]:
        return self._last_preview

    def load(self, file_path: str) -> ImageInfo:
        image = image_loader.load_image(file_path)
        self.set_source(image)
        self._info = image_loader.describe_image(os.fspath(file_path), image)
        logger.info(
            "Image loaded: %dx%d (export %dx%d, %s)",
            self._info.width, self._info.height,
            self._info.export_width, self._info.export_height,
            self._info.file_size_label,
        )
        return self._info

    def set_source(self, image: np.ndarray) -> None:
        """Use an already-decoded RGB or RGBA uint8 image as the source."""
        if isinstance(image, np.ndarray) and image.ndim == 3 and image.shape[2] == 3:
            image = rgba_from_rgb(image)
        ensure_pixel_buffer(image)
        with self._lock:
            self._source = image.copy()
            self._source.setflags(write=False)
            self._info = None
            self._last_preview = None
            self._generation += 1

    def _require_source(self) -> np.ndarray:
        if self._source is None:
            raise AppError("No image loaded", category=ErrorCategory.USER_INPUT,
                           user_message="Please load an image first")
        return self._source

    # --- preview ---

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _run_preview(self, source: np.ndarray, params: AdjustmentParameters, generation: int) -> PreviewResult:
        buffer, _ = create_preview_buffer(source)
        self._pipeline.run(buffer, params)
        histogram = compute_histogram(buffer)
        with self._lock:
            stale = generation != self._generation
            result = PreviewResult(buffer, histogram, params, generation, stale)
            if not stale:
                self._last_preview = result
        if stale:
            logger.debug("Discarding stale preview (generation %d)", generation)
        return result

    def preview(self, params: AdjustmentParameters) -> PreviewResult:
        """Process the preview-sized working buffer synchronously."""
        source = self._require_source()
        params = params.validate()
        return self._run_preview(source, params, self._next_generation())

    def submit_preview(self, params: AdjustmentParameters) -> "concurrent.futures.Future[PreviewResult]":
        """
        Queue a preview run on the background worker.

        Newer submissions supersede older ones: a run that finishes after a
        newer request was made comes back with `stale=True` and is not kept as
        the current preview.
        """
        source = self._require_source()
        params = params.validate()
        generation = self._next_generation()
        if self._executor is None:
            self._executor = concurrent.futures.ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="retouch-preview")
        return self._executor.submit(self._run_preview, source, params, generation)

    def reset(self) -> PreviewResult:
        """Back to the unprocessed image at preview size."""
        return self.preview(AdjustmentParameters())

    # --- export ---

    def export(self, params: AdjustmentParameters, file_path: Optional[str] = None,
               quality: Optional[int] = None) -> ExportResult:
        """Process the export-sized working buffer and save it as JPEG."""
        source = self._require_source()
        params = params.validate()
        buffer, proxy_info = create_export_buffer(source)
        self._pipeline.run(buffer, params)

        if file_path is None:
            file_path = f"{settings.EXPORT_DEFAULTS['filename_prefix']}{int(time.time() * 1000)}.jpg"
        size = image_saver.save_jpeg(buffer, file_path, quality)
        width, height = proxy_info.proxy_size
        logger.info("Exported %dx%d px (%d KB) to %s", width, height, round(size / 1024), file_path)
        return ExportResult(os.fspath(file_path), width, height, size)

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "RetouchService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
