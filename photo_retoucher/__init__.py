"""Portrait retouch pipeline: tonal curves, skin smoothing, sharpening and histograms."""

from .processing import (
    AdjustmentParameters,
    HistogramResult,
    RetouchPipeline,
    compute_histogram,
    is_skin_tone,
    process,
)

__version__ = "1.0.0"

__all__ = [
    "AdjustmentParameters",
    "HistogramResult",
    "RetouchPipeline",
    "compute_histogram",
    "is_skin_tone",
    "process",
]
