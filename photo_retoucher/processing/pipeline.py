# Retouch pipeline orchestration
"""
Runs the retouch stages over a working buffer in their fixed order:
brightness -> contrast -> shadows -> highlights -> skin smoothing -> sharpening.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
import time

import numpy as np

from ..utils.errors import processing_step
from ..utils.imaging import ensure_pixel_buffer, is_empty
from ..utils.logger import get_logger
from .adjustments import TONAL_STAGES
from .parameters import AdjustmentParameters
from .retouch import apply_sharpening, apply_skin_smoothing

logger = get_logger(__name__)

ProgressCallback = Callable[[str, float], None]


@dataclass
class PipelineStage:
    """A stage in the processing pipeline."""
    name: str
    func: Callable[[np.ndarray, int], np.ndarray]
    value: int


@dataclass
class PipelineResult:
    """Result of pipeline execution."""
    image: Optional[np.ndarray]
    stages_executed: List[str] = field(default_factory=list)
    total_time: float = 0.0
    stage_times: Dict[str, float] = field(default_factory=dict)


def build_stages(params: AdjustmentParameters) -> List[PipelineStage]:
    """Stages to run for a parameter snapshot; neutral stages are left out."""
    stages = [
        PipelineStage(name, func, getattr(params, name))
        for name, func in TONAL_STAGES
        if getattr(params, name) != 0
    ]
    if params.smoothing > 0:
        stages.append(PipelineStage("smoothing", apply_skin_smoothing, params.smoothing))
    if params.sharpness > 0:
        stages.append(PipelineStage("sharpness", apply_sharpening, params.sharpness))
    return stages


class RetouchPipeline:
    """
    Applies an AdjustmentParameters snapshot to a pixel buffer.

    The pipeline holds no image state of its own: every call gets an explicit
    buffer, which it owns exclusively for the duration of the call and mutates
    in place. Any stage failure aborts the whole run with a single
    ProcessingError; the buffer contents are then not a valid result.
    """

    def __init__(self, params: Optional[AdjustmentParameters] = None):
        self._params = (params or AdjustmentParameters()).validate()

    @property
    def params(self) -> AdjustmentParameters:
        return self._params

    def run(
        self,
        buffer: np.ndarray,
        params: Optional[AdjustmentParameters] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> PipelineResult:
        """
        Execute the pipeline on a buffer, in place.

        Args:
            buffer: Working RGBA buffer (H, W, 4) uint8.
            params: Parameters for this run; defaults to those given at construction.
            progress_callback: Optional callback(stage_name, percent).

        Returns:
            PipelineResult whose image is `buffer` itself.
        """
        params = (params or self._params).validate()
        if is_empty(buffer):
            logger.debug("Empty buffer; nothing to process")
            return PipelineResult(image=buffer)
        ensure_pixel_buffer(buffer, writable=True)

        stages = build_stages(params)
        stages_executed = []
        stage_times = {}
        total_start = time.perf_counter()

        for i, stage in enumerate(stages):
            if progress_callback:
                progress_callback(stage.name, (i / len(stages)) * 100)
            stage_start = time.perf_counter()
            with processing_step(stage.name):
                stage.func(buffer, stage.value)
            stage_times[stage.name] = time.perf_counter() - stage_start
            stages_executed.append(stage.name)
            logger.debug("Stage %s(%s) took %.4fs", stage.name, stage.value, stage_times[stage.name])

        if progress_callback:
            progress_callback("complete", 100)

        result = PipelineResult(
            image=buffer,
            stages_executed=stages_executed,
            total_time=time.perf_counter() - total_start,
            stage_times=stage_times,
        )
        logger.info(
            "Pipeline complete: %d stage(s) on %dx%d in %.3fs",
            len(stages_executed), buffer.shape[1], buffer.shape[0], result.total_time,
        )
        return result


def process(buffer: np.ndarray, params: AdjustmentParameters) -> np.ndarray:
    """
    Retouch `buffer` in place and return it.

    Deterministic: the same buffer and parameters always give byte-identical output.
    """
    return RetouchPipeline(params).run(buffer).image
