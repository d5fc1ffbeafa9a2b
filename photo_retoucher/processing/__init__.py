# Processing package initialization
from .parameters import AdjustmentParameters, PARAM_RANGES
from .adjustments import ToneAdjustments, apply_tonal_adjustments
from .skin_tone import rgb_to_hsl, skin_tone_mask, is_skin_tone
from .blur import blur_image
from .retouch import apply_skin_smoothing, apply_sharpening, smoothing_radius
from .histogram import HistogramResult, compute_histogram
from .pipeline import PipelineResult, PipelineStage, RetouchPipeline, process
from .presets import AdjustmentPreset, AdjustmentPresetManager, get_builtin_preset, list_builtin_presets
