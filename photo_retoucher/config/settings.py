# Application settings
import os

# --- Adjustment Parameters ---
# (min, max, neutral) for each slider, in pipeline order
PARAM_RANGES = {
    "brightness": (-100, 100, 0),
    "contrast": (-100, 100, 0),
    "shadows": (-100, 100, 0),
    "highlights": (-100, 100, 0),
    "smoothing": (0, 100, 0),
    "sharpness": (0, 100, 0),
}

# --- Working Resolutions ---
PREVIEW_MAX_EDGE = 1200  # Long edge cap for interactive preview
EXPORT_MAX_EDGE = 2048   # Long edge cap for the exported JPEG

# --- Retouch Stage Parameters ---
SMOOTHING_DEFAULTS = {
    "radius_divisor": 8,       # blur radius = max(1, round(strength / 8))
    "sharpen_radius": 1,       # unsharp mask radius
    "sharpen_divisor": 50.0,   # strength factor = strength / 50
}

# Skin classification bands (hue in degrees, saturation/lightness normalized)
SKIN_TONE_BOUNDS = {
    "hue_min": 0.0,
    "hue_max": 50.0,
    "sat_min": 0.12,
    "sat_max": 0.78,
    "light_min": 0.15,
    "light_max": 0.85,
}

# --- Histogram ---
# Inclusive bucket range used to compute the display scale. Buckets 0 and
# 255 (clipped black/white) are left out, and so is 254.
HISTOGRAM_SCALE_RANGE = (1, 253)

HISTOGRAM_RENDER = {
    "width": 256,
    "height": 100,
    "background": (13, 27, 48, 255),  # #0d1b30
    "channel_colors": (
        (255, 80, 80, 115),   # Red, alpha 0.45
        (80, 220, 80, 115),   # Green
        (80, 130, 255, 115),  # Blue
    ),
}

# --- Export ---
EXPORT_DEFAULTS = {
    "jpeg_quality": 95,
    "optimize": True,
    "progressive": True,
    "filename_prefix": "retouch_",
}

# --- Logging ---
LOGGING_LEVEL = os.environ.get("PHOTO_RETOUCHER_LOG_LEVEL", "INFO")  # Options: DEBUG, INFO, WARNING, ERROR
