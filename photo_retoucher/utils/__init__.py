# This file makes the 'utils' directory a Python package.

from .errors import (
    AppError,
    InvalidParameterError,
    FileIOError,
    ProcessingError,
    ConfigurationError,
    ErrorCategory,
    handle_errors,
    processing_step,
    format_user_error,
)
from .imaging import clamp, clamp_array, as_pixel_buffer, ensure_pixel_buffer
from .image_proxy import ImageProxyInfo, create_proxy, create_preview_buffer, create_export_buffer, fit_within

__all__ = [
    # Errors
    'AppError',
    'InvalidParameterError',
    'FileIOError',
    'ProcessingError',
    'ConfigurationError',
    'ErrorCategory',
    'handle_errors',
    'processing_step',
    'format_user_error',
    # Pixel buffers
    'clamp',
    'clamp_array',
    'as_pixel_buffer',
    'ensure_pixel_buffer',
    # Working resolution
    'ImageProxyInfo',
    'create_proxy',
    'create_preview_buffer',
    'create_export_buffer',
    'fit_within',
]
