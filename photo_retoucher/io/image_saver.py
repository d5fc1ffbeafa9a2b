# Export functionality using Pillow
import io
import os
from typing import Optional

import numpy as np
from PIL import Image

from ..config import settings
from ..utils.errors import FileIOError, InvalidParameterError
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _to_pil_rgb(image):
    """RGB Pillow image from an (H, W, 3|4) uint8 buffer; alpha is dropped."""
    if image is None or image.size == 0:
        raise InvalidParameterError("Cannot encode an empty image.")
    if image.dtype != np.uint8:
        logger.warning("Image data type is not uint8. Clipping and converting.")
        image = np.clip(image, 0, 255).astype(np.uint8)
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise InvalidParameterError(f"Image must be RGB or RGBA to encode, got shape {image.shape}")
    return Image.fromarray(np.ascontiguousarray(image[..., :3]), 'RGB')


def _jpeg_options(quality):
    if not isinstance(quality, int) or isinstance(quality, bool):
        raise InvalidParameterError(
            f"Invalid type for quality parameter: expected int, got {type(quality).__name__}",
            parameter="quality",
            value=quality,
        )
    return {
        'quality': max(1, min(100, quality)),  # Clamp quality 1-100 for Pillow JPEG
        'optimize': settings.EXPORT_DEFAULTS['optimize'],
        'progressive': settings.EXPORT_DEFAULTS['progressive'],
    }


def encode_jpeg(image, quality: Optional[int] = None) -> bytes:
    """Encodes an RGB/RGBA uint8 buffer as JPEG bytes."""
    if quality is None:
        quality = settings.EXPORT_DEFAULTS['jpeg_quality']
    options = _jpeg_options(quality)
    with _to_pil_rgb(image) as img:
        out = io.BytesIO()
        img.save(out, format='JPEG', **options)
    return out.getvalue()


def save_jpeg(image, file_path, quality: Optional[int] = None) -> int:
    """Saves the given buffer as a JPEG file.

    Args:
        image (numpy.ndarray): uint8 RGB or RGBA buffer.
        file_path (str): Destination path; missing parent directories are created.
        quality (int): JPEG quality 1-100 (defaults to settings, 95).

    Returns:
        int: Size of the written file in bytes.

    Raises:
        FileIOError: If the file cannot be written.
    """
    if not file_path:
        raise FileIOError("Invalid file path provided for saving.", file_path=file_path)
    file_path = os.fspath(file_path)

    data = encode_jpeg(image, quality)

    output_dir = os.path.dirname(file_path)
    try:
        if output_dir and not os.path.exists(output_dir):
            os.makedirs(output_dir)
            logger.info("Created output directory: %s", output_dir)
        with open(file_path, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise FileIOError(f"Could not save image to '{file_path}'", file_path=file_path, original_error=e,
                          user_message=f"Export error: {e}") from e

    logger.info("Successfully saved image to: '%s' (%d KB)", file_path, round(len(data) / 1024))
    return len(data)
