# Image import functionality using Pillow
import os
from dataclasses import dataclass

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from ..config import settings
from ..utils.errors import FileIOError
from ..utils.image_proxy import fit_within
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImageInfo:
    """Summary shown next to a loaded image."""
    width: int
    height: int
    export_width: int
    export_height: int
    file_size: int
    format: str

    @property
    def file_size_label(self) -> str:
        if self.file_size > 1024 * 1024:
            return f"{self.file_size / (1024 * 1024):.2f} MB"
        return f"{self.file_size / 1024:.1f} KB"


def image_from_pil(img):
    """Converts a Pillow image to an RGBA uint8 pixel buffer, applying EXIF orientation."""
    img_oriented = ImageOps.exif_transpose(img)
    try:
        if img_oriented.info.get('icc_profile'):
            # Colour management is out of scope; pixels are used as-is.
            logger.debug("Embedded ICC profile ignored.")
        if img_oriented.mode != 'RGBA':
            logger.debug("Converting image from mode '%s' to 'RGBA'.", img_oriented.mode)
            img_rgba = img_oriented.convert('RGBA')
        else:
            img_rgba = img_oriented
        return np.array(img_rgba, dtype=np.uint8)
    finally:
        if img_oriented is not img:
            img_oriented.close()


def load_image(file_path):
    """Loads an image from the specified file path using Pillow.

    Handles EXIF orientation automatically.

    Args:
        file_path (str): The path to the image file.

    Returns:
        numpy.ndarray: The decoded image as an RGBA uint8 buffer of shape (H, W, 4).

    Raises:
        FileIOError: If the path is invalid, missing, not an image or empty.
    """
    if not isinstance(file_path, (str, os.PathLike)) or not str(file_path):
        raise FileIOError("Invalid file path provided.", file_path=file_path)

    file_path = os.fspath(file_path)
    if not os.path.isfile(file_path):
        raise FileIOError(f"File not found at '{file_path}'", file_path=file_path,
                          user_message=f"File not found: {file_path}")

    try:
        with Image.open(file_path) as img:
            image_np = image_from_pil(img)
    except UnidentifiedImageError as e:
        raise FileIOError(
            f"Pillow could not identify image file format or file is corrupted: '{file_path}'",
            file_path=file_path,
            original_error=e,
            user_message="Please select an image file",
        ) from e
    except OSError as e:
        raise FileIOError(f"Error loading image '{file_path}': {e}", file_path=file_path, original_error=e) from e

    if image_np.size == 0:
        raise FileIOError(f"Loaded image is empty: '{file_path}'", file_path=file_path)

    logger.info("Loaded image '%s' (%dx%d)", file_path, image_np.shape[1], image_np.shape[0])
    return image_np


def describe_image(file_path, image):
    """
    Builds the ImageInfo summary for a loaded image.

    Args:
        file_path: Path the image was loaded from.
        image: The decoded buffer returned by load_image.
    """
    height, width = image.shape[:2]
    export_width, export_height = fit_within(width, height, settings.EXPORT_MAX_EDGE)
    try:
        with Image.open(file_path) as img:
            fmt = img.format or os.path.splitext(file_path)[1].lstrip('.').upper()
    except (OSError, UnidentifiedImageError):
        fmt = os.path.splitext(file_path)[1].lstrip('.').upper()
    return ImageInfo(
        width=width,
        height=height,
        export_width=export_width,
        export_height=export_height,
        file_size=os.path.getsize(file_path),
        format=fmt,
    )
