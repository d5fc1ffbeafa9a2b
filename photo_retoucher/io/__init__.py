# IO package initialization
from .image_loader import (
    ImageInfo,
    describe_image,
    image_from_pil,
    load_image,
)
from .image_saver import (
    encode_jpeg,
    save_jpeg,
)

__all__ = [
    'ImageInfo',
    'describe_image',
    'image_from_pil',
    'load_image',
    'encode_jpeg',
    'save_jpeg',
]
