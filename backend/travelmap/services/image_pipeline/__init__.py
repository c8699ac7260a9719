# backend/travelmap/services/image_pipeline/__init__.py
"""
Image Pipeline Module

Format detection, HEIC/HEIF conversion, quality-based recompression and
square or circular marker thumbnails.
"""

from .generators import ImageNormalizer, ThumbnailGenerator
from .image_pipeline import ImagePipeline, create_image_pipeline
from .models import ImagePayload, NormalizedImage
from .utils import (
    DEFAULT_IMAGE_QUALITY,
    PNG_CONVERSION_THRESHOLD,
    THUMBNAIL_SIZE,
    detect_mime_type,
    parse_image_format,
)

__all__ = [
    # Main pipeline
    "ImagePipeline",
    "create_image_pipeline",
    # Generators
    "ImageNormalizer",
    "ThumbnailGenerator",
    # Models
    "ImagePayload",
    "NormalizedImage",
    # Utils
    "detect_mime_type",
    "parse_image_format",
    # Constants
    "DEFAULT_IMAGE_QUALITY",
    "PNG_CONVERSION_THRESHOLD",
    "THUMBNAIL_SIZE",
]
