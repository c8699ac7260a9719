# backend/travelmap/services/image_pipeline/utils/__init__.py
"""
Image Pipeline Utilities
"""

from .constants import (
    DEFAULT_IMAGE_QUALITY,
    DEFAULT_MIME_TYPE,
    JPEG_MIME_TYPE,
    PNG_CONVERSION_THRESHOLD,
    PNG_MIME_TYPE,
    THUMBNAIL_QUALITY,
    THUMBNAIL_SIZE,
)
from .image_utils import (
    apply_circle_mask,
    cover_fit,
    detect_mime_type,
    encode_jpeg,
    encode_png,
    open_image,
    parse_image_format,
)

__all__ = [
    "apply_circle_mask",
    "cover_fit",
    "detect_mime_type",
    "encode_jpeg",
    "encode_png",
    "open_image",
    "parse_image_format",
    "DEFAULT_IMAGE_QUALITY",
    "DEFAULT_MIME_TYPE",
    "JPEG_MIME_TYPE",
    "PNG_CONVERSION_THRESHOLD",
    "PNG_MIME_TYPE",
    "THUMBNAIL_QUALITY",
    "THUMBNAIL_SIZE",
]
