# backend/travelmap/services/image_pipeline/utils/constants.py
"""
Image Pipeline Constants
"""

# Re-encode quality for JPEG output (1-95)
DEFAULT_IMAGE_QUALITY = 80
THUMBNAIL_QUALITY = 85

# PNG uploads above this size are converted to JPEG
PNG_CONVERSION_THRESHOLD = 1024 * 1024  # 1 MiB

# Square thumbnail edge length in pixels
THUMBNAIL_SIZE = 200

# Flattening colour for images with transparency converted to JPEG
JPEG_BACKGROUND_COLOR = (255, 255, 255)

# MIME types
JPEG_MIME_TYPE = "image/jpeg"
PNG_MIME_TYPE = "image/png"
DEFAULT_MIME_TYPE = "application/octet-stream"

JPEG_MIME_TYPES = {"image/jpeg", "image/jpg", "image/pjpeg"}
PNG_MIME_TYPES = {"image/png", "image/x-png"}
HEIC_MIME_TYPES = {"image/heic", "image/heic-sequence"}
HEIF_MIME_TYPES = {"image/heif", "image/heif-sequence"}

# Declared types that carry no format information
GENERIC_MIME_TYPES = {"", "application/octet-stream", "binary/octet-stream"}

HEIC_EXTENSIONS = {".heic"}
HEIF_EXTENSIONS = {".heif"}
