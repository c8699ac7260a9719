# backend/travelmap/services/image_pipeline/image_pipeline.py
"""
Main Image Pipeline Class

Provides a unified interface for the image ingestion pipeline:
format detection, HEIC/HEIF conversion, quality-based recompression and
marker thumbnail generation.

All methods are synchronous and CPU-bound. Async callers should run them
through ``starlette.concurrency.run_in_threadpool``.
"""

from typing import Optional

from ...config import Settings
from ...enums import LoggerName, LogSource, ThumbnailStyle
from ...services.logger import get_service_logger
from .generators import ImageNormalizer, ThumbnailGenerator
from .models import NormalizedImage
from .utils import detect_mime_type

logger = get_service_logger(LoggerName.IMAGE_PIPELINE, LogSource.PIPELINE)


class ImagePipeline:
    """
    Image ingestion pipeline providing access to normalization and
    thumbnail generation with injected components.
    """

    def __init__(
        self,
        normalizer: Optional[ImageNormalizer] = None,
        thumbnail_generator: Optional[ThumbnailGenerator] = None,
        thumbnail_style: ThumbnailStyle = ThumbnailStyle.CIRCLE,
    ):
        """
        Initialize image pipeline.

        Args:
            normalizer: Normalizer applying the format/quality policy
            thumbnail_generator: Generator for marker thumbnails
            thumbnail_style: Style used when callers do not pass one
        """
        self.normalizer = normalizer or ImageNormalizer()
        self.thumbnail_generator = thumbnail_generator or ThumbnailGenerator()
        self.thumbnail_style = thumbnail_style

    def normalize(
        self,
        data: bytes,
        declared_mime: Optional[str],
        filename: Optional[str] = None,
    ) -> NormalizedImage:
        """
        Normalize an uploaded image for storage.

        Raises:
            ImageDecodeError: If a HEIC/HEIF payload cannot be decoded
        """
        return self.normalizer.normalize(data, declared_mime, filename)

    def make_thumbnail(
        self,
        data: bytes,
        style: Optional[ThumbnailStyle] = None,
        size: Optional[int] = None,
    ) -> Optional[bytes]:
        """Generate a marker thumbnail, or None if the image cannot be processed."""
        return self.thumbnail_generator.generate_thumbnail(
            data, style or self.thumbnail_style, size
        )

    @staticmethod
    def detect_mime_type(data: bytes, fallback: str = "image/jpeg") -> str:
        """Content type for serving stored bytes, sniffed from their signature."""
        return detect_mime_type(data) or fallback


def create_image_pipeline(app_settings: Optional[Settings] = None) -> ImagePipeline:
    """
    Factory function to create an image pipeline instance.

    Args:
        app_settings: Application settings; defaults to the global settings

    Returns:
        Configured ImagePipeline instance
    """
    if app_settings is None:
        from ...config import settings as app_settings

    pipeline = ImagePipeline(
        normalizer=ImageNormalizer(
            quality=app_settings.image_quality,
            png_conversion_threshold=app_settings.png_conversion_threshold_bytes,
        ),
        thumbnail_generator=ThumbnailGenerator(size=app_settings.thumbnail_size),
        thumbnail_style=app_settings.thumbnail_style,
    )
    logger.debug(
        "Image pipeline created",
        extra_context={
            "quality": app_settings.image_quality,
            "thumbnail_size": app_settings.thumbnail_size,
            "thumbnail_style": app_settings.thumbnail_style.value,
        },
    )
    return pipeline
