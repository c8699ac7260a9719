# backend/travelmap/services/image_pipeline/generators/thumbnail_generator.py
"""
Thumbnail Generator Component

Generates fixed-size marker thumbnails from stored image bytes.
Square thumbnails are cover-fit JPEGs; circular thumbnails are the same
crop with a circular alpha mask, encoded as PNG.
"""

from typing import Optional

from ....enums import LogEmoji, LoggerName, LogSource, ThumbnailStyle
from ....services.logger import get_service_logger
from ..utils.constants import THUMBNAIL_QUALITY, THUMBNAIL_SIZE
from ..utils.image_utils import (
    apply_circle_mask,
    cover_fit,
    encode_jpeg,
    encode_png,
    open_image,
)

logger = get_service_logger(LoggerName.IMAGE_PIPELINE, LogSource.PIPELINE)


class ThumbnailGenerator:
    """
    Component responsible for generating square and circular thumbnails.

    Generation is pure: bytes in, bytes out. Failures are logged and
    reported as None so callers can fall back to the full image.
    """

    def __init__(self, size: int = THUMBNAIL_SIZE, quality: int = THUMBNAIL_QUALITY):
        """
        Initialize thumbnail generator.

        Args:
            size: Edge length of the square output in pixels
            quality: JPEG compression quality for square thumbnails (1-95)
        """
        self.size = max(1, size)
        self.quality = max(1, min(95, quality))

    def generate_thumbnail(
        self,
        data: bytes,
        style: ThumbnailStyle = ThumbnailStyle.CIRCLE,
        size: Optional[int] = None,
    ) -> Optional[bytes]:
        """
        Generate a thumbnail from encoded image bytes.

        Args:
            data: Encoded source image
            style: Square (JPEG) or circle (PNG with transparent corners)
            size: Override for the output edge length

        Returns:
            Encoded thumbnail bytes, or None if generation failed
        """
        target_size = max(1, size) if size else self.size

        try:
            with open_image(data) as img:
                square = cover_fit(img, target_size)

            if style is ThumbnailStyle.CIRCLE:
                thumbnail = encode_png(apply_circle_mask(square))
            else:
                thumbnail = encode_jpeg(square, self.quality)

        except Exception as e:
            logger.warning(
                "Thumbnail generation failed",
                exception=e,
                extra_context={
                    "style": style.value,
                    "size": target_size,
                    "source_bytes": len(data),
                },
                emoji=LogEmoji.THUMBNAIL,
            )
            return None

        logger.debug(
            f"Generated {style.value} thumbnail",
            extra_context={"size": target_size, "bytes": len(thumbnail)},
            emoji=LogEmoji.THUMBNAIL,
        )
        return thumbnail
