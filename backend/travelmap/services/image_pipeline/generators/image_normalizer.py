# backend/travelmap/services/image_pipeline/generators/image_normalizer.py
"""
Image Normalizer Component

Converts uploads into a compact, browser-displayable form:
- HEIC/HEIF is decoded and re-encoded as JPEG (fatal on decode failure)
- JPEG is re-encoded at the configured quality
- PNG above the conversion threshold is converted to JPEG
- Everything else passes through unchanged
"""

from typing import Optional

from ....enums import ImageFormat, LogEmoji, LoggerName, LogSource
from ....exceptions import ImageDecodeError
from ....services.logger import get_service_logger
from ..models import NormalizedImage
from ..utils.constants import (
    DEFAULT_IMAGE_QUALITY,
    DEFAULT_MIME_TYPE,
    JPEG_MIME_TYPE,
    PNG_CONVERSION_THRESHOLD,
)
from ..utils.image_utils import encode_jpeg, open_image, parse_image_format

logger = get_service_logger(LoggerName.IMAGE_PIPELINE, LogSource.PIPELINE)


class ImageNormalizer:
    """
    Component responsible for the format and quality policy of stored images.

    Only HEIC/HEIF decoding failures are fatal. Every other failure degrades
    to returning the original bytes with the declared type.
    """

    def __init__(
        self,
        quality: int = DEFAULT_IMAGE_QUALITY,
        png_conversion_threshold: int = PNG_CONVERSION_THRESHOLD,
    ):
        """
        Initialize image normalizer.

        Args:
            quality: JPEG compression quality (1-95)
            png_conversion_threshold: PNG payloads larger than this many bytes
                are converted to JPEG
        """
        self.quality = max(1, min(95, quality))
        self.png_conversion_threshold = max(0, png_conversion_threshold)

    def normalize(
        self,
        data: bytes,
        declared_mime: Optional[str],
        filename: Optional[str] = None,
    ) -> NormalizedImage:
        """
        Apply the normalization policy to an uploaded image.

        Args:
            data: Raw upload bytes
            declared_mime: Content type declared by the client
            filename: Original filename, used only to recognise HEIC/HEIF

        Returns:
            NormalizedImage with the bytes and MIME type to store

        Raises:
            ImageDecodeError: If a HEIC/HEIF payload cannot be decoded
        """
        image_format = parse_image_format(declared_mime, filename)
        original_size = len(data)

        if image_format.is_heif_family:
            return self._convert_heif(data, image_format)

        if image_format is ImageFormat.JPEG:
            return self._reencode_jpeg(data, declared_mime, image_format)

        if (
            image_format is ImageFormat.PNG
            and original_size > self.png_conversion_threshold
        ):
            return self._reencode_jpeg(data, declared_mime, image_format)

        return NormalizedImage(
            data=data,
            mime_type=declared_mime or DEFAULT_MIME_TYPE,
            original_size=original_size,
            source_format=image_format,
        )

    def _convert_heif(self, data: bytes, image_format: ImageFormat) -> NormalizedImage:
        try:
            with open_image(data) as img:
                jpeg_bytes = encode_jpeg(img, self.quality)
        except Exception as e:
            logger.error(
                f"Failed to decode {image_format.value.upper()} upload",
                exception=e,
                extra_context={"size": len(data)},
                emoji=LogEmoji.IMAGE,
            )
            raise ImageDecodeError(
                f"Could not decode {image_format.value.upper()} image: {e}"
            ) from e

        logger.debug(
            f"Converted {image_format.value.upper()} to JPEG",
            extra_context={"original_size": len(data), "size": len(jpeg_bytes)},
            emoji=LogEmoji.IMAGE,
        )
        return NormalizedImage(
            data=jpeg_bytes,
            mime_type=JPEG_MIME_TYPE,
            original_size=len(data),
            source_format=image_format,
        )

    def _reencode_jpeg(
        self, data: bytes, declared_mime: Optional[str], image_format: ImageFormat
    ) -> NormalizedImage:
        try:
            with open_image(data) as img:
                jpeg_bytes = encode_jpeg(img, self.quality)
        except Exception as e:
            logger.warning(
                "Re-encode failed, keeping original image",
                exception=e,
                extra_context={
                    "declared_mime": declared_mime,
                    "size": len(data),
                },
            )
            return NormalizedImage(
                data=data,
                mime_type=declared_mime or DEFAULT_MIME_TYPE,
                original_size=len(data),
                source_format=image_format,
                degraded=True,
            )

        return NormalizedImage(
            data=jpeg_bytes,
            mime_type=JPEG_MIME_TYPE,
            original_size=len(data),
            source_format=image_format,
        )
