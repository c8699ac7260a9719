# backend/travelmap/services/couple_image_service.py
"""
Couple Image Service - the singleton header/login image.

Serving falls back to the first location image, then to a 1x1
transparent PNG, so the public endpoint always returns an image.
"""

import base64
from typing import Optional

from starlette.concurrency import run_in_threadpool

from ..database.core import AsyncDatabase
from ..database.couple_image_operations import CoupleImageOperations
from ..database.location_operations import LocationOperations
from ..enums import LogEmoji, LoggerName, LogSource
from ..models.shared_models import StoredImageResult
from .image_pipeline import ImagePayload, ImagePipeline
from .logger import get_service_logger

logger = get_service_logger(LoggerName.ADMIN_SERVICE, LogSource.API)

TRANSPARENT_PIXEL_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


class CoupleImageService:
    """Stores and serves the couple image."""

    def __init__(
        self,
        db: AsyncDatabase,
        image_pipeline: ImagePipeline,
        couple_image_ops: Optional[CoupleImageOperations] = None,
        location_ops: Optional[LocationOperations] = None,
    ):
        self.db = db
        self.image_pipeline = image_pipeline
        self.couple_image_ops = couple_image_ops or CoupleImageOperations(db)
        self.location_ops = location_ops or LocationOperations(db)

    async def get_couple_image(self) -> ImagePayload:
        """Couple image, else the first location image, else a transparent pixel."""
        couple_image = await self.couple_image_ops.get_couple_image()
        if couple_image and couple_image.get("image"):
            image = bytes(couple_image["image"])
            return ImagePayload(
                data=image,
                media_type=couple_image.get("image_type")
                or self.image_pipeline.detect_mime_type(image),
            )

        first_location = await self.location_ops.get_first_location_image()
        if first_location and first_location.image:
            return ImagePayload(
                data=first_location.image,
                media_type=first_location.image_type
                or self.image_pipeline.detect_mime_type(first_location.image),
            )

        return ImagePayload(data=TRANSPARENT_PIXEL_PNG, media_type="image/png")

    async def replace_couple_image(
        self,
        image: bytes,
        declared_mime: Optional[str],
        filename: Optional[str] = None,
    ) -> StoredImageResult:
        """
        Normalize an upload and make it the couple image.

        Raises:
            ImageDecodeError: If a HEIC/HEIF upload cannot be decoded
            CoupleImageOperationError: If the replacement fails
        """
        normalized = await run_in_threadpool(
            self.image_pipeline.normalize, image, declared_mime, filename
        )
        await self.couple_image_ops.replace_couple_image(
            normalized.data, normalized.mime_type
        )

        logger.info(
            "Couple image replaced",
            extra_context={
                "image_type": normalized.mime_type,
                "original_size": normalized.original_size,
                "size": normalized.size,
            },
            emoji=LogEmoji.IMAGE,
        )
        return StoredImageResult(
            mime_type=normalized.mime_type,
            size=normalized.size,
            original_size=normalized.original_size,
            degraded=normalized.degraded,
        )
