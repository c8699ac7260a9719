# backend/travelmap/services/admin_service.py
"""
Admin Service - Business logic for administrative operations.

Responsibilities:
- Batch "optimize images" and "generate thumbnails" over stored locations
- Storage statistics
- Database reset

Batch operations run sequentially, one row at a time: each row's image is
loaded, processed in the thread pool and written back before the next row
is read. Memory use is bounded by the largest single image; runtime grows
linearly with the number of stored images.
"""

from typing import Optional

from starlette.concurrency import run_in_threadpool

from ..database.core import AsyncDatabase
from ..database.couple_image_operations import CoupleImageOperations
from ..database.exceptions import DatabaseOperationError
from ..database.location_operations import LocationOperations
from ..enums import LogEmoji, LoggerName, LogSource
from ..exceptions import ImageProcessingError
from ..models.shared_models import (
    AdminStats,
    ImageOptimizationResult,
    ResetDatabaseResult,
    ThumbnailGenerationResult,
)
from .image_pipeline import ImagePipeline
from .logger import get_service_logger

logger = get_service_logger(LoggerName.ADMIN_SERVICE, LogSource.API)


class AdminService:
    """
    Service for administrative operations over the stored locations.

    A failure on one row is logged and counted; the batch never aborts.
    """

    def __init__(
        self,
        db: AsyncDatabase,
        image_pipeline: ImagePipeline,
        location_ops: Optional[LocationOperations] = None,
        couple_image_ops: Optional[CoupleImageOperations] = None,
    ):
        """
        Initialize admin service.

        Args:
            db: AsyncDatabase instance
            image_pipeline: Pipeline used for batch processing
            location_ops: Optional pre-built location operations
            couple_image_ops: Optional pre-built couple image operations
        """
        self.db = db
        self.image_pipeline = image_pipeline
        self.location_ops = location_ops or LocationOperations(db)
        self.couple_image_ops = couple_image_ops or CoupleImageOperations(db)

    async def optimize_images(self) -> ImageOptimizationResult:
        """
        Re-run normalization over every stored image.

        A row is overwritten only if the normalized image is strictly
        smaller; all other rows are left untouched. Rows whose re-encode
        degraded or raised are counted as failed.

        Returns:
            ImageOptimizationResult with optimized, failed and total counts
        """
        location_ids = await self.location_ops.get_location_ids_with_images()
        optimized_count = 0
        failed_count = 0
        bytes_saved = 0

        logger.info(
            f"Optimizing {len(location_ids)} stored images", emoji=LogEmoji.IMAGE
        )

        for location_id in location_ids:
            try:
                record = await self.location_ops.get_location_image(location_id)
                if record is None or record.image is None:
                    continue

                declared_mime = record.image_type or (
                    self.image_pipeline.detect_mime_type(record.image, fallback="")
                )
                normalized = await run_in_threadpool(
                    self.image_pipeline.normalize, record.image, declared_mime
                )

                if normalized.degraded:
                    failed_count += 1
                    continue

                if normalized.size < len(record.image):
                    await self.location_ops.update_location_image(
                        location_id, normalized.data, normalized.mime_type
                    )
                    optimized_count += 1
                    bytes_saved += len(record.image) - normalized.size

            except (ImageProcessingError, DatabaseOperationError) as e:
                failed_count += 1
                logger.warning(
                    f"Failed to optimize image for location {location_id}",
                    exception=e,
                    extra_context={"location_id": location_id},
                )

        logger.info(
            f"Optimized {optimized_count} of {len(location_ids)} images",
            extra_context={
                "optimized_count": optimized_count,
                "failed_count": failed_count,
                "bytes_saved": bytes_saved,
            },
            emoji=LogEmoji.SUCCESS,
        )
        return ImageOptimizationResult(
            success=True,
            optimized_count=optimized_count,
            failed_count=failed_count,
            total=len(location_ids),
            bytes_saved=bytes_saved,
            message=f"{optimized_count} images optimized",
        )

    async def generate_thumbnails(self) -> ThumbnailGenerationResult:
        """
        Regenerate the marker thumbnail of every stored image.

        Existing thumbnails are overwritten whenever a new one is produced.

        Returns:
            ThumbnailGenerationResult with generated, failed and total counts
        """
        location_ids = await self.location_ops.get_location_ids_with_images()
        generated_count = 0
        failed_count = 0

        logger.info(
            f"Generating thumbnails for {len(location_ids)} locations",
            emoji=LogEmoji.THUMBNAIL,
        )

        for location_id in location_ids:
            try:
                record = await self.location_ops.get_location_image(location_id)
                if record is None or record.image is None:
                    continue

                thumbnail = await run_in_threadpool(
                    self.image_pipeline.make_thumbnail, record.image
                )
                if thumbnail is None:
                    failed_count += 1
                    continue

                await self.location_ops.update_thumbnail(location_id, thumbnail)
                generated_count += 1

            except DatabaseOperationError as e:
                failed_count += 1
                logger.warning(
                    f"Failed to store thumbnail for location {location_id}",
                    exception=e,
                    extra_context={"location_id": location_id},
                )

        logger.info(
            f"Generated {generated_count} of {len(location_ids)} thumbnails",
            extra_context={
                "generated_count": generated_count,
                "failed_count": failed_count,
            },
            emoji=LogEmoji.SUCCESS,
        )
        return ThumbnailGenerationResult(
            success=True,
            generated_count=generated_count,
            failed_count=failed_count,
            total=len(location_ids),
            message=f"{generated_count} thumbnails generated",
        )

    async def get_stats(self) -> AdminStats:
        """Location count and stored byte totals."""
        storage = await self.location_ops.get_storage_stats()
        couple_image_bytes = await self.couple_image_ops.get_couple_image_size()
        return AdminStats(
            location_count=storage["location_count"],
            storage_bytes=storage["storage_bytes"] + couple_image_bytes,
            thumbnail_bytes=storage["thumbnail_bytes"],
            missing_thumbnails=storage["missing_thumbnails"],
            has_couple_image=couple_image_bytes > 0,
        )

    async def reset_database(self) -> ResetDatabaseResult:
        """Delete all locations and the couple image."""
        deleted_locations = await self.location_ops.delete_all_locations()
        deleted_couple_images = await self.couple_image_ops.delete_couple_image()

        logger.warning(
            "Database reset",
            extra_context={
                "deleted_locations": deleted_locations,
                "deleted_couple_images": deleted_couple_images,
            },
            emoji=LogEmoji.CLEANUP,
        )
        return ResetDatabaseResult(
            success=True,
            deleted_locations=deleted_locations,
            deleted_couple_images=deleted_couple_images,
        )
