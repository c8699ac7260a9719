# backend/travelmap/services/location_service.py
"""
Location Service - location data management and image ingestion.

This service handles location CRUD and runs uploaded images through the
image pipeline before they are persisted.

Business Rules:
- A location is created with an image; on edit the image is optional and
  the stored image and thumbnail are kept when none is sent
- Images are normalized before storage; a HEIC/HEIF image that cannot be
  decoded rejects the request and nothing is stored
- A thumbnail that cannot be generated is left empty and produced lazily
  on first read (write-through, never evicted)

Concurrency:
- Pipeline work runs in the thread pool, one invocation per request
- Concurrent edits of the same location are last-writer-wins
"""

from typing import List, Optional, Tuple

from starlette.concurrency import run_in_threadpool

from ..database.core import AsyncDatabase
from ..database.exceptions import LocationOperationError
from ..database.location_operations import LocationOperations
from ..enums import LogEmoji, LoggerName, LogSource
from ..models.location_model import Location, LocationCreate, LocationUpdate
from .image_pipeline import ImagePayload, ImagePipeline, NormalizedImage
from .logger import get_service_logger

logger = get_service_logger(LoggerName.LOCATION_SERVICE, LogSource.API)


class LocationService:
    """
    Location management service using composition pattern.

    Interactions:
    - Uses LocationOperations for database access
    - Uses ImagePipeline for normalization and thumbnails
    """

    def __init__(
        self,
        db: AsyncDatabase,
        image_pipeline: ImagePipeline,
        location_ops: Optional[LocationOperations] = None,
    ):
        """
        Initialize LocationService.

        Args:
            db: AsyncDatabase instance
            image_pipeline: Pipeline used for uploads and thumbnails
            location_ops: Optional pre-built operations (defaults to LocationOperations(db))
        """
        self.db = db
        self.image_pipeline = image_pipeline
        self.location_ops = location_ops or LocationOperations(db)

    async def _ingest_image(
        self, image: bytes, declared_mime: Optional[str], filename: Optional[str]
    ) -> Tuple[NormalizedImage, Optional[bytes]]:
        """Normalize an upload and build its thumbnail off the event loop."""
        normalized = await run_in_threadpool(
            self.image_pipeline.normalize, image, declared_mime, filename
        )
        if normalized.degraded:
            logger.warning(
                "Storing upload without re-encoding",
                extra_context={
                    "declared_mime": declared_mime,
                    "size": normalized.size,
                },
                emoji=LogEmoji.IMAGE,
            )

        thumbnail = await run_in_threadpool(
            self.image_pipeline.make_thumbnail, normalized.data
        )
        if thumbnail is None:
            logger.warning(
                "Thumbnail not generated, will be created on first read",
                emoji=LogEmoji.THUMBNAIL,
            )

        return normalized, thumbnail

    async def get_locations(self) -> List[Location]:
        """Get metadata for all locations."""
        return await self.location_ops.get_locations()

    async def get_location_by_id(self, location_id: int) -> Optional[Location]:
        return await self.location_ops.get_location_by_id(location_id)

    async def create_location(
        self,
        location_data: LocationCreate,
        image: bytes,
        declared_mime: Optional[str],
        filename: Optional[str] = None,
    ) -> Location:
        """
        Create a location from form data and an uploaded image.

        Raises:
            ImageDecodeError: If a HEIC/HEIF upload cannot be decoded
            LocationOperationError: If the insert fails
        """
        normalized, thumbnail = await self._ingest_image(
            image, declared_mime, filename
        )

        try:
            location = await self.location_ops.create_location(
                location_data,
                image=normalized.data,
                image_type=normalized.mime_type,
                thumbnail=thumbnail,
            )
        except LocationOperationError as e:
            logger.error("Database error creating location", exception=e)
            raise

        logger.info(
            f"Created location {location.id}",
            extra_context={
                "location_id": location.id,
                "image_type": normalized.mime_type,
                "original_size": normalized.original_size,
                "size": normalized.size,
            },
            emoji=LogEmoji.SUCCESS,
        )
        return location

    async def update_location(
        self,
        location_id: int,
        location_data: LocationUpdate,
        image: Optional[bytes] = None,
        declared_mime: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> Optional[Location]:
        """
        Update a location, replacing its image only when one is given.

        Returns:
            The updated Location, or None if it does not exist

        Raises:
            ImageDecodeError: If a HEIC/HEIF upload cannot be decoded
            LocationOperationError: If the update fails
        """
        if image is None:
            location = await self.location_ops.update_location(
                location_id, location_data
            )
        else:
            if await self.location_ops.get_location_by_id(location_id) is None:
                return None
            normalized, thumbnail = await self._ingest_image(
                image, declared_mime, filename
            )
            location = await self.location_ops.update_location(
                location_id,
                location_data,
                image=normalized.data,
                image_type=normalized.mime_type,
                thumbnail=thumbnail,
            )

        if location:
            logger.info(
                f"Updated location {location_id}",
                extra_context={
                    "location_id": location_id,
                    "new_image": image is not None,
                },
                emoji=LogEmoji.SUCCESS,
            )
        return location

    async def delete_location(self, location_id: int) -> bool:
        deleted = await self.location_ops.delete_location(location_id)
        if deleted:
            logger.info(f"Deleted location {location_id}", emoji=LogEmoji.SUCCESS)
        return deleted

    async def get_location_image(self, location_id: int) -> Optional[ImagePayload]:
        """Full stored image of a location, or None if it has none."""
        record = await self.location_ops.get_location_image(location_id)
        if record is None or record.image is None:
            return None
        return ImagePayload(
            data=record.image,
            media_type=record.image_type
            or self.image_pipeline.detect_mime_type(record.image),
        )

    async def get_marker_thumbnail(self, location_id: int) -> Optional[ImagePayload]:
        """
        Marker thumbnail of a location, generated and stored on first read.

        Falls back to the full image when no thumbnail can be generated.

        Returns:
            The payload to serve, or None if the location has no image
        """
        record = await self.location_ops.get_location_image(location_id)
        if record is None:
            return None

        if record.thumbnail:
            return ImagePayload(
                data=record.thumbnail,
                media_type=self.image_pipeline.detect_mime_type(record.thumbnail),
            )

        if record.image is None:
            return None

        thumbnail = await run_in_threadpool(
            self.image_pipeline.make_thumbnail, record.image
        )
        if thumbnail is None:
            logger.warning(
                f"Serving full image for location {location_id}, thumbnail failed",
                emoji=LogEmoji.THUMBNAIL,
            )
            return ImagePayload(
                data=record.image,
                media_type=record.image_type
                or self.image_pipeline.detect_mime_type(record.image),
            )

        try:
            await self.location_ops.update_thumbnail(location_id, thumbnail)
            logger.debug(
                f"Stored lazily generated thumbnail for location {location_id}",
                emoji=LogEmoji.THUMBNAIL,
            )
        except LocationOperationError as e:
            logger.warning(
                f"Could not store thumbnail for location {location_id}",
                exception=e,
            )

        return ImagePayload(
            data=thumbnail,
            media_type=self.image_pipeline.detect_mime_type(thumbnail),
        )
