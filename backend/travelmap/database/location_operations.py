# backend/travelmap/database/location_operations.py
"""
Location database operations module - composition-based architecture.

All location persistence goes through this module: metadata CRUD,
binary image and thumbnail columns, and the aggregate queries used by
the admin endpoints.
"""

from typing import Any, Dict, List, Optional

import psycopg
from pydantic import ValidationError

from ..models.location_model import (
    Location,
    LocationCreate,
    LocationImageData,
    LocationUpdate,
)
from .core import AsyncDatabase
from .exceptions import LocationOperationError

# Metadata columns returned by every non-binary query
LOCATION_COLUMNS = """
    id,
    title,
    description,
    date,
    latitude,
    longitude,
    image_type,
    created_at,
    image IS NOT NULL AS has_image,
    thumbnail IS NOT NULL AS has_thumbnail
"""


class LocationQueryBuilder:
    """Centralized query builder for location operations."""

    @staticmethod
    def build_locations_query() -> str:
        return f"SELECT {LOCATION_COLUMNS} FROM locations ORDER BY id"

    @staticmethod
    def build_location_by_id_query() -> str:
        return f"SELECT {LOCATION_COLUMNS} FROM locations WHERE id = %(id)s"

    @staticmethod
    def build_insert_query() -> str:
        return f"""
            INSERT INTO locations (
                title, description, date, latitude, longitude,
                image, image_type, thumbnail
            ) VALUES (
                %(title)s, %(description)s, %(date)s, %(latitude)s, %(longitude)s,
                %(image)s, %(image_type)s, %(thumbnail)s
            )
            RETURNING {LOCATION_COLUMNS}
        """

    @staticmethod
    def build_update_query(replace_image: bool) -> str:
        """Build update query; binary columns are only touched when replacing the image."""
        assignments = [
            "title = %(title)s",
            "description = %(description)s",
            "date = %(date)s",
            "latitude = %(latitude)s",
            "longitude = %(longitude)s",
        ]
        if replace_image:
            assignments.extend(
                [
                    "image = %(image)s",
                    "image_type = %(image_type)s",
                    "thumbnail = %(thumbnail)s",
                ]
            )
        return f"""
            UPDATE locations
            SET {", ".join(assignments)}
            WHERE id = %(id)s
            RETURNING {LOCATION_COLUMNS}
        """

    @staticmethod
    def build_storage_stats_query() -> str:
        return """
            SELECT
                COUNT(*) AS location_count,
                COALESCE(SUM(octet_length(image)), 0) AS storage_bytes,
                COALESCE(SUM(octet_length(thumbnail)), 0) AS thumbnail_bytes,
                COUNT(*) FILTER (
                    WHERE image IS NOT NULL AND thumbnail IS NULL
                ) AS missing_thumbnails
            FROM locations
        """


class LocationOperations:
    """
    Location database operations using composition pattern.

    This class receives a database instance via dependency injection,
    providing type-safe Pydantic model interfaces.
    """

    def __init__(self, db: AsyncDatabase) -> None:
        """
        Initialize LocationOperations with async database instance.

        Args:
            db: AsyncDatabase instance
        """
        self.db = db

    def _row_to_location(self, row: Dict[str, Any]) -> Location:
        try:
            return Location.model_validate(dict(row))
        except ValidationError as e:
            raise LocationOperationError(
                f"Invalid location row {row.get('id')}",
                operation="row_to_location",
                details={"errors": e.errors()},
            ) from e

    async def get_locations(self) -> List[Location]:
        """Retrieve metadata for all locations, ordered by id."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(LocationQueryBuilder.build_locations_query())
                    rows = await cur.fetchall()
                    return [self._row_to_location(row) for row in rows]
        except psycopg.Error as e:
            raise LocationOperationError(
                "Failed to retrieve locations", operation="get_locations"
            ) from e

    async def get_location_by_id(self, location_id: int) -> Optional[Location]:
        """Retrieve metadata for a single location."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        LocationQueryBuilder.build_location_by_id_query(),
                        {"id": location_id},
                    )
                    row = await cur.fetchone()
                    return self._row_to_location(row) if row else None
        except psycopg.Error as e:
            raise LocationOperationError(
                f"Failed to retrieve location {location_id}",
                operation="get_location_by_id",
            ) from e

    async def get_location_image(
        self, location_id: int
    ) -> Optional[LocationImageData]:
        """Retrieve the binary image, its MIME type and the thumbnail of a location."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        SELECT id, image, image_type, thumbnail
                        FROM locations
                        WHERE id = %(id)s
                        """,
                        {"id": location_id},
                    )
                    row = await cur.fetchone()
                    return LocationImageData.model_validate(dict(row)) if row else None
        except psycopg.Error as e:
            raise LocationOperationError(
                f"Failed to retrieve image for location {location_id}",
                operation="get_location_image",
            ) from e

    async def get_first_location_image(self) -> Optional[LocationImageData]:
        """Retrieve the image of the lowest-id location that has one."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        SELECT id, image, image_type, thumbnail
                        FROM locations
                        WHERE image IS NOT NULL
                        ORDER BY id
                        LIMIT 1
                        """
                    )
                    row = await cur.fetchone()
                    return LocationImageData.model_validate(dict(row)) if row else None
        except psycopg.Error as e:
            raise LocationOperationError(
                "Failed to retrieve first location image",
                operation="get_first_location_image",
            ) from e

    async def get_location_ids_with_images(self) -> List[int]:
        """Ids of all locations that carry an image, ordered by id."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        "SELECT id FROM locations WHERE image IS NOT NULL ORDER BY id"
                    )
                    rows = await cur.fetchall()
                    return [row["id"] for row in rows]
        except psycopg.Error as e:
            raise LocationOperationError(
                "Failed to list locations with images",
                operation="get_location_ids_with_images",
            ) from e

    async def create_location(
        self,
        location_data: LocationCreate,
        image: bytes,
        image_type: str,
        thumbnail: Optional[bytes] = None,
    ) -> Location:
        """
        Insert a new location with its image.

        Args:
            location_data: Validated location metadata
            image: Normalized image bytes
            image_type: MIME type of ``image``
            thumbnail: Marker thumbnail, or None to generate it lazily

        Returns:
            The created Location
        """
        params = location_data.model_dump()
        params.update(image=image, image_type=image_type, thumbnail=thumbnail)

        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(LocationQueryBuilder.build_insert_query(), params)
                    row = await cur.fetchone()
                    if not row:
                        raise LocationOperationError(
                            "No row returned from location insert",
                            operation="create_location",
                        )
                    return self._row_to_location(row)
        except psycopg.Error as e:
            raise LocationOperationError(
                "Failed to create location", operation="create_location"
            ) from e

    async def update_location(
        self,
        location_id: int,
        location_data: LocationUpdate,
        image: Optional[bytes] = None,
        image_type: Optional[str] = None,
        thumbnail: Optional[bytes] = None,
    ) -> Optional[Location]:
        """
        Update location metadata and optionally replace its image.

        When ``image`` is given, the thumbnail is replaced too (a None
        thumbnail clears the stale one so it is regenerated on read).

        Returns:
            The updated Location, or None if it does not exist
        """
        replace_image = image is not None
        params = location_data.model_dump()
        params["id"] = location_id
        if replace_image:
            params.update(image=image, image_type=image_type, thumbnail=thumbnail)

        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        LocationQueryBuilder.build_update_query(replace_image), params
                    )
                    row = await cur.fetchone()
                    return self._row_to_location(row) if row else None
        except psycopg.Error as e:
            raise LocationOperationError(
                f"Failed to update location {location_id}",
                operation="update_location",
            ) from e

    async def update_location_image(
        self, location_id: int, image: bytes, image_type: str
    ) -> bool:
        """Overwrite only the image and its MIME type."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        UPDATE locations
                        SET image = %(image)s, image_type = %(image_type)s
                        WHERE id = %(id)s
                        """,
                        {"id": location_id, "image": image, "image_type": image_type},
                    )
                    return cur.rowcount > 0
        except psycopg.Error as e:
            raise LocationOperationError(
                f"Failed to update image for location {location_id}",
                operation="update_location_image",
            ) from e

    async def update_thumbnail(self, location_id: int, thumbnail: bytes) -> bool:
        """Overwrite the stored thumbnail of a location."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        UPDATE locations
                        SET thumbnail = %(thumbnail)s
                        WHERE id = %(id)s
                        """,
                        {"id": location_id, "thumbnail": thumbnail},
                    )
                    return cur.rowcount > 0
        except psycopg.Error as e:
            raise LocationOperationError(
                f"Failed to update thumbnail for location {location_id}",
                operation="update_thumbnail",
            ) from e

    async def delete_location(self, location_id: int) -> bool:
        """Delete a location. Returns False if it did not exist."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        "DELETE FROM locations WHERE id = %(id)s", {"id": location_id}
                    )
                    return cur.rowcount > 0
        except psycopg.Error as e:
            raise LocationOperationError(
                f"Failed to delete location {location_id}",
                operation="delete_location",
            ) from e

    async def delete_all_locations(self) -> int:
        """Delete every location. Returns the number of deleted rows."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute("DELETE FROM locations")
                    return cur.rowcount
        except psycopg.Error as e:
            raise LocationOperationError(
                "Failed to delete all locations", operation="delete_all_locations"
            ) from e

    async def get_storage_stats(self) -> Dict[str, int]:
        """Location count, stored image/thumbnail bytes and missing thumbnails."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(LocationQueryBuilder.build_storage_stats_query())
                    row = await cur.fetchone()
                    if not row:
                        return {
                            "location_count": 0,
                            "storage_bytes": 0,
                            "thumbnail_bytes": 0,
                            "missing_thumbnails": 0,
                        }
                    return {key: int(value) for key, value in dict(row).items()}
        except psycopg.Error as e:
            raise LocationOperationError(
                "Failed to retrieve storage statistics",
                operation="get_storage_stats",
            ) from e
