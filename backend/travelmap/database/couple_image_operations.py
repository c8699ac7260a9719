# backend/travelmap/database/couple_image_operations.py
"""Database operations for the singleton couple image (header logo)."""

from typing import Any, Dict, Optional

import psycopg

from .core import AsyncDatabase
from .exceptions import CoupleImageOperationError


class CoupleImageOperations:
    """Async operations for the couple_image table."""

    def __init__(self, db: AsyncDatabase) -> None:
        self.db = db

    async def get_couple_image(self) -> Optional[Dict[str, Any]]:
        """Get the current couple image (``image`` and ``image_type``), if any."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        SELECT image, image_type
                        FROM couple_image
                        ORDER BY id DESC
                        LIMIT 1
                        """
                    )
                    row = await cur.fetchone()
                    return dict(row) if row else None
        except psycopg.Error as e:
            raise CoupleImageOperationError(
                "Failed to retrieve couple image", operation="get_couple_image"
            ) from e

    async def replace_couple_image(self, image: bytes, image_type: str) -> None:
        """Replace the couple image: delete-all then insert-one in one transaction."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute("DELETE FROM couple_image")
                    await cur.execute(
                        """
                        INSERT INTO couple_image (image, image_type)
                        VALUES (%(image)s, %(image_type)s)
                        """,
                        {"image": image, "image_type": image_type},
                    )
        except psycopg.Error as e:
            raise CoupleImageOperationError(
                "Failed to replace couple image", operation="replace_couple_image"
            ) from e

    async def get_couple_image_size(self) -> int:
        """Stored size of the couple image in bytes (0 if none)."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        SELECT COALESCE(SUM(octet_length(image)), 0) AS size
                        FROM couple_image
                        """
                    )
                    row = await cur.fetchone()
                    return int(row["size"]) if row else 0
        except psycopg.Error as e:
            raise CoupleImageOperationError(
                "Failed to retrieve couple image size",
                operation="get_couple_image_size",
            ) from e

    async def delete_couple_image(self) -> int:
        """Delete all couple images. Returns the number of deleted rows."""
        try:
            async with self.db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute("DELETE FROM couple_image")
                    return cur.rowcount
        except psycopg.Error as e:
            raise CoupleImageOperationError(
                "Failed to delete couple image", operation="delete_couple_image"
            ) from e
