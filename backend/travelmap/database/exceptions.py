"""
Database Operation Exceptions - Clean Error Handling Pattern

Database operations raise domain-specific exceptions and never log;
the service layer catches them and handles logging.

Usage Example:
    from .exceptions import LocationOperationError

    try:
        await cur.execute(query, params)
        return await cur.fetchall()
    except psycopg.Error as e:
        raise LocationOperationError(
            "Failed to retrieve locations", operation="get_locations"
        ) from e
"""

from typing import Any, Dict, Optional


class DatabaseOperationError(Exception):
    """
    Base exception for all database operation failures.

    Provides a clean interface for database errors without requiring
    logging dependencies in the database layer.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.details = details or {}

    def __str__(self):
        if self.operation:
            return f"{self.operation}: {super().__str__()}"
        return super().__str__()


class LocationOperationError(DatabaseOperationError):
    """Location-specific database operation errors."""

    pass


class CoupleImageOperationError(DatabaseOperationError):
    """Couple-image-specific database operation errors."""

    pass
