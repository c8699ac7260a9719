# backend/travelmap/utils/router_helpers.py
"""
Router Helper Functions

Common functions and decorators for FastAPI routers to reduce code duplication.
Provides standardized error handling, entity validation and image responses.
"""

from functools import wraps
from typing import Awaitable, Callable, Optional, TypeVar

from fastapi import HTTPException, Response, status

from ..enums import LoggerName, LogSource
from ..exceptions import (
    ConfigurationError,
    ImageDecodeError,
    InvalidLocationError,
    UploadTooLargeError,
)
from ..services.image_pipeline import ImagePayload
from ..services.logger import get_service_logger

T = TypeVar("T")
logger = get_service_logger(LoggerName.API, LogSource.API)

CACHE_CONTROL_ONE_DAY = "public, max-age=86400"
CACHE_CONTROL_NO_CACHE = "no-cache"


def handle_exceptions(operation_name: str):
    """
    Decorator for standardized exception handling in router endpoints.

    HTTP exceptions pass through; image and upload errors map to their
    client status codes; anything else becomes a 500.

    Args:
        operation_name: Human-readable description of the operation for error messages

    Usage:
        @handle_exceptions("fetch locations")
        async def get_locations():
            # endpoint logic here
            pass
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                # Re-raise HTTP exceptions as-is
                raise
            except UploadTooLargeError as e:
                raise HTTPException(
                    status_code=413,
                    detail=f"Image too large (max {e.limit // (1024 * 1024)} MB)",
                )
            except ImageDecodeError as e:
                logger.warning(f"Rejected image while trying to {operation_name}: {e}")
                raise HTTPException(
                    status_code=422,
                    detail=e.user_message,
                )
            except InvalidLocationError as e:
                raise HTTPException(
                    status_code=422, detail=str(e)
                )
            except ConfigurationError as e:
                logger.error(f"Configuration error while trying to {operation_name}: {e}")
                raise HTTPException(
                    status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                    detail=f"Unable to {operation_name}: service not configured",
                )
            except Exception as e:
                logger.error(f"Error {operation_name}", exception=e)
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=f"Failed to {operation_name}",
                )

        return wrapper

    return decorator


async def validate_entity_exists(
    db_method: Callable[..., Awaitable[Optional[T]]],
    entity_id: int,
    entity_name: str = "entity",
) -> T:
    """
    Validate that an entity exists in the database with proper typing.

    Raises:
        HTTPException: 404 if entity not found

    Usage:
        location = await validate_entity_exists(
            location_service.get_location_by_id,
            location_id,
            "location"
        )
    """
    entity = await db_method(entity_id)
    if not entity:
        raise HTTPException(
            status_code=404, detail=f"{entity_name.capitalize()} not found"
        )
    return entity


def create_image_response(
    payload: ImagePayload, cache_control: str = CACHE_CONTROL_ONE_DAY
) -> Response:
    """Binary image response with its content type and cache policy."""
    return Response(
        content=payload.data,
        media_type=payload.media_type,
        headers={"Cache-Control": cache_control},
    )
