# backend/travelmap/models/__init__.py
from .location_model import (
    Location,
    LocationBase,
    LocationCreate,
    LocationImageData,
    LocationUpdate,
)
from .shared_models import (
    AdminStats,
    ImageOptimizationResult,
    LoginRequest,
    ResetDatabaseResult,
    SessionStatus,
    StoredImageResult,
    ThumbnailGenerationResult,
)

__all__ = [
    "Location",
    "LocationBase",
    "LocationCreate",
    "LocationImageData",
    "LocationUpdate",
    "AdminStats",
    "ImageOptimizationResult",
    "LoginRequest",
    "ResetDatabaseResult",
    "SessionStatus",
    "StoredImageResult",
    "ThumbnailGenerationResult",
]
