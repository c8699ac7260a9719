# backend/travelmap/models/shared_models.py
"""
Shared response and request models for auth, admin and couple image endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Request body for the login endpoint"""

    access_code: str = Field(..., min_length=1, description="Shared access code")


class SessionStatus(BaseModel):
    """Authentication state of the caller's session"""

    authenticated: bool
    session_id: Optional[str] = None
    expires_at: Optional[datetime] = None


class ImageOptimizationResult(BaseModel):
    """Response model for the batch image optimization endpoint"""

    success: bool = True
    optimized_count: int = 0
    failed_count: int = 0
    total: int = 0
    bytes_saved: int = 0
    message: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ThumbnailGenerationResult(BaseModel):
    """Response model for the batch thumbnail generation endpoint"""

    success: bool = True
    generated_count: int = 0
    failed_count: int = 0
    total: int = 0
    message: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AdminStats(BaseModel):
    """Storage statistics for the admin dashboard"""

    location_count: int = 0
    storage_bytes: int = 0
    thumbnail_bytes: int = 0
    missing_thumbnails: int = 0
    has_couple_image: bool = False


class ResetDatabaseResult(BaseModel):
    """Response model for the database reset endpoint"""

    success: bool = True
    deleted_locations: int = 0
    deleted_couple_images: int = 0


class StoredImageResult(BaseModel):
    """Response model for endpoints that store an uploaded image"""

    success: bool = True
    mime_type: str
    size: int
    original_size: int
    degraded: bool = False
