# backend/travelmap/routers/admin_routers.py
"""
Administrative HTTP endpoints.

Role: Batch image maintenance, statistics, couple image upload and reset
Interactions: Uses AdminService and CoupleImageService for business logic
"""
# NOTE: THIS FILE SHOULD NOT CONTAIN ANY BUSINESS LOGIC.

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from ..config import settings
from ..dependencies import (
    AdminServiceDep,
    CoupleImageServiceDep,
    require_authenticated_session,
)
from ..models.shared_models import (
    AdminStats,
    ImageOptimizationResult,
    ResetDatabaseResult,
    StoredImageResult,
    ThumbnailGenerationResult,
)
from ..utils.router_helpers import handle_exceptions
from ..utils.upload_helpers import read_upload

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_authenticated_session)],
)


@router.get("/stats", response_model=AdminStats)
@handle_exceptions("get admin statistics")
async def get_stats(admin_service: AdminServiceDep) -> AdminStats:
    return await admin_service.get_stats()


@router.post("/optimize-images", response_model=ImageOptimizationResult)
@handle_exceptions("optimize images")
async def optimize_images(admin_service: AdminServiceDep) -> ImageOptimizationResult:
    """Re-normalize all stored images, keeping only results that are smaller."""
    return await admin_service.optimize_images()


@router.post("/generate-thumbnails", response_model=ThumbnailGenerationResult)
@handle_exceptions("generate thumbnails")
async def generate_thumbnails(
    admin_service: AdminServiceDep,
) -> ThumbnailGenerationResult:
    """Regenerate the marker thumbnail of every stored image."""
    return await admin_service.generate_thumbnails()


@router.post("/couple-image", response_model=StoredImageResult)
@handle_exceptions("update couple image")
async def update_couple_image(
    couple_image_service: CoupleImageServiceDep,
    image: UploadFile = File(...),
) -> StoredImageResult:
    image_bytes = await read_upload(image, settings.max_upload_bytes)
    if not image_bytes:
        raise HTTPException(
            status_code=422,
            detail="An image is required",
        )
    return await couple_image_service.replace_couple_image(
        image_bytes, image.content_type, image.filename
    )


@router.post("/reset-database", response_model=ResetDatabaseResult)
@handle_exceptions("reset database")
async def reset_database(admin_service: AdminServiceDep) -> ResetDatabaseResult:
    """Delete all locations and the couple image."""
    return await admin_service.reset_database()
