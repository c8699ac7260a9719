# backend/travelmap/routers/couple_image_routers.py
"""Public couple image endpoint (header and login page logo)."""

from fastapi import APIRouter, Response

from ..dependencies import CoupleImageServiceDep
from ..utils.router_helpers import (
    CACHE_CONTROL_ONE_DAY,
    create_image_response,
    handle_exceptions,
)

router = APIRouter(tags=["couple-image"])


@router.get("/couple-image")
@handle_exceptions("serve couple image")
async def get_couple_image(couple_image_service: CoupleImageServiceDep) -> Response:
    """Couple image, falling back to the first location image or a transparent pixel."""
    payload = await couple_image_service.get_couple_image()
    return create_image_response(payload, CACHE_CONTROL_ONE_DAY)
