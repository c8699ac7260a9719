# backend/travelmap/routers/location_routers.py
"""
Location HTTP endpoints.

Role: Location CRUD and image serving
Responsibilities: Multipart form parsing, upload size enforcement,
                 binary image responses with cache headers
Interactions: Uses LocationService for business logic
"""
# NOTE: THIS FILE SHOULD NOT CONTAIN ANY BUSINESS LOGIC.

from typing import List, Optional, Type, TypeVar

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Response,
    UploadFile,
    status,
)
from pydantic import ValidationError

from ..config import settings
from ..dependencies import LocationServiceDep, require_authenticated_session
from ..exceptions import InvalidLocationError
from ..models.location_model import (
    Location,
    LocationBase,
    LocationCreate,
    LocationUpdate,
)
from ..utils.response_helpers import ResponseFormatter
from ..utils.router_helpers import (
    CACHE_CONTROL_NO_CACHE,
    CACHE_CONTROL_ONE_DAY,
    create_image_response,
    handle_exceptions,
    validate_entity_exists,
)
from ..utils.upload_helpers import read_optional_upload, read_upload

router = APIRouter(
    prefix="/locations",
    tags=["locations"],
    dependencies=[Depends(require_authenticated_session)],
)

LocationModel = TypeVar("LocationModel", bound=LocationBase)


def _parse_location_form(
    model: Type[LocationModel],
    title: str,
    description: Optional[str],
    date: Optional[str],
    latitude: str,
    longitude: str,
) -> LocationModel:
    try:
        return model.model_validate(
            {
                "title": title,
                "description": description,
                "date": date,
                "latitude": latitude,
                "longitude": longitude,
            }
        )
    except ValidationError as e:
        messages = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise InvalidLocationError(f"Invalid location data: {messages}") from e


@router.get("", response_model=List[Location])
@handle_exceptions("fetch locations")
async def get_locations(
    response: Response, location_service: LocationServiceDep
) -> List[Location]:
    """List all locations (metadata only)."""
    response.headers["Cache-Control"] = CACHE_CONTROL_NO_CACHE
    return await location_service.get_locations()


@router.get("/{location_id}", response_model=Location)
@handle_exceptions("fetch location")
async def get_location(
    location_id: int, response: Response, location_service: LocationServiceDep
) -> Location:
    response.headers["Cache-Control"] = CACHE_CONTROL_NO_CACHE
    return await validate_entity_exists(
        location_service.get_location_by_id, location_id, "location"
    )


@router.post("", response_model=Location, status_code=status.HTTP_201_CREATED)
@handle_exceptions("create location")
async def create_location(
    location_service: LocationServiceDep,
    title: str = Form(...),
    latitude: str = Form(...),
    longitude: str = Form(...),
    description: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    image: UploadFile = File(...),
) -> Location:
    """Create a location from a multipart form; the image is required."""
    location_data = _parse_location_form(
        LocationCreate, title, description, date, latitude, longitude
    )
    image_bytes = await read_upload(image, settings.max_upload_bytes)
    if not image_bytes:
        raise HTTPException(
            status_code=422,
            detail="An image is required",
        )

    return await location_service.create_location(
        location_data, image_bytes, image.content_type, image.filename
    )


@router.put("/{location_id}", response_model=Location)
@handle_exceptions("update location")
async def update_location(
    location_id: int,
    location_service: LocationServiceDep,
    title: str = Form(...),
    latitude: str = Form(...),
    longitude: str = Form(...),
    description: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
) -> Location:
    """Update a location; the stored image is kept when no new one is sent."""
    location_data = _parse_location_form(
        LocationUpdate, title, description, date, latitude, longitude
    )
    image_bytes = await read_optional_upload(image, settings.max_upload_bytes)

    location = await location_service.update_location(
        location_id,
        location_data,
        image=image_bytes,
        declared_mime=image.content_type if image_bytes else None,
        filename=image.filename if image_bytes else None,
    )
    if location is None:
        raise HTTPException(status_code=404, detail="Location not found")
    return location


@router.delete("/{location_id}")
@handle_exceptions("delete location")
async def delete_location(location_id: int, location_service: LocationServiceDep):
    if not await location_service.delete_location(location_id):
        raise HTTPException(status_code=404, detail="Location not found")
    return ResponseFormatter.success(
        "Location deleted successfully", location_id=location_id
    )


@router.get("/{location_id}/image")
@handle_exceptions("serve location image")
async def get_location_image(
    location_id: int, location_service: LocationServiceDep
) -> Response:
    """Full stored image; never cached so edits show immediately."""
    payload = await validate_entity_exists(
        location_service.get_location_image, location_id, "image"
    )
    return create_image_response(payload, CACHE_CONTROL_NO_CACHE)


@router.get("/{location_id}/thumbnail")
@handle_exceptions("serve location thumbnail")
async def get_location_thumbnail(
    location_id: int, location_service: LocationServiceDep
) -> Response:
    """Marker thumbnail, generated and stored on first request if missing."""
    payload = await validate_entity_exists(
        location_service.get_marker_thumbnail, location_id, "thumbnail"
    )
    return create_image_response(payload, CACHE_CONTROL_ONE_DAY)
