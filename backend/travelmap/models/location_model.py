# backend/travelmap/models/location_model.py

import re
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Canonical storage form for location dates
DATE_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

# Legacy free-text forms still accepted on input
LEGACY_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m",
    "%m/%Y",
    "%m-%Y",
    "%B %Y",
    "%b %Y",
    "%d %B %Y",
    "%B %d, %Y",
)


def normalize_location_date(value: Optional[str]) -> Optional[str]:
    """
    Normalize a location date to ``YYYY-MM``.

    Legacy free text is parsed where possible and otherwise kept as given.
    Empty input becomes None.
    """
    if value is None:
        return None

    text = value.strip()
    if not text:
        return None

    if DATE_PATTERN.match(text):
        return text

    for date_format in LEGACY_DATE_FORMATS:
        try:
            return datetime.strptime(text, date_format).strftime("%Y-%m")
        except ValueError:
            continue

    return text


def parse_coordinate(value: Any) -> Any:
    """Accept legacy text coordinates such as ``" 48,8566 "``."""
    if isinstance(value, str):
        text = value.strip().replace(",", ".")
        if not text:
            raise ValueError("Coordinate cannot be empty")
        try:
            return float(text)
        except ValueError:
            raise ValueError(f"Invalid coordinate '{value}'")
    return value


class LocationBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255, description="Pin title")
    description: Optional[str] = Field(None, description="Free-text description")
    date: Optional[str] = Field(None, description="Visit date (YYYY-MM)")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(
        ..., ge=-180, le=180, description="Longitude in degrees"
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate location title"""
        if not v.strip():
            raise ValueError("Location title cannot be empty or just whitespace")
        return v.strip()

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip() or None

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v: Any) -> Optional[str]:
        """Normalize dates to YYYY-MM where the input can be parsed"""
        if v is None:
            return None
        return normalize_location_date(str(v))

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def validate_coordinate(cls, v: Any) -> Any:
        return parse_coordinate(v)


class LocationCreate(LocationBase):
    """Model for creating a new location (the image is sent alongside)"""

    pass


class LocationUpdate(LocationBase):
    """Model for updating a location; the stored image is kept unless replaced"""

    pass


class Location(BaseModel):
    """Location metadata as returned by the API (image bytes excluded)"""

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    image_type: Optional[str] = None
    has_image: bool = False
    has_thumbnail: bool = False
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class LocationImageData(BaseModel):
    """Stored binary payloads of a location"""

    id: int
    image: Optional[bytes] = None
    image_type: Optional[str] = None
    thumbnail: Optional[bytes] = None

    model_config = ConfigDict(from_attributes=True)
