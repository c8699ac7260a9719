# backend/travelmap/exceptions.py
"""
Custom exceptions for the travel map backend.

Centralized location for all custom exception classes to avoid
duplicating exception definitions across modules.
"""

from typing import Optional


class TravelMapError(Exception):
    """Base exception for all travel-map-specific errors."""

    pass


class ImageProcessingError(TravelMapError):
    """Base exception for image pipeline failures."""

    pass


class ImageDecodeError(ImageProcessingError):
    """
    Fatal pipeline failure: the source image cannot be decoded.

    Raised for undecodable HEIC/HEIF payloads, where no lossless fallback
    exists. The upload must be rejected with a user-facing message.
    """

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or (
            "The image could not be processed. Please try a JPG or PNG image."
        )


class UploadTooLargeError(TravelMapError):
    """Raised when an upload exceeds the configured size ceiling."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"Upload of {size} bytes exceeds limit of {limit} bytes")
        self.size = size
        self.limit = limit


class InvalidLocationError(TravelMapError):
    """Raised when location input fails validation."""

    pass


class AuthenticationError(TravelMapError):
    """Raised when a request carries no authenticated session."""

    pass


class ConfigurationError(TravelMapError):
    """Custom exception for configuration and validation errors."""

    pass
