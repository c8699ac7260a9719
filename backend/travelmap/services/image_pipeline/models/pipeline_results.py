"""
Typed result models for image pipeline operations.
"""

from dataclasses import dataclass

from ....enums import ImageFormat


@dataclass(frozen=True)
class NormalizedImage:
    """
    Result of normalizing an uploaded image.

    ``degraded`` is True when re-encoding failed and the original bytes and
    declared type were kept unchanged.
    """

    data: bytes
    mime_type: str
    original_size: int
    source_format: ImageFormat = ImageFormat.OTHER
    degraded: bool = False

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ImagePayload:
    """Encoded image bytes ready to be served, with their content type."""

    data: bytes
    media_type: str
