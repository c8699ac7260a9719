# backend/travelmap/services/image_pipeline/utils/image_utils.py
"""
Image Pipeline Utility Functions

Pure helpers around Pillow: format parsing, decoding, cover-fit cropping,
circular masking and encoding. Nothing here touches the database or disk.
"""

from io import BytesIO
from pathlib import Path
from typing import Optional

import pillow_heif
from PIL import Image, ImageChops, ImageDraw, ImageOps

from ....enums import ImageFormat
from .constants import (
    GENERIC_MIME_TYPES,
    HEIC_EXTENSIONS,
    HEIC_MIME_TYPES,
    HEIF_EXTENSIONS,
    HEIF_MIME_TYPES,
    JPEG_BACKGROUND_COLOR,
    JPEG_MIME_TYPES,
    PNG_MIME_TYPES,
)

# Lets Image.open() decode HEIC/HEIF payloads
pillow_heif.register_heif_opener()

HEIF_BRANDS = {b"heic", b"heix", b"hevc", b"hevx", b"heim", b"heis", b"mif1", b"msf1"}


def parse_image_format(
    declared_mime: Optional[str], filename: Optional[str] = None
) -> ImageFormat:
    """
    Parse the declared MIME type of an upload into an ImageFormat.

    The filename extension is consulted only when the declared type is
    missing or generic, and only to recognise HEIC/HEIF.

    Args:
        declared_mime: Content type sent by the client (may include parameters)
        filename: Original filename, if known

    Returns:
        The parsed ImageFormat (OTHER when unrecognised)
    """
    mime = (declared_mime or "").split(";")[0].strip().lower()

    if mime in JPEG_MIME_TYPES:
        return ImageFormat.JPEG
    if mime in PNG_MIME_TYPES:
        return ImageFormat.PNG
    if mime in HEIC_MIME_TYPES:
        return ImageFormat.HEIC
    if mime in HEIF_MIME_TYPES:
        return ImageFormat.HEIF

    if mime in GENERIC_MIME_TYPES and filename:
        suffix = Path(filename).suffix.lower()
        if suffix in HEIC_EXTENSIONS:
            return ImageFormat.HEIC
        if suffix in HEIF_EXTENSIONS:
            return ImageFormat.HEIF

    return ImageFormat.OTHER


def detect_mime_type(data: bytes) -> Optional[str]:
    """
    Sniff a MIME type from the leading bytes of an encoded image.

    Returns:
        The detected MIME type, or None if the signature is unknown
    """
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith((b"GIF87a", b"GIF89a")):
        return "image/gif"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    if data[4:8] == b"ftyp" and data[8:12] in HEIF_BRANDS:
        return "image/heic"
    return None


def open_image(data: bytes) -> Image.Image:
    """
    Decode image bytes and apply EXIF orientation.

    Raises:
        PIL.UnidentifiedImageError / OSError: if the bytes cannot be decoded
    """
    img = Image.open(BytesIO(data))
    img.load()
    transposed = ImageOps.exif_transpose(img)
    return transposed if transposed is not None else img


def _flatten_to_rgb(img: Image.Image) -> Image.Image:
    """Convert to RGB, compositing any transparency onto a white background."""
    if img.mode in ("RGB", "L"):
        return img

    if img.mode in ("RGBA", "LA") or (
        img.mode == "P" and "transparency" in img.info
    ):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, JPEG_BACKGROUND_COLOR)
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background

    return img.convert("RGB")


def encode_jpeg(img: Image.Image, quality: int) -> bytes:
    """Encode an image as an optimized JPEG."""
    img = _flatten_to_rgb(img)
    buffer = BytesIO()
    img.save(buffer, "JPEG", quality=quality, optimize=True)
    return buffer.getvalue()


def encode_png(img: Image.Image) -> bytes:
    """Encode an image as an optimized PNG."""
    buffer = BytesIO()
    img.save(buffer, "PNG", optimize=True)
    return buffer.getvalue()


def cover_fit(img: Image.Image, size: int) -> Image.Image:
    """
    Scale and centre-crop an image to a size x size square.

    The shorter side is scaled to ``size`` and the overflow of the longer
    side is cropped equally from both ends.
    """
    if img.mode not in ("RGB", "RGBA", "L", "LA"):
        img = img.convert("RGBA")
    return ImageOps.fit(
        img, (size, size), method=Image.Resampling.LANCZOS, centering=(0.5, 0.5)
    )


def apply_circle_mask(img: Image.Image) -> Image.Image:
    """
    Keep only the pixels inside the inscribed circle of a square image.

    Pixels outside the circle become fully transparent; pixels inside keep
    their original alpha.
    """
    rgba = img.convert("RGBA")
    mask = Image.new("L", rgba.size, 0)
    ImageDraw.Draw(mask).ellipse((0, 0, rgba.width - 1, rgba.height - 1), fill=255)
    rgba.putalpha(ImageChops.multiply(rgba.getchannel("A"), mask))
    return rgba
