#!/usr/bin/env python3
"""
Unit tests for ThumbnailGenerator.

Tests the marker thumbnail generation functionality including:
- Square cover-fit JPEG thumbnails
- Circular PNG thumbnails with transparent corners
- Failure reporting for undecodable input
"""

from io import BytesIO

import pytest
from PIL import Image

from travelmap.enums import ThumbnailStyle
from travelmap.services.image_pipeline import ThumbnailGenerator


@pytest.mark.unit
@pytest.mark.image_pipeline
class TestThumbnailGenerator:
    """Test suite for ThumbnailGenerator component."""

    @pytest.fixture
    def thumbnail_generator(self):
        return ThumbnailGenerator(size=200, quality=85)

    def test_square_thumbnail_is_200px_jpeg(self, thumbnail_generator, jpeg_bytes):
        thumbnail = thumbnail_generator.generate_thumbnail(
            jpeg_bytes, ThumbnailStyle.SQUARE
        )

        assert thumbnail is not None
        with Image.open(BytesIO(thumbnail)) as img:
            assert img.format == "JPEG"
            assert img.size == (200, 200)

    def test_circle_thumbnail_has_transparent_corners(
        self, thumbnail_generator, jpeg_bytes
    ):
        thumbnail = thumbnail_generator.generate_thumbnail(
            jpeg_bytes, ThumbnailStyle.CIRCLE
        )

        assert thumbnail is not None
        with Image.open(BytesIO(thumbnail)) as img:
            assert img.format == "PNG"
            assert img.size == (200, 200)
            rgba = img.convert("RGBA")

        for corner in [(0, 0), (199, 0), (0, 199), (199, 199)]:
            assert rgba.getpixel(corner)[3] == 0
        assert rgba.getpixel((100, 100))[3] == 255

    def test_portrait_source_is_cropped_square(self, thumbnail_generator):
        buffer = BytesIO()
        Image.new("RGB", (300, 900), "purple").save(buffer, "PNG")

        thumbnail = thumbnail_generator.generate_thumbnail(
            buffer.getvalue(), ThumbnailStyle.SQUARE
        )

        with Image.open(BytesIO(thumbnail)) as img:
            assert img.size == (200, 200)

    def test_size_override(self, thumbnail_generator, small_png_bytes):
        thumbnail = thumbnail_generator.generate_thumbnail(
            small_png_bytes, ThumbnailStyle.CIRCLE, size=64
        )

        with Image.open(BytesIO(thumbnail)) as img:
            assert img.size == (64, 64)

    def test_undecodable_input_returns_none(self, thumbnail_generator):
        assert thumbnail_generator.generate_thumbnail(b"not an image") is None
        assert thumbnail_generator.generate_thumbnail(b"") is None

    def test_default_style_is_circle(self, thumbnail_generator, jpeg_bytes):
        thumbnail = thumbnail_generator.generate_thumbnail(jpeg_bytes)

        with Image.open(BytesIO(thumbnail)) as img:
            assert img.format == "PNG"

    @pytest.mark.parametrize("style", [ThumbnailStyle.SQUARE, ThumbnailStyle.CIRCLE])
    def test_thumbnail_stays_within_raw_rgba_size(
        self, thumbnail_generator, image_factory, style
    ):
        noisy = image_factory("JPEG", size=(1200, 800), quality=95, noise=True)

        thumbnail = thumbnail_generator.generate_thumbnail(noisy, style)

        assert thumbnail is not None
        assert len(thumbnail) <= 200 * 200 * 4
