#!/usr/bin/env python3
"""
Unit tests for CoupleImageService.
"""

import pytest

from travelmap.exceptions import ImageDecodeError
from travelmap.services.couple_image_service import (
    TRANSPARENT_PIXEL_PNG,
    CoupleImageService,
)


@pytest.fixture
def couple_image_service(image_pipeline, fake_couple_image_ops, fake_location_ops):
    return CoupleImageService(
        db=None,
        image_pipeline=image_pipeline,
        couple_image_ops=fake_couple_image_ops,
        location_ops=fake_location_ops,
    )


@pytest.mark.unit
class TestCoupleImageService:
    async def test_serves_stored_couple_image(
        self, couple_image_service, fake_couple_image_ops, small_png_bytes
    ):
        await fake_couple_image_ops.replace_couple_image(small_png_bytes, "image/png")

        payload = await couple_image_service.get_couple_image()

        assert payload.data == small_png_bytes
        assert payload.media_type == "image/png"

    async def test_falls_back_to_first_location_image(
        self, couple_image_service, fake_location_ops, jpeg_bytes
    ):
        fake_location_ops.add(None)
        fake_location_ops.add(jpeg_bytes, "image/jpeg")

        payload = await couple_image_service.get_couple_image()

        assert payload.data == jpeg_bytes
        assert payload.media_type == "image/jpeg"

    async def test_falls_back_to_transparent_pixel(self, couple_image_service):
        payload = await couple_image_service.get_couple_image()

        assert payload.data == TRANSPARENT_PIXEL_PNG
        assert payload.media_type == "image/png"
        assert payload.data.startswith(b"\x89PNG")

    async def test_replace_normalizes_upload(
        self, couple_image_service, fake_couple_image_ops, large_png_bytes
    ):
        result = await couple_image_service.replace_couple_image(
            large_png_bytes, "image/png", "us.png"
        )

        assert result.mime_type == "image/jpeg"
        assert result.original_size == len(large_png_bytes)
        assert fake_couple_image_ops.image_type == "image/jpeg"
        assert len(fake_couple_image_ops.image) == result.size

    async def test_replace_rejects_broken_heic(
        self, couple_image_service, fake_couple_image_ops
    ):
        with pytest.raises(ImageDecodeError):
            await couple_image_service.replace_couple_image(b"nope", "image/heic")

        assert fake_couple_image_ops.image is None
