#!/usr/bin/env python3
"""
Unit tests for LocationService with in-memory operations.
"""

import pytest

from travelmap.exceptions import ImageDecodeError
from travelmap.models.location_model import LocationCreate, LocationUpdate
from travelmap.services.location_service import LocationService


def location_data(model=LocationCreate, **overrides):
    payload = {
        "title": "Kyoto",
        "description": None,
        "date": "2019-04",
        "latitude": 35.0116,
        "longitude": 135.7681,
    }
    payload.update(overrides)
    return model.model_validate(payload)


@pytest.fixture
def location_service(counting_pipeline, fake_location_ops):
    return LocationService(
        db=None, image_pipeline=counting_pipeline, location_ops=fake_location_ops
    )


@pytest.mark.unit
class TestLocationService:
    async def test_create_stores_normalized_image_and_thumbnail(
        self, location_service, fake_location_ops, jpeg_bytes
    ):
        location = await location_service.create_location(
            location_data(), jpeg_bytes, "image/jpeg", "kyoto.jpg"
        )

        row = fake_location_ops.rows[location.id]
        assert location.title == "Kyoto"
        assert location.has_image and location.has_thumbnail
        assert row["image_type"] == "image/jpeg"
        assert row["image"].startswith(b"\xff\xd8\xff")
        assert row["thumbnail"].startswith(b"\x89PNG")

    async def test_create_rejects_undecodable_heic(
        self, location_service, fake_location_ops
    ):
        with pytest.raises(ImageDecodeError):
            await location_service.create_location(
                location_data(), b"broken", "image/heic", "IMG.HEIC"
            )

        assert fake_location_ops.rows == {}

    async def test_create_without_thumbnail_when_generation_fails(
        self, location_service, fake_location_ops
    ):
        location = await location_service.create_location(
            location_data(), b"GIF89a-not-really", "image/gif"
        )

        row = fake_location_ops.rows[location.id]
        assert row["image"] == b"GIF89a-not-really"
        assert row["image_type"] == "image/gif"
        assert row["thumbnail"] is None

    async def test_update_without_image_keeps_stored_image(
        self, location_service, fake_location_ops, counting_pipeline, jpeg_bytes
    ):
        location_id = fake_location_ops.add(jpeg_bytes, thumbnail=b"thumb")

        location = await location_service.update_location(
            location_id, location_data(LocationUpdate, title="Osaka")
        )

        assert location.title == "Osaka"
        assert fake_location_ops.rows[location_id]["image"] == jpeg_bytes
        assert fake_location_ops.rows[location_id]["thumbnail"] == b"thumb"
        assert counting_pipeline.normalize_calls == 0

    async def test_update_with_image_replaces_thumbnail(
        self, location_service, fake_location_ops, small_png_bytes
    ):
        location_id = fake_location_ops.add(b"old", thumbnail=b"old-thumb")

        await location_service.update_location(
            location_id,
            location_data(LocationUpdate),
            image=small_png_bytes,
            declared_mime="image/png",
        )

        row = fake_location_ops.rows[location_id]
        assert row["image"] == small_png_bytes
        assert row["image_type"] == "image/png"
        assert row["thumbnail"] not in (None, b"old-thumb")

    async def test_update_missing_location(self, location_service):
        assert (
            await location_service.update_location(99, location_data(LocationUpdate))
            is None
        )

    async def test_update_missing_location_skips_image_processing(
        self, location_service, counting_pipeline, jpeg_bytes
    ):
        location = await location_service.update_location(
            99,
            location_data(LocationUpdate),
            image=jpeg_bytes,
            declared_mime="image/jpeg",
        )

        assert location is None
        assert counting_pipeline.normalize_calls == 0
        assert counting_pipeline.thumbnail_calls == 0

    async def test_delete(self, location_service, fake_location_ops):
        location_id = fake_location_ops.add(b"img")

        assert await location_service.delete_location(location_id)
        assert not await location_service.delete_location(location_id)

    async def test_get_location_image_uses_stored_type(
        self, location_service, fake_location_ops, small_png_bytes
    ):
        location_id = fake_location_ops.add(small_png_bytes, image_type=None)

        payload = await location_service.get_location_image(location_id)

        assert payload.data == small_png_bytes
        assert payload.media_type == "image/png"
        assert await location_service.get_location_image(404) is None

    async def test_marker_thumbnail_served_from_storage(
        self, location_service, fake_location_ops, counting_pipeline, jpeg_bytes
    ):
        thumbnail = counting_pipeline.make_thumbnail(jpeg_bytes)
        location_id = fake_location_ops.add(jpeg_bytes, thumbnail=thumbnail)
        counting_pipeline.thumbnail_calls = 0

        payload = await location_service.get_marker_thumbnail(location_id)

        assert payload.data == thumbnail
        assert payload.media_type == "image/png"
        assert counting_pipeline.thumbnail_calls == 0

    async def test_marker_thumbnail_generated_and_stored_on_first_read(
        self, location_service, fake_location_ops, counting_pipeline, jpeg_bytes
    ):
        location_id = fake_location_ops.add(jpeg_bytes)

        first = await location_service.get_marker_thumbnail(location_id)
        second = await location_service.get_marker_thumbnail(location_id)

        assert first.media_type == "image/png"
        assert second.data == first.data
        assert fake_location_ops.thumbnail_updates == [location_id]
        assert counting_pipeline.thumbnail_calls == 1

    async def test_marker_thumbnail_served_when_store_fails(
        self, location_service, fake_location_ops, jpeg_bytes
    ):
        location_id = fake_location_ops.add(jpeg_bytes)
        fake_location_ops.fail_thumbnail_writes = True

        payload = await location_service.get_marker_thumbnail(location_id)

        assert payload.media_type == "image/png"
        assert fake_location_ops.rows[location_id]["thumbnail"] is None

    async def test_marker_falls_back_to_full_image(
        self, location_service, fake_location_ops
    ):
        location_id = fake_location_ops.add(b"opaque", image_type="image/webp")

        payload = await location_service.get_marker_thumbnail(location_id)

        assert payload.data == b"opaque"
        assert payload.media_type == "image/webp"

    async def test_marker_for_missing_location(self, location_service):
        assert await location_service.get_marker_thumbnail(404) is None
