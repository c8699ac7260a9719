#!/usr/bin/env python3
"""
Unit tests for AdminService batch operations, stats and reset.
"""

import pytest

from travelmap.database.exceptions import LocationOperationError
from travelmap.services.admin_service import AdminService


@pytest.fixture
def admin_service(counting_pipeline, fake_location_ops, fake_couple_image_ops):
    return AdminService(
        db=None,
        image_pipeline=counting_pipeline,
        location_ops=fake_location_ops,
        couple_image_ops=fake_couple_image_ops,
    )


@pytest.mark.unit
class TestOptimizeImages:
    async def test_only_rows_that_shrink_are_updated(
        self, admin_service, fake_location_ops, small_png_bytes, image_factory
    ):
        # High-quality noisy JPEG shrinks when re-encoded at quality 80
        big_jpeg = image_factory("JPEG", size=(400, 300), quality=100, noise=True)
        shrinkable = fake_location_ops.add(big_jpeg, "image/jpeg")
        # Small PNG passes through unchanged
        unchanged = fake_location_ops.add(small_png_bytes, "image/png")

        result = await admin_service.optimize_images()

        assert result.total == 2
        assert result.optimized_count == 1
        assert result.failed_count == 0
        assert result.bytes_saved == (
            len(big_jpeg) - len(fake_location_ops.rows[shrinkable]["image"])
        )
        assert fake_location_ops.image_updates == [shrinkable]
        assert fake_location_ops.rows[unchanged]["image"] == small_png_bytes

    async def test_already_optimized_jpeg_is_left_alone(
        self, admin_service, fake_location_ops, counting_pipeline, image_factory
    ):
        # Low-quality noisy JPEG grows when re-encoded at quality 80
        tiny_jpeg = image_factory("JPEG", size=(300, 300), quality=10, noise=True)
        location_id = fake_location_ops.add(tiny_jpeg, "image/jpeg")

        result = await admin_service.optimize_images()

        assert result.optimized_count == 0
        assert fake_location_ops.image_updates == []
        assert fake_location_ops.rows[location_id]["image"] == tiny_jpeg
        assert counting_pipeline.normalize_calls == 1

    async def test_corrupt_rows_are_counted_as_failed(
        self, admin_service, fake_location_ops
    ):
        fake_location_ops.add(b"\xff\xd8\xff broken", "image/jpeg")
        fake_location_ops.add(b"broken heic", "image/heic")

        result = await admin_service.optimize_images()

        assert result.total == 2
        assert result.failed_count == 2
        assert result.optimized_count == 0
        assert fake_location_ops.image_updates == []

    async def test_missing_image_type_is_sniffed(
        self, admin_service, fake_location_ops, image_factory
    ):
        big_jpeg = image_factory("JPEG", size=(400, 300), quality=100, noise=True)
        location_id = fake_location_ops.add(big_jpeg, image_type=None)

        result = await admin_service.optimize_images()

        assert result.optimized_count == 1
        assert fake_location_ops.rows[location_id]["image_type"] == "image/jpeg"

    async def test_empty_database(self, admin_service):
        result = await admin_service.optimize_images()

        assert result.total == 0
        assert result.success


@pytest.mark.unit
class TestGenerateThumbnails:
    async def test_generates_for_every_image(
        self, admin_service, fake_location_ops, jpeg_bytes
    ):
        first = fake_location_ops.add(jpeg_bytes)
        second = fake_location_ops.add(jpeg_bytes, thumbnail=b"stale")
        fake_location_ops.add(None)

        result = await admin_service.generate_thumbnails()

        assert result.total == 2
        assert result.generated_count == 2
        assert fake_location_ops.thumbnail_updates == [first, second]
        assert fake_location_ops.rows[second]["thumbnail"] != b"stale"

    async def test_failures_are_counted_and_batch_continues(
        self, admin_service, fake_location_ops, jpeg_bytes
    ):
        fake_location_ops.add(b"not an image")
        good = fake_location_ops.add(jpeg_bytes)

        result = await admin_service.generate_thumbnails()

        assert result.generated_count == 1
        assert result.failed_count == 1
        assert fake_location_ops.thumbnail_updates == [good]

    async def test_database_errors_are_counted(
        self, admin_service, fake_location_ops, jpeg_bytes
    ):
        fake_location_ops.add(jpeg_bytes)
        fake_location_ops.fail_thumbnail_writes = True

        result = await admin_service.generate_thumbnails()

        assert result.failed_count == 1
        assert result.generated_count == 0


@pytest.mark.unit
class TestStatsAndReset:
    async def test_stats_include_couple_image(
        self, admin_service, fake_location_ops, fake_couple_image_ops
    ):
        fake_location_ops.add(b"x" * 100, thumbnail=b"t" * 10)
        fake_location_ops.add(b"y" * 50)
        await fake_couple_image_ops.replace_couple_image(b"c" * 25, "image/png")

        stats = await admin_service.get_stats()

        assert stats.location_count == 2
        assert stats.storage_bytes == 175
        assert stats.thumbnail_bytes == 10
        assert stats.missing_thumbnails == 1
        assert stats.has_couple_image

    async def test_reset_database(
        self, admin_service, fake_location_ops, fake_couple_image_ops
    ):
        fake_location_ops.add(b"x")
        fake_location_ops.add(b"y")
        await fake_couple_image_ops.replace_couple_image(b"c", "image/png")

        result = await admin_service.reset_database()

        assert result.deleted_locations == 2
        assert result.deleted_couple_images == 1
        assert fake_location_ops.rows == {}
        assert fake_couple_image_ops.image is None

    async def test_stats_propagate_database_errors(self, admin_service, monkeypatch):
        async def broken():
            raise LocationOperationError("boom", operation="get_storage_stats")

        monkeypatch.setattr(admin_service.location_ops, "get_storage_stats", broken)

        with pytest.raises(LocationOperationError):
            await admin_service.get_stats()
