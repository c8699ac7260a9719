#!/usr/bin/env python3
"""
Unit tests for ImageNormalizer.

Covers the format policy: HEIC/HEIF conversion (fatal on failure), JPEG
re-encoding, large-PNG conversion and pass-through of everything else.
"""

from io import BytesIO

import pytest
from PIL import Image

from travelmap.enums import ImageFormat
from travelmap.exceptions import ImageDecodeError
from travelmap.services.image_pipeline import ImageNormalizer
from travelmap.services.image_pipeline.utils.constants import DEFAULT_MIME_TYPE


def decoded_format(data: bytes) -> str:
    with Image.open(BytesIO(data)) as img:
        return img.format


@pytest.mark.unit
@pytest.mark.image_pipeline
class TestImageNormalizer:
    @pytest.fixture
    def normalizer(self):
        return ImageNormalizer(quality=80)

    def test_jpeg_is_reencoded_as_jpeg(self, normalizer, jpeg_bytes):
        result = normalizer.normalize(jpeg_bytes, "image/jpeg", "photo.jpg")

        assert result.mime_type == "image/jpeg"
        assert result.source_format is ImageFormat.JPEG
        assert result.original_size == len(jpeg_bytes)
        assert not result.degraded
        assert decoded_format(result.data) == "JPEG"

    def test_jpeg_normalization_is_format_idempotent(self, normalizer, jpeg_bytes):
        first = normalizer.normalize(jpeg_bytes, "image/jpeg")
        second = normalizer.normalize(first.data, first.mime_type)

        assert second.mime_type == "image/jpeg"
        assert decoded_format(second.data) == "JPEG"

    def test_large_png_is_converted_to_jpeg(self, normalizer, large_png_bytes):
        assert len(large_png_bytes) > normalizer.png_conversion_threshold

        result = normalizer.normalize(large_png_bytes, "image/png", "map.png")

        assert result.mime_type == "image/jpeg"
        assert result.source_format is ImageFormat.PNG
        assert decoded_format(result.data) == "JPEG"

    def test_small_png_passes_through(self, normalizer, small_png_bytes):
        result = normalizer.normalize(small_png_bytes, "image/png")

        assert result.data == small_png_bytes
        assert result.mime_type == "image/png"
        assert result.size == result.original_size

    def test_transparent_png_is_flattened_onto_white(self):
        img = Image.new("RGBA", (40, 40), (0, 0, 0, 0))
        buffer = BytesIO()
        img.save(buffer, "PNG")

        result = ImageNormalizer(png_conversion_threshold=0).normalize(
            buffer.getvalue(), "image/png"
        )

        assert result.mime_type == "image/jpeg"
        with Image.open(BytesIO(result.data)) as converted:
            red, green, blue = converted.convert("RGB").getpixel((20, 20))
        assert min(red, green, blue) > 245

    def test_other_formats_pass_through(self, normalizer):
        gif = BytesIO()
        Image.new("P", (10, 10)).save(gif, "GIF")
        data = gif.getvalue()

        result = normalizer.normalize(data, "image/gif")

        assert result.data == data
        assert result.mime_type == "image/gif"
        assert result.source_format is ImageFormat.OTHER

    def test_missing_mime_type_defaults_to_octet_stream(self, normalizer):
        result = normalizer.normalize(b"opaque bytes", None)

        assert result.data == b"opaque bytes"
        assert result.mime_type == DEFAULT_MIME_TYPE

    def test_corrupt_jpeg_degrades_to_original(self, normalizer):
        data = b"\xff\xd8\xff\xe0 definitely not a jpeg"

        result = normalizer.normalize(data, "image/jpeg")

        assert result.degraded
        assert result.data == data
        assert result.mime_type == "image/jpeg"
        assert result.size == result.original_size

    def test_corrupt_large_png_degrades_to_original(self):
        data = b"\x89PNG\r\n\x1a\n" + b"\x00" * 2048

        result = ImageNormalizer(png_conversion_threshold=1024).normalize(
            data, "image/png"
        )

        assert result.degraded
        assert result.data == data
        assert result.mime_type == "image/png"

    @pytest.mark.parametrize("declared_mime", ["image/heic", "image/heif"])
    def test_corrupt_heif_raises_decode_error(self, normalizer, declared_mime):
        with pytest.raises(ImageDecodeError) as exc_info:
            normalizer.normalize(b"not really a heic file", declared_mime)

        assert "JPG or PNG" in exc_info.value.user_message

    def test_heic_detected_from_extension_raises_on_garbage(self, normalizer):
        with pytest.raises(ImageDecodeError):
            normalizer.normalize(b"garbage", "application/octet-stream", "IMG.HEIC")

    def test_heic_is_converted_to_jpeg(self, normalizer):
        buffer = BytesIO()
        try:
            Image.new("RGB", (64, 64), "green").save(buffer, "HEIF")
        except Exception as e:
            pytest.skip(f"HEIF encoder unavailable: {e}")

        result = normalizer.normalize(buffer.getvalue(), "image/heic", "IMG.HEIC")

        assert result.mime_type == "image/jpeg"
        assert result.source_format is ImageFormat.HEIC
        assert decoded_format(result.data) == "JPEG"

    def test_quality_is_clamped(self):
        assert ImageNormalizer(quality=500).quality == 95
        assert ImageNormalizer(quality=0).quality == 1
