# backend/travelmap/services/image_pipeline/generators/__init__.py
from .image_normalizer import ImageNormalizer
from .thumbnail_generator import ThumbnailGenerator

__all__ = ["ImageNormalizer", "ThumbnailGenerator"]
