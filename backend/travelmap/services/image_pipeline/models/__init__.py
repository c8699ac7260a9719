# backend/travelmap/services/image_pipeline/models/__init__.py
from .pipeline_results import ImagePayload, NormalizedImage

__all__ = ["ImagePayload", "NormalizedImage"]
