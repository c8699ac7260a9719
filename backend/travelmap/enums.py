# backend/travelmap/enums.py
"""
Enum definitions for the travel map backend.

Type-safe constants shared by the image pipeline, the logger and the
HTTP layer.
"""

from enum import Enum


class LogLevel(str, Enum):
    """Log level constants for centralized logging system."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogSource(str, Enum):
    """Log source constants for identifying log origins."""

    API = "api"
    SYSTEM = "system"
    DATABASE = "database"
    PIPELINE = "pipeline"
    MIDDLEWARE = "middleware"
    AUTH = "auth"


class LogEmoji(str, Enum):
    """Type-safe emoji constants for log messages."""

    INCOMING = "📥"
    OUTGOING = "📤"
    SUCCESS = "✅"
    FAILED = "❌"
    WARNING = "⚠️"
    ERROR = "🚨"
    INFO = "ℹ️"
    DEBUG = "🔍"
    STARTUP = "🚀"
    SHUTDOWN = "🛑"
    IMAGE = "🖼️"
    THUMBNAIL = "🔵"
    DATABASE = "🗄️"
    CLEANUP = "🧹"
    LOCK = "🔒"


class LoggerName(str, Enum):
    """Logger name constants for categorizing log entries."""

    # API/Request loggers
    REQUEST_LOGGER = "request_logger"
    ERROR_HANDLER = "error_handler"
    MIDDLEWARE = "middleware"
    API = "api"

    # Pipeline loggers
    IMAGE_PIPELINE = "image_pipeline"

    # Service loggers
    LOCATION_SERVICE = "location_service"
    ADMIN_SERVICE = "admin_service"
    AUTH_SERVICE = "auth_service"

    # System loggers
    SYSTEM = "system"
    DATABASE = "database"


class ImageFormat(str, Enum):
    """
    Closed set of image formats recognised by the ingestion pipeline.

    Parsed once from the declared MIME type at the upload boundary.
    """

    JPEG = "jpeg"
    PNG = "png"
    HEIC = "heic"
    HEIF = "heif"
    OTHER = "other"

    @property
    def is_heif_family(self) -> bool:
        return self in (ImageFormat.HEIC, ImageFormat.HEIF)


class ThumbnailStyle(str, Enum):
    """Thumbnail rendering style."""

    SQUARE = "square"  # cover-fit JPEG
    CIRCLE = "circle"  # cover-fit PNG with circular alpha mask
