"""
Centralized Logger Service Module.

Usage:
    from travelmap.services.logger import get_service_logger
    from travelmap.enums import LoggerName, LogSource

    logger = get_service_logger(LoggerName.LOCATION_SERVICE, LogSource.API)
    logger.info("Location created", extra_context={"location_id": 7})
"""

from ...enums import LogEmoji, LoggerName, LogLevel, LogSource
from .logger_service import (
    ServiceLogger,
    configure_logging,
    get_service_logger,
    is_configured,
)

__all__ = [
    "ServiceLogger",
    "configure_logging",
    "get_service_logger",
    "is_configured",
    # Enums
    "LogLevel",
    "LogSource",
    "LoggerName",
    "LogEmoji",
]
