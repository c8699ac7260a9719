# backend/travelmap/middleware/__init__.py
"""
Middleware package for FastAPI application.

Provides centralized error handling and request logging.
"""

from .error_handler import ErrorHandlerMiddleware
from .request_logger import RequestLoggerMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "RequestLoggerMiddleware",
]
