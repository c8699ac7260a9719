# backend/travelmap/middleware/request_logger.py
"""
Request logging middleware for FastAPI application.

Provides structured request/response logging with timing, correlation IDs
and security-conscious data handling.
"""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..enums import LogEmoji, LoggerName, LogSource
from ..services.logger import get_service_logger

logger = get_service_logger(LoggerName.REQUEST_LOGGER, LogSource.MIDDLEWARE)

SLOW_REQUEST_SECONDS = 5.0

# Query parameters never written to the logs
REDACTED_QUERY_PARAMS = {"session_id"}


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware with performance metrics.

    Logs all requests with timing and status codes.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

        # Paths to exclude from logging
        self.exclude_paths = {
            "/health",
            "/docs",
            "/redoc",
            "/openapi.json",
            "/favicon.ico",
        }

    def _query_params(self, request: Request) -> dict:
        return {
            key: ("***" if key in REDACTED_QUERY_PARAMS else value)
            for key, value in request.query_params.items()
        }

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request and log details with timing."""

        if request.url.path in self.exclude_paths:
            return await call_next(request)

        start_time = time.time()
        correlation_id = getattr(request.state, "correlation_id", "unknown")

        logger.debug(
            f"{request.method} {request.url.path}",
            extra_context={
                "correlation_id": correlation_id,
                "event_type": "request_start",
                "query_params": self._query_params(request),
                "content_length": request.headers.get("content-length"),
                "content_type": request.headers.get("content-type"),
            },
            emoji=LogEmoji.INCOMING,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = round((time.time() - start_time) * 1000, 2)
            logger.error(
                f"{request.method} {request.url.path} -> FAILED ({duration_ms}ms)",
                extra_context={
                    "correlation_id": correlation_id,
                    "event_type": "request_failed",
                    "exception_type": type(exc).__name__,
                },
            )
            # Re-raise exception for error handler
            raise

        duration = time.time() - start_time
        duration_ms = round(duration * 1000, 2)
        message = (
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration_ms}ms)"
        )
        extra_context = {
            "correlation_id": correlation_id,
            "event_type": "request_complete",
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }

        if response.status_code >= 500:
            logger.error(message, extra_context=extra_context)
        elif response.status_code >= 400 or duration > SLOW_REQUEST_SECONDS:
            logger.warning(message, extra_context=extra_context)
        else:
            logger.info(message, extra_context=extra_context, emoji=LogEmoji.OUTGOING)

        return response
