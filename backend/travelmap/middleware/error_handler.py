# backend/travelmap/middleware/error_handler.py
"""
Error handling middleware for FastAPI application.

Last line of defence: catches exceptions that escaped the routers, logs
them with a correlation ID and returns a JSON error body without exposing
internal details outside development.
"""

import traceback
import uuid

import psycopg
from fastapi import HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..config import settings
from ..database.exceptions import DatabaseOperationError
from ..enums import LogEmoji, LoggerName, LogSource
from ..services.logger import get_service_logger
from ..utils.time_utils import utc_now

logger = get_service_logger(LoggerName.ERROR_HANDLER, LogSource.MIDDLEWARE)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Centralized error handling middleware.

    Catches all unhandled exceptions, logs them with correlation IDs,
    and returns user-friendly error responses.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.debug_mode = settings.environment == "development"

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request and handle any errors that occur."""

        correlation_id = str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        try:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except Exception as exc:
            self._log_error(exc, request, correlation_id)
            return self._create_error_response(exc, correlation_id)

    def _log_error(self, exc: Exception, request: Request, correlation_id: str) -> None:
        """Log error with request context and correlation ID."""
        logger.error(
            f"Unhandled exception in {request.method} {request.url.path}",
            exception=exc,
            extra_context={
                "correlation_id": correlation_id,
                "exception_type": type(exc).__name__,
                "method": request.method,
                "path": request.url.path,
                "client_ip": getattr(request.client, "host", "unknown"),
            },
            emoji=LogEmoji.ERROR,
        )

    def _error_body(self, error_type: str, message: str, correlation_id: str) -> dict:
        return {
            "error": {
                "type": error_type,
                "message": message,
                "correlation_id": correlation_id,
                "timestamp": utc_now().isoformat(),
            }
        }

    def _create_error_response(
        self, exc: Exception, correlation_id: str
    ) -> JSONResponse:
        """Create appropriate error response based on exception type."""

        if isinstance(exc, HTTPException):
            return JSONResponse(
                status_code=exc.status_code,
                content=self._error_body("http_error", str(exc.detail), correlation_id),
            )

        if isinstance(exc, ValidationError):
            body = self._error_body(
                "validation_error", "Request validation failed", correlation_id
            )
            body["error"]["details"] = [
                {
                    "field": " -> ".join(str(loc) for loc in error["loc"]),
                    "message": error["msg"],
                    "type": error["type"],
                }
                for error in exc.errors()
            ]
            return JSONResponse(status_code=422, content=body)

        if isinstance(exc, psycopg.OperationalError):
            return JSONResponse(
                status_code=503,
                content=self._error_body(
                    "database_error",
                    "Database connection or operation failed",
                    correlation_id,
                ),
            )

        if isinstance(exc, (psycopg.Error, DatabaseOperationError)):
            return JSONResponse(
                status_code=500,
                content=self._error_body(
                    "database_error", "Database error occurred", correlation_id
                ),
            )

        body = self._error_body(
            "internal_error", "An internal server error occurred", correlation_id
        )
        if self.debug_mode:
            body["error"]["exception_type"] = type(exc).__name__
            body["error"]["exception_message"] = str(exc)
            body["error"]["traceback"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )
        return JSONResponse(status_code=500, content=body)
