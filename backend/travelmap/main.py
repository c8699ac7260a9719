# backend/travelmap/main.py
"""
FastAPI application entry point for the travel map backend.

Startup applies database migrations, opens the connection pool and starts
the periodic session sweep; shutdown reverses those steps.
"""

import asyncio
import contextlib
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import settings
from .database import async_db
from .database.migrations import DatabaseInitializationError, initialize_database
from .dependencies import get_session_store
from .enums import LogEmoji, LoggerName, LogSource
from .middleware import ErrorHandlerMiddleware, RequestLoggerMiddleware
from .routers import (
    admin_router,
    auth_router,
    couple_image_router,
    health_router,
    location_router,
)
from .services.logger import configure_logging, get_service_logger
from .services.session_store import sweep_sessions_periodically

logger = get_service_logger(LoggerName.SYSTEM, LogSource.SYSTEM)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Handle application startup and shutdown"""
    configure_logging(level=settings.log_level, log_file=settings.log_file)

    logger.info(
        "Starting FastAPI application",
        extra_context={
            "operation": "application_startup",
            "environment": settings.environment,
            "api_host": settings.api_host,
            "api_port": settings.api_port,
        },
        emoji=LogEmoji.STARTUP,
    )

    if not settings.access_code:
        logger.warning("ACCESS_CODE is not set; logins will be refused")

    try:
        result = initialize_database()
        logger.info(
            f"Database initialized successfully: {result['method']}",
            extra_context={
                "operation": "database_initialization",
                "initialization_method": result["method"],
                "revision": result["current_revision"],
            },
            emoji=LogEmoji.DATABASE,
        )
        await async_db.initialize()

    except DatabaseInitializationError as e:
        logger.error(
            "Database initialization failed",
            exception=e,
            extra_context={"operation": "database_initialization"},
        )
        raise RuntimeError(f"Cannot start application: {e}") from e

    sweeper = asyncio.create_task(
        sweep_sessions_periodically(
            get_session_store(), settings.session_sweep_interval_seconds
        )
    )

    yield

    # Shutdown
    logger.info(
        "Shutting down FastAPI application",
        extra_context={"operation": "application_shutdown"},
        emoji=LogEmoji.SHUTDOWN,
    )

    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper

    await async_db.close()


app = FastAPI(
    title="Travel Map API",
    description="API for the password-gated travel map and its image pipeline",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add middleware stack (order matters: last added = first executed)
# 1. Request logging (inside the error handler so it sees the correlation ID)
app.add_middleware(RequestLoggerMiddleware)

# 2. Error handling (catches all errors escaping the routers)
app.add_middleware(ErrorHandlerMiddleware)

# 3. CORS middleware (outermost)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/api")
app.include_router(location_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(couple_image_router)
app.include_router(health_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "Travel Map API", "version": __version__, "docs": "/docs"}


if __name__ == "__main__":
    uvicorn.run(
        "travelmap.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.value.lower(),
    )
