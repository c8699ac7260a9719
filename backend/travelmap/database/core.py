# backend/travelmap/database/core.py

"""
Async database core for composition-based architecture.

Provides connection pool management; operation classes receive an
instance of AsyncDatabase and use ``get_connection()`` for each unit of work.
"""

import asyncio
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from ..config import settings
from ..enums import LogEmoji, LoggerName, LogSource
from ..services.logger import get_service_logger
from ..utils.time_utils import utc_now

logger = get_service_logger(LoggerName.DATABASE, LogSource.DATABASE)


class AsyncDatabaseCore:
    """
    Core async database functionality.

    Each ``get_connection()`` block runs inside one transaction which is
    committed on normal exit and rolled back if the block raises.
    """

    def __init__(self, database_url: Optional[str] = None) -> None:
        self._database_url = database_url
        self._pool: Optional[AsyncConnectionPool] = None
        self._connection_attempts = 0
        self._failed_connections = 0
        self._last_health_check = None
        self._pool_created_at = None

    @property
    def database_url(self) -> str:
        return self._database_url or settings.database_url

    async def initialize(self) -> None:
        """
        Initialize the async connection pool.

        Must be called before using any database operations, typically
        during FastAPI application startup.

        Raises:
            psycopg.Error: If connection pool initialization fails
        """
        try:
            self._pool = AsyncConnectionPool(
                self.database_url,
                min_size=1,
                max_size=settings.db_pool_size,
                timeout=settings.db_pool_timeout,
                kwargs={
                    "row_factory": dict_row,
                    "connect_timeout": 15,
                },
                open=False,
            )
            await self._pool.open()
            self._pool_created_at = utc_now()
            self._connection_attempts = 0
            self._failed_connections = 0
            logger.info(
                "Database connection pool opened",
                extra_context={"max_size": settings.db_pool_size},
                emoji=LogEmoji.DATABASE,
            )
        except (psycopg.Error, ConnectionError, OSError) as e:
            self._failed_connections += 1
            self._pool = None
            logger.error("Failed to initialize async database pool", exception=e)
            raise

    async def close(self) -> None:
        """Close the connection pool and release all connections."""
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Database connection pool closed", emoji=LogEmoji.SHUTDOWN)

    @asynccontextmanager
    async def get_connection(self) -> AsyncGenerator[Any, None]:
        """
        Get an async database connection wrapped in a transaction.

        Yields:
            Connection: An async database connection with dict_row factory

        Raises:
            RuntimeError: If the pool has not been initialized

        Usage:
            async with db.get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute("SELECT * FROM locations")
                    rows = await cur.fetchall()
        """
        if not self._pool:
            raise RuntimeError("Database pool not initialized")

        self._connection_attempts += 1
        try:
            async with self._pool.connection() as conn:
                async with conn.transaction():
                    yield conn
        except psycopg.OperationalError:
            self._failed_connections += 1
            raise

    async def get_pool_stats(self) -> Dict[str, Any]:
        """
        Get connection pool statistics for monitoring.

        Returns:
            Dict containing pool status and connection counters
        """
        if not self._pool:
            return {"status": "not_initialized"}

        stats: Dict[str, Any] = {
            "status": "healthy",
            "pool_created_at": (
                self._pool_created_at.isoformat() if self._pool_created_at else None
            ),
            "connection_attempts": self._connection_attempts,
            "failed_connections": self._failed_connections,
            "configuration": {
                "max_size": settings.db_pool_size,
                "timeout": settings.db_pool_timeout,
            },
        }

        pool_stats = self._pool.get_stats()
        stats["pool_stats"] = {
            "pool_size": pool_stats.get("pool_size"),
            "pool_available": pool_stats.get("pool_available"),
            "requests_waiting": pool_stats.get("requests_waiting"),
        }
        return stats

    async def health_check(self, timeout: float = 5.0) -> Dict[str, Any]:
        """
        Check that the database answers a trivial query.

        Args:
            timeout: Maximum time to wait for the check to complete

        Returns:
            Dict containing health status and response time
        """
        if not self._pool:
            return {"status": "unhealthy", "error": "Pool not initialized"}

        start_time = time.time()

        try:
            async with asyncio.timeout(timeout):
                async with self.get_connection() as conn:
                    async with conn.cursor() as cur:
                        await cur.execute("SELECT NOW() AS database_time")
                        result = await cur.fetchone()

            self._last_health_check = utc_now()
            return {
                "status": "healthy",
                "response_time_ms": round((time.time() - start_time) * 1000, 2),
                "last_check": self._last_health_check.isoformat(),
                "database_time": (
                    result["database_time"].isoformat() if result else None
                ),
            }

        except asyncio.TimeoutError:
            return {
                "status": "unhealthy",
                "error": f"Health check timed out after {timeout}s",
                "response_time_ms": round((time.time() - start_time) * 1000, 2),
            }
        except (psycopg.Error, ConnectionError, RuntimeError) as e:
            return {
                "status": "unhealthy",
                "error": str(e),
                "response_time_ms": round((time.time() - start_time) * 1000, 2),
            }


# Composition-based database class for services and routers
AsyncDatabase = AsyncDatabaseCore
