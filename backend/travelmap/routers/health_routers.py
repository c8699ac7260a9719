# backend/travelmap/routers/health_routers.py
"""Liveness endpoint."""

from typing import Any, Dict

from fastapi import APIRouter

from ..dependencies import AsyncDatabaseDep
from ..utils.time_utils import utc_now

router = APIRouter(tags=["health"])


@router.get("/health", response_model=Dict[str, Any])
async def health_check(db: AsyncDatabaseDep) -> Dict[str, Any]:
    """
    Quick health check endpoint for load balancers and monitoring.

    Always answers 200 while the process is alive; database problems are
    reported as ``degraded``.
    """
    database = await db.health_check()
    return {
        "status": "healthy" if database["status"] == "healthy" else "degraded",
        "database": database,
        "pool": await db.get_pool_stats(),
        "timestamp": utc_now().isoformat(),
    }
