# backend/travelmap/routers/__init__.py
from .admin_routers import router as admin_router
from .auth_routers import router as auth_router
from .couple_image_routers import router as couple_image_router
from .health_routers import router as health_router
from .location_routers import router as location_router

__all__ = [
    "admin_router",
    "auth_router",
    "couple_image_router",
    "health_router",
    "location_router",
]
