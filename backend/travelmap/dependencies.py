# backend/travelmap/dependencies.py
"""
Dependency Injection for the travel map backend.

Architecture:
- Process-wide singletons for the image pipeline and the session store
- Request-scoped services built from the shared async database
- Annotated dependency types for routers
"""

from datetime import timedelta
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status

from .config import settings
from .database import async_db
from .database.core import AsyncDatabase
from .services.admin_service import AdminService
from .services.auth_service import AuthService
from .services.couple_image_service import CoupleImageService
from .services.image_pipeline import ImagePipeline, create_image_pipeline
from .services.location_service import LocationService
from .services.session_store import InMemorySessionStore, SessionStore

_image_pipeline: Optional[ImagePipeline] = None
_session_store: Optional[SessionStore] = None


async def get_async_database() -> AsyncDatabase:
    """Get async database instance."""
    return async_db


def get_image_pipeline() -> ImagePipeline:
    """Get the ImagePipeline singleton configured from settings."""
    global _image_pipeline
    if _image_pipeline is None:
        _image_pipeline = create_image_pipeline(settings)
    return _image_pipeline


def get_session_store() -> SessionStore:
    """Get the process-local session store singleton."""
    global _session_store
    if _session_store is None:
        _session_store = InMemorySessionStore(
            timeout=timedelta(minutes=settings.session_timeout_minutes)
        )
    return _session_store


AsyncDatabaseDep = Annotated[AsyncDatabase, Depends(get_async_database)]
ImagePipelineDep = Annotated[ImagePipeline, Depends(get_image_pipeline)]
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]


async def get_location_service(
    db: AsyncDatabaseDep, image_pipeline: ImagePipelineDep
) -> LocationService:
    return LocationService(db, image_pipeline)


async def get_admin_service(
    db: AsyncDatabaseDep, image_pipeline: ImagePipelineDep
) -> AdminService:
    return AdminService(db, image_pipeline)


async def get_couple_image_service(
    db: AsyncDatabaseDep, image_pipeline: ImagePipelineDep
) -> CoupleImageService:
    return CoupleImageService(db, image_pipeline)


def get_auth_service(session_store: SessionStoreDep) -> AuthService:
    return AuthService(session_store, settings.access_code)


def get_session_id(request: Request) -> Optional[str]:
    """Session token from the session cookie, or the query parameter of the same name."""
    return request.cookies.get(
        settings.session_cookie_name
    ) or request.query_params.get(settings.session_cookie_name)


LocationServiceDep = Annotated[LocationService, Depends(get_location_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
CoupleImageServiceDep = Annotated[
    CoupleImageService, Depends(get_couple_image_service)
]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
SessionIdDep = Annotated[Optional[str], Depends(get_session_id)]


def require_authenticated_session(
    auth_service: AuthServiceDep, session_id: SessionIdDep
) -> str:
    """Reject requests without an authenticated, unexpired session."""
    if not session_id or not auth_service.is_authenticated(session_id):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return session_id


AuthenticatedSessionDep = Annotated[str, Depends(require_authenticated_session)]
