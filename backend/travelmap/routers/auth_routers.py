# backend/travelmap/routers/auth_routers.py
"""
Access-code login HTTP endpoints.

Role: Session login, logout and status
Interactions: Uses AuthService; the session token travels in a cookie
"""

from fastapi import APIRouter, HTTPException, Response, status

from ..config import settings
from ..dependencies import AuthServiceDep, SessionIdDep
from ..exceptions import AuthenticationError
from ..models.shared_models import LoginRequest, SessionStatus
from ..utils.response_helpers import ResponseFormatter
from ..utils.router_helpers import handle_exceptions

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=SessionStatus)
@handle_exceptions("log in")
async def login(
    login_request: LoginRequest,
    response: Response,
    auth_service: AuthServiceDep,
    session_id: SessionIdDep,
) -> SessionStatus:
    """Verify the shared access code and authenticate the caller's session."""
    try:
        session = auth_service.login(login_request.access_code, session_id)
    except AuthenticationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid access code"
        )

    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.session_id,
        max_age=settings.session_timeout_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.environment == "production",
    )
    response.headers["Cache-Control"] = "no-store"
    return SessionStatus(
        authenticated=True,
        session_id=session.session_id,
        expires_at=session.expires_at,
    )


@router.post("/logout")
@handle_exceptions("log out")
async def logout(
    response: Response, auth_service: AuthServiceDep, session_id: SessionIdDep
):
    """Invalidate the caller's session."""
    auth_service.logout(session_id)
    response.delete_cookie(settings.session_cookie_name)
    return ResponseFormatter.success("Logged out")


@router.get("/session", response_model=SessionStatus)
@handle_exceptions("check session")
async def get_session(
    response: Response, auth_service: AuthServiceDep, session_id: SessionIdDep
) -> SessionStatus:
    """Report whether the caller's session is authenticated."""
    response.headers["Cache-Control"] = "no-store"
    return auth_service.get_session_status(session_id)
