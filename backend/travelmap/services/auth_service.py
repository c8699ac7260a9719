# backend/travelmap/services/auth_service.py
"""
Auth Service - shared access-code login on top of a session store.
"""

import secrets
from typing import Optional

from ..enums import LogEmoji, LoggerName, LogSource
from ..exceptions import AuthenticationError, ConfigurationError
from ..models.shared_models import SessionStatus
from .logger import get_service_logger
from .session_store import Session, SessionStore

logger = get_service_logger(LoggerName.AUTH_SERVICE, LogSource.AUTH)


class AuthService:
    """
    Access-code authentication service.

    Responsibilities:
    - Verify the shared access code
    - Authenticate, report and invalidate sessions
    """

    def __init__(self, session_store: SessionStore, access_code: str):
        """
        Initialize AuthService.

        Args:
            session_store: Store holding login sessions
            access_code: Shared access code; an empty code disables login
        """
        self.session_store = session_store
        self.access_code = access_code

    def verify_access_code(self, candidate: str) -> bool:
        """Constant-time comparison against the configured access code."""
        if not self.access_code:
            raise ConfigurationError("No access code configured")
        return secrets.compare_digest(
            candidate.encode("utf-8"), self.access_code.encode("utf-8")
        )

    def login(self, access_code: str, session_id: Optional[str] = None) -> Session:
        """
        Log in with the shared access code.

        Args:
            access_code: Code entered by the visitor
            session_id: Existing session token, reused when still live

        Returns:
            The authenticated session

        Raises:
            AuthenticationError: If the access code is wrong
            ConfigurationError: If no access code is configured
        """
        if not self.verify_access_code(access_code):
            logger.warning("Login attempt with invalid access code", emoji=LogEmoji.LOCK)
            raise AuthenticationError("Invalid access code")

        session = self.session_store.authenticate(session_id)
        logger.info("Session authenticated", emoji=LogEmoji.LOCK)
        return session

    def logout(self, session_id: Optional[str]) -> bool:
        return self.session_store.invalidate(session_id)

    def is_authenticated(self, session_id: Optional[str]) -> bool:
        return self.session_store.validate(session_id)

    def get_session_status(self, session_id: Optional[str]) -> SessionStatus:
        session = self.session_store.get(session_id)
        if session is None:
            return SessionStatus(authenticated=False)
        return SessionStatus(
            authenticated=session.authenticated,
            session_id=session.session_id,
            expires_at=session.expires_at,
        )
