# backend/travelmap/services/session_store.py
"""
Session Store - process-local login sessions.

A session is keyed by a random token and becomes authenticated after a
successful login. Sessions expire a fixed time after creation and are
removed by a periodic sweep.

The abstract SessionStore is the seam for alternative backends; the
application ships the in-memory implementation only.
"""

import asyncio
import secrets
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from ..enums import LogEmoji, LoggerName, LogSource
from ..utils.time_utils import utc_now
from .logger import get_service_logger

logger = get_service_logger(LoggerName.AUTH_SERVICE, LogSource.AUTH)

SESSION_TOKEN_BYTES = 16


@dataclass
class Session:
    """A login session."""

    session_id: str
    created_at: datetime
    expires_at: datetime
    authenticated: bool = False

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class SessionStore(ABC):
    """Abstract session store."""

    @abstractmethod
    def create(self) -> Session:
        """Create a new, unauthenticated session."""

    @abstractmethod
    def get(self, session_id: Optional[str]) -> Optional[Session]:
        """Return a live session, or None if missing or expired."""

    @abstractmethod
    def authenticate(self, session_id: Optional[str] = None) -> Session:
        """Mark a session authenticated, creating one if needed."""

    @abstractmethod
    def invalidate(self, session_id: Optional[str]) -> bool:
        """Remove a session. Returns True if it existed."""

    @abstractmethod
    def sweep_expired(self) -> int:
        """Remove expired sessions. Returns the number removed."""

    def validate(self, session_id: Optional[str]) -> bool:
        """True if the session exists, is live and is authenticated."""
        session = self.get(session_id)
        return session is not None and session.authenticated


class InMemorySessionStore(SessionStore):
    """
    Dictionary-backed session store.

    Sessions are lost on restart. Sync dependencies reach the store from
    worker threads while the sweeper runs on the event loop, so every
    mutation holds the store lock.
    """

    def __init__(
        self,
        timeout: timedelta = timedelta(hours=2),
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the store.

        Args:
            timeout: Lifetime of a session measured from its creation
            clock: Source of the current time
        """
        self.timeout = timeout
        self._clock = clock
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self) -> Session:
        now = self._clock()
        with self._lock:
            session_id = secrets.token_hex(SESSION_TOKEN_BYTES)
            while session_id in self._sessions:
                session_id = secrets.token_hex(SESSION_TOKEN_BYTES)

            session = Session(
                session_id=session_id,
                created_at=now,
                expires_at=now + self.timeout,
            )
            self._sessions[session_id] = session
        return session

    def get(self, session_id: Optional[str]) -> Optional[Session]:
        if not session_id:
            return None

        now = self._clock()
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None

            if session.is_expired(now):
                self._sessions.pop(session_id, None)
                return None

        return session

    def authenticate(self, session_id: Optional[str] = None) -> Session:
        session = self.get(session_id)
        if session is None:
            session = self.create()
        session.authenticated = True
        return session

    def invalidate(self, session_id: Optional[str]) -> bool:
        if not session_id:
            return False
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def sweep_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [
                session_id
                for session_id, session in self._sessions.items()
                if session.is_expired(now)
            ]
            for session_id in expired:
                self._sessions.pop(session_id, None)
            remaining = len(self._sessions)

        if expired:
            logger.debug(
                f"Swept {len(expired)} expired sessions",
                extra_context={"remaining": remaining},
                emoji=LogEmoji.CLEANUP,
            )
        return len(expired)


async def sweep_sessions_periodically(
    session_store: SessionStore, interval_seconds: float
) -> None:
    """Sweep expired sessions every ``interval_seconds`` until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            session_store.sweep_expired()
        except Exception as e:
            logger.error(
                "Session sweep failed",
                exception=e,
                extra_context={"operation": "sweep_expired"},
            )
