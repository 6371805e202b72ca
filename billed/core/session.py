"""Explicit session state for the connected user.

A ``UserSession`` is created at login and cleared at logout. The HTTP layer keeps sessions in a
``SessionRegistry`` keyed by a cookie value and injects the current one into the controllers.
"""

import secrets
import threading

from billed.core.models import User
from billed.core.utils import get_logger

logger = get_logger("billed.session")


class UserSession:
    """The connected user for one browser session."""

    def __init__(self, session_id: str, user: User) -> None:
        """Bind a user to a session identifier."""
        self.session_id = session_id
        self.user: User | None = user

    @property
    def email(self) -> str | None:
        """Email of the connected user, if any."""
        return self.user.email if self.user else None

    @property
    def is_active(self) -> bool:
        """Whether the session still holds a user."""
        return self.user is not None

    def clear(self) -> None:
        """Forget the connected user."""
        self.user = None


class SessionRegistry:
    """In-memory registry of live sessions."""

    def __init__(self) -> None:
        """Create an empty registry."""
        self._sessions: dict[str, UserSession] = {}
        self._lock = threading.Lock()

    def login(self, user: User) -> UserSession:
        """Open a session for ``user`` and return it."""
        session = UserSession(secrets.token_urlsafe(24), user)
        with self._lock:
            self._sessions[session.session_id] = session
        logger.info(f"Session opened for {user.email} ({user.type})")
        return session

    def get(self, session_id: str | None) -> UserSession | None:
        """Return the active session for ``session_id``, if any."""
        if not session_id:
            return None
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None or not session.is_active:
            return None
        return session

    def logout(self, session_id: str | None) -> None:
        """Clear and drop the session for ``session_id``."""
        if not session_id:
            return
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is not None:
            logger.info(f"Session closed for {session.email}")
            session.clear()
