"""In-memory store of browser sessions.

Each page load creates a new TranslatorSession (and so a fresh provider
availability map). Sessions idle for longer than the TTL are dropped, and
the oldest are evicted when the store is full.
"""

import secrets
import time
from typing import Callable, Dict, Optional

from image_translator.state.translator_session import TranslatorSession
from image_translator.utils.logger import get_logger

logger = get_logger(__name__)

CLEANUP_INTERVAL = 50  # Cleanup every N new sessions

SessionFactory = Callable[[str], TranslatorSession]


class SessionStore:
    """Maps session ids to TranslatorSession objects."""

    def __init__(self, factory: SessionFactory, ttl_seconds: int, max_sessions: int) -> None:
        self._factory = factory
        self.ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions
        self._sessions: Dict[str, TranslatorSession] = {}
        self._created_counter = 0

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> TranslatorSession:
        """Start a new session with a random id."""
        session_id = secrets.token_urlsafe(16)
        session = self._factory(session_id)
        self._sessions[session_id] = session
        self._created_counter += 1

        logger.debug("Session started", session=session_id, total_sessions=len(self._sessions))

        if self._created_counter >= CLEANUP_INTERVAL:
            self._created_counter = 0
            self.cleanup_expired()

        if len(self._sessions) > self.max_sessions:
            self._evict_oldest()

        return session

    def get(self, session_id: Optional[str]) -> Optional[TranslatorSession]:
        """Return a live session, or None if unknown or expired."""
        if not session_id:
            return None

        session = self._sessions.get(session_id)
        if session is None:
            return None

        if time.time() - session.last_seen > self.ttl_seconds:
            logger.debug("Session expired", session=session_id)
            del self._sessions[session_id]
            return None

        session.touch()
        return session

    def get_or_create(self, session_id: Optional[str]) -> TranslatorSession:
        return self.get(session_id) or self.create()

    def cleanup_expired(self) -> int:
        """Remove expired sessions.

        Returns:
            Number of sessions removed
        """
        now = time.time()
        expired = [
            sid for sid, session in self._sessions.items()
            if now - session.last_seen > self.ttl_seconds
        ]
        for sid in expired:
            del self._sessions[sid]

        if expired:
            logger.info("Expired sessions cleaned up", removed=len(expired), remaining=len(self._sessions))
        return len(expired)

    def _evict_oldest(self) -> None:
        """Drop the least recently seen sessions until under the limit."""
        overflow = len(self._sessions) - self.max_sessions
        oldest = sorted(self._sessions.items(), key=lambda item: item[1].last_seen)[:overflow]
        for sid, _ in oldest:
            del self._sessions[sid]
        logger.warning("Session limit reached, evicted oldest", evicted=len(oldest))
