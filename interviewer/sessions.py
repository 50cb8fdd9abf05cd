import logging
import time
import uuid
from typing import Dict, Optional

from interviewer.models import InterviewSession

logger = logging.getLogger("interviewer.sessions")


class SessionStore:
    """In-memory interview sessions keyed by session id.

    Expiry slides: every lookup of a live session pushes its deadline out by
    ``ttl_seconds``. Expired sessions are purged lazily on access.
    """

    def __init__(self, ttl_seconds: int, clock=time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, InterviewSession] = {}

    def __len__(self):
        return len(self._sessions)

    @staticmethod
    def new_session_id() -> str:
        return uuid.uuid4().hex

    def _expired(self, session: InterviewSession, now: float) -> bool:
        return now - session.last_seen > self.ttl_seconds

    def get(self, session_id: Optional[str]) -> Optional[InterviewSession]:
        """Return the live session for ``session_id`` and refresh its expiry."""
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is None:
            return None
        now = self._clock()
        if self._expired(session, now):
            logger.info("Session %s expired", session_id)
            del self._sessions[session_id]
            return None
        session.last_seen = now
        return session

    def get_or_create(self, session_id: Optional[str]) -> InterviewSession:
        self.purge_expired()
        session = self.get(session_id)
        if session is None:
            now = self._clock()
            session = InterviewSession(
                session_id=session_id or self.new_session_id(),
                created_at=now,
                last_seen=now,
            )
            self._sessions[session.session_id] = session
            logger.info("Created session %s", session.session_id)
        return session

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        now = self._clock()
        expired = [sid for sid, s in list(self._sessions.items()) if self._expired(s, now)]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Purged %d expired session(s)", len(expired))
        return len(expired)
