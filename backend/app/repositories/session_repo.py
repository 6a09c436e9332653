import threading
import time
import uuid
from collections import OrderedDict
from typing import Callable, List, Optional

from app.domain.session import SessionContext
from app.utils.logging import get_logger

log = get_logger("sessions")


class SessionRepository:
    """
    In-memory session contexts keyed by the session cookie value.

    Ids are only ever issued here: a cookie value we do not know gets a
    fresh session under a new id. The store is bounded by `max_sessions`
    (least recently used go first) and by `idle_seconds` via evict_idle().
    """

    def __init__(
        self,
        max_sessions: int = 10000,
        idle_seconds: int = 7200,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_sessions = max_sessions
        self.idle_seconds = idle_seconds
        self._clock = clock
        self._sessions: "OrderedDict[str, SessionContext]" = OrderedDict()
        self._last_seen = {}
        self._lock = threading.Lock()

    def _touch(self, session_id: str) -> None:
        self._sessions.move_to_end(session_id)
        self._last_seen[session_id] = self._clock()

    def get(self, session_id: Optional[str]) -> Optional[SessionContext]:
        if not session_id:
            return None
        with self._lock:
            ctx = self._sessions.get(session_id)
            if ctx:
                self._touch(session_id)
            return ctx

    def get_or_create(self, session_id: Optional[str] = None) -> SessionContext:
        with self._lock:
            ctx = self._sessions.get(session_id) if session_id else None
            if ctx:
                self._touch(session_id)
                return ctx
            ctx = SessionContext(session_id=uuid.uuid4().hex)
            self._sessions[ctx.session_id] = ctx
            self._touch(ctx.session_id)
            while len(self._sessions) > self.max_sessions:
                oldest = next(iter(self._sessions))
                self._drop_locked(oldest)
            return ctx

    def _drop_locked(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)
        self._last_seen.pop(session_id, None)

    def drop(self, session_id: str) -> None:
        with self._lock:
            self._drop_locked(session_id)

    def idle_ids(self) -> List[str]:
        cutoff = self._clock() - self.idle_seconds
        with self._lock:
            return [sid for sid, seen in self._last_seen.items() if seen <= cutoff]

    def evict_idle(self) -> List[str]:
        expired = self.idle_ids()
        for sid in expired:
            self.drop(sid)
        if expired:
            log.info(f"evicted {len(expired)} idle session(s)")
        return expired

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self):
        return len(self._sessions)
