"""Per-client service contexts.

Each browser client gets its own ``SessionContext`` owning a session tracker
and an attendance tracker. Contexts are created and ended explicitly through
a ``SessionRegistry`` instance; nothing here is module-level state. Contexts
not seen for longer than the registry's idle timeout are ended the next time
the registry hands out a context.
"""
import logging
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from eventease.core.config import settings
from eventease.services import AttendanceTracker, SessionTracker

logger = logging.getLogger(__name__)


class SessionContext:
    """The trackers scoped to one client session."""

    def __init__(self, session_id: str | None = None):
        self.session_id = session_id or uuid4().hex
        self.started_at = datetime.now(UTC)
        self.last_seen = self.started_at
        self.session = SessionTracker()
        self.attendance = AttendanceTracker()
        self.ended = False

    def touch(self) -> None:
        self.last_seen = datetime.now(UTC)

    def is_idle(self, timeout: timedelta, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) - self.last_seen > timeout

    def end(self) -> None:
        """Clear session state and detach every subscriber."""
        if self.ended:
            return
        self.session.clear_session()
        self.session.changed.clear()
        self.attendance.changed.clear()
        self.ended = True


class SessionRegistry:
    """Owns the live contexts, keyed by session id."""

    def __init__(self, idle_timeout: timedelta | None = None):
        self.idle_timeout = idle_timeout or timedelta(
            minutes=settings.session_idle_timeout_minutes
        )
        self._contexts: dict[str, SessionContext] = {}

    def __len__(self) -> int:
        return len(self._contexts)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._contexts

    def start(self) -> SessionContext:
        context = SessionContext()
        self._contexts[context.session_id] = context
        logger.info(f"Started session {context.session_id}")
        return context

    def get(self, session_id: str | None) -> SessionContext | None:
        if not session_id:
            return None
        return self._contexts.get(session_id)

    def get_or_start(self, session_id: str | None) -> SessionContext:
        """
        Return the context for ``session_id``, or start a fresh one.

        Idle contexts are ended first, so an expired session id starts a new
        context. The returned context is marked as seen.
        """
        self.end_idle()
        context = self.get(session_id)
        if context is None:
            context = self.start()
        context.touch()
        return context

    def end(self, session_id: str) -> bool:
        context = self._contexts.pop(session_id, None)
        if context is None:
            return False
        context.end()
        logger.info(f"Ended session {session_id}")
        return True

    def end_idle(self, now: datetime | None = None) -> int:
        """End every context idle for longer than ``idle_timeout``."""
        now = now or datetime.now(UTC)
        idle = [
            session_id
            for session_id, context in self._contexts.items()
            if context.is_idle(self.idle_timeout, now)
        ]
        for session_id in idle:
            self.end(session_id)
        if idle:
            logger.info(f"Ended {len(idle)} idle sessions")
        return len(idle)

    def end_all(self) -> None:
        for session_id in list(self._contexts):
            self.end(session_id)
