"""
Session Store - in-memory conversational state keyed by an opaque session id
"""
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from config.bmc_sections import CanvasSection, section_for_progress
from errors import SessionNotFound
from models.session import (
    MODE_BMC,
    ROLE_ASSISTANT,
    ROLE_USER,
    VALID_MODES,
    ChatMessage,
    Session,
)

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Owns the mapping from session id to Session.

    One instance is created at process start and shared by every component
    that needs it. There is no locking: two concurrent requests mutating the
    same session id race and the last write wins.
    """

    def __init__(
        self,
        max_sessions: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._sessions: Dict[str, Session] = {}
        self.max_sessions = max_sessions
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def count(self) -> int:
        return len(self._sessions)

    def _new_session(self, session_id: str, mode: str = MODE_BMC) -> Session:
        if self.max_sessions and len(self._sessions) >= self.max_sessions:
            oldest_id = min(self._sessions, key=lambda sid: self._sessions[sid].created_at)
            del self._sessions[oldest_id]
            logger.info(f"Session cap {self.max_sessions} reached, evicted oldest session {oldest_id}")
        session = Session(session_id=session_id, mode=mode, created_at=self._clock())
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: str, mode: str = MODE_BMC) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            session = self._new_session(session_id, mode)
            logger.debug(f"Created session {session_id} in {mode} mode")
        return session

    def require(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def start(self, session_id: str) -> Session:
        """Replace any existing state for session_id with a fresh canvas session."""
        self._sessions.pop(session_id, None)
        return self._new_session(session_id, MODE_BMC)

    def set_mode(self, session_id: str, mode: str) -> Session:
        if mode not in VALID_MODES:
            raise ValueError(f"Unknown mode '{mode}'. Expected one of: {', '.join(VALID_MODES)}")
        session = self.get_or_create(session_id, mode)
        session.mode = mode
        return session

    def record_user_message(self, session_id: str, text: str) -> ChatMessage:
        message = ChatMessage(role=ROLE_USER, content=text, created_at=self._clock())
        self.get_or_create(session_id).chat.append(message)
        return message

    def record_assistant_message(self, session_id: str, text: str) -> ChatMessage:
        message = ChatMessage(role=ROLE_ASSISTANT, content=text, created_at=self._clock())
        self.get_or_create(session_id).chat.append(message)
        return message

    def current_section(self, session_id: str) -> CanvasSection:
        return section_for_progress(self.require(session_id).progress)

    def record_answer(self, session_id: str, section_key: str, text: str) -> int:
        """Store an answer under section_key and advance progress by exactly one."""
        session = self.require(session_id)
        session.answers[section_key] = text
        session.progress += 1
        return session.progress

    def sweep_expired(self, now: Optional[datetime] = None, ttl: timedelta = timedelta(hours=2)) -> int:
        """Remove every session created before now - ttl. Returns the number removed."""
        now = now or self._clock()
        cutoff = now - ttl
        expired = [sid for sid, session in self._sessions.items() if session.created_at < cutoff]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"🧹 Swept {len(expired)} expired session(s)")
        return len(expired)


class SessionSweeper:
    """Background task that periodically expires old sessions."""

    def __init__(self, store: SessionStore, interval_seconds: float, ttl_seconds: float):
        self.store = store
        self.interval_seconds = interval_seconds
        self.ttl = timedelta(seconds=ttl_seconds)
        self._task: Optional[asyncio.Task] = None

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.store.sweep_expired(ttl=self.ttl)
            except Exception as e:
                logger.error(f"Session sweep failed: {e}", exc_info=True)

    def start(self):
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._run())
            logger.info(
                f"Session sweeper started (interval={self.interval_seconds}s, ttl={self.ttl.total_seconds()}s)"
            )

    async def stop(self):
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
