"""
In-memory registry of open wizard sessions.

Each session owns one WorkflowController. Sessions are private to the user
that opened them, expire after a period of inactivity, and the oldest is
evicted once the registry is full.
"""

import logging
import threading
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Optional

from application.wizard.controller import WorkflowController

logger = logging.getLogger(__name__)


@dataclass
class WizardSession:
    session_id: str
    owner_id: str
    controller: WorkflowController
    last_access: float = field(default_factory=time.monotonic)


class WizardSessionStore:
    """
    Thread-safe session registry.

    Usage:
        >>> store = WizardSessionStore(ttl_seconds=3600)
        >>> session = store.create(controller, owner_id="coach-1")
        >>> store.get(session.session_id, "coach-1") is session
        True
    """

    def __init__(
        self,
        ttl_seconds: int = 3600,
        max_sessions: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._max_sessions = max_sessions
        self._clock = clock
        self._sessions: "OrderedDict[str, WizardSession]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, controller: WorkflowController, owner_id: str) -> WizardSession:
        session = WizardSession(
            session_id=str(uuid.uuid4()),
            owner_id=owner_id,
            controller=controller,
            last_access=self._clock(),
        )
        with self._lock:
            self._purge_expired_locked()
            while len(self._sessions) >= self._max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.warning(f"Session registry full, evicted wizard session {evicted_id}")
            self._sessions[session.session_id] = session
        logger.info(f"Wizard session {session.session_id} opened for {owner_id}")
        return session

    def get(self, session_id: str, owner_id: str) -> Optional[WizardSession]:
        """Return the caller's live session, refreshing its idle timer."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if self._is_expired(session):
                del self._sessions[session_id]
                logger.info(f"Wizard session {session_id} expired")
                return None
            if session.owner_id != owner_id:
                return None
            session.last_access = self._clock()
            self._sessions.move_to_end(session_id)
            return session

    def remove(self, session_id: str, owner_id: str) -> bool:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or session.owner_id != owner_id:
                return False
            del self._sessions[session_id]
        logger.info(f"Wizard session {session_id} closed")
        return True

    def purge_expired(self) -> int:
        with self._lock:
            return self._purge_expired_locked()

    def _is_expired(self, session: WizardSession) -> bool:
        return self._clock() - session.last_access > self._ttl

    def _purge_expired_locked(self) -> int:
        expired = [sid for sid, s in self._sessions.items() if self._is_expired(s)]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            logger.info(f"Purged {len(expired)} expired wizard session(s)")
        return len(expired)
