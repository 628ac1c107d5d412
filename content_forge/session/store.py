import logging
import time
from typing import Callable, Dict, List
from uuid import uuid4

from content_forge.session.controller import SessionController

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    def __init__(self, session_id: str) -> None:
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Unknown session: {self.session_id}"


class SessionStore:
    """In-memory registry of live sessions. Nothing outlives the process.

    Browsers do not always say goodbye, so sessions untouched for longer
    than ``idle_timeout`` seconds are closed on the next ``create``. A busy
    session is never evicted.
    """

    def __init__(
        self,
        factory: Callable[[], SessionController],
        idle_timeout: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._factory = factory
        self._idle_timeout = idle_timeout
        self._clock = clock
        self._sessions: Dict[str, SessionController] = {}
        self._last_seen: Dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(self) -> tuple[str, SessionController]:
        self.evict_idle()
        session_id = uuid4().hex
        controller = self._factory()
        self._sessions[session_id] = controller
        self._last_seen[session_id] = self._clock()
        logger.info("Session %s created", session_id)
        return session_id, controller

    def get(self, session_id: str) -> SessionController:
        try:
            controller = self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None
        self._last_seen[session_id] = self._clock()
        return controller

    def close(self, session_id: str) -> None:
        controller = self._sessions.pop(session_id, None)
        if controller is None:
            raise SessionNotFoundError(session_id)
        self._last_seen.pop(session_id, None)
        controller.close()
        logger.info("Session %s closed", session_id)

    def evict_idle(self) -> List[str]:
        if self._idle_timeout is None:
            return []
        now = self._clock()
        expired = [
            session_id
            for session_id, seen in self._last_seen.items()
            if now - seen > self._idle_timeout
            and not self._sessions[session_id].is_busy
        ]
        for session_id in expired:
            logger.info("Session %s idle, evicting", session_id)
            self.close(session_id)
        return expired

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.close(session_id)
