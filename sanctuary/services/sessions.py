"""Check-in session administration."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Callable, List, Optional

from ..core.constants import DEFAULT_SESSION_TYPE, SESSION_TYPES
from ..core.exceptions import NotFoundError, PersistenceError, ValidationError
from ..core.logging_config import get_logger
from ..core.sanitization import normalize_search_query, sanitize_location, sanitize_session_name
from ..core.utils import utcnow
from ..domain import SessionInfo
from ..repositories.base import CheckinRepository, EnrollmentRepository, RepositoryError, SessionRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionListing:
    session: SessionInfo
    checkin_count: int


class SessionAdmin:
    def __init__(
        self,
        sessions: SessionRepository,
        checkins: CheckinRepository,
        classes: EnrollmentRepository,
        *,
        today: Callable[[], date] = lambda: utcnow().date(),
    ):
        self._sessions = sessions
        self._checkins = checkins
        self._classes = classes
        self._today = today

    def create_session(
        self,
        name: str,
        session_type: str = DEFAULT_SESSION_TYPE,
        session_date: Optional[date] = None,
        start_time: Optional[time] = None,
        location: Optional[str] = None,
        class_id: Optional[int] = None,
    ) -> SessionInfo:
        clean_name = sanitize_session_name(name)
        if session_type not in SESSION_TYPES:
            raise ValidationError(f"Session type must be one of: {', '.join(SESSION_TYPES)}")

        try:
            if class_id is not None and not self._classes.class_exists(class_id):
                raise NotFoundError("Class not found")
            session = self._sessions.add(
                name=clean_name,
                session_type=session_type,
                session_date=session_date or self._today(),
                start_time=start_time,
                location=sanitize_location(location),
                class_id=class_id,
            )
        except RepositoryError as exc:
            logger.error("session_create_failed", name=clean_name, error=str(exc))
            raise PersistenceError("Failed to create session") from exc

        logger.info("session_created", session_id=session.id, session_type=session.session_type)
        return session

    def get_session(self, session_id: int) -> SessionInfo:
        try:
            session = self._sessions.get(session_id)
        except RepositoryError as exc:
            raise PersistenceError("Failed to load session") from exc
        if session is None:
            raise NotFoundError("Check-in session not found")
        return session

    def list_sessions(self, search: Optional[str] = None, session_type: Optional[str] = None) -> List[SessionListing]:
        """Sessions, newest first, with their total check-in counts.

        ``search`` matches the session name or location; ``session_type`` of
        None or "all" disables the type filter.
        """
        query = normalize_search_query(search)
        type_filter = None if session_type in (None, "", "all") else session_type

        try:
            sessions = self._sessions.list_all(session_type=type_filter)
            counts = self._checkins.count_by_session()
        except RepositoryError as exc:
            logger.error("session_list_failed", error=str(exc))
            raise PersistenceError("Failed to load sessions") from exc

        return [
            SessionListing(session=s, checkin_count=counts.get(s.id, 0))
            for s in sessions
            if not query or query in s.name.lower() or query in (s.location or "").lower()
        ]

    def toggle_active(self, session_id: int) -> SessionInfo:
        """Start an ended session or end a running one."""
        current = self.get_session(session_id)
        try:
            updated = self._sessions.set_active(session_id, not current.is_active)
        except RepositoryError as exc:
            logger.error("session_update_failed", session_id=session_id, error=str(exc))
            raise PersistenceError("Failed to update session") from exc
        if updated is None:
            raise NotFoundError("Check-in session not found")

        logger.info("session_started" if updated.is_active else "session_ended", session_id=session_id)
        return updated
