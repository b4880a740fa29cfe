"""Live counts for a check-in session."""
from __future__ import annotations

from ..core.exceptions import NotFoundError, PersistenceError, ValidationError
from ..core.logging_config import get_logger
from ..domain import SessionInfo, SessionSummary
from ..repositories.base import CheckinRepository, RepositoryError, SessionRepository

logger = get_logger(__name__)


class SessionSummaryView:
    """Recomputes the session counters from the ledger on every read.

    The headcount is typed in by a volunteer counting heads in the room and
    is stored on the session as-is; it is expected to differ from the ledger.
    """

    def __init__(self, sessions: SessionRepository, checkins: CheckinRepository):
        self._sessions = sessions
        self._checkins = checkins

    def summarize(self, session_id: int) -> SessionSummary:
        try:
            session = self._sessions.get(session_id)
            if session is None:
                raise NotFoundError("Check-in session not found")
            records = self._checkins.list_for_session(session_id)
        except RepositoryError as exc:
            logger.error("summary_fetch_failed", session_id=session_id, error=str(exc))
            raise PersistenceError("Failed to load check-in data") from exc

        active = sum(1 for r in records if r.is_active)
        return SessionSummary(session=session, checked_in=active, checked_out=len(records) - active)

    def update_headcount(self, session_id: int, headcount: int) -> SessionInfo:
        if isinstance(headcount, bool) or not isinstance(headcount, int):
            raise ValidationError("Headcount must be a whole number")
        if headcount < 0:
            raise ValidationError("Headcount cannot be negative")

        try:
            session = self._sessions.update_headcount(session_id, headcount)
        except RepositoryError as exc:
            logger.error("headcount_update_failed", session_id=session_id, error=str(exc))
            raise PersistenceError("Failed to update headcount") from exc

        if session is None:
            raise NotFoundError("Check-in session not found")
        logger.info("headcount_updated", session_id=session_id, headcount=headcount)
        return session
