"""Roster resolution: who can still be checked in to a session."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..core.constants import ROSTER_ALL_CHECKED_IN, ROSTER_NO_MATCHES
from ..core.exceptions import NotFoundError, PersistenceError
from ..core.logging_config import get_logger
from ..core.sanitization import normalize_search_query
from ..domain import ChildSafetyInfo, SessionInfo, StudentInfo
from ..repositories.base import (
    CheckinRepository,
    ChildInfoRepository,
    EnrollmentRepository,
    RepositoryError,
    SessionRepository,
    StudentRepository,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class RosterEntry:
    student: StudentInfo
    safety: Optional[ChildSafetyInfo] = None

    @property
    def allergies(self) -> List[str]:
        return list(self.safety.allergies) if self.safety else []

    @property
    def special_needs(self) -> Optional[str]:
        return self.safety.special_needs if self.safety else None


@dataclass(frozen=True)
class Roster:
    session: SessionInfo
    query: str
    entries: List[RosterEntry] = field(default_factory=list)

    @property
    def empty_message(self) -> Optional[str]:
        if self.entries:
            return None
        return ROSTER_NO_MATCHES if self.query else ROSTER_ALL_CHECKED_IN


def matches_query(student: StudentInfo, query: str) -> bool:
    """Case-insensitive substring match on the child's or guardian's name.

    ``query`` must already be normalized (lowercased).
    """
    if not query:
        return True
    return query in student.full_name.lower() or query in student.guardian_name.lower()


class RosterResolver:
    """Computes the students still eligible for check-in at a session."""

    def __init__(
        self,
        sessions: SessionRepository,
        students: StudentRepository,
        enrollments: EnrollmentRepository,
        checkins: CheckinRepository,
        child_info: ChildInfoRepository,
    ):
        self._sessions = sessions
        self._students = students
        self._enrollments = enrollments
        self._checkins = checkins
        self._child_info = child_info

    def resolve(self, session_id: int, query: Optional[str] = None) -> Roster:
        normalized = normalize_search_query(query)

        try:
            session = self._sessions.get(session_id)
            if session is None:
                raise NotFoundError("Check-in session not found")

            population = self._population(session)
            active_ids = {
                r.student_id
                for r in self._checkins.list_for_session(session.id)
                if r.is_active and r.student_id is not None
            }
            eligible = [
                s for s in population
                if s.id not in active_ids and matches_query(s, normalized)
            ]
            safety = self._safety_map([s.id for s in eligible])
        except RepositoryError as exc:
            logger.error("roster_fetch_failed", session_id=session_id, error=str(exc))
            raise PersistenceError("Failed to load check-in data") from exc

        eligible.sort(key=lambda s: (s.full_name.lower(), s.id))
        return Roster(
            session=session,
            query=normalized,
            entries=[RosterEntry(student=s, safety=safety.get(s.id)) for s in eligible],
        )

    def _population(self, session: SessionInfo) -> Sequence[StudentInfo]:
        if session.class_id is not None:
            enrolled = self._enrollments.student_ids_for_class(session.class_id)
            # A class with nobody enrolled yet falls back to the whole roster
            if enrolled:
                return self._students.list_by_ids(enrolled)
            logger.info("class_has_no_enrollments", session_id=session.id, class_id=session.class_id)
        return self._students.list_all()

    def _safety_map(self, student_ids: Sequence[int]) -> Dict[int, ChildSafetyInfo]:
        return {info.student_id: info for info in self._child_info.list_for_students(student_ids)}
