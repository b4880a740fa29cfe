from __future__ import annotations

from datetime import date, datetime, time
from typing import Dict, List, Optional, Protocol, Sequence

from ..domain import ChildSafetyInfo, CheckinRecord, NewCheckin, SessionInfo, StudentInfo


class RepositoryError(Exception):
    """Raised when the backing store failed to read or write."""


class SessionRepository(Protocol):
    def get(self, session_id: int) -> Optional[SessionInfo]:
        raise NotImplementedError

    def list_all(self, *, session_type: Optional[str] = None) -> Sequence[SessionInfo]:
        """Sessions ordered newest date first, then newest created first."""

        raise NotImplementedError

    def add(
        self,
        *,
        name: str,
        session_type: str,
        session_date: date,
        start_time: Optional[time] = None,
        location: Optional[str] = None,
        class_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
    ) -> SessionInfo:
        raise NotImplementedError

    def update_headcount(self, session_id: int, headcount: int) -> Optional[SessionInfo]:
        raise NotImplementedError

    def set_active(self, session_id: int, is_active: bool) -> Optional[SessionInfo]:
        raise NotImplementedError


class StudentRepository(Protocol):
    def get(self, student_id: int) -> Optional[StudentInfo]:
        raise NotImplementedError

    def list_all(self) -> Sequence[StudentInfo]:
        raise NotImplementedError

    def list_by_ids(self, student_ids: Sequence[int]) -> Sequence[StudentInfo]:
        raise NotImplementedError


class EnrollmentRepository(Protocol):
    def class_exists(self, class_id: int) -> bool:
        raise NotImplementedError

    def student_ids_for_class(self, class_id: int) -> List[int]:
        raise NotImplementedError


class ChildInfoRepository(Protocol):
    def list_for_students(self, student_ids: Sequence[int]) -> Sequence[ChildSafetyInfo]:
        raise NotImplementedError

    def get(self, student_id: int) -> Optional[ChildSafetyInfo]:
        raise NotImplementedError


class CheckinRepository(Protocol):
    def get(self, record_id: int) -> Optional[CheckinRecord]:
        raise NotImplementedError

    def list_for_session(self, session_id: int) -> Sequence[CheckinRecord]:
        """All records of a session, newest check-in first."""

        raise NotImplementedError

    def add(self, new: NewCheckin) -> CheckinRecord:
        raise NotImplementedError

    def add_many(self, new: Sequence[NewCheckin]) -> List[CheckinRecord]:
        """Write every row or none of them."""

        raise NotImplementedError

    def save_checkout(self, record: CheckinRecord) -> CheckinRecord:
        """Persist a record that was moved to ``CheckedOut``."""

        raise NotImplementedError

    def count_by_session(self) -> Dict[int, int]:
        raise NotImplementedError
