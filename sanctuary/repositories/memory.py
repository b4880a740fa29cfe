"""In-memory repositories for tests and local demos."""
from __future__ import annotations

from collections import Counter
from dataclasses import replace
from datetime import date, datetime, time
from itertools import count
from typing import Dict, Iterable, List, Optional, Sequence

from ..core.utils import utcnow
from ..domain import ChildSafetyInfo, CheckinRecord, NewCheckin, SessionInfo, StudentInfo
from .base import RepositoryError


class InMemorySessionRepository:
    def __init__(self, sessions: Iterable[SessionInfo] = ()):
        self._rows: Dict[int, SessionInfo] = {s.id: s for s in sessions}
        self._ids = count(max(self._rows, default=0) + 1)

    def get(self, session_id: int) -> Optional[SessionInfo]:
        return self._rows.get(session_id)

    def list_all(self, *, session_type: Optional[str] = None) -> Sequence[SessionInfo]:
        rows = [s for s in self._rows.values() if not session_type or s.session_type == session_type]
        return sorted(
            rows,
            key=lambda s: (s.session_date, s.created_at.timestamp() if s.created_at else 0.0, s.id),
            reverse=True,
        )

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
        session = SessionInfo(
            id=next(self._ids),
            name=name,
            session_type=session_type,
            session_date=session_date,
            start_time=start_time,
            location=location,
            class_id=class_id,
            created_at=created_at or utcnow(),
        )
        self._rows[session.id] = session
        return session

    def update_headcount(self, session_id: int, headcount: int) -> Optional[SessionInfo]:
        session = self._rows.get(session_id)
        if session is None:
            return None
        self._rows[session_id] = replace(session, headcount=headcount)
        return self._rows[session_id]

    def set_active(self, session_id: int, is_active: bool) -> Optional[SessionInfo]:
        session = self._rows.get(session_id)
        if session is None:
            return None
        self._rows[session_id] = replace(session, is_active=is_active)
        return self._rows[session_id]


class InMemoryStudentRepository:
    def __init__(self, students: Iterable[StudentInfo] = ()):
        self._rows: Dict[int, StudentInfo] = {s.id: s for s in students}

    def get(self, student_id: int) -> Optional[StudentInfo]:
        return self._rows.get(student_id)

    def list_all(self) -> Sequence[StudentInfo]:
        return sorted(self._rows.values(), key=lambda s: s.full_name)

    def list_by_ids(self, student_ids: Sequence[int]) -> Sequence[StudentInfo]:
        wanted = set(student_ids)
        return [s for s in self.list_all() if s.id in wanted]


class InMemoryEnrollmentRepository:
    def __init__(self, enrollments: Optional[Dict[int, List[int]]] = None):
        self._by_class: Dict[int, List[int]] = {k: list(v) for k, v in (enrollments or {}).items()}

    def class_exists(self, class_id: int) -> bool:
        return class_id in self._by_class

    def student_ids_for_class(self, class_id: int) -> List[int]:
        return list(self._by_class.get(class_id, []))


class InMemoryChildInfoRepository:
    def __init__(self, infos: Iterable[ChildSafetyInfo] = ()):
        self._rows: Dict[int, ChildSafetyInfo] = {i.student_id: i for i in infos}

    def get(self, student_id: int) -> Optional[ChildSafetyInfo]:
        return self._rows.get(student_id)

    def list_for_students(self, student_ids: Sequence[int]) -> Sequence[ChildSafetyInfo]:
        return [self._rows[i] for i in student_ids if i in self._rows]


class InMemoryCheckinRepository:
    """Ledger store kept in a dict.

    Set ``fail_writes`` to make every write raise RepositoryError without
    touching the stored rows.
    """

    def __init__(self):
        self._rows: Dict[int, CheckinRecord] = {}
        self._ids = count(1)
        self.fail_writes = False

    def get(self, record_id: int) -> Optional[CheckinRecord]:
        return self._rows.get(record_id)

    def list_for_session(self, session_id: int) -> Sequence[CheckinRecord]:
        rows = [r for r in self._rows.values() if r.session_id == session_id]
        return sorted(rows, key=lambda r: (r.checkin_time, r.id), reverse=True)

    def add(self, new: NewCheckin) -> CheckinRecord:
        return self.add_many([new])[0]

    def add_many(self, new: Sequence[NewCheckin]) -> List[CheckinRecord]:
        if self.fail_writes:
            raise RepositoryError("add_checkins failed")
        created = [
            CheckinRecord(
                id=next(self._ids),
                session_id=item.session_id,
                security_code=item.security_code,
                checkin_time=item.checkin_time,
                student_id=item.student_id,
                guest_name=item.guest_name,
                notes=item.notes,
            )
            for item in new
        ]
        for record in created:
            self._rows[record.id] = record
        return created

    def save_checkout(self, record: CheckinRecord) -> CheckinRecord:
        if self.fail_writes:
            raise RepositoryError("save_checkout failed")
        if record.id not in self._rows:
            raise RepositoryError(f"Check-in {record.id} disappeared")
        self._rows[record.id] = record
        return record

    def count_by_session(self) -> Dict[int, int]:
        return dict(Counter(r.session_id for r in self._rows.values()))
