"""SQLAlchemy implementations of the repository interfaces."""
from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Dict, List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.logging_config import get_logger
from ..core.utils import to_utc
from ..db.models import Checkin, CheckinSession, ChildInfo, SchoolClass, Student, StudentClass
from ..domain import (
    Active,
    CheckedOut,
    ChildSafetyInfo,
    CheckinRecord,
    NewCheckin,
    SessionInfo,
    StudentInfo,
)
from .base import RepositoryError

logger = get_logger(__name__)


@contextmanager
def _guard(db: Session, operation: str):
    """Roll back and raise RepositoryError when the database call fails."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("repository_error", operation=operation, error=str(exc))
        raise RepositoryError(f"{operation} failed") from exc


def _session_info(row: CheckinSession) -> SessionInfo:
    return SessionInfo(
        id=row.id,
        name=row.name,
        session_type=row.session_type,
        session_date=row.session_date,
        location=row.location,
        class_id=row.class_id,
        headcount=row.headcount or 0,
        is_active=bool(row.is_active),
        start_time=row.start_time,
        end_time=row.end_time,
        notes=row.notes,
        created_at=to_utc(row.created_at) if row.created_at else None,
    )


def _student_info(row: Student) -> StudentInfo:
    return StudentInfo(
        id=row.id,
        full_name=row.full_name,
        guardian_name=row.guardian_name,
        guardian_phone=row.guardian_phone,
        date_of_birth=row.date_of_birth,
        photo_url=row.photo_url,
    )


def _safety_info(row: ChildInfo) -> ChildSafetyInfo:
    return ChildSafetyInfo(
        student_id=row.student_id,
        allergies=list(row.allergies or []),
        medical_conditions=list(row.medical_conditions or []),
        special_needs=row.special_needs,
        authorized_pickups=list(row.authorized_pickups or []),
        emergency_contact_name=row.emergency_contact_name,
        emergency_contact_phone=row.emergency_contact_phone,
    )


def _checkin_record(row: Checkin) -> CheckinRecord:
    if row.is_checked_out:
        # Rows written before checkout_time existed have no stamp; fall back to check-in time
        status = CheckedOut(at=to_utc(row.checkout_time or row.checkin_time))
    else:
        status = Active()
    return CheckinRecord(
        id=row.id,
        session_id=row.session_id,
        security_code=row.security_code,
        checkin_time=to_utc(row.checkin_time),
        status=status,
        student_id=row.student_id,
        guest_name=row.guest_name,
        notes=row.notes,
    )


class SqlSessionRepository:
    def __init__(self, db: Session):
        self._db = db

    def get(self, session_id: int) -> Optional[SessionInfo]:
        with _guard(self._db, "get_session"):
            row = self._db.get(CheckinSession, session_id)
            return _session_info(row) if row else None

    def list_all(self, *, session_type: Optional[str] = None) -> Sequence[SessionInfo]:
        with _guard(self._db, "list_sessions"):
            query = self._db.query(CheckinSession)
            if session_type:
                query = query.filter(CheckinSession.session_type == session_type)
            rows = query.order_by(
                CheckinSession.session_date.desc(),
                CheckinSession.created_at.desc(),
                CheckinSession.id.desc(),
            ).all()
            return [_session_info(r) for r in rows]

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
        with _guard(self._db, "add_session"):
            row = CheckinSession(
                name=name,
                session_type=session_type,
                session_date=session_date,
                start_time=start_time,
                location=location,
                class_id=class_id,
                is_active=True,
                headcount=0,
            )
            if created_at is not None:
                row.created_at = created_at
            self._db.add(row)
            self._db.commit()
            self._db.refresh(row)
            return _session_info(row)

    def update_headcount(self, session_id: int, headcount: int) -> Optional[SessionInfo]:
        with _guard(self._db, "update_headcount"):
            row = self._db.get(CheckinSession, session_id)
            if not row:
                return None
            row.headcount = headcount
            self._db.commit()
            self._db.refresh(row)
            return _session_info(row)

    def set_active(self, session_id: int, is_active: bool) -> Optional[SessionInfo]:
        with _guard(self._db, "set_session_active"):
            row = self._db.get(CheckinSession, session_id)
            if not row:
                return None
            row.is_active = is_active
            self._db.commit()
            self._db.refresh(row)
            return _session_info(row)


class SqlStudentRepository:
    def __init__(self, db: Session):
        self._db = db

    def get(self, student_id: int) -> Optional[StudentInfo]:
        with _guard(self._db, "get_student"):
            row = self._db.get(Student, student_id)
            return _student_info(row) if row else None

    def list_all(self) -> Sequence[StudentInfo]:
        with _guard(self._db, "list_students"):
            rows = self._db.query(Student).order_by(Student.full_name).all()
            return [_student_info(r) for r in rows]

    def list_by_ids(self, student_ids: Sequence[int]) -> Sequence[StudentInfo]:
        if not student_ids:
            return []
        with _guard(self._db, "list_students"):
            rows = (
                self._db.query(Student)
                .filter(Student.id.in_(list(student_ids)))
                .order_by(Student.full_name)
                .all()
            )
            return [_student_info(r) for r in rows]


class SqlEnrollmentRepository:
    def __init__(self, db: Session):
        self._db = db

    def class_exists(self, class_id: int) -> bool:
        with _guard(self._db, "get_class"):
            return self._db.get(SchoolClass, class_id) is not None

    def student_ids_for_class(self, class_id: int) -> List[int]:
        with _guard(self._db, "list_enrollments"):
            rows = self._db.query(StudentClass.student_id).filter(StudentClass.class_id == class_id).all()
            return [student_id for (student_id,) in rows]


class SqlChildInfoRepository:
    def __init__(self, db: Session):
        self._db = db

    def get(self, student_id: int) -> Optional[ChildSafetyInfo]:
        with _guard(self._db, "get_child_info"):
            row = self._db.query(ChildInfo).filter(ChildInfo.student_id == student_id).first()
            return _safety_info(row) if row else None

    def list_for_students(self, student_ids: Sequence[int]) -> Sequence[ChildSafetyInfo]:
        if not student_ids:
            return []
        with _guard(self._db, "list_child_info"):
            rows = self._db.query(ChildInfo).filter(ChildInfo.student_id.in_(list(student_ids))).all()
            return [_safety_info(r) for r in rows]


class SqlCheckinRepository:
    def __init__(self, db: Session):
        self._db = db

    def get(self, record_id: int) -> Optional[CheckinRecord]:
        with _guard(self._db, "get_checkin"):
            row = self._db.get(Checkin, record_id)
            return _checkin_record(row) if row else None

    def list_for_session(self, session_id: int) -> Sequence[CheckinRecord]:
        with _guard(self._db, "list_checkins"):
            rows = (
                self._db.query(Checkin)
                .filter(Checkin.session_id == session_id)
                .order_by(Checkin.checkin_time.desc(), Checkin.id.desc())
                .all()
            )
            return [_checkin_record(r) for r in rows]

    def add(self, new: NewCheckin) -> CheckinRecord:
        return self.add_many([new])[0]

    def add_many(self, new: Sequence[NewCheckin]) -> List[CheckinRecord]:
        # One commit for the whole batch: the transaction is all-or-nothing
        with _guard(self._db, "add_checkins"):
            rows = [
                Checkin(
                    session_id=item.session_id,
                    student_id=item.student_id,
                    guest_name=item.guest_name,
                    security_code=item.security_code,
                    checkin_time=item.checkin_time,
                    is_checked_out=False,
                    notes=item.notes,
                )
                for item in new
            ]
            self._db.add_all(rows)
            self._db.commit()
            for row in rows:
                self._db.refresh(row)
            return [_checkin_record(r) for r in rows]

    def save_checkout(self, record: CheckinRecord) -> CheckinRecord:
        with _guard(self._db, "save_checkout"):
            row = self._db.get(Checkin, record.id)
            if row is None:
                raise RepositoryError(f"Check-in {record.id} disappeared")
            row.is_checked_out = True
            row.checkout_time = record.checkout_time
            self._db.commit()
            self._db.refresh(row)
            return _checkin_record(row)

    def count_by_session(self) -> Dict[int, int]:
        with _guard(self._db, "count_checkins"):
            return dict(
                self._db.query(Checkin.session_id, func.count(Checkin.id)).group_by(Checkin.session_id).all()
            )
