"""Check-in ledger: every check-in, guest check-in and checkout goes through here."""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..core.constants import STATUS_ACTIVE, STATUS_CHECKED_OUT, UNKNOWN_STUDENT_NAME
from ..core.exceptions import CheckinStateError, NotFoundError, PersistenceError, ValidationError
from ..core.logging_config import get_logger
from ..core.sanitization import sanitize_guest_name, sanitize_notes
from ..core.utils import generate_security_code, utcnow
from ..domain import (
    CheckinReceipt,
    CheckinRecord,
    ChildSafetyInfo,
    LedgerEntry,
    NewCheckin,
    PrintLabel,
    SessionInfo,
    StudentInfo,
)
from ..repositories.base import (
    CheckinRepository,
    ChildInfoRepository,
    RepositoryError,
    SessionRepository,
    StudentRepository,
)

logger = get_logger(__name__)


def build_label(
    record: CheckinRecord,
    session: SessionInfo,
    student: Optional[StudentInfo],
    safety: Optional[ChildSafetyInfo],
    printed_at: Optional[datetime] = None,
) -> PrintLabel:
    """Project a record onto the fields printed on its tags.

    Guests never carry allergy warnings: their notes are free text and are
    not parsed.
    """
    name = _display_name(record, student)
    allergies = list(safety.allergies) if (safety and student is not None) else []
    return PrintLabel(
        child_name=name,
        session_name=session.name,
        code=record.security_code,
        allergies=allergies,
        printed_at=printed_at,
    )


def _display_name(record: CheckinRecord, student: Optional[StudentInfo]) -> str:
    if student is not None:
        return student.full_name
    if record.is_guest:
        return record.guest_name
    return UNKNOWN_STUDENT_NAME


class CheckinLedger:
    def __init__(
        self,
        sessions: SessionRepository,
        students: StudentRepository,
        checkins: CheckinRepository,
        child_info: ChildInfoRepository,
        *,
        code_generator: Callable[[], str] = generate_security_code,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._sessions = sessions
        self._students = students
        self._checkins = checkins
        self._child_info = child_info
        self._code = code_generator
        self._clock = clock

    # -- writes ---------------------------------------------------------

    def check_in_student(self, session_id: int, student_id: int) -> CheckinReceipt:
        try:
            session = self._require_session(session_id)
            student = self._students.get(student_id)
            if student is None:
                raise NotFoundError("Student not found")
            self._ensure_not_active(session.id, [student])
            safety = self._child_info.get(student.id)

            now = self._clock()
            record = self._checkins.add(
                NewCheckin(
                    session_id=session.id,
                    student_id=student.id,
                    security_code=self._code(),
                    checkin_time=now,
                )
            )
        except RepositoryError as exc:
            logger.error("checkin_failed", session_id=session_id, student_id=student_id, error=str(exc))
            raise PersistenceError("Failed to check in") from exc

        logger.info(
            "student_checked_in",
            session_id=session.id,
            student_id=student.id,
            checkin_id=record.id,
            security_code=record.security_code,
        )
        return CheckinReceipt(record=record, label=build_label(record, session, student, safety, now))

    def check_in_bulk(self, session_id: int, student_ids: Iterable[int]) -> List[CheckinReceipt]:
        """Check in several students in one transaction.

        Every selected student gets their own code. Either all records are
        written or none are.
        """
        selection = list(dict.fromkeys(student_ids or []))
        if not selection:
            raise ValidationError("Select at least one student")

        try:
            session = self._require_session(session_id)
            found = {s.id: s for s in self._students.list_by_ids(selection)}
            missing = [i for i in selection if i not in found]
            if missing:
                raise NotFoundError(f"Student not found: {', '.join(str(i) for i in missing)}")
            students = [found[i] for i in selection]
            self._ensure_not_active(session.id, students)
            safety = {i.student_id: i for i in self._child_info.list_for_students(selection)}

            now = self._clock()
            records = self._checkins.add_many([
                NewCheckin(
                    session_id=session.id,
                    student_id=s.id,
                    security_code=self._code(),
                    checkin_time=now,
                )
                for s in students
            ])
        except RepositoryError as exc:
            logger.error("bulk_checkin_failed", session_id=session_id, count=len(selection), error=str(exc))
            raise PersistenceError("Failed to check in students") from exc

        logger.info("students_checked_in", session_id=session.id, count=len(records))
        return [
            CheckinReceipt(record=r, label=build_label(r, session, s, safety.get(s.id), now))
            for r, s in zip(records, students)
        ]

    def check_in_guest(self, session_id: int, guest_name: str, notes: Optional[str] = None) -> CheckinReceipt:
        name = sanitize_guest_name(guest_name)
        cleaned_notes = sanitize_notes(notes)

        try:
            session = self._require_session(session_id)
            now = self._clock()
            record = self._checkins.add(
                NewCheckin(
                    session_id=session.id,
                    guest_name=name,
                    security_code=self._code(),
                    checkin_time=now,
                    notes=cleaned_notes,
                )
            )
        except RepositoryError as exc:
            logger.error("guest_checkin_failed", session_id=session_id, error=str(exc))
            raise PersistenceError("Failed to check in guest") from exc

        logger.info("guest_checked_in", session_id=session.id, checkin_id=record.id, security_code=record.security_code)
        return CheckinReceipt(record=record, label=build_label(record, session, None, None, now))

    def check_out(self, record_id: int) -> CheckinRecord:
        try:
            record = self._checkins.get(record_id)
            if record is None:
                raise NotFoundError("Check-in not found")
            saved = self._checkins.save_checkout(record.checked_out(self._clock()))
        except RepositoryError as exc:
            logger.error("checkout_failed", checkin_id=record_id, error=str(exc))
            raise PersistenceError("Failed to check out") from exc

        logger.info("checked_out", session_id=saved.session_id, checkin_id=saved.id)
        return saved

    # -- reads ----------------------------------------------------------

    def list_active(self, session_id: int) -> List[CheckinRecord]:
        return [r for r in self._ledger(session_id) if r.is_active]

    def list_checked_out(self, session_id: int) -> List[CheckinRecord]:
        return [r for r in self._ledger(session_id) if not r.is_active]

    def entries(self, session_id: int, status: str = STATUS_ACTIVE) -> List[LedgerEntry]:
        """Ledger records of one partition with names and allergies attached."""
        if status == STATUS_ACTIVE:
            records = self.list_active(session_id)
        elif status == STATUS_CHECKED_OUT:
            records = self.list_checked_out(session_id)
        else:
            raise ValidationError(f"Unknown status '{status}'")

        student_ids = [r.student_id for r in records if r.student_id is not None]
        try:
            students = {s.id: s for s in self._students.list_by_ids(student_ids)}
            safety = {i.student_id: i for i in self._child_info.list_for_students(student_ids)}
        except RepositoryError as exc:
            logger.error("ledger_fetch_failed", session_id=session_id, error=str(exc))
            raise PersistenceError("Failed to load check-in data") from exc

        return [self._entry(r, students, safety) for r in records]

    def label_for(self, record_id: int) -> PrintLabel:
        """Rebuild the tags of an existing record for a reprint."""
        try:
            record = self._checkins.get(record_id)
            if record is None:
                raise NotFoundError("Check-in not found")
            session = self._require_session(record.session_id)
            student = self._students.get(record.student_id) if record.student_id is not None else None
            safety = self._child_info.get(student.id) if student is not None else None
        except RepositoryError as exc:
            logger.error("label_fetch_failed", checkin_id=record_id, error=str(exc))
            raise PersistenceError("Failed to load check-in data") from exc
        return build_label(record, session, student, safety, self._clock())

    # -- helpers --------------------------------------------------------

    def _ledger(self, session_id: int) -> Sequence[CheckinRecord]:
        try:
            self._require_session(session_id)
            return self._checkins.list_for_session(session_id)
        except RepositoryError as exc:
            logger.error("ledger_fetch_failed", session_id=session_id, error=str(exc))
            raise PersistenceError("Failed to load check-in data") from exc

    def _require_session(self, session_id: int) -> SessionInfo:
        session = self._sessions.get(session_id)
        if session is None:
            raise NotFoundError("Check-in session not found")
        return session

    def _ensure_not_active(self, session_id: int, students: Sequence[StudentInfo]) -> None:
        active = {
            r.student_id for r in self._checkins.list_for_session(session_id)
            if r.is_active and r.student_id is not None
        }
        already = [s.full_name for s in students if s.id in active]
        if already:
            raise CheckinStateError(f"Already checked in: {', '.join(already)}")

    @staticmethod
    def _entry(
        record: CheckinRecord,
        students: Dict[int, StudentInfo],
        safety: Dict[int, ChildSafetyInfo],
    ) -> LedgerEntry:
        student = students.get(record.student_id) if record.student_id is not None else None
        info = safety.get(record.student_id) if student is not None else None
        return LedgerEntry(
            record=record,
            display_name=_display_name(record, student),
            allergies=list(info.allergies) if info else [],
            photo_url=student.photo_url if student else None,
        )
