"""Plain domain types passed between repositories, services and the API.

These are decoupled from the SQLAlchemy models so services can run against
the in-memory repositories in tests.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import List, Optional, Union

from sanctuary.core.exceptions import CheckinStateError, ValidationError


@dataclass(frozen=True)
class SessionInfo:
    id: int
    name: str
    session_type: str
    session_date: date
    location: Optional[str] = None
    class_id: Optional[int] = None
    headcount: int = 0
    is_active: bool = True
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class StudentInfo:
    id: int
    full_name: str
    guardian_name: str
    guardian_phone: str
    date_of_birth: date
    photo_url: Optional[str] = None


@dataclass(frozen=True)
class ChildSafetyInfo:
    student_id: int
    allergies: List[str] = field(default_factory=list)
    medical_conditions: List[str] = field(default_factory=list)
    special_needs: Optional[str] = None
    authorized_pickups: List[str] = field(default_factory=list)
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None

    @property
    def has_allergies(self) -> bool:
        return bool(self.allergies)


@dataclass(frozen=True)
class Active:
    """Status of a record whose child has not been picked up yet."""


@dataclass(frozen=True)
class CheckedOut:
    at: datetime


CheckinStatus = Union[Active, CheckedOut]


@dataclass(frozen=True)
class NewCheckin:
    """A check-in row that has not been written yet."""

    session_id: int
    security_code: str
    checkin_time: datetime
    student_id: Optional[int] = None
    guest_name: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        _require_student_xor_guest(self.student_id, self.guest_name)


@dataclass(frozen=True)
class CheckinRecord:
    """One ledger entry linking a student or a guest to a session.

    ``status`` only ever moves from ``Active`` to ``CheckedOut``.
    """

    id: int
    session_id: int
    security_code: str
    checkin_time: datetime
    status: CheckinStatus = field(default_factory=Active)
    student_id: Optional[int] = None
    guest_name: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        _require_student_xor_guest(self.student_id, self.guest_name)

    @property
    def is_active(self) -> bool:
        return isinstance(self.status, Active)

    @property
    def is_guest(self) -> bool:
        return self.guest_name is not None

    @property
    def checkout_time(self) -> Optional[datetime]:
        if isinstance(self.status, CheckedOut):
            return self.status.at
        return None

    def checked_out(self, at: datetime) -> CheckinRecord:
        """Return this record moved to ``CheckedOut``."""
        if not self.is_active:
            raise CheckinStateError("Already checked out")
        return replace(self, status=CheckedOut(at=at))


def _require_student_xor_guest(student_id: Optional[int], guest_name: Optional[str]) -> None:
    if (student_id is None) == (guest_name is None):
        raise ValidationError("A check-in needs exactly one of a student or a guest name")


@dataclass(frozen=True)
class PrintLabel:
    """What goes on a child tag and its matching pickup tag."""

    child_name: str
    session_name: str
    code: str
    allergies: List[str] = field(default_factory=list)
    printed_at: Optional[datetime] = None

    @property
    def has_allergies(self) -> bool:
        return bool(self.allergies)


@dataclass(frozen=True)
class CheckinReceipt:
    record: CheckinRecord
    label: PrintLabel


@dataclass(frozen=True)
class LedgerEntry:
    """A ledger record decorated for listing screens."""

    record: CheckinRecord
    display_name: str
    allergies: List[str] = field(default_factory=list)
    photo_url: Optional[str] = None


@dataclass(frozen=True)
class SessionSummary:
    session: SessionInfo
    checked_in: int
    checked_out: int

    @property
    def total(self) -> int:
        return self.checked_in + self.checked_out

    @property
    def headcount(self) -> int:
        return self.session.headcount
