"""Check-in schemas."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from sanctuary.core.constants import MAX_NAME_LENGTH, MAX_NOTES_LENGTH, STATUS_ACTIVE, STATUS_CHECKED_OUT
from sanctuary.domain import CheckinReceipt, CheckinRecord, LedgerEntry, PrintLabel
from sanctuary.services.labels import LabelPair


class CheckinRequest(BaseModel):
    student_id: int


class BulkCheckinRequest(BaseModel):
    student_ids: List[int] = []


class GuestCheckinRequest(BaseModel):
    guest_name: str = Field("", max_length=MAX_NAME_LENGTH)
    notes: Optional[str] = Field(None, max_length=MAX_NOTES_LENGTH)


class CheckinRecordResponse(BaseModel):
    id: int
    session_id: int
    student_id: Optional[int] = None
    guest_name: Optional[str] = None
    security_code: str
    checkin_time: datetime
    status: str
    checkout_time: Optional[datetime] = None
    notes: Optional[str] = None

    @classmethod
    def from_domain(cls, record: CheckinRecord) -> "CheckinRecordResponse":
        return cls(
            id=record.id,
            session_id=record.session_id,
            student_id=record.student_id,
            guest_name=record.guest_name,
            security_code=record.security_code,
            checkin_time=record.checkin_time,
            status=STATUS_ACTIVE if record.is_active else STATUS_CHECKED_OUT,
            checkout_time=record.checkout_time,
            notes=record.notes,
        )


class LabelResponse(BaseModel):
    child_name: str
    session_name: str
    code: str
    allergies: List[str]
    printed_at: Optional[datetime] = None
    child_label: List[str]
    pickup_label: List[str]

    @classmethod
    def from_domain(cls, label: PrintLabel, rendered: LabelPair) -> "LabelResponse":
        return cls(
            child_name=label.child_name,
            session_name=label.session_name,
            code=label.code,
            allergies=list(label.allergies),
            printed_at=label.printed_at,
            child_label=rendered.child,
            pickup_label=rendered.pickup,
        )


class CheckinReceiptResponse(BaseModel):
    record: CheckinRecordResponse
    label: LabelResponse

    @classmethod
    def from_domain(cls, receipt: CheckinReceipt, rendered: LabelPair) -> "CheckinReceiptResponse":
        return cls(
            record=CheckinRecordResponse.from_domain(receipt.record),
            label=LabelResponse.from_domain(receipt.label, rendered),
        )


class LedgerEntryResponse(BaseModel):
    record: CheckinRecordResponse
    display_name: str
    is_guest: bool
    allergies: List[str]
    photo_url: Optional[str] = None

    @classmethod
    def from_domain(cls, entry: LedgerEntry) -> "LedgerEntryResponse":
        return cls(
            record=CheckinRecordResponse.from_domain(entry.record),
            display_name=entry.display_name,
            is_guest=entry.record.is_guest,
            allergies=entry.allergies,
            photo_url=entry.photo_url,
        )
