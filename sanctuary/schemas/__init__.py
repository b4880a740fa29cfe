"""Pydantic schemas for request/response validation."""
from sanctuary.schemas.auth import StaffLoginRequest
from sanctuary.schemas.session import (
    SessionCreate,
    SessionResponse,
    SessionListItem,
    HeadcountUpdate,
    SessionSummaryResponse,
)
from sanctuary.schemas.roster import RosterStudent, RosterResponse
from sanctuary.schemas.checkin import (
    CheckinRequest,
    BulkCheckinRequest,
    GuestCheckinRequest,
    CheckinRecordResponse,
    LabelResponse,
    CheckinReceiptResponse,
    LedgerEntryResponse,
)
from sanctuary.schemas.common import SuccessResponse, ErrorResponse, ERROR_RESPONSES

__all__ = [
    "StaffLoginRequest",
    "SessionCreate",
    "SessionResponse",
    "SessionListItem",
    "HeadcountUpdate",
    "SessionSummaryResponse",
    "RosterStudent",
    "RosterResponse",
    "CheckinRequest",
    "BulkCheckinRequest",
    "GuestCheckinRequest",
    "CheckinRecordResponse",
    "LabelResponse",
    "CheckinReceiptResponse",
    "LedgerEntryResponse",
    "SuccessResponse",
    "ErrorResponse",
    "ERROR_RESPONSES",
]
