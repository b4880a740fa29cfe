"""Check-in session schemas."""
from datetime import date, datetime, time
from typing import Optional
from pydantic import BaseModel, Field

from sanctuary.core.constants import DEFAULT_SESSION_TYPE, MAX_LOCATION_LENGTH, MAX_NAME_LENGTH
from sanctuary.domain import SessionInfo, SessionSummary
from sanctuary.services.sessions import SessionListing


class SessionCreate(BaseModel):
    name: str = Field(..., max_length=MAX_NAME_LENGTH)
    session_type: str = DEFAULT_SESSION_TYPE
    session_date: Optional[date] = None
    start_time: Optional[time] = None
    location: Optional[str] = Field(None, max_length=MAX_LOCATION_LENGTH)
    class_id: Optional[int] = None


class SessionResponse(BaseModel):
    id: int
    name: str
    session_type: str
    session_date: date
    start_time: Optional[time] = None
    location: Optional[str] = None
    class_id: Optional[int] = None
    is_active: bool
    headcount: int
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, session: SessionInfo) -> "SessionResponse":
        return cls(
            id=session.id,
            name=session.name,
            session_type=session.session_type,
            session_date=session.session_date,
            start_time=session.start_time,
            location=session.location,
            class_id=session.class_id,
            is_active=session.is_active,
            headcount=session.headcount,
            created_at=session.created_at,
        )


class SessionListItem(SessionResponse):
    checkin_count: int

    @classmethod
    def from_listing(cls, listing: SessionListing) -> "SessionListItem":
        base = SessionResponse.from_domain(listing.session)
        return cls(**base.model_dump(), checkin_count=listing.checkin_count)


class HeadcountUpdate(BaseModel):
    headcount: int


class SessionSummaryResponse(BaseModel):
    session_id: int
    checked_in: int
    checked_out: int
    total: int
    headcount: int

    @classmethod
    def from_domain(cls, summary: SessionSummary) -> "SessionSummaryResponse":
        return cls(
            session_id=summary.session.id,
            checked_in=summary.checked_in,
            checked_out=summary.checked_out,
            total=summary.total,
            headcount=summary.headcount,
        )
