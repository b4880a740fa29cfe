"""Check-in session endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from sanctuary.api.deps import (
    get_roster_resolver,
    get_session_admin,
    get_summary_view,
    verify_staff_token,
)
from sanctuary.schemas import (
    ERROR_RESPONSES,
    HeadcountUpdate,
    RosterResponse,
    SessionCreate,
    SessionListItem,
    SessionResponse,
    SessionSummaryResponse,
)
from sanctuary.services import RosterResolver, SessionAdmin, SessionSummaryView

router = APIRouter(dependencies=[Depends(verify_staff_token)], responses=ERROR_RESPONSES)


@router.get("", response_model=List[SessionListItem])
async def list_sessions_endpoint(
    search: Optional[str] = Query(None, max_length=100),
    session_type: Optional[str] = None,
    admin: SessionAdmin = Depends(get_session_admin),
):
    """
    List check-in sessions, newest first, with their check-in counts.

    ``search`` matches the session name or location; ``session_type`` filters
    to one of service, class, event or group ("all" disables the filter).
    """
    return [SessionListItem.from_listing(item) for item in admin.list_sessions(search, session_type)]


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session_endpoint(
    payload: SessionCreate,
    admin: SessionAdmin = Depends(get_session_admin),
):
    """
    Create a check-in session. New sessions start active.

    Example:
        Request:
            POST /api/v1/sessions
            {"name": "Sunday Kids Class", "session_type": "class", "class_id": 3}

        Response (400):
            {"detail": "Please enter a session name"}

        Response (404):
            {"detail": "Class not found"}
    """
    session = admin.create_session(
        name=payload.name,
        session_type=payload.session_type,
        session_date=payload.session_date,
        start_time=payload.start_time,
        location=payload.location,
        class_id=payload.class_id,
    )
    return SessionResponse.from_domain(session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session_endpoint(session_id: int, admin: SessionAdmin = Depends(get_session_admin)):
    return SessionResponse.from_domain(admin.get_session(session_id))


@router.post("/{session_id}/toggle", response_model=SessionResponse)
async def toggle_session_endpoint(session_id: int, admin: SessionAdmin = Depends(get_session_admin)):
    """Start an ended session or end a running one."""
    return SessionResponse.from_domain(admin.toggle_active(session_id))


@router.get("/{session_id}/summary", response_model=SessionSummaryResponse)
async def session_summary_endpoint(
    session_id: int,
    view: SessionSummaryView = Depends(get_summary_view),
):
    """
    Live counters for the check-in screen.

    ``checked_in`` and ``checked_out`` are recomputed from the ledger on every
    call. ``headcount`` is the manually entered room count and is not derived
    from the ledger.
    """
    return SessionSummaryResponse.from_domain(view.summarize(session_id))


@router.put("/{session_id}/headcount", response_model=SessionSummaryResponse)
async def update_headcount_endpoint(
    session_id: int,
    payload: HeadcountUpdate,
    view: SessionSummaryView = Depends(get_summary_view),
):
    """Save the manual headcount and return the refreshed counters."""
    view.update_headcount(session_id, payload.headcount)
    return SessionSummaryResponse.from_domain(view.summarize(session_id))


@router.get("/{session_id}/roster", response_model=RosterResponse)
async def roster_endpoint(
    session_id: int,
    q: Optional[str] = Query(None, max_length=100),
    resolver: RosterResolver = Depends(get_roster_resolver),
):
    """
    Students who can still be checked in, ordered by name.

    Students with an active check-in in this session are left out until they
    are checked out. ``q`` filters on the child's or guardian's name. When the
    list is empty, ``empty_message`` says whether nothing matched the filter
    or everyone is already checked in.
    """
    return RosterResponse.from_domain(resolver.resolve(session_id, q))
