"""Check-in ledger endpoints."""
from typing import List
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from sanctuary.api.deps import get_label_formatter, get_ledger, verify_staff_token
from sanctuary.core.constants import STATUS_ACTIVE
from sanctuary.core.rate_limit import limiter, RATE_LIMITS
from sanctuary.schemas import (
    ERROR_RESPONSES,
    BulkCheckinRequest,
    CheckinReceiptResponse,
    CheckinRecordResponse,
    CheckinRequest,
    GuestCheckinRequest,
    LabelResponse,
    LedgerEntryResponse,
)
from sanctuary.services import CheckinLedger, LabelFormatter

router = APIRouter(dependencies=[Depends(verify_staff_token)], responses=ERROR_RESPONSES)


@router.get("/sessions/{session_id}/checkins", response_model=List[LedgerEntryResponse])
async def list_checkins_endpoint(
    session_id: int,
    status: str = Query(STATUS_ACTIVE, pattern="^(active|checked_out)$"),
    ledger: CheckinLedger = Depends(get_ledger),
):
    """
    One partition of the session ledger, newest check-in first.

    ``status=active`` lists children still in the room, ``status=checked_out``
    lists children already picked up.
    """
    return [LedgerEntryResponse.from_domain(e) for e in ledger.entries(session_id, status)]


@router.post("/sessions/{session_id}/checkins", response_model=CheckinReceiptResponse, status_code=201)
@limiter.limit(RATE_LIMITS["check_in"])
async def checkin_endpoint(
    request: Request,
    session_id: int,
    payload: CheckinRequest,
    ledger: CheckinLedger = Depends(get_ledger),
    formatter: LabelFormatter = Depends(get_label_formatter),
):
    """
    Check one student in and return the record with its print label.

    Example:
        Request:
            POST /api/v1/sessions/7/checkins
            {"student_id": 12}

        Response (201):
            {
                "record": {"id": 40, "security_code": "K7Q2ZD", "status": "active", ...},
                "label": {"child_name": "Alice Moore", "code": "K7Q2ZD", "allergies": ["Peanuts"], ...}
            }

        Response (409):
            {"detail": "Already checked in: Alice Moore"}

        Response (503):
            {"detail": "Failed to check in"}
    """
    receipt = ledger.check_in_student(session_id, payload.student_id)
    return CheckinReceiptResponse.from_domain(receipt, formatter.render(receipt.label))


@router.post("/sessions/{session_id}/checkins/bulk", response_model=List[CheckinReceiptResponse], status_code=201)
@limiter.limit(RATE_LIMITS["check_in"])
async def bulk_checkin_endpoint(
    request: Request,
    session_id: int,
    payload: BulkCheckinRequest,
    ledger: CheckinLedger = Depends(get_ledger),
    formatter: LabelFormatter = Depends(get_label_formatter),
):
    """
    Check in every selected student in one transaction.

    Each student gets their own code. If any student is unknown or already
    checked in, or the write fails, nothing is recorded.
    """
    receipts = ledger.check_in_bulk(session_id, payload.student_ids)
    return [CheckinReceiptResponse.from_domain(r, formatter.render(r.label)) for r in receipts]


@router.post("/sessions/{session_id}/checkins/guest", response_model=CheckinReceiptResponse, status_code=201)
@limiter.limit(RATE_LIMITS["check_in"])
async def guest_checkin_endpoint(
    request: Request,
    session_id: int,
    payload: GuestCheckinRequest,
    ledger: CheckinLedger = Depends(get_ledger),
    formatter: LabelFormatter = Depends(get_label_formatter),
):
    """
    Check in a visiting child who is not on the roster.

    Notes are kept with the record for the teachers but are not turned into
    an allergy warning on the label.
    """
    receipt = ledger.check_in_guest(session_id, payload.guest_name, payload.notes)
    return CheckinReceiptResponse.from_domain(receipt, formatter.render(receipt.label))


@router.post("/checkins/{checkin_id}/checkout", response_model=CheckinRecordResponse)
@limiter.limit(RATE_LIMITS["check_out"])
async def checkout_endpoint(
    request: Request,
    checkin_id: int,
    ledger: CheckinLedger = Depends(get_ledger),
):
    """
    Mark a child as picked up.

    A record that is already checked out answers 409 and keeps its original
    checkout time.
    """
    return CheckinRecordResponse.from_domain(ledger.check_out(checkin_id))


@router.get("/checkins/{checkin_id}/label", response_model=LabelResponse)
async def label_endpoint(
    checkin_id: int,
    ledger: CheckinLedger = Depends(get_ledger),
    formatter: LabelFormatter = Depends(get_label_formatter),
):
    """Label data for reprinting the tags of an existing check-in."""
    label = ledger.label_for(checkin_id)
    return LabelResponse.from_domain(label, formatter.render(label))


@router.get("/checkins/{checkin_id}/label.html", response_class=HTMLResponse)
async def label_document_endpoint(
    checkin_id: int,
    ledger: CheckinLedger = Depends(get_ledger),
    formatter: LabelFormatter = Depends(get_label_formatter),
):
    """
    The print document for a check-in's child tag and pickup tag.

    The client opens this in a new window, which prints itself on load.
    Printing is independent of the ledger: a failed or blocked print never
    changes the check-in.
    """
    return HTMLResponse(formatter.render_html(ledger.label_for(checkin_id)))
