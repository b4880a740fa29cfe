"""Shared API dependencies.

Services are built per request from the request's database session, so the
repositories they receive can be swapped in tests.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from sanctuary.db import get_db
from sanctuary.core.security import verify_staff_token
from sanctuary.repositories import (
    SqlCheckinRepository,
    SqlChildInfoRepository,
    SqlEnrollmentRepository,
    SqlSessionRepository,
    SqlStudentRepository,
)
from sanctuary.services import (
    CheckinLedger,
    LabelFormatter,
    RosterResolver,
    SessionAdmin,
    SessionSummaryView,
)


def get_ledger(db: Session = Depends(get_db)) -> CheckinLedger:
    return CheckinLedger(
        SqlSessionRepository(db),
        SqlStudentRepository(db),
        SqlCheckinRepository(db),
        SqlChildInfoRepository(db),
    )


def get_roster_resolver(db: Session = Depends(get_db)) -> RosterResolver:
    return RosterResolver(
        SqlSessionRepository(db),
        SqlStudentRepository(db),
        SqlEnrollmentRepository(db),
        SqlCheckinRepository(db),
        SqlChildInfoRepository(db),
    )


def get_summary_view(db: Session = Depends(get_db)) -> SessionSummaryView:
    return SessionSummaryView(SqlSessionRepository(db), SqlCheckinRepository(db))


def get_session_admin(db: Session = Depends(get_db)) -> SessionAdmin:
    return SessionAdmin(SqlSessionRepository(db), SqlCheckinRepository(db), SqlEnrollmentRepository(db))


def get_label_formatter() -> LabelFormatter:
    return LabelFormatter()


__all__ = [
    "get_db",
    "verify_staff_token",
    "get_ledger",
    "get_roster_resolver",
    "get_summary_view",
    "get_session_admin",
    "get_label_formatter",
]
