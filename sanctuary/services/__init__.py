from .labels import LabelFormatter, LabelPair
from .ledger import CheckinLedger, build_label
from .roster import Roster, RosterEntry, RosterResolver
from .sessions import SessionAdmin, SessionListing
from .summary import SessionSummaryView

__all__ = [
    # ledger
    "CheckinLedger",
    "build_label",
    # roster
    "Roster",
    "RosterEntry",
    "RosterResolver",
    # labels
    "LabelFormatter",
    "LabelPair",
    # sessions
    "SessionAdmin",
    "SessionListing",
    "SessionSummaryView",
]
