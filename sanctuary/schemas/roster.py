"""Roster schemas."""
from typing import List, Optional
from pydantic import BaseModel

from sanctuary.services.roster import Roster, RosterEntry


class RosterStudent(BaseModel):
    id: int
    full_name: str
    guardian_name: str
    guardian_phone: str
    photo_url: Optional[str] = None
    allergies: List[str] = []
    special_needs: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: RosterEntry) -> "RosterStudent":
        return cls(
            id=entry.student.id,
            full_name=entry.student.full_name,
            guardian_name=entry.student.guardian_name,
            guardian_phone=entry.student.guardian_phone,
            photo_url=entry.student.photo_url,
            allergies=entry.allergies,
            special_needs=entry.special_needs,
        )


class RosterResponse(BaseModel):
    session_id: int
    query: str
    students: List[RosterStudent]
    empty_message: Optional[str] = None

    @classmethod
    def from_domain(cls, roster: Roster) -> "RosterResponse":
        return cls(
            session_id=roster.session.id,
            query=roster.query,
            students=[RosterStudent.from_entry(e) for e in roster.entries],
            empty_message=roster.empty_message,
        )
