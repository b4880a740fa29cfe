"""Checkin model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from sanctuary.db.base import Base


class Checkin(Base):
    __tablename__ = "checkins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(Integer, ForeignKey("checkin_sessions.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=True)
    guest_name = Column(String(200), nullable=True)
    security_code = Column(String(6), nullable=False)
    checkin_time = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    is_checked_out = Column(Boolean, nullable=False, default=False)
    checkout_time = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    session = relationship("CheckinSession", back_populates="checkins")

    __table_args__ = (
        Index("idx_checkins_session", "session_id"),
        Index("idx_checkins_session_student", "session_id", "student_id"),
        CheckConstraint(
            "(student_id IS NULL) <> (guest_name IS NULL)",
            name="ck_checkins_student_xor_guest",
        ),
    )
