"""Check-in session model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, Text, Date, Time, DateTime, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship

from sanctuary.db.base import Base


class CheckinSession(Base):
    __tablename__ = "checkin_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    session_type = Column(String(20), nullable=False, default="service")
    session_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    location = Column(String(200), nullable=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="SET NULL"), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    headcount = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    checkins = relationship("Checkin", back_populates="session", cascade="all, delete-orphan")

    __table_args__ = (Index("idx_checkin_sessions_date", "session_date"),)
