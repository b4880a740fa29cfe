"""Child safety information model."""
from sqlalchemy import Column, Integer, String, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship

from sanctuary.db.base import Base


class ChildInfo(Base):
    __tablename__ = "child_info"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, unique=True)
    allergies = Column(JSON, nullable=True)
    medical_conditions = Column(JSON, nullable=True)
    special_needs = Column(Text, nullable=True)
    authorized_pickups = Column(JSON, nullable=True)
    emergency_contact_name = Column(String(200), nullable=True)
    emergency_contact_phone = Column(String(50), nullable=True)

    student = relationship("Student", back_populates="child_info")
