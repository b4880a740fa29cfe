"""Student model."""
from sqlalchemy import Column, Integer, String, Date
from sqlalchemy.orm import relationship

from sanctuary.db.base import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(200), nullable=False, index=True)
    photo_url = Column(String(500), nullable=True)
    guardian_name = Column(String(200), nullable=False)
    guardian_phone = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=False)

    enrollments = relationship("StudentClass", back_populates="student", cascade="all, delete-orphan")
    child_info = relationship("ChildInfo", back_populates="student", uselist=False, cascade="all, delete-orphan")
