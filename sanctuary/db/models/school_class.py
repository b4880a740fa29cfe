"""Church school class and enrollment models."""
from sqlalchemy import Column, Integer, String, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from sanctuary.db.base import Base


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    class_name = Column(String(200), nullable=False)

    enrollments = relationship("StudentClass", back_populates="school_class", cascade="all, delete-orphan")


class StudentClass(Base):
    __tablename__ = "student_classes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False)

    school_class = relationship("SchoolClass", back_populates="enrollments")
    student = relationship("Student", back_populates="enrollments")

    __table_args__ = (
        Index("idx_student_classes_class", "class_id"),
        UniqueConstraint("student_id", "class_id", name="uq_student_class"),
    )
