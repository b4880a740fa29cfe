"""Database models."""
from sanctuary.db.models.school_class import SchoolClass, StudentClass
from sanctuary.db.models.student import Student
from sanctuary.db.models.child_info import ChildInfo
from sanctuary.db.models.checkin_session import CheckinSession
from sanctuary.db.models.checkin import Checkin

__all__ = ["SchoolClass", "StudentClass", "Student", "ChildInfo", "CheckinSession", "Checkin"]
