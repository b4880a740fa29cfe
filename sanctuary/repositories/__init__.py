"""Repository interfaces and their SQLAlchemy / in-memory implementations."""
from .base import (
    CheckinRepository,
    ChildInfoRepository,
    EnrollmentRepository,
    RepositoryError,
    SessionRepository,
    StudentRepository,
)
from .memory import (
    InMemoryCheckinRepository,
    InMemoryChildInfoRepository,
    InMemoryEnrollmentRepository,
    InMemorySessionRepository,
    InMemoryStudentRepository,
)
from .sql import (
    SqlCheckinRepository,
    SqlChildInfoRepository,
    SqlEnrollmentRepository,
    SqlSessionRepository,
    SqlStudentRepository,
)

__all__ = [
    "CheckinRepository",
    "ChildInfoRepository",
    "EnrollmentRepository",
    "RepositoryError",
    "SessionRepository",
    "StudentRepository",
    "InMemoryCheckinRepository",
    "InMemoryChildInfoRepository",
    "InMemoryEnrollmentRepository",
    "InMemorySessionRepository",
    "InMemoryStudentRepository",
    "SqlCheckinRepository",
    "SqlChildInfoRepository",
    "SqlEnrollmentRepository",
    "SqlSessionRepository",
    "SqlStudentRepository",
]
