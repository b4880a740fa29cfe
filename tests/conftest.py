"""Shared test fixtures and configuration."""
import os

# Settings and the engine are created at import time, so point them at
# SQLite before anything from sanctuary is imported.
STAFF_PASSWORD = "testpass123"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["STAFF_PASSWORD"] = STAFF_PASSWORD

from datetime import date, datetime, timedelta, timezone  # noqa: E402
from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from sanctuary.main import app  # noqa: E402
from sanctuary.db.base import Base  # noqa: E402
from sanctuary.api.deps import get_db  # noqa: E402
from sanctuary.core.rate_limit import limiter  # noqa: E402
from sanctuary.core.security import STAFF_COOKIE_NAME, create_access_token  # noqa: E402
from sanctuary.db.models import (  # noqa: E402
    CheckinSession,
    ChildInfo,
    SchoolClass,
    Student,
    StudentClass,
)
from sanctuary.domain import ChildSafetyInfo, SessionInfo, StudentInfo  # noqa: E402
from sanctuary.repositories import (  # noqa: E402
    InMemoryCheckinRepository,
    InMemoryChildInfoRepository,
    InMemoryEnrollmentRepository,
    InMemorySessionRepository,
    InMemoryStudentRepository,
)


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

SECURITY_CODE_PATTERN = r"^[A-Z0-9]{6}$"
FIXED_NOW = datetime(2024, 3, 3, 14, 5, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def disable_rate_limiting_for_tests(request):
    """Disable rate limiting for all tests except rate limiting tests."""
    if "rate_limit" in request.keywords:
        limiter.reset()
        yield
        limiter.reset()
    else:
        limiter.enabled = False
        yield
        limiter.enabled = True


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with a test database."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def staff_token():
    """Generate a valid staff JWT token."""
    return create_access_token({"is_staff": True})


@pytest.fixture
def staff_client(client, staff_token):
    """Create a test client with the staff cookie already set."""
    client.cookies.set(STAFF_COOKIE_NAME, staff_token)
    return client


# -- database seeding ------------------------------------------------------

@pytest.fixture
def make_student(db_session):
    """Insert a student (and optionally their child info) and return the row."""
    def _make(full_name, guardian_name="Pat Guardian", allergies=None, special_needs=None, photo_url=None):
        student = Student(
            full_name=full_name,
            guardian_name=guardian_name,
            guardian_phone="555-0100",
            date_of_birth=date(2017, 5, 1),
            photo_url=photo_url,
        )
        db_session.add(student)
        db_session.flush()
        if allergies is not None or special_needs is not None:
            db_session.add(ChildInfo(
                student_id=student.id,
                allergies=list(allergies or []),
                medical_conditions=[],
                authorized_pickups=[],
                special_needs=special_needs,
            ))
        db_session.commit()
        db_session.refresh(student)
        return student
    return _make


@pytest.fixture
def make_class(db_session):
    """Insert a class enrolling the given students and return the row."""
    def _make(class_name, students=()):
        school_class = SchoolClass(class_name=class_name)
        db_session.add(school_class)
        db_session.flush()
        for student in students:
            db_session.add(StudentClass(student_id=student.id, class_id=school_class.id))
        db_session.commit()
        db_session.refresh(school_class)
        return school_class
    return _make


@pytest.fixture
def make_session(db_session):
    """Insert a check-in session and return the row."""
    def _make(name="Sunday Service", session_type="service", class_id=None, session_date=None,
              location=None, created_at=None, is_active=True):
        session = CheckinSession(
            name=name,
            session_type=session_type,
            session_date=session_date or date(2024, 3, 3),
            class_id=class_id,
            location=location,
            is_active=is_active,
            headcount=0,
        )
        if created_at is not None:
            session.created_at = created_at
        db_session.add(session)
        db_session.commit()
        db_session.refresh(session)
        return session
    return _make


# -- in-memory repositories ------------------------------------------------

class TickingClock:
    """A clock that moves forward one minute every time it is read."""

    def __init__(self, start=FIXED_NOW):
        self.now = start

    def __call__(self):
        current = self.now
        self.now = current + timedelta(minutes=1)
        return current


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def repos():
    """In-memory repositories with a small Sunday-morning roster.

    Students: Alice Moore (peanut and dairy allergies), Ben Carter,
    Chloe Diaz (special needs), Dylan Evans.
    Sessions: 1 "Sunday Service" (everyone), 2 "Kids Class" (class 10:
    Alice and Chloe), 3 "New Class" (class 20: nobody enrolled).
    """
    students = [
        StudentInfo(1, "Alice Moore", "Jane Moore", "555-0101", date(2017, 1, 5)),
        StudentInfo(2, "Ben Carter", "Sam Carter", "555-0102", date(2016, 6, 9), photo_url="https://img/ben.png"),
        StudentInfo(3, "Chloe Diaz", "Maria Diaz", "555-0103", date(2018, 2, 14)),
        StudentInfo(4, "Dylan Evans", "Rachel Evans", "555-0104", date(2015, 11, 30)),
    ]
    sessions = [
        SessionInfo(1, "Sunday Service", "service", date(2024, 3, 3), created_at=FIXED_NOW),
        SessionInfo(2, "Kids Class", "class", date(2024, 3, 3), class_id=10, location="Room 4",
                    created_at=FIXED_NOW + timedelta(minutes=1)),
        SessionInfo(3, "New Class", "class", date(2024, 3, 10), class_id=20, created_at=FIXED_NOW),
    ]
    safety = [
        ChildSafetyInfo(student_id=1, allergies=["Peanuts", "Dairy"]),
        ChildSafetyInfo(student_id=3, special_needs="Needs a quiet space"),
    ]
    return SimpleNamespace(
        sessions=InMemorySessionRepository(sessions),
        students=InMemoryStudentRepository(students),
        enrollments=InMemoryEnrollmentRepository({10: [1, 3], 20: []}),
        checkins=InMemoryCheckinRepository(),
        child_info=InMemoryChildInfoRepository(safety),
    )
