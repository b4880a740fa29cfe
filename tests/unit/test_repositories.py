"""Unit tests for the SQLAlchemy repositories against SQLite."""
from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from sanctuary.db.models import Checkin
from sanctuary.domain import NewCheckin
from sanctuary.repositories import (
    RepositoryError,
    SqlCheckinRepository,
    SqlChildInfoRepository,
    SqlEnrollmentRepository,
    SqlSessionRepository,
    SqlStudentRepository,
)

NOW = datetime(2024, 3, 3, 14, 5, tzinfo=timezone.utc)


def _new(session_id, student_id=None, guest_name=None, at=NOW, code="K7Q2ZD"):
    return NewCheckin(
        session_id=session_id,
        student_id=student_id,
        guest_name=guest_name,
        security_code=code,
        checkin_time=at,
    )


@pytest.mark.unit
class TestSqlSessionRepository:
    """Test session persistence."""

    def test_add_and_get(self, db_session):
        repo = SqlSessionRepository(db_session)
        created = repo.add(name="Sunday Service", session_type="service", session_date=date(2024, 3, 3))

        fetched = repo.get(created.id)
        assert fetched.name == "Sunday Service"
        assert fetched.is_active is True
        assert fetched.headcount == 0
        assert fetched.created_at.tzinfo == timezone.utc

    def test_get_missing(self, db_session):
        assert SqlSessionRepository(db_session).get(999) is None

    def test_list_newest_first(self, db_session, make_session):
        older = make_session(name="Last Week", session_date=date(2024, 2, 25))
        early = make_session(name="First Service", created_at=NOW)
        late = make_session(name="Second Service", created_at=NOW + timedelta(hours=2))

        names = [s.name for s in SqlSessionRepository(db_session).list_all()]
        assert names == [late.name, early.name, older.name]

    def test_list_by_type(self, db_session, make_session):
        make_session(name="Sunday Service")
        make_session(name="Kids Class", session_type="class")

        sessions = SqlSessionRepository(db_session).list_all(session_type="class")
        assert [s.name for s in sessions] == ["Kids Class"]

    def test_update_headcount_and_active(self, db_session, make_session):
        session = make_session()
        repo = SqlSessionRepository(db_session)

        assert repo.update_headcount(session.id, 23).headcount == 23
        assert repo.set_active(session.id, False).is_active is False
        assert repo.update_headcount(999, 1) is None
        assert repo.set_active(999, True) is None


@pytest.mark.unit
class TestSqlRosterRepositories:
    """Test the read-only student, enrollment and child info stores."""

    def test_students_by_ids(self, db_session, make_student):
        alice = make_student("Alice Moore")
        make_student("Ben Carter")
        chloe = make_student("Chloe Diaz")

        repo = SqlStudentRepository(db_session)
        assert [s.full_name for s in repo.list_all()] == ["Alice Moore", "Ben Carter", "Chloe Diaz"]
        assert [s.id for s in repo.list_by_ids([chloe.id, alice.id])] == [alice.id, chloe.id]
        assert repo.list_by_ids([]) == []
        assert repo.get(999) is None

    def test_enrollments(self, db_session, make_student, make_class):
        alice = make_student("Alice Moore")
        make_student("Ben Carter")
        school_class = make_class("Kindergarten", [alice])

        repo = SqlEnrollmentRepository(db_session)
        assert repo.student_ids_for_class(school_class.id) == [alice.id]
        assert repo.student_ids_for_class(999) == []
        assert repo.class_exists(school_class.id)
        assert not repo.class_exists(999)

    def test_child_info(self, db_session, make_student):
        alice = make_student("Alice Moore", allergies=["Peanuts", "Dairy"])
        ben = make_student("Ben Carter")

        repo = SqlChildInfoRepository(db_session)
        assert repo.get(alice.id).allergies == ["Peanuts", "Dairy"]
        assert repo.get(alice.id).has_allergies
        assert repo.get(ben.id) is None
        assert [i.student_id for i in repo.list_for_students([alice.id, ben.id])] == [alice.id]


@pytest.mark.unit
class TestSqlCheckinRepository:
    """Test ledger persistence."""

    def test_add_student_and_guest(self, db_session, make_session, make_student):
        session = make_session()
        alice = make_student("Alice Moore")
        repo = SqlCheckinRepository(db_session)

        student_record = repo.add(_new(session.id, student_id=alice.id))
        guest_record = repo.add(_new(session.id, guest_name="Visiting Emma", at=NOW + timedelta(minutes=1)))

        assert student_record.student_id == alice.id
        assert student_record.is_active
        assert student_record.checkin_time == NOW
        assert guest_record.is_guest
        assert [r.id for r in repo.list_for_session(session.id)] == [guest_record.id, student_record.id]

    def test_add_many_writes_every_row(self, db_session, make_session, make_student):
        session = make_session()
        students = [make_student(name) for name in ("Alice Moore", "Ben Carter", "Chloe Diaz")]
        repo = SqlCheckinRepository(db_session)

        records = repo.add_many([_new(session.id, student_id=s.id) for s in students])

        assert [r.student_id for r in records] == [s.id for s in students]
        assert db_session.query(Checkin).count() == 3

    def test_add_many_is_all_or_nothing(self, db_session, make_session, make_student):
        session = make_session()
        alice = make_student("Alice Moore")
        repo = SqlCheckinRepository(db_session)

        with patch.object(db_session, "commit", side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))):
            with pytest.raises(RepositoryError, match="add_checkins failed"):
                repo.add_many([_new(session.id, student_id=alice.id), _new(session.id, guest_name="Visiting Emma")])

        assert db_session.query(Checkin).count() == 0

    def test_student_xor_guest_enforced_by_database(self, db_session, make_session, make_student):
        session = make_session()
        alice = make_student("Alice Moore")

        db_session.add(Checkin(
            session_id=session.id,
            student_id=alice.id,
            guest_name="Visiting Emma",
            security_code="K7Q2ZD",
            checkin_time=NOW,
        ))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_save_checkout(self, db_session, make_session, make_student):
        session = make_session()
        alice = make_student("Alice Moore")
        repo = SqlCheckinRepository(db_session)
        record = repo.add(_new(session.id, student_id=alice.id))

        later = NOW + timedelta(hours=1)
        saved = repo.save_checkout(record.checked_out(later))

        assert not saved.is_active
        assert saved.checkout_time == later
        assert not repo.get(record.id).is_active

    def test_count_by_session(self, db_session, make_session, make_student):
        first = make_session(name="First Service")
        second = make_session(name="Second Service")
        alice = make_student("Alice Moore")
        repo = SqlCheckinRepository(db_session)
        repo.add(_new(first.id, student_id=alice.id))
        repo.add(_new(first.id, guest_name="Visiting Emma"))
        repo.add(_new(second.id, student_id=alice.id))

        assert repo.count_by_session() == {first.id: 2, second.id: 1}
