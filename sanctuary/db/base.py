"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models here so metadata.create_all sees them
from sanctuary.db.models.school_class import SchoolClass, StudentClass  # noqa: F401, E402
from sanctuary.db.models.student import Student  # noqa: F401, E402
from sanctuary.db.models.child_info import ChildInfo  # noqa: F401, E402
from sanctuary.db.models.checkin_session import CheckinSession  # noqa: F401, E402
from sanctuary.db.models.checkin import Checkin  # noqa: F401, E402
