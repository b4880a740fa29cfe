"""Create the database schema."""
from sqlalchemy.engine import Engine

from sanctuary.core.logging_config import get_logger
from sanctuary.db.base import Base

logger = get_logger(__name__)


def init_db(bind: Engine) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=bind)
    logger.info("database_initialized", tables=sorted(Base.metadata.tables))


if __name__ == "__main__":
    from sanctuary.db.session import engine

    init_db(engine)
