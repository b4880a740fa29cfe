"""Database package."""
from sanctuary.db.session import engine, SessionLocal, get_db
from sanctuary.db.base import Base

__all__ = ["engine", "SessionLocal", "get_db", "Base"]
