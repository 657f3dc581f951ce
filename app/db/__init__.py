"""Database module."""

from app.db.base import Base
from app.db.session import Database, get_database, get_db

__all__ = ["Base", "Database", "get_database", "get_db"]
