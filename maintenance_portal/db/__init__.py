"""
Database package: engine, session factory and schema initialization.
"""

from maintenance_portal.db.base import Base
from maintenance_portal.db.session import SessionLocal, engine, get_db

__all__ = ["Base", "SessionLocal", "engine", "get_db"]
