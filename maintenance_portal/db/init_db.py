"""Database initialization utilities."""
import logging
from typing import Optional

from sqlalchemy import inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from maintenance_portal.db.base import Base
from maintenance_portal.db.session import SessionLocal, engine as default_engine
from maintenance_portal.models.base.enums import UserRole
from maintenance_portal.models.user.profile import Profile

logger = logging.getLogger(__name__)

# Development accounts, one per role
DEMO_PROFILES = (
    {"username": "student", "name": "John Doe", "role": UserRole.STUDENT,
     "email": "student@campus.edu", "phone": "555-0101"},
    {"username": "admin", "name": "Admin User", "role": UserRole.ADMIN,
     "email": "admin@campus.edu", "phone": "555-0100"},
    {"username": "maintenance", "name": "Mike Wilson", "role": UserRole.MAINTENANCE,
     "email": "maintenance@campus.edu", "phone": "555-0102"},
)


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Initialize the database by creating all tables.

    Note: This is suitable for development/testing only.
    """
    engine = engine or default_engine
    try:
        existing_tables = set(inspect(engine).get_table_names())
        Base.metadata.create_all(bind=engine)
        created = set(Base.metadata.tables) - existing_tables
        if created:
            logger.info("Database tables created: %s", ", ".join(sorted(created)))
        else:
            logger.info("Database already initialized with %d tables", len(existing_tables))
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


def drop_db(engine: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing.
    """
    Base.metadata.drop_all(bind=engine or default_engine)
    logger.warning("All database tables dropped")


def seed_demo_profiles(db: Optional[Session] = None) -> int:
    """
    Insert the demo profiles that do not exist yet.

    Returns:
        Number of profiles created
    """
    own_session = db is None
    db = db or SessionLocal()
    created = 0
    try:
        for data in DEMO_PROFILES:
            exists = db.execute(
                select(Profile.id).where(Profile.username == data["username"])
            ).first()
            if exists:
                continue
            db.add(Profile(**data))
            created += 1
        db.commit()
        logger.info("Seeded %d demo profile(s)", created)
        return created
    except Exception:
        db.rollback()
        raise
    finally:
        if own_session:
            db.close()
