"""
Declarative base and abstract models shared by every portal table.

Each table names itself with ``__tablename__``. Primary keys are UUID
strings generated in Python so ids exist before the first flush.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from maintenance_portal.core.utils import utcnow

Base = declarative_base()


def generate_uuid() -> str:
    return str(uuid4())


class BaseModel(Base):
    """String UUID primary key."""

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        comment="Primary key (UUID)"
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id!r}>"


class TimestampModel(BaseModel):
    """
    Adds ``created_at`` and ``updated_at``.

    Timestamps are assigned in Python rather than by the database so rows
    written in quick succession keep distinct, ordered values on every
    backend.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )
