"""
Profile model.

A profile maps an authenticated user id to the role and contact details
the portal authorizes and notifies against.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maintenance_portal.models.base.base_model import TimestampModel
from maintenance_portal.models.base.enums import UserRole
from maintenance_portal.models.base.types import EmailType, value_enum

if TYPE_CHECKING:
    from maintenance_portal.models.complaint.complaint import Complaint

__all__ = ["Profile"]


class Profile(TimestampModel):
    """
    Portal user profile.

    The profile id is the identity provider's user id. Role is the only
    source of truth for authorization and is never taken from a request.
    """

    __tablename__ = "profiles"
    __table_args__ = (
        Index("ix_profiles_role", "role"),
        {"comment": "User profiles keyed by identity provider user id"},
    )

    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        comment="Unique login handle",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )

    role: Mapped[UserRole] = mapped_column(
        value_enum(UserRole, "user_role_enum"),
        nullable=False,
        default=UserRole.STUDENT,
        comment="Portal role",
    )

    phone: Mapped[Optional[str]] = mapped_column(
        String(30),
        nullable=True,
        comment="Contact phone number",
    )

    email: Mapped[Optional[str]] = mapped_column(
        EmailType,
        nullable=True,
        comment="Notification address",
    )

    # Relationships
    complaints: Mapped[List["Complaint"]] = relationship(
        "Complaint",
        foreign_keys="Complaint.student_id",
        back_populates="student",
        lazy="noload",
    )

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, username={self.username}, role={self.role.value})>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT

    @property
    def is_maintenance(self) -> bool:
        return self.role == UserRole.MAINTENANCE
