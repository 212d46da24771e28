"""
Complaint work-note model.

Internal notes left by staff (and the owning student) alongside the chat
thread. Kept in a separate table so notes never show up as messages.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maintenance_portal.core.utils import utcnow
from maintenance_portal.models.base.base_model import BaseModel
from maintenance_portal.models.base.enums import UserRole
from maintenance_portal.models.base.types import value_enum

if TYPE_CHECKING:
    from maintenance_portal.models.complaint.complaint import Complaint

__all__ = ["ComplaintNote"]


class ComplaintNote(BaseModel):
    """
    Append-only work note on a complaint.

    Attributes:
        complaint_id: Associated complaint identifier
        author_id: Profile id of the author
        author_role: Author role at write time
        author_name: Author display name at write time
        body: Note text
    """

    __tablename__ = "complaint_notes"
    __table_args__ = (
        Index("ix_complaint_notes_thread", "complaint_id", "created_at", "id"),
        {"comment": "Internal work notes on complaints"},
    )

    complaint_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("complaints.id", ondelete="CASCADE"),
        nullable=False,
    )

    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    author_role: Mapped[UserRole] = mapped_column(
        value_enum(UserRole, "note_author_role_enum"),
        nullable=False,
    )

    author_name: Mapped[str] = mapped_column(String(255), nullable=False)

    body: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    complaint: Mapped["Complaint"] = relationship(
        "Complaint",
        back_populates="notes",
        lazy="select",
    )

    def __repr__(self) -> str:
        return f"<ComplaintNote(id={self.id}, complaint_id={self.complaint_id})>"
