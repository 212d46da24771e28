"""
Complaint chat message model.

Messages are append-only: once written they are never edited or deleted.
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

__all__ = ["ComplaintMessage"]


class ComplaintMessage(BaseModel):
    """
    A chat message on a complaint thread.

    Attributes:
        complaint_id: Associated complaint identifier
        sender_id: Profile id of the sender
        sender_role: Sender role at send time
        sender_name: Sender display name at send time
        body: Message text
        created_at: Server-assigned send time
    """

    __tablename__ = "complaint_messages"
    __table_args__ = (
        Index("ix_complaint_messages_thread", "complaint_id", "created_at", "id"),
        {"comment": "Per-complaint chat messages"},
    )

    complaint_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("complaints.id", ondelete="CASCADE"),
        nullable=False,
        comment="Associated complaint identifier",
    )

    sender_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    sender_role: Mapped[UserRole] = mapped_column(
        value_enum(UserRole, "message_sender_role_enum"),
        nullable=False,
    )

    sender_name: Mapped[str] = mapped_column(String(255), nullable=False)

    body: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="Server-assigned send time",
    )

    complaint: Mapped["Complaint"] = relationship(
        "Complaint",
        back_populates="messages",
        lazy="select",
    )

    def __repr__(self) -> str:
        return (
            f"<ComplaintMessage(id={self.id}, complaint_id={self.complaint_id}, "
            f"sender_id={self.sender_id})>"
        )
