"""
Core complaint model with lifecycle tracking.

Handles complaint content, location, status, assignment and resolution
details, and relationships with the owning student, the assigned worker,
the chat thread and the internal work-note log.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maintenance_portal.core.utils import as_utc
from maintenance_portal.models.base.base_model import TimestampModel
from maintenance_portal.models.base.enums import (
    ASSIGNED_STATUSES,
    RESOLVED_STATUSES,
    ComplaintCategory,
    ComplaintStatus,
    Priority,
)
from maintenance_portal.models.base.types import URLListType, value_enum

if TYPE_CHECKING:
    from maintenance_portal.models.complaint.complaint_message import ComplaintMessage
    from maintenance_portal.models.complaint.complaint_note import ComplaintNote
    from maintenance_portal.models.user.profile import Profile

__all__ = ["Complaint"]


class Complaint(TimestampModel):
    """
    Maintenance complaint filed by a student.

    Attributes:
        title: Brief complaint summary
        description: Detailed complaint description
        category: Complaint category
        priority: Priority level (display ordering only)
        status: Current lifecycle status

        building: Building name
        room_number: Room number within the building
        specific_location: Optional free-text location detail

        images: URLs of photos supplied at submission
        completion_images: URLs of photos supplied at resolution

        student_id: Owning student profile id
        student_name: Student display name copied at submission
        assigned_to: Assigned maintenance profile id
        assigned_to_name: Worker display name copied at assignment

        resolved_at: Resolution timestamp
    """

    __tablename__ = "complaints"
    __table_args__ = (
        Index("ix_complaints_student_created", "student_id", "created_at"),
        Index("ix_complaints_assigned_to_status", "assigned_to", "status"),
        Index("ix_complaints_category_status", "category", "status"),
        {"comment": "Maintenance complaints and their lifecycle state"},
    )

    # Complaint Content
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Brief complaint summary",
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Detailed complaint description",
    )

    # Categorization
    category: Mapped[ComplaintCategory] = mapped_column(
        value_enum(ComplaintCategory, "complaint_category_enum"),
        nullable=False,
        index=True,
    )

    priority: Mapped[Priority] = mapped_column(
        value_enum(Priority, "priority_enum"),
        nullable=False,
        default=Priority.MEDIUM,
    )

    status: Mapped[ComplaintStatus] = mapped_column(
        value_enum(ComplaintStatus, "complaint_status_enum"),
        nullable=False,
        default=ComplaintStatus.SUBMITTED,
        index=True,
    )

    # Location Details
    building: Mapped[str] = mapped_column(String(255), nullable=False)
    room_number: Mapped[str] = mapped_column(String(50), nullable=False)
    specific_location: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="Detailed location within the room or building",
    )

    # Media (URLs stored as JSON array)
    images: Mapped[List[str]] = mapped_column(
        URLListType,
        nullable=False,
        default=list,
        comment="URLs of photos supplied at submission",
    )

    completion_images: Mapped[List[str]] = mapped_column(
        URLListType,
        nullable=False,
        default=list,
        comment="URLs of photos supplied at resolution",
    )

    # Ownership
    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="Owning student profile id",
    )

    student_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Student display name at submission time",
    )

    # Assignment Details
    assigned_to: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="RESTRICT"),
        nullable=True,
        comment="Assigned maintenance profile id",
    )

    assigned_to_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Worker display name at assignment time",
    )

    resolved_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Resolution timestamp",
    )

    # Relationships
    student: Mapped["Profile"] = relationship(
        "Profile",
        foreign_keys=[student_id],
        back_populates="complaints",
        lazy="select",
    )

    assignee: Mapped[Optional["Profile"]] = relationship(
        "Profile",
        foreign_keys=[assigned_to],
        lazy="select",
    )

    messages: Mapped[List["ComplaintMessage"]] = relationship(
        "ComplaintMessage",
        back_populates="complaint",
        cascade="all, delete-orphan",
        lazy="select",
        order_by="(ComplaintMessage.created_at, ComplaintMessage.id)",
    )

    notes: Mapped[List["ComplaintNote"]] = relationship(
        "ComplaintNote",
        back_populates="complaint",
        cascade="all, delete-orphan",
        lazy="select",
        order_by="(ComplaintNote.created_at, ComplaintNote.id)",
    )

    def __repr__(self) -> str:
        """String representation of Complaint."""
        return (
            f"<Complaint(id={self.id}, "
            f"status={self.status.value}, "
            f"priority={self.priority.value})>"
        )

    @property
    def time_to_resolve_hours(self) -> Optional[float]:
        """Time taken to resolve in hours."""
        if not self.resolved_at or not self.created_at:
            return None
        delta = as_utc(self.resolved_at) - as_utc(self.created_at)
        return delta.total_seconds() / 3600

    def lifecycle_violations(self) -> List[str]:
        """
        Return descriptions of broken lifecycle invariants.

        An empty list means resolved_at and assigned_to are consistent with
        the current status.
        """
        problems = []
        should_be_resolved = self.status in RESOLVED_STATUSES
        if should_be_resolved != (self.resolved_at is not None):
            problems.append(
                f"resolved_at must {'be set' if should_be_resolved else 'be empty'} "
                f"when status is {self.status.value}"
            )
        should_be_assigned = self.status in ASSIGNED_STATUSES
        if should_be_assigned != (self.assigned_to is not None):
            problems.append(
                f"assigned_to must {'be set' if should_be_assigned else 'be empty'} "
                f"when status is {self.status.value}"
            )
        return problems
