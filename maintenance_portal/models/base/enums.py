"""
Database enums mirroring schema enums.

Provides SQLAlchemy-compatible enum definitions that match
the Pydantic schema enums for consistency.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    STUDENT = "student"
    ADMIN = "admin"
    MAINTENANCE = "maintenance"


class ComplaintCategory(str, enum.Enum):
    """Complaint categorization."""
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    HVAC = "hvac"
    STRUCTURAL = "structural"
    CLEANING = "cleaning"
    OTHER = "other"


class Priority(str, enum.Enum):
    """Complaint priority levels, used for display ordering only."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ComplaintStatus(str, enum.Enum):
    """Complaint lifecycle status, declared in forward order."""
    SUBMITTED = "submitted"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"

    @property
    def position(self) -> int:
        return STATUS_SEQUENCE.index(self)

    def is_after(self, other: "ComplaintStatus") -> bool:
        return self.position > other.position


STATUS_SEQUENCE = tuple(ComplaintStatus)

PRIORITY_RANK = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
    Priority.URGENT: 4,
}

# Statuses that require a bound maintenance worker
ASSIGNED_STATUSES = frozenset({
    ComplaintStatus.ASSIGNED,
    ComplaintStatus.IN_PROGRESS,
    ComplaintStatus.RESOLVED,
    ComplaintStatus.CLOSED,
})

# Statuses that carry a resolution timestamp
RESOLVED_STATUSES = frozenset({
    ComplaintStatus.RESOLVED,
    ComplaintStatus.CLOSED,
})

PENDING_STATUSES = frozenset({
    ComplaintStatus.SUBMITTED,
    ComplaintStatus.ASSIGNED,
    ComplaintStatus.IN_PROGRESS,
})


__all__ = [
    "UserRole",
    "ComplaintCategory",
    "Priority",
    "ComplaintStatus",
    "STATUS_SEQUENCE",
    "PRIORITY_RANK",
    "ASSIGNED_STATUSES",
    "RESOLVED_STATUSES",
    "PENDING_STATUSES",
]
