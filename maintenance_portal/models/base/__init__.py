"""
Base models package.

Provides the declarative base, custom column types and enums for all
database models.
"""

from maintenance_portal.models.base.base_model import (
    Base,
    BaseModel,
    TimestampModel,
)
from maintenance_portal.models.base.types import EmailType, URLListType, value_enum
from maintenance_portal.models.base.enums import (
    UserRole,
    ComplaintCategory,
    ComplaintStatus,
    Priority,
    STATUS_SEQUENCE,
    PRIORITY_RANK,
    ASSIGNED_STATUSES,
    RESOLVED_STATUSES,
    PENDING_STATUSES,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "EmailType",
    "URLListType",
    "value_enum",
    "UserRole",
    "ComplaintCategory",
    "ComplaintStatus",
    "Priority",
    "STATUS_SEQUENCE",
    "PRIORITY_RANK",
    "ASSIGNED_STATUSES",
    "RESOLVED_STATUSES",
    "PENDING_STATUSES",
]
