"""
Complaint schemas package.
"""

from maintenance_portal.schemas.complaint.complaint_base import (
    ComplaintLocation,
    ComplaintCreate,
    ComplaintAssignment,
    ComplaintStatusUpdate,
)
from maintenance_portal.schemas.complaint.complaint_filters import (
    ComplaintFilterParams,
    ComplaintSort,
)
from maintenance_portal.schemas.complaint.complaint_response import (
    ComplaintResponse,
    ComplaintSubmissionResponse,
    ComplaintStats,
)
from maintenance_portal.schemas.complaint.complaint_messages import (
    MessageCreate,
    MessageResponse,
    MessageListResponse,
    NoteCreate,
    NoteResponse,
)

__all__ = [
    "ComplaintLocation",
    "ComplaintCreate",
    "ComplaintAssignment",
    "ComplaintStatusUpdate",
    "ComplaintFilterParams",
    "ComplaintSort",
    "ComplaintResponse",
    "ComplaintSubmissionResponse",
    "ComplaintStats",
    "MessageCreate",
    "MessageResponse",
    "MessageListResponse",
    "NoteCreate",
    "NoteResponse",
]
