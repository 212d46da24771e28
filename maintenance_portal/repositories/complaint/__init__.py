"""
Complaint repositories package.
"""

from maintenance_portal.repositories.complaint.complaint_repository import (
    ComplaintRepository,
    SORT_NEWEST,
    SORT_OLDEST,
    SORT_PRIORITY,
    SORT_OPTIONS,
)
from maintenance_portal.repositories.complaint.complaint_message_repository import (
    ComplaintMessageRepository,
    ComplaintNoteRepository,
)

__all__ = [
    "ComplaintRepository",
    "ComplaintMessageRepository",
    "ComplaintNoteRepository",
    "SORT_NEWEST",
    "SORT_OLDEST",
    "SORT_PRIORITY",
    "SORT_OPTIONS",
]
