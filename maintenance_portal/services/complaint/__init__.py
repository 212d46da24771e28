"""
Complaint lifecycle services.
"""

from maintenance_portal.services.complaint.complaint_service import ComplaintService
from maintenance_portal.services.complaint.complaint_assignment_service import ComplaintAssignmentService
from maintenance_portal.services.complaint.complaint_note_service import ComplaintNoteService
from maintenance_portal.services.complaint.complaint_notifications import (
    ComplaintNotifier,
    complaint_payload,
)

__all__ = [
    "ComplaintService",
    "ComplaintAssignmentService",
    "ComplaintNoteService",
    "ComplaintNotifier",
    "complaint_payload",
]
