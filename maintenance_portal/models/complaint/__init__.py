"""
Complaint models package.

Complaints, their chat messages and internal work notes.
"""

from maintenance_portal.models.complaint.complaint import Complaint
from maintenance_portal.models.complaint.complaint_message import ComplaintMessage
from maintenance_portal.models.complaint.complaint_note import ComplaintNote

__all__ = [
    "Complaint",
    "ComplaintMessage",
    "ComplaintNote",
]
