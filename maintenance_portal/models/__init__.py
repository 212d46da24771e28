"""
Database models.

Importing this package registers every mapped class on the shared
metadata.
"""

from maintenance_portal.models.base import Base
from maintenance_portal.models.user import Profile
from maintenance_portal.models.complaint import Complaint, ComplaintMessage, ComplaintNote

__all__ = [
    "Base",
    "Profile",
    "Complaint",
    "ComplaintMessage",
    "ComplaintNote",
]
