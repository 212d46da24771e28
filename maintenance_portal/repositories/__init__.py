"""
Repository layer: SQLAlchemy data access, one repository per aggregate.
"""

from maintenance_portal.repositories.base import BaseRepository
from maintenance_portal.repositories.user import ProfileRepository
from maintenance_portal.repositories.complaint import (
    ComplaintRepository,
    ComplaintMessageRepository,
    ComplaintNoteRepository,
)

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "ComplaintRepository",
    "ComplaintMessageRepository",
    "ComplaintNoteRepository",
]
