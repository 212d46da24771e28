# maintenance_portal/services/__init__.py
"""
Service layer root package.

Each subpackage implements portal use-cases on top of:

- SQLAlchemy models (maintenance_portal.models.*)
- Repositories (maintenance_portal.repositories.*)
- Pydantic schemas (maintenance_portal.schemas.*)
- Common service infrastructure (maintenance_portal.services.base.*)

Typical pattern for a service operation:

    def some_use_case(self, complaint_id, actor_id):
        complaint = self.repository.find_by_id(complaint_id)
        actor = self._resolve_actor(actor_id)
        denied = self._authorize(actor, complaint, ComplaintOperation.VIEW)
        if denied is not None:
            return denied
        ...
        return ServiceResult.success(complaint)
"""

from maintenance_portal.services.base import ServiceError, ServiceResult
from maintenance_portal.services.communication import ChatService
from maintenance_portal.services.complaint import (
    ComplaintAssignmentService,
    ComplaintNoteService,
    ComplaintService,
)
from maintenance_portal.services.file import ImageUploadService
from maintenance_portal.services.users import ProfileService

__all__ = [
    "ServiceError",
    "ServiceResult",
    "ChatService",
    "ComplaintAssignmentService",
    "ComplaintNoteService",
    "ComplaintService",
    "ImageUploadService",
    "ProfileService",
]
