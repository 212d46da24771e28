"""
Complaint lifecycle notifications.

Decides who is told about what; rendering and delivery belong to the
notification dispatcher. Every method here runs after the triggering
transaction has committed and never raises.
"""

from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from maintenance_portal.core.logging import get_logger
from maintenance_portal.models.complaint.complaint import Complaint
from maintenance_portal.models.user.profile import Profile
from maintenance_portal.repositories.user.profile_repository import ProfileRepository
from maintenance_portal.services.base.notification_dispatcher import (
    NotificationDispatcher,
    TemplateKind,
)

logger = get_logger(__name__)


def complaint_payload(complaint: Complaint) -> Dict[str, Any]:
    location = f"{complaint.building}, Room {complaint.room_number}"
    if complaint.specific_location:
        location += f" ({complaint.specific_location})"
    return {
        "complaint_id": complaint.id,
        "complaint_title": complaint.title,
        "status": complaint.status.value,
        "category": complaint.category.value,
        "priority": complaint.priority.value,
        "location": location,
    }


class ComplaintNotifier:
    """Maps lifecycle events to notification recipients."""

    def __init__(
        self,
        dispatcher: Optional[NotificationDispatcher],
        profile_repo: ProfileRepository,
    ):
        self.dispatcher = dispatcher
        self.profile_repo = profile_repo

    def _send(self, recipient: Optional[Profile], kind: TemplateKind, payload: Dict[str, Any]) -> bool:
        if self.dispatcher is None or recipient is None:
            return False
        return self.dispatcher.notify(recipient.email, kind, payload, to_name=recipient.name)

    def complaint_submitted(self, complaint: Complaint, student: Profile) -> int:
        """
        Confirmation to the student plus a notice to every admin.

        Returns:
            Number of emails accepted by the sender
        """
        if self.dispatcher is None:
            return 0

        payload = complaint_payload(complaint)
        sent = int(self._send(student, TemplateKind.COMPLAINT_SUBMITTED, payload))
        try:
            admins = self.profile_repo.find_admins()
        except SQLAlchemyError as e:
            logger.error(f"Could not load admin recipients: {e}", extra={"complaint_id": complaint.id})
            admins = []
        for admin in admins:
            sent += int(self._send(admin, TemplateKind.NEW_COMPLAINT_ADMIN, payload))

        logger.debug(f"Submission notifications sent: {sent}", extra={"complaint_id": complaint.id})
        return sent

    def status_changed(self, complaint: Complaint) -> bool:
        """Status update to the owning student."""
        if self.dispatcher is None:
            return False
        try:
            student = self.profile_repo.find_by_id(complaint.student_id)
        except SQLAlchemyError as e:
            logger.error(f"Could not load complaint owner: {e}", extra={"complaint_id": complaint.id})
            return False
        return self._send(student, TemplateKind.STATUS_UPDATE, complaint_payload(complaint))

    def complaint_assigned(self, complaint: Complaint, worker: Profile) -> int:
        """Status update to the student and an assignment notice to the worker."""
        if self.dispatcher is None:
            return 0
        sent = int(self.status_changed(complaint))
        sent += int(self._send(worker, TemplateKind.COMPLAINT_ASSIGNED, complaint_payload(complaint)))
        return sent


__all__ = ["ComplaintNotifier", "complaint_payload"]
