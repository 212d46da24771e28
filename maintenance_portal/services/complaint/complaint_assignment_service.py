"""
Complaint assignment service: routes a complaint to a maintenance worker.
"""

from typing import Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from maintenance_portal.core.logging import get_audit_logger
from maintenance_portal.core.permissions import ComplaintOperation
from maintenance_portal.core.utils import utcnow
from maintenance_portal.models.base.enums import RESOLVED_STATUSES, ComplaintStatus, UserRole
from maintenance_portal.models.complaint.complaint import Complaint
from maintenance_portal.repositories.complaint.complaint_repository import ComplaintRepository
from maintenance_portal.repositories.user.profile_repository import ProfileRepository
from maintenance_portal.services.base import (
    ActorScopedService,
    NotificationDispatcher,
    ServiceResult,
)
from maintenance_portal.services.complaint.complaint_notifications import ComplaintNotifier

logger = logging.getLogger(__name__)
audit = get_audit_logger(component="complaints")


class ComplaintAssignmentService(ActorScopedService[Complaint, ComplaintRepository]):
    """
    Admin-only assignment of complaints to maintenance staff.

    Assigning sets ``assigned_to``, snapshots the worker's display name and
    moves the complaint to ``assigned``. Reassigning an open complaint is
    allowed and puts it back to ``assigned``; resolved and closed
    complaints cannot be reassigned.
    """

    def __init__(
        self,
        repository: ComplaintRepository,
        profile_repo: ProfileRepository,
        db_session: Session,
        notifier: Optional[NotificationDispatcher] = None,
    ):
        super().__init__(repository, profile_repo, db_session)
        self.notifications = ComplaintNotifier(notifier, profile_repo)
        self._logger = logger

    def assign(
        self,
        complaint_id: str,
        maintenance_id: str,
        actor_id: str,
    ) -> ServiceResult[Complaint]:
        """
        Assign a complaint to a maintenance worker.

        Args:
            complaint_id: Complaint identifier
            maintenance_id: Profile id of the worker
            actor_id: Authenticated user id (must be an admin)

        Returns:
            ServiceResult containing the updated complaint or error
        """
        try:
            complaint = self.repository.find_by_id_for_update(complaint_id)
            if not complaint:
                self._rollback()
                return ServiceResult.not_found("Complaint", complaint_id)

            actor = self._resolve_actor(actor_id)
            denied = self._authorize(actor, complaint, ComplaintOperation.ASSIGN)
            if denied is not None:
                self._rollback()
                return denied

            worker = self.profile_repo.find_by_id(maintenance_id) if maintenance_id else None
            if worker is None or worker.role != UserRole.MAINTENANCE:
                self._rollback()
                return ServiceResult.not_found("Maintenance worker", maintenance_id)

            if complaint.status in RESOLVED_STATUSES:
                self._rollback()
                return ServiceResult.validation_failure(
                    f"Cannot assign a {complaint.status.value} complaint",
                    field="status",
                )

            previous_assignee = complaint.assigned_to
            complaint.assigned_to = worker.id
            complaint.assigned_to_name = worker.name
            complaint.status = ComplaintStatus.ASSIGNED
            complaint.updated_at = utcnow()

            broken = self._lifecycle_failure(complaint)
            if broken is not None:
                self._rollback()
                return broken

            self.db.flush()
            self._commit()
        except SQLAlchemyError as e:
            self._rollback()
            return self._handle_exception(e, "assign complaint", complaint_id)

        audit.info(
            "complaint.assigned",
            complaint_id=complaint_id,
            maintenance_id=worker.id,
            previous_assignee=previous_assignee,
            actor_id=actor_id,
        )
        self.notifications.complaint_assigned(complaint, worker)

        return ServiceResult.success(
            complaint,
            message=f"Complaint assigned to {worker.name}",
            metadata={
                "complaint_id": complaint_id,
                "maintenance_id": worker.id,
                "reassigned": previous_assignee is not None and previous_assignee != worker.id,
            },
        )
