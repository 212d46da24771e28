"""
Core complaint service: submission, status changes, listings and
dashboard statistics.

Every operation is performed on behalf of an authenticated user id. The
acting profile is loaded from the Profile Store, checked against the
complaint access rules, and only then is the complaint touched.
"""

from typing import Any, Dict, List, Optional, Sequence
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from maintenance_portal.core.logging import get_audit_logger
from maintenance_portal.core.permissions import ComplaintOperation
from maintenance_portal.core.utils import is_blank, utcnow
from maintenance_portal.models.base.enums import (
    PENDING_STATUSES,
    ComplaintStatus,
    UserRole,
)
from maintenance_portal.models.complaint.complaint import Complaint
from maintenance_portal.models.user.profile import Profile
from maintenance_portal.repositories.complaint.complaint_repository import ComplaintRepository
from maintenance_portal.repositories.user.profile_repository import ProfileRepository
from maintenance_portal.schemas.complaint.complaint_base import ComplaintCreate
from maintenance_portal.schemas.complaint.complaint_filters import ComplaintFilterParams
from maintenance_portal.schemas.complaint.complaint_response import ComplaintStats
from maintenance_portal.services.base import (
    ActorScopedService,
    NotificationDispatcher,
    ServiceResult,
)
from maintenance_portal.services.complaint.complaint_notifications import ComplaintNotifier
from maintenance_portal.services.file.image_service import ImageFile, ImageUploadService

logger = logging.getLogger(__name__)
audit = get_audit_logger(component="complaints")


class ComplaintService(ActorScopedService[Complaint, ComplaintRepository]):
    """
    High-level complaint lifecycle operations.

    Status only moves forward (submitted, assigned, in-progress, resolved,
    closed). Skipping ahead is allowed; moving back is not. The one
    sanctioned way back to ``assigned`` is reassignment, handled by
    ComplaintAssignmentService.
    """

    def __init__(
        self,
        repository: ComplaintRepository,
        profile_repo: ProfileRepository,
        db_session: Session,
        notifier: Optional[NotificationDispatcher] = None,
        image_service: Optional[ImageUploadService] = None,
    ):
        """
        Initialize complaint service.

        Args:
            repository: Complaint repository instance
            profile_repo: Profile Store
            db_session: Active database session
            notifier: Email dispatcher; notifications are skipped when None
            image_service: Photo uploader used by submit_with_images
        """
        super().__init__(repository, profile_repo, db_session)
        self.notifications = ComplaintNotifier(notifier, profile_repo)
        self.image_service = image_service
        self._logger = logger

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def create_complaint(
        self,
        actor_id: str,
        data: ComplaintCreate,
    ) -> ServiceResult[Complaint]:
        """
        File a new complaint in the submitted state.

        Only students may submit. The student's display name is copied onto
        the complaint. After commit, the student gets a confirmation email
        and every admin gets a new-complaint notice.

        Args:
            actor_id: Authenticated user id of the submitting student
            data: Complaint content, location and already-uploaded image URLs

        Returns:
            ServiceResult containing the created complaint or error
        """
        actor = self._resolve_actor(actor_id)
        denied = self._authorize(actor, None, ComplaintOperation.CREATE)
        if denied is not None:
            return denied

        field_errors = self._validate_submission(data)
        if field_errors:
            return ServiceResult.field_errors(field_errors)

        return self._insert_complaint(actor, data, list(data.images))

    def submit_with_images(
        self,
        actor_id: str,
        data: ComplaintCreate,
        images: Sequence[ImageFile],
    ) -> ServiceResult[Complaint]:
        """
        Upload photos, then file the complaint with whatever uploaded.

        A photo that fails to upload is left out and reported; the
        submission itself still succeeds. Result metadata carries
        ``images_uploaded``, ``images_attempted`` and the full
        ``upload_report``.

        Args:
            actor_id: Authenticated user id of the submitting student
            data: Complaint content; any URLs in ``data.images`` are kept
                ahead of the new uploads
            images: Files to upload, in order

        Returns:
            ServiceResult containing the created complaint or error
        """
        actor = self._resolve_actor(actor_id)
        denied = self._authorize(actor, None, ComplaintOperation.CREATE)
        if denied is not None:
            return denied

        field_errors = self._validate_submission(data)
        if field_errors:
            return ServiceResult.field_errors(field_errors)

        if images and self.image_service is None:
            return ServiceResult.upstream_failure("Image uploads are not configured", service="blob_store")

        report = self.image_service.upload_images(images) if images else None

        urls = list(data.images) + (report.urls if report else [])
        result = self._insert_complaint(actor, data, urls)
        if result.is_success and report is not None:
            result.add_metadata("images_uploaded", report.uploaded)
            result.add_metadata("images_attempted", report.attempted)
            result.add_metadata("upload_report", report)
            if report.is_partial:
                result.message = (
                    f"Complaint submitted; {report.summary()} images uploaded"
                )
        return result

    def _insert_complaint(
        self,
        student: Profile,
        data: ComplaintCreate,
        image_urls: List[str],
    ) -> ServiceResult[Complaint]:
        try:
            complaint = self.repository.create_complaint(
                student_id=student.id,
                student_name=student.name,
                title=data.title,
                description=data.description,
                category=data.category,
                priority=data.priority,
                building=data.location.building,
                room_number=data.location.room_number,
                specific_location=data.location.specific_location,
                images=image_urls,
            )
            broken = self._lifecycle_failure(complaint)
            if broken is not None:
                self._rollback()
                return broken
            self._commit()
        except SQLAlchemyError as e:
            self._rollback()
            return self._handle_exception(e, "create complaint", student.id)

        audit.info(
            "complaint.submitted",
            complaint_id=complaint.id,
            student_id=student.id,
            category=complaint.category.value,
            priority=complaint.priority.value,
        )
        self.notifications.complaint_submitted(complaint, student)

        return ServiceResult.success(
            complaint,
            message="Complaint submitted successfully",
            metadata={"complaint_id": complaint.id},
        )

    # -------------------------------------------------------------------------
    # Status Changes
    # -------------------------------------------------------------------------

    def update_status(
        self,
        complaint_id: str,
        new_status: Any,
        actor_id: str,
        completion_images: Optional[List[str]] = None,
    ) -> ServiceResult[Complaint]:
        """
        Move a complaint forward in its lifecycle.

        Allowed for admins, and for the maintenance worker currently
        assigned. Moving to ``resolved`` stamps ``resolved_at`` and stores
        the completion photos; closing stamps ``resolved_at`` if it was
        never set. The owning student is emailed after commit.

        Args:
            complaint_id: Complaint identifier
            new_status: Target status (enum or its string value)
            actor_id: Authenticated user id
            completion_images: Photo URLs, only with ``resolved``

        Returns:
            ServiceResult containing the updated complaint or error
        """
        try:
            complaint = self.repository.find_by_id_for_update(complaint_id)
            if not complaint:
                return self._abort(ServiceResult.not_found("Complaint", complaint_id))

            actor = self._resolve_actor(actor_id)
            denied = self._authorize(actor, complaint, ComplaintOperation.UPDATE_STATUS)
            if denied is not None:
                return self._abort(denied)

            try:
                target = ComplaintStatus(new_status)
            except ValueError:
                return self._abort(ServiceResult.validation_failure(
                    f"Unknown status: {new_status}", field="status"
                ))

            invalid = self._validate_status_change(complaint, target, completion_images)
            if invalid is not None:
                return self._abort(invalid)

            previous = complaint.status
            now = utcnow()
            complaint.status = target
            complaint.updated_at = now
            if target == ComplaintStatus.RESOLVED:
                complaint.resolved_at = now
                complaint.completion_images = list(completion_images or [])
            elif target == ComplaintStatus.CLOSED and complaint.resolved_at is None:
                complaint.resolved_at = now

            broken = self._lifecycle_failure(complaint)
            if broken is not None:
                return self._abort(broken)

            self.db.flush()
            self._commit()
        except SQLAlchemyError as e:
            self._rollback()
            return self._handle_exception(e, "update complaint status", complaint_id)

        audit.info(
            "complaint.status_changed",
            complaint_id=complaint_id,
            actor_id=actor_id,
            from_status=previous.value,
            to_status=target.value,
        )
        self.notifications.status_changed(complaint)

        return ServiceResult.success(
            complaint,
            message=f"Status updated to {target.value}",
            metadata={
                "complaint_id": complaint_id,
                "previous_status": previous.value,
                "new_status": target.value,
            },
        )

    # -------------------------------------------------------------------------
    # Retrieval
    # -------------------------------------------------------------------------

    def get_complaint(self, complaint_id: str, actor_id: str) -> ServiceResult[Complaint]:
        """
        Fetch one complaint visible to the actor.
        """
        try:
            complaint = self.repository.find_by_id(complaint_id)
            if not complaint:
                return ServiceResult.not_found("Complaint", complaint_id)

            actor = self._resolve_actor(actor_id)
            denied = self._authorize(actor, complaint, ComplaintOperation.VIEW)
            if denied is not None:
                return denied

            return ServiceResult.success(complaint)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "get complaint", complaint_id)

    def list_complaints(
        self,
        actor_id: str,
        filters: Optional[ComplaintFilterParams] = None,
    ) -> ServiceResult[List[Complaint]]:
        """
        List complaints in the actor's scope, filtered.

        Scope comes from the actor's stored role: students see their own
        complaints, maintenance staff see those assigned to them, admins
        see everything. Filters then narrow the scoped set (logical AND).
        Newest first unless another sort is requested.

        Args:
            actor_id: Authenticated user id
            filters: Search term, status, category and sort

        Returns:
            ServiceResult containing the matching complaints
        """
        filters = filters or ComplaintFilterParams()
        try:
            actor = self._resolve_actor(actor_id)
            if actor is None:
                return self._authorize(None, None, ComplaintOperation.VIEW)

            complaints = self.repository.search(
                search=filters.search,
                status=filters.status,
                category=filters.category,
                sort=filters.sort,
                **self._scope_for(actor),
            )
            return ServiceResult.success(
                complaints,
                metadata={"count": len(complaints), "scope": actor.role.value},
            )
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list complaints", actor_id)

    def get_stats(self, actor_id: str) -> ServiceResult[ComplaintStats]:
        """
        Dashboard counters over the actor's scope.

        ``pending`` counts submitted, assigned and in-progress complaints.
        The average resolution time covers complaints with a resolution
        timestamp and is None when there are none.
        """
        try:
            actor = self._resolve_actor(actor_id)
            if actor is None:
                return self._authorize(None, None, ComplaintOperation.VIEW)

            scope = self._scope_for(actor)
            by_status = self.repository.count_by_column("status", **scope)
            by_category = self.repository.count_by_column("category", **scope)
            by_priority = self.repository.count_by_column("priority", **scope)
            resolved = self.repository.find_resolved(**scope)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "compute complaint statistics", actor_id)

        durations = [c.time_to_resolve_hours for c in resolved if c.time_to_resolve_hours is not None]
        average = round(sum(durations) / len(durations), 2) if durations else None

        stats = ComplaintStats(
            total=sum(by_status.values()),
            pending=sum(count for status, count in by_status.items() if status in PENDING_STATUSES),
            resolved=by_status.get(ComplaintStatus.RESOLVED, 0),
            closed=by_status.get(ComplaintStatus.CLOSED, 0),
            average_resolution_hours=average,
            by_status={status.value: count for status, count in by_status.items()},
            by_category={category.value: count for category, count in by_category.items()},
            by_priority={priority.value: count for priority, count in by_priority.items()},
        )
        return ServiceResult.success(stats)

    # -------------------------------------------------------------------------
    # Validation & Helpers
    # -------------------------------------------------------------------------

    def _validate_submission(self, data: ComplaintCreate) -> Dict[str, List[str]]:
        field_errors: Dict[str, List[str]] = {}
        if is_blank(data.title):
            field_errors["title"] = ["Title is required"]
        if is_blank(data.description):
            field_errors["description"] = ["Description is required"]
        if data.category is None:
            field_errors["category"] = ["Category is required"]
        if data.priority is None:
            field_errors["priority"] = ["Priority is required"]
        if is_blank(data.location.building):
            field_errors["location.building"] = ["Building is required"]
        if is_blank(data.location.room_number):
            field_errors["location.room_number"] = ["Room number is required"]
        return field_errors

    def _validate_status_change(
        self,
        complaint: Complaint,
        target: ComplaintStatus,
        completion_images: Optional[List[str]],
    ) -> Optional[ServiceResult]:
        current = complaint.status

        if target == current:
            return ServiceResult.validation_failure(
                f"Complaint is already {current.value}", field="status"
            )
        if not target.is_after(current):
            return ServiceResult.validation_failure(
                f"Cannot move a complaint from {current.value} back to {target.value}",
                field="status",
            )
        if complaint.assigned_to is None:
            return ServiceResult.validation_failure(
                "Assign the complaint to a maintenance worker before changing its status",
                field="status",
            )
        if completion_images and target != ComplaintStatus.RESOLVED:
            return ServiceResult.validation_failure(
                "Completion images can only be attached when resolving",
                field="completion_images",
            )
        return None

    def _scope_for(self, actor: Profile) -> Dict[str, Optional[str]]:
        if actor.role == UserRole.ADMIN:
            return {}
        if actor.role == UserRole.MAINTENANCE:
            return {"assigned_to": actor.id}
        return {"student_id": actor.id}

    def _abort(self, result: ServiceResult) -> ServiceResult:
        """Roll back (releasing any row lock) and return a failure."""
        self._rollback()
        return result
