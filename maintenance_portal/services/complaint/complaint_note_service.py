"""
Work notes on complaints.
"""

from typing import List
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from maintenance_portal.core.permissions import ComplaintOperation
from maintenance_portal.core.utils import is_blank
from maintenance_portal.models.complaint.complaint_note import ComplaintNote
from maintenance_portal.repositories.complaint.complaint_message_repository import ComplaintNoteRepository
from maintenance_portal.repositories.complaint.complaint_repository import ComplaintRepository
from maintenance_portal.repositories.user.profile_repository import ProfileRepository
from maintenance_portal.services.base import ActorScopedService, ServiceResult

logger = logging.getLogger(__name__)


class ComplaintNoteService(ActorScopedService[ComplaintNote, ComplaintNoteRepository]):
    """
    Append-only notes kept next to a complaint.

    Anyone involved in the complaint may add a note. Reading them is
    limited to admins and the assigned worker.
    """

    def __init__(
        self,
        repository: ComplaintNoteRepository,
        complaint_repo: ComplaintRepository,
        profile_repo: ProfileRepository,
        db_session: Session,
    ):
        super().__init__(repository, profile_repo, db_session)
        self.complaint_repo = complaint_repo
        self._logger = logger

    def add_note(self, complaint_id: str, actor_id: str, body: str) -> ServiceResult[ComplaintNote]:
        try:
            complaint = self.complaint_repo.find_by_id(complaint_id)
            if not complaint:
                return ServiceResult.not_found("Complaint", complaint_id)

            actor = self._resolve_actor(actor_id)
            denied = self._authorize(actor, complaint, ComplaintOperation.ADD_NOTE)
            if denied is not None:
                return denied

            if is_blank(body):
                return ServiceResult.validation_failure("Note cannot be empty", field="body")

            note = self.repository.append(
                complaint_id=complaint.id,
                author_id=actor.id,
                author_role=actor.role,
                author_name=actor.name,
                body=body.strip(),
            )
            self._commit()
        except SQLAlchemyError as e:
            self._rollback()
            return self._handle_exception(e, "add note", complaint_id)

        self._logger.info(
            f"Note added to complaint {complaint_id}",
            extra={"complaint_id": complaint_id, "note_id": note.id, "actor_id": actor_id},
        )
        return ServiceResult.success(note, message="Note added")

    def list_notes(self, complaint_id: str, actor_id: str) -> ServiceResult[List[ComplaintNote]]:
        try:
            complaint = self.complaint_repo.find_by_id(complaint_id)
            if not complaint:
                return ServiceResult.not_found("Complaint", complaint_id)

            actor = self._resolve_actor(actor_id)
            denied = self._authorize(actor, complaint, ComplaintOperation.VIEW_NOTES)
            if denied is not None:
                return denied

            notes = self.repository.list_for_complaint(complaint_id)
            return ServiceResult.success(notes, metadata={"count": len(notes)})
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list notes", complaint_id)
