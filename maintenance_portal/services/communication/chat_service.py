"""
Per-complaint chat between the student, the admins and the assigned
maintenance worker.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from maintenance_portal.core.logging import get_logger
from maintenance_portal.core.permissions import ComplaintOperation
from maintenance_portal.core.utils import as_utc, is_blank
from maintenance_portal.models.complaint.complaint_message import ComplaintMessage
from maintenance_portal.repositories.complaint.complaint_message_repository import ComplaintMessageRepository
from maintenance_portal.repositories.complaint.complaint_repository import ComplaintRepository
from maintenance_portal.repositories.user.profile_repository import ProfileRepository
from maintenance_portal.services.base import (
    ActorScopedService,
    ComplaintEvent,
    EventDispatcher,
    ServiceResult,
)

logger = get_logger(__name__)


class ChatService(ActorScopedService[ComplaintMessage, ComplaintMessageRepository]):
    """
    Append and read complaint messages.

    A message is considered sent once committed. Subscribers on the event
    dispatcher are told afterwards; clients that miss the event pick the
    message up on their next ``list_messages`` call with ``since``.
    """

    def __init__(
        self,
        repository: ComplaintMessageRepository,
        complaint_repo: ComplaintRepository,
        profile_repo: ProfileRepository,
        db_session: Session,
        events: Optional[EventDispatcher] = None,
    ):
        super().__init__(repository, profile_repo, db_session)
        self.complaint_repo = complaint_repo
        self.events = events
        self._logger = logger

    def post_message(
        self,
        complaint_id: str,
        actor_id: str,
        body: str,
    ) -> ServiceResult[ComplaintMessage]:
        """
        Append a message to a complaint thread.

        The sender's role and display name are copied onto the message as
        they are at write time.

        Args:
            complaint_id: Complaint identifier
            actor_id: Authenticated user id of the sender
            body: Message text

        Returns:
            ServiceResult containing the stored message or error
        """
        try:
            complaint = self.complaint_repo.find_by_id(complaint_id)
            if not complaint:
                return ServiceResult.not_found("Complaint", complaint_id)

            actor = self._resolve_actor(actor_id)
            denied = self._authorize(actor, complaint, ComplaintOperation.POST_MESSAGE)
            if denied is not None:
                return denied

            if is_blank(body):
                return ServiceResult.validation_failure("Message cannot be empty", field="body")

            message = self.repository.append(
                complaint_id=complaint.id,
                sender_id=actor.id,
                sender_role=actor.role,
                sender_name=actor.name,
                body=body.strip(),
            )
            self._commit()
        except SQLAlchemyError as e:
            self._rollback()
            return self._handle_exception(e, "post message", complaint_id)

        self._logger.info(
            "Message posted",
            extra={"complaint_id": complaint_id, "message_id": message.id, "sender_id": actor_id},
        )
        delivered = self._publish(message)

        return ServiceResult.success(
            message,
            message="Message sent",
            metadata={"complaint_id": complaint_id, "subscribers_notified": delivered},
        )

    def list_messages(
        self,
        complaint_id: str,
        actor_id: str,
        since: Optional[datetime] = None,
    ) -> ServiceResult[List[ComplaintMessage]]:
        """
        Messages of a complaint, oldest first.

        With ``since``, only messages created strictly after it are
        returned. A naive ``since`` is read as UTC.
        """
        try:
            complaint = self.complaint_repo.find_by_id(complaint_id)
            if not complaint:
                return ServiceResult.not_found("Complaint", complaint_id)

            actor = self._resolve_actor(actor_id)
            denied = self._authorize(actor, complaint, ComplaintOperation.READ_MESSAGES)
            if denied is not None:
                return denied

            messages = self.repository.list_for_complaint(complaint_id, since=as_utc(since))
            return ServiceResult.success(messages, metadata={"count": len(messages)})
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list messages", complaint_id)

    def _publish(self, message: ComplaintMessage) -> int:
        if self.events is None:
            return 0
        event = ComplaintEvent(
            complaint_id=message.complaint_id,
            event_type=EventDispatcher.MESSAGE_POSTED,
            data={
                "message_id": message.id,
                "sender_id": message.sender_id,
                "sender_name": message.sender_name,
                "sender_role": message.sender_role.value,
                "body": message.body,
                "created_at": message.created_at,
            },
        )
        return self.events.publish(event)
