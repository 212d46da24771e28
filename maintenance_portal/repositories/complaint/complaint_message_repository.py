"""
Repositories for the two append-only complaint threads: chat messages
and work notes.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from maintenance_portal.models.base.enums import UserRole
from maintenance_portal.models.complaint.complaint_message import ComplaintMessage
from maintenance_portal.models.complaint.complaint_note import ComplaintNote
from maintenance_portal.repositories.base.base_repository import BaseRepository


class ComplaintMessageRepository(BaseRepository[ComplaintMessage]):
    """
    Chat messages per complaint, read in (created_at, id) order.
    """

    def __init__(self, session: Session):
        super().__init__(ComplaintMessage, session)

    def append(
        self,
        complaint_id: str,
        sender_id: str,
        sender_role: UserRole,
        sender_name: str,
        body: str,
    ) -> ComplaintMessage:
        message = ComplaintMessage(
            complaint_id=complaint_id,
            sender_id=sender_id,
            sender_role=sender_role,
            sender_name=sender_name,
            body=body,
        )
        return self.create(message)

    def list_for_complaint(
        self,
        complaint_id: str,
        since: Optional[datetime] = None,
    ) -> List[ComplaintMessage]:
        """
        Messages of one complaint, oldest first.

        Args:
            complaint_id: Complaint identifier
            since: Only return messages created strictly after this time
        """
        stmt = select(ComplaintMessage).where(ComplaintMessage.complaint_id == complaint_id)
        if since is not None:
            stmt = stmt.where(ComplaintMessage.created_at > since)
        stmt = stmt.order_by(ComplaintMessage.created_at.asc(), ComplaintMessage.id.asc())
        return list(self.db.execute(stmt).scalars().all())


class ComplaintNoteRepository(BaseRepository[ComplaintNote]):
    """
    Internal work notes per complaint, read in (created_at, id) order.
    """

    def __init__(self, session: Session):
        super().__init__(ComplaintNote, session)

    def append(
        self,
        complaint_id: str,
        author_id: str,
        author_role: UserRole,
        author_name: str,
        body: str,
    ) -> ComplaintNote:
        note = ComplaintNote(
            complaint_id=complaint_id,
            author_id=author_id,
            author_role=author_role,
            author_name=author_name,
            body=body,
        )
        return self.create(note)

    def list_for_complaint(self, complaint_id: str) -> List[ComplaintNote]:
        stmt = (
            select(ComplaintNote)
            .where(ComplaintNote.complaint_id == complaint_id)
            .order_by(ComplaintNote.created_at.asc(), ComplaintNote.id.asc())
        )
        return list(self.db.execute(stmt).scalars().all())
