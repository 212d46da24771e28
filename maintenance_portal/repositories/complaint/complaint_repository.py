"""
Core complaint repository: lifecycle writes, scoped search and
dashboard aggregates.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import case, func, or_, select
from sqlalchemy.orm import Session

from maintenance_portal.models.base.enums import (
    ComplaintCategory,
    ComplaintStatus,
    Priority,
    PRIORITY_RANK,
)
from maintenance_portal.models.complaint.complaint import Complaint
from maintenance_portal.repositories.base.base_repository import BaseRepository

SORT_NEWEST = "newest"
SORT_OLDEST = "oldest"
SORT_PRIORITY = "priority"
SORT_OPTIONS = (SORT_NEWEST, SORT_OLDEST, SORT_PRIORITY)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ComplaintRepository(BaseRepository[Complaint]):
    """
    Complaint data access.

    Scoping is applied here as plain column filters; deciding which scope
    an actor gets is the service layer's job.
    """

    def __init__(self, session: Session):
        super().__init__(Complaint, session)

    # ==================== CRUD Operations ====================

    def create_complaint(
        self,
        student_id: str,
        student_name: str,
        title: str,
        description: str,
        category: ComplaintCategory,
        priority: Priority,
        building: str,
        room_number: str,
        specific_location: Optional[str] = None,
        images: Optional[List[str]] = None,
    ) -> Complaint:
        """
        Insert a new complaint in the submitted state.
        """
        complaint = Complaint(
            student_id=student_id,
            student_name=student_name,
            title=title,
            description=description,
            category=category,
            priority=priority,
            building=building,
            room_number=room_number,
            specific_location=specific_location,
            images=list(images or []),
            completion_images=[],
            status=ComplaintStatus.SUBMITTED,
            assigned_to=None,
            assigned_to_name=None,
            resolved_at=None,
        )
        return self.create(complaint)

    # ==================== Search ====================

    def _scoped(self, stmt, student_id: Optional[str], assigned_to: Optional[str]):
        if student_id is not None:
            stmt = stmt.where(Complaint.student_id == student_id)
        if assigned_to is not None:
            stmt = stmt.where(Complaint.assigned_to == assigned_to)
        return stmt

    def search(
        self,
        student_id: Optional[str] = None,
        assigned_to: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[ComplaintStatus] = None,
        category: Optional[ComplaintCategory] = None,
        sort: str = SORT_NEWEST,
    ) -> List[Complaint]:
        """
        Filter complaints within a scope.

        All supplied filters are combined with AND. The search term is a
        case-insensitive substring match against title, description and
        student name.

        Args:
            student_id: Restrict to complaints owned by this student
            assigned_to: Restrict to complaints assigned to this worker
            search: Free-text term
            status: Exact status
            category: Exact category
            sort: newest (default), oldest or priority

        Returns:
            Matching complaints in a stable order
        """
        stmt = self._scoped(select(Complaint), student_id, assigned_to)

        if search:
            pattern = f"%{_escape_like(search)}%"
            stmt = stmt.where(
                or_(
                    Complaint.title.ilike(pattern, escape="\\"),
                    Complaint.description.ilike(pattern, escape="\\"),
                    Complaint.student_name.ilike(pattern, escape="\\"),
                )
            )
        if status is not None:
            stmt = stmt.where(Complaint.status == status)
        if category is not None:
            stmt = stmt.where(Complaint.category == category)

        if sort == SORT_OLDEST:
            stmt = stmt.order_by(Complaint.created_at.asc(), Complaint.id.asc())
        elif sort == SORT_PRIORITY:
            rank = case(
                *[(Complaint.priority == p, r) for p, r in PRIORITY_RANK.items()],
                else_=0,
            )
            stmt = stmt.order_by(rank.desc(), Complaint.created_at.desc(), Complaint.id.desc())
        else:
            stmt = stmt.order_by(Complaint.created_at.desc(), Complaint.id.desc())

        return list(self.db.execute(stmt).scalars().all())

    # ==================== Analytics ====================

    def count_by_column(
        self,
        column_name: str,
        student_id: Optional[str] = None,
        assigned_to: Optional[str] = None,
    ) -> Dict[Any, int]:
        """
        Count complaints grouped by one column (status, category, priority).
        """
        column = getattr(Complaint, column_name)
        stmt = self._scoped(
            select(column, func.count(Complaint.id)).group_by(column),
            student_id,
            assigned_to,
        )
        return {key: count for key, count in self.db.execute(stmt).all()}

    def find_resolved(
        self,
        student_id: Optional[str] = None,
        assigned_to: Optional[str] = None,
    ) -> List[Complaint]:
        """Complaints carrying a resolution timestamp."""
        stmt = self._scoped(
            select(Complaint).where(Complaint.resolved_at.is_not(None)),
            student_id,
            assigned_to,
        )
        return list(self.db.execute(stmt).scalars().all())
