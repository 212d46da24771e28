"""
Complaint access rules.

Every authorization decision in the portal goes through ``can_act``. The
actor is always a Profile loaded from the database for the authenticated
user id, never a role supplied by the caller.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

from maintenance_portal.models.base.enums import UserRole

if TYPE_CHECKING:
    from maintenance_portal.models.complaint.complaint import Complaint
    from maintenance_portal.models.user.profile import Profile


class ComplaintOperation(str, Enum):
    """Actions an actor can attempt on a complaint."""
    CREATE = "create"
    VIEW = "view"
    ASSIGN = "assign"
    UPDATE_STATUS = "update_status"
    POST_MESSAGE = "post_message"
    READ_MESSAGES = "read_messages"
    ADD_NOTE = "add_note"
    VIEW_NOTES = "view_notes"
    MANAGE_PROFILES = "manage_profiles"


def is_owner(actor: "Profile", complaint: Optional["Complaint"]) -> bool:
    return complaint is not None and complaint.student_id == actor.id


def is_assignee(actor: "Profile", complaint: Optional["Complaint"]) -> bool:
    return (
        complaint is not None
        and complaint.assigned_to is not None
        and complaint.assigned_to == actor.id
    )


def can_act(
    actor: Optional["Profile"],
    complaint: Optional["Complaint"],
    operation: ComplaintOperation,
) -> bool:
    """
    Decide whether ``actor`` may perform ``operation`` on ``complaint``.

    Rules:
        CREATE: students only (no complaint yet)
        ASSIGN, MANAGE_PROFILES: admins only
        UPDATE_STATUS: admins, or the worker currently assigned
        VIEW, POST_MESSAGE, READ_MESSAGES: admins, the owner, the assignee
        ADD_NOTE: admins, the assignee, the owner
        VIEW_NOTES: admins and the assignee

    A missing actor is never allowed anything. Operations that target a
    complaint are refused when no complaint is given.

    Args:
        actor: Profile of the authenticated user
        complaint: Target complaint, or None for complaint-less operations
        operation: Requested operation

    Returns:
        True when the action is allowed
    """
    if actor is None:
        return False

    role = actor.role

    if operation == ComplaintOperation.CREATE:
        return role == UserRole.STUDENT
    if operation == ComplaintOperation.MANAGE_PROFILES:
        return role == UserRole.ADMIN

    if complaint is None:
        return False

    if role == UserRole.ADMIN:
        return True

    if operation == ComplaintOperation.ASSIGN:
        return False
    if operation in (ComplaintOperation.UPDATE_STATUS, ComplaintOperation.VIEW_NOTES):
        return is_assignee(actor, complaint)
    if operation in (
        ComplaintOperation.VIEW,
        ComplaintOperation.POST_MESSAGE,
        ComplaintOperation.READ_MESSAGES,
        ComplaintOperation.ADD_NOTE,
    ):
        return is_owner(actor, complaint) or is_assignee(actor, complaint)

    return False


__all__ = [
    "ComplaintOperation",
    "can_act",
    "is_owner",
    "is_assignee",
]
