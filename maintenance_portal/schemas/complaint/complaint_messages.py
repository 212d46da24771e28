"""
Schemas for the complaint chat thread and the work-note log.
"""

from typing import List

from pydantic import Field

from maintenance_portal.models.base.enums import UserRole
from maintenance_portal.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "MessageCreate",
    "MessageResponse",
    "MessageListResponse",
    "NoteCreate",
    "NoteResponse",
]


class MessageCreate(BaseCreateSchema):
    # Empty bodies are rejected by the chat service
    body: str = Field(default="", max_length=5000)


class MessageResponse(BaseResponseSchema):
    complaint_id: str
    sender_id: str
    sender_role: UserRole
    sender_name: str
    body: str


class MessageListResponse(BaseSchema):
    """Messages oldest first; ``count`` is the number returned."""

    complaint_id: str
    count: int
    messages: List[MessageResponse]


class NoteCreate(BaseCreateSchema):
    body: str = Field(default="", max_length=5000)


class NoteResponse(BaseResponseSchema):
    complaint_id: str
    author_id: str
    author_role: UserRole
    author_name: str
    body: str
