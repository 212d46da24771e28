"""
Complaint write schemas: submission, assignment and status changes.

Required-field checks for submission happen in the complaint service so
that every entry point (HTTP, multipart, internal callers) reports the same
field errors; these schemas only shape the input.
"""

from typing import List, Optional

from pydantic import Field, field_validator

from maintenance_portal.core.utils import clean_strings
from maintenance_portal.models.base.enums import ComplaintCategory, ComplaintStatus, Priority
from maintenance_portal.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = [
    "ComplaintLocation",
    "ComplaintCreate",
    "ComplaintAssignment",
    "ComplaintStatusUpdate",
]


class ComplaintLocation(BaseSchema):
    """Where the problem is."""

    building: str = Field(default="", max_length=255)
    room_number: str = Field(default="", max_length=50, alias="roomNumber")
    specific_location: Optional[str] = Field(
        default=None,
        max_length=500,
        alias="specificLocation",
        description="Free-text detail, e.g. 'under the sink'",
    )

    @field_validator("specific_location")
    @classmethod
    def blank_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class ComplaintCreate(BaseCreateSchema):
    """
    Complaint submission payload.

    ``images`` holds URLs of photos that were already uploaded.
    """

    title: str = Field(default="", max_length=255)
    description: str = Field(default="", max_length=5000)
    category: Optional[ComplaintCategory] = None
    priority: Optional[Priority] = None
    location: ComplaintLocation = Field(default_factory=ComplaintLocation)
    images: List[str] = Field(default_factory=list)

    @field_validator("category", "priority", mode="before")
    @classmethod
    def blank_choice_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("images")
    @classmethod
    def drop_blank_urls(cls, v: List[str]) -> List[str]:
        return clean_strings(v)


class ComplaintAssignment(BaseSchema):
    """Admin request to bind a maintenance worker to a complaint."""

    maintenance_id: str = Field(..., min_length=1, alias="maintenanceId")


class ComplaintStatusUpdate(BaseSchema):
    """
    Status change request.

    ``completion_images`` is only accepted together with the resolved
    status.
    """

    status: ComplaintStatus
    completion_images: List[str] = Field(default_factory=list, alias="completionImages")

    @field_validator("completion_images")
    @classmethod
    def drop_blank_urls(cls, v: List[str]) -> List[str]:
        return clean_strings(v)
