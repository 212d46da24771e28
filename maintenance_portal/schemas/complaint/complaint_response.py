"""
Complaint response schemas.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field, field_validator

from maintenance_portal.core.utils import as_utc
from maintenance_portal.models.base.enums import ComplaintCategory, ComplaintStatus, Priority
from maintenance_portal.schemas.common.base import BaseResponseSchema, BaseSchema
from maintenance_portal.schemas.file.upload import UploadReport

__all__ = [
    "ComplaintResponse",
    "ComplaintSubmissionResponse",
    "ComplaintStats",
]


class ComplaintResponse(BaseResponseSchema):
    """
    Complaint view model, including the denormalized student and worker
    names as they were when written.
    """

    title: str
    description: str
    category: ComplaintCategory
    priority: Priority
    status: ComplaintStatus

    building: str
    room_number: str
    specific_location: Optional[str] = None

    images: List[str] = Field(default_factory=list)
    completion_images: List[str] = Field(default_factory=list)

    student_id: str
    student_name: str
    assigned_to: Optional[str] = None
    assigned_to_name: Optional[str] = None

    updated_at: datetime
    resolved_at: Optional[datetime] = None
    time_to_resolve_hours: Optional[float] = None

    @field_validator("updated_at", "resolved_at", mode="after")
    @classmethod
    def _utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)


class ComplaintSubmissionResponse(BaseSchema):
    """Created complaint together with the image upload outcome."""

    complaint: ComplaintResponse
    upload: UploadReport


class ComplaintStats(BaseSchema):
    """Dashboard counters over the caller's complaint scope."""

    total: int = 0
    pending: int = 0
    resolved: int = 0
    closed: int = 0
    average_resolution_hours: Optional[float] = None
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_category: Dict[str, int] = Field(default_factory=dict)
    by_priority: Dict[str, int] = Field(default_factory=dict)
