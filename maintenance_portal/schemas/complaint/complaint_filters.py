"""
Complaint list filter parameters.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator

from maintenance_portal.models.base.enums import ComplaintCategory, ComplaintStatus
from maintenance_portal.schemas.common.base import BaseFilterSchema

__all__ = ["ComplaintFilterParams", "ComplaintSort"]

ComplaintSort = Literal["newest", "oldest", "priority"]


class ComplaintFilterParams(BaseFilterSchema):
    """
    Search and filter options for the complaint list.

    Every supplied filter narrows the result (logical AND). The list is
    always scoped to the caller first.
    """

    search: Optional[str] = Field(
        default=None,
        max_length=200,
        description="Case-insensitive match on title, description or student name",
    )
    status: Optional[ComplaintStatus] = None
    category: Optional[ComplaintCategory] = None
    sort: ComplaintSort = "newest"

    @field_validator("search")
    @classmethod
    def blank_search_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @field_validator("status", "category", mode="before")
    @classmethod
    def all_means_no_filter(cls, v):
        if isinstance(v, str) and v.strip().lower() in ("", "all"):
            return None
        return v
