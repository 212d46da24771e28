"""
Base schema classes with common fields and configurations.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from maintenance_portal.core.utils import as_utc

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseResponseSchema",
    "BaseFilterSchema",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    All application-facing schemas inherit from this to get consistent
    attribute loading, whitespace stripping and enum handling.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        # Keep enums as Enum instances; they serialize to their values.
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class BaseCreateSchema(BaseSchema):
    """Base schema for create operations."""
    pass


class BaseResponseSchema(BaseSchema):
    """
    Base schema for API responses of database entities.

    Timestamps are always rendered as timezone-aware UTC, whatever the
    backend handed back.
    """

    id: str = Field(..., description="Unique identifier")
    created_at: datetime = Field(..., description="Creation timestamp")

    @field_validator("created_at", mode="after")
    @classmethod
    def _created_at_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)


class BaseFilterSchema(BaseSchema):
    """Base schema for filter parameters."""
    pass
