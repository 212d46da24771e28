"""
Common schema building blocks.
"""

from maintenance_portal.schemas.common.base import (
    BaseSchema,
    BaseCreateSchema,
    BaseResponseSchema,
    BaseFilterSchema,
)

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseResponseSchema",
    "BaseFilterSchema",
]
