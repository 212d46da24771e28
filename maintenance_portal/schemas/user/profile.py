"""
Profile request and response schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from maintenance_portal.core.utils import as_utc
from maintenance_portal.models.base.enums import UserRole
from maintenance_portal.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "ProfileCreate",
    "ProfileNameUpdate",
    "ProfileResponse",
    "SignInRequest",
    "TokenResponse",
]


class ProfileCreate(BaseCreateSchema):
    """
    Admin request to register a portal user.

    ``id`` lets the caller reuse the identity provider's user id; one is
    generated when omitted.
    """

    id: Optional[str] = Field(default=None, max_length=36)
    username: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole
    phone: Optional[str] = Field(default=None, max_length=30)
    email: Optional[EmailStr] = None

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        return v.lower()

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v


class ProfileNameUpdate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)


class ProfileResponse(BaseResponseSchema):
    username: str
    name: str
    role: UserRole
    phone: Optional[str] = None
    email: Optional[str] = None
    updated_at: datetime

    @field_validator("updated_at", mode="after")
    @classmethod
    def _updated_at_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class SignInRequest(BaseSchema):
    """Development sign-in: the credential is the profile username."""
    credential: str = Field(..., min_length=1)


class TokenResponse(BaseSchema):
    access_token: str
    token_type: str = "bearer"
    user_id: str
