"""
User schemas package.
"""

from maintenance_portal.schemas.user.profile import (
    ProfileCreate,
    ProfileNameUpdate,
    ProfileResponse,
    SignInRequest,
    TokenResponse,
)

__all__ = [
    "ProfileCreate",
    "ProfileNameUpdate",
    "ProfileResponse",
    "SignInRequest",
    "TokenResponse",
]
