"""
Profile endpoints: the caller's own profile and admin user management.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from maintenance_portal.api import deps
from maintenance_portal.models.base.enums import UserRole
from maintenance_portal.schemas.user import ProfileCreate, ProfileNameUpdate, ProfileResponse
from maintenance_portal.services.users import ProfileService

router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get("/me", response_model=ProfileResponse)
def read_my_profile(
    user_id: str = Depends(deps.get_current_user_id),
    service: ProfileService = Depends(deps.get_profile_service),
) -> ProfileResponse:
    return ProfileResponse.model_validate(service.get_profile(user_id).unwrap())


@router.get("", response_model=List[ProfileResponse])
def list_profiles(
    role: Optional[UserRole] = Query(None, description="Only profiles with this role"),
    user_id: str = Depends(deps.get_current_user_id),
    service: ProfileService = Depends(deps.get_profile_service),
) -> List[ProfileResponse]:
    """Admin listing, e.g. maintenance staff for the assignment picker."""
    profiles = service.list_profiles(user_id, role).unwrap()
    return [ProfileResponse.model_validate(p) for p in profiles]


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
def create_profile(
    payload: ProfileCreate,
    user_id: str = Depends(deps.get_current_user_id),
    service: ProfileService = Depends(deps.get_profile_service),
) -> ProfileResponse:
    return ProfileResponse.model_validate(service.create_profile(user_id, payload).unwrap())


@router.patch("/{profile_id}", response_model=ProfileResponse)
def rename_profile(
    profile_id: str,
    payload: ProfileNameUpdate,
    user_id: str = Depends(deps.get_current_user_id),
    service: ProfileService = Depends(deps.get_profile_service),
) -> ProfileResponse:
    result = service.update_profile_name(user_id, profile_id, payload.name)
    return ProfileResponse.model_validate(result.unwrap())
