"""
Profile Store operations: lookup, admin registration and renaming.
"""

from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from maintenance_portal.core.permissions import ComplaintOperation
from maintenance_portal.models.base.enums import UserRole
from maintenance_portal.models.user.profile import Profile
from maintenance_portal.repositories.user.profile_repository import ProfileRepository
from maintenance_portal.schemas.user.profile import ProfileCreate
from maintenance_portal.services.base import ActorScopedService, ServiceResult

logger = logging.getLogger(__name__)


class ProfileService(ActorScopedService[Profile, ProfileRepository]):
    """
    Profiles are managed by admins. Everyone can read their own.
    """

    def __init__(self, repository: ProfileRepository, db_session: Session):
        super().__init__(repository, repository, db_session)
        self._logger = logger

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_profile(self, user_id: str) -> ServiceResult[Profile]:
        """Resolve an authenticated user id to its profile."""
        try:
            profile = self.repository.find_by_id(user_id) if user_id else None
            if profile is None:
                return ServiceResult.not_found("Profile", user_id)
            return ServiceResult.success(profile)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "get profile", user_id)

    def list_profiles(
        self,
        actor_id: str,
        role: Optional[UserRole] = None,
    ) -> ServiceResult[List[Profile]]:
        """
        Profiles ordered by name; used by admins to pick an assignee.
        """
        try:
            actor = self._resolve_actor(actor_id)
            denied = self._authorize(actor, None, ComplaintOperation.MANAGE_PROFILES)
            if denied is not None:
                return denied

            profiles = self.repository.list_profiles(role)
            return ServiceResult.success(profiles, metadata={"count": len(profiles)})
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list profiles", actor_id)

    def resolve_credential(self, credential: str) -> Optional[str]:
        """
        Map a sign-in credential (a username) to a user id.

        Used as the identity provider's development resolver.
        """
        profile = self.repository.find_by_username(credential.strip().lower())
        return profile.id if profile else None

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_profile(self, actor_id: str, data: ProfileCreate) -> ServiceResult[Profile]:
        """
        Register a portal user.

        Args:
            actor_id: Authenticated user id (must be an admin)
            data: Username, display name, role and contact details

        Returns:
            ServiceResult containing the new profile or error
        """
        try:
            actor = self._resolve_actor(actor_id)
            denied = self._authorize(actor, None, ComplaintOperation.MANAGE_PROFILES)
            if denied is not None:
                return denied

            if self.repository.find_by_username(data.username):
                return ServiceResult.validation_failure(
                    f"Username '{data.username}' is already taken", field="username"
                )
            if data.id and self.repository.find_by_id(data.id):
                return ServiceResult.validation_failure(
                    f"Profile id '{data.id}' is already in use", field="id"
                )

            profile = self.repository.create_profile(
                username=data.username,
                name=data.name,
                role=data.role,
                phone=data.phone,
                email=data.email,
                profile_id=data.id,
            )
            self._commit()
        except IntegrityError:
            self._rollback()
            return ServiceResult.validation_failure(
                "A profile with this username or id already exists", field="username"
            )
        except SQLAlchemyError as e:
            self._rollback()
            return self._handle_exception(e, "create profile", data.username)

        self._logger.info(
            f"Profile created: {profile.username} ({profile.role.value})",
            extra={"profile_id": profile.id, "actor_id": actor_id},
        )
        return ServiceResult.success(profile, message="Profile created")

    def update_profile_name(
        self,
        actor_id: str,
        profile_id: str,
        name: str,
    ) -> ServiceResult[Profile]:
        """
        Rename a profile.

        Complaints and messages keep the name they were written with.
        """
        try:
            actor = self._resolve_actor(actor_id)
            denied = self._authorize(actor, None, ComplaintOperation.MANAGE_PROFILES)
            if denied is not None:
                return denied

            profile = self.repository.find_by_id(profile_id)
            if profile is None:
                return ServiceResult.not_found("Profile", profile_id)

            if not name or not name.strip():
                return ServiceResult.validation_failure("Name is required", field="name")

            self.repository.update_name(profile, name.strip())
            self._commit()
        except SQLAlchemyError as e:
            self._rollback()
            return self._handle_exception(e, "update profile name", profile_id)

        self._logger.info(f"Profile {profile_id} renamed", extra={"profile_id": profile_id})
        return ServiceResult.success(profile, message="Profile updated")
