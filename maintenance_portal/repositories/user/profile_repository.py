"""
Profile repository: the Profile Store behind authorization and
notification addressing.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from maintenance_portal.models.base.enums import UserRole
from maintenance_portal.models.user.profile import Profile
from maintenance_portal.repositories.base.base_repository import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """
    Data access for user profiles.
    """

    def __init__(self, session: Session):
        super().__init__(Profile, session)

    # ==================== Lookups ====================

    def get_profile(self, user_id: str) -> Profile:
        """
        Resolve a user id to its profile.

        Raises:
            NotFoundError: If no profile exists for the id
        """
        return self.get_by_id(user_id)

    def find_by_username(self, username: str) -> Optional[Profile]:
        stmt = select(Profile).where(Profile.username == username)
        return self.db.execute(stmt).scalars().first()

    def list_profiles(self, role: Optional[UserRole] = None) -> List[Profile]:
        """
        List profiles ordered by display name, optionally by role.
        """
        stmt = select(Profile)
        if role is not None:
            stmt = stmt.where(Profile.role == role)
        stmt = stmt.order_by(Profile.name.asc(), Profile.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def find_admins(self) -> List[Profile]:
        return self.list_profiles(UserRole.ADMIN)

    # ==================== Mutations ====================

    def create_profile(
        self,
        username: str,
        name: str,
        role: UserRole,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        profile_id: Optional[str] = None,
    ) -> Profile:
        """
        Create a profile, optionally with a caller-chosen id (the identity
        provider's user id).
        """
        profile = Profile(
            username=username.lower(),
            name=name,
            role=role,
            phone=phone,
            email=email,
        )
        if profile_id:
            profile.id = profile_id
        return self.create(profile)

    def update_name(self, profile: Profile, name: str) -> Profile:
        return self.update(profile, {"name": name})
