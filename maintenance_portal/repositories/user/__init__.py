"""
User repositories package.
"""

from maintenance_portal.repositories.user.profile_repository import ProfileRepository

__all__ = ["ProfileRepository"]
