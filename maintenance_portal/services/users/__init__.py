"""
User profile services.
"""

from maintenance_portal.services.users.profile_service import ProfileService

__all__ = ["ProfileService"]
