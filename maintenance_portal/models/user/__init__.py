"""
User models package.
"""

from maintenance_portal.models.user.profile import Profile

__all__ = ["Profile"]
