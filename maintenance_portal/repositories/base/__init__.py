"""
Base repository package.
"""

from maintenance_portal.repositories.base.base_repository import BaseRepository, ModelType

__all__ = ["BaseRepository", "ModelType"]
