"""
File schemas package.
"""

from maintenance_portal.schemas.file.upload import UploadFailure, UploadReport

__all__ = ["UploadFailure", "UploadReport"]
