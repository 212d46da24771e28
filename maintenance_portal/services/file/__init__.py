"""
File services: blob storage and complaint photo uploads.
"""

from maintenance_portal.services.file.blob_store import (
    BlobStore,
    LocalBlobStore,
    generate_unique_filename,
    safe_filename,
)
from maintenance_portal.services.file.image_service import ImageFile, ImageUploadService

__all__ = [
    "BlobStore",
    "LocalBlobStore",
    "generate_unique_filename",
    "safe_filename",
    "ImageFile",
    "ImageUploadService",
]
