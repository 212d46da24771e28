"""
Standalone image upload, for clients that upload photos before filing a
complaint with ``POST /complaints``.
"""

from typing import List

from fastapi import APIRouter, Depends, File, UploadFile

from maintenance_portal.api import deps
from maintenance_portal.schemas.file import UploadReport
from maintenance_portal.services.file import ImageFile, ImageUploadService

router = APIRouter(prefix="/uploads", tags=["File Uploads"])


@router.post("/images", response_model=UploadReport)
def upload_images(
    files: List[UploadFile] = File(...),
    user_id: str = Depends(deps.get_current_user_id),
    service: ImageUploadService = Depends(deps.get_image_upload_service),
) -> UploadReport:
    """
    Store the given images and report which ones made it.

    Failed files do not fail the request; they are listed in ``failures``.
    """
    images = [
        ImageFile.read(upload.filename or "image", upload.content_type, upload.file, service.max_size)
        for upload in files
    ]
    return service.upload_images(images)
