"""
Complaint photo uploads.

Files are uploaded one at a time, in order. A file that fails validation or
storage is left out and reported; it never fails the batch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Iterable, List, Optional

from maintenance_portal.config.settings import settings
from maintenance_portal.core.exceptions import UpstreamError
from maintenance_portal.core.logging import get_logger
from maintenance_portal.schemas.file.upload import UploadFailure, UploadReport
from maintenance_portal.services.file.blob_store import BlobStore

logger = get_logger(__name__)


@dataclass
class ImageFile:
    """An image received from a client, read into memory."""

    filename: str
    content_type: Optional[str]
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def read(cls, filename: str, content_type: Optional[str], stream: BinaryIO, limit: int) -> "ImageFile":
        """
        Read at most ``limit + 1`` bytes, enough for the size check to
        reject an oversized file without buffering all of it.
        """
        return cls(filename=filename, content_type=content_type, content=stream.read(limit + 1))


class ImageUploadService:
    """
    Validate and store complaint photos.

    Accepted types are ``image/*``; each file must be non-empty and no
    larger than MAX_IMAGE_SIZE.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        max_size: Optional[int] = None,
        max_files: Optional[int] = None,
    ):
        self.blob_store = blob_store
        self.max_size = max_size or settings.MAX_IMAGE_SIZE
        self.max_files = max_files or settings.MAX_IMAGES_PER_COMPLAINT

    def validate(self, image: ImageFile) -> Optional[str]:
        """Return why an image is rejected, or None when it is acceptable."""
        content_type = (image.content_type or "").lower()
        if not content_type.startswith("image/"):
            return f"Unsupported file type: {image.content_type or 'unknown'}"
        if image.size == 0:
            return "File is empty"
        if image.size > self.max_size:
            return f"File exceeds {self.max_size // (1024 * 1024)}MB limit"
        return None

    def upload_images(self, images: Iterable[ImageFile]) -> UploadReport:
        """
        Upload images sequentially.

        Args:
            images: Files in the order the client sent them

        Returns:
            UploadReport with the URLs of the stored files (in order), the
            number attempted and the per-file failures
        """
        urls: List[str] = []
        failures: List[UploadFailure] = []
        attempted = 0

        for image in images:
            attempted += 1

            if attempted > self.max_files:
                failures.append(UploadFailure(
                    filename=image.filename,
                    reason=f"At most {self.max_files} images per complaint",
                ))
                continue

            reason = self.validate(image)
            if reason:
                failures.append(UploadFailure(filename=image.filename, reason=reason))
                continue

            try:
                urls.append(self.blob_store.upload(image.content, image.content_type, image.filename))
            except UpstreamError as e:
                failures.append(UploadFailure(filename=image.filename, reason=e.message))

        report = UploadReport(urls=urls, attempted=attempted, failures=failures)

        if failures:
            logger.warning(
                f"Image upload partially failed: {report.summary()} stored",
                extra={"attempted": attempted, "failed": len(failures)},
            )
        elif attempted:
            logger.info(f"Uploaded {attempted} image(s)")

        return report


__all__ = ["ImageFile", "ImageUploadService"]
