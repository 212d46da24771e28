"""
Blob storage for complaint photos.

The portal only needs "bytes in, durable URL out". ``LocalBlobStore`` keeps
files under UPLOAD_DIR for development; production deployments plug in an
object store with the same ``upload`` signature.
"""

from __future__ import annotations

import logging
import os
import secrets
from pathlib import Path
from typing import Optional, Protocol

from maintenance_portal.config.settings import settings
from maintenance_portal.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

# Filesystem permissions
DIR_PERMISSIONS = 0o755

SAFE_CHARS = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-")


class BlobStore(Protocol):
    """Accepts image bytes and returns a durable URL."""

    def upload(self, content: bytes, content_type: str, filename: str) -> str:
        """Store the bytes or raise UpstreamError."""
        ...


def safe_filename(filename: Optional[str]) -> str:
    """Strip directory components and unsafe characters from a filename."""
    name = os.path.basename(filename or "")
    name = "".join(ch for ch in name.replace(" ", "_") if ch in SAFE_CHARS)
    name = name.lstrip(".-")
    if not name:
        name = "image"

    if len(name) > 100:
        stem, ext = os.path.splitext(name)
        name = stem[: 100 - len(ext)] + ext
    return name


def generate_unique_filename(original_name: Optional[str]) -> str:
    """Generate a collision-free filename keeping the original extension."""
    stem, ext = os.path.splitext(safe_filename(original_name))
    return f"{stem}_{secrets.token_hex(8)}{ext.lower()}"


class LocalBlobStore:
    """Stores blobs on the local filesystem."""

    def __init__(self, root: Optional[str] = None, base_url: Optional[str] = None):
        self.root = Path(root or settings.UPLOAD_DIR)
        self.base_url = (base_url if base_url is not None else settings.UPLOAD_BASE_URL).rstrip("/")

    def upload(self, content: bytes, content_type: str, filename: str) -> str:
        name = generate_unique_filename(filename)
        path = self.root / name
        try:
            self.root.mkdir(parents=True, exist_ok=True, mode=DIR_PERMISSIONS)
            path.write_bytes(content)
        except OSError as e:
            logger.error(f"Failed to store blob {name}: {e}")
            raise UpstreamError(f"Failed to store {filename}", service_name="blob_store") from e

        logger.debug(f"Stored blob {name} ({len(content)} bytes, {content_type})")
        return f"{self.base_url}/{name}"


__all__ = [
    "BlobStore",
    "LocalBlobStore",
    "safe_filename",
    "generate_unique_filename",
]
