"""
Image upload schemas.
"""

from typing import List

from pydantic import Field, computed_field

from maintenance_portal.schemas.common.base import BaseSchema

__all__ = ["UploadFailure", "UploadReport"]


class UploadFailure(BaseSchema):
    filename: str
    reason: str


class UploadReport(BaseSchema):
    """
    Outcome of a batch upload.

    ``urls`` keeps the order of the successful files; failed files are left
    out and listed in ``failures``.
    """

    urls: List[str] = Field(default_factory=list)
    attempted: int = 0
    failures: List[UploadFailure] = Field(default_factory=list)

    @computed_field
    @property
    def uploaded(self) -> int:
        return len(self.urls)

    @computed_field
    @property
    def failed(self) -> int:
        return self.attempted - self.uploaded

    @property
    def is_partial(self) -> bool:
        return self.failed > 0

    def summary(self) -> str:
        return f"{self.uploaded}/{self.attempted}"
