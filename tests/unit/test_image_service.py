"""
Unit Tests for complaint photo uploads
"""
import io

from maintenance_portal.services.file import ImageFile, ImageUploadService, LocalBlobStore, safe_filename
from tests.conftest import FakeBlobStore, make_image


class TestImageUploadService:

    def test_uploads_in_order(self):
        service = ImageUploadService(FakeBlobStore(), max_size=1024, max_files=5)

        report = service.upload_images([make_image("a.jpg"), make_image("b.png", "image/png")])

        assert report.attempted == 2
        assert report.uploaded == 2
        assert report.urls[0].endswith("a.jpg")
        assert report.urls[1].endswith("b.png")
        assert not report.is_partial

    def test_failed_upload_is_reported_not_raised(self):
        service = ImageUploadService(FakeBlobStore(fail_on={"b.jpg"}), max_size=1024, max_files=5)

        report = service.upload_images([make_image("a.jpg"), make_image("b.jpg"), make_image("c.jpg")])

        assert report.summary() == "2/3"
        assert report.failed == 1
        assert report.failures[0].filename == "b.jpg"
        assert [url.rsplit("-", 1)[-1] for url in report.urls] == ["a.jpg", "c.jpg"]

    def test_rejects_non_images(self):
        service = ImageUploadService(FakeBlobStore(), max_size=1024, max_files=5)

        report = service.upload_images([make_image("notes.pdf", "application/pdf")])

        assert report.uploaded == 0
        assert "Unsupported file type" in report.failures[0].reason

    def test_rejects_oversized_and_empty_files(self):
        service = ImageUploadService(FakeBlobStore(), max_size=100, max_files=5)

        report = service.upload_images([make_image("big.jpg", size=101), make_image("empty.jpg", size=0)])

        assert report.uploaded == 0
        assert report.failed == 2

    def test_files_beyond_limit_fail(self):
        service = ImageUploadService(FakeBlobStore(), max_size=1024, max_files=2)

        report = service.upload_images([make_image(f"{i}.jpg") for i in range(3)])

        assert report.summary() == "2/3"
        assert report.failures[0].filename == "2.jpg"

    def test_report_serializes_counts(self):
        service = ImageUploadService(FakeBlobStore(fail_on={"x.jpg"}), max_size=1024, max_files=5)

        dumped = service.upload_images([make_image("x.jpg")]).model_dump()

        assert dumped["uploaded"] == 0
        assert dumped["failed"] == 1


class TestImageFileRead:

    def test_stops_one_byte_past_the_limit(self):
        stream = io.BytesIO(b"\xff" * 10_000)

        image = ImageFile.read("huge.jpg", "image/jpeg", stream, limit=100)

        assert image.size == 101
        assert stream.tell() == 101
        assert ImageUploadService(FakeBlobStore(), max_size=100).validate(image) is not None

    def test_small_file_is_read_whole(self):
        image = ImageFile.read("ok.jpg", "image/jpeg", io.BytesIO(b"abc"), limit=100)
        assert image.content == b"abc"


class TestLocalBlobStore:

    def test_writes_file_and_returns_url(self, tmp_path):
        store = LocalBlobStore(root=str(tmp_path), base_url="/uploads")

        url = store.upload(b"data", "image/jpeg", "my photo.jpg")

        assert url.startswith("/uploads/")
        stored = list(tmp_path.iterdir())
        assert len(stored) == 1
        assert stored[0].read_bytes() == b"data"

    def test_safe_filename_strips_paths(self):
        assert "/" not in safe_filename("../../etc/passwd")
