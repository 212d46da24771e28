"""
Unit Tests for the service result pattern
"""
import pytest

from maintenance_portal.core.exceptions import (
    BaseAppException,
    ForbiddenError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from maintenance_portal.services.base import ErrorCode, ServiceError, ServiceResult


class TestServiceResult:

    def test_success_is_truthy_and_unwraps(self):
        result = ServiceResult.success({"id": "c-1"}, message="done")

        assert result
        assert result.unwrap() == {"id": "c-1"}
        assert result.metadata == {}
        assert result.error_code is None

    def test_failure_is_falsy(self):
        result = ServiceResult.not_found("Complaint", "c-404")

        assert not result
        assert result.error_code == ErrorCode.NOT_FOUND
        with pytest.raises(NotFoundError):
            result.unwrap()

    def test_add_metadata_chains(self):
        result = ServiceResult.success().add_metadata("images_uploaded", 2)
        assert result.metadata["images_uploaded"] == 2


class TestExceptionMapping:
    """Failures raise the exception matching their code"""

    @pytest.mark.parametrize("result, exc_type, status_code", [
        (ServiceResult.validation_failure("Title is required", field="title"), ValidationError, 422),
        (ServiceResult.forbidden(action="assign", resource="complaint c-1"), ForbiddenError, 403),
        (ServiceResult.not_found("Complaint", "c-1"), NotFoundError, 404),
        (ServiceResult.upstream_failure("Database down", service="database"), UpstreamError, 502),
    ])
    def test_raise_for_error(self, result, exc_type, status_code):
        with pytest.raises(exc_type) as exc_info:
            result.raise_for_error()
        assert exc_info.value.status_code == status_code

    def test_single_field_error_becomes_field_errors(self):
        result = ServiceResult.validation_failure("Message cannot be empty", field="body")

        with pytest.raises(ValidationError) as exc_info:
            result.unwrap()

        assert exc_info.value.details["field_errors"] == {"body": ["Message cannot be empty"]}

    def test_field_errors_are_preserved(self):
        result = ServiceResult.field_errors({"title": ["Title is required"], "priority": ["Priority is required"]})

        with pytest.raises(ValidationError) as exc_info:
            result.unwrap()

        assert "2 error(s)" in exc_info.value.message
        assert set(exc_info.value.details["field_errors"]) == {"title", "priority"}

    def test_internal_error_maps_to_base_exception(self):
        result = ServiceResult.failure(ServiceError(code=ErrorCode.INTERNAL_ERROR, message="boom"))

        with pytest.raises(BaseAppException) as exc_info:
            result.unwrap()
        assert exc_info.value.status_code == 500

    def test_success_does_not_raise(self):
        ServiceResult.success().raise_for_error()
