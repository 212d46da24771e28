"""
Service result patterns for standardized response handling.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from maintenance_portal.core.exceptions import (
    BaseAppException,
    ForbiddenError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)


class ErrorCode(str, Enum):
    """Standard error codes for service operations."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ServiceError:
    """Represents a service operation error with context."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Optional[Dict[str, Any]] = None
    field: Optional[str] = None
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        """Set timestamp if not provided."""
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "code": self.code.value,
            "message": self.message,
            "severity": self.severity.value,
            "details": self.details,
            "field": self.field,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }

    def to_exception(self) -> BaseAppException:
        """Build the application exception matching this error."""
        details = dict(self.details or {})

        if self.code == ErrorCode.VALIDATION_ERROR:
            field_errors = details.pop("field_errors", None)
            if field_errors is None and self.field:
                field_errors = {self.field: [self.message]}
            return ValidationError(self.message, field_errors=field_errors, details=details)

        if self.code == ErrorCode.FORBIDDEN:
            return ForbiddenError(
                self.message,
                action=details.get("action"),
                resource=details.get("resource"),
            )

        if self.code == ErrorCode.NOT_FOUND:
            return NotFoundError(
                details.get("resource_type", "Resource"),
                details.get("resource_id"),
                message=self.message,
            )

        if self.code == ErrorCode.UPSTREAM_ERROR:
            return UpstreamError(self.message, service_name=details.pop("service", None), details=details)

        return BaseAppException(self.message, details=details)


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Standardized service operation result with success/failure pattern.

    Attributes:
        is_success: Operation success indicator
        data: Result data (if successful)
        error: Error information (if failed)
        message: Human-readable status message
        metadata: Additional context information
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success(
        cls,
        data: Optional[TData] = None,
        message: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a successful result."""
        return cls(
            is_success=True,
            data=data,
            message=message,
            metadata=metadata or {},
        )

    @classmethod
    def failure(
        cls,
        error: ServiceError,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a failed result."""
        return cls(
            is_success=False,
            error=error,
            message=error.message,
            metadata=metadata or {},
        )

    @classmethod
    def validation_failure(
        cls,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a validation failure result."""
        return cls.failure(
            ServiceError(
                code=ErrorCode.VALIDATION_ERROR,
                message=message,
                severity=ErrorSeverity.WARNING,
                field=field,
                details=details,
            )
        )

    @classmethod
    def field_errors(cls, field_errors: Dict[str, List[str]]) -> "ServiceResult[TData]":
        """Validation failure carrying per-field messages."""
        total = sum(len(errors) for errors in field_errors.values())
        return cls.validation_failure(
            f"Validation failed with {total} error(s)",
            details={"field_errors": field_errors},
        )

    @classmethod
    def not_found(
        cls,
        resource_type: str,
        resource_id: Optional[str] = None,
    ) -> "ServiceResult[TData]":
        """Create a not found failure result."""
        message = f"{resource_type} not found"
        if resource_id:
            message += f" (ID: {resource_id})"

        return cls.failure(
            ServiceError(
                code=ErrorCode.NOT_FOUND,
                message=message,
                severity=ErrorSeverity.WARNING,
                details={"resource_type": resource_type, "resource_id": resource_id},
            )
        )

    @classmethod
    def forbidden(
        cls,
        action: Optional[str] = None,
        resource: Optional[str] = None,
    ) -> "ServiceResult[TData]":
        """Create a forbidden failure result."""
        message = "Not allowed"
        if action:
            message += f" to {action}"
        if resource:
            message += f" on {resource}"

        return cls.failure(
            ServiceError(
                code=ErrorCode.FORBIDDEN,
                message=message,
                severity=ErrorSeverity.WARNING,
                details={"action": action, "resource": resource},
            )
        )

    @classmethod
    def upstream_failure(
        cls,
        message: str,
        service: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a failure caused by the data store or an external provider."""
        merged = dict(details or {})
        if service:
            merged["service"] = service
        return cls.failure(
            ServiceError(
                code=ErrorCode.UPSTREAM_ERROR,
                message=message,
                details=merged,
            )
        )

    @property
    def error_code(self) -> Optional[ErrorCode]:
        return self.error.code if self.error else None

    def raise_for_error(self) -> None:
        """
        Raise the application exception matching this failure.

        Does nothing for a successful result.
        """
        if self.is_success:
            return
        if self.error is None:
            raise BaseAppException(self.message or "Unknown error")
        raise self.error.to_exception()

    def unwrap(self) -> TData:
        """
        Unwrap the result data or raise the matching exception if failed.
        """
        self.raise_for_error()
        return self.data

    def add_metadata(self, key: str, value: Any) -> "ServiceResult[TData]":
        """Add metadata to the result."""
        if self.metadata is None:
            self.metadata = {}
        self.metadata[key] = value
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary representation."""
        result = {
            "is_success": self.is_success,
            "message": self.message,
            "metadata": self.metadata,
        }

        if self.is_success:
            result["data"] = self.data
        else:
            result["error"] = self.error.to_dict() if self.error else None

        return result

    def __bool__(self) -> bool:
        """Allow boolean evaluation of the result."""
        return self.is_success

    def __repr__(self) -> str:
        """String representation of the result."""
        status = "Success" if self.is_success else "Failure"
        if self.message:
            return f"ServiceResult({status}: {self.message})"
        return f"ServiceResult({status})"


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
