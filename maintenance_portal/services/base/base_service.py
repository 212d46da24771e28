"""
Base service class providing common functionality for all services.
"""

from abc import ABC
from typing import Any, Dict, Generic, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from maintenance_portal.core.exceptions import (
    BaseAppException,
    ForbiddenError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from maintenance_portal.core.logging import get_logger
from maintenance_portal.core.permissions import ComplaintOperation, can_act
from maintenance_portal.models.complaint.complaint import Complaint
from maintenance_portal.models.user.profile import Profile
from maintenance_portal.repositories.base.base_repository import BaseRepository
from maintenance_portal.repositories.user.profile_repository import ProfileRepository
from maintenance_portal.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)

TModel = TypeVar("TModel")
TRepo = TypeVar("TRepo", bound=BaseRepository)


class BaseService(ABC, Generic[TModel, TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Consistent error handling via ServiceResult
    - Transaction management utilities
    """

    def __init__(self, repository: TRepo, db_session: Session):
        """
        Initialize base service.

        Args:
            repository: Repository instance for data access
            db_session: SQLAlchemy database session
        """
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger(self.__class__.__name__)

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Convert exception to a ServiceResult failure with logging.

        Args:
            exception: The caught exception
            operation: Description of the operation that failed
            entity_ref: Reference to the entity involved (ID, name, etc.)
            severity: Error severity level
            additional_context: Extra context for logging/debugging

        Returns:
            ServiceResult with failure status and error details
        """
        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }
        if additional_context:
            context.update(additional_context)

        error_code = self._map_exception_to_error_code(exception)

        if isinstance(exception, BaseAppException):
            self._logger.warning(f"{operation} rejected: {exception.message}", extra=context)
            return ServiceResult.failure(
                ServiceError(
                    code=error_code,
                    message=exception.message,
                    severity=ErrorSeverity.WARNING,
                    details=exception.details,
                )
            )

        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra=context,
        )

        details: Dict[str, Any] = {
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
        }
        if error_code == ErrorCode.UPSTREAM_ERROR:
            details["service"] = "database"

        return ServiceResult.failure(
            ServiceError(
                code=error_code,
                message=f"Failed to {operation}",
                details=details,
                severity=severity,
            )
        )

    def _map_exception_to_error_code(self, exception: Exception) -> ErrorCode:
        """
        Map exception types to appropriate error codes.
        """
        exception_mapping = {
            ValidationError: ErrorCode.VALIDATION_ERROR,
            ForbiddenError: ErrorCode.FORBIDDEN,
            NotFoundError: ErrorCode.NOT_FOUND,
            UpstreamError: ErrorCode.UPSTREAM_ERROR,
            SQLAlchemyError: ErrorCode.UPSTREAM_ERROR,
        }

        for exc_type, error_code in exception_mapping.items():
            if isinstance(exception, exc_type):
                return error_code

        return ErrorCode.INTERNAL_ERROR

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def _commit(self) -> None:
        """Commit the current transaction with error handling."""
        try:
            self.db.commit()
        except Exception as e:
            self._logger.error(f"Commit failed: {e}", exc_info=True)
            self._rollback()
            raise

    def _rollback(self) -> None:
        """Rollback the current transaction, suppressing rollback errors."""
        try:
            self.db.rollback()
        except SQLAlchemyError as e:
            # Rollback errors must not mask the original error
            self._logger.warning(f"Rollback failed: {e}")


class ActorScopedService(BaseService[TModel, TRepo]):
    """
    Base for services whose operations are performed on behalf of an
    authenticated user.

    The acting profile is re-read from the Profile Store on every call, so
    a role change takes effect immediately and no caller-supplied role is
    ever consulted.
    """

    def __init__(self, repository: TRepo, profile_repo: ProfileRepository, db_session: Session):
        super().__init__(repository, db_session)
        self.profile_repo = profile_repo

    def _resolve_actor(self, actor_id: Optional[str]) -> Optional[Profile]:
        if not actor_id:
            return None
        return self.profile_repo.find_by_id(actor_id)

    def _authorize(
        self,
        actor: Optional[Profile],
        complaint: Optional[Complaint],
        operation: ComplaintOperation,
    ) -> Optional[ServiceResult]:
        """
        Return a forbidden result when the actor may not perform the
        operation, None when allowed.
        """
        if can_act(actor, complaint, operation):
            return None

        self._logger.info(
            f"Denied {operation.value}",
            extra={
                "actor_id": actor.id if actor else None,
                "actor_role": actor.role.value if actor else None,
                "complaint_id": complaint.id if complaint else None,
            },
        )
        if actor is None:
            return ServiceResult.failure(
                ServiceError(
                    code=ErrorCode.FORBIDDEN,
                    message="No portal profile for the authenticated user",
                    severity=ErrorSeverity.WARNING,
                    details={"action": operation.value, "resource": "profile"},
                )
            )
        return ServiceResult.forbidden(
            action=operation.value,
            resource=f"complaint {complaint.id}" if complaint else "complaint",
        )

    def _lifecycle_failure(self, complaint: Complaint) -> Optional[ServiceResult]:
        """
        Internal-error result when a pending write would leave the
        complaint inconsistent, None when it is sound.
        """
        problems = complaint.lifecycle_violations()
        if not problems:
            return None
        self._logger.error(
            "Refusing to persist inconsistent complaint",
            extra={"complaint_id": complaint.id, "problems": problems},
        )
        return ServiceResult.failure(
            ServiceError(
                code=ErrorCode.INTERNAL_ERROR,
                message="Complaint lifecycle invariant violated",
                severity=ErrorSeverity.CRITICAL,
                details={"problems": problems},
            )
        )
