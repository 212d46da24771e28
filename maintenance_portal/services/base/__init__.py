"""
Base service infrastructure: result pattern, base service, notification
dispatch and in-process events.
"""

from maintenance_portal.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)
from maintenance_portal.services.base.base_service import ActorScopedService, BaseService
from maintenance_portal.services.base.notification_dispatcher import (
    EmailMessage,
    EmailSender,
    NotificationDispatcher,
    TemplateKind,
    render_template,
)
from maintenance_portal.services.base.event_dispatcher import (
    ComplaintEvent,
    EventDispatcher,
    get_event_dispatcher,
)

__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
    "BaseService",
    "ActorScopedService",
    "EmailMessage",
    "EmailSender",
    "NotificationDispatcher",
    "TemplateKind",
    "render_template",
    "ComplaintEvent",
    "EventDispatcher",
    "get_event_dispatcher",
]
