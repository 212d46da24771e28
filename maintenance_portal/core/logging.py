"""
Portal logging.

Two channels share one stdlib handler:

* operational logs: ``get_logger(__name__)`` returns a stdlib adapter that
  accepts ``extra=`` fields and can be bound to fixed fields;
* audit events: ``get_audit_logger()`` returns a structlog logger used for
  complaint lifecycle events (``complaint.submitted``, ``complaint.assigned``,
  ``complaint.status_changed``) with the event fields as keywords.

Both pick up the request id and acting user from contextvars set by the
HTTP layer.
"""

import sys
import logging
from typing import Any, Dict, MutableMapping, Optional, Tuple
from contextvars import ContextVar

import structlog
from pythonjsonlogger import jsonlogger

from maintenance_portal.config.settings import settings

request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
user_id: ContextVar[Optional[str]] = ContextVar('user_id', default=None)

SERVICE_NAME = 'maintenance-portal'
AUDIT_LOGGER_NAME = 'maintenance_portal.audit'

PLAIN_FORMAT = '%(asctime)s %(levelname)-8s %(name)s [req=%(request_id)s user=%(user_id)s] %(message)s'
JSON_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'

# Third-party loggers and the level they run at unless DB_ECHO asks otherwise
LIBRARY_LEVELS = {
    'uvicorn.access': logging.WARNING,
    'uvicorn.error': logging.INFO,
    'sqlalchemy.engine': logging.WARNING,
    'httpx': logging.WARNING,
    'multipart': logging.WARNING,
}


def request_context() -> Dict[str, Any]:
    """Request id and acting user of the current request, when set."""
    context = {}
    if request_id.get():
        context['request_id'] = request_id.get()
    if user_id.get():
        context['user_id'] = user_id.get()
    return context


class RequestContextFilter(logging.Filter):
    """Stamp every record with the request context so formatters can use it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = getattr(record, 'request_id', None) or request_id.get() or '-'
        record.user_id = getattr(record, 'user_id', None) or user_id.get() or '-'
        return True


class PortalJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record, with source location and service name."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['source'] = f'{record.module}:{record.lineno}'
        log_record['service'] = SERVICE_NAME
        log_record.setdefault('environment', settings.ENVIRONMENT)
        if log_record.get('request_id') == '-':
            log_record.pop('request_id')
        if log_record.get('user_id') == '-':
            log_record.pop('user_id')


class PortalLogger(logging.LoggerAdapter):
    """
    Adapter that merges bound fields into each call's ``extra``.

    Example:
        log = get_logger(__name__).bind(complaint_id=complaint.id)
        log.info("Photo stored", extra={"filename": name})
    """

    def __init__(self, logger: logging.Logger, fields: Optional[Dict[str, Any]] = None):
        super().__init__(logger, dict(fields or {}))

    def bind(self, **fields) -> 'PortalLogger':
        return PortalLogger(self.logger, {**self.extra, **fields})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs['extra'] = {**self.extra, **(kwargs.get('extra') or {})}
        return msg, kwargs


def _add_request_context(logger, method_name, event_dict):
    for key, value in request_context().items():
        event_dict.setdefault(key, value)
    event_dict.setdefault('service', SERVICE_NAME)
    return event_dict


def _configure_structlog(json_output: bool) -> None:
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            _add_request_context,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt='iso', utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def _configure_stdlib(level: int, json_output: bool) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(PortalJsonFormatter(JSON_FORMAT) if json_output else logging.Formatter(PLAIN_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)

    for name, library_level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(library_level)
    if settings.DB_ECHO:
        logging.getLogger('sqlalchemy.engine').setLevel(logging.INFO)


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Configure stdlib and structlog for the process.

    Args:
        level: Log level name; defaults to ``settings.LOG_LEVEL``
        json_output: Emit JSON lines; defaults to ``settings.LOG_JSON``
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    json_output = settings.LOG_JSON if json_output is None else json_output

    _configure_stdlib(getattr(logging, level_name, logging.INFO), json_output)
    _configure_structlog(json_output)

    get_logger(__name__).info(
        'Logging configured',
        extra={'log_level': level_name, 'log_json': json_output},
    )


def get_logger(name: str = SERVICE_NAME) -> PortalLogger:
    return PortalLogger(logging.getLogger(name))


def get_audit_logger(**fields):
    """Structlog logger for complaint lifecycle events."""
    return structlog.get_logger(AUDIT_LOGGER_NAME, **fields)


__all__ = [
    'get_audit_logger',
    'get_logger',
    'request_context',
    'setup_logging',
    'PortalLogger',
    'RequestContextFilter',
    'request_id',
    'user_id',
]
