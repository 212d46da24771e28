"""
Communication services: complaint chat and email transports.
"""

from maintenance_portal.services.communication.chat_service import ChatService
from maintenance_portal.services.communication.email_service import (
    LoggingEmailSender,
    SMTPEmailSender,
    build_email_sender,
    build_notification_dispatcher,
)

__all__ = [
    "ChatService",
    "LoggingEmailSender",
    "SMTPEmailSender",
    "build_email_sender",
    "build_notification_dispatcher",
]
