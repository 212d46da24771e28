"""
Email transports used by the notification dispatcher.

The logging sender is the development default: it records what would have
been sent and delivers nothing. The SMTP sender delivers for real.
"""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import List, Optional

from maintenance_portal.config.settings import Settings, settings as default_settings
from maintenance_portal.core.exceptions import UpstreamError
from maintenance_portal.services.base.notification_dispatcher import (
    EmailMessage,
    EmailSender,
    NotificationDispatcher,
)

logger = logging.getLogger(__name__)


class LoggingEmailSender:
    """Writes each email to the log instead of delivering it."""

    def __init__(self):
        self.sent: List[EmailMessage] = []

    def send(self, message: EmailMessage) -> None:
        self.sent.append(message)
        logger.info(
            f"Email would be sent: {message.subject}",
            extra={
                "to_address": message.to_address,
                "subject": message.subject,
                "template": message.template.value if message.template else None,
            },
        )


class SMTPEmailSender:
    """Delivers email through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        from_address: str = "no-reply@campus.edu",
        from_name: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.from_address = from_address
        self.from_name = from_name
        self.timeout = timeout

    def build_mime(self, message: EmailMessage) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = message.subject
        msg["From"] = formataddr((self.from_name or "", self.from_address))
        msg["To"] = formataddr((message.to_name or "", message.to_address))
        msg.attach(MIMEText(message.body, "plain"))
        return msg

    def send(self, message: EmailMessage) -> None:
        """
        Send one email.

        Raises:
            UpstreamError: If the SMTP conversation fails
        """
        msg = self.build_mime(message)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(msg, to_addrs=[message.to_address])
        except (smtplib.SMTPException, OSError) as e:
            raise UpstreamError(f"Failed to send email: {e}", service_name="smtp") from e

        logger.info(f"Email sent: {message.subject}", extra={"to_address": message.to_address})


def build_email_sender(config: Optional[Settings] = None) -> EmailSender:
    """
    Pick the email transport configured by EMAIL_BACKEND.
    """
    config = config or default_settings
    if config.EMAIL_BACKEND == "smtp":
        if not config.SMTP_HOST:
            raise ValueError("SMTP_HOST is required when EMAIL_BACKEND is 'smtp'")
        return SMTPEmailSender(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            username=config.SMTP_USER,
            password=config.SMTP_PASSWORD,
            use_tls=config.SMTP_TLS,
            from_address=config.EMAIL_FROM_ADDRESS,
            from_name=config.EMAIL_FROM_NAME,
        )
    return LoggingEmailSender()


def build_notification_dispatcher(config: Optional[Settings] = None) -> NotificationDispatcher:
    config = config or default_settings
    return NotificationDispatcher(build_email_sender(config), enabled=config.EMAIL_ENABLED)


__all__ = [
    "LoggingEmailSender",
    "SMTPEmailSender",
    "build_email_sender",
    "build_notification_dispatcher",
]
