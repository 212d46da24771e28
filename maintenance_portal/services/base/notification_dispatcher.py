"""
Notification dispatcher: renders complaint emails and hands them to a
pluggable sender.

Dispatch is fire and forget. ``notify`` never raises; a failed send is
logged and reported as False so that a lifecycle operation which has
already committed is never undone by its notification.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Tuple

from jinja2 import DictLoader, Environment, StrictUndefined

from maintenance_portal.core.logging import get_logger


class TemplateKind(str, Enum):
    """Email templates sent by the portal."""

    COMPLAINT_SUBMITTED = "complaint_submitted"
    NEW_COMPLAINT_ADMIN = "new_complaint_admin"
    STATUS_UPDATE = "status_update"
    COMPLAINT_ASSIGNED = "complaint_assigned"


@dataclass
class EmailMessage:
    """A rendered email ready for delivery."""

    to_address: str
    subject: str
    body: str
    to_name: Optional[str] = None
    template: Optional[TemplateKind] = None
    payload: Dict[str, Any] = field(default_factory=dict)


class EmailSender(Protocol):
    """Transport for rendered emails."""

    def send(self, message: EmailMessage) -> None:
        """Deliver a message or raise on failure."""
        ...


# Plain-text templates, one subject and one body per kind
TEMPLATES = {
    "complaint_submitted.subject": "Complaint Submitted Successfully",
    "complaint_submitted.body": (
        'Your maintenance complaint "{{ complaint_title }}" has been submitted successfully. '
        "Complaint ID: {{ complaint_id }}"
    ),
    "new_complaint_admin.subject": "New Maintenance Complaint",
    "new_complaint_admin.body": (
        'A new maintenance complaint has been submitted: "{{ complaint_title }}" (ID: {{ complaint_id }})'
    ),
    "status_update.subject": "Complaint Status Update",
    "status_update.body": 'Your complaint "{{ complaint_title }}" status has been updated to: {{ status }}',
    "complaint_assigned.subject": "New Complaint Assignment",
    "complaint_assigned.body": (
        'You have been assigned maintenance complaint "{{ complaint_title }}" (ID: {{ complaint_id }})'
        "{% if location is defined and location %} at {{ location }}{% endif %}"
    ),
}

template_env = Environment(
    loader=DictLoader(TEMPLATES),
    undefined=StrictUndefined,
    autoescape=False,
)


def render_template(kind: TemplateKind, payload: Dict[str, Any]) -> Tuple[str, str]:
    """
    Render subject and body for a template.

    Args:
        kind: Template to render
        payload: Values referenced by the template; ``complaint_id`` and
            ``complaint_title`` are used by every template

    Returns:
        (subject, body)

    Raises:
        jinja2.UndefinedError: If the payload lacks a value the template needs
    """
    name = TemplateKind(kind).value
    subject = template_env.get_template(f"{name}.subject").render(**payload)
    body = template_env.get_template(f"{name}.body").render(**payload)
    return subject, body


class NotificationDispatcher:
    """
    Decides nothing about *when* to notify; complaint services call
    ``notify`` after their transaction has committed.
    """

    def __init__(self, sender: EmailSender, enabled: bool = True):
        """
        Initialize notification dispatcher.

        Args:
            sender: Email transport
            enabled: When False, notifications are skipped (and reported
                as not sent)
        """
        self.sender = sender
        self.enabled = enabled
        self._logger = get_logger(self.__class__.__name__)

    def notify(
        self,
        to_address: Optional[str],
        template_kind: TemplateKind,
        payload: Dict[str, Any],
        to_name: Optional[str] = None,
    ) -> bool:
        """
        Render and send one email.

        Args:
            to_address: Recipient address; a missing address is skipped
            template_kind: Template to render
            payload: Template values
            to_name: Recipient display name

        Returns:
            True when the sender accepted the message
        """
        context = {
            "template": TemplateKind(template_kind).value,
            "complaint_id": payload.get("complaint_id"),
        }

        if not self.enabled:
            self._logger.debug("Email notifications disabled; skipping", extra=context)
            return False

        if not to_address:
            self._logger.debug("Recipient has no email address; skipping", extra=context)
            return False

        try:
            subject, body = render_template(TemplateKind(template_kind), payload)
            self.sender.send(
                EmailMessage(
                    to_address=to_address,
                    to_name=to_name,
                    subject=subject,
                    body=body,
                    template=TemplateKind(template_kind),
                    payload=dict(payload),
                )
            )
        except Exception as e:
            # Notifications never fail the operation that triggered them
            self._logger.error(
                f"Failed to send {context['template']} email: {e}",
                exc_info=True,
                extra=context,
            )
            return False

        self._logger.info(f"Sent {context['template']} email", extra=context)
        return True


__all__ = [
    "TemplateKind",
    "EmailMessage",
    "EmailSender",
    "render_template",
    "NotificationDispatcher",
]
