"""
In-process event dispatcher for live complaint-thread updates.

Subscribers register per complaint id and are called synchronously after
a message has been committed. Delivery is best effort: a subscriber that
raises is logged and skipped, and anyone who missed an event catches up
by polling the message list.
"""

import threading
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List

from maintenance_portal.core.logging import get_logger
from maintenance_portal.core.utils import utcnow


@dataclass
class ComplaintEvent:
    """Something that happened on a complaint thread."""

    complaint_id: str
    event_type: str
    data: Dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=utcnow)


Subscriber = Callable[[ComplaintEvent], None]


class EventDispatcher:
    """
    Publish/subscribe keyed by complaint id.
    """

    MESSAGE_POSTED = "message_posted"

    def __init__(self):
        self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)
        self._lock = threading.Lock()
        self._logger = get_logger(self.__class__.__name__)

    def subscribe(self, complaint_id: str, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for one complaint.

        Returns:
            A function that removes the subscription; calling it twice is
            harmless
        """
        with self._lock:
            self._subscribers[complaint_id].append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(complaint_id)
                if callbacks and callback in callbacks:
                    callbacks.remove(callback)
                if not callbacks:
                    self._subscribers.pop(complaint_id, None)

        return unsubscribe

    def subscriber_count(self, complaint_id: str) -> int:
        with self._lock:
            return len(self._subscribers.get(complaint_id, ()))

    def publish(self, event: ComplaintEvent) -> int:
        """
        Deliver an event to the complaint's subscribers.

        Returns:
            Number of subscribers that handled the event without error
        """
        with self._lock:
            callbacks = list(self._subscribers.get(event.complaint_id, ()))

        delivered = 0
        for callback in callbacks:
            try:
                callback(event)
                delivered += 1
            except Exception as e:
                self._logger.warning(
                    f"Subscriber failed for {event.event_type}: {e}",
                    exc_info=True,
                    extra={"complaint_id": event.complaint_id, "event_type": event.event_type},
                )
        return delivered


_default_dispatcher = EventDispatcher()


def get_event_dispatcher() -> EventDispatcher:
    """Process-wide dispatcher shared by request handlers."""
    return _default_dispatcher


__all__ = [
    "ComplaintEvent",
    "EventDispatcher",
    "Subscriber",
    "get_event_dispatcher",
]
