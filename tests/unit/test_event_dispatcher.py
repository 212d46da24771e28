"""
Unit Tests for the in-process complaint event dispatcher
"""
from maintenance_portal.services.base import ComplaintEvent, EventDispatcher


def _event(complaint_id: str = "c-1") -> ComplaintEvent:
    return ComplaintEvent(complaint_id=complaint_id, event_type=EventDispatcher.MESSAGE_POSTED, data={"body": "hi"})


class TestEventDispatcher:

    def test_delivers_to_subscribers_of_the_complaint(self):
        events = EventDispatcher()
        received = []
        events.subscribe("c-1", received.append)

        assert events.publish(_event("c-1")) == 1
        assert events.publish(_event("c-2")) == 0
        assert [e.complaint_id for e in received] == ["c-1"]

    def test_unsubscribe_stops_delivery(self):
        events = EventDispatcher()
        received = []
        unsubscribe = events.subscribe("c-1", received.append)

        unsubscribe()
        unsubscribe()

        assert events.subscriber_count("c-1") == 0
        assert events.publish(_event()) == 0
        assert received == []

    def test_failing_subscriber_does_not_block_others(self):
        events = EventDispatcher()
        received = []

        def broken(event):
            raise RuntimeError("socket closed")

        events.subscribe("c-1", broken)
        events.subscribe("c-1", received.append)

        assert events.publish(_event()) == 1
        assert len(received) == 1
