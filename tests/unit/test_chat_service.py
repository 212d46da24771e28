"""
Unit Tests for ChatService
"""
from datetime import timedelta

from maintenance_portal.core.utils import as_utc
from maintenance_portal.models.base.enums import UserRole
from maintenance_portal.services.base import ErrorCode, EventDispatcher


class TestPostMessage:

    def test_parties_can_post(self, chat_service, assigned_complaint, student, worker, admin):
        for actor in (student, worker, admin):
            result = chat_service.post_message(assigned_complaint.id, actor.id, f"hello from {actor.role.value}")
            message = result.unwrap()
            assert message.sender_id == actor.id
            assert message.sender_role == actor.role
            assert message.sender_name == actor.name

    def test_outsiders_cannot_post(self, chat_service, assigned_complaint, other_student, other_worker):
        for actor in (other_student, other_worker):
            result = chat_service.post_message(assigned_complaint.id, actor.id, "let me in")
            assert result.error_code == ErrorCode.FORBIDDEN

    def test_empty_body_rejected(self, chat_service, submitted_complaint, student):
        result = chat_service.post_message(submitted_complaint.id, student.id, "   ")
        assert result.error_code == ErrorCode.VALIDATION_ERROR

    def test_unknown_complaint(self, chat_service, student):
        assert chat_service.post_message("missing", student.id, "hi").error_code == ErrorCode.NOT_FOUND

    def test_subscribers_are_told_after_commit(self, chat_service, events, submitted_complaint, student):
        received = []
        events.subscribe(submitted_complaint.id, received.append)

        result = chat_service.post_message(submitted_complaint.id, student.id, "Any update?")

        assert result.metadata["subscribers_notified"] == 1
        assert received[0].event_type == EventDispatcher.MESSAGE_POSTED
        assert received[0].data["message_id"] == result.data.id

    def test_broken_subscriber_does_not_fail_post(self, chat_service, events, submitted_complaint, student):
        def broken(event):
            raise RuntimeError("client gone")

        events.subscribe(submitted_complaint.id, broken)

        assert chat_service.post_message(submitted_complaint.id, student.id, "still sent").is_success


class TestListMessages:

    def test_returns_all_in_order_and_is_repeatable(self, chat_service, assigned_complaint, student, worker):
        for i, actor in enumerate([student, worker, student, worker]):
            chat_service.post_message(assigned_complaint.id, actor.id, f"message {i}").unwrap()

        first = chat_service.list_messages(assigned_complaint.id, student.id).unwrap()
        second = chat_service.list_messages(assigned_complaint.id, student.id).unwrap()

        assert len(first) == 4
        timestamps = [as_utc(m.created_at) for m in first]
        assert timestamps == sorted(timestamps)
        assert [m.id for m in first] == [m.id for m in second]

    def test_since_is_strict(self, chat_service, submitted_complaint, student):
        chat_service.post_message(submitted_complaint.id, student.id, "one").unwrap()
        chat_service.post_message(submitted_complaint.id, student.id, "two").unwrap()

        messages = chat_service.list_messages(submitted_complaint.id, student.id).unwrap()
        cutoff = messages[0].created_at

        newer = chat_service.list_messages(submitted_complaint.id, student.id, since=cutoff).unwrap()
        assert messages[0].id not in [m.id for m in newer]
        assert len(newer) == len(messages) - 1

        later = as_utc(messages[-1].created_at) + timedelta(seconds=1)
        assert chat_service.list_messages(submitted_complaint.id, student.id, since=later).unwrap() == []

    def test_outsider_cannot_read(self, chat_service, submitted_complaint, other_student):
        result = chat_service.list_messages(submitted_complaint.id, other_student.id)
        assert result.error_code == ErrorCode.FORBIDDEN

    def test_sender_name_is_a_snapshot(self, chat_service, profile_service, submitted_complaint, student, admin):
        chat_service.post_message(submitted_complaint.id, student.id, "before rename").unwrap()
        original_name = student.name

        profile_service.update_profile_name(admin.id, student.id, "Renamed Student").unwrap()

        message = chat_service.list_messages(submitted_complaint.id, student.id).unwrap()[0]
        assert message.sender_name == original_name
        assert message.sender_role == UserRole.STUDENT
