"""
Unit Tests for ComplaintNoteService
"""
from maintenance_portal.services.base import ErrorCode


class TestNotes:

    def test_involved_parties_can_add(self, note_service, assigned_complaint, student, worker, admin):
        for actor in (student, worker, admin):
            note = note_service.add_note(assigned_complaint.id, actor.id, f"  note by {actor.name}  ").unwrap()
            assert note.author_id == actor.id
            assert note.author_name == actor.name
            assert note.body == f"note by {actor.name}"

    def test_only_staff_on_the_job_can_read(self, note_service, assigned_complaint, student, worker, admin, other_worker):
        note_service.add_note(assigned_complaint.id, student.id, "Please knock first").unwrap()

        assert len(note_service.list_notes(assigned_complaint.id, worker.id).unwrap()) == 1
        assert len(note_service.list_notes(assigned_complaint.id, admin.id).unwrap()) == 1
        assert note_service.list_notes(assigned_complaint.id, student.id).error_code == ErrorCode.FORBIDDEN
        assert note_service.list_notes(assigned_complaint.id, other_worker.id).error_code == ErrorCode.FORBIDDEN

    def test_outsider_cannot_add(self, note_service, submitted_complaint, other_student):
        result = note_service.add_note(submitted_complaint.id, other_student.id, "hello")
        assert result.error_code == ErrorCode.FORBIDDEN

    def test_empty_note(self, note_service, submitted_complaint, student):
        result = note_service.add_note(submitted_complaint.id, student.id, "")

        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert result.message == "Note cannot be empty"

    def test_unknown_complaint(self, note_service, admin):
        assert note_service.add_note("missing", admin.id, "x").error_code == ErrorCode.NOT_FOUND
        assert note_service.list_notes("missing", admin.id).error_code == ErrorCode.NOT_FOUND
