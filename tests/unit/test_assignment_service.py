"""
Unit Tests for ComplaintAssignmentService
"""
from maintenance_portal.models import Complaint
from maintenance_portal.models.base.enums import ComplaintStatus, UserRole
from maintenance_portal.services.base import ErrorCode


class TestAssign:

    def test_admin_assigns_worker(self, assignment_service, submitted_complaint, admin, worker):
        result = assignment_service.assign(submitted_complaint.id, worker.id, admin.id)

        complaint = result.unwrap()
        assert complaint.status == ComplaintStatus.ASSIGNED
        assert complaint.assigned_to == worker.id
        assert complaint.assigned_to_name == worker.name
        assert complaint.updated_at is not None
        assert complaint.lifecycle_violations() == []

    def test_emails_student_and_worker(self, assignment_service, submitted_complaint, admin, worker, student, email_sender):
        email_sender.sent.clear()

        assignment_service.assign(submitted_complaint.id, worker.id, admin.id).unwrap()

        by_address = {m.to_address: m for m in email_sender.sent}
        assert by_address[student.email].subject == "Complaint Status Update"
        assert by_address[student.email].body.endswith("assigned")
        assert by_address[worker.email].subject == "New Complaint Assignment"

    def test_non_admin_is_forbidden(self, assignment_service, submitted_complaint, student, worker, db_session):
        for actor in (student, worker):
            result = assignment_service.assign(submitted_complaint.id, worker.id, actor.id)
            assert result.error_code == ErrorCode.FORBIDDEN

        db_session.refresh(submitted_complaint)
        assert submitted_complaint.status == ComplaintStatus.SUBMITTED
        assert submitted_complaint.assigned_to is None

    def test_unknown_complaint(self, assignment_service, admin, worker):
        result = assignment_service.assign("missing", worker.id, admin.id)
        assert result.error_code == ErrorCode.NOT_FOUND

    def test_assignee_must_be_maintenance(self, assignment_service, submitted_complaint, admin, other_student):
        assert assignment_service.assign(submitted_complaint.id, other_student.id, admin.id).error_code == ErrorCode.NOT_FOUND
        assert assignment_service.assign(submitted_complaint.id, "ghost", admin.id).error_code == ErrorCode.NOT_FOUND

    def test_reassignment_overwrites_and_resets_status(
        self, assignment_service, complaint_service, assigned_complaint, admin, worker, other_worker
    ):
        complaint_service.update_status(assigned_complaint.id, "in-progress", worker.id).unwrap()

        result = assignment_service.assign(assigned_complaint.id, other_worker.id, admin.id)

        complaint = result.unwrap()
        assert complaint.assigned_to == other_worker.id
        assert complaint.assigned_to_name == other_worker.name
        assert complaint.status == ComplaintStatus.ASSIGNED
        assert result.metadata["reassigned"] is True

    def test_resolved_complaint_cannot_be_reassigned(
        self, assignment_service, complaint_service, assigned_complaint, admin, worker, other_worker
    ):
        complaint_service.update_status(assigned_complaint.id, "resolved", worker.id).unwrap()

        result = assignment_service.assign(assigned_complaint.id, other_worker.id, admin.id)

        assert result.error_code == ErrorCode.VALIDATION_ERROR

    def test_previous_worker_loses_access(
        self, assignment_service, complaint_service, assigned_complaint, admin, worker, other_worker
    ):
        assignment_service.assign(assigned_complaint.id, other_worker.id, admin.id).unwrap()

        result = complaint_service.update_status(assigned_complaint.id, "in-progress", worker.id)

        assert result.error_code == ErrorCode.FORBIDDEN

    def test_role_is_read_from_store(self, assignment_service, submitted_complaint, profile_factory, worker, db_session):
        promoted = profile_factory(UserRole.STUDENT)
        promoted.role = UserRole.ADMIN
        db_session.commit()

        assert assignment_service.assign(submitted_complaint.id, worker.id, promoted.id).is_success


class TestEmailOutage:

    def test_assignment_survives_failed_email(
        self, offline_assignment_service, submitted_complaint, mail_outage, admin, worker, db_session
    ):
        result = offline_assignment_service.assign(submitted_complaint.id, worker.id, admin.id)

        assert result.is_success
        assert mail_outage.attempts == 2
        db_session.expire_all()
        stored = db_session.get(Complaint, submitted_complaint.id)
        assert stored.status == ComplaintStatus.ASSIGNED
        assert stored.assigned_to == worker.id
