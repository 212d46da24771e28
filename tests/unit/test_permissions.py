"""
Unit Tests for the complaint access rules
"""
import pytest

from maintenance_portal.core.permissions import ComplaintOperation, can_act
from maintenance_portal.models import Complaint, Profile
from maintenance_portal.models.base.enums import ComplaintStatus, UserRole

STUDENT = Profile(id="2", name="Student", username="student", role=UserRole.STUDENT)
OTHER_STUDENT = Profile(id="4", name="Other", username="other", role=UserRole.STUDENT)
WORKER = Profile(id="3", name="Worker", username="worker", role=UserRole.MAINTENANCE)
OTHER_WORKER = Profile(id="5", name="Worker 2", username="worker2", role=UserRole.MAINTENANCE)
ADMIN = Profile(id="1", name="Admin", username="admin", role=UserRole.ADMIN)


def _complaint(assigned_to=None) -> Complaint:
    return Complaint(
        id="c-1",
        student_id=STUDENT.id,
        assigned_to=assigned_to,
        status=ComplaintStatus.ASSIGNED if assigned_to else ComplaintStatus.SUBMITTED,
    )


class TestCreate:
    """Only students file complaints"""

    def test_student_can_create(self):
        assert can_act(STUDENT, None, ComplaintOperation.CREATE)

    @pytest.mark.parametrize("actor", [WORKER, ADMIN])
    def test_staff_cannot_create(self, actor):
        assert not can_act(actor, None, ComplaintOperation.CREATE)


class TestAssign:

    def test_admin_can_assign(self):
        assert can_act(ADMIN, _complaint(), ComplaintOperation.ASSIGN)

    @pytest.mark.parametrize("actor", [STUDENT, WORKER, OTHER_WORKER])
    def test_non_admin_cannot_assign(self, actor):
        assert not can_act(actor, _complaint(assigned_to=WORKER.id), ComplaintOperation.ASSIGN)


class TestUpdateStatus:

    def test_admin_can_update_any_complaint(self):
        assert can_act(ADMIN, _complaint(), ComplaintOperation.UPDATE_STATUS)

    def test_assigned_worker_can_update(self):
        assert can_act(WORKER, _complaint(assigned_to=WORKER.id), ComplaintOperation.UPDATE_STATUS)

    def test_other_worker_cannot_update(self):
        assert not can_act(OTHER_WORKER, _complaint(assigned_to=WORKER.id), ComplaintOperation.UPDATE_STATUS)

    def test_owner_student_cannot_update(self):
        assert not can_act(STUDENT, _complaint(assigned_to=WORKER.id), ComplaintOperation.UPDATE_STATUS)

    def test_unassigned_complaint_is_admin_only(self):
        assert not can_act(WORKER, _complaint(), ComplaintOperation.UPDATE_STATUS)


class TestThreadAccess:
    """Viewing and chatting are limited to the parties of a complaint"""

    @pytest.mark.parametrize("operation", [
        ComplaintOperation.VIEW,
        ComplaintOperation.POST_MESSAGE,
        ComplaintOperation.READ_MESSAGES,
        ComplaintOperation.ADD_NOTE,
    ])
    def test_parties_allowed(self, operation):
        complaint = _complaint(assigned_to=WORKER.id)
        assert can_act(STUDENT, complaint, operation)
        assert can_act(WORKER, complaint, operation)
        assert can_act(ADMIN, complaint, operation)

    @pytest.mark.parametrize("operation", [
        ComplaintOperation.VIEW,
        ComplaintOperation.POST_MESSAGE,
        ComplaintOperation.READ_MESSAGES,
        ComplaintOperation.ADD_NOTE,
    ])
    def test_outsiders_refused(self, operation):
        complaint = _complaint(assigned_to=WORKER.id)
        assert not can_act(OTHER_STUDENT, complaint, operation)
        assert not can_act(OTHER_WORKER, complaint, operation)

    def test_notes_hidden_from_student(self):
        complaint = _complaint(assigned_to=WORKER.id)
        assert not can_act(STUDENT, complaint, ComplaintOperation.VIEW_NOTES)
        assert can_act(WORKER, complaint, ComplaintOperation.VIEW_NOTES)
        assert can_act(ADMIN, complaint, ComplaintOperation.VIEW_NOTES)


class TestEdgeCases:

    @pytest.mark.parametrize("operation", list(ComplaintOperation))
    def test_missing_actor_is_never_allowed(self, operation):
        assert not can_act(None, _complaint(), operation)

    def test_complaint_operations_need_a_complaint(self):
        assert not can_act(ADMIN, None, ComplaintOperation.VIEW)
        assert not can_act(ADMIN, None, ComplaintOperation.UPDATE_STATUS)

    def test_manage_profiles_is_admin_only(self):
        assert can_act(ADMIN, None, ComplaintOperation.MANAGE_PROFILES)
        assert not can_act(STUDENT, None, ComplaintOperation.MANAGE_PROFILES)
        assert not can_act(WORKER, None, ComplaintOperation.MANAGE_PROFILES)
