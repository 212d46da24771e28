"""
Unit Tests for ProfileService
"""
import pytest
from faker import Faker
from pydantic import ValidationError

from maintenance_portal.models.base.enums import UserRole
from maintenance_portal.schemas.user.profile import ProfileCreate
from maintenance_portal.services.base import ErrorCode

fake = Faker()


def new_profile(**overrides) -> ProfileCreate:
    values = {
        "username": fake.unique.user_name(),
        "name": fake.name(),
        "role": UserRole.MAINTENANCE,
        "email": fake.unique.email(),
    }
    values.update(overrides)
    return ProfileCreate(**values)


class TestCreateProfile:

    def test_admin_registers_worker(self, profile_service, admin):
        data = new_profile(username="Plumber.Pat")

        profile = profile_service.create_profile(admin.id, data).unwrap()

        assert profile.username == "plumber.pat"
        assert profile.role == UserRole.MAINTENANCE
        assert profile.id

    def test_explicit_id_is_kept(self, profile_service, admin):
        profile = profile_service.create_profile(admin.id, new_profile(id="idp-42")).unwrap()
        assert profile.id == "idp-42"

    def test_duplicate_username(self, profile_service, admin):
        profile_service.create_profile(admin.id, new_profile(username="dup")).unwrap()

        result = profile_service.create_profile(admin.id, new_profile(username="dup"))

        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert "already taken" in result.message

    def test_duplicate_id(self, profile_service, admin, student):
        result = profile_service.create_profile(admin.id, new_profile(id=student.id))
        assert result.error_code == ErrorCode.VALIDATION_ERROR

    @pytest.mark.parametrize("email", ["not-an-email", "x@y", "two@@campus.edu"])
    def test_invalid_email_rejected_by_schema(self, email):
        with pytest.raises(ValidationError) as exc_info:
            new_profile(email=email)
        assert exc_info.value.errors()[0]["loc"] == ("email",)

    def test_email_is_normalized(self, profile_service, admin):
        profile = profile_service.create_profile(admin.id, new_profile(email="  Eve.Volt@Campus.EDU ")).unwrap()
        assert profile.email == "eve.volt@campus.edu"

    def test_blank_email_is_none(self):
        assert new_profile(email="   ").email is None

    def test_non_admin_is_forbidden(self, profile_service, student, worker):
        for actor in (student, worker):
            assert profile_service.create_profile(actor.id, new_profile()).error_code == ErrorCode.FORBIDDEN


class TestLookups:

    def test_get_own_profile(self, profile_service, student):
        assert profile_service.get_profile(student.id).unwrap().id == student.id
        assert profile_service.get_profile("ghost").error_code == ErrorCode.NOT_FOUND

    def test_list_filtered_by_role(self, profile_service, admin, worker, other_worker, student):
        workers = profile_service.list_profiles(admin.id, UserRole.MAINTENANCE).unwrap()

        assert {p.id for p in workers} == {worker.id, other_worker.id}
        assert profile_service.list_profiles(student.id).error_code == ErrorCode.FORBIDDEN

    def test_resolve_credential(self, profile_service, student):
        assert profile_service.resolve_credential(f"  {student.username.upper()} ") == student.id
        assert profile_service.resolve_credential("nobody") is None


class TestRename:

    def test_rename(self, profile_service, admin, worker):
        renamed = profile_service.update_profile_name(admin.id, worker.id, "  Sam Fixit ").unwrap()
        assert renamed.name == "Sam Fixit"

    def test_rename_rules(self, profile_service, admin, student, worker):
        assert profile_service.update_profile_name(student.id, worker.id, "X").error_code == ErrorCode.FORBIDDEN
        assert profile_service.update_profile_name(admin.id, "ghost", "X").error_code == ErrorCode.NOT_FOUND
        assert profile_service.update_profile_name(admin.id, worker.id, " ").error_code == ErrorCode.VALIDATION_ERROR

    def test_existing_complaints_keep_old_name(self, profile_service, assigned_complaint, admin, student, worker, db_session):
        old_student, old_worker = student.name, worker.name

        profile_service.update_profile_name(admin.id, student.id, "New Student Name").unwrap()
        profile_service.update_profile_name(admin.id, worker.id, "New Worker Name").unwrap()

        db_session.refresh(assigned_complaint)
        assert assigned_complaint.student_name == old_student
        assert assigned_complaint.assigned_to_name == old_worker
