"""
Campus Maintenance Portal - Test Configuration and Fixtures
"""
import os
from typing import Dict, Generator, Iterable, List, Optional

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the settings are loaded
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing-only'
os.environ['LOG_LEVEL'] = 'WARNING'

from maintenance_portal.api import deps
from maintenance_portal.core.exceptions import UpstreamError
from maintenance_portal.core.security import JWTIdentityProvider
from maintenance_portal.db.base import Base
from maintenance_portal.db.session import get_db
from maintenance_portal.main import app
from maintenance_portal.models import Profile
from maintenance_portal.models.base.enums import UserRole
from maintenance_portal.repositories import (
    ComplaintMessageRepository,
    ComplaintNoteRepository,
    ComplaintRepository,
    ProfileRepository,
)
from maintenance_portal.schemas.complaint import ComplaintCreate, ComplaintLocation
from maintenance_portal.services.base import EventDispatcher, NotificationDispatcher
from maintenance_portal.services.communication import ChatService, LoggingEmailSender
from maintenance_portal.services.complaint import (
    ComplaintAssignmentService,
    ComplaintNoteService,
    ComplaintService,
)
from maintenance_portal.services.file import ImageFile, ImageUploadService
from maintenance_portal.services.users import ProfileService

fake = Faker()


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeBlobStore:
    """In-memory blob store that fails for selected filenames."""

    def __init__(self, fail_on: Iterable[str] = ()):
        self.fail_on = set(fail_on)
        self.stored: Dict[str, bytes] = {}

    def upload(self, content: bytes, content_type: str, filename: str) -> str:
        if filename in self.fail_on:
            raise UpstreamError(f"Failed to store {filename}", service_name="blob_store")
        url = f"https://blobs.test/{len(self.stored)}-{filename}"
        self.stored[url] = content
        return url


class ExplodingSender:
    """Email sender whose transport is always down."""

    def __init__(self):
        self.attempts = 0

    def send(self, message) -> None:
        self.attempts += 1
        raise UpstreamError("SMTP unreachable", service_name="smtp")


def make_image(name: str = "photo.jpg", content_type: str = "image/jpeg", size: int = 16) -> ImageFile:
    return ImageFile(filename=name, content_type=content_type, content=b"\xff" * size)


def complaint_payload(**overrides) -> ComplaintCreate:
    data = {
        "title": "Leaky faucet",
        "description": "Water dripping constantly from the bathroom faucet",
        "category": "plumbing",
        "priority": "medium",
        "location": ComplaintLocation(building="North Hall", room_number="204"),
    }
    data.update(overrides)
    return ComplaintCreate(**data)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
def engine():
    """Fresh in-memory database shared by every connection in a test"""
    test_engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSessionLocal()
    yield session
    session.rollback()
    session.close()


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

def _make_profile(db: Session, role: UserRole, profile_id: Optional[str] = None, name: Optional[str] = None) -> Profile:
    profile = ProfileRepository(db).create_profile(
        username=fake.unique.user_name(),
        name=name or fake.name(),
        role=role,
        email=fake.unique.email(),
        phone=fake.numerify('555-####'),
        profile_id=profile_id,
    )
    db.commit()
    return profile


@pytest.fixture
def profile_factory(db_session: Session):
    """Create a profile with a role and optional fixed id"""
    def factory(role: UserRole, profile_id: Optional[str] = None, name: Optional[str] = None) -> Profile:
        return _make_profile(db_session, role, profile_id, name)
    return factory


@pytest.fixture
def admin(profile_factory) -> Profile:
    return profile_factory(UserRole.ADMIN, profile_id="1")


@pytest.fixture
def student(profile_factory) -> Profile:
    return profile_factory(UserRole.STUDENT, profile_id="2")


@pytest.fixture
def worker(profile_factory) -> Profile:
    return profile_factory(UserRole.MAINTENANCE, profile_id="3")


@pytest.fixture
def other_student(profile_factory) -> Profile:
    return profile_factory(UserRole.STUDENT, profile_id="4")


@pytest.fixture
def other_worker(profile_factory) -> Profile:
    return profile_factory(UserRole.MAINTENANCE, profile_id="5")


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

@pytest.fixture
def email_sender() -> LoggingEmailSender:
    return LoggingEmailSender()


@pytest.fixture
def dispatcher(email_sender) -> NotificationDispatcher:
    return NotificationDispatcher(email_sender)


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def image_service(blob_store) -> ImageUploadService:
    return ImageUploadService(blob_store, max_size=1024, max_files=5)


@pytest.fixture
def events() -> EventDispatcher:
    return EventDispatcher()


@pytest.fixture
def complaint_service(db_session, dispatcher, image_service) -> ComplaintService:
    return ComplaintService(
        ComplaintRepository(db_session),
        ProfileRepository(db_session),
        db_session,
        notifier=dispatcher,
        image_service=image_service,
    )


@pytest.fixture
def assignment_service(db_session, dispatcher) -> ComplaintAssignmentService:
    return ComplaintAssignmentService(
        ComplaintRepository(db_session),
        ProfileRepository(db_session),
        db_session,
        notifier=dispatcher,
    )


@pytest.fixture
def mail_outage() -> ExplodingSender:
    return ExplodingSender()


@pytest.fixture
def offline_complaint_service(db_session, mail_outage, image_service) -> ComplaintService:
    """ComplaintService whose email transport always fails"""
    return ComplaintService(
        ComplaintRepository(db_session),
        ProfileRepository(db_session),
        db_session,
        notifier=NotificationDispatcher(mail_outage),
        image_service=image_service,
    )


@pytest.fixture
def offline_assignment_service(db_session, mail_outage) -> ComplaintAssignmentService:
    return ComplaintAssignmentService(
        ComplaintRepository(db_session),
        ProfileRepository(db_session),
        db_session,
        notifier=NotificationDispatcher(mail_outage),
    )


@pytest.fixture
def chat_service(db_session, events) -> ChatService:
    return ChatService(
        ComplaintMessageRepository(db_session),
        ComplaintRepository(db_session),
        ProfileRepository(db_session),
        db_session,
        events=events,
    )


@pytest.fixture
def note_service(db_session) -> ComplaintNoteService:
    return ComplaintNoteService(
        ComplaintNoteRepository(db_session),
        ComplaintRepository(db_session),
        ProfileRepository(db_session),
        db_session,
    )


@pytest.fixture
def profile_service(db_session) -> ProfileService:
    return ProfileService(ProfileRepository(db_session), db_session)


@pytest.fixture
def submitted_complaint(complaint_service, student):
    """A plumbing complaint filed by the student fixture"""
    return complaint_service.create_complaint(student.id, complaint_payload()).unwrap()


@pytest.fixture
def assigned_complaint(assignment_service, submitted_complaint, admin, worker):
    return assignment_service.assign(submitted_complaint.id, worker.id, admin.id).unwrap()


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest.fixture
def client(db_session, dispatcher, blob_store, events) -> Generator[TestClient, None, None]:
    """Test client wired to the test database and fakes"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_notification_dispatcher] = lambda: dispatcher
    app.dependency_overrides[deps.get_blob_store] = lambda: blob_store
    app.dependency_overrides[deps.get_events] = lambda: events

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build bearer headers for a profile"""
    identity = JWTIdentityProvider()

    def headers_for(profile: Profile) -> Dict[str, str]:
        return {'Authorization': f'Bearer {identity.issue_token(profile.id)}'}
    return headers_for


def recipients(sender: LoggingEmailSender) -> List[str]:
    return [message.to_address for message in sender.sent]
