# maintenance_portal/api/deps.py
"""
FastAPI dependencies: database session, authenticated user id and
service factories.

Example usage in a router:

    from fastapi import APIRouter, Depends
    from maintenance_portal.api import deps

    router = APIRouter()

    @router.get("/me")
    def read_me(profiles = Depends(deps.get_profile_service),
                user_id: str = Depends(deps.get_current_user_id)):
        ...
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from maintenance_portal.core.exceptions import AuthenticationError
from maintenance_portal.core.logging import get_logger, user_id as user_id_var
from maintenance_portal.core.security import JWTIdentityProvider
from maintenance_portal.db.session import get_db
from maintenance_portal.repositories import (
    ComplaintMessageRepository,
    ComplaintNoteRepository,
    ComplaintRepository,
    ProfileRepository,
)
from maintenance_portal.services.base import (
    EventDispatcher,
    NotificationDispatcher,
    get_event_dispatcher,
)
from maintenance_portal.services.communication import ChatService, build_notification_dispatcher
from maintenance_portal.services.complaint import (
    ComplaintAssignmentService,
    ComplaintNoteService,
    ComplaintService,
)
from maintenance_portal.services.file import BlobStore, ImageUploadService, LocalBlobStore
from maintenance_portal.services.users import ProfileService

logger = get_logger(__name__)

# Security scheme; missing credentials are reported as AuthenticationError
security = HTTPBearer(auto_error=False)


# --- Infrastructure ------------------------------------------------------------

@lru_cache()
def get_notification_dispatcher() -> NotificationDispatcher:
    return build_notification_dispatcher()


@lru_cache()
def get_blob_store() -> BlobStore:
    return LocalBlobStore()


def get_events() -> EventDispatcher:
    return get_event_dispatcher()


def get_identity_provider() -> JWTIdentityProvider:
    return JWTIdentityProvider()


# --- Authentication --------------------------------------------------------------

def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    identity: JWTIdentityProvider = Depends(get_identity_provider),
) -> str:
    """
    User id of the bearer token's subject.

    Raises:
        AuthenticationError: If the token is missing, expired or invalid
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing bearer token")

    user_id = identity.current_user(credentials.credentials)
    if not user_id:
        raise AuthenticationError("Invalid or expired token")

    user_id_var.set(user_id)
    return user_id


# --- Services ------------------------------------------------------------------

def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(ProfileRepository(db), db)


def get_image_upload_service(blob_store: BlobStore = Depends(get_blob_store)) -> ImageUploadService:
    return ImageUploadService(blob_store)


def get_complaint_service(
    db: Session = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher),
    image_service: ImageUploadService = Depends(get_image_upload_service),
) -> ComplaintService:
    return ComplaintService(
        ComplaintRepository(db),
        ProfileRepository(db),
        db,
        notifier=notifier,
        image_service=image_service,
    )


def get_assignment_service(
    db: Session = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> ComplaintAssignmentService:
    return ComplaintAssignmentService(ComplaintRepository(db), ProfileRepository(db), db, notifier=notifier)


def get_note_service(db: Session = Depends(get_db)) -> ComplaintNoteService:
    return ComplaintNoteService(ComplaintNoteRepository(db), ComplaintRepository(db), ProfileRepository(db), db)


def get_chat_service(
    db: Session = Depends(get_db),
    events: EventDispatcher = Depends(get_events),
) -> ChatService:
    return ChatService(
        ComplaintMessageRepository(db),
        ComplaintRepository(db),
        ProfileRepository(db),
        db,
        events=events,
    )


__all__ = [
    "get_db",
    "get_current_user_id",
    "get_identity_provider",
    "get_notification_dispatcher",
    "get_blob_store",
    "get_events",
    "get_profile_service",
    "get_image_upload_service",
    "get_complaint_service",
    "get_assignment_service",
    "get_note_service",
    "get_chat_service",
]
