"""
Complaint endpoints: submission, listing, lifecycle changes, chat and
work notes.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from pydantic import ValidationError as SchemaValidationError

from maintenance_portal.api import deps
from maintenance_portal.config.settings import settings
from maintenance_portal.core.exceptions import create_validation_error
from maintenance_portal.core.logging import get_logger
from maintenance_portal.core.middleware import format_validation_errors
from maintenance_portal.schemas.complaint import (
    ComplaintAssignment,
    ComplaintCreate,
    ComplaintFilterParams,
    ComplaintLocation,
    ComplaintResponse,
    ComplaintStats,
    ComplaintStatusUpdate,
    ComplaintSubmissionResponse,
    MessageCreate,
    MessageListResponse,
    MessageResponse,
    NoteCreate,
    NoteResponse,
)
from maintenance_portal.schemas.file import UploadReport
from maintenance_portal.services.communication import ChatService
from maintenance_portal.services.complaint import (
    ComplaintAssignmentService,
    ComplaintNoteService,
    ComplaintService,
)
from maintenance_portal.services.file import ImageFile

logger = get_logger(__name__)

router = APIRouter(prefix="/complaints", tags=["Complaint Management"])


def _build(schema, **values):
    """Construct a schema from loose form or query values, reporting bad input as 422."""
    try:
        return schema(**values)
    except SchemaValidationError as e:
        raise create_validation_error(format_validation_errors(e.errors())["field_errors"]) from e


def _to_image_files(files: Optional[List[UploadFile]], limit: int) -> List[ImageFile]:
    return [
        ImageFile.read(upload.filename or "image", upload.content_type, upload.file, limit)
        for upload in files or []
    ]


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------

@router.post("", response_model=ComplaintResponse, status_code=status.HTTP_201_CREATED)
def create_complaint(
    payload: ComplaintCreate,
    user_id: str = Depends(deps.get_current_user_id),
    service: ComplaintService = Depends(deps.get_complaint_service),
) -> ComplaintResponse:
    """File a complaint whose photos were uploaded beforehand."""
    result = service.create_complaint(user_id, payload)
    return ComplaintResponse.model_validate(result.unwrap())


@router.post("/submit", response_model=ComplaintSubmissionResponse, status_code=status.HTTP_201_CREATED)
def submit_complaint(
    title: str = Form(""),
    description: str = Form(""),
    category: str = Form(""),
    priority: str = Form(""),
    building: str = Form(""),
    room_number: str = Form("", alias="roomNumber"),
    specific_location: Optional[str] = Form(None, alias="specificLocation"),
    files: List[UploadFile] = File(default=[]),
    user_id: str = Depends(deps.get_current_user_id),
    service: ComplaintService = Depends(deps.get_complaint_service),
) -> ComplaintSubmissionResponse:
    """
    Submit a complaint with photos in one multipart request.

    Photos that fail to upload are reported in ``upload`` and left off the
    complaint; the complaint is still created.
    """
    data = _build(
        ComplaintCreate,
        title=title,
        description=description,
        category=category,
        priority=priority,
        location=_build(
            ComplaintLocation,
            building=building,
            room_number=room_number,
            specific_location=specific_location,
        ),
    )
    result = service.submit_with_images(user_id, data, _to_image_files(files, settings.MAX_IMAGE_SIZE))
    complaint = result.unwrap()
    report = result.metadata.get("upload_report") or UploadReport()
    return ComplaintSubmissionResponse(
        complaint=ComplaintResponse.model_validate(complaint),
        upload=report,
    )


# ---------------------------------------------------------------------------
# Retrieval
# ---------------------------------------------------------------------------

@router.get("", response_model=List[ComplaintResponse])
def list_complaints(
    search: Optional[str] = Query(None, description="Case-insensitive match on title, description or student name"),
    status_filter: Optional[str] = Query(None, alias="status", description="Exact status, or 'all'"),
    category: Optional[str] = Query(None, description="Exact category, or 'all'"),
    sort: str = Query("newest", description="newest, oldest or priority"),
    user_id: str = Depends(deps.get_current_user_id),
    service: ComplaintService = Depends(deps.get_complaint_service),
) -> List[ComplaintResponse]:
    filters = _build(
        ComplaintFilterParams,
        search=search,
        status=status_filter,
        category=category,
        sort=sort,
    )
    result = service.list_complaints(user_id, filters)
    return [ComplaintResponse.model_validate(c) for c in result.unwrap()]


@router.get("/stats", response_model=ComplaintStats)
def complaint_stats(
    user_id: str = Depends(deps.get_current_user_id),
    service: ComplaintService = Depends(deps.get_complaint_service),
) -> ComplaintStats:
    return service.get_stats(user_id).unwrap()


@router.get("/{complaint_id}", response_model=ComplaintResponse)
def get_complaint(
    complaint_id: str,
    user_id: str = Depends(deps.get_current_user_id),
    service: ComplaintService = Depends(deps.get_complaint_service),
) -> ComplaintResponse:
    result = service.get_complaint(complaint_id, user_id)
    return ComplaintResponse.model_validate(result.unwrap())


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

@router.post("/{complaint_id}/assign", response_model=ComplaintResponse)
def assign_complaint(
    complaint_id: str,
    payload: ComplaintAssignment,
    user_id: str = Depends(deps.get_current_user_id),
    service: ComplaintAssignmentService = Depends(deps.get_assignment_service),
) -> ComplaintResponse:
    result = service.assign(complaint_id, payload.maintenance_id, user_id)
    return ComplaintResponse.model_validate(result.unwrap())


@router.post("/{complaint_id}/status", response_model=ComplaintResponse)
def update_complaint_status(
    complaint_id: str,
    payload: ComplaintStatusUpdate,
    user_id: str = Depends(deps.get_current_user_id),
    service: ComplaintService = Depends(deps.get_complaint_service),
) -> ComplaintResponse:
    result = service.update_status(
        complaint_id,
        payload.status,
        user_id,
        completion_images=payload.completion_images,
    )
    return ComplaintResponse.model_validate(result.unwrap())


# ---------------------------------------------------------------------------
# Chat & notes
# ---------------------------------------------------------------------------

@router.get("/{complaint_id}/messages", response_model=MessageListResponse)
def list_messages(
    complaint_id: str,
    since: Optional[datetime] = Query(None, description="Only messages created strictly after this time"),
    user_id: str = Depends(deps.get_current_user_id),
    service: ChatService = Depends(deps.get_chat_service),
) -> MessageListResponse:
    messages = service.list_messages(complaint_id, user_id, since=since).unwrap()
    return MessageListResponse(
        complaint_id=complaint_id,
        count=len(messages),
        messages=[MessageResponse.model_validate(m) for m in messages],
    )


@router.post(
    "/{complaint_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def post_message(
    complaint_id: str,
    payload: MessageCreate,
    user_id: str = Depends(deps.get_current_user_id),
    service: ChatService = Depends(deps.get_chat_service),
) -> MessageResponse:
    result = service.post_message(complaint_id, user_id, payload.body)
    return MessageResponse.model_validate(result.unwrap())


@router.get("/{complaint_id}/notes", response_model=List[NoteResponse])
def list_notes(
    complaint_id: str,
    user_id: str = Depends(deps.get_current_user_id),
    service: ComplaintNoteService = Depends(deps.get_note_service),
) -> List[NoteResponse]:
    notes = service.list_notes(complaint_id, user_id).unwrap()
    return [NoteResponse.model_validate(n) for n in notes]


@router.post(
    "/{complaint_id}/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_note(
    complaint_id: str,
    payload: NoteCreate,
    user_id: str = Depends(deps.get_current_user_id),
    service: ComplaintNoteService = Depends(deps.get_note_service),
) -> NoteResponse:
    result = service.add_note(complaint_id, user_id, payload.body)
    return NoteResponse.model_validate(result.unwrap())
