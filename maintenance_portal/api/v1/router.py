"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the maintenance portal
"""
from fastapi import APIRouter

from maintenance_portal.api.v1 import auth, complaints, profiles, uploads
from maintenance_portal.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        422: {"description": "Validation Error"},
        502: {"description": "Upstream Service Error"},
    }
)

router.include_router(auth.router)
router.include_router(profiles.router)
router.include_router(complaints.router)
router.include_router(uploads.router)

logger.debug("API v1 routers registered", extra={"routers": ["auth", "profiles", "complaints", "uploads"]})

__all__ = ["router"]
