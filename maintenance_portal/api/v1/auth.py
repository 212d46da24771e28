"""
Development sign-in.

Exchanges a profile username for a bearer token. Disabled when
ENVIRONMENT is production; there a real identity provider issues tokens
and the portal only relies on their ``sub`` claim.
"""

from fastapi import APIRouter, Depends

from maintenance_portal.api import deps
from maintenance_portal.config.settings import settings
from maintenance_portal.core.exceptions import AuthenticationError
from maintenance_portal.core.logging import get_logger
from maintenance_portal.core.security import JWTIdentityProvider
from maintenance_portal.schemas.user import SignInRequest, TokenResponse
from maintenance_portal.services.users import ProfileService

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/sign-in", response_model=TokenResponse)
def sign_in(
    payload: SignInRequest,
    identity: JWTIdentityProvider = Depends(deps.get_identity_provider),
    profiles: ProfileService = Depends(deps.get_profile_service),
) -> TokenResponse:
    if settings.is_production():
        logger.warning("Development sign-in attempted in production")
        raise AuthenticationError("Sign-in is handled by the identity provider")

    identity.resolve_credential = profiles.resolve_credential
    result = identity.sign_in(payload.credential)
    if not result.is_success:
        raise AuthenticationError(result.error or "Sign-in failed")

    logger.info("User signed in", extra={"user_id": result.user_id})
    return TokenResponse(access_token=result.access_token, user_id=result.user_id)
