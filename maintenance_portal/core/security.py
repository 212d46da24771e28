"""
Identity provider backed by signed JWT bearer tokens.

The portal only needs a stable user id from authentication. Tokens carry
the id in ``sub``; any other claim (a role, for instance) is ignored, since
roles always come from the Profile Store.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from maintenance_portal.config.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class SignInResult:
    """Outcome of a sign-in attempt."""
    user_id: Optional[str] = None
    access_token: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.user_id is not None and self.error is None


class JWTIdentityProvider:
    """
    Issues and verifies access tokens.

    ``resolve_credential`` maps whatever the client presents at sign-in
    (a username in development) to a user id, or None when unknown.
    Password checks belong to an upstream identity service and are not
    performed here.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_minutes: Optional[int] = None,
        resolve_credential: Optional[Callable[[str], Optional[str]]] = None,
    ):
        self.secret_key = secret_key or settings.JWT_SECRET_KEY
        self.algorithm = algorithm or settings.JWT_ALGORITHM
        self.expire_minutes = expire_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self.resolve_credential = resolve_credential

    def issue_token(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create an access token for a user id.
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.expire_minutes))
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": expire,
            "jti": secrets.token_hex(16),
        }
        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Access token issued for user {user_id}")
        return token

    def current_user(self, token: Optional[str]) -> Optional[str]:
        """
        Return the user id a token was issued for, or None when the token
        is missing, expired or invalid.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired access token")
            return None
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected invalid access token: {e}")
            return None

        subject = payload.get("sub")
        return str(subject) if subject else None

    def sign_in(self, credential: str) -> SignInResult:
        """
        Exchange a credential for a user id and access token.
        """
        if not credential or not credential.strip():
            return SignInResult(error="Credential is required")
        if self.resolve_credential is None:
            return SignInResult(error="Sign-in is not configured")

        user_id = self.resolve_credential(credential.strip())
        if not user_id:
            logger.info("Sign-in failed for unknown credential")
            return SignInResult(error="Invalid credentials")

        return SignInResult(user_id=user_id, access_token=self.issue_token(user_id))


__all__ = ["JWTIdentityProvider", "SignInResult"]
