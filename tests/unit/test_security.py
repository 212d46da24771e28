"""
Unit Tests for the JWT identity provider
"""
from datetime import timedelta

import jwt

from maintenance_portal.core.security import JWTIdentityProvider

SECRET = "unit-test-secret"


class TestJWTIdentityProvider:

    def test_issued_token_resolves_to_user(self):
        identity = JWTIdentityProvider(secret_key=SECRET)
        token = identity.issue_token("2")

        assert identity.current_user(token) == "2"

    def test_expired_token_is_rejected(self):
        identity = JWTIdentityProvider(secret_key=SECRET)
        token = identity.issue_token("2", expires_delta=timedelta(seconds=-1))

        assert identity.current_user(token) is None

    def test_foreign_signature_is_rejected(self):
        token = JWTIdentityProvider(secret_key="someone-else").issue_token("2")

        assert JWTIdentityProvider(secret_key=SECRET).current_user(token) is None

    def test_garbage_and_missing_tokens(self):
        identity = JWTIdentityProvider(secret_key=SECRET)

        assert identity.current_user("not-a-jwt") is None
        assert identity.current_user(None) is None

    def test_role_claim_is_ignored(self):
        token = jwt.encode({"sub": "2", "role": "admin"}, SECRET, algorithm="HS256")

        assert JWTIdentityProvider(secret_key=SECRET).current_user(token) == "2"


class TestSignIn:

    def test_known_credential(self):
        identity = JWTIdentityProvider(secret_key=SECRET, resolve_credential={"jdoe": "2"}.get)

        result = identity.sign_in("jdoe")

        assert result.is_success
        assert identity.current_user(result.access_token) == "2"

    def test_unknown_credential(self):
        identity = JWTIdentityProvider(secret_key=SECRET, resolve_credential={}.get)

        result = identity.sign_in("nobody")

        assert not result.is_success
        assert result.error == "Invalid credentials"

    def test_blank_credential(self):
        assert JWTIdentityProvider(secret_key=SECRET).sign_in("  ").error == "Credential is required"
