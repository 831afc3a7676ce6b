"""
Tests for core security utilities.

Tests:
- JWT token creation and validation
- Token expiration
- Role handling for HR actors
"""

import pytest
from datetime import datetime, timedelta, timezone
import jwt as pyjwt

from core.config import settings
from core.security import (
    HR_ROLES,
    JWTPayload,
    create_access_token,
    verify_jwt_token,
)


class TestAccessTokens:
    """Token issuing and verification."""

    def test_round_trip_claims(self):
        token = create_access_token(subject="hr-42", role="recruiter", email="r@example.com")
        payload = verify_jwt_token(token)

        assert isinstance(payload, JWTPayload)
        assert payload.sub == "hr-42"
        assert payload.role == "recruiter"
        assert payload.email == "r@example.com"
        assert payload.type == "access"
        assert payload.exp > payload.iat

    def test_unique_jti(self):
        first = verify_jwt_token(create_access_token("a", "hr"))
        second = verify_jwt_token(create_access_token("a", "hr"))
        assert first.jti != second.jti

    def test_custom_expiry(self):
        token = create_access_token("a", "hr", expires_delta=timedelta(minutes=5))
        payload = verify_jwt_token(token)
        assert payload.exp - payload.iat == 300

    def test_expired_token(self):
        token = create_access_token("a", "hr", expires_delta=timedelta(seconds=-10))
        with pytest.raises(pyjwt.ExpiredSignatureError):
            verify_jwt_token(token)

    def test_wrong_secret(self):
        token = create_access_token("a", "hr", secret_key="another-secret-that-is-long-enough!!")
        with pytest.raises(pyjwt.InvalidTokenError):
            verify_jwt_token(token)

    def test_garbage_token(self):
        with pytest.raises(pyjwt.InvalidTokenError):
            verify_jwt_token("not.a.jwt")

    def test_refresh_token_type_rejected(self):
        now = datetime.now(timezone.utc)
        token = pyjwt.encode(
            {
                "sub": "a",
                "role": "hr",
                "jti": "x",
                "type": "refresh",
                "iat": int(now.timestamp()),
                "exp": int((now + timedelta(minutes=5)).timestamp()),
            },
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(pyjwt.InvalidTokenError):
            verify_jwt_token(token)

    def test_missing_role_rejected(self):
        now = datetime.now(timezone.utc)
        token = pyjwt.encode(
            {
                "sub": "a",
                "jti": "x",
                "iat": int(now.timestamp()),
                "exp": int((now + timedelta(minutes=5)).timestamp()),
            },
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(pyjwt.InvalidTokenError):
            verify_jwt_token(token)


@pytest.mark.parametrize("role,expected", [
    ("admin", True),
    ("hr", True),
    ("recruiter", True),
    ("candidate", False),
    ("viewer", False),
])
def test_is_hr(role, expected):
    payload = verify_jwt_token(create_access_token("a", role))
    assert payload.is_hr is expected
    assert (role in HR_ROLES) is expected
