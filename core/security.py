"""
Security utilities.

JWT issuing and verification for HR actors. Tokens carry the actor id in
``sub`` and a role claim; there is no user table behind them.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel

from core.config import settings

logger = logging.getLogger("security.auth")

# Roles allowed to manage the hiring pipeline
HR_ROLES = frozenset({"admin", "hr", "recruiter"})


class JWTPayload(BaseModel):
    """Decoded access token claims."""

    sub: str
    role: str
    email: Optional[str] = None
    exp: int
    iat: int
    jti: str
    type: str = "access"

    @property
    def is_hr(self) -> bool:
        return self.role in HR_ROLES


def create_access_token(
    subject: str,
    role: str,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
) -> str:
    """
    Create a signed access token.

    Args:
        subject: Actor id stored in ``sub``
        role: Actor role, e.g. ``hr``
        email: Optional actor email
        expires_delta: Lifetime override
        secret_key: Signing key override (defaults to settings)

    Returns:
        Encoded JWT
    """
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {
        "sub": subject,
        "role": role,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
        "jti": str(uuid.uuid4()),
        "type": "access",
    }
    if email:
        payload["email"] = email

    return jwt.encode(
        payload,
        secret_key or settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def verify_jwt_token(token: str, secret_key: Optional[str] = None) -> JWTPayload:
    """
    Decode and validate an access token.

    Raises:
        jwt.ExpiredSignatureError: Token has expired
        jwt.InvalidTokenError: Token is malformed, badly signed or not an access token
    """
    payload = jwt.decode(
        token,
        secret_key or settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["sub", "exp", "iat"]},
    )
    if payload.get("type", "access") != "access":
        raise jwt.InvalidTokenError("Not an access token")
    if "role" not in payload or "jti" not in payload:
        raise jwt.InvalidTokenError("Token is missing required claims")
    return JWTPayload(**payload)
