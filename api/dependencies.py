"""FastAPI dependencies for dependency injection."""

from functools import lru_cache
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt

from agents.resume.agent import ResumeAgent
from api.services.notifications import CeleryNotifier, Notifier
from core.config import settings
from core.security import JWTPayload, verify_jwt_token
from core.storage.local import LocalStorage


security = HTTPBearer(auto_error=False)


async def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> JWTPayload:
    """Decode the bearer token into the acting user's claims."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return verify_jwt_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def require_hr_actor(
    actor: JWTPayload = Depends(get_current_actor),
) -> JWTPayload:
    """Require an admin, HR or recruiter role."""
    if not actor.is_hr:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="HR access required",
        )
    return actor


@lru_cache
def get_notifier() -> Notifier:
    return CeleryNotifier()


@lru_cache
def get_resume_agent() -> ResumeAgent:
    return ResumeAgent()


@lru_cache
def get_storage() -> LocalStorage:
    return LocalStorage(settings.storage_path)
