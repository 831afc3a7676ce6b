"""
Domain error taxonomy.

Services raise these; the error handling layer turns them into HTTP
responses with a stable error code.
"""

from typing import Any, Optional


class HireflowError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500
    code: str = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(HireflowError):
    """Malformed input: bad status value, empty tag name, invalid email."""

    status_code = 400
    code = "VALIDATION_ERROR"


class InvalidTransitionError(ValidationError):
    """Status move out of a terminal pipeline stage."""

    code = "INVALID_TRANSITION"


class NotFoundError(HireflowError):
    """Unknown application, tag, shortlist or job id."""

    status_code = 404
    code = "NOT_FOUND"


class ConflictError(HireflowError):
    """Duplicate tag attachment, duplicate application and similar."""

    status_code = 409
    code = "CONFLICT"


class UpstreamError(HireflowError):
    """External analysis call failed or returned unparseable content."""

    status_code = 502
    code = "UPSTREAM_ERROR"
