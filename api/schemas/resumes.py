"""Resume upload and parsing API schemas."""

from typing import Any
from pydantic import BaseModel

from agents.resume.agent import ParsedResume


class ResumeUploadResponse(BaseModel):
    resume_url: str
    filename: str
    size: int


class ResumeCompleteness(BaseModel):
    is_valid: bool
    missing_fields: list[str]
    completeness: int


class ResumeParseResponse(BaseModel):
    """Structured extraction plus the intake fields it can pre-fill."""

    parsed: ParsedResume
    form_data: dict[str, Any]
    experience_years: int
    validation: ResumeCompleteness
