"""Application, status pipeline and board API schemas."""

from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

from api.schemas.common import UTCDateTime
from core.pipeline import ApplicationStatus
from core.utils.validators import validate_phone


class ApplicationCreate(BaseModel):
    """Public application intake payload."""

    job_id: Optional[str] = Field(
        None, description="Job id, or 'general' / null for the general pool"
    )
    candidate_name: str = Field(..., min_length=1, max_length=255)
    candidate_email: EmailStr
    candidate_phone: Optional[str] = Field(None, max_length=32)
    location: Optional[str] = Field(None, max_length=255)
    current_company: Optional[str] = Field(None, max_length=255)
    current_role: Optional[str] = Field(None, max_length=255)
    years_of_experience: Optional[str] = Field(None, max_length=50)
    linkedin_profile: Optional[str] = Field(None, max_length=500)
    git_profile: Optional[str] = Field(None, max_length=500)
    resume_url: Optional[str] = Field(None, max_length=500, description="Storage key from /resumes/upload")
    cover_letter: Optional[str] = Field(None, max_length=10000)
    application_data: dict[str, Any] = Field(default_factory=dict)
    parsed_resume_data: Optional[dict[str, Any]] = None

    @field_validator("candidate_name", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from the name."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("candidate_phone", mode="before")
    @classmethod
    def check_phone(cls, v: Optional[str]) -> Optional[str]:
        """Validate phone number format."""
        if v is None:
            return None
        phone = v.strip()
        if not phone:
            return None
        is_valid, error = validate_phone(phone)
        if not is_valid:
            raise ValueError(error)
        return phone


class DuplicateCheckRequest(BaseModel):
    job_id: Optional[str] = None
    candidate_email: EmailStr
    candidate_phone: Optional[str] = None


class DuplicateCheckResponse(BaseModel):
    is_duplicate: bool
    application_id: Optional[str] = None


class ApplicationResponse(BaseModel):
    """Schema for application response."""

    id: str
    job_id: Optional[str] = None
    candidate_name: str
    candidate_email: str
    candidate_phone: Optional[str] = None
    location: Optional[str] = None
    current_company: Optional[str] = None
    current_role: Optional[str] = None
    years_of_experience: Optional[str] = None
    linkedin_profile: Optional[str] = None
    git_profile: Optional[str] = None
    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None
    application_data: Optional[dict[str, Any]] = None
    parsed_resume_data: Optional[dict[str, Any]] = None
    status: ApplicationStatus
    ai_score: Optional[int] = None
    ai_analysis: Optional[dict[str, Any]] = None
    applied_at: UTCDateTime
    updated_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class StatusUpdateRequest(BaseModel):
    """Target stage for a transition. Validated by the pipeline, not here."""

    status: str
    notes: Optional[str] = Field(None, max_length=2000)


class StatusHistoryResponse(BaseModel):
    id: str
    application_id: str
    previous_status: Optional[ApplicationStatus] = None
    new_status: ApplicationStatus
    notes: Optional[str] = None
    changed_by: Optional[str] = None
    changed_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class BoardLaneResponse(BaseModel):
    status: ApplicationStatus
    title: str
    count: int
    applications: list[ApplicationResponse]


class BoardResponse(BaseModel):
    """Kanban projection: always six lanes in pipeline order."""

    job_id: Optional[str] = None
    lanes: list[BoardLaneResponse]
    total: int


class BoardMoveRequest(BaseModel):
    """A card dropped on a lane."""

    application_id: str = Field(validation_alias=AliasChoices("application_id", "applicationId"))
    status: str
    notes: Optional[str] = Field(None, max_length=2000)
