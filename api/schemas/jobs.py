"""Job posting API schemas."""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.schemas.common import TimestampMixin
from core.forms import FormField, check_form_fields
from database.models.jobs import EmploymentType, ExperienceLevel, JobStatus


class JobBase(BaseModel):
    description: str = Field(..., min_length=1)
    requirements: Optional[str] = None
    responsibilities: Optional[str] = None
    department: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=255)
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    experience_level: ExperienceLevel = ExperienceLevel.MID
    skills: list[str] = Field(default_factory=list)
    status: JobStatus = JobStatus.ACTIVE
    application_form_config: list[FormField] = Field(default_factory=list)

    @field_validator("application_form_config")
    @classmethod
    def usable_form(cls, v: list[FormField]) -> list[FormField]:
        return check_form_fields(v)


class JobCreate(JobBase):
    """Schema for creating a job posting."""

    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)

    @field_validator("title", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v


class JobUpdate(BaseModel):
    """Partial update; omitted fields are left alone."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    requirements: Optional[str] = None
    responsibilities: Optional[str] = None
    department: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=255)
    employment_type: Optional[EmploymentType] = None
    experience_level: Optional[ExperienceLevel] = None
    skills: Optional[list[str]] = None
    status: Optional[JobStatus] = None
    application_form_config: Optional[list[FormField]] = None

    @field_validator("application_form_config")
    @classmethod
    def usable_form(cls, v: Optional[list[FormField]]) -> Optional[list[FormField]]:
        if v is None:
            return v
        return check_form_fields(v)


class JobResponse(TimestampMixin):
    """Schema for job response."""

    id: str
    title: str
    slug: str
    description: str
    requirements: Optional[str] = None
    responsibilities: Optional[str] = None
    department: Optional[str] = None
    location: Optional[str] = None
    employment_type: EmploymentType
    experience_level: ExperienceLevel
    skills: Optional[list[str]] = None
    status: JobStatus
    application_form_config: Optional[list[dict[str, Any]]] = None
    created_by: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
