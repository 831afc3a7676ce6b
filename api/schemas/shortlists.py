"""Candidate shortlist API schemas."""

from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from api.schemas.common import TimestampMixin, UTCDateTime
from api.schemas.applications import ApplicationResponse


class ShortlistCreate(BaseModel):
    name: str = Field(..., max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    job_id: Optional[str] = None
    is_default: bool = False


class ShortlistUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    is_default: Optional[bool] = None


class ShortlistResponse(TimestampMixin):
    """Schema for shortlist response."""

    id: str
    name: str
    description: Optional[str] = None
    job_id: Optional[str] = None
    is_default: bool
    created_by: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ShortlistItemCreate(BaseModel):
    application_id: str = Field(validation_alias=AliasChoices("application_id", "applicationId"))
    notes: Optional[str] = Field(None, max_length=2000)


class ShortlistItemResponse(BaseModel):
    id: str
    shortlist_id: str
    application_id: str
    notes: Optional[str] = None
    added_by: Optional[str] = None
    added_at: UTCDateTime
    application: Optional[ApplicationResponse] = None

    model_config = ConfigDict(from_attributes=True)
