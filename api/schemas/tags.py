"""Candidate tag API schemas."""

from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from api.schemas.common import UTCDateTime


class TagCreate(BaseModel):
    """Schema for creating a tag. Name and colour rules are enforced by the service."""

    name: str = Field(..., max_length=100)
    color: Optional[str] = Field(None, description="One of the palette swatches, e.g. #3b82f6")
    description: Optional[str] = Field(None, max_length=1000)


class TagUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    color: Optional[str] = None
    description: Optional[str] = Field(None, max_length=1000)


class TagResponse(BaseModel):
    """Schema for tag response."""

    id: str
    name: str
    color: str
    description: Optional[str] = None
    created_by: Optional[str] = None
    created_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class ApplicationTagResponse(TagResponse):
    """A tag as attached to one application."""

    added_by: Optional[str] = None
    added_at: UTCDateTime


class AttachTagRequest(BaseModel):
    tag_id: str = Field(validation_alias=AliasChoices("tag_id", "tagId"))


class TagPaletteResponse(BaseModel):
    colors: list[str]
    default: str
