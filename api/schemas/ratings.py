"""Application rating API schemas."""

from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from api.schemas.common import TimestampMixin
from database.models.ratings import MAX_RATING, MIN_RATING


def _score(*names: str):
    return Field(
        None,
        ge=MIN_RATING,
        le=MAX_RATING,
        validation_alias=AliasChoices(*names),
    )


class RatingUpsert(BaseModel):
    """A reviewer's rating. Criteria left at 0 count as not rated."""

    overall_rating: int = Field(
        ...,
        ge=MIN_RATING,
        le=MAX_RATING,
        validation_alias=AliasChoices("overall_rating", "overallRating"),
    )
    technical_skills: Optional[int] = _score("technical_skills", "technicalSkills")
    communication: Optional[int] = _score("communication")
    experience: Optional[int] = _score("experience")
    cultural_fit: Optional[int] = _score("cultural_fit", "culturalFit")
    notes: Optional[str] = Field(None, max_length=5000)

    @field_validator(
        "technical_skills", "communication", "experience", "cultural_fit", mode="before"
    )
    @classmethod
    def zero_is_unset(cls, v):
        return None if v == 0 else v

    def criteria(self) -> dict[str, Optional[int]]:
        return self.model_dump(include={
            "technical_skills", "communication", "experience", "cultural_fit",
        })


class RatingResponse(TimestampMixin):
    """Schema for rating response."""

    id: str
    application_id: str
    rated_by: str
    overall_rating: int
    technical_skills: Optional[int] = None
    communication: Optional[int] = None
    experience: Optional[int] = None
    cultural_fit: Optional[int] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
