"""
Application Rating Models

Star ratings given by HR reviewers. Each reviewer holds at most one rating
per application and edits it in place.
"""

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    String,
    Integer,
    ForeignKey,
    DateTime,
    func,
    Text,
    CheckConstraint,
    UniqueConstraint,
)
from database.engine import Base
from database.models.base import generate_id
from core.utils.datetime import now
from datetime import datetime

MIN_RATING = 1
MAX_RATING = 5


# ==================== ApplicationRating Model ===================== #
class ApplicationRating(Base):
    """
    One reviewer's assessment of an application on a 1-5 scale.
    """

    __tablename__ = "application_ratings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    application_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rated_by: Mapped[str] = mapped_column(String(64), nullable=False)

    overall_rating: Mapped[int] = mapped_column(Integer, nullable=False)
    technical_skills: Mapped[int | None] = mapped_column(Integer)
    communication: Mapped[int | None] = mapped_column(Integer)
    experience: Mapped[int | None] = mapped_column(Integer)
    cultural_fit: Mapped[int | None] = mapped_column(Integer)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=now, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=now, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("application_id", "rated_by", name="uq_application_rating"),
        CheckConstraint(
            f"overall_rating BETWEEN {MIN_RATING} AND {MAX_RATING}",
            name="ck_rating_overall_range",
        ),
    )
