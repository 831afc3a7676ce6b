"""
Application Models

Candidate applications tracked through the hiring pipeline, plus the audit
trail of their status changes.
"""

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    String,
    ForeignKey,
    DateTime,
    func,
    Text,
    JSON,
    Integer,
    Enum as SQLEnum,
    Index,
)
from database.engine import Base
from database.models.base import generate_id
from core.pipeline import ApplicationStatus
from core.utils.datetime import now
from datetime import datetime
from typing import Any

# Sentinel used on the API for the general application pool (job_id IS NULL)
GENERAL_APPLICATION_JOB_ID = "general"


def _status_type() -> SQLEnum:
    """Non-native enum column storing the lowercase stage value."""
    return SQLEnum(
        ApplicationStatus,
        native_enum=False,
        length=50,
        values_callable=lambda e: [m.value for m in e],
    )


# ==================== Application Model ===================== #
class Application(Base):
    """
    A candidate's submission against a job posting or the general pool.

    Mutated only through status transitions, AI analysis and tagging;
    never hard-deleted in normal flow.
    """

    __tablename__ = "applications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    job_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("jobs.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Candidate contact
    candidate_name: Mapped[str] = mapped_column(String(255), nullable=False)
    candidate_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    candidate_phone: Mapped[str | None] = mapped_column(String(32))
    location: Mapped[str | None] = mapped_column(String(255))

    # Professional background
    current_company: Mapped[str | None] = mapped_column(String(255))
    current_role: Mapped[str | None] = mapped_column(String(255))
    years_of_experience: Mapped[str | None] = mapped_column(String(50))
    linkedin_profile: Mapped[str | None] = mapped_column(String(500))
    git_profile: Mapped[str | None] = mapped_column(String(500))

    # Documents (references only; bytes live in file storage)
    resume_url: Mapped[str | None] = mapped_column(String(500))
    cover_letter: Mapped[str | None] = mapped_column(Text)

    # Dynamic form answers and resume extraction
    application_data: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    parsed_resume_data: Mapped[dict[str, Any] | None] = mapped_column(JSON)

    # Pipeline
    status: Mapped[ApplicationStatus] = mapped_column(
        _status_type(),
        nullable=False,
        default=ApplicationStatus.APPLIED,
        index=True,
    )

    # AI screening
    ai_score: Mapped[int | None] = mapped_column(Integer)  # 0-100
    ai_analysis: Mapped[dict[str, Any] | None] = mapped_column(JSON)

    applied_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=now, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=now, server_default=func.now()
    )

    __table_args__ = (
        Index("idx_application_job_status", "job_id", "status"),
        Index("idx_application_job_email", "job_id", "candidate_email"),
    )


# ==================== ApplicationStatusHistory Model ===================== #
class ApplicationStatusHistory(Base):
    """
    One recorded status change of an application.
    """

    __tablename__ = "application_status_history"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    application_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    previous_status: Mapped[ApplicationStatus | None] = mapped_column(_status_type())
    new_status: Mapped[ApplicationStatus] = mapped_column(_status_type(), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    changed_by: Mapped[str | None] = mapped_column(String(64))
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=now, server_default=func.now()
    )
