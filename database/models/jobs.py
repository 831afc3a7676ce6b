"""
Job Models

Job postings that applications are submitted against. Each job carries the
declarative configuration of its application form.
"""

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    String,
    DateTime,
    func,
    Text,
    JSON,
    Enum as SQLEnum,
    Index,
)
from database.engine import Base
from database.models.base import generate_id
from core.utils.datetime import now
from datetime import datetime
from enum import Enum as PyEnum
from typing import Any


# ==================== Job Enums ===================== #
class JobStatus(str, PyEnum):
    """Publication status of a job."""

    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    CLOSED = "closed"


class EmploymentType(str, PyEnum):
    """Type of employment offered."""

    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERN = "intern"


class ExperienceLevel(str, PyEnum):
    """Seniority expected for the role."""

    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    EXECUTIVE = "executive"


# ==================== Job Model ===================== #
class Job(Base):
    """
    A job posting.
    """

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    requirements: Mapped[str | None] = mapped_column(Text)
    responsibilities: Mapped[str | None] = mapped_column(Text)
    department: Mapped[str | None] = mapped_column(String(100))
    location: Mapped[str | None] = mapped_column(String(255))

    employment_type: Mapped[EmploymentType] = mapped_column(
        SQLEnum(EmploymentType, native_enum=False, length=50,
                values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=EmploymentType.FULL_TIME,
    )
    experience_level: Mapped[ExperienceLevel] = mapped_column(
        SQLEnum(ExperienceLevel, native_enum=False, length=50,
                values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ExperienceLevel.MID,
    )
    skills: Mapped[list[str] | None] = mapped_column(JSON)
    status: Mapped[JobStatus] = mapped_column(
        SQLEnum(JobStatus, native_enum=False, length=50,
                values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=JobStatus.ACTIVE,
    )

    # List of form field definitions, see core.forms.FormField
    application_form_config: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON)

    created_by: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=now, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=now, server_default=func.now()
    )

    __table_args__ = (
        Index("idx_job_status_created", "status", "created_at"),
    )
