"""
Candidate Shortlist Models

Named groupings of applications, optionally scoped to a job.
"""

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    String,
    Boolean,
    ForeignKey,
    DateTime,
    func,
    Text,
    Index,
    UniqueConstraint,
)
from database.engine import Base
from database.models.base import generate_id
from core.utils.datetime import now
from datetime import datetime


# ==================== CandidateShortlist Model ===================== #
class CandidateShortlist(Base):
    """
    A named list of candidates, e.g. "Final round - Backend".
    """

    __tablename__ = "candidate_shortlists"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    job_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True
    )
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_by: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=now, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=now, server_default=func.now()
    )

    __table_args__ = (
        Index("idx_shortlist_job", "job_id"),
        Index("idx_shortlist_created_by", "created_by"),
    )


# ==================== ShortlistItem Model ===================== #
class ShortlistItem(Base):
    """
    Membership of an application in a shortlist. At most one per pair.
    """

    __tablename__ = "shortlist_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    shortlist_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("candidate_shortlists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    application_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    notes: Mapped[str | None] = mapped_column(Text)
    added_by: Mapped[str | None] = mapped_column(String(64))
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=now, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("shortlist_id", "application_id", name="uq_shortlist_item"),
    )
