"""
Candidate Tag Models

Named, coloured labels and their many-to-many association with applications.
"""

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    String,
    ForeignKey,
    DateTime,
    func,
    Text,
    UniqueConstraint,
)
from database.engine import Base
from database.models.base import generate_id
from core.utils.datetime import now
from datetime import datetime


# ==================== CandidateTag Model ===================== #
class CandidateTag(Base):
    """
    A label HR can attach to applications for filtering and organisation.
    """

    __tablename__ = "candidate_tags"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    color: Mapped[str] = mapped_column(String(7), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    created_by: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=now, server_default=func.now()
    )


# ==================== ApplicationTag Model ===================== #
class ApplicationTag(Base):
    """
    Join row between an application and a tag. At most one per pair.
    """

    __tablename__ = "application_tags"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    application_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tag_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("candidate_tags.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    added_by: Mapped[str | None] = mapped_column(String(64))
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=now, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("application_id", "tag_id", name="uq_application_tag"),
    )
