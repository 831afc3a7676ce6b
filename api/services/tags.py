"""
Candidate tag service.

Tags are global labels; ``ApplicationTag`` rows attach them to applications.
At most one row exists per (application, tag) pair.
"""

from typing import List, Optional, Tuple
import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.services.pipeline import get_application_or_404
from core.exceptions import ConflictError, NotFoundError, ValidationError
from database.models.tags import ApplicationTag, CandidateTag

logger = logging.getLogger(__name__)

TAG_COLOR_PALETTE: Tuple[str, ...] = (
    "#ef4444", "#f97316", "#f59e0b", "#eab308", "#84cc16",
    "#22c55e", "#10b981", "#14b8a6", "#06b6d4", "#0ea5e9",
    "#3b82f6", "#6366f1", "#8b5cf6", "#a855f7", "#d946ef",
    "#ec4899", "#f43f5e", "#64748b", "#6b7280", "#374151",
)

DEFAULT_TAG_COLOR = "#3b82f6"


def normalize_tag_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Tag name is required", details={"field": "name"})
    return cleaned


def normalize_tag_color(color: Optional[str]) -> str:
    """
    Lowercase a colour and check it against the palette.

    Colours outside the palette are rejected rather than replaced.
    """
    if color is None or not color.strip():
        return DEFAULT_TAG_COLOR
    cleaned = color.strip().lower()
    if cleaned not in TAG_COLOR_PALETTE:
        raise ValidationError(
            f"Color {color} is not in the tag palette",
            details={"color": color, "allowed": list(TAG_COLOR_PALETTE)},
        )
    return cleaned


async def get_tag_or_404(db: AsyncSession, tag_id: str) -> CandidateTag:
    tag = await db.get(CandidateTag, tag_id)
    if tag is None:
        raise NotFoundError(f"Tag {tag_id} not found", details={"tag_id": tag_id})
    return tag


async def _ensure_unique_name(
    db: AsyncSession, name: str, exclude_id: Optional[str] = None
) -> None:
    query = select(CandidateTag).where(func.lower(CandidateTag.name) == name.lower())
    if exclude_id is not None:
        query = query.where(CandidateTag.id != exclude_id)
    existing = (await db.execute(query)).scalars().first()
    if existing is not None:
        raise ConflictError(
            f"A tag named '{existing.name}' already exists",
            details={"tag_id": existing.id},
        )


async def create_tag(
    db: AsyncSession,
    name: str,
    color: Optional[str] = None,
    description: Optional[str] = None,
    created_by: Optional[str] = None,
) -> CandidateTag:
    """
    Create a tag.

    Raises:
        ValidationError: Empty name or colour outside the palette
        ConflictError: Name already used (case-insensitive)
    """
    name = normalize_tag_name(name)
    color = normalize_tag_color(color)
    await _ensure_unique_name(db, name)

    tag = CandidateTag(
        name=name,
        color=color,
        description=description,
        created_by=created_by,
    )
    db.add(tag)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError(f"A tag named '{name}' already exists") from exc

    logger.info(f"Created tag {tag.id} ({tag.name})")
    return tag


async def update_tag(
    db: AsyncSession,
    tag_id: str,
    name: Optional[str] = None,
    color: Optional[str] = None,
    description: Optional[str] = None,
) -> CandidateTag:
    """Update the given fields of a tag. Same rules as creation."""
    tag = await get_tag_or_404(db, tag_id)

    if name is not None:
        name = normalize_tag_name(name)
        await _ensure_unique_name(db, name, exclude_id=tag.id)
        tag.name = name
    if color is not None:
        tag.color = normalize_tag_color(color)
    if description is not None:
        tag.description = description

    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError(f"A tag named '{name}' already exists") from exc
    return tag


async def list_tags(db: AsyncSession) -> List[CandidateTag]:
    """All tags ordered by name."""
    result = await db.execute(select(CandidateTag).order_by(CandidateTag.name))
    return list(result.scalars().all())


async def delete_tag(db: AsyncSession, tag_id: str) -> int:
    """
    Delete a tag and every attachment of it.

    Returns:
        Number of applications the tag was removed from

    Raises:
        NotFoundError: Unknown tag, including a repeated delete
    """
    tag = await get_tag_or_404(db, tag_id)

    result = await db.execute(delete(ApplicationTag).where(ApplicationTag.tag_id == tag.id))
    await db.delete(tag)
    await db.commit()

    detached = result.rowcount or 0
    logger.info(f"Deleted tag {tag_id}; detached from {detached} applications")
    return detached


async def attach_tag(
    db: AsyncSession,
    application_id: str,
    tag_id: str,
    added_by: Optional[str] = None,
) -> Tuple[CandidateTag, ApplicationTag]:
    """
    Attach a tag to an application.

    Raises:
        NotFoundError: Unknown application or tag
        ConflictError: The pair is already attached
    """
    await get_application_or_404(db, application_id)
    tag = await get_tag_or_404(db, tag_id)

    existing = await db.execute(
        select(ApplicationTag).where(
            ApplicationTag.application_id == application_id,
            ApplicationTag.tag_id == tag_id,
        )
    )
    if existing.scalars().first() is not None:
        raise ConflictError(
            "Tag is already attached to this application",
            details={"application_id": application_id, "tag_id": tag_id},
        )

    link = ApplicationTag(application_id=application_id, tag_id=tag_id, added_by=added_by)
    db.add(link)
    try:
        await db.commit()
    except IntegrityError as exc:
        # Another request attached the same pair first
        await db.rollback()
        raise ConflictError(
            "Tag is already attached to this application",
            details={"application_id": application_id, "tag_id": tag_id},
        ) from exc

    return tag, link


async def detach_tag(db: AsyncSession, application_id: str, tag_id: str) -> bool:
    """
    Remove a tag from an application.

    Returns:
        Whether a row was removed. A missing pair is not an error.
    """
    result = await db.execute(
        delete(ApplicationTag).where(
            ApplicationTag.application_id == application_id,
            ApplicationTag.tag_id == tag_id,
        )
    )
    await db.commit()
    return bool(result.rowcount)


async def get_application_tags(
    db: AsyncSession, application_id: str
) -> List[Tuple[CandidateTag, ApplicationTag]]:
    """Tags attached to an application, oldest attachment first."""
    await get_application_or_404(db, application_id)
    result = await db.execute(
        select(CandidateTag, ApplicationTag)
        .join(ApplicationTag, ApplicationTag.tag_id == CandidateTag.id)
        .where(ApplicationTag.application_id == application_id)
        .order_by(ApplicationTag.added_at, CandidateTag.name)
    )
    return [(tag, link) for tag, link in result.all()]
