"""
Candidate shortlist service.

Named groupings of applications; membership is unique per
(shortlist, application) pair.
"""

from typing import List, Optional, Tuple
import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.services.applications import normalize_job_id, resolve_job
from api.services.pipeline import get_application_or_404
from core.exceptions import ConflictError, NotFoundError, ValidationError
from core.utils.datetime import strictly_after
from database.models.applications import Application
from database.models.shortlists import CandidateShortlist, ShortlistItem

logger = logging.getLogger(__name__)


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Shortlist name is required", details={"field": "name"})
    return cleaned


async def get_shortlist(db: AsyncSession, shortlist_id: str) -> CandidateShortlist:
    """Get a shortlist or raise NotFoundError."""
    shortlist = await db.get(CandidateShortlist, shortlist_id)
    if shortlist is None:
        raise NotFoundError(
            f"Shortlist {shortlist_id} not found",
            details={"shortlist_id": shortlist_id},
        )
    return shortlist


async def create_shortlist(
    db: AsyncSession,
    name: str,
    description: Optional[str] = None,
    job_id: Optional[str] = None,
    is_default: bool = False,
    created_by: Optional[str] = None,
) -> CandidateShortlist:
    """
    Create a shortlist, optionally scoped to a job.

    Raises:
        ValidationError: Empty name
        NotFoundError: Unknown job
    """
    name = _clean_name(name)
    job = await resolve_job(db, job_id)

    shortlist = CandidateShortlist(
        name=name,
        description=description,
        job_id=job.id if job else None,
        is_default=is_default,
        created_by=created_by,
    )
    db.add(shortlist)
    await db.commit()

    logger.info(f"Created shortlist {shortlist.id} ({shortlist.name})")
    return shortlist


async def update_shortlist(
    db: AsyncSession,
    shortlist_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    is_default: Optional[bool] = None,
) -> CandidateShortlist:
    shortlist = await get_shortlist(db, shortlist_id)
    if name is not None:
        shortlist.name = _clean_name(name)
    if description is not None:
        shortlist.description = description
    if is_default is not None:
        shortlist.is_default = is_default
    shortlist.updated_at = strictly_after(shortlist.updated_at)
    await db.commit()
    return shortlist


async def list_shortlists(
    db: AsyncSession,
    job_id: Optional[str] = None,
    created_by: Optional[str] = None,
) -> List[CandidateShortlist]:
    """
    Shortlists ordered by name, optionally filtered.

    ``job_id="general"`` selects the shortlists not tied to any job.
    """
    query = select(CandidateShortlist)
    if job_id is not None:
        job_id = normalize_job_id(job_id)
        if job_id is None:
            query = query.where(CandidateShortlist.job_id.is_(None))
        else:
            query = query.where(CandidateShortlist.job_id == job_id)
    if created_by is not None:
        query = query.where(CandidateShortlist.created_by == created_by)
    result = await db.execute(query.order_by(CandidateShortlist.name))
    return list(result.scalars().all())


async def delete_shortlist(db: AsyncSession, shortlist_id: str) -> None:
    """Delete a shortlist and its memberships."""
    shortlist = await get_shortlist(db, shortlist_id)
    await db.execute(delete(ShortlistItem).where(ShortlistItem.shortlist_id == shortlist.id))
    await db.delete(shortlist)
    await db.commit()
    logger.info(f"Deleted shortlist {shortlist_id}")


async def add_to_shortlist(
    db: AsyncSession,
    shortlist_id: str,
    application_id: str,
    notes: Optional[str] = None,
    added_by: Optional[str] = None,
) -> ShortlistItem:
    """
    Add an application to a shortlist.

    Raises:
        NotFoundError: Unknown shortlist or application
        ConflictError: Application already on the shortlist
    """
    await get_shortlist(db, shortlist_id)
    await get_application_or_404(db, application_id)

    existing = await db.execute(
        select(ShortlistItem).where(
            ShortlistItem.shortlist_id == shortlist_id,
            ShortlistItem.application_id == application_id,
        )
    )
    if existing.scalars().first() is not None:
        raise ConflictError(
            "Application is already on this shortlist",
            details={"shortlist_id": shortlist_id, "application_id": application_id},
        )

    item = ShortlistItem(
        shortlist_id=shortlist_id,
        application_id=application_id,
        notes=notes,
        added_by=added_by,
    )
    db.add(item)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError("Application is already on this shortlist") from exc
    return item


async def remove_from_shortlist(
    db: AsyncSession, shortlist_id: str, application_id: str
) -> bool:
    """Remove an application from a shortlist. Missing membership is a no-op."""
    result = await db.execute(
        delete(ShortlistItem).where(
            ShortlistItem.shortlist_id == shortlist_id,
            ShortlistItem.application_id == application_id,
        )
    )
    await db.commit()
    return bool(result.rowcount)


async def get_shortlist_items(
    db: AsyncSession, shortlist_id: str
) -> List[Tuple[ShortlistItem, Application]]:
    """Members of a shortlist with their applications, oldest first."""
    await get_shortlist(db, shortlist_id)
    result = await db.execute(
        select(ShortlistItem, Application)
        .join(Application, Application.id == ShortlistItem.application_id)
        .where(ShortlistItem.shortlist_id == shortlist_id)
        .order_by(ShortlistItem.added_at)
    )
    return [(item, application) for item, application in result.all()]


async def get_application_shortlists(
    db: AsyncSession, application_id: str
) -> List[CandidateShortlist]:
    """Shortlists containing an application, ordered by name."""
    await get_application_or_404(db, application_id)
    result = await db.execute(
        select(CandidateShortlist)
        .join(ShortlistItem, ShortlistItem.shortlist_id == CandidateShortlist.id)
        .where(ShortlistItem.application_id == application_id)
        .order_by(CandidateShortlist.name)
    )
    return list(result.scalars().all())
