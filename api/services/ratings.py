"""
Application rating service.

A reviewer rates an application once; rating it again edits the existing
rating instead of adding another.
"""

from typing import List, Optional, Tuple
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.services.pipeline import get_application_or_404
from core.exceptions import ConflictError, NotFoundError
from core.utils.datetime import strictly_after
from database.models.ratings import ApplicationRating

logger = logging.getLogger(__name__)

RATING_CRITERIA = ("technical_skills", "communication", "experience", "cultural_fit")


async def get_rating(
    db: AsyncSession, application_id: str, rated_by: str
) -> Optional[ApplicationRating]:
    """A reviewer's rating of an application, if any."""
    result = await db.execute(
        select(ApplicationRating).where(
            ApplicationRating.application_id == application_id,
            ApplicationRating.rated_by == rated_by,
        )
    )
    return result.scalars().first()


async def rate_application(
    db: AsyncSession,
    application_id: str,
    rated_by: str,
    overall_rating: int,
    notes: Optional[str] = None,
    **criteria: Optional[int],
) -> Tuple[ApplicationRating, bool]:
    """
    Create or replace a reviewer's rating.

    Criteria not given are cleared, so a re-rating fully replaces the old
    one.

    Returns:
        The rating and whether it was newly created

    Raises:
        NotFoundError: Unknown application
        ConflictError: A concurrent request created the same rating first
    """
    await get_application_or_404(db, application_id)

    rating = await get_rating(db, application_id, rated_by)
    created = rating is None
    if created:
        rating = ApplicationRating(application_id=application_id, rated_by=rated_by)
        db.add(rating)
    else:
        rating.updated_at = strictly_after(rating.updated_at)

    rating.overall_rating = overall_rating
    rating.notes = notes
    for name in RATING_CRITERIA:
        setattr(rating, name, criteria.get(name))

    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError(
            "Rating was changed by another request, retry",
            details={"application_id": application_id},
        ) from exc

    logger.info(
        f"{'Created' if created else 'Updated'} rating {rating.id} on application"
        f" {application_id} by {rated_by}"
    )
    return rating, created


async def get_application_ratings(
    db: AsyncSession, application_id: str
) -> List[ApplicationRating]:
    """Ratings of an application, oldest first."""
    await get_application_or_404(db, application_id)
    result = await db.execute(
        select(ApplicationRating)
        .where(ApplicationRating.application_id == application_id)
        .order_by(ApplicationRating.created_at, ApplicationRating.rated_by)
    )
    return list(result.scalars().all())


async def delete_rating(db: AsyncSession, rating_id: str) -> None:
    """
    Delete a rating.

    Raises:
        NotFoundError: Unknown rating, including a repeated delete
    """
    rating = await db.get(ApplicationRating, rating_id)
    if rating is None:
        raise NotFoundError(f"Rating {rating_id} not found", details={"rating_id": rating_id})
    await db.delete(rating)
    await db.commit()
