"""Application rating endpoints."""

import logging
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_hr_actor
from api.schemas.common import ERROR_RESPONSES
from api.schemas.ratings import RatingResponse, RatingUpsert
from api.services import ratings as rating_service
from core.exceptions import NotFoundError
from core.security import JWTPayload
from database.engine import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ratings"], dependencies=[Depends(require_hr_actor)])


@router.get(
    "/applications/{application_id}/ratings",
    response_model=list[RatingResponse],
    summary="Ratings of an application",
    responses=ERROR_RESPONSES,
)
async def get_application_ratings(
    application_id: str, db: AsyncSession = Depends(get_db)
) -> list[RatingResponse]:
    ratings = await rating_service.get_application_ratings(db, application_id)
    return [RatingResponse.model_validate(r) for r in ratings]


@router.post(
    "/applications/{application_id}/ratings",
    response_model=RatingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Rate an application",
    responses={**ERROR_RESPONSES, 200: {"description": "Existing rating replaced"}},
)
async def rate_application(
    application_id: str,
    request: RatingUpsert,
    response: Response,
    db: AsyncSession = Depends(get_db),
    actor: JWTPayload = Depends(require_hr_actor),
) -> RatingResponse:
    """Create the caller's rating, or replace it when one exists (200)."""
    rating, created = await rating_service.rate_application(
        db,
        application_id,
        rated_by=actor.sub,
        overall_rating=request.overall_rating,
        notes=request.notes,
        **request.criteria(),
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return RatingResponse.model_validate(rating)


@router.get(
    "/applications/{application_id}/ratings/mine",
    response_model=RatingResponse,
    summary="The caller's rating of an application",
    responses=ERROR_RESPONSES,
)
async def get_my_rating(
    application_id: str,
    db: AsyncSession = Depends(get_db),
    actor: JWTPayload = Depends(require_hr_actor),
) -> RatingResponse:
    rating = await rating_service.get_rating(db, application_id, actor.sub)
    if rating is None:
        raise NotFoundError(
            "You have not rated this application",
            details={"application_id": application_id},
        )
    return RatingResponse.model_validate(rating)


@router.delete(
    "/ratings/{rating_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete rating",
    responses=ERROR_RESPONSES,
)
async def delete_rating(rating_id: str, db: AsyncSession = Depends(get_db)) -> Response:
    await rating_service.delete_rating(db, rating_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
