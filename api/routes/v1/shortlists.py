"""Candidate shortlist endpoints."""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_hr_actor
from api.schemas.applications import ApplicationResponse
from api.schemas.common import ERROR_RESPONSES
from api.schemas.shortlists import (
    ShortlistCreate,
    ShortlistItemCreate,
    ShortlistItemResponse,
    ShortlistResponse,
    ShortlistUpdate,
)
from api.services import shortlists as shortlist_service
from core.security import JWTPayload
from database.engine import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["shortlists"], dependencies=[Depends(require_hr_actor)])


def _item_response(item, application=None) -> ShortlistItemResponse:
    response = ShortlistItemResponse.model_validate(item)
    if application is not None:
        response.application = ApplicationResponse.model_validate(application)
    return response


@router.get("/shortlists", response_model=list[ShortlistResponse], summary="List shortlists")
async def list_shortlists(
    job_id: Optional[str] = Query(None),
    mine: bool = Query(False, description="Only shortlists created by the caller"),
    db: AsyncSession = Depends(get_db),
    actor: JWTPayload = Depends(require_hr_actor),
) -> list[ShortlistResponse]:
    shortlists = await shortlist_service.list_shortlists(
        db, job_id=job_id, created_by=actor.sub if mine else None
    )
    return [ShortlistResponse.model_validate(s) for s in shortlists]


@router.post(
    "/shortlists",
    response_model=ShortlistResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create shortlist",
    responses=ERROR_RESPONSES,
)
async def create_shortlist(
    request: ShortlistCreate,
    db: AsyncSession = Depends(get_db),
    actor: JWTPayload = Depends(require_hr_actor),
) -> ShortlistResponse:
    shortlist = await shortlist_service.create_shortlist(
        db,
        name=request.name,
        description=request.description,
        job_id=request.job_id,
        is_default=request.is_default,
        created_by=actor.sub,
    )
    return ShortlistResponse.model_validate(shortlist)


@router.get(
    "/shortlists/{shortlist_id}",
    response_model=ShortlistResponse,
    summary="Get shortlist",
    responses=ERROR_RESPONSES,
)
async def get_shortlist(shortlist_id: str, db: AsyncSession = Depends(get_db)) -> ShortlistResponse:
    shortlist = await shortlist_service.get_shortlist(db, shortlist_id)
    return ShortlistResponse.model_validate(shortlist)


@router.put(
    "/shortlists/{shortlist_id}",
    response_model=ShortlistResponse,
    summary="Update shortlist",
    responses=ERROR_RESPONSES,
)
async def update_shortlist(
    shortlist_id: str,
    request: ShortlistUpdate,
    db: AsyncSession = Depends(get_db),
) -> ShortlistResponse:
    shortlist = await shortlist_service.update_shortlist(
        db,
        shortlist_id,
        name=request.name,
        description=request.description,
        is_default=request.is_default,
    )
    return ShortlistResponse.model_validate(shortlist)


@router.delete(
    "/shortlists/{shortlist_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete shortlist",
    responses=ERROR_RESPONSES,
)
async def delete_shortlist(shortlist_id: str, db: AsyncSession = Depends(get_db)) -> Response:
    await shortlist_service.delete_shortlist(db, shortlist_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/shortlists/{shortlist_id}/items",
    response_model=list[ShortlistItemResponse],
    summary="Shortlist members",
    responses=ERROR_RESPONSES,
)
async def get_shortlist_items(
    shortlist_id: str, db: AsyncSession = Depends(get_db)
) -> list[ShortlistItemResponse]:
    """Members with their applications, oldest first."""
    pairs = await shortlist_service.get_shortlist_items(db, shortlist_id)
    return [_item_response(item, application) for item, application in pairs]


@router.post(
    "/shortlists/{shortlist_id}/items",
    response_model=ShortlistItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add application to shortlist",
    responses={**ERROR_RESPONSES, 409: {"description": "Already on the shortlist"}},
)
async def add_to_shortlist(
    shortlist_id: str,
    request: ShortlistItemCreate,
    db: AsyncSession = Depends(get_db),
    actor: JWTPayload = Depends(require_hr_actor),
) -> ShortlistItemResponse:
    item = await shortlist_service.add_to_shortlist(
        db,
        shortlist_id,
        request.application_id,
        notes=request.notes,
        added_by=actor.sub,
    )
    return _item_response(item)


@router.delete(
    "/shortlists/{shortlist_id}/items/{application_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove application from shortlist",
)
async def remove_from_shortlist(
    shortlist_id: str,
    application_id: str,
    db: AsyncSession = Depends(get_db),
) -> Response:
    await shortlist_service.remove_from_shortlist(db, shortlist_id, application_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/applications/{application_id}/shortlists",
    response_model=list[ShortlistResponse],
    summary="Shortlists containing an application",
    responses=ERROR_RESPONSES,
)
async def get_application_shortlists(
    application_id: str, db: AsyncSession = Depends(get_db)
) -> list[ShortlistResponse]:
    shortlists = await shortlist_service.get_application_shortlists(db, application_id)
    return [ShortlistResponse.model_validate(s) for s in shortlists]
