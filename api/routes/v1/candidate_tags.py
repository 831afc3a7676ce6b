"""Candidate tag endpoints: tag CRUD and tagging of applications."""

import logging
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_hr_actor
from api.schemas.common import ERROR_RESPONSES
from api.schemas.tags import (
    ApplicationTagResponse,
    AttachTagRequest,
    TagCreate,
    TagPaletteResponse,
    TagResponse,
    TagUpdate,
)
from api.services import tags as tag_service
from core.security import JWTPayload
from database.engine import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["candidate-tags"], dependencies=[Depends(require_hr_actor)])


def _attached(tag, link) -> ApplicationTagResponse:
    return ApplicationTagResponse(
        **TagResponse.model_validate(tag).model_dump(),
        added_by=link.added_by,
        added_at=link.added_at,
    )


@router.get(
    "/candidate-tags/palette",
    response_model=TagPaletteResponse,
    summary="Allowed tag colours",
)
async def get_tag_palette() -> TagPaletteResponse:
    return TagPaletteResponse(
        colors=list(tag_service.TAG_COLOR_PALETTE),
        default=tag_service.DEFAULT_TAG_COLOR,
    )


@router.get(
    "/candidate-tags",
    response_model=list[TagResponse],
    summary="List tags",
)
async def list_tags(db: AsyncSession = Depends(get_db)) -> list[TagResponse]:
    """All tags ordered by name."""
    tags = await tag_service.list_tags(db)
    return [TagResponse.model_validate(tag) for tag in tags]


@router.post(
    "/candidate-tags",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create tag",
    responses={**ERROR_RESPONSES, 409: {"description": "Tag name already used"}},
)
async def create_tag(
    request: TagCreate,
    db: AsyncSession = Depends(get_db),
    actor: JWTPayload = Depends(require_hr_actor),
) -> TagResponse:
    """
    Create a tag.

    - **name**: required, unique ignoring case
    - **color**: one of the palette colours, defaults to blue
    """
    tag = await tag_service.create_tag(
        db,
        name=request.name,
        color=request.color,
        description=request.description,
        created_by=actor.sub,
    )
    return TagResponse.model_validate(tag)


@router.get(
    "/candidate-tags/{tag_id}",
    response_model=TagResponse,
    summary="Get tag",
    responses=ERROR_RESPONSES,
)
async def get_tag(tag_id: str, db: AsyncSession = Depends(get_db)) -> TagResponse:
    tag = await tag_service.get_tag_or_404(db, tag_id)
    return TagResponse.model_validate(tag)


@router.put(
    "/candidate-tags/{tag_id}",
    response_model=TagResponse,
    summary="Update tag",
    responses={**ERROR_RESPONSES, 409: {"description": "Tag name already used"}},
)
async def update_tag(
    tag_id: str,
    request: TagUpdate,
    db: AsyncSession = Depends(get_db),
) -> TagResponse:
    tag = await tag_service.update_tag(
        db,
        tag_id,
        name=request.name,
        color=request.color,
        description=request.description,
    )
    return TagResponse.model_validate(tag)


@router.delete(
    "/candidate-tags/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete tag",
    responses=ERROR_RESPONSES,
)
async def delete_tag(tag_id: str, db: AsyncSession = Depends(get_db)) -> Response:
    """Delete a tag and remove it from every application."""
    await tag_service.delete_tag(db, tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/applications/{application_id}/tags",
    response_model=list[ApplicationTagResponse],
    summary="Tags on an application",
    responses=ERROR_RESPONSES,
)
async def get_application_tags(
    application_id: str,
    db: AsyncSession = Depends(get_db),
) -> list[ApplicationTagResponse]:
    pairs = await tag_service.get_application_tags(db, application_id)
    return [_attached(tag, link) for tag, link in pairs]


@router.post(
    "/applications/{application_id}/tags",
    response_model=ApplicationTagResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Attach tag",
    responses={**ERROR_RESPONSES, 409: {"description": "Tag already attached"}},
)
async def attach_tag(
    application_id: str,
    request: AttachTagRequest,
    db: AsyncSession = Depends(get_db),
    actor: JWTPayload = Depends(require_hr_actor),
) -> ApplicationTagResponse:
    tag, link = await tag_service.attach_tag(
        db, application_id, request.tag_id, added_by=actor.sub
    )
    return _attached(tag, link)


@router.delete(
    "/applications/{application_id}/tags/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Detach tag",
)
async def detach_tag(
    application_id: str,
    tag_id: str,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Idempotent: succeeds whether or not the tag was attached."""
    await tag_service.detach_tag(db, application_id, tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
