"""
Application endpoints.

Public intake plus the HR-facing pipeline: status transitions, history,
the Kanban board and AI re-screening.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from agents.resume.agent import ResumeAgent
from api.dependencies import get_notifier, get_resume_agent, get_storage, require_hr_actor
from api.schemas.applications import (
    ApplicationCreate,
    ApplicationResponse,
    BoardLaneResponse,
    BoardMoveRequest,
    BoardResponse,
    DuplicateCheckRequest,
    DuplicateCheckResponse,
    StatusHistoryResponse,
    StatusUpdateRequest,
)
from api.schemas.common import ERROR_RESPONSES, PaginatedResponse, PaginationParams
from api.services import applications as application_service
from api.services import pipeline as pipeline_service
from api.services.notifications import Notifier
from core.board import build_board, lane_for_drop
from core.exceptions import ConflictError
from core.security import JWTPayload
from core.storage.local import LocalStorage
from database.engine import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])


def _board_response(applications, job_id: Optional[str]) -> BoardResponse:
    lanes = build_board(applications)
    return BoardResponse(
        job_id=job_id,
        lanes=[
            BoardLaneResponse(
                status=lane.status,
                title=lane.title,
                count=lane.count,
                applications=[ApplicationResponse.model_validate(a) for a in lane.applications],
            )
            for lane in lanes
        ],
        total=len(applications),
    )


@router.post(
    "",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit an application",
    responses={**ERROR_RESPONSES, 409: {"description": "Duplicate application"}},
)
async def submit_application(
    request: ApplicationCreate,
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    analyzer: ResumeAgent = Depends(get_resume_agent),
    storage: LocalStorage = Depends(get_storage),
) -> ApplicationResponse:
    """
    Public intake for a job or, with ``job_id`` of ``general``, the general pool.

    - **candidate_email**: validated address; one application per job
    - **application_data**: answers to the job's dynamic form
    - **resume_url**: key returned by ``/resumes/upload``
    """
    application = await application_service.create_application(
        db, request, notifier=notifier, analyzer=analyzer, storage=storage
    )
    return ApplicationResponse.model_validate(application)


@router.post(
    "/check-duplicate",
    response_model=DuplicateCheckResponse,
    summary="Check for an existing application",
    responses={409: {"description": "Candidate already applied"}},
)
async def check_duplicate_application(
    request: DuplicateCheckRequest,
    db: AsyncSession = Depends(get_db),
) -> DuplicateCheckResponse:
    """Returns 409 with the existing application id when the candidate already applied."""
    existing = await application_service.check_duplicate(
        db, request.job_id, request.candidate_email, request.candidate_phone
    )
    if existing is not None:
        raise ConflictError(
            "You have already applied for this position",
            details={"application_id": existing.id},
        )
    return DuplicateCheckResponse(is_duplicate=False)


@router.get(
    "",
    response_model=PaginatedResponse[ApplicationResponse],
    summary="List applications",
)
async def list_applications(
    job_id: Optional[str] = Query(None, description="Job id, or 'general' for the general pool"),
    status_filter: Optional[str] = Query(None, alias="status", description="Pipeline stage"),
    search: Optional[str] = Query(None, description="Match on candidate name or email"),
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
    actor: JWTPayload = Depends(require_hr_actor),
) -> PaginatedResponse[ApplicationResponse]:
    """List applications, newest first."""
    items, total = await application_service.list_applications(
        db,
        job_id=job_id,
        status=status_filter,
        search=search,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return PaginatedResponse.create(
        items=[ApplicationResponse.model_validate(a) for a in items],
        total=total,
        pagination=pagination,
    )


@router.get(
    "/board",
    response_model=BoardResponse,
    summary="Kanban board",
)
async def get_board(
    job_id: Optional[str] = Query(None, description="Job id, or 'general' for the general pool"),
    db: AsyncSession = Depends(get_db),
    actor: JWTPayload = Depends(require_hr_actor),
) -> BoardResponse:
    """All applications in scope grouped into the six pipeline lanes."""
    applications = await application_service.list_board_applications(db, job_id)
    return _board_response(applications, job_id)


@router.post(
    "/board/move",
    response_model=BoardResponse,
    summary="Move a card to another lane",
    responses=ERROR_RESPONSES,
)
async def move_on_board(
    request: BoardMoveRequest,
    job_id: Optional[str] = Query(None, description="Board scope to return"),
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    actor: JWTPayload = Depends(require_hr_actor),
) -> BoardResponse:
    """Apply one status transition and return the rebuilt board."""
    await pipeline_service.transition_status(
        db,
        request.application_id,
        lane_for_drop(request.status),
        changed_by=actor.sub,
        notes=request.notes,
        notifier=notifier,
    )
    applications = await application_service.list_board_applications(db, job_id)
    return _board_response(applications, job_id)


@router.get(
    "/{application_id}",
    response_model=ApplicationResponse,
    summary="Get application",
    responses=ERROR_RESPONSES,
)
async def get_application(
    application_id: str,
    db: AsyncSession = Depends(get_db),
    actor: JWTPayload = Depends(require_hr_actor),
) -> ApplicationResponse:
    application = await application_service.get_application(db, application_id)
    return ApplicationResponse.model_validate(application)


@router.put(
    "/{application_id}/status",
    response_model=ApplicationResponse,
    summary="Change application status",
    responses=ERROR_RESPONSES,
)
async def update_application_status(
    application_id: str,
    request: StatusUpdateRequest,
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    actor: JWTPayload = Depends(require_hr_actor),
) -> ApplicationResponse:
    """
    Move the application to ``status``.

    Hired and rejected are final; stages may be skipped.
    """
    application = await pipeline_service.transition_status(
        db,
        application_id,
        request.status,
        changed_by=actor.sub,
        notes=request.notes,
        notifier=notifier,
    )
    return ApplicationResponse.model_validate(application)


@router.get(
    "/{application_id}/history",
    response_model=list[StatusHistoryResponse],
    summary="Status history",
    responses=ERROR_RESPONSES,
)
async def get_application_history(
    application_id: str,
    db: AsyncSession = Depends(get_db),
    actor: JWTPayload = Depends(require_hr_actor),
) -> list[StatusHistoryResponse]:
    """Recorded status changes, newest first."""
    history = await pipeline_service.get_status_history(db, application_id)
    return [StatusHistoryResponse.model_validate(entry) for entry in history]


@router.post(
    "/{application_id}/reanalyze",
    response_model=ApplicationResponse,
    summary="Re-run AI screening",
    responses={**ERROR_RESPONSES, 502: {"description": "Analysis service failed"}},
)
async def reanalyze_application(
    application_id: str,
    db: AsyncSession = Depends(get_db),
    analyzer: ResumeAgent = Depends(get_resume_agent),
    storage: LocalStorage = Depends(get_storage),
    actor: JWTPayload = Depends(require_hr_actor),
) -> ApplicationResponse:
    """Score the stored resume again; the record is unchanged on failure."""
    application = await application_service.reanalyze_application(
        db, application_id, analyzer=analyzer, storage=storage
    )
    return ApplicationResponse.model_validate(application)
