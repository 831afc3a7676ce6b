"""
Job posting endpoints.

Listing and reading jobs is public so candidates can find the application
form; writes require an HR actor.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_hr_actor
from api.schemas.common import ERROR_RESPONSES, PaginatedResponse, PaginationParams
from api.schemas.jobs import JobCreate, JobResponse, JobUpdate
from api.services import jobs as job_service
from core.security import JWTPayload
from database.engine import get_db
from database.models.jobs import EmploymentType, ExperienceLevel, JobStatus

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get(
    "",
    response_model=PaginatedResponse[JobResponse],
    summary="List Jobs",
)
async def list_jobs(
    status_filter: Optional[JobStatus] = Query(None, alias="status"),
    employment_type: Optional[EmploymentType] = Query(None),
    experience_level: Optional[ExperienceLevel] = Query(None),
    search: Optional[str] = Query(None, description="Search title, department or location"),
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[JobResponse]:
    """Retrieve a page of job postings, newest first."""
    jobs, total = await job_service.list_jobs(
        db,
        status=status_filter,
        employment_type=employment_type,
        experience_level=experience_level,
        search=search,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return PaginatedResponse.create(
        items=[JobResponse.model_validate(job) for job in jobs],
        total=total,
        pagination=pagination,
    )


@router.post(
    "",
    response_model=JobResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Job",
    responses={**ERROR_RESPONSES, 409: {"description": "Slug already used"}},
)
async def create_job(
    request: JobCreate,
    db: AsyncSession = Depends(get_db),
    actor: JWTPayload = Depends(require_hr_actor),
) -> JobResponse:
    job = await job_service.create_job(db, request, created_by=actor.sub)
    return JobResponse.model_validate(job)


@router.get(
    "/{job_id}",
    response_model=JobResponse,
    summary="Get Job Details",
    responses=ERROR_RESPONSES,
)
async def get_job(job_id: str, db: AsyncSession = Depends(get_db)) -> JobResponse:
    """Job posting including its application form definition."""
    job = await job_service.get_job(db, job_id)
    return JobResponse.model_validate(job)


@router.put(
    "/{job_id}",
    response_model=JobResponse,
    summary="Update Job",
    responses=ERROR_RESPONSES,
)
async def update_job(
    job_id: str,
    request: JobUpdate,
    db: AsyncSession = Depends(get_db),
    actor: JWTPayload = Depends(require_hr_actor),
) -> JobResponse:
    """Partial update. Close a posting by setting ``status`` to ``closed``."""
    job = await job_service.update_job(db, job_id, request)
    return JobResponse.model_validate(job)
