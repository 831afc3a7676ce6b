"""Job service functions."""

from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.jobs import JobCreate, JobUpdate
from core.exceptions import ConflictError, NotFoundError, ValidationError
from core.utils.datetime import strictly_after
from core.utils.formatting import slugify
from database.models.jobs import Job, JobStatus, EmploymentType, ExperienceLevel

logger = logging.getLogger(__name__)

_REQUIRED_JOB_FIELDS = frozenset(
    {"title", "description", "employment_type", "experience_level", "status"}
)


def _form_config(fields) -> List[Dict[str, Any]]:
    return [field.model_dump(by_alias=True, exclude_none=True, mode="json") for field in fields]


async def _ensure_unique_slug(db: AsyncSession, slug: str, exclude_id: Optional[str] = None) -> None:
    query = select(Job.id).where(Job.slug == slug)
    if exclude_id is not None:
        query = query.where(Job.id != exclude_id)
    if (await db.execute(query)).first() is not None:
        raise ConflictError(f"Job slug '{slug}' is already in use", details={"slug": slug})


async def get_job(db: AsyncSession, job_id: str) -> Job:
    """Get a job or raise NotFoundError."""
    job = await db.get(Job, job_id)
    if job is None:
        raise NotFoundError(f"Job {job_id} not found", details={"job_id": job_id})
    return job


async def create_job(
    db: AsyncSession, payload: JobCreate, created_by: Optional[str] = None
) -> Job:
    """
    Create a job posting. The slug is derived from the title when omitted.

    Raises:
        ValidationError: Title yields an empty slug
        ConflictError: Slug already used
    """
    slug = slugify(payload.slug or payload.title)
    if not slug:
        raise ValidationError("Job slug cannot be empty", details={"field": "slug"})
    await _ensure_unique_slug(db, slug)

    job = Job(
        title=payload.title,
        slug=slug,
        description=payload.description,
        requirements=payload.requirements,
        responsibilities=payload.responsibilities,
        department=payload.department,
        location=payload.location,
        employment_type=payload.employment_type,
        experience_level=payload.experience_level,
        skills=payload.skills,
        status=payload.status,
        application_form_config=_form_config(payload.application_form_config),
        created_by=created_by,
    )
    db.add(job)
    await db.commit()

    logger.info(f"Created job {job.id} ({job.slug})")
    return job


async def update_job(db: AsyncSession, job_id: str, payload: JobUpdate) -> Job:
    """Apply a partial update to a job."""
    job = await get_job(db, job_id)
    changes = payload.model_dump(exclude_unset=True)

    if "application_form_config" in changes:
        changes["application_form_config"] = _form_config(
            payload.application_form_config or []
        )
    for field, value in changes.items():
        if value is None and field in _REQUIRED_JOB_FIELDS:
            continue
        setattr(job, field, value)

    job.updated_at = strictly_after(job.updated_at)
    await db.commit()
    return job


async def list_jobs(
    db: AsyncSession,
    status: Optional[JobStatus] = None,
    employment_type: Optional[EmploymentType] = None,
    experience_level: Optional[ExperienceLevel] = None,
    search: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> Tuple[List[Job], int]:
    """List jobs, newest first, with optional filters."""
    query = select(Job)
    if status is not None:
        query = query.where(Job.status == status)
    if employment_type is not None:
        query = query.where(Job.employment_type == employment_type)
    if experience_level is not None:
        query = query.where(Job.experience_level == experience_level)
    if search and search.strip():
        pattern = f"%{search.strip().lower()}%"
        query = query.where(or_(
            func.lower(Job.title).like(pattern),
            func.lower(Job.department).like(pattern),
            func.lower(Job.location).like(pattern),
        ))

    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar() or 0
    result = await db.execute(
        query.order_by(Job.created_at.desc()).limit(limit).offset(offset)
    )
    return list(result.scalars().all()), total
