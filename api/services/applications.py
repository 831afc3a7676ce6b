"""
Application service functions for API endpoints.

Public intake, duplicate detection, reads and AI re-screening.
"""

from typing import Any, List, Optional, Tuple
import logging

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.applications import ApplicationCreate
from api.services.notifications import Notifier, GENERAL_APPLICATION_TITLE
from api.services.pipeline import get_application_or_404
from core.config import settings
from core.exceptions import (
    ConflictError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from core.forms import parse_form_config, validate_form_data
from core.parsers.document_parser import extract_resume_text
from core.pipeline import ApplicationStatus, parse_status
from core.storage.local import LocalStorage
from core.utils.datetime import strictly_after
from core.utils.formatting import mask_email
from database.models.applications import Application, GENERAL_APPLICATION_JOB_ID
from database.models.jobs import Job, JobStatus

logger = logging.getLogger(__name__)


def normalize_job_id(job_id: Optional[str]) -> Optional[str]:
    """Map the general-pool sentinel to NULL."""
    if job_id is None:
        return None
    job_id = job_id.strip()
    if not job_id or job_id.lower() == GENERAL_APPLICATION_JOB_ID:
        return None
    return job_id


def _job_scope(query, job_id: Optional[str]):
    if job_id is None:
        return query.where(Application.job_id.is_(None))
    return query.where(Application.job_id == job_id)


async def resolve_job(db: AsyncSession, job_id: Optional[str]) -> Optional[Job]:
    """Return the job for an id, or None for the general pool."""
    job_id = normalize_job_id(job_id)
    if job_id is None:
        return None
    job = await db.get(Job, job_id)
    if job is None:
        raise NotFoundError(f"Job {job_id} not found", details={"job_id": job_id})
    return job


async def check_duplicate(
    db: AsyncSession,
    job_id: Optional[str],
    email: str,
    phone: Optional[str] = None,
) -> Optional[Application]:
    """
    Find an existing application to the same job by email or phone.

    Email comparison is case-insensitive; phones must match as written.
    """
    match = func.lower(Application.candidate_email) == email.strip().lower()
    if phone and phone.strip():
        match = or_(match, Application.candidate_phone == phone.strip())

    query = _job_scope(select(Application), normalize_job_id(job_id)).where(match)
    result = await db.execute(query.order_by(Application.applied_at).limit(1))
    return result.scalars().first()


async def _score_resume(
    application: Application,
    job: Optional[Job],
    analyzer: Any,
    storage: LocalStorage,
):
    """Run the analyzer on the application's stored resume."""
    if not application.resume_url:
        raise ValidationError(
            "Application has no resume to analyze",
            details={"application_id": application.id},
        )
    try:
        data = storage.read(application.resume_url)
    except (FileNotFoundError, ValueError) as exc:
        raise ValidationError(
            "Resume file is not available",
            details={"resume_url": application.resume_url},
        ) from exc

    text = await extract_resume_text(application.resume_url, data)
    if not text:
        raise ValidationError("Resume contains no readable text")

    if job is not None:
        description, requirements = job.description, job.requirements
    else:
        description, requirements = GENERAL_APPLICATION_TITLE, None
    return await analyzer.analyze_resume(text, description, requirements)


async def create_application(
    db: AsyncSession,
    payload: ApplicationCreate,
    *,
    notifier: Optional[Notifier] = None,
    analyzer: Any = None,
    storage: Optional[LocalStorage] = None,
) -> Application:
    """
    Accept a candidate's application.

    Raises:
        NotFoundError: Unknown job
        ValidationError: Job not accepting applications, or form answers invalid
        ConflictError: Same email or phone already applied to this job
    """
    job = await resolve_job(db, payload.job_id)
    if job is not None and job.status != JobStatus.ACTIVE:
        raise ValidationError(
            f"Job {job.id} is not accepting applications",
            details={"job_id": job.id, "status": job.status.value},
        )

    application_data = payload.application_data
    if job is not None:
        fields = parse_form_config(job.application_form_config)
        application_data = validate_form_data(fields, application_data)

    job_id = job.id if job else None
    existing = await check_duplicate(
        db, job_id, payload.candidate_email, payload.candidate_phone
    )
    if existing is not None:
        raise ConflictError(
            "An application from this candidate already exists for this job",
            details={"application_id": existing.id},
        )

    application = Application(
        job_id=job_id,
        candidate_name=payload.candidate_name,
        candidate_email=payload.candidate_email,
        candidate_phone=payload.candidate_phone,
        location=payload.location,
        current_company=payload.current_company,
        current_role=payload.current_role,
        years_of_experience=payload.years_of_experience,
        linkedin_profile=payload.linkedin_profile,
        git_profile=payload.git_profile,
        resume_url=payload.resume_url,
        cover_letter=payload.cover_letter,
        application_data=application_data,
        parsed_resume_data=payload.parsed_resume_data,
        status=ApplicationStatus.APPLIED,
    )
    db.add(application)
    await db.commit()

    logger.info(
        f"New application {application.id} from {mask_email(application.candidate_email)}"
        f" for job {job_id or GENERAL_APPLICATION_JOB_ID}"
    )

    if (
        settings.ai_screening_on_intake
        and application.resume_url
        and analyzer is not None
        and storage is not None
    ):
        try:
            analysis = await _score_resume(application, job, analyzer, storage)
        except (UpstreamError, ValidationError) as e:
            logger.warning(f"AI screening skipped for application {application.id}: {e}")
        else:
            application.ai_score = analysis.overall_score
            application.ai_analysis = analysis.model_dump()
            await db.commit()

    if notifier is not None:
        try:
            notifier.application_received(
                application, job.title if job else GENERAL_APPLICATION_TITLE
            )
        except Exception as e:
            logger.error(f"Intake notification failed for application {application.id}: {e}")

    return application


async def get_application(db: AsyncSession, application_id: str) -> Application:
    """Get one application or raise NotFoundError."""
    return await get_application_or_404(db, application_id)


async def list_applications(
    db: AsyncSession,
    job_id: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> Tuple[List[Application], int]:
    """
    List applications, newest first.

    Args:
        job_id: Job id, ``"general"`` for the general pool, None for all
        status: Pipeline stage filter
        search: Case-insensitive match on candidate name or email
        limit: Maximum number of results
        offset: Pagination offset

    Returns:
        (applications, total matching)
    """
    query = select(Application)
    if job_id is not None:
        query = _job_scope(query, normalize_job_id(job_id))
    if status:
        query = query.where(Application.status == parse_status(status))
    if search and search.strip():
        pattern = f"%{search.strip().lower()}%"
        query = query.where(or_(
            func.lower(Application.candidate_name).like(pattern),
            func.lower(Application.candidate_email).like(pattern),
        ))

    count_query = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_query)).scalar() or 0

    query = query.order_by(Application.applied_at.desc()).limit(limit).offset(offset)
    result = await db.execute(query)
    return list(result.scalars().all()), total


async def list_board_applications(
    db: AsyncSession, job_id: Optional[str] = None
) -> List[Application]:
    """Every application in scope for the board, newest first."""
    query = select(Application)
    if job_id is not None:
        query = _job_scope(query, normalize_job_id(job_id))
    result = await db.execute(query.order_by(Application.applied_at.desc()))
    return list(result.scalars().all())


async def reanalyze_application(
    db: AsyncSession,
    application_id: str,
    *,
    analyzer: Any,
    storage: LocalStorage,
) -> Application:
    """
    Re-run AI screening for an application's stored resume.

    The record is only written when the analysis succeeds.

    Raises:
        NotFoundError: Unknown application
        ValidationError: No usable resume on file
        UpstreamError: The analysis call failed
    """
    application = await get_application_or_404(db, application_id)
    job = await db.get(Job, application.job_id) if application.job_id else None

    analysis = await _score_resume(application, job, analyzer, storage)

    application.ai_score = analysis.overall_score
    application.ai_analysis = analysis.model_dump()
    application.updated_at = strictly_after(application.updated_at)
    await db.commit()

    logger.info(f"Re-analyzed application {application.id}: score {analysis.overall_score}")
    return application

