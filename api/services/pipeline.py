"""
Status pipeline service.

Applies validated status transitions to stored applications and keeps the
status history.
"""

from typing import List, Optional, Union
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api.services.notifications import Notifier, GENERAL_APPLICATION_TITLE
from core.exceptions import NotFoundError
from core.pipeline import ApplicationStatus, check_transition
from core.utils.datetime import strictly_after
from database.models.applications import Application, ApplicationStatusHistory
from database.models.jobs import Job

logger = logging.getLogger(__name__)


async def get_application_or_404(db: AsyncSession, application_id: str) -> Application:
    """Load an application or raise NotFoundError."""
    application = await db.get(Application, application_id)
    if application is None:
        raise NotFoundError(
            f"Application {application_id} not found",
            details={"application_id": application_id},
        )
    return application


async def job_title_for(db: AsyncSession, application: Application) -> str:
    if application.job_id is None:
        return GENERAL_APPLICATION_TITLE
    job = await db.get(Job, application.job_id)
    return job.title if job else GENERAL_APPLICATION_TITLE


async def transition_status(
    db: AsyncSession,
    application_id: str,
    target: Union[str, ApplicationStatus, None],
    *,
    changed_by: Optional[str] = None,
    notes: Optional[str] = None,
    notifier: Optional[Notifier] = None,
) -> Application:
    """
    Move an application to a new pipeline stage.

    The record is untouched when validation fails. A same-stage move only
    refreshes ``updated_at``; real changes append a history row and notify
    the candidate. Concurrent writers are last-write-wins.

    Raises:
        NotFoundError: Unknown application
        ValidationError: Unknown target status
        InvalidTransitionError: Move out of hired or rejected
    """
    application = await get_application_or_404(db, application_id)
    previous = application.status
    new_status = check_transition(previous, target)

    application.status = new_status
    application.updated_at = strictly_after(application.updated_at)

    changed = new_status != previous
    if changed:
        db.add(ApplicationStatusHistory(
            application_id=application.id,
            previous_status=previous,
            new_status=new_status,
            notes=notes,
            changed_by=changed_by,
            changed_at=application.updated_at,
        ))

    await db.commit()

    logger.info(
        f"Application {application.id} status {previous.value} -> {new_status.value}"
        f" by {changed_by or 'system'}"
    )

    if changed and notifier is not None:
        job_title = await job_title_for(db, application)
        try:
            notifier.status_changed(
                application, previous.value, new_status.value, job_title, notes
            )
        except Exception as e:
            logger.error(f"Status notification failed for application {application.id}: {e}")

    return application


async def get_status_history(
    db: AsyncSession, application_id: str
) -> List[ApplicationStatusHistory]:
    """Recorded status changes, newest first."""
    await get_application_or_404(db, application_id)
    result = await db.execute(
        select(ApplicationStatusHistory)
        .where(ApplicationStatusHistory.application_id == application_id)
        .order_by(ApplicationStatusHistory.changed_at.desc())
    )
    return list(result.scalars().all())
