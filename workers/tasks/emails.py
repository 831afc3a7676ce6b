"""Email notification tasks."""

import logging
from typing import Optional
from celery import Task

from workers.celery_app import celery_app
from core.config import settings
from core.integrations.email import EmailService, EmailTemplates

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """SMTP delivery failed; the task will be retried."""


def _deliver(task: Task, to_email: str, template: dict) -> dict:
    sent = EmailService().send_email(
        to_email=to_email,
        subject=template["subject"],
        body=template["body"],
        html=template["html"],
    )
    if not sent:
        raise task.retry(
            exc=EmailDeliveryError(f"Could not deliver '{template['subject']}'"),
            countdown=120,
            max_retries=5,
        )
    return {"status": "sent", "subject": template["subject"]}


@celery_app.task(name="workers.tasks.emails.send_application_confirmation", bind=True)
def send_application_confirmation(
    self: Task,
    candidate_name: str,
    candidate_email: str,
    job_title: str,
    application_id: str,
) -> dict:
    """Confirm receipt of an application to the candidate."""
    template = EmailTemplates.application_confirmation(
        candidate_name=candidate_name,
        job_title=job_title,
        application_id=application_id,
    )
    return _deliver(self, candidate_email, template)


@celery_app.task(name="workers.tasks.emails.send_new_application_alert", bind=True)
def send_new_application_alert(
    self: Task,
    candidate_name: str,
    candidate_email: str,
    job_title: str,
    application_id: str,
    resume_url: Optional[str] = None,
    ai_score: Optional[int] = None,
) -> dict:
    """Alert the HR inbox about a new application.

    Skipped when no HR notification address is configured.
    """
    if not settings.hr_notification_email:
        logger.info("HR_NOTIFICATION_EMAIL not set; skipping new application alert")
        return {"status": "skipped"}

    template = EmailTemplates.new_application_alert(
        candidate_name=candidate_name,
        candidate_email=candidate_email,
        job_title=job_title,
        application_id=application_id,
        resume_url=resume_url,
        ai_score=ai_score,
    )
    return _deliver(self, settings.hr_notification_email, template)


@celery_app.task(name="workers.tasks.emails.send_status_update", bind=True)
def send_status_update(
    self: Task,
    candidate_name: str,
    candidate_email: str,
    job_title: str,
    previous_status: str,
    new_status: str,
    notes: Optional[str] = None,
) -> dict:
    """Tell the candidate their application moved to a new stage."""
    logger.info(f"Status update email: {previous_status} -> {new_status}")
    template = EmailTemplates.status_update(
        candidate_name=candidate_name,
        job_title=job_title,
        new_status=new_status,
        notes=notes,
    )
    return _deliver(self, candidate_email, template)
