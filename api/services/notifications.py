"""
Notification dispatch for application events.

Services depend on the ``Notifier`` interface; the production
implementation enqueues Celery email tasks. Delivery problems are logged
and never propagate into the pipeline operation that triggered them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from database.models.applications import Application

logger = logging.getLogger(__name__)

GENERAL_APPLICATION_TITLE = "General Application"


class Notifier(ABC):
    """Receives application lifecycle events."""

    @abstractmethod
    def application_received(self, application: Application, job_title: str) -> None:
        """A candidate submitted an application."""

    @abstractmethod
    def status_changed(
        self,
        application: Application,
        previous: str,
        new: str,
        job_title: str,
        notes: Optional[str] = None,
    ) -> None:
        """An application moved to a different pipeline stage."""


class NullNotifier(Notifier):
    """Drops every event."""

    def application_received(self, application: Application, job_title: str) -> None:
        return None

    def status_changed(self, application, previous, new, job_title, notes=None) -> None:
        return None


class CeleryNotifier(Notifier):
    """Enqueues email tasks on the worker queue."""

    def application_received(self, application: Application, job_title: str) -> None:
        from workers.tasks.emails import (
            send_application_confirmation,
            send_new_application_alert,
        )

        try:
            send_application_confirmation.delay(
                candidate_name=application.candidate_name,
                candidate_email=application.candidate_email,
                job_title=job_title,
                application_id=application.id,
            )
            send_new_application_alert.delay(
                candidate_name=application.candidate_name,
                candidate_email=application.candidate_email,
                job_title=job_title,
                application_id=application.id,
                resume_url=application.resume_url,
                ai_score=application.ai_score,
            )
        except Exception as e:
            logger.error(f"Failed to enqueue intake emails for application {application.id}: {e}")

    def status_changed(
        self,
        application: Application,
        previous: str,
        new: str,
        job_title: str,
        notes: Optional[str] = None,
    ) -> None:
        from workers.tasks.emails import send_status_update

        try:
            send_status_update.delay(
                candidate_name=application.candidate_name,
                candidate_email=application.candidate_email,
                job_title=job_title,
                previous_status=previous,
                new_status=new,
                notes=notes,
            )
        except Exception as e:
            logger.error(f"Failed to enqueue status email for application {application.id}: {e}")
