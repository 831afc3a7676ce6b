"""Tests for email tasks, templates and the Celery notifier."""

from unittest.mock import MagicMock, patch

import pytest

from api.services.notifications import CeleryNotifier
from core.config import settings
from core.integrations.email import EmailTemplates, status_message
from database.models.applications import Application
from workers.tasks import emails
from workers.tasks.emails import (
    EmailDeliveryError,
    send_application_confirmation,
    send_new_application_alert,
    send_status_update,
)


@pytest.fixture
def email_service():
    with patch.object(emails, "EmailService") as service_cls:
        service = service_cls.return_value
        service.send_email.return_value = True
        yield service


@pytest.fixture
def application():
    return Application(
        id="app-1",
        candidate_name="Ada Lovelace",
        candidate_email="ada@example.com",
        resume_url="resumes/abc_cv.pdf",
        ai_score=82,
    )


class TestTemplates:
    def test_confirmation_escapes_user_input(self):
        template = EmailTemplates.application_confirmation(
            candidate_name="<script>x</script>",
            job_title="Engineer",
            application_id="app-1",
            company_name="Acme",
        )
        assert "<script>" not in template["body"]
        assert "&lt;script&gt;" in template["body"]
        assert template["subject"] == "Application Confirmation - Engineer at Acme"
        assert template["html"] is True

    def test_status_update_uses_stage_copy(self):
        template = EmailTemplates.status_update(
            candidate_name="Ada",
            job_title="Engineer",
            new_status="interviewed",
            notes="Bring a laptop",
        )
        assert "selected for an interview" in template["body"]
        assert "Bring a laptop" in template["body"]

    def test_alert_omits_missing_score(self):
        template = EmailTemplates.new_application_alert(
            candidate_name="Ada",
            candidate_email="ada@example.com",
            job_title="Engineer",
            application_id="app-1",
        )
        assert "AI score" not in template["body"]

    def test_status_message_fallback(self):
        assert status_message("rejected").startswith("Thank you for your interest")
        assert status_message("applied") == "Your application status has been updated."


class TestTasks:
    def test_confirmation_sent_to_candidate(self, email_service):
        result = send_application_confirmation(
            candidate_name="Ada",
            candidate_email="ada@example.com",
            job_title="Engineer",
            application_id="app-1",
        )

        assert result["status"] == "sent"
        kwargs = email_service.send_email.call_args.kwargs
        assert kwargs["to_email"] == "ada@example.com"
        assert kwargs["html"] is True

    def test_failed_delivery_is_retried(self, email_service):
        email_service.send_email.return_value = False

        with pytest.raises(EmailDeliveryError):
            send_status_update(
                candidate_name="Ada",
                candidate_email="ada@example.com",
                job_title="Engineer",
                previous_status="applied",
                new_status="screened",
            )

    def test_alert_skipped_without_hr_inbox(self, email_service, monkeypatch):
        monkeypatch.setattr(settings, "hr_notification_email", None)

        result = send_new_application_alert(
            candidate_name="Ada",
            candidate_email="ada@example.com",
            job_title="Engineer",
            application_id="app-1",
        )

        assert result == {"status": "skipped"}
        email_service.send_email.assert_not_called()

    def test_alert_goes_to_hr_inbox(self, email_service, monkeypatch):
        monkeypatch.setattr(settings, "hr_notification_email", "hr@example.com")

        send_new_application_alert(
            candidate_name="Ada",
            candidate_email="ada@example.com",
            job_title="Engineer",
            application_id="app-1",
            ai_score=82,
        )

        kwargs = email_service.send_email.call_args.kwargs
        assert kwargs["to_email"] == "hr@example.com"
        assert "82/100" in kwargs["body"]


class TestCeleryNotifier:
    def test_application_received_enqueues_both_emails(self, application):
        with patch.object(emails.send_application_confirmation, "delay") as confirm, \
                patch.object(emails.send_new_application_alert, "delay") as alert:
            CeleryNotifier().application_received(application, "Engineer")

        confirm.assert_called_once_with(
            candidate_name="Ada Lovelace",
            candidate_email="ada@example.com",
            job_title="Engineer",
            application_id="app-1",
        )
        assert alert.call_args.kwargs["ai_score"] == 82
        assert alert.call_args.kwargs["resume_url"] == "resumes/abc_cv.pdf"

    def test_status_changed_enqueues_update(self, application):
        with patch.object(emails.send_status_update, "delay") as update:
            CeleryNotifier().status_changed(application, "applied", "screened", "Engineer", "Nice")

        update.assert_called_once_with(
            candidate_name="Ada Lovelace",
            candidate_email="ada@example.com",
            job_title="Engineer",
            previous_status="applied",
            new_status="screened",
            notes="Nice",
        )

    def test_broker_failure_is_swallowed(self, application):
        broken = MagicMock(side_effect=ConnectionError("broker down"))
        with patch.object(emails.send_status_update, "delay", broken):
            CeleryNotifier().status_changed(application, "applied", "screened", "Engineer")

        broken.assert_called_once()
