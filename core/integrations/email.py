"""Email integration utilities for candidate and HR notifications."""

import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from html import escape
from typing import Optional, List
import logging

from core.config import settings

logger = logging.getLogger(__name__)


# Candidate-facing copy per pipeline stage
STATUS_MESSAGES = {
    "screened": "Your application has been reviewed and you've passed the initial screening.",
    "interviewed": "Congratulations! You've been selected for an interview.",
    "offer": "Great news! We'd like to extend an offer for this position.",
    "hired": "Welcome to the team! Your application has been approved.",
    "rejected": (
        "Thank you for your interest. Unfortunately, we won't be moving forward "
        "with your application at this time."
    ),
}

DEFAULT_STATUS_MESSAGE = "Your application status has been updated."


def status_message(status: str) -> str:
    """Candidate-facing sentence for a pipeline stage."""
    return STATUS_MESSAGES.get(status, DEFAULT_STATUS_MESSAGE)


class EmailService:
    """Email service for sending emails via SMTP."""

    def __init__(
        self,
        smtp_host: Optional[str] = None,
        smtp_port: Optional[int] = None,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        from_email: Optional[str] = None,
        from_name: Optional[str] = None,
    ):
        """
        Initialize email service. Unset arguments fall back to settings.
        """
        self.smtp_host = smtp_host or settings.smtp_host
        self.smtp_port = smtp_port or settings.smtp_port
        self.smtp_user = smtp_user or settings.smtp_user
        self.smtp_password = smtp_password or settings.smtp_password
        self.from_email = from_email or settings.from_email
        self.from_name = from_name or settings.from_name

    def send_email(
        self,
        to_email: str | List[str],
        subject: str,
        body: str,
        html: bool = False,
        reply_to: Optional[str] = None,
    ) -> bool:
        """
        Send an email.

        Args:
            to_email: Recipient email address(es)
            subject: Email subject
            body: Email body
            html: Whether body is HTML
            reply_to: Reply-to email address

        Returns:
            True if email sent successfully
        """
        try:
            msg = MIMEMultipart()
            msg['From'] = f"{self.from_name} <{self.from_email}>"

            if isinstance(to_email, list):
                msg['To'] = ", ".join(to_email)
                recipients = list(to_email)
            else:
                msg['To'] = to_email
                recipients = [to_email]

            msg['Subject'] = subject
            if reply_to:
                msg['Reply-To'] = reply_to

            msg.attach(MIMEText(body, 'html' if html else 'plain'))

            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(msg, from_addr=self.from_email, to_addrs=recipients)

            logger.info(f"Email sent: {subject}")
            return True

        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email '{subject}': {e}")
            return False


class EmailTemplates:
    """Notification templates. Each returns ``subject``, ``body`` and ``html``."""

    @staticmethod
    def application_confirmation(
        candidate_name: str,
        job_title: str,
        application_id: str,
        company_name: Optional[str] = None,
    ) -> dict:
        company = escape(company_name or settings.company_name)
        return {
            'subject': f'Application Confirmation - {job_title} at {company_name or settings.company_name}',
            'body': f"""
                <html>
                <body>
                    <h2>Hello {escape(candidate_name)},</h2>
                    <p>We've successfully received your application for the
                    <strong>{escape(job_title)}</strong> position at {company}.</p>
                    <p><strong>Application ID:</strong> {escape(application_id)}</p>
                    <h3>What happens next?</h3>
                    <ul>
                        <li>Our HR team will review your application within 2-3 business days</li>
                        <li>If your profile matches our requirements, we'll reach out to schedule an interview</li>
                        <li>You'll receive email updates about your application status</li>
                    </ul>
                    <p>Best regards,<br>The {company} Hiring Team</p>
                    <p><small>This is an automated message. Please do not reply to this email.</small></p>
                </body>
                </html>
            """,
            'html': True
        }

    @staticmethod
    def new_application_alert(
        candidate_name: str,
        candidate_email: str,
        job_title: str,
        application_id: str,
        resume_url: Optional[str] = None,
        ai_score: Optional[int] = None,
    ) -> dict:
        score_line = (
            f"<p><strong>AI score:</strong> {ai_score}/100</p>" if ai_score is not None else ""
        )
        resume_line = (
            f"<p><strong>Resume:</strong> {escape(resume_url)}</p>" if resume_url else ""
        )
        return {
            'subject': f'New Application: {candidate_name} for {job_title}',
            'body': f"""
                <html>
                <body>
                    <h2>New application received</h2>
                    <p><strong>Candidate:</strong> {escape(candidate_name)} ({escape(candidate_email)})</p>
                    <p><strong>Position:</strong> {escape(job_title)}</p>
                    <p><strong>Application ID:</strong> {escape(application_id)}</p>
                    {score_line}
                    {resume_line}
                </body>
                </html>
            """,
            'html': True
        }

    @staticmethod
    def status_update(
        candidate_name: str,
        job_title: str,
        new_status: str,
        notes: Optional[str] = None,
        company_name: Optional[str] = None,
    ) -> dict:
        company = company_name or settings.company_name
        notes_block = (
            f"<p><strong>Additional notes:</strong> {escape(notes)}</p>" if notes else ""
        )
        return {
            'subject': f'Application Update: {job_title} at {company}',
            'body': f"""
                <html>
                <body>
                    <h2>Hello {escape(candidate_name)},</h2>
                    <p>{escape(status_message(new_status))}</p>
                    <p><strong>Position:</strong> {escape(job_title)}</p>
                    {notes_block}
                    <p>Best regards,<br>The {escape(company)} Hiring Team</p>
                </body>
                </html>
            """,
            'html': True
        }
