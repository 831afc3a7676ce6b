"""Celery app factory."""

from celery import Celery

celery_app = Celery("hireflow", include=["workers.tasks.emails"])
celery_app.config_from_object("workers.celery_config")
