"""ORM models. Importing this package registers every table on Base.metadata."""

from database.models.jobs import Job, JobStatus, EmploymentType, ExperienceLevel
from database.models.applications import (
    Application,
    ApplicationStatusHistory,
    GENERAL_APPLICATION_JOB_ID,
)
from database.models.tags import CandidateTag, ApplicationTag
from database.models.shortlists import CandidateShortlist, ShortlistItem
from database.models.ratings import ApplicationRating

__all__ = [
    "Job",
    "JobStatus",
    "EmploymentType",
    "ExperienceLevel",
    "Application",
    "ApplicationStatusHistory",
    "GENERAL_APPLICATION_JOB_ID",
    "CandidateTag",
    "ApplicationTag",
    "CandidateShortlist",
    "ShortlistItem",
    "ApplicationRating",
]
