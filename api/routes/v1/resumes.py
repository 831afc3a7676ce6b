"""Resume upload and parsing endpoints (public, used by the apply form)."""

import logging
from fastapi import APIRouter, Depends, File, UploadFile, status

from agents.resume.agent import ResumeAgent
from api.dependencies import get_resume_agent, get_storage
from api.schemas.common import ERROR_RESPONSES
from api.schemas.resumes import ResumeParseResponse, ResumeUploadResponse
from api.services import resumes as resume_service
from core.storage.local import LocalStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["resumes"])


@router.post(
    "/upload",
    response_model=ResumeUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a resume",
    responses=ERROR_RESPONSES,
)
async def upload_resume(
    file: UploadFile = File(..., description="PDF, DOCX or TXT resume"),
    storage: LocalStorage = Depends(get_storage),
) -> ResumeUploadResponse:
    """Store the file and return the key to submit as ``resume_url``."""
    data = await resume_service.read_upload(file)
    key = resume_service.store_resume(storage, file.filename or "", data)
    return ResumeUploadResponse(resume_url=key, filename=file.filename or "", size=len(data))


@router.post(
    "/parse",
    response_model=ResumeParseResponse,
    summary="Parse a resume with AI",
    responses={**ERROR_RESPONSES, 502: {"description": "Parsing service failed"}},
)
async def parse_resume(
    file: UploadFile = File(..., description="PDF, DOCX or TXT resume"),
    analyzer: ResumeAgent = Depends(get_resume_agent),
) -> ResumeParseResponse:
    """
    Extract structured data for pre-filling the application form.

    On 502 the candidate should fill the form in manually.
    """
    data = await resume_service.read_upload(file)
    result = await resume_service.parse_resume_upload(analyzer, file.filename or "", data)
    return ResumeParseResponse(**result)
