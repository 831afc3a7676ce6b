"""Resume upload and AI parsing."""

from pathlib import Path
from typing import Any, Dict
import logging

from fastapi import UploadFile

from agents.resume.mapping import experience_years, to_form_data, validate_parsed
from core.config import settings
from core.exceptions import ValidationError
from core.parsers.document_parser import SUPPORTED_RESUME_EXTENSIONS, extract_resume_text
from core.storage.local import LocalStorage

logger = logging.getLogger(__name__)


def check_resume_file(filename: str, data: bytes) -> None:
    """
    Reject empty, oversized or unsupported uploads.

    Raises:
        ValidationError: With the reason in ``details``
    """
    extension = Path(filename or "").suffix.lower()
    if extension not in SUPPORTED_RESUME_EXTENSIONS:
        raise ValidationError(
            f"Unsupported resume format '{extension or filename}'",
            details={"filename": filename, "allowed": list(SUPPORTED_RESUME_EXTENSIONS)},
        )
    if not data:
        raise ValidationError("Uploaded file is empty", details={"filename": filename})
    if len(data) > settings.max_upload_size:
        raise ValidationError(
            "Uploaded file is too large",
            details={"filename": filename, "max_bytes": settings.max_upload_size},
        )


async def read_upload(file: UploadFile) -> bytes:
    """Read an upload, stopping one byte past the size limit."""
    return await file.read(settings.max_upload_size + 1)


def store_resume(storage: LocalStorage, filename: str, data: bytes) -> str:
    """Validate and store an uploaded resume. Returns its storage key."""
    check_resume_file(filename, data)
    key = storage.save_resume(data, filename)
    logger.info(f"Stored resume {key} ({len(data)} bytes)")
    return key


async def parse_resume_upload(analyzer: Any, filename: str, data: bytes) -> Dict[str, Any]:
    """
    Extract text from an upload and run structured parsing on it.

    Failures of the parser surface as UpstreamError; callers fall back to
    manual entry.
    """
    check_resume_file(filename, data)
    text = await extract_resume_text(filename, data)
    if not text:
        raise ValidationError("Resume contains no readable text", details={"filename": filename})

    parsed = await analyzer.parse_resume(text)
    return {
        "parsed": parsed,
        "form_data": to_form_data(parsed),
        "experience_years": experience_years(parsed),
        "validation": validate_parsed(parsed),
    }
