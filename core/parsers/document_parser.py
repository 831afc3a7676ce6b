import asyncio
import logging
from io import BytesIO
from pathlib import Path
import re
from typing import Callable, Iterable, Union

import pdfplumber
from docx import Document

from core.exceptions import ValidationError


logger = logging.getLogger(__name__)

StreamLike = Union[BytesIO, bytes, bytearray, memoryview]

SUPPORTED_RESUME_EXTENSIONS = (".pdf", ".docx", ".txt")


async def extract_resume_text(filename: str, data: StreamLike) -> str:
    """
    Pull plain text out of an uploaded resume, picking the parser by extension.

    Raises:
        ValidationError: Unsupported extension, or the file could not be read
    """
    extension = Path(filename or "").suffix.lower()
    extractors: dict[str, Callable] = {
        ".pdf": _extract_pdf_text_sync,
        ".docx": _extract_docx_text_sync,
        ".txt": _extract_plain_text_sync,
    }
    extractor = extractors.get(extension)
    if extractor is None:
        raise ValidationError(
            f"Unsupported resume format '{extension or filename}'. "
            f"Allowed: {', '.join(SUPPORTED_RESUME_EXTENSIONS)}",
            details={"filename": filename, "allowed": list(SUPPORTED_RESUME_EXTENSIONS)},
        )

    stream = _prepare_stream(data)
    try:
        return await asyncio.to_thread(extractor, stream)
    except ValidationError:
        raise
    except Exception as exc:
        logger.warning("Could not extract text from %s: %s", filename, exc)
        raise ValidationError(
            f"Could not read resume file '{filename}'",
            details={"filename": filename},
        ) from exc


async def extract_text_from_pdf_stream(file_stream: StreamLike) -> str:
    """Return normalized text from a PDF stream without blocking the event loop."""
    stream = _prepare_stream(file_stream)
    return await asyncio.to_thread(_extract_pdf_text_sync, stream)


async def extract_text_from_docx_stream(file_stream: StreamLike) -> str:
    """Return normalized text from a DOCX stream, including table cells."""
    stream = _prepare_stream(file_stream)
    return await asyncio.to_thread(_extract_docx_text_sync, stream)


def _extract_pdf_text_sync(file_stream: BytesIO) -> str:
    chunks: list[str] = []

    with pdfplumber.open(file_stream) as pdf:
        for idx, page in enumerate(pdf.pages, start=1):
            try:
                page_text = page.extract_text() or ""
            except Exception as exc:  # pragma: no cover - pdfplumber internals
                logger.warning("Skipping unreadable PDF page %s: %s", idx, exc)
                continue
            if page_text:
                chunks.append(page_text)

    text = _normalize_text(chunks)
    if not text:
        logger.info("PDF contained no extractable text")
    return text


def _extract_docx_text_sync(file_stream: BytesIO) -> str:
    doc = Document(file_stream)
    text = _normalize_text(_iter_docx_text(doc))
    if not text:
        logger.info("DOCX contained no extractable text")
    return text


def _extract_plain_text_sync(file_stream: BytesIO) -> str:
    raw = file_stream.read()
    try:
        decoded = raw.decode("utf-8")
    except UnicodeDecodeError:
        decoded = raw.decode("latin-1")
    return _normalize_text(decoded.splitlines())


def _iter_docx_text(doc) -> Iterable[str]:
    for para in doc.paragraphs:
        if para.text:
            yield para.text

    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                if cell.text:
                    yield cell.text


def _normalize_text(chunks: Iterable[str]) -> str:
    """Trim chunks, drop empty ones and join with single line breaks."""
    cleaned = [chunk.strip() for chunk in chunks if chunk and chunk.strip()]
    if not cleaned:
        return ""

    text = "\n".join(cleaned)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _prepare_stream(file_stream: StreamLike) -> BytesIO:
    if isinstance(file_stream, (bytes, bytearray, memoryview)):
        stream = BytesIO(file_stream)
    else:
        stream = file_stream

    if stream.closed:
        raise ValueError("file_stream is closed")

    stream.seek(0)
    return stream
