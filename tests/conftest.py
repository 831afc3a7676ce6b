"""Shared fixtures and utilities for tests."""

from io import BytesIO
import asyncio
import os
from typing import Any, Optional

# Settings are read at import time; set the environment before any app import
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-min-32-chars-long-for-security")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("ACCESS_TOKEN_EXPIRE_MINUTES", "60")
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")
os.environ.setdefault("JSON_LOGS", "false")
os.environ.setdefault("AI_SCREENING_ON_INTAKE", "true")

import pytest
from docx import Document
from docx.shared import Pt
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from agents.resume.agent import ParsedResume, ResumeAnalysis
from api.dependencies import get_notifier, get_resume_agent, get_storage
from api.main import app
from api.services.notifications import Notifier
from core.exceptions import UpstreamError
from core.security import create_access_token
from core.storage.local import LocalStorage
from database.engine import Base, get_db
import database.models  # noqa: F401


class FakeNotifier(Notifier):
    """Records every event instead of sending email."""

    def __init__(self, fail: bool = False):
        self.received: list[tuple[str, str]] = []
        self.changes: list[dict[str, Any]] = []
        self.fail = fail

    def application_received(self, application, job_title):
        if self.fail:
            raise RuntimeError("mail server down")
        self.received.append((application.id, job_title))

    def status_changed(self, application, previous, new, job_title, notes=None):
        if self.fail:
            raise RuntimeError("mail server down")
        self.changes.append({
            "application_id": application.id,
            "previous": previous,
            "new": new,
            "job_title": job_title,
            "notes": notes,
        })


class FakeAnalyzer:
    """Stand-in for ResumeAgent with canned replies."""

    def __init__(
        self,
        analysis: Optional[dict[str, Any]] = None,
        parsed: Optional[dict[str, Any]] = None,
        fail: bool = False,
    ):
        self.analysis = analysis or {
            "overall_score": 82,
            "skills_match": 90,
            "experience_match": 75,
            "education_match": 70,
            "highlights": ["Strong Python background"],
            "concerns": [],
            "recommendation": "interview",
        }
        self.parsed = parsed or {
            "personal_info": {
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "phone": "+44 20 7946 0000",
                "location": "London",
            },
            "experience": [
                {"company": "Analytical Engines", "role": "Engineer", "duration": "3 years"},
                {"company": "Babbage & Co", "role": "Analyst", "duration": "2 years"},
            ],
            "skills": ["python", "mathematics"],
            "summary": "Engineer who likes engines",
            "total_experience": "5 years",
        }
        self.fail = fail
        self.analyze_calls: list[dict[str, Any]] = []
        self.parse_calls: list[str] = []

    async def analyze_resume(self, text, job_description, job_requirements=None):
        self.analyze_calls.append({
            "text": text,
            "job_description": job_description,
            "job_requirements": job_requirements,
        })
        if self.fail:
            raise UpstreamError("analysis service unavailable")
        return ResumeAnalysis.model_validate(self.analysis)

    async def parse_resume(self, text):
        self.parse_calls.append(text)
        if self.fail:
            raise UpstreamError("parser unavailable")
        return ParsedResume.model_validate(self.parsed)


async def _create_schema(engine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def _run(coro):
    """Run setup on a private loop so the test loop is left alone."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture
def db_engine(tmp_path):
    """Fresh SQLite database per test."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool
    )
    _run(_create_schema(engine))
    yield engine
    _run(engine.dispose())


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    """Async session for service-level tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def analyzer():
    return FakeAnalyzer()


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "storage"))


@pytest.fixture
def client(session_factory, notifier, analyzer, storage):
    """Test client wired to the per-test database and fakes."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_resume_agent] = lambda: analyzer
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def auth_headers(role: str = "hr", subject: str = "user-1") -> dict[str, str]:
    token = create_access_token(subject=subject, role=role, email=f"{subject}@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def hr_headers():
    return auth_headers("hr", "hr-1")


@pytest.fixture
def candidate_headers():
    return auth_headers("candidate", "cand-1")


@pytest.fixture
def minimal_pdf():
    """Fixture providing a minimal valid PDF."""
    return _create_minimal_pdf("Test PDF")


@pytest.fixture
def simple_docx():
    """Fixture providing a simple DOCX document."""
    return _create_test_docx("Test paragraph", "Test cell", paragraphs_only=False)


def _create_minimal_pdf(text: str) -> bytes:
    """Create a minimal valid PDF with embedded text."""
    pdf = (
        b"%PDF-1.4\n"
        b"1 0 obj<</Type/Catalog/Pages 2 0 R>>endobj\n"
        b"2 0 obj<</Type/Pages/Kids[3 0 R]/Count 1>>endobj\n"
        b"3 0 obj<</Type/Page/Parent 2 0 R/MediaBox[0 0 612 792]/Contents 4 0 R/Resources<</Font<</F1 5 0 R>>>>>>endobj\n"
        b"4 0 obj<</Length 44>>stream\nBT /F1 12 Tf 100 700 Td ("
        + text.encode()
        + b") Tj ET\nendstream endobj\n"
        b"5 0 obj<</Type/Font/Subtype/Type1/BaseFont/Helvetica>>endobj\n"
        b"xref\n0 6\n0000000000 65535 f \n0000000009 00000 n \n0000000058 00000 n \n0000000115 00000 n \n0000000214 00000 n \n0000000306 00000 n \n"
        b"trailer<</Size 6/Root 1 0 R>>\nstartxref\n388\n%%EOF"
    )
    return pdf


def _create_test_docx(
    para_text: str, cell_text: str = "", paragraphs_only: bool = True
) -> BytesIO:
    """Create a simple DOCX document for testing."""
    stream = BytesIO()
    doc = Document()

    para1 = doc.add_paragraph(para_text)
    para1.runs[0].font.size = Pt(12)

    if cell_text and paragraphs_only:
        para2 = doc.add_paragraph(cell_text)
        para2.runs[0].font.size = Pt(12)

    if not paragraphs_only:
        table = doc.add_table(rows=1, cols=1)
        cell = table.rows[0].cells[0]
        cell.text = cell_text or "Table Cell"

    doc.save(stream)
    stream.seek(0)
    return stream


API_PREFIX = "/api/v1"


def create_job(client, headers, **overrides) -> dict[str, Any]:
    """Create a job through the API and return its JSON."""
    payload = {
        "title": "Backend Engineer",
        "description": "Build and run our hiring APIs",
        "requirements": "Python, SQL",
        **overrides,
    }
    response = client.post(f"{API_PREFIX}/jobs", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def submit_application(client, **overrides):
    """Submit an application to the general pool unless a job_id is given."""
    payload = {
        "job_id": "general",
        "candidate_name": "Ada Lovelace",
        "candidate_email": "ada@example.com",
        **overrides,
    }
    return client.post(f"{API_PREFIX}/applications", json=payload)


def upload_resume(client, content: bytes = b"Ada Lovelace\nPython engineer", filename: str = "cv.txt") -> str:
    response = client.post(
        f"{API_PREFIX}/resumes/upload",
        files={"file": (filename, content, "text/plain")},
    )
    assert response.status_code == 201, response.text
    return response.json()["resume_url"]
